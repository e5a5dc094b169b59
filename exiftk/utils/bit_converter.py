#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: EXIF ToolKit (EXIFTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Endian-aware Bit Converter.

Converts fixed-width integers and floating-point numbers to and from byte
sequences between two named byte orders. Nothing here knows about tags or
formats; every function takes the byte order explicitly.

Scalars go through ``struct``; arrays go through numpy dtypes with an explicit
byte-order character, which also gives a cheap per-element byte swap.
"""

import struct
import sys
from enum import IntEnum
from typing import List, Sequence, Union

import numpy as np

from exiftk.utils.data_models import Rational
from exiftk.utils.exceptions import ExifDecodeError

Number = Union[int, float]


class ByteOrder(IntEnum):
    """Represents the byte order of a buffer."""
    LITTLE_ENDIAN = 1
    BIG_ENDIAN = 2

    @property
    def struct_prefix(self) -> str:
        """The ``struct`` / numpy byte-order character for this order."""
        return '<' if self is ByteOrder.LITTLE_ENDIAN else '>'

    @classmethod
    def from_prefix(cls, prefix: str) -> 'ByteOrder':
        """Map a ``'<'`` / ``'>'`` character (as used by tifffile) to a ByteOrder."""
        if prefix == '<':
            return cls.LITTLE_ENDIAN
        if prefix == '>':
            return cls.BIG_ENDIAN
        raise ValueError(f"Unknown byte order prefix: {prefix!r}")

    @classmethod
    def from_name(cls, name: str) -> 'ByteOrder':
        """Map ``'little'`` / ``'big'`` to a ByteOrder."""
        key = name.strip().lower()
        if key in ('little', 'le', 'ii', '<'):
            return cls.LITTLE_ENDIAN
        if key in ('big', 'be', 'mm', '>'):
            return cls.BIG_ENDIAN
        raise ValueError(f"Unknown byte order: {name!r}")


# Byte order of the running interpreter. Only used as a default destination.
SYSTEM_BYTE_ORDER = ByteOrder.LITTLE_ENDIAN if sys.byteorder == 'little' else ByteOrder.BIG_ENDIAN

# Numeric kind -> struct format character
STRUCT_FORMATS = {
    'uint8': 'B',
    'int8': 'b',
    'uint16': 'H',
    'int16': 'h',
    'uint32': 'I',
    'int32': 'i',
    'uint64': 'Q',
    'int64': 'q',
    'single': 'f',
    'double': 'd',
}

# Numeric kind -> numpy type code (byte order applied separately)
NUMPY_TYPES = {
    'uint8': 'u1',
    'int8': 'i1',
    'uint16': 'u2',
    'int16': 'i2',
    'uint32': 'u4',
    'int32': 'i4',
    'uint64': 'u8',
    'int64': 'i8',
    'single': 'f4',
    'double': 'f8',
}


def _struct_format(kind: str) -> str:
    try:
        return STRUCT_FORMATS[kind]
    except KeyError:
        raise ValueError(f"Unknown numeric kind: {kind!r}") from None


def get_width(kind: str) -> int:
    """Return the byte width of a numeric kind."""
    return struct.calcsize(_struct_format(kind))


def _dtype(kind: str, byte_order: ByteOrder) -> np.dtype:
    try:
        code = NUMPY_TYPES[kind]
    except KeyError:
        raise ValueError(f"Unknown numeric kind: {kind!r}") from None
    return np.dtype(code).newbyteorder(byte_order.struct_prefix)


# ============================================================================
# Scalar conversion
# ============================================================================

def get_bytes(value: Number, kind: str, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> bytes:
    """
    Convert a number to its fixed-width byte sequence.

    The value is laid out in ``from_order`` and the bytes are reversed if
    ``from_order`` differs from ``to_order``.

    Args:
        value: The number to convert.
        kind: Numeric kind, e.g. 'uint16', 'int32', 'double'.
        from_order: Byte order the value is laid out in.
        to_order: Byte order the caller wants.

    Returns:
        The byte sequence, ``get_width(kind)`` bytes long.
    """
    fmt = _struct_format(kind)
    try:
        data = struct.pack(from_order.struct_prefix + fmt, value)
    except struct.error as e:
        raise ValueError(f"Cannot convert {value!r} to {kind}: {e}") from e
    return data[::-1] if from_order != to_order else data


def to_value(data: bytes, offset: int, kind: str, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> Number:
    """
    Read a fixed-width number from ``data`` starting at ``offset``.

    Args:
        data: Source buffer.
        offset: Index of the first byte.
        kind: Numeric kind to read.
        from_order: Byte order of ``data``.
        to_order: Byte order the bytes are interpreted in after conversion.

    Returns:
        The decoded number.

    Raises:
        ExifDecodeError: If the read would run past the end of ``data``.
    """
    fmt = _struct_format(kind)
    width = struct.calcsize(fmt)
    if offset < 0 or offset + width > len(data):
        raise ExifDecodeError(
            f"Cannot read {kind} at offset {offset}: buffer holds {len(data)} bytes"
        )
    chunk = bytes(data[offset:offset + width])
    if from_order != to_order:
        chunk = chunk[::-1]
    return struct.unpack(to_order.struct_prefix + fmt, chunk)[0]


def to_uint16(data: bytes, offset: int, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> int:
    return to_value(data, offset, 'uint16', from_order, to_order)


def to_int16(data: bytes, offset: int, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> int:
    return to_value(data, offset, 'int16', from_order, to_order)


def to_uint32(data: bytes, offset: int, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> int:
    return to_value(data, offset, 'uint32', from_order, to_order)


def to_int32(data: bytes, offset: int, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> int:
    return to_value(data, offset, 'int32', from_order, to_order)


def to_uint64(data: bytes, offset: int, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> int:
    return to_value(data, offset, 'uint64', from_order, to_order)


def to_int64(data: bytes, offset: int, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> int:
    return to_value(data, offset, 'int64', from_order, to_order)


def to_single(data: bytes, offset: int, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> float:
    return to_value(data, offset, 'single', from_order, to_order)


def to_double(data: bytes, offset: int, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> float:
    return to_value(data, offset, 'double', from_order, to_order)


# ============================================================================
# Array conversion
# ============================================================================

def to_array(data: bytes, count: int, kind: str, byte_order: ByteOrder) -> List[Number]:
    """
    Decode ``count`` consecutive numbers of ``kind`` stored in ``byte_order``.

    Raises:
        ExifDecodeError: If ``data`` is shorter than ``count`` elements.
    """
    dtype = _dtype(kind, byte_order)
    needed = count * dtype.itemsize
    if count < 0 or len(data) < needed:
        raise ExifDecodeError(
            f"Cannot read {count} x {kind}: need {needed} bytes, buffer holds {len(data)}"
        )
    if count == 0:
        return []
    return np.frombuffer(bytes(data), dtype=dtype, count=count).tolist()


def array_to_bytes(values: Sequence[Number], kind: str, byte_order: ByteOrder) -> bytes:
    """Encode a sequence of numbers of ``kind`` in ``byte_order``."""
    return np.asarray(list(values), dtype=_dtype(kind, byte_order)).tobytes()


def to_rational(data: bytes, byte_order: ByteOrder, signed: bool = False) -> Rational:
    """Decode a single rational (two 32-bit integers)."""
    return to_rational_array(data, 1, byte_order, signed)[0]


def to_rational_array(data: bytes, count: int, byte_order: ByteOrder, signed: bool = False) -> List[Rational]:
    """Decode ``count`` rationals, each a numerator/denominator pair of 32-bit integers."""
    parts = to_array(data, count * 2, 'int32' if signed else 'uint32', byte_order)
    return [Rational(parts[i], parts[i + 1]) for i in range(0, len(parts), 2)]


def rational_array_to_bytes(values: Sequence[Rational], byte_order: ByteOrder, signed: bool = False) -> bytes:
    """Encode rationals as numerator/denominator pairs of 32-bit integers."""
    parts = [part for value in values for part in (value[0], value[1])]
    return array_to_bytes(parts, 'int32' if signed else 'uint32', byte_order)


def reverse_elements(data: bytes, width: int) -> bytes:
    """
    Reverse the bytes of every ``width``-byte element, keeping element order.

    ``[01 02][03 04]`` with width 2 becomes ``[02 01][04 03]``, never the
    whole-buffer reversal ``[04 03][02 01]``.

    Raises:
        ExifDecodeError: If ``len(data)`` is not a multiple of ``width``.
    """
    if width not in (1, 2, 4, 8):
        raise ValueError(f"Unsupported element width: {width}")
    if len(data) % width:
        raise ExifDecodeError(f"Buffer of {len(data)} bytes is not a whole number of {width}-byte elements")
    if width == 1 or not data:
        return bytes(data)
    return np.frombuffer(bytes(data), dtype=np.dtype(f'u{width}')).byteswap().tobytes()


class BitConverter:
    """
    An endian-aware converter bound to a fixed (from, to) byte-order pair.

    Example:
        >>> conv = BitConverter(ByteOrder.BIG_ENDIAN, ByteOrder.LITTLE_ENDIAN)
        >>> conv.to_uint16(b'\\x01\\x02', 0)
        258
    """

    def __init__(self, from_order: ByteOrder, to_order: ByteOrder = SYSTEM_BYTE_ORDER):
        self.from_order = from_order
        self.to_order = to_order

    @classmethod
    def little_endian(cls) -> 'BitConverter':
        """A converter between little-endian and system byte order."""
        return cls(ByteOrder.LITTLE_ENDIAN, SYSTEM_BYTE_ORDER)

    @classmethod
    def big_endian(cls) -> 'BitConverter':
        """A converter between big-endian and system byte order."""
        return cls(ByteOrder.BIG_ENDIAN, SYSTEM_BYTE_ORDER)

    @classmethod
    def system_endian(cls) -> 'BitConverter':
        """A converter that does no byte-order conversion."""
        return cls(SYSTEM_BYTE_ORDER, SYSTEM_BYTE_ORDER)

    def get_bytes(self, value: Number, kind: str) -> bytes:
        return get_bytes(value, kind, self.from_order, self.to_order)

    def to_value(self, data: bytes, offset: int, kind: str) -> Number:
        return to_value(data, offset, kind, self.from_order, self.to_order)

    def to_uint16(self, data: bytes, offset: int = 0) -> int:
        return to_uint16(data, offset, self.from_order, self.to_order)

    def to_int16(self, data: bytes, offset: int = 0) -> int:
        return to_int16(data, offset, self.from_order, self.to_order)

    def to_uint32(self, data: bytes, offset: int = 0) -> int:
        return to_uint32(data, offset, self.from_order, self.to_order)

    def to_int32(self, data: bytes, offset: int = 0) -> int:
        return to_int32(data, offset, self.from_order, self.to_order)

    def to_uint64(self, data: bytes, offset: int = 0) -> int:
        return to_uint64(data, offset, self.from_order, self.to_order)

    def to_int64(self, data: bytes, offset: int = 0) -> int:
        return to_int64(data, offset, self.from_order, self.to_order)

    def to_single(self, data: bytes, offset: int = 0) -> float:
        return to_single(data, offset, self.from_order, self.to_order)

    def to_double(self, data: bytes, offset: int = 0) -> float:
        return to_double(data, offset, self.from_order, self.to_order)

    def __repr__(self) -> str:
        return f"BitConverter({self.from_order.name} -> {self.to_order.name})"
