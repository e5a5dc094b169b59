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
IFD Entry Codec.

Reads and writes one 12-byte Image File Directory record:

    u16 tag | u16 type | u32 count | 4 bytes value-or-offset

A field whose total length (count x base length) fits in four bytes is stored
inline, left-justified. Anything longer is stored elsewhere in the same buffer
and the last four bytes hold its absolute offset. Exactly four bytes stays
inline; five bytes is indirected.

When the buffer byte order differs from the requested order, every element is
byte-reversed on its own and element order is kept.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional

from exiftk.utils.bit_converter import (
    BitConverter,
    ByteOrder,
    SYSTEM_BYTE_ORDER,
    get_bytes,
    reverse_elements,
)
from exiftk.utils.exceptions import ExifDecodeError, UnknownWireTypeError

ENTRY_SIZE = 12
INLINE_CAPACITY = 4


class InterOpType(IntEnum):
    """TIFF field types (wire types)."""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    DOUBLE = 12


_BASE_LENGTHS = {
    InterOpType.BYTE: 1,
    InterOpType.ASCII: 1,
    InterOpType.SBYTE: 1,
    InterOpType.UNDEFINED: 1,
    InterOpType.SHORT: 2,
    InterOpType.SSHORT: 2,
    InterOpType.LONG: 4,
    InterOpType.SLONG: 4,
    InterOpType.FLOAT: 4,
    InterOpType.RATIONAL: 8,
    InterOpType.SRATIONAL: 8,
    InterOpType.DOUBLE: 8,
}


def get_base_length(wire_type: int) -> int:
    """
    Return the byte length of one element of a wire type.

    Raises:
        UnknownWireTypeError: For any code outside 1..12.
    """
    try:
        return _BASE_LENGTHS[wire_type]
    except KeyError:
        raise UnknownWireTypeError(f"Unknown wire type: {wire_type}") from None


def swap_elements(data: bytes, wire_type: int) -> bytes:
    """
    Reverse the byte order of every element of a field payload.

    Rationals are two 32-bit integers; each half is reversed on its own so the
    numerator stays first.
    """
    width = get_base_length(wire_type)
    if wire_type in (InterOpType.RATIONAL, InterOpType.SRATIONAL):
        width = 4
    return reverse_elements(data, width)


class EncodedEntry(NamedTuple):
    """A 12-byte directory record and, when indirected, its separate payload."""
    record: bytes
    payload: Optional[bytes] = None

    @property
    def is_inline(self) -> bool:
        return self.payload is None


@dataclass(frozen=True)
class IFDEntry:
    """
    Represents one directory entry.

    ``data`` holds the field value in the byte order it was decoded to (system
    order unless told otherwise) and must be exactly ``count * base_length``
    bytes long.

    Attributes:
        tag: 16-bit tag number within its section
        wire_type: TIFF field type (1..12)
        count: Number of elements
        data: Raw value bytes
    """
    tag: int
    wire_type: int
    count: int
    data: bytes

    def __post_init__(self):
        expected = self.count * get_base_length(self.wire_type)
        if len(self.data) != expected:
            raise ExifDecodeError(
                f"Entry 0x{self.tag:04x}: {len(self.data)} data bytes for "
                f"{self.count} x type {self.wire_type} (expected {expected})"
            )

    @property
    def total_length(self) -> int:
        return len(self.data)

    @property
    def is_inline(self) -> bool:
        return self.total_length <= INLINE_CAPACITY

    @classmethod
    def from_bytes(cls, data: bytes, offset: int, byte_order: ByteOrder,
                   to_order: ByteOrder = SYSTEM_BYTE_ORDER) -> 'IFDEntry':
        """
        Decode the directory record at ``offset``.

        Args:
            data: The buffer holding the directory and any indirected payloads.
            offset: Start of the 12-byte record.
            byte_order: Byte order of ``data``.
            to_order: Byte order the returned value bytes should be in.

        Returns:
            The decoded IFDEntry.

        Raises:
            ExifDecodeError: If the record or its payload lies outside ``data``.
            UnknownWireTypeError: If the type field is not 1..12.
        """
        if offset < 0 or offset + ENTRY_SIZE > len(data):
            raise ExifDecodeError(
                f"Directory entry at offset {offset} runs past the end of a {len(data)}-byte buffer"
            )

        conv = BitConverter(byte_order, to_order)
        tag = conv.to_uint16(data, offset)
        wire_type = conv.to_uint16(data, offset + 2)
        count = conv.to_uint32(data, offset + 4)
        total_length = count * get_base_length(wire_type)

        if total_length <= INLINE_CAPACITY:
            value = data[offset + 8:offset + 8 + total_length]
        else:
            value_offset = conv.to_uint32(data, offset + 8)
            if value_offset + total_length > len(data):
                raise ExifDecodeError(
                    f"Entry 0x{tag:04x}: payload of {total_length} bytes at offset "
                    f"{value_offset} runs past the end of a {len(data)}-byte buffer"
                )
            value = data[value_offset:value_offset + total_length]

        if byte_order != to_order:
            value = swap_elements(value, wire_type)

        return cls(tag, wire_type, count, bytes(value))

    def to_bytes(self, byte_order: ByteOrder, payload_offset: int = 0,
                 from_order: ByteOrder = SYSTEM_BYTE_ORDER) -> EncodedEntry:
        """
        Encode the entry for a buffer in ``byte_order``.

        Args:
            byte_order: Target byte order.
            payload_offset: Absolute offset written into the record when the
                value is indirected. Where the payload actually lands is the
                caller's decision.
            from_order: Byte order ``data`` is currently in.

        Returns:
            EncodedEntry with the 12-byte record, plus the payload when the
            value does not fit inline.
        """
        value = self.data
        if from_order != byte_order:
            value = swap_elements(value, self.wire_type)

        record = (
            get_bytes(self.tag, 'uint16', byte_order, byte_order)
            + get_bytes(self.wire_type, 'uint16', byte_order, byte_order)
            + get_bytes(self.count, 'uint32', byte_order, byte_order)
        )
        if self.is_inline:
            return EncodedEntry(record + value.ljust(INLINE_CAPACITY, b'\x00'))
        return EncodedEntry(record + get_bytes(payload_offset, 'uint32', byte_order, byte_order), value)

    @classmethod
    def from_property(cls, prop) -> 'IFDEntry':
        """Build an entry from a property's interoperability record."""
        interop = prop.interoperability
        return cls(interop.tag_id, interop.wire_type, interop.count, interop.data)

    def __str__(self) -> str:
        return f"Tag 0x{self.tag:04x}, type {self.wire_type}, count {self.count}"
