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
EXIF Properties.

Defines the ExifProperty interface and the fallback variants that hold any tag
without special meaning, one scalar and one array form per wire type.

Every property can:
    - decode itself from raw field bytes in a known byte order
      (``decode(tag, data, byte_order, count, encoding)``)
    - emit ``(wire_type, count, data)`` in system byte order (``to_wire()``)

Semantic variants (dates, enumerations, GPS values, ...) live in
exif_extended_properties.
"""

from dataclasses import dataclass
from typing import ClassVar, List, Union

from exiftk.utils.bit_converter import (
    SYSTEM_BYTE_ORDER,
    ByteOrder,
    array_to_bytes,
    get_bytes,
    rational_array_to_bytes,
    to_array,
    to_rational_array,
    to_value,
)
from exiftk.utils.data_models import InterOperability, Rational, WireValue
from exiftk.utils.ifd_entry import InterOpType
from exiftk.utils.tag_registry import IFD, get_tag_id, get_tag_ifd, get_tag_long_name, get_tag_name

Number = Union[int, float]

DEFAULT_ENCODING = 'utf-8'


@dataclass
class ExifProperty:
    """
    Base class of every EXIF property.

    Attributes:
        tag: Flat tag identifier (see tag_registry)
    """
    tag: int

    @classmethod
    def decode(cls, tag: int, data: bytes, byte_order: ByteOrder, count: int,
               encoding: str = DEFAULT_ENCODING) -> 'ExifProperty':
        """
        Build the property from raw field bytes.

        Args:
            tag: Flat tag identifier.
            data: Field value bytes, ``count * base_length`` long.
            byte_order: Byte order of ``data``.
            count: Number of elements in the field.
            encoding: Text encoding used when no charset is declared.
        """
        raise NotImplementedError

    def to_wire(self) -> WireValue:
        """Return ``(wire_type, count, data)`` with ``data`` in system byte order."""
        raise NotImplementedError

    @property
    def ifd(self) -> IFD:
        return get_tag_ifd(self.tag)

    @property
    def name(self) -> str:
        return get_tag_name(self.tag)

    @property
    def long_name(self) -> str:
        return get_tag_long_name(self.tag)

    @property
    def interoperability(self) -> InterOperability:
        """The record needed to write this property as a directory entry."""
        wire_type, count, data = self.to_wire()
        return InterOperability(get_tag_id(self.tag), int(wire_type), count, data)

    def __str__(self) -> str:
        return str(getattr(self, 'value', ''))


# ============================================================================
# Generic numeric forms
# ============================================================================

@dataclass
class ExifNumber(ExifProperty):
    """A single number of a fixed-width kind."""
    value: Number

    wire_type: ClassVar[InterOpType]
    kind: ClassVar[str]

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, to_value(data, 0, cls.kind, byte_order, byte_order))

    def to_wire(self) -> WireValue:
        return WireValue(self.wire_type, 1, get_bytes(self.value, self.kind, SYSTEM_BYTE_ORDER))


@dataclass
class ExifNumberArray(ExifProperty):
    """Any number of values of a fixed-width kind."""
    value: List[Number]

    wire_type: ClassVar[InterOpType]
    kind: ClassVar[str]

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, to_array(data, count, cls.kind, byte_order))

    def to_wire(self) -> WireValue:
        return WireValue(self.wire_type, len(self.value), array_to_bytes(self.value, self.kind, SYSTEM_BYTE_ORDER))

    def __str__(self) -> str:
        return '[' + ', '.join(str(v) for v in self.value) + ']'


@dataclass
class ExifByte(ExifNumber):
    wire_type = InterOpType.BYTE
    kind = 'uint8'


@dataclass
class ExifSByte(ExifNumber):
    wire_type = InterOpType.SBYTE
    kind = 'int8'


@dataclass
class ExifSByteArray(ExifNumberArray):
    wire_type = InterOpType.SBYTE
    kind = 'int8'


@dataclass
class ExifUShort(ExifNumber):
    wire_type = InterOpType.SHORT
    kind = 'uint16'


@dataclass
class ExifUShortArray(ExifNumberArray):
    wire_type = InterOpType.SHORT
    kind = 'uint16'


@dataclass
class ExifSShort(ExifNumber):
    wire_type = InterOpType.SSHORT
    kind = 'int16'


@dataclass
class ExifSShortArray(ExifNumberArray):
    wire_type = InterOpType.SSHORT
    kind = 'int16'


@dataclass
class ExifUInt(ExifNumber):
    wire_type = InterOpType.LONG
    kind = 'uint32'


@dataclass
class ExifUIntArray(ExifNumberArray):
    wire_type = InterOpType.LONG
    kind = 'uint32'


@dataclass
class ExifSInt(ExifNumber):
    wire_type = InterOpType.SLONG
    kind = 'int32'


@dataclass
class ExifSIntArray(ExifNumberArray):
    wire_type = InterOpType.SLONG
    kind = 'int32'


@dataclass
class ExifFloat(ExifNumber):
    wire_type = InterOpType.FLOAT
    kind = 'single'


@dataclass
class ExifFloatArray(ExifNumberArray):
    wire_type = InterOpType.FLOAT
    kind = 'single'


@dataclass
class ExifDouble(ExifNumber):
    wire_type = InterOpType.DOUBLE
    kind = 'double'


@dataclass
class ExifDoubleArray(ExifNumberArray):
    wire_type = InterOpType.DOUBLE
    kind = 'double'


# ============================================================================
# Byte strings
# ============================================================================

@dataclass
class ExifByteArray(ExifProperty):
    """An array of unsigned bytes, kept as ``bytes``."""
    value: bytes

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, bytes(data[:count]))

    def to_wire(self) -> WireValue:
        return WireValue(InterOpType.BYTE, len(self.value), bytes(self.value))

    def __str__(self) -> str:
        return '[' + ', '.join(str(b) for b in self.value) + ']'


@dataclass
class ExifUndefined(ExifProperty):
    """Opaque bytes of the UNDEFINED wire type."""
    value: bytes

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, bytes(data[:count]))

    def to_wire(self) -> WireValue:
        return WireValue(InterOpType.UNDEFINED, len(self.value), bytes(self.value))

    def __str__(self) -> str:
        return f"[{len(self.value)} bytes]"


@dataclass
class ExifAscii(ExifProperty):
    """
    A NUL-terminated text field.

    Decoding stops at the first NUL; writing appends exactly one.
    """
    value: str
    encoding: str = DEFAULT_ENCODING

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, ascii_to_str(data, encoding), encoding)

    def to_wire(self) -> WireValue:
        data = self.value.encode(self.encoding) + b'\x00'
        return WireValue(InterOpType.ASCII, len(data), data)


def ascii_to_str(data: bytes, encoding: str = DEFAULT_ENCODING) -> str:
    """Decode text up to (not including) the first NUL byte."""
    end = data.find(b'\x00')
    if end != -1:
        data = data[:end]
    return bytes(data).decode(encoding)


# ============================================================================
# Rationals
# ============================================================================

@dataclass
class ExifURational(ExifProperty):
    """An unsigned rational, kept as an exact numerator/denominator pair."""
    value: Rational

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, to_rational_array(data, 1, byte_order)[0])

    def to_wire(self) -> WireValue:
        return WireValue(InterOpType.RATIONAL, 1, rational_array_to_bytes([self.value], SYSTEM_BYTE_ORDER))

    def to_float(self) -> float:
        return float(self.value)


@dataclass
class ExifSRational(ExifProperty):
    """A signed rational."""
    value: Rational

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, to_rational_array(data, 1, byte_order, signed=True)[0])

    def to_wire(self) -> WireValue:
        return WireValue(InterOpType.SRATIONAL, 1, rational_array_to_bytes([self.value], SYSTEM_BYTE_ORDER, signed=True))

    def to_float(self) -> float:
        return float(self.value)


@dataclass
class ExifURationalArray(ExifProperty):
    value: List[Rational]

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, to_rational_array(data, count, byte_order))

    def to_wire(self) -> WireValue:
        return WireValue(InterOpType.RATIONAL, len(self.value), rational_array_to_bytes(self.value, SYSTEM_BYTE_ORDER))

    def to_floats(self) -> List[float]:
        return [float(v) for v in self.value]

    def __str__(self) -> str:
        return '[' + ', '.join(str(v) for v in self.value) + ']'


@dataclass
class ExifSRationalArray(ExifProperty):
    value: List[Rational]

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, to_rational_array(data, count, byte_order, signed=True))

    def to_wire(self) -> WireValue:
        return WireValue(InterOpType.SRATIONAL, len(self.value),
                         rational_array_to_bytes(self.value, SYSTEM_BYTE_ORDER, signed=True))

    def to_floats(self) -> List[float]:
        return [float(v) for v in self.value]

    def __str__(self) -> str:
        return '[' + ', '.join(str(v) for v in self.value) + ']'
