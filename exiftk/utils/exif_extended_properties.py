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
Extended EXIF Properties.

Property variants whose meaning cannot be recovered from the wire type alone:

- ExifDate / ExifDateTime: fixed-length ASCII dates
- ExifVersion / VersionID: four-character and four-byte version tags
- ExifEnumProperty: a named code from exif_enums
- ExifEncodedString: UserComment text behind an 8-byte charset header
- Subject areas: point, circle or rectangle chosen by element count
- GPSLatitudeLongitude / GPSTimeStamp / LensSpecification: fixed-size
  rational tuples
- WindowsByteString: UTF-16LE text stored as a BYTE array
"""

import codecs
from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum
from typing import ClassVar, List, Optional, Type

from exiftk.utils.bit_converter import SYSTEM_BYTE_ORDER, ByteOrder, array_to_bytes, get_bytes, to_array, to_uint16
from exiftk.utils.data_models import WireValue
from exiftk.utils.exceptions import ExifDecodeError, ExifEncodeError
from exiftk.utils.exif_enums import ASCII_ENUMS, BIT_FIELD_ENUMS, UNDEFINED_ENUMS, get_underlying_width
from exiftk.utils.exif_properties import (
    DEFAULT_ENCODING,
    ExifByteArray,
    ExifProperty,
    ExifURationalArray,
    ascii_to_str,
)
from exiftk.utils.ifd_entry import InterOpType

DATE_FORMAT = '%Y:%m:%d'
DATETIME_FORMAT = '%Y:%m:%d %H:%M:%S'


def _format_date(value: date) -> str:
    # strftime('%Y') does not zero-pad years below 1000 on every platform
    return f"{value.year:04d}:{value.month:02d}:{value.day:02d}"


def _format_datetime(value: datetime) -> str:
    return f"{_format_date(value)} {value.hour:02d}:{value.minute:02d}:{value.second:02d}"


# Python codec name -> 8-byte UserComment charset header
CHARSET_HEADERS = {
    'ascii': b'ASCII\x00\x00\x00',
    'euc_jp': b'JIS\x00\x00\x00\x00\x00',
    'utf-16-le': b'Unicode\x00',
}
UNDEFINED_CHARSET_HEADER = b'\x00' * 8
CHARSET_HEADER_LENGTH = 8


def _parse_date(data: bytes, fmt: str) -> datetime:
    text = ascii_to_str(data, 'ascii').strip()
    try:
        return datetime.strptime(text, fmt)
    except ValueError as e:
        raise ExifDecodeError(f"Invalid date '{text}': {e}") from e


# ============================================================================
# Dates and versions
# ============================================================================

@dataclass
class ExifDate(ExifProperty):
    """A date written as 11 bytes of ASCII: ``YYYY:MM:DD\\0``."""
    value: date

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, _parse_date(data, DATE_FORMAT).date())

    def to_wire(self) -> WireValue:
        data = _format_date(self.value).encode('ascii') + b'\x00'
        return WireValue(InterOpType.ASCII, len(data), data)

    def __str__(self) -> str:
        return _format_date(self.value).replace(':', '.')


@dataclass
class ExifDateTime(ExifProperty):
    """A timestamp written as 20 bytes of ASCII: ``YYYY:MM:DD HH:MM:SS\\0``."""
    value: datetime

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, _parse_date(data, DATETIME_FORMAT))

    def to_wire(self) -> WireValue:
        data = _format_datetime(self.value).encode('ascii') + b'\x00'
        return WireValue(InterOpType.ASCII, len(data), data)

    def __str__(self) -> str:
        return _format_datetime(self.value).replace(':', '.', 2)


@dataclass
class ExifVersion(ExifProperty):
    """
    A four-character version such as ExifVersion ``"0230"``.

    Shorter values are padded with spaces on the right, longer ones truncated.
    """
    value: str

    def __post_init__(self):
        self.value = self.value[:4].ljust(4, ' ')

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        return cls(tag, ascii_to_str(data, 'ascii'))

    def to_wire(self) -> WireValue:
        return WireValue(InterOpType.UNDEFINED, 4, self.value.encode('ascii'))


@dataclass
class VersionID(ExifByteArray):
    """A version held as a byte array (GPSVersionID), shown as ``2.2.0.0``."""

    def __str__(self) -> str:
        return '.'.join(str(b) for b in self.value)


# ============================================================================
# Enumerations
# ============================================================================

@dataclass
class ExifEnumProperty(ExifProperty):
    """
    A property holding one member of an exif_enums enumeration.

    The wire form follows the enumeration:
        - FileSource, SceneType: one UNDEFINED byte
        - GPS reference, status and measure-mode codes: ASCII ``"<code>\\0"``
        - other byte enumerations: one BYTE
        - short enumerations and Flash: one SHORT
    """
    value: IntEnum

    @property
    def enum_type(self) -> Type[IntEnum]:
        return type(self.value)

    @property
    def is_bit_field(self) -> bool:
        """True when the value is a bitmask (Flash) instead of a single code."""
        return isinstance(self.value, BIT_FIELD_ENUMS)

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING,
               enum_type: Optional[Type[IntEnum]] = None):
        """
        Decode a code of ``enum_type``.

        Byte enumerations read the first byte of the field (for the ASCII GPS
        codes that is the letter); short enumerations read a 16-bit value.
        """
        if enum_type is None:
            raise ValueError("enum_type is required to decode an enumerated property")
        if get_underlying_width(enum_type) == 1:
            if not data:
                raise ExifDecodeError(f"Empty field for {enum_type.__name__}")
            return cls(tag, enum_type(data[0]))
        return cls(tag, enum_type(to_uint16(data, 0, byte_order, byte_order)))

    def to_wire(self) -> WireValue:
        code = int(self.value)
        if isinstance(self.value, UNDEFINED_ENUMS):
            return WireValue(InterOpType.UNDEFINED, 1, bytes([code]))
        if isinstance(self.value, ASCII_ENUMS):
            return WireValue(InterOpType.ASCII, 2, bytes([code, 0]))
        if get_underlying_width(self.enum_type) == 1:
            return WireValue(InterOpType.BYTE, 1, bytes([code]))
        return WireValue(InterOpType.SHORT, 1, get_bytes(code, 'uint16', SYSTEM_BYTE_ORDER))

    def __str__(self) -> str:
        return self.value.name or str(int(self.value))


# ============================================================================
# Encoded text
# ============================================================================

def _normalize_charset(charset: Optional[str]) -> Optional[str]:
    if charset is None:
        return None
    try:
        return codecs.lookup(charset).name
    except LookupError:
        return None


@dataclass
class ExifEncodedString(ExifProperty):
    """
    Text preceded by an 8-byte charset header (UserComment).

    Recognized headers are ``ASCII``, ``JIS`` and ``Unicode``; any other
    header, or a payload shorter than 8 bytes, is read as ASCII over the whole
    payload.

    Attributes:
        value: The comment text
        charset: Python codec name (``ascii``, ``euc_jp``, ``utf-16-le``);
            anything else is written with an all-NUL header and ASCII text
    """
    value: str
    charset: Optional[str] = 'ascii'

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        data = bytes(data)
        charset = 'ascii'
        text_bytes = data
        if len(data) >= CHARSET_HEADER_LENGTH:
            header = data[:CHARSET_HEADER_LENGTH].upper()
            for codec_name, charset_header in CHARSET_HEADERS.items():
                if header == charset_header.upper():
                    charset = codec_name
                    text_bytes = data[CHARSET_HEADER_LENGTH:]
                    break
        try:
            text = text_bytes.decode(charset)
        except UnicodeDecodeError as e:
            raise ExifDecodeError(f"Cannot decode comment as {charset}: {e}") from e
        return cls(tag, text.strip('\x00'), charset)

    def to_wire(self) -> WireValue:
        charset = _normalize_charset(self.charset)
        header = CHARSET_HEADERS.get(charset, UNDEFINED_CHARSET_HEADER)
        codec = charset if charset in CHARSET_HEADERS else 'ascii'
        try:
            body = self.value.encode(codec)
        except UnicodeEncodeError as e:
            raise ExifEncodeError(f"Cannot encode comment as {codec}: {e}") from e
        data = header + body
        return WireValue(InterOpType.UNDEFINED, len(data), data)


@dataclass
class WindowsByteString(ExifProperty):
    """
    UTF-16LE text stored under the BYTE wire type (Windows XP tags).

    Trailing NULs are dropped on decode and not written back.
    """
    value: str

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        try:
            text = bytes(data).decode('utf-16-le')
        except UnicodeDecodeError as e:
            raise ExifDecodeError(f"Cannot decode Windows string: {e}") from e
        return cls(tag, text.rstrip('\x00'))

    def to_wire(self) -> WireValue:
        data = self.value.encode('utf-16-le')
        return WireValue(InterOpType.BYTE, len(data), data)


# ============================================================================
# Subject areas
# ============================================================================

@dataclass
class ExifPointSubjectArea(ExifProperty):
    """Subject position as two unsigned shorts (x, y)."""
    value: List[int]

    size: ClassVar[int] = 2

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        if count != cls.size:
            raise ExifDecodeError(f"{cls.__name__} needs {cls.size} values, got {count}")
        return cls(tag, to_array(data, count, 'uint16', byte_order))

    def to_wire(self) -> WireValue:
        return WireValue(InterOpType.SHORT, len(self.value), array_to_bytes(self.value, 'uint16', SYSTEM_BYTE_ORDER))

    @property
    def x(self) -> int:
        return self.value[0]

    @property
    def y(self) -> int:
        return self.value[1]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass
class ExifCircularSubjectArea(ExifPointSubjectArea):
    """Subject area as a circle (x, y, diameter)."""
    size: ClassVar[int] = 3

    @property
    def diameter(self) -> int:
        return self.value[2]

    def __str__(self) -> str:
        return f"({self.x}, {self.y}) {self.diameter}"


@dataclass
class ExifRectangularSubjectArea(ExifPointSubjectArea):
    """Subject area as a rectangle (x, y, width, height)."""
    size: ClassVar[int] = 4

    @property
    def width(self) -> int:
        return self.value[2]

    @property
    def height(self) -> int:
        return self.value[3]

    def __str__(self) -> str:
        return f"({self.x}, {self.y}) ({self.width} x {self.height})"


SUBJECT_AREA_SHAPES = {
    2: ExifPointSubjectArea,
    3: ExifCircularSubjectArea,
    4: ExifRectangularSubjectArea,
}


def decode_subject_area(tag: int, data: bytes, byte_order: ByteOrder, count: int) -> ExifPointSubjectArea:
    """
    Decode SubjectArea, choosing the shape from the element count.

    Raises:
        ExifDecodeError: For any count other than 2, 3 or 4.
    """
    try:
        shape = SUBJECT_AREA_SHAPES[count]
    except KeyError:
        raise ExifDecodeError(f"SubjectArea must have 2, 3 or 4 values, got {count}") from None
    return shape.decode(tag, data, byte_order, count)


# ============================================================================
# Fixed-size rational tuples
# ============================================================================

@dataclass
class _RationalTuple(ExifURationalArray):
    size: ClassVar[int]

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        if count != cls.size:
            raise ExifDecodeError(f"{cls.__name__} needs {cls.size} rationals, got {count}")
        return super().decode(tag, data, byte_order, count, encoding)


@dataclass
class GPSLatitudeLongitude(_RationalTuple):
    """Degrees, minutes and seconds as three unsigned rationals."""
    size: ClassVar[int] = 3

    @property
    def degrees(self):
        return self.value[0]

    @property
    def minutes(self):
        return self.value[1]

    @property
    def seconds(self):
        return self.value[2]

    def to_float(self) -> float:
        """Return decimal degrees (the reference direction is a separate tag)."""
        return float(self.degrees) + float(self.minutes) / 60.0 + float(self.seconds) / 3600.0

    def __str__(self) -> str:
        return f"{float(self.degrees):.2f}°{float(self.minutes):.2f}'{float(self.seconds):.2f}\""


@dataclass
class GPSTimeStamp(_RationalTuple):
    """UTC hour, minute and second as three unsigned rationals."""
    size: ClassVar[int] = 3

    @property
    def hour(self):
        return self.value[0]

    @property
    def minute(self):
        return self.value[1]

    @property
    def second(self):
        return self.value[2]

    def __str__(self) -> str:
        return f"{float(self.hour):.2f}:{float(self.minute):.2f}:{float(self.second):.2f}"


@dataclass
class LensSpecification(_RationalTuple):
    """Minimum/maximum focal length and their minimum f-numbers."""
    size: ClassVar[int] = 4

    @property
    def min_focal_length(self):
        return self.value[0]

    @property
    def max_focal_length(self):
        return self.value[1]

    @property
    def min_focal_length_f_number(self):
        return self.value[2]

    @property
    def max_focal_length_f_number(self):
        return self.value[3]

    def __str__(self) -> str:
        return (f"{self.min_focal_length} F{self.min_focal_length_f_number}, "
                f"{self.max_focal_length} F{self.max_focal_length_f_number}")
