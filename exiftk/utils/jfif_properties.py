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
JFIF Properties.

Properties of the JFIF and JFXX APP0 headers, and readers that turn an APP0
payload into those properties. JFIF header fields are always big-endian.

JFIF payload (after ``JFIF\\0``):
    u16 version | u8 units | u16 x density | u16 y density |
    u8 thumbnail width | u8 thumbnail height | RGB thumbnail

JFXX payload (after ``JFXX\\0``):
    u8 extension code | thumbnail (JPEG stream, palette bitmap or RGB bitmap)
"""

import logging
from dataclasses import dataclass
from typing import List

from exiftk.utils.bit_converter import ByteOrder, to_uint16
from exiftk.utils.data_models import JFIFThumbnail, ThumbnailFormat, WireValue
from exiftk.utils.exceptions import ExifDecodeError, UnknownThumbnailFormatError
from exiftk.utils.exif_enums import JFIFDensityUnit, JFIFExtension
from exiftk.utils.exif_extended_properties import ExifEnumProperty
from exiftk.utils.exif_properties import DEFAULT_ENCODING, ExifByte, ExifProperty, ExifUShort
from exiftk.utils.ifd_entry import InterOpType
from exiftk.utils.tag_registry import ExifTag

logger = logging.getLogger(__name__)

JFIF_IDENTIFIER = b'JFIF\x00'
JFXX_IDENTIFIER = b'JFXX\x00'
JPEG_SOI = b'\xff\xd8'
PALETTE_LENGTH = 768


@dataclass
class JFIFVersion(ExifUShort):
    """JFIF version as a 16-bit value: major in the high byte, minor in the low."""

    @classmethod
    def from_parts(cls, tag: int, major: int, minor: int) -> 'JFIFVersion':
        return cls(tag, major * 256 + minor)

    @property
    def major(self) -> int:
        return self.value >> 8

    @property
    def minor(self) -> int:
        return self.value & 0xFF

    def __str__(self) -> str:
        return f"{self.major}.{self.minor:02d}"


@dataclass
class JFIFThumbnailProperty(ExifProperty):
    """
    A thumbnail embedded in a JFIF or JFXX header.

    The wire form is a BYTE array: the palette followed by the pixel indices
    for palette bitmaps, the pixel or JPEG data alone otherwise.
    """
    value: JFIFThumbnail

    @classmethod
    def decode(cls, tag, data, byte_order, count, encoding=DEFAULT_ENCODING):
        # Raw bytes carry no dimensions, so only JPEG vs. RGB can be told apart.
        data = bytes(data)
        fmt = ThumbnailFormat.JPEG if data.startswith(JPEG_SOI) else ThumbnailFormat.BMP_24BIT
        return cls(tag, JFIFThumbnail(fmt, data))

    def to_wire(self) -> WireValue:
        thumbnail = self.value
        if thumbnail.format in (ThumbnailFormat.BMP_24BIT, ThumbnailFormat.JPEG):
            data = bytes(thumbnail.pixel_data)
        elif thumbnail.format == ThumbnailFormat.BMP_PALETTE:
            data = bytes(thumbnail.palette) + bytes(thumbnail.pixel_data)
        else:
            raise UnknownThumbnailFormatError(f"Unknown thumbnail type: {thumbnail.format!r}")
        return WireValue(InterOpType.BYTE, len(data), data)

    def __str__(self) -> str:
        return str(self.value)


def _strip_identifier(payload: bytes, identifier: bytes) -> bytes:
    payload = bytes(payload)
    return payload[len(identifier):] if payload.startswith(identifier) else payload


def _slice(payload: bytes, start: int, length: int, what: str) -> bytes:
    if start + length > len(payload):
        raise ExifDecodeError(
            f"{what}: need {length} bytes at offset {start}, segment holds {len(payload)}"
        )
    return payload[start:start + length]


def read_jfif_segment(payload: bytes) -> List[ExifProperty]:
    """
    Decode a JFIF APP0 payload into properties.

    Args:
        payload: Segment data, with or without the leading ``JFIF\\0``.

    Returns:
        JFIFVersion, JFIFUnits, XDensity, YDensity, JFIFXThumbnail,
        JFIFYThumbnail and JFIFThumbnail properties.
    """
    data = _strip_identifier(payload, JFIF_IDENTIFIER)
    _slice(data, 0, 9, "JFIF header")

    x_thumb, y_thumb = data[7], data[8]
    pixels = _slice(data, 9, 3 * x_thumb * y_thumb, "JFIF thumbnail")
    logger.debug(f"JFIF header: {x_thumb}x{y_thumb} thumbnail")

    return [
        JFIFVersion(ExifTag.JFIFVersion, to_uint16(data, 0, ByteOrder.BIG_ENDIAN)),
        ExifEnumProperty(ExifTag.JFIFUnits, JFIFDensityUnit(data[2])),
        ExifUShort(ExifTag.XDensity, to_uint16(data, 3, ByteOrder.BIG_ENDIAN)),
        ExifUShort(ExifTag.YDensity, to_uint16(data, 5, ByteOrder.BIG_ENDIAN)),
        ExifByte(ExifTag.JFIFXThumbnail, x_thumb),
        ExifByte(ExifTag.JFIFYThumbnail, y_thumb),
        JFIFThumbnailProperty(ExifTag.JFIFThumbnail, JFIFThumbnail(ThumbnailFormat.BMP_24BIT, pixels)),
    ]


def read_jfxx_segment(payload: bytes) -> List[ExifProperty]:
    """
    Decode a JFXX APP0 extension payload into properties.

    Raises:
        UnknownThumbnailFormatError: For an extension code other than 0x10,
            0x11 or 0x13.
    """
    data = _strip_identifier(payload, JFXX_IDENTIFIER)
    code = _slice(data, 0, 1, "JFXX header")[0]
    extension = JFIFExtension(code)
    properties: List[ExifProperty] = [ExifEnumProperty(ExifTag.JFXXExtensionCode, extension)]

    if extension == JFIFExtension.ThumbnailJPEG:
        thumbnail = JFIFThumbnail(ThumbnailFormat.JPEG, data[1:])
    elif extension == JFIFExtension.ThumbnailPaletteBitmap:
        x_thumb, y_thumb = _slice(data, 1, 2, "JFXX thumbnail size")
        palette = _slice(data, 3, PALETTE_LENGTH, "JFXX palette")
        pixels = _slice(data, 3 + PALETTE_LENGTH, x_thumb * y_thumb, "JFXX thumbnail")
        properties += [ExifByte(ExifTag.JFXXXThumbnail, x_thumb), ExifByte(ExifTag.JFXXYThumbnail, y_thumb)]
        thumbnail = JFIFThumbnail(ThumbnailFormat.BMP_PALETTE, pixels, palette)
    elif extension == JFIFExtension.Thumbnail24BitBitmap:
        x_thumb, y_thumb = _slice(data, 1, 2, "JFXX thumbnail size")
        pixels = _slice(data, 3, 3 * x_thumb * y_thumb, "JFXX thumbnail")
        properties += [ExifByte(ExifTag.JFXXXThumbnail, x_thumb), ExifByte(ExifTag.JFXXYThumbnail, y_thumb)]
        thumbnail = JFIFThumbnail(ThumbnailFormat.BMP_24BIT, pixels)
    else:
        raise UnknownThumbnailFormatError(f"Unknown JFXX extension code: 0x{code:02x}")

    properties.append(JFIFThumbnailProperty(ExifTag.JFXXThumbnail, thumbnail))
    return properties
