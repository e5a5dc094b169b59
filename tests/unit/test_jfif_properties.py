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
Unit tests for JFIF / JFXX header properties and segment readers.
"""

import pytest

from exiftk.utils.data_models import JFIFThumbnail, ThumbnailFormat
from exiftk.utils.exceptions import ExifDecodeError, UnknownThumbnailFormatError
from exiftk.utils.exif_enums import JFIFDensityUnit, JFIFExtension
from exiftk.utils.ifd_entry import InterOpType
from exiftk.utils.jfif_properties import (
    PALETTE_LENGTH,
    JFIFThumbnailProperty,
    JFIFVersion,
    read_jfif_segment,
    read_jfxx_segment,
)
from exiftk.utils.tag_registry import IFD, ExifTag

# Version 1.02, dots per inch, 72 x 72, one-pixel RGB thumbnail
JFIF_PAYLOAD = b'JFIF\x00' + bytes.fromhex('01 02 01 00 48 00 48 01 01') + b'\x10\x20\x30'


@pytest.mark.unit
class TestJFIFSegment:
    """Test read_jfif_segment."""

    def test_fields(self):
        props = {prop.tag: prop for prop in read_jfif_segment(JFIF_PAYLOAD)}

        assert str(props[ExifTag.JFIFVersion]) == "1.02"
        assert props[ExifTag.JFIFUnits].value is JFIFDensityUnit.DotsPerInch
        assert props[ExifTag.XDensity].value == 72
        assert props[ExifTag.YDensity].value == 72
        assert props[ExifTag.JFIFXThumbnail].value == 1
        assert props[ExifTag.JFIFThumbnail].value.pixel_data == b'\x10\x20\x30'

    def test_all_properties_in_jfif_section(self):
        assert all(prop.ifd is IFD.JFIF for prop in read_jfif_segment(JFIF_PAYLOAD))

    def test_identifier_is_optional(self):
        props = read_jfif_segment(JFIF_PAYLOAD[5:])
        assert props[0].value == 0x0102

    def test_truncated_thumbnail(self):
        with pytest.raises(ExifDecodeError, match="JFIF thumbnail"):
            read_jfif_segment(JFIF_PAYLOAD[:-1])

    def test_version_parts(self):
        version = JFIFVersion.from_parts(ExifTag.JFIFVersion, 1, 1)

        assert version.value == 0x0101
        assert (version.major, version.minor) == (1, 1)


@pytest.mark.unit
class TestJFXXSegment:
    """Test read_jfxx_segment for each extension code."""

    def test_jpeg_thumbnail(self):
        props = read_jfxx_segment(b'JFXX\x00\x10\xff\xd8\xff\xd9')

        assert props[0].value is JFIFExtension.ThumbnailJPEG
        assert props[-1].tag is ExifTag.JFXXThumbnail
        assert props[-1].value.format is ThumbnailFormat.JPEG
        assert props[-1].value.pixel_data == b'\xff\xd8\xff\xd9'

    def test_palette_thumbnail(self):
        palette = bytes(range(256)) * 3
        payload = b'JFXX\x00\x11\x02\x01' + palette + b'\x05\x06'

        props = {prop.tag: prop for prop in read_jfxx_segment(payload)}
        thumbnail = props[ExifTag.JFXXThumbnail].value

        assert props[ExifTag.JFXXXThumbnail].value == 2
        assert thumbnail.format is ThumbnailFormat.BMP_PALETTE
        assert thumbnail.palette == palette
        assert thumbnail.pixel_data == b'\x05\x06'

    def test_rgb_thumbnail(self):
        props = read_jfxx_segment(b'\x13\x01\x01\xaa\xbb\xcc')
        assert props[-1].value == JFIFThumbnail(ThumbnailFormat.BMP_24BIT, b'\xaa\xbb\xcc')

    def test_unknown_extension_code(self):
        with pytest.raises(UnknownThumbnailFormatError, match="0x12"):
            read_jfxx_segment(b'JFXX\x00\x12')

    def test_truncated_palette(self):
        with pytest.raises(ExifDecodeError, match="JFXX palette"):
            read_jfxx_segment(b'\x11\x01\x01' + b'\x00' * 10)


@pytest.mark.unit
class TestThumbnailProperty:
    """Test the thumbnail wire form."""

    def test_palette_written_before_pixels(self):
        thumbnail = JFIFThumbnail(ThumbnailFormat.BMP_PALETTE, b'\x01\x02', b'\x00' * PALETTE_LENGTH)

        wire_type, count, data = JFIFThumbnailProperty(ExifTag.JFXXThumbnail, thumbnail).to_wire()

        assert wire_type == InterOpType.BYTE
        assert count == PALETTE_LENGTH + 2
        assert data.endswith(b'\x01\x02')

    def test_decode_detects_jpeg(self):
        prop = JFIFThumbnailProperty.decode(ExifTag.JFXXThumbnail, b'\xff\xd8\x00', None, 3)
        assert prop.value.format is ThumbnailFormat.JPEG

    def test_decode_defaults_to_rgb(self):
        prop = JFIFThumbnailProperty.decode(ExifTag.JFIFThumbnail, b'\x01\x02\x03', None, 3)
        assert str(prop) == "BMP_24BIT"

    def test_unknown_format(self):
        thumbnail = JFIFThumbnail('gif', b'')
        with pytest.raises(UnknownThumbnailFormatError):
            JFIFThumbnailProperty(ExifTag.JFXXThumbnail, thumbnail).to_wire()
