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
Unit tests for the property factory dispatch tables.
"""

import pytest

from exiftk.utils.bit_converter import ByteOrder, array_to_bytes, rational_array_to_bytes
from exiftk.utils.data_models import Rational
from exiftk.utils.exceptions import ExifDecodeError, UnknownWireTypeError
from exiftk.utils.exif_enums import FileSource, Flash, GPSLatitudeRef, Orientation
from exiftk.utils.exif_extended_properties import (
    ExifCircularSubjectArea,
    ExifDateTime,
    ExifEncodedString,
    ExifEnumProperty,
    ExifVersion,
    GPSLatitudeLongitude,
    VersionID,
)
from exiftk.utils.exif_properties import (
    ExifAscii,
    ExifSRational,
    ExifUInt,
    ExifUIntArray,
    ExifUndefined,
    ExifUShort,
)
from exiftk.utils.ifd_entry import IFDEntry, InterOpType
from exiftk.utils.property_factory import FALLBACK_TYPES, PROPERTY_OVERRIDES, get_property, property_from_entry
from exiftk.utils.tag_registry import IFD, ExifTag

LE = ByteOrder.LITTLE_ENDIAN
BE = ByteOrder.BIG_ENDIAN


@pytest.mark.unit
class TestOverrides:
    """Tags whose meaning the wire type cannot express."""

    def test_orientation(self):
        prop = get_property(IFD.Zeroth, 0x112, InterOpType.SHORT, 1, b'\x00\x06', BE)

        assert isinstance(prop, ExifEnumProperty)
        assert prop.tag is ExifTag.Orientation
        assert prop.value is Orientation.RotatedRight

    def test_same_number_other_section(self):
        """0x0112 in IFD1 is the thumbnail orientation."""
        prop = get_property(IFD.First, 0x112, InterOpType.SHORT, 1, b'\x01\x00', LE)

        assert prop.tag is ExifTag.ThumbnailOrientation
        assert prop.value is Orientation.Normal

    def test_date_time_original(self):
        prop = get_property(IFD.EXIF, 0x9003, InterOpType.ASCII, 20, b'2020:01:02 03:04:05\x00', LE)
        assert isinstance(prop, ExifDateTime)

    def test_exif_version(self):
        prop = get_property(IFD.EXIF, 0x9000, InterOpType.UNDEFINED, 4, b'0231', LE)
        assert isinstance(prop, ExifVersion)

    def test_user_comment(self):
        prop = get_property(IFD.EXIF, 0x9286, InterOpType.UNDEFINED, 10, b'ASCII\x00\x00\x00ok', BE)

        assert isinstance(prop, ExifEncodedString)
        assert prop.value == "ok"

    def test_file_source(self):
        prop = get_property(IFD.EXIF, 0xA300, InterOpType.UNDEFINED, 1, b'\x03', BE)
        assert prop.value is FileSource.DSC

    def test_flash(self):
        prop = get_property(IFD.EXIF, 0x9209, InterOpType.SHORT, 1, b'\x00\x01', BE)

        assert prop.value == Flash.FlashFired
        assert prop.is_bit_field

    def test_subject_area_shape(self):
        data = array_to_bytes([1, 2, 3], 'uint16', LE)
        prop = get_property(IFD.EXIF, 0x9214, InterOpType.SHORT, 3, data, LE)
        assert isinstance(prop, ExifCircularSubjectArea)

    def test_gps_version_id(self):
        prop = get_property(IFD.GPS, 0, InterOpType.BYTE, 4, bytes([2, 2, 0, 0]), BE)

        assert isinstance(prop, VersionID)
        assert str(prop) == "2.2.0.0"

    def test_gps_reference_and_coordinate(self):
        ref = get_property(IFD.GPS, 1, InterOpType.ASCII, 2, b'N\x00', LE)
        data = rational_array_to_bytes([Rational(1, 1)] * 3, LE)
        coordinate = get_property(IFD.GPS, 2, InterOpType.RATIONAL, 3, data, LE)

        assert ref.value is GPSLatitudeRef.North
        assert isinstance(coordinate, GPSLatitudeLongitude)

    def test_interoperability_index_is_ascii(self):
        prop = get_property(IFD.Interop, 1, InterOpType.ASCII, 4, b'R98\x00', LE, 'utf-16-le')

        assert isinstance(prop, ExifAscii)
        assert prop.value == "R98"

    def test_override_table_is_read_only(self):
        with pytest.raises(TypeError):
            PROPERTY_OVERRIDES[(IFD.Zeroth, 0x100)] = ExifUShort.decode


@pytest.mark.unit
class TestFallbacks:
    """Tags with no special meaning use the generic variant of their wire type."""

    def test_every_wire_type_has_a_fallback(self):
        assert sorted(FALLBACK_TYPES) == list(range(1, 13))

    def test_scalar_for_count_one(self):
        prop = get_property(IFD.Zeroth, 0x100, InterOpType.LONG, 1, b'\x00\x00\x10\x00', BE)

        assert type(prop) is ExifUInt
        assert prop.value == 4096

    def test_array_for_other_counts(self):
        data = array_to_bytes([10, 20], 'uint32', LE)
        prop = get_property(IFD.Zeroth, 0x111, InterOpType.LONG, 2, data, LE)

        assert type(prop) is ExifUIntArray
        assert prop.value == [10, 20]

    def test_signed_rational(self):
        data = rational_array_to_bytes([Rational(-1, 3)], BE, signed=True)
        prop = get_property(IFD.EXIF, 0x9204, InterOpType.SRATIONAL, 1, data, BE)

        assert type(prop) is ExifSRational
        assert prop.value == Rational(-1, 3)

    def test_unregistered_tag(self):
        prop = get_property(IFD.EXIF, 0x1234, InterOpType.UNDEFINED, 3, b'abc', LE)

        assert type(prop) is ExifUndefined
        assert prop.name == "Unknown"
        assert prop.long_name == "EXIF: Unknown (4660)"

    def test_unknown_wire_type(self):
        with pytest.raises(UnknownWireTypeError, match="Unknown property type 13"):
            get_property(IFD.Zeroth, 0x100, 13, 1, b'\x00\x00\x00\x00', LE)

    def test_undecodable_text_wrapped(self):
        """Codec errors surface as ExifDecodeError naming the tag."""
        with pytest.raises(ExifDecodeError, match="Zeroth: Make"):
            get_property(IFD.Zeroth, 0x10F, InterOpType.ASCII, 3, b'\xff\xfe\x00', LE, 'ascii')

    def test_property_from_entry(self):
        entry = IFDEntry(0x112, InterOpType.SHORT, 1, b'\x00\x03')

        prop = property_from_entry(entry, IFD.Zeroth, BE)

        assert prop.value is Orientation.Rotated180
