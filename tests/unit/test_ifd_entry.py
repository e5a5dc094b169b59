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
Unit tests for the 12-byte IFD entry codec.

Covers inline vs. indirected placement (the 4/5-byte threshold), per-element
byte reversal when decoding a foreign byte order, and structural errors.
"""

import struct

import pytest

from exiftk.utils.bit_converter import SYSTEM_BYTE_ORDER, ByteOrder, get_bytes
from exiftk.utils.exceptions import ExifDecodeError, UnknownWireTypeError
from exiftk.utils.exif_enums import Orientation
from exiftk.utils.exif_extended_properties import ExifEnumProperty
from exiftk.utils.ifd_entry import (
    ENTRY_SIZE,
    IFDEntry,
    InterOpType,
    get_base_length,
    swap_elements,
)
from exiftk.utils.tag_registry import ExifTag

LE = ByteOrder.LITTLE_ENDIAN
BE = ByteOrder.BIG_ENDIAN

# Orientation = 6, SHORT, little-endian
ORIENTATION_RECORD_LE = bytes.fromhex('12 01 03 00 01 00 00 00 06 00 00 00')


def make_record(prefix: str, tag: int, wire_type: int, count: int, value_field: bytes) -> bytes:
    """Pack a 12-byte record; ``value_field`` is the raw last four bytes."""
    return struct.pack(prefix + 'HHI', tag, wire_type, count) + value_field


@pytest.mark.unit
class TestBaseLength:
    """Test wire type sizes."""

    @pytest.mark.parametrize('wire_type,length', [
        (InterOpType.BYTE, 1), (InterOpType.ASCII, 1), (InterOpType.SHORT, 2),
        (InterOpType.LONG, 4), (InterOpType.RATIONAL, 8), (InterOpType.SBYTE, 1),
        (InterOpType.UNDEFINED, 1), (InterOpType.SSHORT, 2), (InterOpType.SLONG, 4),
        (InterOpType.SRATIONAL, 8), (InterOpType.FLOAT, 4), (InterOpType.DOUBLE, 8),
    ])
    def test_known_types(self, wire_type, length):
        assert get_base_length(wire_type) == length

    @pytest.mark.parametrize('wire_type', [0, 13, 0xFFFF])
    def test_unknown_types(self, wire_type):
        with pytest.raises(UnknownWireTypeError):
            get_base_length(wire_type)

    def test_rational_halves_swap_separately(self):
        """Numerator stays first; each 32-bit half is reversed."""
        data = bytes.fromhex('00 00 00 01 00 00 00 02')
        assert swap_elements(data, InterOpType.RATIONAL) == bytes.fromhex('01 00 00 00 02 00 00 00')


@pytest.mark.unit
class TestEntryDecode:
    """Test IFDEntry.from_bytes."""

    def test_orientation_little_endian(self):
        entry = IFDEntry.from_bytes(ORIENTATION_RECORD_LE, 0, LE, LE)

        assert entry.tag == 0x112
        assert entry.wire_type == InterOpType.SHORT
        assert entry.count == 1
        assert entry.data == b'\x06\x00'

    def test_orientation_big_endian_to_little(self):
        record = bytes.fromhex('01 12 00 03 00 00 00 01 00 06 00 00')

        entry = IFDEntry.from_bytes(record, 0, BE, LE)

        assert entry.tag == 0x112
        assert entry.data == b'\x06\x00'

    def test_four_bytes_stay_inline(self):
        record = make_record('<', 0x10F, InterOpType.ASCII, 4, b'abc\x00')

        entry = IFDEntry.from_bytes(record, 0, LE, LE)

        assert entry.is_inline
        assert entry.data == b'abc\x00'

    def test_five_bytes_are_indirected(self):
        """The value field is an offset into the same buffer."""
        buffer = make_record('<', 0x10F, InterOpType.ASCII, 5, struct.pack('<I', 12)) + b'abcd\x00'

        entry = IFDEntry.from_bytes(buffer, 0, LE, LE)

        assert not entry.is_inline
        assert entry.data == b'abcd\x00'

    def test_short_array_reversed_per_element(self):
        """[0x0102, 0x0304, 0x0506] big-endian arrives as little-endian elements in order."""
        buffer = make_record('>', 0x9214, InterOpType.SHORT, 3, struct.pack('>I', 12)) + bytes([1, 2, 3, 4, 5, 6])

        entry = IFDEntry.from_bytes(buffer, 0, BE, LE)

        assert entry.data == bytes([2, 1, 4, 3, 6, 5])

    def test_rational_reversed_per_half(self):
        buffer = make_record('>', 0x11A, InterOpType.RATIONAL, 1, struct.pack('>I', 12)) + bytes.fromhex('00 00 00 48 00 00 00 01')

        entry = IFDEntry.from_bytes(buffer, 0, BE, LE)

        assert entry.data == bytes.fromhex('48 00 00 00 01 00 00 00')

    def test_record_at_offset(self):
        buffer = b'\xaa' * 6 + ORIENTATION_RECORD_LE
        assert IFDEntry.from_bytes(buffer, 6, LE, LE).tag == 0x112

    def test_truncated_record(self):
        with pytest.raises(ExifDecodeError, match="runs past the end"):
            IFDEntry.from_bytes(ORIENTATION_RECORD_LE[:10], 0, LE, LE)

    def test_payload_out_of_bounds(self):
        record = make_record('<', 0x10F, InterOpType.ASCII, 20, struct.pack('<I', 100))
        with pytest.raises(ExifDecodeError, match="payload of 20 bytes"):
            IFDEntry.from_bytes(record, 0, LE, LE)

    def test_unknown_wire_type(self):
        record = make_record('<', 0x10F, 13, 1, b'\x00' * 4)
        with pytest.raises(UnknownWireTypeError):
            IFDEntry.from_bytes(record, 0, LE, LE)


@pytest.mark.unit
class TestEntryEncode:
    """Test IFDEntry.to_bytes."""

    def test_orientation_reencodes_identically(self):
        entry = IFDEntry.from_bytes(ORIENTATION_RECORD_LE, 0, LE, LE)

        encoded = entry.to_bytes(LE, from_order=LE)

        assert encoded.is_inline
        assert encoded.record == ORIENTATION_RECORD_LE
        assert len(encoded.record) == ENTRY_SIZE

    def test_inline_value_left_justified(self):
        entry = IFDEntry(0x112, InterOpType.SHORT, 1, b'\x00\x06')

        encoded = entry.to_bytes(BE, from_order=BE)

        assert encoded.record == bytes.fromhex('01 12 00 03 00 00 00 01 00 06 00 00')

    def test_indirected_value_carries_payload(self):
        entry = IFDEntry(0x10F, InterOpType.ASCII, 5, b'abcd\x00')

        encoded = entry.to_bytes(LE, payload_offset=0x40, from_order=LE)

        assert encoded.payload == b'abcd\x00'
        assert encoded.record[8:] == b'\x40\x00\x00\x00'

    def test_encode_swaps_elements(self):
        entry = IFDEntry(0x9214, InterOpType.SHORT, 2, b'\x01\x00\x02\x00')

        encoded = entry.to_bytes(BE, from_order=LE)

        assert encoded.record[8:] == b'\x00\x01\x00\x02'

    def test_length_must_match_count(self):
        with pytest.raises(ExifDecodeError, match="expected 2"):
            IFDEntry(0x112, InterOpType.SHORT, 1, b'\x06')

    def test_from_property(self):
        prop = ExifEnumProperty(ExifTag.Orientation, Orientation.RotatedRight)

        entry = IFDEntry.from_property(prop)

        assert entry.tag == 0x112
        assert entry.wire_type == InterOpType.SHORT
        assert entry.data == get_bytes(6, 'uint16', SYSTEM_BYTE_ORDER)
        assert str(entry) == "Tag 0x0112, type 3, count 1"
