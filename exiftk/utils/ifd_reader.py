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
IFD Reader and Writer.

Directory-level reading and writing on top of the entry codec and the property
factory.

A directory is laid out as:

    u16 entry count | count x 12-byte entries | u32 next IFD offset | payloads

An EXIF block is a TIFF-structured buffer: an 8-byte header (``II*\\0`` or
``MM\\0*`` plus the offset of IFD0), IFD0 with pointers to the EXIF and GPS
sub-IFDs, the Interop sub-IFD pointed to from the EXIF IFD, and IFD1 linked
as the next directory after IFD0.

Functions:
    read_ifd: Decode one directory into properties
    read_exif_block: Decode every directory of an EXIF block
    encode_entries: Encode properties as (record, payload) pairs
    encode_ifd: Encode properties as one directory with payloads placed
    encode_exif_block: Encode properties as a complete EXIF block
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Set

from exiftk.utils.bit_converter import SYSTEM_BYTE_ORDER, ByteOrder, get_bytes, to_uint16, to_uint32
from exiftk.utils.exceptions import ExifDecodeError, ExifError, NotValidTIFFHeaderError
from exiftk.utils.exif_properties import DEFAULT_ENCODING, ExifProperty, ExifUInt
from exiftk.utils.ifd_entry import ENTRY_SIZE, EncodedEntry, IFDEntry
from exiftk.utils.property_factory import property_from_entry
from exiftk.utils.tag_registry import IFD, ExifTag, get_tag_long_name

logger = logging.getLogger(__name__)

EXIF_PREAMBLE = b'Exif\x00\x00'
TIFF_HEADER_SIZE = 8
TIFF_MAGIC = 42

# Pointer tag -> section it points to
SUB_IFD_POINTERS = {
    ExifTag.EXIFIFDPointer: IFD.EXIF,
    ExifTag.GPSIFDPointer: IFD.GPS,
    ExifTag.InteroperabilityIFDPointer: IFD.Interop,
}

# Sections in the order they are written
BLOCK_SECTIONS = (IFD.Zeroth, IFD.EXIF, IFD.Interop, IFD.GPS, IFD.First)


@dataclass
class IFDContents:
    """The properties of one directory and the offset of the next one (0 if none)."""
    properties: List[ExifProperty]
    next_ifd_offset: int = 0


@dataclass
class ExifData:
    """
    All properties of an EXIF block.

    Sub-IFD pointer tags are structural and are not kept; encode_exif_block
    regenerates them.
    """
    byte_order: ByteOrder
    properties: List[ExifProperty] = field(default_factory=list)

    def get(self, tag: int) -> Optional[ExifProperty]:
        """Return the first property with the flat identifier ``tag``, if any."""
        for prop in self.properties:
            if prop.tag == tag:
                return prop
        return None

    def in_ifd(self, ifd: IFD) -> List[ExifProperty]:
        return [prop for prop in self.properties if prop.ifd == ifd]

    def __iter__(self) -> Iterator[ExifProperty]:
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)


# ============================================================================
# Reading
# ============================================================================

def read_ifd(data: bytes, offset: int, byte_order: ByteOrder, ifd: IFD,
             encoding: str = DEFAULT_ENCODING, strict: bool = False) -> IFDContents:
    """
    Decode the directory starting at ``offset``.

    Args:
        data: Buffer holding the directory; payload offsets are relative to
            its start.
        offset: Offset of the entry count.
        byte_order: Byte order of ``data``.
        ifd: Section the directory belongs to.
        encoding: Text encoding for ASCII fields.
        strict: Raise on the first field that cannot be decoded instead of
            logging and skipping it.

    Returns:
        IFDContents with the decoded properties in directory order.

    Raises:
        ExifDecodeError: If the entry count itself cannot be read, or (strict
            mode) any field fails to decode.
    """
    count = to_uint16(data, offset, byte_order)
    logger.debug(f"{ifd.name} IFD at offset {offset}: {count} entries")

    properties = []
    for index in range(count):
        position = offset + 2 + index * ENTRY_SIZE
        try:
            entry = IFDEntry.from_bytes(data, position, byte_order)
            properties.append(property_from_entry(entry, ifd, SYSTEM_BYTE_ORDER, encoding))
        except ExifError as e:
            if strict:
                raise
            logger.warning(f"Skipping entry {index} of {ifd.name} IFD: {e}")

    next_position = offset + 2 + count * ENTRY_SIZE
    next_ifd_offset = 0
    if next_position + 4 <= len(data):
        next_ifd_offset = to_uint32(data, next_position, byte_order)
    return IFDContents(properties, next_ifd_offset)


def parse_tiff_header(data: bytes) -> tuple[ByteOrder, int]:
    """
    Read the byte order and IFD0 offset from an 8-byte TIFF header.

    Raises:
        NotValidTIFFHeaderError: If the header is missing or malformed.
    """
    if len(data) < TIFF_HEADER_SIZE:
        raise NotValidTIFFHeaderError(f"Buffer of {len(data)} bytes is too short for a TIFF header")
    marker = bytes(data[:2])
    if marker == b'II':
        byte_order = ByteOrder.LITTLE_ENDIAN
    elif marker == b'MM':
        byte_order = ByteOrder.BIG_ENDIAN
    else:
        raise NotValidTIFFHeaderError(f"Unknown byte order marker: {marker!r}")
    if to_uint16(data, 2, byte_order) != TIFF_MAGIC:
        raise NotValidTIFFHeaderError("TIFF magic number 42 not found")
    return byte_order, to_uint32(data, 4, byte_order)


def read_exif_block(data: bytes, encoding: str = DEFAULT_ENCODING, strict: bool = False) -> ExifData:
    """
    Decode every directory of a TIFF-structured EXIF block.

    Args:
        data: The block, optionally preceded by the ``Exif\\0\\0`` preamble of
            a JPEG APP1 segment.
        encoding: Text encoding for ASCII fields.
        strict: Raise on the first undecodable field or directory.

    Returns:
        ExifData with properties ordered IFD0, EXIF, Interop, GPS, IFD1.
    """
    data = bytes(data)
    if data.startswith(EXIF_PREAMBLE):
        data = data[len(EXIF_PREAMBLE):]
    byte_order, ifd0_offset = parse_tiff_header(data)
    logger.debug(f"EXIF block: {len(data)} bytes, {byte_order.name}, IFD0 at {ifd0_offset}")
    return read_ifd_tree(data, byte_order, ifd0_offset, encoding, strict)


def read_ifd_tree(data: bytes, byte_order: ByteOrder, ifd0_offset: int,
                  encoding: str = DEFAULT_ENCODING, strict: bool = False) -> ExifData:
    """
    Decode IFD0 at ``ifd0_offset`` and every directory reachable from it.

    Used directly when the container layer has already located IFD0, as for
    a TIFF file opened with tifffile.
    """
    exif = ExifData(byte_order)
    visited: Set[int] = set()

    def walk(ifd: IFD, offset: int):
        if offset == 0:
            return
        if offset in visited:
            logger.warning(f"{ifd.name} IFD at offset {offset} was already read; skipping")
            return
        visited.add(offset)

        try:
            contents = read_ifd(data, offset, byte_order, ifd, encoding, strict)
        except ExifDecodeError as e:
            if strict:
                raise
            logger.warning(f"Skipping {ifd.name} IFD: {e}")
            return

        children = []
        for prop in contents.properties:
            target = SUB_IFD_POINTERS.get(prop.tag)
            if target is not None and isinstance(prop, ExifUInt):
                children.append((target, prop.value))
            else:
                exif.properties.append(prop)

        for child_ifd, child_offset in children:
            walk(child_ifd, child_offset)
        if ifd == IFD.Zeroth:
            walk(IFD.First, contents.next_ifd_offset)

    walk(IFD.Zeroth, ifd0_offset)
    return exif


# ============================================================================
# Writing
# ============================================================================

def encode_entries(properties: Sequence[ExifProperty], byte_order: ByteOrder) -> List[EncodedEntry]:
    """
    Encode properties as directory records in ``byte_order``.

    Indirected payloads are returned alongside their record with the offset
    left at zero; placing them is up to the caller.
    """
    return [IFDEntry.from_property(prop).to_bytes(byte_order) for prop in properties]


def encode_ifd(properties: Sequence[ExifProperty], byte_order: ByteOrder, ifd_offset: int,
               next_ifd_offset: int = 0) -> bytes:
    """
    Encode properties as one directory block.

    Entries are sorted by tag number. Payloads that do not fit inline follow
    the entry table, each starting on an even offset.

    Args:
        properties: Properties of a single section.
        byte_order: Target byte order.
        ifd_offset: Absolute offset the block will be written at.
        next_ifd_offset: Value of the next-IFD link.

    Returns:
        The directory block.
    """
    entries = sorted((IFDEntry.from_property(prop) for prop in properties), key=lambda e: e.tag)
    payload_offset = ifd_offset + 2 + len(entries) * ENTRY_SIZE + 4

    records = []
    payloads = bytearray()
    for entry in entries:
        if entry.is_inline:
            records.append(entry.to_bytes(byte_order).record)
            continue
        if (payload_offset + len(payloads)) % 2:
            payloads.append(0)
        encoded = entry.to_bytes(byte_order, payload_offset + len(payloads))
        records.append(encoded.record)
        payloads += encoded.payload

    return (
        get_bytes(len(entries), 'uint16', byte_order, byte_order)
        + b''.join(records)
        + get_bytes(next_ifd_offset, 'uint32', byte_order, byte_order)
        + bytes(payloads)
    )


def encode_exif_block(properties: Sequence[ExifProperty], byte_order: ByteOrder) -> bytes:
    """
    Encode properties as a complete TIFF-structured EXIF block.

    Properties are grouped by section; sub-IFD pointers and the IFD0 -> IFD1
    link are generated. Properties of sections that do not live in an EXIF
    block (JFIF, JFXX) are skipped.
    """
    groups: Dict[IFD, List[ExifProperty]] = {ifd: [] for ifd in BLOCK_SECTIONS}
    for prop in properties:
        if prop.tag in SUB_IFD_POINTERS:
            continue
        if prop.ifd not in groups:
            logger.warning(f"{get_tag_long_name(prop.tag)} does not belong in an EXIF block; skipping")
            continue
        groups[prop.ifd].append(prop)

    has_interop = bool(groups[IFD.Interop])
    has_exif = bool(groups[IFD.EXIF]) or has_interop
    sections = [ifd for ifd in BLOCK_SECTIONS if groups[ifd] or ifd == IFD.Zeroth or (ifd == IFD.EXIF and has_exif)]

    def with_pointers(ifd: IFD, offsets: Dict[IFD, int]) -> List[ExifProperty]:
        props = list(groups[ifd])
        if ifd == IFD.Zeroth:
            if has_exif:
                props.append(ExifUInt(ExifTag.EXIFIFDPointer, offsets.get(IFD.EXIF, 0)))
            if groups[IFD.GPS]:
                props.append(ExifUInt(ExifTag.GPSIFDPointer, offsets.get(IFD.GPS, 0)))
        elif ifd == IFD.EXIF and has_interop:
            props.append(ExifUInt(ExifTag.InteroperabilityIFDPointer, offsets.get(IFD.Interop, 0)))
        return props

    # Pointer values never change a directory's length, so one layout pass
    # with zero pointers fixes every offset.
    offsets: Dict[IFD, int] = {}
    position = TIFF_HEADER_SIZE
    for ifd in sections:
        offsets[ifd] = position
        position += len(encode_ifd(with_pointers(ifd, {}), byte_order, position))
        position += position % 2

    marker = b'II' if byte_order == ByteOrder.LITTLE_ENDIAN else b'MM'
    block = bytearray(marker + get_bytes(TIFF_MAGIC, 'uint16', byte_order, byte_order)
                      + get_bytes(TIFF_HEADER_SIZE, 'uint32', byte_order, byte_order))
    for ifd in sections:
        if len(block) % 2:
            block.append(0)
        next_offset = offsets.get(IFD.First, 0) if ifd == IFD.Zeroth else 0
        block += encode_ifd(with_pointers(ifd, offsets), byte_order, offsets[ifd], next_offset)

    logger.debug(f"Encoded EXIF block: {len(block)} bytes, sections {[ifd.name for ifd in sections]}")
    return bytes(block)
