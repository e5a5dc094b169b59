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
EXIF Metadata Reading Tool for EXIFTK.

This module powers the 'read' command. It decodes the tag directories of a
TIFF file, or of a raw EXIF block, and prints one line per property:

    <section>: <name> (<tag number>) = <value>
"""

import logging
from pathlib import Path
from typing import List

import tifffile

from exiftk.utils.bit_converter import ByteOrder
from exiftk.utils.exceptions import NotValidTIFFHeaderError
from exiftk.utils.ifd_reader import ExifData, read_exif_block, read_ifd_tree
from exiftk.utils.script_arguments import ReadArguments

logger = logging.getLogger('read_metadata')


def read_tiff_file(path: Path, encoding: str, strict: bool) -> ExifData:
    """
    Decode the directories of a classic TIFF file.

    tifffile locates the byte order and IFD0; the directories themselves are
    decoded by ifd_reader from the file bytes.
    """
    with tifffile.TiffFile(str(path)) as tif:
        if tif.is_bigtiff:
            raise NotValidTIFFHeaderError(f"{path.name} is a BigTIFF file; only classic TIFF is supported")
        byte_order = ByteOrder.from_prefix(tif.byteorder)
        ifd0_offset = tif.pages[0].offset
        logger.debug(f"{path.name}: {len(tif.pages)} page(s), {byte_order.name}, IFD0 at {ifd0_offset}")

    data = path.read_bytes()
    return read_ifd_tree(data, byte_order, ifd0_offset, encoding, strict)


def format_properties(exif: ExifData) -> List[str]:
    """Render one ``"<long name> = <value>"`` line per property."""
    return [f"{prop.long_name} = {prop}" for prop in exif]


def read_metadata(args: ReadArguments) -> ExifData:
    """
    Main function for the 'read' command.

    Args:
        args: Validated ReadArguments.

    Returns:
        The decoded ExifData.
    """
    path = Path(args.input_path)
    logger.info(f"Reading {path.name}")

    if args.raw:
        exif = read_exif_block(path.read_bytes(), args.encoding, args.strict)
    else:
        exif = read_tiff_file(path, args.encoding, args.strict)

    logger.info(f"Byte order: {exif.byte_order.name}, {len(exif)} properties")
    for line in format_properties(exif):
        logger.info(line)
    return exif
