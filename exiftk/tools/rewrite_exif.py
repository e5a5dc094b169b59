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
EXIF Block Rewriting Tool for EXIFTK.

Powers the 'rewrite' command: decodes a raw EXIF block and writes it back in
the requested byte order. Directory layout is regenerated, so the output is
normalized (sorted entries, even payload offsets, fresh sub-IFD pointers).
"""

import logging
from pathlib import Path

from exiftk.utils.bit_converter import ByteOrder
from exiftk.utils.ifd_reader import EXIF_PREAMBLE, encode_exif_block, read_exif_block
from exiftk.utils.script_arguments import RewriteArguments

logger = logging.getLogger('rewrite_exif')


def rewrite_exif(args: RewriteArguments) -> Path:
    """
    Main function for the 'rewrite' command.

    Args:
        args: Validated RewriteArguments.

    Returns:
        Path of the written block.
    """
    source = Path(args.input_path).read_bytes()
    exif = read_exif_block(source, args.encoding, args.strict)
    target_order = ByteOrder.from_name(args.byte_order)
    logger.info(f"Read {len(exif)} properties ({exif.byte_order.name}) from {Path(args.input_path).name}")

    block = encode_exif_block(exif.properties, target_order)
    if source.startswith(EXIF_PREAMBLE):
        block = EXIF_PREAMBLE + block

    output_path = Path(args.output_path)
    output_path.write_bytes(block)
    logger.info(f"Wrote {len(block)} bytes ({target_order.name}) to {output_path}")
    return output_path
