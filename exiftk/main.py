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
Command-line interface for the EXIF ToolKit (EXIFTK).

This script provides the main entry point for the `exiftk` command,
parsing user arguments and dispatching them to the appropriate tool.
"""
import argparse
import logging
import sys
from pathlib import Path
from exiftk.utils.config_loader import config
from exiftk.utils.log_helpers import resolve_level, setup_logger
from exiftk.utils.script_arguments import ReadArguments, RewriteArguments, TagsArguments

def str2bool(v):
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')

def main():
    """
    Main function to parse arguments and call the appropriate tool.
    """
    parser = argparse.ArgumentParser(
        description='EXIFTK',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='tool', help='Available tools')
    subparsers.required = True

    # --- Read Metadata Tool ---
    read_parser = subparsers.add_parser(
        'read',
        help='Read and print the EXIF/TIFF tags of a TIFF file or raw EXIF block.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    read_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Path to the input TIFF file or EXIF block.')
    read_parser.add_argument('--raw', action='store_true', dest='raw', help='Treat the input as a raw EXIF block (TIFF header first, optional "Exif\\0\\0" preamble).')
    read_parser.add_argument('-e', '--encoding', type=str, default=None, dest='encoding', help='Text encoding for ASCII fields. Defaults to decoding.fallback_encoding in config.toml.')
    read_parser.add_argument('--strict', type=str2bool, nargs='?', const=True, default=None, dest='strict', help='Fail on the first undecodable field instead of skipping it. Defaults to decoding.strict in config.toml.')
    read_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    read_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    # --- Rewrite EXIF Tool ---
    rewrite_parser = subparsers.add_parser(
        'rewrite',
        help='Re-encode a raw EXIF block, optionally in the other byte order.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    rewrite_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Path to the input EXIF block.')
    rewrite_parser.add_argument('-o', '--output', required=True, type=Path, dest='output_path', help='Path for the re-encoded EXIF block.')
    rewrite_parser.add_argument('-b', '--byte-order', type=str, choices=['little', 'big'], default=None, dest='byte_order', help='Byte order to write. Defaults to encoding.byte_order in config.toml.')
    rewrite_parser.add_argument('-e', '--encoding', type=str, default=None, dest='encoding', help='Text encoding for ASCII fields.')
    rewrite_parser.add_argument('--strict', type=str2bool, nargs='?', const=True, default=None, dest='strict', help='Fail on the first undecodable field instead of dropping it.')
    rewrite_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    rewrite_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    # --- List Tags Tool ---
    tags_parser = subparsers.add_parser(
        'tags',
        help='List the registered tags and their flat identifiers.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    tags_parser.add_argument('-s', '--section', type=str, default=None, dest='section', help='Only list tags of this section (Zeroth, EXIF, GPS, Interop, First, JFIF, JFXX).')
    tags_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    args = parser.parse_args()
    tool = args.tool
    args_dict = vars(args)
    args_dict.pop('tool', None)

    # --- Logger Setup ---
    log_level = logging.DEBUG if args.verbose else resolve_level(config.get("logging.level"))
    log_file = getattr(args, 'log_file', None) or config.get("logging.file") or None
    logger = setup_logger(log_file=str(log_file) if log_file else None, level=log_level)

    try:
        if tool == 'read':
            from exiftk.tools.read_metadata import read_metadata
            script_args = ReadArguments(**args_dict)
            read_metadata(script_args)
        elif tool == 'rewrite':
            from exiftk.tools.rewrite_exif import rewrite_exif
            script_args = RewriteArguments(**args_dict)
            rewrite_exif(script_args)
        elif tool == 'tags':
            from exiftk.tools.list_tags import list_tags
            script_args = TagsArguments(**args_dict)
            list_tags(script_args)
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
