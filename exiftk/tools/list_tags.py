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
Tag Registry Listing Tool for EXIFTK.

Powers the 'tags' command: prints every registered flat tag identifier with
its long name, optionally for one section only.
"""

import logging
from typing import List

from exiftk.utils.script_arguments import TagsArguments
from exiftk.utils.tag_registry import IFD, get_tag_long_name, iter_tags

logger = logging.getLogger('list_tags')


def list_tags(args: TagsArguments) -> List[str]:
    """Log and return one ``"<flat id>  <long name>"`` line per registered tag."""
    ifd = IFD[args.section] if args.section else None
    lines = [f"{int(tag):>7}  {get_tag_long_name(tag)}" for tag in iter_tags(ifd)]
    for line in lines:
        logger.info(line)
    return lines
