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
Test fixtures and mock data factories for EXIFTK tests.

This package contains:
- MockExifBlock: Builder for synthetic TIFF-structured EXIF blocks
- build_camera_block: A representative block touching every section
"""

from tests.fixtures.exif_block_factory import MockExifBlock, build_camera_block

__all__ = ['MockExifBlock', 'build_camera_block']
