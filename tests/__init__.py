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
EXIF ToolKit Test Suite.

This package contains tests for EXIFTK components:
- Unit tests for the codec layers and property types
- Integration tests for whole-block reading and writing
- End-to-end tests for CLI commands
"""
