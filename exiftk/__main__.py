#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: EXIF ToolKit (EXIFTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""Allows running the toolkit as ``python -m exiftk``."""

from exiftk.main import main

if __name__ == "__main__":
    main()
