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
Custom Exceptions Module.

A centralized module for custom exceptions used throughout the EXIF ToolKit.

Structural violations (wrong lengths, unknown wire types, out-of-bounds
offsets) are always raised; semantic ambiguities such as an unrecognized
UserComment charset or an unnamed tag are resolved by fallback instead.
"""

class ExifError(Exception):
    """Base exception for all EXIF ToolKit errors."""
    pass

class ExifDecodeError(ExifError):
    """Raised when raw field bytes cannot be decoded into a property."""
    pass

class ExifEncodeError(ExifError):
    """Raised when a property value cannot be written in its wire form."""
    pass

class UnknownWireTypeError(ExifDecodeError):
    """Raised for a field type identifier outside the TIFF 1..12 range."""
    pass

class NotValidTIFFHeaderError(ExifDecodeError):
    """Raised when an EXIF block does not start with a valid TIFF header."""
    pass

class UnknownEnumTypeError(ExifError):
    """Raised when an enumeration has no serializable underlying width."""
    pass

class UnknownThumbnailFormatError(ExifError):
    """Raised when a thumbnail raster classification is not recognized."""
    pass

class InvalidTagIdentifierError(ValueError):
    """Raised when a flat tag identifier lies outside every section band."""
    pass
