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
Data Models for EXIF ToolKit.

This module defines small value objects shared by the codec layers. They carry
no knowledge of byte order or tag semantics.

Value classes:
    Rational: An exact numerator/denominator pair (RATIONAL and SRATIONAL)
    InterOperability: The wire record emitted by a property for writing
    WireValue: The (wire type, count, data) triple returned by to_wire()

Thumbnail classes:
    ThumbnailFormat: Raster classification of an embedded thumbnail
    JFIFThumbnail: An embedded thumbnail raster with optional palette
"""

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import NamedTuple


# ============================================================================
# Numeric values
# ============================================================================

class Rational(NamedTuple):
    """
    Represents a TIFF rational as two 32-bit integers.

    The pair is kept exactly as stored; it is never reduced, so a value read
    as 10/20 is written back as 10/20.

    Example:
        >>> r = Rational(10, 20)
        >>> float(r)
        0.5
        >>> Rational.from_float(0.125)
        Rational(numerator=1, denominator=8)
    """
    numerator: int
    denominator: int

    def __float__(self) -> float:
        if self.denominator == 0:
            return float('nan') if self.numerator == 0 else float('inf') * (1 if self.numerator > 0 else -1)
        return self.numerator / self.denominator

    def to_float(self) -> float:
        """Return the rational as a float (inf/nan for a zero denominator)."""
        return float(self)

    def to_fraction(self) -> Fraction:
        """Return the reduced ``fractions.Fraction`` for arithmetic."""
        return Fraction(self.numerator, self.denominator)

    @classmethod
    def from_float(cls, value: float, max_denominator: int = 0xFFFF) -> 'Rational':
        """
        Build the closest rational to ``value`` with a bounded denominator.

        Args:
            value: The number to approximate.
            max_denominator: Upper bound for the denominator.

        Returns:
            A new Rational.
        """
        fraction = Fraction(value).limit_denominator(max_denominator)
        return cls(fraction.numerator, fraction.denominator)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


class WireValue(NamedTuple):
    """The (wire type, count, data) triple a property serializes to."""
    wire_type: int
    count: int
    data: bytes


@dataclass(frozen=True)
class InterOperability:
    """
    Represents the interoperability parameters of a property.

    This is everything needed to write one directory entry: the 16-bit tag
    number, the wire type, the element count, and the field data in system
    byte order.

    Attributes:
        tag_id: The 16-bit tag number within its section
        wire_type: TIFF field type identifier (1..12)
        count: Number of elements of the base type
        data: Field data, ``count * base_length(wire_type)`` bytes long
    """
    tag_id: int
    wire_type: int
    count: int
    data: bytes


# ============================================================================
# Thumbnails
# ============================================================================

class ThumbnailFormat(Enum):
    """Raster classification of an embedded JFIF/JFXX thumbnail."""
    JPEG = 'jpeg'
    BMP_PALETTE = 'bmp_palette'
    BMP_24BIT = 'bmp_24bit'


@dataclass
class JFIFThumbnail:
    """
    Represents a thumbnail embedded in a JFIF or JFXX APP0 header.

    Attributes:
        format: The raster classification
        pixel_data: Pixel data (RGB triplets or palette indices) or the
            complete JPEG stream
        palette: 768-byte RGB palette, only for BMP_PALETTE thumbnails

    Example:
        >>> thumb = JFIFThumbnail(ThumbnailFormat.JPEG, b'\\xff\\xd8...')
        >>> thumb.format.name
        'JPEG'
    """
    format: ThumbnailFormat
    pixel_data: bytes
    palette: bytes = b''

    def __str__(self) -> str:
        return self.format.name
