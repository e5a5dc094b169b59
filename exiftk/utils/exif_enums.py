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
EXIF Enumerations.

Closed sets of named codes used by enumerated properties. The base class of
each enumeration records the width of its underlying integer:

    ByteEnum   - stored as one byte
    ShortEnum  - stored as a 16-bit short
    ShortFlag  - a 16-bit bit field (Flash)

Codes that are not listed still decode; they become pseudo members named
``Unknown_<code>`` so the original value survives a round trip.
"""

from enum import IntEnum, IntFlag
from typing import Type

from exiftk.utils.exceptions import UnknownEnumTypeError


def _pseudo_member(cls, value):
    if not isinstance(value, int) or isinstance(value, bool):
        return None
    member = int.__new__(cls, value)
    member._name_ = f"Unknown_{value}"
    member._value_ = value
    return member


class ByteEnum(IntEnum):
    """An enumeration stored as a single byte."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and 0 <= value <= 0xFF:
            return _pseudo_member(cls, value)
        return None


class ShortEnum(IntEnum):
    """An enumeration stored as an unsigned 16-bit short."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, int) and 0 <= value <= 0xFFFF:
            return _pseudo_member(cls, value)
        return None


class ShortFlag(IntFlag):
    """A bit field stored as an unsigned 16-bit short."""


def get_underlying_width(enum_type: Type) -> int:
    """
    Return the byte width an enumeration serializes with.

    Raises:
        UnknownEnumTypeError: If ``enum_type`` has no recognized width.
    """
    if isinstance(enum_type, type):
        if issubclass(enum_type, ByteEnum):
            return 1
        if issubclass(enum_type, (ShortEnum, ShortFlag)):
            return 2
    raise UnknownEnumTypeError(f"Enumeration {enum_type!r} has no serializable width")


# ============================================================================
# IFD0 / IFD1
# ============================================================================

class Compression(ShortEnum):
    Uncompressed = 1
    CCITT1D = 2
    Group3Fax = 3
    Group4Fax = 4
    LZW = 5
    JPEG = 6
    NewJPEG = 7
    Deflate = 8
    PackBits = 32773


class PhotometricInterpretation(ShortEnum):
    WhiteIsZero = 0
    BlackIsZero = 1
    RGB = 2
    RGBPalette = 3
    TransparencyMask = 4
    CMYK = 5
    YCbCr = 6
    CIELab = 8


class Orientation(ShortEnum):
    Normal = 1
    MirroredVertically = 2
    Rotated180 = 3
    MirroredHorizontally = 4
    RotatedLeftAndMirroredVertically = 5
    RotatedRight = 6
    RotatedLeft = 7
    RotatedRightAndMirroredVertically = 8


class PlanarConfiguration(ShortEnum):
    ChunkyFormat = 1
    PlanarFormat = 2


class YCbCrPositioning(ShortEnum):
    Centered = 1
    CoSited = 2


class ResolutionUnit(ShortEnum):
    """Shared by ResolutionUnit and FocalPlaneResolutionUnit."""
    Inches = 2
    Centimeters = 3
    Millimeters = 4
    Micrometers = 5


# ============================================================================
# EXIF sub-IFD
# ============================================================================

class ColorSpace(ShortEnum):
    sRGB = 1
    Uncalibrated = 0xFFFF


class ExposureProgram(ShortEnum):
    NotDefined = 0
    Manual = 1
    Normal = 2
    AperturePriority = 3
    ShutterPriority = 4
    Creative = 5
    Action = 6
    Portrait = 7
    Landscape = 8


class MeteringMode(ShortEnum):
    Unknown = 0
    Average = 1
    CenterWeightedAverage = 2
    Spot = 3
    MultiSpot = 4
    Pattern = 5
    Partial = 6
    Other = 255


class LightSource(ShortEnum):
    Unknown = 0
    Daylight = 1
    Fluorescent = 2
    Tungsten = 3
    Flash = 4
    FineWeather = 9
    CloudyWeather = 10
    Shade = 11
    DaylightFluorescent = 12
    DayWhiteFluorescent = 13
    CoolWhiteFluorescent = 14
    WhiteFluorescent = 15
    StandardLightA = 17
    StandardLightB = 18
    StandardLightC = 19
    D55 = 20
    D65 = 21
    D75 = 22
    D50 = 23
    ISOStudioTungsten = 24
    OtherLightSource = 255


class Flash(ShortFlag):
    """Flash status bits; the value is a bitmask, not a single code."""
    FlashDidNotFire = 0
    FlashFired = 1
    StrobeReturnLightNotDetected = 4
    StrobeReturnLightDetected = 6
    CompulsoryFlashFiring = 8
    CompulsoryFlashSuppression = 16
    AutoMode = 24
    NoFlashFunction = 32
    RedEyeReductionMode = 64


class SensingMethod(ShortEnum):
    NotDefined = 1
    OneChipColorAreaSensor = 2
    TwoChipColorAreaSensor = 3
    ThreeChipColorAreaSensor = 4
    ColorSequentialAreaSensor = 5
    TriLinearSensor = 7
    ColorSequentialLinearSensor = 8


class FileSource(ByteEnum):
    TransparentScanner = 1
    ReflexScanner = 2
    DSC = 3


class SceneType(ByteEnum):
    DirectlyPhotographedImage = 1


class CustomRendered(ShortEnum):
    NormalProcess = 0
    CustomProcess = 1


class ExposureMode(ShortEnum):
    Auto = 0
    Manual = 1
    AutoBracket = 2


class WhiteBalance(ShortEnum):
    Auto = 0
    Manual = 1


class SceneCaptureType(ShortEnum):
    Standard = 0
    Landscape = 1
    Portrait = 2
    NightScene = 3


class GainControl(ShortEnum):
    NoAdjustment = 0
    LowGainUp = 1
    HighGainUp = 2
    LowGainDown = 3
    HighGainDown = 4


class Contrast(ShortEnum):
    Normal = 0
    Soft = 1
    Hard = 2


class Saturation(ShortEnum):
    Normal = 0
    Low = 1
    High = 2


class Sharpness(ShortEnum):
    Normal = 0
    Soft = 1
    Hard = 2


class SubjectDistanceRange(ShortEnum):
    Unknown = 0
    Macro = 1
    CloseView = 2
    DistantView = 3


# ============================================================================
# GPS sub-IFD
# ============================================================================
# Reference codes are the ASCII character of the one-letter value.

class GPSLatitudeRef(ByteEnum):
    North = ord('N')
    South = ord('S')


class GPSLongitudeRef(ByteEnum):
    East = ord('E')
    West = ord('W')


class GPSAltitudeRef(ByteEnum):
    AboveSeaLevel = 0
    BelowSeaLevel = 1


class GPSStatus(ByteEnum):
    MeasurementActive = ord('A')
    MeasurementVoid = ord('V')


class GPSMeasureMode(ByteEnum):
    TwoDimensional = ord('2')
    ThreeDimensional = ord('3')


class GPSSpeedRef(ByteEnum):
    KilometersPerHour = ord('K')
    MilesPerHour = ord('M')
    Knots = ord('N')


class GPSDirectionRef(ByteEnum):
    TrueDirection = ord('T')
    MagneticDirection = ord('M')


class GPSDistanceRef(ByteEnum):
    Kilometers = ord('K')
    Miles = ord('M')
    NauticalMiles = ord('N')


class GPSDifferential(ShortEnum):
    MeasurementWithoutDifferentialCorrection = 0
    MeasurementWithDifferentialCorrection = 1


# ============================================================================
# JFIF / JFXX
# ============================================================================

class JFIFDensityUnit(ByteEnum):
    NoUnits = 0
    DotsPerInch = 1
    DotsPerCm = 2


class JFIFExtension(ByteEnum):
    ThumbnailJPEG = 0x10
    ThumbnailPaletteBitmap = 0x11
    Thumbnail24BitBitmap = 0x13


# Enumerations written as one UNDEFINED byte regardless of width
UNDEFINED_ENUMS = (FileSource, SceneType)

# Enumerations written as a two-byte ASCII string "<code>\0"
ASCII_ENUMS = (
    GPSLatitudeRef,
    GPSLongitudeRef,
    GPSStatus,
    GPSMeasureMode,
    GPSSpeedRef,
    GPSDirectionRef,
    GPSDistanceRef,
)

# Enumerations whose value is a bitmask
BIT_FIELD_ENUMS = (Flash,)
