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
Tag Identity Registry.

Maps a directory section plus a 16-bit tag number onto one flat integer
identifier and back. The identifier space is split into bands of 100000, one
per section, so ``0x103`` in IFD0 (Compression) and ``0x103`` in IFD1
(ThumbnailCompression) get different identifiers:

    section    = identifier // 100000 * 100000
    tag number = identifier - section

The tables are plain enums built at import time and never modified.
"""

from enum import IntEnum, unique
from typing import Iterator, Optional, Union

from exiftk.utils.exceptions import InvalidTagIdentifierError

BAND_WIDTH = 100000
MAX_TAG_NUMBER = 0xFFFF
UNKNOWN_TAG_NAME = "Unknown"


@unique
class IFD(IntEnum):
    """Directory sections, each the base of its identifier band."""
    Zeroth = 100000
    EXIF = 200000
    GPS = 300000
    Interop = 400000
    First = 500000
    JFIF = 700000
    JFXX = 800000


@unique
class ExifTag(IntEnum):
    """Flat identifiers of every named tag."""

    # IFD0 (primary image)
    ImageWidth = IFD.Zeroth + 0x100
    ImageLength = IFD.Zeroth + 0x101
    BitsPerSample = IFD.Zeroth + 0x102
    Compression = IFD.Zeroth + 0x103
    PhotometricInterpretation = IFD.Zeroth + 0x106
    ImageDescription = IFD.Zeroth + 0x10E
    Make = IFD.Zeroth + 0x10F
    Model = IFD.Zeroth + 0x110
    StripOffsets = IFD.Zeroth + 0x111
    Orientation = IFD.Zeroth + 0x112
    SamplesPerPixel = IFD.Zeroth + 0x115
    RowsPerStrip = IFD.Zeroth + 0x116
    StripByteCounts = IFD.Zeroth + 0x117
    XResolution = IFD.Zeroth + 0x11A
    YResolution = IFD.Zeroth + 0x11B
    PlanarConfiguration = IFD.Zeroth + 0x11C
    ResolutionUnit = IFD.Zeroth + 0x128
    TransferFunction = IFD.Zeroth + 0x12D
    Software = IFD.Zeroth + 0x131
    DateTime = IFD.Zeroth + 0x132
    Artist = IFD.Zeroth + 0x13B
    WhitePoint = IFD.Zeroth + 0x13E
    PrimaryChromaticities = IFD.Zeroth + 0x13F
    JPEGInterchangeFormat = IFD.Zeroth + 0x201
    JPEGInterchangeFormatLength = IFD.Zeroth + 0x202
    YCbCrCoefficients = IFD.Zeroth + 0x211
    YCbCrSubSampling = IFD.Zeroth + 0x212
    YCbCrPositioning = IFD.Zeroth + 0x213
    ReferenceBlackWhite = IFD.Zeroth + 0x214
    Rating = IFD.Zeroth + 0x4746
    RatingPercent = IFD.Zeroth + 0x4749
    Copyright = IFD.Zeroth + 0x8298
    EXIFIFDPointer = IFD.Zeroth + 0x8769
    GPSIFDPointer = IFD.Zeroth + 0x8825
    WindowsTitle = IFD.Zeroth + 0x9C9B
    WindowsComment = IFD.Zeroth + 0x9C9C
    WindowsAuthor = IFD.Zeroth + 0x9C9D
    WindowsKeywords = IFD.Zeroth + 0x9C9E
    WindowsSubject = IFD.Zeroth + 0x9C9F

    # EXIF sub-IFD
    ExposureTime = IFD.EXIF + 0x829A
    FNumber = IFD.EXIF + 0x829D
    ExposureProgram = IFD.EXIF + 0x8822
    SpectralSensitivity = IFD.EXIF + 0x8824
    ISOSpeedRatings = IFD.EXIF + 0x8827
    OECF = IFD.EXIF + 0x8828
    SensitivityType = IFD.EXIF + 0x8830
    StandardOutputSensitivity = IFD.EXIF + 0x8831
    RecommendedExposureIndex = IFD.EXIF + 0x8832
    ISOSpeed = IFD.EXIF + 0x8833
    ISOSpeedLatitudeyyy = IFD.EXIF + 0x8834
    ISOSpeedLatitudezzz = IFD.EXIF + 0x8835
    ExifVersion = IFD.EXIF + 0x9000
    DateTimeOriginal = IFD.EXIF + 0x9003
    DateTimeDigitized = IFD.EXIF + 0x9004
    ComponentsConfiguration = IFD.EXIF + 0x9101
    CompressedBitsPerPixel = IFD.EXIF + 0x9102
    ShutterSpeedValue = IFD.EXIF + 0x9201
    ApertureValue = IFD.EXIF + 0x9202
    BrightnessValue = IFD.EXIF + 0x9203
    ExposureBiasValue = IFD.EXIF + 0x9204
    MaxApertureValue = IFD.EXIF + 0x9205
    SubjectDistance = IFD.EXIF + 0x9206
    MeteringMode = IFD.EXIF + 0x9207
    LightSource = IFD.EXIF + 0x9208
    Flash = IFD.EXIF + 0x9209
    FocalLength = IFD.EXIF + 0x920A
    SubjectArea = IFD.EXIF + 0x9214
    MakerNote = IFD.EXIF + 0x927C
    UserComment = IFD.EXIF + 0x9286
    SubSecTime = IFD.EXIF + 0x9290
    SubSecTimeOriginal = IFD.EXIF + 0x9291
    SubSecTimeDigitized = IFD.EXIF + 0x9292
    FlashpixVersion = IFD.EXIF + 0xA000
    ColorSpace = IFD.EXIF + 0xA001
    PixelXDimension = IFD.EXIF + 0xA002
    PixelYDimension = IFD.EXIF + 0xA003
    RelatedSoundFile = IFD.EXIF + 0xA004
    InteroperabilityIFDPointer = IFD.EXIF + 0xA005
    FlashEnergy = IFD.EXIF + 0xA20B
    SpatialFrequencyResponse = IFD.EXIF + 0xA20C
    FocalPlaneXResolution = IFD.EXIF + 0xA20E
    FocalPlaneYResolution = IFD.EXIF + 0xA20F
    FocalPlaneResolutionUnit = IFD.EXIF + 0xA210
    SubjectLocation = IFD.EXIF + 0xA214
    ExposureIndex = IFD.EXIF + 0xA215
    SensingMethod = IFD.EXIF + 0xA217
    FileSource = IFD.EXIF + 0xA300
    SceneType = IFD.EXIF + 0xA301
    CFAPattern = IFD.EXIF + 0xA302
    CustomRendered = IFD.EXIF + 0xA401
    ExposureMode = IFD.EXIF + 0xA402
    WhiteBalance = IFD.EXIF + 0xA403
    DigitalZoomRatio = IFD.EXIF + 0xA404
    FocalLengthIn35mmFilm = IFD.EXIF + 0xA405
    SceneCaptureType = IFD.EXIF + 0xA406
    GainControl = IFD.EXIF + 0xA407
    Contrast = IFD.EXIF + 0xA408
    Saturation = IFD.EXIF + 0xA409
    Sharpness = IFD.EXIF + 0xA40A
    DeviceSettingDescription = IFD.EXIF + 0xA40B
    SubjectDistanceRange = IFD.EXIF + 0xA40C
    ImageUniqueID = IFD.EXIF + 0xA420
    CameraOwnerName = IFD.EXIF + 0xA430
    BodySerialNumber = IFD.EXIF + 0xA431
    LensSpecification = IFD.EXIF + 0xA432
    LensMake = IFD.EXIF + 0xA433
    LensModel = IFD.EXIF + 0xA434
    LensSerialNumber = IFD.EXIF + 0xA435

    # GPS sub-IFD
    GPSVersionID = IFD.GPS + 0x00
    GPSLatitudeRef = IFD.GPS + 0x01
    GPSLatitude = IFD.GPS + 0x02
    GPSLongitudeRef = IFD.GPS + 0x03
    GPSLongitude = IFD.GPS + 0x04
    GPSAltitudeRef = IFD.GPS + 0x05
    GPSAltitude = IFD.GPS + 0x06
    GPSTimeStamp = IFD.GPS + 0x07
    GPSSatellites = IFD.GPS + 0x08
    GPSStatus = IFD.GPS + 0x09
    GPSMeasureMode = IFD.GPS + 0x0A
    GPSDOP = IFD.GPS + 0x0B
    GPSSpeedRef = IFD.GPS + 0x0C
    GPSSpeed = IFD.GPS + 0x0D
    GPSTrackRef = IFD.GPS + 0x0E
    GPSTrack = IFD.GPS + 0x0F
    GPSImgDirectionRef = IFD.GPS + 0x10
    GPSImgDirection = IFD.GPS + 0x11
    GPSMapDatum = IFD.GPS + 0x12
    GPSDestLatitudeRef = IFD.GPS + 0x13
    GPSDestLatitude = IFD.GPS + 0x14
    GPSDestLongitudeRef = IFD.GPS + 0x15
    GPSDestLongitude = IFD.GPS + 0x16
    GPSDestBearingRef = IFD.GPS + 0x17
    GPSDestBearing = IFD.GPS + 0x18
    GPSDestDistanceRef = IFD.GPS + 0x19
    GPSDestDistance = IFD.GPS + 0x1A
    GPSProcessingMethod = IFD.GPS + 0x1B
    GPSAreaInformation = IFD.GPS + 0x1C
    GPSDateStamp = IFD.GPS + 0x1D
    GPSDifferential = IFD.GPS + 0x1E
    GPSHPositioningError = IFD.GPS + 0x1F

    # Interoperability sub-IFD
    InteroperabilityIndex = IFD.Interop + 0x0001
    InteroperabilityVersion = IFD.Interop + 0x0002
    RelatedImageFileFormat = IFD.Interop + 0x1000
    RelatedImageWidth = IFD.Interop + 0x1001
    RelatedImageHeight = IFD.Interop + 0x1002

    # IFD1 (thumbnail)
    ThumbnailImageWidth = IFD.First + 0x100
    ThumbnailImageLength = IFD.First + 0x101
    ThumbnailBitsPerSample = IFD.First + 0x102
    ThumbnailCompression = IFD.First + 0x103
    ThumbnailPhotometricInterpretation = IFD.First + 0x106
    ThumbnailImageDescription = IFD.First + 0x10E
    ThumbnailMake = IFD.First + 0x10F
    ThumbnailModel = IFD.First + 0x110
    ThumbnailStripOffsets = IFD.First + 0x111
    ThumbnailOrientation = IFD.First + 0x112
    ThumbnailSamplesPerPixel = IFD.First + 0x115
    ThumbnailRowsPerStrip = IFD.First + 0x116
    ThumbnailStripByteCounts = IFD.First + 0x117
    ThumbnailXResolution = IFD.First + 0x11A
    ThumbnailYResolution = IFD.First + 0x11B
    ThumbnailPlanarConfiguration = IFD.First + 0x11C
    ThumbnailResolutionUnit = IFD.First + 0x128
    ThumbnailTransferFunction = IFD.First + 0x12D
    ThumbnailSoftware = IFD.First + 0x131
    ThumbnailDateTime = IFD.First + 0x132
    ThumbnailArtist = IFD.First + 0x13B
    ThumbnailWhitePoint = IFD.First + 0x13E
    ThumbnailPrimaryChromaticities = IFD.First + 0x13F
    ThumbnailJPEGInterchangeFormat = IFD.First + 0x201
    ThumbnailJPEGInterchangeFormatLength = IFD.First + 0x202
    ThumbnailYCbCrCoefficients = IFD.First + 0x211
    ThumbnailYCbCrSubSampling = IFD.First + 0x212
    ThumbnailYCbCrPositioning = IFD.First + 0x213
    ThumbnailReferenceBlackWhite = IFD.First + 0x214
    ThumbnailCopyright = IFD.First + 0x8298

    # JFIF APP0 header fields
    JFIFVersion = IFD.JFIF + 1
    JFIFUnits = IFD.JFIF + 2
    XDensity = IFD.JFIF + 3
    YDensity = IFD.JFIF + 4
    JFIFXThumbnail = IFD.JFIF + 5
    JFIFYThumbnail = IFD.JFIF + 6
    JFIFThumbnail = IFD.JFIF + 7

    # JFXX APP0 extension fields
    JFXXExtensionCode = IFD.JFXX + 1
    JFXXXThumbnail = IFD.JFXX + 2
    JFXXYThumbnail = IFD.JFXX + 3
    JFXXPalette = IFD.JFXX + 4
    JFXXThumbnail = IFD.JFXX + 5


TagLike = Union[ExifTag, int]


def get_exif_tag(ifd: IFD, tag_number: int) -> TagLike:
    """
    Return the flat identifier of a tag number within a section.

    The result is an ExifTag member when the tag is registered and a plain int
    otherwise; unregistered tags are valid, just unnamed.

    Raises:
        InvalidTagIdentifierError: If ``tag_number`` is not a 16-bit value.
    """
    if not 0 <= tag_number <= MAX_TAG_NUMBER:
        raise InvalidTagIdentifierError(f"Tag number {tag_number} is not a 16-bit value")
    try:
        identifier = IFD(ifd) + tag_number
    except ValueError:
        raise InvalidTagIdentifierError(f"{ifd} is not a section band") from None
    try:
        return ExifTag(identifier)
    except ValueError:
        return identifier


def get_tag_ifd(tag: int) -> IFD:
    """
    Return the section of a flat identifier.

    Raises:
        InvalidTagIdentifierError: If the identifier lies outside every band.
    """
    section = int(tag) // BAND_WIDTH * BAND_WIDTH
    try:
        ifd = IFD(section)
    except ValueError:
        raise InvalidTagIdentifierError(f"Tag identifier {int(tag)} lies outside every section band") from None
    if int(tag) - section > MAX_TAG_NUMBER:
        raise InvalidTagIdentifierError(f"Tag identifier {int(tag)} has no 16-bit tag number")
    return ifd


def get_tag_id(tag: int) -> int:
    """Return the 16-bit tag number of a flat identifier."""
    return int(tag) - get_tag_ifd(tag)


def get_tag_name(tag: int) -> str:
    """Return the registered name of a flat identifier, or ``"Unknown"``."""
    try:
        return ExifTag(tag).name
    except ValueError:
        return UNKNOWN_TAG_NAME


def get_tag_long_name(tag: int) -> str:
    """
    Return ``"<section>: <name> (<tag number>)"`` for a flat identifier.

    Example:
        >>> get_tag_long_name(ExifTag.Orientation)
        'Zeroth: Orientation (274)'
    """
    return f"{get_tag_ifd(tag).name}: {get_tag_name(tag)} ({get_tag_id(tag)})"


def iter_tags(ifd: Optional[IFD] = None) -> Iterator[ExifTag]:
    """Yield registered tags in identifier order, optionally limited to one section."""
    for tag in sorted(ExifTag):
        if ifd is None or get_tag_ifd(tag) == ifd:
            yield tag
