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
Property Factory.

Chooses and builds the property variant for one directory field.

Dispatch runs in two steps:
    1. PROPERTY_OVERRIDES, keyed by ``(IFD, tag number)``, names the variant of
       every tag whose meaning the wire type cannot express (enumerations,
       dates, versions, GPS values, subject areas, encoded text).
    2. Otherwise FALLBACK_TYPES picks the generic variant of the wire type:
       the scalar form for ``count == 1``, the array form for any other count.

Both tables are built once at import time and exposed read-only.
"""

import struct
from functools import partial
from types import MappingProxyType
from typing import Callable, Mapping, Tuple, Type

from exiftk.utils.bit_converter import SYSTEM_BYTE_ORDER, ByteOrder
from exiftk.utils.exceptions import ExifDecodeError, ExifError, UnknownWireTypeError
from exiftk.utils.exif_enums import (
    ColorSpace,
    Compression,
    Contrast,
    CustomRendered,
    ExposureMode,
    ExposureProgram,
    FileSource,
    Flash,
    GainControl,
    GPSAltitudeRef,
    GPSDifferential,
    GPSDirectionRef,
    GPSDistanceRef,
    GPSLatitudeRef,
    GPSLongitudeRef,
    GPSMeasureMode,
    GPSSpeedRef,
    GPSStatus,
    LightSource,
    MeteringMode,
    Orientation,
    PhotometricInterpretation,
    PlanarConfiguration,
    ResolutionUnit,
    Saturation,
    SceneCaptureType,
    SceneType,
    SensingMethod,
    Sharpness,
    SubjectDistanceRange,
    WhiteBalance,
    YCbCrPositioning,
)
from exiftk.utils.exif_extended_properties import (
    ExifDate,
    ExifDateTime,
    ExifEncodedString,
    ExifEnumProperty,
    ExifPointSubjectArea,
    ExifVersion,
    GPSLatitudeLongitude,
    GPSTimeStamp,
    LensSpecification,
    VersionID,
    WindowsByteString,
    decode_subject_area,
)
from exiftk.utils.exif_properties import (
    DEFAULT_ENCODING,
    ExifAscii,
    ExifByte,
    ExifByteArray,
    ExifDouble,
    ExifDoubleArray,
    ExifFloat,
    ExifFloatArray,
    ExifProperty,
    ExifSByte,
    ExifSByteArray,
    ExifSInt,
    ExifSIntArray,
    ExifSRational,
    ExifSRationalArray,
    ExifSShort,
    ExifSShortArray,
    ExifUInt,
    ExifUIntArray,
    ExifUndefined,
    ExifURational,
    ExifURationalArray,
    ExifUShort,
    ExifUShortArray,
)
from exiftk.utils.ifd_entry import IFDEntry, InterOpType
from exiftk.utils.tag_registry import IFD, get_exif_tag, get_tag_long_name

# (tag, data, byte_order, count, encoding) -> ExifProperty
PropertyConstructor = Callable[[int, bytes, ByteOrder, int, str], ExifProperty]


def _enum(enum_type) -> PropertyConstructor:
    return partial(ExifEnumProperty.decode, enum_type=enum_type)


def _subject_area(tag, data, byte_order, count, encoding):
    return decode_subject_area(tag, data, byte_order, count)


def _interop_index(tag, data, byte_order, count, encoding):
    return ExifAscii.decode(tag, data, byte_order, count, 'ascii')


PROPERTY_OVERRIDES: Mapping[Tuple[IFD, int], PropertyConstructor] = MappingProxyType({
    # IFD0
    (IFD.Zeroth, 0x103): _enum(Compression),
    (IFD.Zeroth, 0x106): _enum(PhotometricInterpretation),
    (IFD.Zeroth, 0x112): _enum(Orientation),
    (IFD.Zeroth, 0x11C): _enum(PlanarConfiguration),
    (IFD.Zeroth, 0x213): _enum(YCbCrPositioning),
    (IFD.Zeroth, 0x128): _enum(ResolutionUnit),
    (IFD.Zeroth, 0x132): ExifDateTime.decode,
    (IFD.Zeroth, 0x9C9B): WindowsByteString.decode,
    (IFD.Zeroth, 0x9C9C): WindowsByteString.decode,
    (IFD.Zeroth, 0x9C9D): WindowsByteString.decode,
    (IFD.Zeroth, 0x9C9E): WindowsByteString.decode,
    (IFD.Zeroth, 0x9C9F): WindowsByteString.decode,

    # EXIF sub-IFD
    (IFD.EXIF, 0x9000): ExifVersion.decode,
    (IFD.EXIF, 0xA000): ExifVersion.decode,
    (IFD.EXIF, 0xA001): _enum(ColorSpace),
    (IFD.EXIF, 0x9286): ExifEncodedString.decode,
    (IFD.EXIF, 0x9003): ExifDateTime.decode,
    (IFD.EXIF, 0x9004): ExifDateTime.decode,
    (IFD.EXIF, 0x8822): _enum(ExposureProgram),
    (IFD.EXIF, 0x9207): _enum(MeteringMode),
    (IFD.EXIF, 0x9208): _enum(LightSource),
    (IFD.EXIF, 0x9209): _enum(Flash),
    (IFD.EXIF, 0x9214): _subject_area,
    (IFD.EXIF, 0xA210): _enum(ResolutionUnit),
    (IFD.EXIF, 0xA214): ExifPointSubjectArea.decode,
    (IFD.EXIF, 0xA217): _enum(SensingMethod),
    (IFD.EXIF, 0xA300): _enum(FileSource),
    (IFD.EXIF, 0xA301): _enum(SceneType),
    (IFD.EXIF, 0xA401): _enum(CustomRendered),
    (IFD.EXIF, 0xA402): _enum(ExposureMode),
    (IFD.EXIF, 0xA403): _enum(WhiteBalance),
    (IFD.EXIF, 0xA406): _enum(SceneCaptureType),
    (IFD.EXIF, 0xA407): _enum(GainControl),
    (IFD.EXIF, 0xA408): _enum(Contrast),
    (IFD.EXIF, 0xA409): _enum(Saturation),
    (IFD.EXIF, 0xA40A): _enum(Sharpness),
    (IFD.EXIF, 0xA40C): _enum(SubjectDistanceRange),
    (IFD.EXIF, 0xA432): LensSpecification.decode,

    # GPS sub-IFD
    (IFD.GPS, 0): VersionID.decode,
    (IFD.GPS, 1): _enum(GPSLatitudeRef),
    (IFD.GPS, 2): GPSLatitudeLongitude.decode,
    (IFD.GPS, 3): _enum(GPSLongitudeRef),
    (IFD.GPS, 4): GPSLatitudeLongitude.decode,
    (IFD.GPS, 5): _enum(GPSAltitudeRef),
    (IFD.GPS, 7): GPSTimeStamp.decode,
    (IFD.GPS, 9): _enum(GPSStatus),
    (IFD.GPS, 10): _enum(GPSMeasureMode),
    (IFD.GPS, 12): _enum(GPSSpeedRef),
    (IFD.GPS, 14): _enum(GPSDirectionRef),
    (IFD.GPS, 16): _enum(GPSDirectionRef),
    (IFD.GPS, 19): _enum(GPSLatitudeRef),
    (IFD.GPS, 20): GPSLatitudeLongitude.decode,
    (IFD.GPS, 21): _enum(GPSLongitudeRef),
    (IFD.GPS, 22): GPSLatitudeLongitude.decode,
    (IFD.GPS, 23): _enum(GPSDirectionRef),
    (IFD.GPS, 25): _enum(GPSDistanceRef),
    (IFD.GPS, 29): ExifDate.decode,
    (IFD.GPS, 30): _enum(GPSDifferential),

    # Interoperability sub-IFD
    (IFD.Interop, 1): _interop_index,
    (IFD.Interop, 2): ExifVersion.decode,

    # IFD1
    (IFD.First, 0x103): _enum(Compression),
    (IFD.First, 0x106): _enum(PhotometricInterpretation),
    (IFD.First, 0x112): _enum(Orientation),
    (IFD.First, 0x11C): _enum(PlanarConfiguration),
    (IFD.First, 0x213): _enum(YCbCrPositioning),
    (IFD.First, 0x128): _enum(ResolutionUnit),
    (IFD.First, 0x132): ExifDateTime.decode,
})

# Wire type -> (variant for count == 1, variant for any other count)
FALLBACK_TYPES: Mapping[int, Tuple[Type[ExifProperty], Type[ExifProperty]]] = MappingProxyType({
    InterOpType.BYTE: (ExifByte, ExifByteArray),
    InterOpType.ASCII: (ExifAscii, ExifAscii),
    InterOpType.SHORT: (ExifUShort, ExifUShortArray),
    InterOpType.LONG: (ExifUInt, ExifUIntArray),
    InterOpType.RATIONAL: (ExifURational, ExifURationalArray),
    InterOpType.SBYTE: (ExifSByte, ExifSByteArray),
    InterOpType.UNDEFINED: (ExifUndefined, ExifUndefined),
    InterOpType.SSHORT: (ExifSShort, ExifSShortArray),
    InterOpType.SLONG: (ExifSInt, ExifSIntArray),
    InterOpType.SRATIONAL: (ExifSRational, ExifSRationalArray),
    InterOpType.FLOAT: (ExifFloat, ExifFloatArray),
    InterOpType.DOUBLE: (ExifDouble, ExifDoubleArray),
})


def get_property(ifd: IFD, tag_number: int, wire_type: int, count: int, data: bytes,
                 byte_order: ByteOrder, encoding: str = DEFAULT_ENCODING) -> ExifProperty:
    """
    Build the property for one directory field.

    Args:
        ifd: Section holding the field.
        tag_number: 16-bit tag number within the section.
        wire_type: TIFF field type (1..12).
        count: Number of elements.
        data: Field value bytes.
        byte_order: Byte order of ``data``.
        encoding: Text encoding for ASCII fields.

    Returns:
        The typed property.

    Raises:
        UnknownWireTypeError: If no override applies and ``wire_type`` is
            not 1..12.
        ExifDecodeError: If ``data`` cannot be decoded as the chosen variant.
    """
    tag = get_exif_tag(ifd, tag_number)
    constructor = PROPERTY_OVERRIDES.get((ifd, tag_number))
    if constructor is None:
        try:
            scalar_type, array_type = FALLBACK_TYPES[wire_type]
        except KeyError:
            raise UnknownWireTypeError(f"Unknown property type {wire_type} for {get_tag_long_name(tag)}") from None
        constructor = (scalar_type if count == 1 else array_type).decode

    try:
        return constructor(tag, data, byte_order, count, encoding)
    except ExifError:
        raise
    except (ValueError, OverflowError, struct.error) as e:
        raise ExifDecodeError(f"Cannot decode {get_tag_long_name(tag)}: {e}") from e


def property_from_entry(entry: IFDEntry, ifd: IFD, byte_order: ByteOrder = SYSTEM_BYTE_ORDER,
                        encoding: str = DEFAULT_ENCODING) -> ExifProperty:
    """Build the property for a decoded IFDEntry (value bytes in ``byte_order``)."""
    return get_property(ifd, entry.tag, entry.wire_type, entry.count, entry.data, byte_order, encoding)
