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
Dataclass-based Argument Models for EXIFTK Tools.

This module defines strongly-typed dataclasses for parsing and validating the
command-line arguments for each tool (`read`, `rewrite`, `tags`). It uses
`__post_init__` for validation and for filling defaults from config.toml, so
the tools receive clean and validated inputs.

Classes:
    BaseArguments: A base dataclass for common script arguments.
    ReadArguments: Arguments for the read_metadata tool.
    RewriteArguments: Arguments for the rewrite_exif tool.
    TagsArguments: Arguments for the list_tags tool.
"""
import codecs
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from exiftk.utils.bit_converter import ByteOrder
from exiftk.utils.config_loader import config
from exiftk.utils.tag_registry import IFD

logger = logging.getLogger(__name__)

@dataclass
class BaseArguments:
    """A base dataclass for common script arguments."""
    input_path: Optional[Path] = None
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Coerce path-like arguments to Path objects."""
        if self.input_path and isinstance(self.input_path, str):
            self.input_path = Path(self.input_path)
        if self.log_file and isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

    def handle_error(self, message: str):
        """Logs an error and raises ValueError."""
        logger.error(message)
        raise ValueError(message)

@dataclass
class ReadArguments(BaseArguments):
    """Arguments for the read_metadata tool."""
    raw: bool = False
    encoding: Optional[str] = None
    strict: Optional[bool] = None

    def __post_init__(self):
        """Validation for read_metadata arguments."""
        super().__post_init__()
        if self.encoding is None:
            self.encoding = config.get("decoding.fallback_encoding", "utf-8")
        if self.strict is None:
            self.strict = bool(config.get("decoding.strict", False))
        try:
            self._validate_read()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_read(self):
        """Perform validation checks for read_metadata arguments."""
        if self.input_path is None:
            raise ValueError("An input file is required.")
        if not self.input_path.exists():
            raise ValueError(f"Input file not found: {self.input_path}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown text encoding: {self.encoding}") from None

@dataclass
class RewriteArguments(ReadArguments):
    """Arguments for the rewrite_exif tool."""
    output_path: Optional[Path] = None
    byte_order: Optional[str] = None

    def __post_init__(self):
        """Validation for rewrite_exif arguments."""
        if self.output_path and isinstance(self.output_path, str):
            self.output_path = Path(self.output_path)
        if self.byte_order is None:
            self.byte_order = config.get("encoding.byte_order", "little")
        self.raw = True
        super().__post_init__()
        try:
            self._validate_rewrite()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_rewrite(self):
        """Perform validation checks for rewrite_exif arguments."""
        if self.output_path is None:
            raise ValueError("An output file is required.")
        if self.output_path.resolve() == self.input_path.resolve():
            raise ValueError("Output file must differ from the input file.")
        ByteOrder.from_name(self.byte_order)

@dataclass
class TagsArguments(BaseArguments):
    """Arguments for the list_tags tool."""
    section: Optional[str] = None

    def __post_init__(self):
        """Validation for list_tags arguments."""
        super().__post_init__()
        if self.section is not None:
            names = {ifd.name.lower(): ifd.name for ifd in IFD}
            if self.section.lower() not in names:
                self.handle_error(f"Unknown section '{self.section}'. Choose from: {', '.join(ifd.name for ifd in IFD)}")
            self.section = names[self.section.lower()]
