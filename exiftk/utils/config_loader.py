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
Configuration Management for the EXIF ToolKit.

This module provides a singleton configuration manager (`Config`) that loads
settings from `exiftk/config.toml` once and serves them to the CLI tools:
the text encoding used for ASCII fields, whether a bad field aborts a read,
the byte order used when writing, and logging defaults.

Contents:
    DEFAULT_CONFIG: Built-in values used when a key is missing from config.toml
    Config: Singleton holding the merged settings
    config: The shared Config instance
"""
import copy
import logging
import sys
from pathlib import Path
from typing import Any, Dict

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "decoding": {
        "fallback_encoding": "utf-8",
        "strict": False,
    },
    "encoding": {
        "byte_order": "little",
    },
    "logging": {
        "level": "INFO",
        "file": "",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """
    Process-wide settings for the CLI tools.

    Library modules never read this; every codec function takes its options
    as arguments.
    """
    _instance = None
    _config: Dict[str, Any] = {}
    config_path: Path = Path(__file__).parent.parent / "config.toml"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        """Layer config.toml (when present and readable) over DEFAULT_CONFIG."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        if not self.config_path.is_file():
            logger.debug(f"No {self.config_path.name}; using built-in defaults")
            return
        try:
            with open(self.config_path, "rb") as f:
                self._config = _merge(self._config, tomllib.load(f))
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load {self.config_path.name}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key such as ``"decoding.strict"``.

        Returns ``default`` when any part of the path is missing.

        Example:
            >>> config.get("decoding.fallback_encoding")
            'utf-8'
            >>> config.get("encoding.byte_order")
            'little'
        """
        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_section(self, section: str) -> Dict[str, Any]:
        """Return one table of the configuration (``{}`` if absent)."""
        return self._config.get(section, {})

    def set(self, key: str, value: Any):
        """Override a dotted key in memory; config.toml is left untouched."""
        *parents, leaf = key.split(".")
        node = self._config
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value

    def reload(self):
        """Discard in-memory overrides and read config.toml again."""
        self._load_config()


config = Config()
