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
Pytest configuration and shared fixtures for EXIFTK test suite.

This module provides:
- Pytest configuration (markers, options)
- Shared fixtures for common test data
- Mock data factories

Fixtures are organized by scope:
- session: Created once per test session (expensive setup)
- function: Created for each test function (default)

Example:
    >>> def test_using_fixture(camera_block_le):
    ...     '''Test using the camera_block_le fixture.'''
    ...     assert camera_block_le[:2] == b'II'
"""

import pytest

# pythonpath is configured in pyproject.toml to include project root
from exiftk.utils.bit_converter import ByteOrder
from exiftk.utils.config_loader import config
from tests.fixtures.exif_block_factory import MockExifBlock, build_camera_block


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_assertrepr_compare(op, left, right):
    """
    Show byte strings as hex when a comparison fails.

    Field data is easier to compare as ``12 01 03 00`` than as escaped bytes.
    """
    if isinstance(left, bytes) and isinstance(right, bytes) and op == '==':
        return [
            "Comparing bytes:",
            f"  left:  {left.hex(' ')}",
            f"  right: {right.hex(' ')}",
        ]
    return None


# =============================================================================
# Session-scope Fixtures (Created once per test session)
# =============================================================================

@pytest.fixture(scope="session")
def camera_block_le():
    """
    Little-endian camera block touching every section.

    Returns:
        bytes: EXIF block starting with ``II*\\0``
    """
    return build_camera_block('<').to_bytes()


@pytest.fixture(scope="session")
def camera_block_be():
    """
    Big-endian camera block with the same content as camera_block_le.

    Returns:
        bytes: EXIF block starting with ``MM\\0*``
    """
    return build_camera_block('>').to_bytes()


# =============================================================================
# Function-scope Fixtures (Created for each test)
# =============================================================================

@pytest.fixture(params=[ByteOrder.LITTLE_ENDIAN, ByteOrder.BIG_ENDIAN], ids=['II', 'MM'])
def byte_order(request):
    """Run a test once per byte order."""
    return request.param


@pytest.fixture
def camera_block(byte_order):
    """The camera block in the byte order of the ``byte_order`` fixture."""
    return build_camera_block(byte_order.struct_prefix).to_bytes()


@pytest.fixture
def mock_block(byte_order):
    """An empty MockExifBlock in the byte order of the ``byte_order`` fixture."""
    return MockExifBlock(byte_order=byte_order.struct_prefix)


@pytest.fixture
def restore_config():
    """
    Reload the configuration after a test that changes it.

    Example:
        >>> def test_override(restore_config):
        ...     config.set("decoding.strict", True)
    """
    yield config
    config.reload()
