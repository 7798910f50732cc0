#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: COG Validator (cogval)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Pytest configuration and shared fixtures for the cogval test suite.

This module provides:
- Shared fixtures for synthetic block files and fake raster bands
- GeoTIFF files written by GDAL (valid COG, striped, external overviews)

Fixtures are organized by scope:
- session: Created once per test session (expensive setup)
- function: Created for each test function (default)
"""

import pytest
from osgeo import gdal
from cogval.utils.data_models import ValidationContext
from tests.fixtures.fake_raster import FakeBand, SyntheticBlockFile
from tests.fixtures.mock_geotiff_factory import MockGeoTIFF


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Make GDAL report failures through return values, as the validator expects."""
    if hasattr(gdal, 'DontUseExceptions'):
        gdal.DontUseExceptions()


# =============================================================================
# Session-scope Fixtures (Created once per test session)
# =============================================================================

@pytest.fixture(scope="session")
def geotiff_dir(tmp_path_factory):
    """Directory holding the GeoTIFF files shared by the whole session."""
    return tmp_path_factory.mktemp("cogval_geotiffs")


@pytest.fixture(scope="session")
def valid_cog_path(geotiff_dir):
    """
    A 1024x1024 COG with 256x256 tiles and internal overviews.

    Returns:
        Path: Path to the COG
    """
    return MockGeoTIFF(width=1024, height=1024, compression='DEFLATE').save_as_cog(
        geotiff_dir / "valid_cog.tif", block_size=256
    )


@pytest.fixture(scope="session")
def masked_cog_path(geotiff_dir):
    """A 1024x1024 COG with a per-dataset mask on the image and its overviews."""
    return MockGeoTIFF(width=1024, height=1024, compression='DEFLATE', with_mask=True).save_as_cog(
        geotiff_dir / "masked_cog.tif", block_size=256
    )


@pytest.fixture(scope="session")
def striped_geotiff_path(geotiff_dir):
    """A 2048x64 striped GeoTIFF without overviews: one strip spans the full width."""
    return MockGeoTIFF(width=2048, height=64).save_to_file(geotiff_dir / "striped.tif")


# =============================================================================
# Function-scope Fixtures (Created for each test)
# =============================================================================

@pytest.fixture
def context(tmp_path):
    """A fresh ValidationContext."""
    return ValidationContext(file_path=str(tmp_path / "blocks.bin"))


@pytest.fixture
def well_formed_band_file(tmp_path):
    """
    A 512x512 band of four 256x256 tiles with valid leaders and trailers.

    Returns:
        Tuple[Path, FakeBand]: The block file and the band describing it
    """
    blocks = SyntheticBlockFile()
    for y in range(2):
        for x in range(2):
            blocks.add_block(x, y, byte_count=100 + 10 * (2 * y + x))
    path = blocks.save(tmp_path / "blocks.bin")
    return path, FakeBand(512, 512, (256, 256), blocks=blocks.blocks)
