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
Test fixtures and mock data factories for cogval tests.

This package contains:
- MockGeoTIFF: Factory for writing GeoTIFF and COG files with GDAL
- FakeBand, FakeDataset: In-memory raster facade implementations
- SyntheticBlockFile: Writer for files with COG block leaders and trailers
"""

from tests.fixtures.fake_raster import FakeBand, FakeDataset, SyntheticBlockFile
from tests.fixtures.mock_geotiff_factory import MockGeoTIFF

__all__ = ['FakeBand', 'FakeDataset', 'MockGeoTIFF', 'SyntheticBlockFile']
