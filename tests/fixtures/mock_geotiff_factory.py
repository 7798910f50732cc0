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
Mock GeoTIFF Factory for Testing.

This module provides the MockGeoTIFF class, a factory for creating GeoTIFF
files with a controlled internal layout. The raster is first built in memory
with GDAL's MEM driver, then written either as a plain GeoTIFF (strips or
tiles, optional external overviews) or through GDAL's COG driver, which
produces block leaders, trailers and internal overviews.

Example:
    >>> # A valid COG with internal overviews
    >>> mock = MockGeoTIFF(width=1024, height=1024)
    >>> mock.save_as_cog(tmp_path / 'cog.tif', block_size=256)

    >>> # A striped GeoTIFF without overviews
    >>> MockGeoTIFF(width=2048, height=64).save_to_file(tmp_path / 'strips.tif')
"""

import numpy as np
from osgeo import gdal, osr
from pathlib import Path
from typing import List, Optional, Tuple, Union


class MockGeoTIFF:
    """
    Factory for creating test GeoTIFF files.

    Attributes:
        width: Raster width in pixels
        height: Raster height in pixels
        bands: Number of bands
        data_type: GDAL data type constant (e.g., gdal.GDT_Byte)
        crs: Coordinate reference system (EPSG code)
        geo_transform: Affine transformation tuple (6 values)
        compression: Compression algorithm ('NONE', 'DEFLATE', 'LZW', etc.)
        with_mask: Whether to add a per-dataset mask band
        pixel_data: Pixel data (numpy array, bands x height x width)
    """

    def __init__(
        self,
        width: int = 256,
        height: int = 256,
        bands: int = 1,
        data_type: int = gdal.GDT_Byte,
        crs: Optional[str] = 'EPSG:32610',
        geo_transform: Optional[Tuple[float, ...]] = None,
        compression: str = 'NONE',
        with_mask: bool = False,
        pixel_data: Optional[np.ndarray] = None,
        seed: int = 42,
    ):
        self.width = width
        self.height = height
        self.bands = bands
        self.data_type = data_type
        self.crs = crs
        self.compression = compression
        self.with_mask = with_mask
        self.geo_transform = geo_transform or (500000.0, 1.0, 0.0, 4500000.0, 0.0, -1.0)

        if pixel_data is not None:
            self.pixel_data = pixel_data
        else:
            rng = np.random.default_rng(seed)
            self.pixel_data = rng.integers(0, 255, size=(bands, height, width), dtype=np.uint8)

    def to_gdal_dataset(self) -> gdal.Dataset:
        """
        Convert to an in-memory GDAL Dataset (MEM driver).

        Returns:
            gdal.Dataset: In-memory GDAL dataset
        """
        driver = gdal.GetDriverByName('MEM')
        ds = driver.Create('', self.width, self.height, self.bands, self.data_type)
        if ds is None:
            raise RuntimeError("Failed to create in-memory dataset")

        ds.SetGeoTransform(self.geo_transform)
        if self.crs:
            srs = osr.SpatialReference()
            srs.SetFromUserInput(self.crs)
            ds.SetProjection(srs.ExportToWkt())

        for band_idx in range(self.bands):
            ds.GetRasterBand(band_idx + 1).WriteArray(self.pixel_data[band_idx])

        if self.with_mask:
            ds.CreateMaskBand(gdal.GMF_PER_DATASET)
            mask = np.full((self.height, self.width), 255, dtype=np.uint8)
            mask[: self.height // 4, : self.width // 4] = 0
            ds.GetRasterBand(1).GetMaskBand().WriteArray(mask)

        ds.FlushCache()
        return ds

    def save_to_file(self, filepath: Union[str, Path], tiled: bool = False, tile_size: int = 256,
                     overview_levels: Optional[List[int]] = None, external_overviews: bool = False,
                     **creation_options) -> Path:
        """
        Save as a plain GeoTIFF with the GTiff driver.

        Args:
            filepath: Path where to save the GeoTIFF
            tiled: Use tiles instead of strips
            tile_size: Tile dimensions in pixels
            overview_levels: Overview decimation factors to build (e.g., [2, 4])
            external_overviews: Build overviews into a .ovr sidecar instead of the file
            **creation_options: Additional GDAL creation options
        """
        filepath = Path(filepath)
        options = [f'{key}={value}' for key, value in creation_options.items()]
        if self.compression and self.compression != 'NONE':
            options.append(f'COMPRESS={self.compression}')
        if tiled:
            options += ['TILED=YES', f'BLOCKXSIZE={tile_size}', f'BLOCKYSIZE={tile_size}']

        src_ds = self.to_gdal_dataset()
        ds = gdal.GetDriverByName('GTiff').CreateCopy(str(filepath), src_ds, options=options)
        if ds is None:
            raise RuntimeError(f"Failed to create GeoTIFF at {filepath}")
        ds = None

        if overview_levels:
            # Opening read-only makes GDAL write the overviews to a .ovr sidecar
            access = gdal.GA_ReadOnly if external_overviews else gdal.GA_Update
            ds = gdal.Open(str(filepath), access)
            ds.BuildOverviews('NEAREST', overview_levels)
            ds = None
        return filepath

    def save_as_cog(self, filepath: Union[str, Path], block_size: int = 256,
                    overviews: str = 'AUTO', **creation_options) -> Path:
        """
        Save through the GDAL COG driver.

        Args:
            filepath: Path where to save the COG
            block_size: Tile dimensions in pixels
            overviews: COG driver OVERVIEWS option ('AUTO', 'NONE', ...)
            **creation_options: Additional GDAL creation options
        """
        filepath = Path(filepath)
        options = [f'BLOCKSIZE={block_size}', f'OVERVIEWS={overviews}', f'COMPRESS={self.compression}']
        options += [f'{key}={value}' for key, value in creation_options.items()]

        src_ds = self.to_gdal_dataset()
        ds = gdal.GetDriverByName('COG').CreateCopy(str(filepath), src_ds, options=options)
        if ds is None:
            raise RuntimeError(f"Failed to create COG at {filepath}")
        ds = None
        return filepath

    def __repr__(self) -> str:
        return (
            f"MockGeoTIFF(width={self.width}, height={self.height}, "
            f"bands={self.bands}, compression='{self.compression}', with_mask={self.with_mask})"
        )
