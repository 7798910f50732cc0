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
Raster Access Facade.

The validator never parses the TIFF container itself. It reads dataset and
band structure through the small interface defined here, which is implemented
on top of GDAL. Tests supply lightweight in-memory implementations of the
same abstract classes.

Classes:
    RasterBand: Abstract band (main band, overview level or mask band)
    RasterDataset: Abstract opened raster dataset
    GdalRasterBand: RasterBand backed by an osgeo.gdal.Band
    GdalRasterDataset: RasterDataset backed by an osgeo.gdal.Dataset

Functions:
    open_dataset: Open a raster file read-only with GDAL
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple
from osgeo import gdal
from cogval.utils.exceptions import InvalidFileError

logger = logging.getLogger(__name__)

TIFF_DOMAIN = 'TIFF'


def block_offset_key(x: int, y: int) -> str:
    return f'BLOCK_OFFSET_{x}_{y}'


def block_size_key(x: int, y: int) -> str:
    return f'BLOCK_SIZE_{x}_{y}'


def parse_block_item(value: Optional[str]) -> int:
    """
    Parse a block metadata item as a 64-bit integer.

    Absent items describe sparse (unwritten) blocks and are reported as 0.
    """
    if value is None or value == '':
        return 0
    return int(value)


class RasterBand(ABC):
    """One band of a dataset, one overview level, or a mask band."""

    @property
    @abstractmethod
    def width(self) -> int:
        pass

    @property
    @abstractmethod
    def height(self) -> int:
        pass

    @abstractmethod
    def block_size(self) -> Tuple[int, int]:
        """Return the (width, height) of the band's tiles or strips."""
        pass

    @abstractmethod
    def overview_count(self) -> int:
        pass

    @abstractmethod
    def overview(self, index: int) -> 'RasterBand':
        pass

    @abstractmethod
    def has_per_dataset_mask(self) -> bool:
        pass

    @abstractmethod
    def mask_band(self) -> 'RasterBand':
        """Return the per-dataset mask band. Only valid when has_per_dataset_mask() is True."""
        pass

    @abstractmethod
    def block_metadata(self, x: int, y: int, domain: str = TIFF_DOMAIN) -> Dict[str, Optional[str]]:
        """
        Return the raw block metadata of block (x, y).

        Returns:
            Dictionary with the 'BLOCK_OFFSET_x_y' and 'BLOCK_SIZE_x_y' items,
            either of which may be None.
        """
        pass

    def ifd_offset(self) -> Optional[int]:
        return None

    def block_location(self, x: int, y: int) -> Tuple[int, int]:
        """Return (file offset, byte count) of block (x, y), 0 when not recorded."""
        items = self.block_metadata(x, y)
        return (
            parse_block_item(items.get(block_offset_key(x, y))),
            parse_block_item(items.get(block_size_key(x, y))),
        )


class RasterDataset(ABC):
    """An opened raster dataset. Usable as a context manager."""

    @abstractmethod
    def driver_short_name(self) -> str:
        pass

    @abstractmethod
    def associated_files(self) -> List[str]:
        """Return every file of the dataset, the opened file included."""
        pass

    @abstractmethod
    def band(self, index: int) -> RasterBand:
        """Return the band of the given 1-based index."""
        pass

    @property
    @abstractmethod
    def path(self) -> str:
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class GdalRasterBand(RasterBand):
    """RasterBand implementation wrapping a GDAL band."""

    def __init__(self, band: gdal.Band):
        self._band = band

    @property
    def width(self) -> int:
        return self._band.XSize

    @property
    def height(self) -> int:
        return self._band.YSize

    def block_size(self) -> Tuple[int, int]:
        block_x, block_y = self._band.GetBlockSize()
        return block_x, block_y

    def overview_count(self) -> int:
        return self._band.GetOverviewCount()

    def overview(self, index: int) -> 'GdalRasterBand':
        return GdalRasterBand(self._band.GetOverview(index))

    def has_per_dataset_mask(self) -> bool:
        return self._band.GetMaskFlags() == gdal.GMF_PER_DATASET

    def mask_band(self) -> 'GdalRasterBand':
        return GdalRasterBand(self._band.GetMaskBand())

    def block_metadata(self, x: int, y: int, domain: str = TIFF_DOMAIN) -> Dict[str, Optional[str]]:
        offset_key = block_offset_key(x, y)
        size_key = block_size_key(x, y)
        return {
            offset_key: self._band.GetMetadataItem(offset_key, domain),
            size_key: self._band.GetMetadataItem(size_key, domain),
        }

    def ifd_offset(self) -> Optional[int]:
        value = self._band.GetMetadataItem('IFD_OFFSET', TIFF_DOMAIN)
        return int(value) if value else None


class GdalRasterDataset(RasterDataset):
    """RasterDataset implementation wrapping a GDAL dataset."""

    def __init__(self, ds: gdal.Dataset, path: Optional[str] = None):
        self._ds = ds
        self._path = path or ds.GetDescription()

    @property
    def path(self) -> str:
        return self._path

    @property
    def gdal_ds(self) -> Optional[gdal.Dataset]:
        return self._ds

    def driver_short_name(self) -> str:
        return self._ds.GetDriver().ShortName

    def associated_files(self) -> List[str]:
        return list(self._ds.GetFileList() or [])

    def band(self, index: int) -> GdalRasterBand:
        return GdalRasterBand(self._ds.GetRasterBand(index))

    def close(self) -> None:
        # Dropping the last reference closes the GDAL dataset
        self._ds = None


def open_dataset(path: str) -> GdalRasterDataset:
    """
    Open a raster file read-only.

    Args:
        path: Local path or GDAL virtual path (/vsimem/, /vsicurl/, ...)

    Returns:
        GdalRasterDataset wrapping the opened dataset

    Raises:
        InvalidFileError: If GDAL cannot open the file
    """
    gdal.PushErrorHandler('CPLQuietErrorHandler')
    try:
        ds = gdal.Open(str(path), gdal.GA_ReadOnly)
    except RuntimeError as e:
        raise InvalidFileError(f"Invalid file: {e}") from e
    finally:
        gdal.PopErrorHandler()

    if ds is None:
        raise InvalidFileError(f"Invalid file: {gdal.GetLastErrorMsg()}")
    logger.debug(f"Opened {path} with driver {ds.GetDriver().ShortName}")
    return GdalRasterDataset(ds, str(path))
