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
Cloud Optimized GeoTIFF Structural Validation.

Applies the dataset-level COG rules (internal overviews, oversized single
tile, missing overviews) and drives the block layout checks across the main
band, its mask, every overview level and the overview masks.

Functions:
    open_geotiff: Open a file and make sure it belongs to the TIFF family
    evaluate: Run every rule on an open dataset and return the findings
    validate: Library entry point returning (warnings, errors, details)
"""

import logging
from typing import Any, Dict, List, Tuple, Union
from pathlib import Path
from cogval.utils.block_layout import check_band
from cogval.utils.byte_reader import ByteRangeReader
from cogval.utils.config_loader import config
from cogval.utils.data_models import CogValidation, ValidationContext
from cogval.utils.exceptions import InvalidFileError
from cogval.utils.raster_access import RasterBand, RasterDataset, open_dataset

logger = logging.getLogger(__name__)

MAIN_LABEL = "Main resolution image"
EXTERNAL_OVERVIEW_EXTENSION = '.ovr'

ERROR_OVERVIEWS_EXTERNAL = "Overviews found in external .ovr file. They should be internal."
ERROR_TILE_SIZE = "Tile size exceeds the image width."
WARNING_NO_OVERVIEWS = "No overviews found for large image."
ERROR_NOT_GEOTIFF = "The file is not a GeoTIFF"

# GDAL opens COG driver output with GTiff; COG is listed for datasets passed in directly
DEFAULT_TIFF_DRIVERS = ['GTiff', 'COG']


def open_geotiff(path: Union[str, Path]) -> RasterDataset:
    """
    Open a file for validation.

    Raises:
        InvalidFileError: If the file cannot be opened or its driver is not
            one of the configured TIFF-family drivers.
    """
    dataset = open_dataset(str(path))
    try:
        ensure_tiff_family(dataset)
    except InvalidFileError:
        dataset.close()
        raise
    return dataset


def ensure_tiff_family(dataset: RasterDataset) -> None:
    """Raise InvalidFileError unless the dataset was opened by a TIFF-family driver."""
    driver = dataset.driver_short_name()
    if driver not in config.get('validation.tiff_drivers', DEFAULT_TIFF_DRIVERS):
        logger.debug(f"Rejected {dataset.path}: driver {driver} is not a TIFF driver")
        raise InvalidFileError(ERROR_NOT_GEOTIFF)


def check_dataset_rules(dataset: RasterDataset, context: ValidationContext) -> None:
    """Apply the rules that only need dataset and main band structure."""
    for associated_file in dataset.associated_files():
        if associated_file.endswith(EXTERNAL_OVERVIEW_EXTENSION):
            context.add_error(ERROR_OVERVIEWS_EXTERNAL)

    main_band = dataset.band(1)
    threshold = config.get('validation.large_image_threshold', 512)
    if main_band.width > threshold or main_band.height > threshold:
        block_width, _ = main_band.block_size()
        # Only a single full-width block beyond the limit is flagged
        if block_width == main_band.width and block_width > config.get('validation.max_untiled_block_width', 1024):
            context.add_error(ERROR_TILE_SIZE)
        if main_band.overview_count() == 0:
            context.add_warning(WARNING_NO_OVERVIEWS)


def check_band_and_mask(reader: ByteRangeReader, label: str, band: RasterBand,
                        context: ValidationContext, key: str) -> None:
    """Check a band, then its per-dataset mask band when it has one."""
    check_band(reader, label, band, context, key=key)
    if band.has_per_dataset_mask():
        mask_key = 'mask' if key == 'main' else f'mask_{key}'
        check_band(reader, f"Mask band of {label}", band.mask_band(), context, key=mask_key)


def evaluate(dataset: RasterDataset, file_path: str, full_check: bool = True) -> ValidationContext:
    """
    Run every COG rule on an open dataset.

    Args:
        dataset: Open TIFF-family dataset
        file_path: Path of the file whose raw bytes are checked
        full_check: If False, skip the block layout walk

    Returns:
        ValidationContext holding errors and warnings in detection order

    Raises:
        ByteRangeReadError: If the file bytes cannot be read
    """
    context = ValidationContext(file_path=str(file_path))
    check_dataset_rules(dataset, context)
    if not full_check:
        return context

    main_band = dataset.band(1)
    ovr_count = main_band.overview_count()
    with ByteRangeReader(str(file_path)) as reader:
        check_band_and_mask(reader, MAIN_LABEL, main_band, context, key='main')
        for i in range(ovr_count):
            ovr_band = dataset.band(1).overview(i)
            check_band_and_mask(reader, f"Overview {i}", ovr_band, context, key=f'overview_{i}')

    logger.debug(
        f"Validated {file_path}: {len(context.errors)} error(s), {len(context.warnings)} warning(s)"
    )
    return context


def run_validation(source: Union[str, Path, RasterDataset], full_check: bool = True) -> CogValidation:
    """
    Validate a file path or an already opened dataset.

    A dataset opened here is closed before returning; a dataset passed in is
    left open for the caller.
    """
    if isinstance(source, RasterDataset):
        ensure_tiff_family(source)
        context = evaluate(source, source.path, full_check=full_check)
    else:
        with open_geotiff(source) as dataset:
            context = evaluate(dataset, str(source), full_check=full_check)
    return CogValidation.from_context(context)


def validate(source: Union[str, Path, RasterDataset],
             full_check: bool = True) -> Tuple[List[str], List[str], Dict[str, Any]]:
    """
    Check if the passed file is a (Geo)TIFF file with a cloud optimized
    compatible structure.

    Returns:
        Tuple of (warnings, errors, details), where details holds the IFD and
        first block offsets of every checked band.

    Raises:
        InvalidFileError: If the file is not a readable (Geo)TIFF
        ByteRangeReadError: If the file bytes cannot be read
    """
    result = run_validation(source, full_check=full_check)
    return result.warnings, result.errors, result.details

