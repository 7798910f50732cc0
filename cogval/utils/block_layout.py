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
Block Layout Checker.

Walks the tile (or strip) grid of one band in row-major order and checks,
for every written block:

- Ordering: block offsets never decrease, so a client can fetch the blocks
  it needs with one contiguous range request.
- Leader: the 4 bytes before the block hold its byte count as a
  little-endian uint32, so a client learns the block size without a
  second round trip.
- Trailer: the last 4 bytes of the block are repeated right after it,
  proving the block extent was not truncated or overwritten.

Blocks without a recorded offset are sparse and are not checked.
"""

import logging
from typing import Iterator, Tuple
from cogval.utils.byte_reader import ByteRangeReader
from cogval.utils.data_models import BandLayout, ValidationContext
from cogval.utils.raster_access import RasterBand

logger = logging.getLogger(__name__)

LEADER_SIZE = 4
TRAILER_SIZE = 4


def iter_block_coordinates(xblocks: int, yblocks: int) -> Iterator[Tuple[int, int]]:
    """Yield every (x, y) block coordinate once, y outer and x inner."""
    for y in range(yblocks):
        for x in range(xblocks):
            yield x, y


def check_band(reader: ByteRangeReader, label: str, band: RasterBand,
               context: ValidationContext, key: str = 'main') -> BandLayout:
    """
    Check the block layout of a band and append any errors to the context.

    Args:
        reader: Open byte-range reader on the validated file
        label: Band label used in messages (e.g., 'Overview 0')
        band: Band to walk
        context: Validation context receiving the findings
        key: Short key of the band in the details dictionary

    Returns:
        BandLayout summarizing the walk, also appended to context.bands

    Raises:
        ByteRangeReadError: If a leader or trailer cannot be read in full
    """
    block_width, block_height = band.block_size()
    layout = BandLayout(
        label=label,
        key=key,
        width=band.width,
        height=band.height,
        block_width=block_width,
        block_height=block_height,
        ifd_offset=band.ifd_offset(),
    )
    logger.debug(
        f"Checking {label}: {layout.width}x{layout.height}, "
        f"blocks {block_width}x{block_height} ({layout.blocks_per_row}x{layout.blocks_per_column})"
    )

    last_offset = 0
    for x, y in iter_block_coordinates(layout.blocks_per_row, layout.blocks_per_column):
        offset, byte_count = band.block_location(x, y)
        layout.block_count += 1
        if x == 0 and y == 0:
            layout.first_block_offset = offset

        if offset == 0:
            layout.sparse_block_count += 1
        else:
            if offset < last_offset:
                context.add_error(f"{label} block ({x}, {y}) offset is less than previous block.")

            if byte_count > LEADER_SIZE:
                leader_size = reader.read_uint32_le(offset - LEADER_SIZE)
                if leader_size != byte_count:
                    context.add_error(
                        f"{label} block ({x}, {y}) leader size ({leader_size}) "
                        f"does not match byte count ({byte_count})."
                    )

            if byte_count >= TRAILER_SIZE:
                last_bytes, trailer = reader.read_uint32_le_pair(offset + byte_count - TRAILER_SIZE)
                if last_bytes != trailer:
                    context.add_error(f"{label} block ({x}, {y}) trailer bytes do not match.")

        last_offset = offset

    context.bands.append(layout)
    return layout
