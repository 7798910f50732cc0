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
Byte-Range Reader.

Read-only, absolute-offset access to the raw bytes of the validated file,
through GDAL's virtual file system API so that local files and GDAL virtual
paths (/vsimem/, /vsicurl/, /vsis3/, ...) are read the same way a range-reading
client would read them.
"""

import logging
import numpy as np
from typing import Tuple
from osgeo import gdal
from cogval.utils.exceptions import ByteRangeReadError

logger = logging.getLogger(__name__)

UINT32_LE = np.dtype('<u4')


class ByteRangeReader:
    """
    Scoped read-only accessor for byte ranges of a file.

    Every read is positioned explicitly; no file position is relied upon
    between reads. Use as a context manager so the handle is released on
    every exit path.

    Example:
        >>> with ByteRangeReader('cog.tif') as reader:
        ...     leader = reader.read_uint32_le(offset - 4)
    """

    def __init__(self, path: str):
        self.path = str(path)
        self._handle = None

    def open(self) -> 'ByteRangeReader':
        try:
            handle = gdal.VSIFOpenL(self.path, 'rb')
        except RuntimeError as e:
            raise ByteRangeReadError(f"Cannot open {self.path} for reading: {e}") from e
        if handle is None:
            raise ByteRangeReadError(f"Cannot open {self.path} for reading")
        self._handle = handle
        logger.debug(f"Opened byte-range reader on {self.path}")
        return self

    def close(self) -> None:
        if self._handle is not None:
            gdal.VSIFCloseL(self._handle)
            self._handle = None

    @property
    def closed(self) -> bool:
        return self._handle is None

    def __enter__(self) -> 'ByteRangeReader':
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def read_at(self, offset: int, size: int) -> bytes:
        """
        Read exactly `size` bytes starting at absolute position `offset`.

        Raises:
            ByteRangeReadError: If the reader is closed, the offset is negative,
                or fewer than `size` bytes are available.
        """
        if self._handle is None:
            raise ByteRangeReadError(f"Reader on {self.path} is closed")
        if offset < 0:
            raise ByteRangeReadError(f"Cannot read {size} bytes at negative offset {offset} of {self.path}")

        if gdal.VSIFSeekL(self._handle, offset, 0) != 0:
            raise ByteRangeReadError(f"Cannot seek to offset {offset} of {self.path}")
        data = gdal.VSIFReadL(1, size, self._handle) or b''
        if len(data) != size:
            raise ByteRangeReadError(
                f"Short read at offset {offset} of {self.path}: expected {size} bytes, got {len(data)}"
            )
        return bytes(data)

    def read_uint32_le(self, offset: int) -> int:
        """Read one little-endian unsigned 32-bit integer at `offset`."""
        return int(np.frombuffer(self.read_at(offset, 4), dtype=UINT32_LE)[0])

    def read_uint32_le_pair(self, offset: int) -> Tuple[int, int]:
        """Read two consecutive little-endian unsigned 32-bit integers at `offset`."""
        first, second = np.frombuffer(self.read_at(offset, 8), dtype=UINT32_LE)
        return int(first), int(second)
