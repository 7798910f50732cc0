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
Custom Exceptions Module.

A centralized module for custom exceptions used throughout the COG Validator.
"""

class ValidateCOGError(Exception):
    """Base exception for errors that prevent COG validation from running."""
    pass

class InvalidFileError(ValidateCOGError):
    """The file cannot be opened as a raster or is not a (Geo)TIFF."""
    pass

class ByteRangeReadError(OSError):
    """A byte range of the validated file could not be read in full."""
    pass
