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
COG Validator Test Suite.

This package contains tests for cogval components including:
- Unit tests for individual functions and classes
- Integration tests against GeoTIFF files written by GDAL
- End-to-end tests for the command line
"""
