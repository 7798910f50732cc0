#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: COG Validator (cogval)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""Allow `python -m cogval <file>`."""
from cogval.main import main

if __name__ == "__main__":
    main()
