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
Dataclass-based Argument Model for the validate command.

It uses `__post_init__` for validation and resolving configured default
values, ensuring that the core logic receives clean and validated inputs.

Classes:
    ValidateArguments: Arguments for the check_cog tool.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from cogval.utils.config_loader import config

logger = logging.getLogger(__name__)

REPORT_FORMATS = ('text', 'md', 'html')

@dataclass
class ValidateArguments:
    """Arguments for the check_cog tool."""
    # Kept as a string: GDAL virtual paths such as /vsicurl/https://... must not be normalized
    input_path: str = ''
    quiet: bool = False
    full_check: bool = True
    report_format: str = 'text'
    report_suffix: Optional[str] = None
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Validation and default resolution for validate arguments."""
        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)
        try:
            self._validate()
        except ValueError as e:
            self.handle_error(str(e))
        if self.report_suffix is None:
            self.report_suffix = config.get('report.suffix', '_cog')
        self.report_suffix = self.report_suffix.replace("'", "").replace('"', '')

    def _validate(self):
        if not self.input_path:
            raise ValueError("The 'input_path' argument is required.")
        if self.report_format not in REPORT_FORMATS:
            raise ValueError(f"Unsupported report format '{self.report_format}'. Choose from {', '.join(REPORT_FORMATS)}.")

    def handle_error(self, message: str):
        """Logs an error and raises ValueError."""
        logger.error(message)
        raise ValueError(message)
