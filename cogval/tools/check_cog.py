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
Cloud Optimized GeoTIFF Validation Tool.

This module powers the validate command: it validates one file, prints the
text verdict and optionally writes a Markdown or HTML report next to the
input file.
"""

import logging
from pathlib import Path
from cogval.utils.data_models import CogValidation
from cogval.utils.report_builders import CogReportBuilder, render_validation
from cogval.utils.report_formatters import HtmlReportFormatter, MarkdownReportFormatter
from cogval.utils.script_arguments import ValidateArguments
from cogval.utils.validate_cloud_optimized_geotiff import run_validation

logger = logging.getLogger('check_cog')


def get_report_path(input_path: str, suffix: str, format: str) -> Path:
    """
    Determine output file path for a report.

    Reports for GDAL virtual paths (/vsicurl/, /vsimem/, ...) go to the
    current working directory.

    Args:
        input_path: Path of the validated file
        suffix: Suffix to add to filename (e.g., '_cog')
        format: Output format ('html' or 'md')

    Returns:
        Full path to output report file
    """
    input_file = Path(input_path)
    extension = '.html' if format == 'html' else '.md'
    output_filename = f"{input_file.stem}{suffix}{extension}"
    if str(input_path).startswith('/vsi'):
        return Path.cwd() / output_filename
    return input_file.parent / output_filename


def write_report(validation: CogValidation, args: ValidateArguments) -> Path:
    """Write the Markdown or HTML report of a validation and return its path."""
    builder = CogReportBuilder(validation).build()
    filename = Path(validation.file_path).name
    if args.report_format == 'html':
        formatter = HtmlReportFormatter(filename=filename)
    else:
        formatter = MarkdownReportFormatter(filename=filename)
    formatter.sections = builder.sections

    output_path = get_report_path(validation.file_path, args.report_suffix, args.report_format)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(formatter.format())
    logger.info(f"Report written successfully: {output_path}")
    return output_path


def check_cog(args: ValidateArguments) -> CogValidation:
    """
    Validate a file and report the result.

    Args:
        args: Parsed command-line arguments

    Returns:
        The validation result

    Raises:
        InvalidFileError: If the file is not a readable (Geo)TIFF
        OSError: If the file bytes or the report file cannot be accessed
    """
    logger.debug(f"Arguments: {args}")
    validation = run_validation(args.input_path, full_check=args.full_check)

    if not args.quiet:
        print(render_validation(validation))

    if args.report_format != 'text':
        write_report(validation, args)

    return validation
