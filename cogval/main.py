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
Command-line interface for the COG Validator.

This script provides the main entry point for the `cogval` command, parsing
user arguments and dispatching them to the validation tool.

Exit codes:
    1: Validation ran and a report was produced (valid or not valid)
    0: The file could not be opened, is not a GeoTIFF, or could not be read
    2: Missing or invalid arguments (usage printed by argparse)
"""
import argparse
import logging
import sys
from cogval.utils.config_loader import config
from cogval.utils.exceptions import ValidateCOGError
from cogval.utils.log_helpers import resolve_level, setup_logger, shutdown_logger
from cogval.utils.script_arguments import REPORT_FORMATS, ValidateArguments

EXIT_REPORTED = 1
EXIT_IO_ERROR = 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cogval',
        description='Validate that a GeoTIFF has a Cloud Optimized GeoTIFF structure.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('input_path', type=str, help='Path to the GeoTIFF to validate (local path or GDAL virtual path).')
    parser.add_argument('-q', '--quiet', action='store_true', dest='quiet', help='Do not print the validation report.')
    parser.add_argument('--no-full-check', action='store_false', dest='full_check', help='Skip the per-block offset, leader and trailer checks.')
    parser.add_argument('-f', '--report-format', type=str.lower, default='text', choices=list(REPORT_FORMATS), dest='report_format', help='Also write a report file in this format (text prints only).')
    parser.add_argument('--report-suffix', type=str, default=None, dest='report_suffix', help='Suffix to append to the report filename.')
    parser.add_argument('--log-file', type=str, default=config.get('logging.file'), dest='log_file', help='Path to a log file for debugging.')
    parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')
    return parser

def main(argv=None):
    """
    Main function to parse arguments and run the validation.
    """
    args = build_parser().parse_args(argv)

    # --- Logger Setup ---
    log_level = resolve_level(config.get('logging.level'), verbose=args.verbose)
    logger = setup_logger(log_file=args.log_file, level=log_level)

    try:
        from cogval.tools.check_cog import check_cog
        script_args = ValidateArguments(**vars(args))
        check_cog(script_args)
        exit_code = EXIT_REPORTED
    except (ValidateCOGError, OSError) as e:
        logger.error(f"Error validating Cloud Optimized GeoTIFF: {e}")
        exit_code = EXIT_IO_ERROR
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        exit_code = 1
    finally:
        shutdown_logger(logger)
    sys.exit(exit_code)

if __name__ == "__main__":
    main()
