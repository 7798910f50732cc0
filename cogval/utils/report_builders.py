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
Report Builders for COG Validation Results.

Turns the ordered findings of a validation run into report content: the plain
text verdict printed by the command line, and the Markdown sections consumed
by the report formatters.
"""

import logging
from typing import List, Sequence
from cogval.utils.data_models import BandLayout, CogValidation

logger = logging.getLogger(__name__)

WARNINGS_FOUND = "The following warnings were found:"
ERRORS_FOUND = "The following errors were found:"
VALID_COG = "is a valid cloud optimized GeoTIFF"
INVALID_COG = "is NOT a valid cloud optimized GeoTIFF."


def render_report(file_path: str, errors: Sequence[str], warnings: Sequence[str]) -> str:
    """
    Render the plain text verdict of a validation run.

    Findings are listed in detection order, without sorting, truncation or
    deduplication.

    Args:
        file_path: Path of the validated file
        errors: Error messages in detection order
        warnings: Warning messages in detection order

    Returns:
        The report text, ending with a newline

    Example:
        >>> print(render_report('cog.tif', [], []), end='')
        cog.tif is a valid cloud optimized GeoTIFF
    """
    lines: List[str] = []
    if warnings:
        lines.append(WARNINGS_FOUND)
        lines.extend(f" - {warning}" for warning in warnings)
        lines.append("")
    if errors:
        lines.append(f"{file_path} {INVALID_COG}")
        lines.append(ERRORS_FOUND)
        lines.extend(f" - {error}" for error in errors)
        lines.append("")
    else:
        lines.append(f"{file_path} {VALID_COG}")
    return "\n".join(lines) + "\n"


def render_validation(validation: CogValidation) -> str:
    """Render the plain text verdict of a CogValidation result."""
    return render_report(validation.file_path, validation.errors, validation.warnings)


class CogReportBuilder:
    """
    Builds the Markdown sections of a COG validation report.

    Sections are (title, markdown body) pairs, added in report order.

    Example:
        >>> builder = CogReportBuilder(validation).build()
        >>> [title for title, _ in builder.sections]
        ['Summary', 'Warnings', 'Errors', 'Band Layout']
    """

    def __init__(self, validation: CogValidation):
        self.validation = validation
        self.sections: List[tuple] = []

    def build(self) -> 'CogReportBuilder':
        self.sections = [
            ('Summary', self._summary()),
            ('Warnings', self._findings(self.validation.warnings, 'No warnings.')),
            ('Errors', self._findings(self.validation.errors, 'No errors.')),
        ]
        if self.validation.bands:
            self.sections.append(('Band Layout', self._band_table(self.validation.bands)))
        logger.debug(f"Built {len(self.sections)} report sections")
        return self

    def _summary(self) -> str:
        v = self.validation
        verdict = VALID_COG if v.is_valid() else INVALID_COG.rstrip('.')
        lines = [
            f"**File:** `{v.file_path}`  ",
            f"**Verdict:** {verdict}  ",
            f"**Errors:** {len(v.errors)}  ",
            f"**Warnings:** {len(v.warnings)}  ",
        ]
        if v.headers_size is not None:
            lines.append(f"**Header Size:** {v.headers_size:,} bytes  ")
        return "\n".join(lines)

    @staticmethod
    def _findings(messages: Sequence[str], empty_text: str) -> str:
        if not messages:
            return f"*{empty_text}*"
        return "\n".join(f"- {message}" for message in messages)

    @staticmethod
    def _band_table(bands: Sequence[BandLayout]) -> str:
        rows = [
            "| Band | Size | Block Size | Blocks | Sparse Blocks | First Block Offset | IFD Offset |",
            "|---|---|---|---|---|---|---|",
        ]
        for b in bands:
            ifd = str(b.ifd_offset) if b.ifd_offset is not None else "N/A"
            rows.append(
                f"| {b.label} | {b.width}x{b.height} | {b.block_width}x{b.block_height} | "
                f"{b.block_count} | {b.sparse_block_count} | {b.first_block_offset} | {ifd} |"
            )
        return "\n".join(rows)
