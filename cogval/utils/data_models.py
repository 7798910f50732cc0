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
Data Models for the COG Validator.

This module defines strongly-typed data classes for representing validation
findings and results. These classes provide type safety, self-documentation,
and clear contracts between the rule evaluator, the block layout checker and
the report builders.

Domain model classes:
    FindingSeverity: Classification of a finding (Error or Warning)
    ValidationFinding: A single, immutable validation message
    BandLayout: Block layout summary of one checked band
    ValidationContext: Ordered findings accumulated during one validation run
    CogValidation: Cloud Optimized GeoTIFF validation results
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FindingSeverity(Enum):
    """Severity of a validation finding."""
    ERROR = 'Error'
    WARNING = 'Warning'


@dataclass(frozen=True)
class ValidationFinding:
    """
    Represents one validation message.

    Attributes:
        severity: Whether the finding is an error or a warning
        message: Human-readable message, reported verbatim
    """
    severity: FindingSeverity
    message: str

    def is_error(self) -> bool:
        return self.severity is FindingSeverity.ERROR


@dataclass
class BandLayout:
    """
    Block layout summary of a checked band, overview or mask band.

    Attributes:
        label: Label used in finding messages (e.g., 'Overview 0')
        key: Short key used in the details dictionary (e.g., 'overview_0')
        width: Band width in pixels
        height: Band height in pixels
        block_width: Block (tile or strip) width in pixels
        block_height: Block (tile or strip) height in pixels
        block_count: Number of blocks visited during the walk
        sparse_block_count: Number of blocks without a recorded offset
        first_block_offset: Offset of block (0, 0), 0 when sparse
        ifd_offset: Offset of the band's IFD, when GDAL reports it
    """
    label: str
    key: str
    width: int
    height: int
    block_width: int
    block_height: int
    block_count: int = 0
    sparse_block_count: int = 0
    first_block_offset: int = 0
    ifd_offset: Optional[int] = None

    @property
    def blocks_per_row(self) -> int:
        return (self.width + self.block_width - 1) // self.block_width

    @property
    def blocks_per_column(self) -> int:
        return (self.height + self.block_height - 1) // self.block_height


@dataclass
class ValidationContext:
    """
    Accumulates the findings of a single validation run.

    Findings are kept in one list in detection order. The `errors` and
    `warnings` projections keep that order within each category; nothing is
    ever sorted or deduplicated.

    Example:
        >>> context = ValidationContext('cog.tif')
        >>> context.add_warning('No overviews found for large image.')
        >>> context.warnings
        ['No overviews found for large image.']
        >>> context.errors
        []
    """
    file_path: str
    findings: List[ValidationFinding] = field(default_factory=list)
    bands: List[BandLayout] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.findings.append(ValidationFinding(FindingSeverity.ERROR, message))

    def add_warning(self, message: str) -> None:
        self.findings.append(ValidationFinding(FindingSeverity.WARNING, message))

    @property
    def errors(self) -> List[str]:
        return [f.message for f in self.findings if f.severity is FindingSeverity.ERROR]

    @property
    def warnings(self) -> List[str]:
        return [f.message for f in self.findings if f.severity is FindingSeverity.WARNING]

    def details(self) -> Dict[str, Any]:
        """
        Structural details of the checked bands.

        Returns:
            Dictionary with 'ifd_offsets' and 'data_offsets' keyed by band key
            (main, mask, overview_0, mask_overview_0, ...) and 'bands', the
            per-band block counts.
        """
        return {
            'ifd_offsets': {b.key: b.ifd_offset for b in self.bands if b.ifd_offset is not None},
            'data_offsets': {b.key: b.first_block_offset for b in self.bands},
            'bands': {
                b.key: {
                    'label': b.label,
                    'size': (b.width, b.height),
                    'block_size': (b.block_width, b.block_height),
                    'block_count': b.block_count,
                    'sparse_block_count': b.sparse_block_count,
                }
                for b in self.bands
            },
        }


@dataclass
class CogValidation:
    """
    Represents Cloud Optimized GeoTIFF (COG) validation results.

    Attributes:
        file_path: Path of the validated file
        warnings: List of validation warnings (non-fatal issues)
        errors: List of validation errors (issues preventing COG status)
        details: Dictionary with additional validation details
        bands: Block layout summaries, in the order the bands were checked
        headers_size: Size of the IFD headers in bytes (smallest data offset)

    Example:
        >>> validation = CogValidation(
        ...     file_path='cog.tif',
        ...     warnings=["No overviews found for large image."],
        ...     errors=[],
        ... )
        >>> validation.is_valid()
        True
        >>> validation.has_warnings()
        True
    """
    file_path: str
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    details: Dict[str, Any] = field(default_factory=dict)
    bands: List[BandLayout] = field(default_factory=list)
    headers_size: Optional[int] = None

    @classmethod
    def from_context(cls, context: ValidationContext) -> 'CogValidation':
        """Build the result of a finished validation run."""
        data_offsets = [b.first_block_offset for b in context.bands if b.first_block_offset > 0]
        return cls(
            file_path=context.file_path,
            warnings=context.warnings,
            errors=context.errors,
            details=context.details(),
            bands=list(context.bands),
            headers_size=min(data_offsets) if data_offsets else None,
        )

    def is_valid(self) -> bool:
        """
        Check if the file is a valid Cloud Optimized GeoTIFF.

        A file is considered valid if there are no errors. Warnings are
        acceptable but indicate sub-optimal COG organization.
        """
        return len(self.errors) == 0

    def has_warnings(self) -> bool:
        """Check if there are any validation warnings."""
        return len(self.warnings) > 0
