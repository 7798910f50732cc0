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
Report Formatters for COG Validation Reports.

This module provides classes for formatting complete validation reports in
Markdown or HTML. Formatters take the sections produced by CogReportBuilder
and assemble header, sections and footer.

Classes:
    ReportFormatter: Abstract base class for all report formatters
    MarkdownReportFormatter: Formats Markdown reports with table of contents
    HtmlReportFormatter: Formats self-contained HTML reports
"""

import html
import logging
import mistune
import re
from abc import ABC, abstractmethod
from importlib import metadata
from typing import List, Tuple

logger = logging.getLogger(__name__)

try:
    __version__ = metadata.version("cog-validator")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0-dev"

REPORT_TITLE = "COG Validation Report"

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ font-family: Segoe UI, Helvetica, Arial, sans-serif; margin: 2em auto; max-width: 960px; color: #212121; }}
h1 {{ border-bottom: 2px solid #1976d2; padding-bottom: 0.3em; }}
table {{ border-collapse: collapse; width: 100%; }}
th {{ background: #1976d2; color: #fff; }}
th, td {{ border: 1px solid #bdbdbd; padding: 4px 8px; text-align: left; }}
code {{ background: #f5f5f5; padding: 0 4px; }}
footer {{ margin-top: 2em; font-size: 0.85em; color: #757575; }}
</style>
</head>
<body>
<h1>{title}</h1>
{body}
<footer>Report generated by COG Validator v{version}</footer>
</body>
</html>
"""


def slugify(title: str) -> str:
    anchor = title.lower().replace(' ', '-')
    anchor = re.sub(r'[^a-z0-9\-_]', '', anchor)
    return anchor.strip('-')


class ReportFormatter(ABC):
    """
    Base class for generating COG validation reports.

    Use CogReportBuilder to build sections, then pass them to a formatter.
    This separates "what to include" (builder) from "how to format"
    (formatter).

    Example:
        >>> builder = CogReportBuilder(validation).build()
        >>> formatter = MarkdownReportFormatter(filename='cog.tif')
        >>> formatter.sections = builder.sections
        >>> report = formatter.format()
    """

    def __init__(self, filename: str = "Unknown"):
        self.filename = filename
        self.sections: List[Tuple[str, str]] = []
        self.report_title: str = REPORT_TITLE

    def format(self) -> str:
        """Generate the complete report as a string."""
        parts = [self._render_header()]
        for title, body in self.sections:
            if body:
                parts.append(self._render_section(title, body))
        parts.append(self._render_footer())
        return "\n\n".join(filter(None, parts))

    @abstractmethod
    def _render_header(self) -> str:
        pass

    @abstractmethod
    def _render_section(self, title: str, body: str) -> str:
        pass

    @abstractmethod
    def _render_footer(self) -> str:
        pass


class MarkdownReportFormatter(ReportFormatter):
    """Generate Markdown reports with a table of contents."""

    def _render_header(self) -> str:
        lines = [f"# {self.report_title}: {self.filename}\n"]
        if self.sections:
            lines.append("## Table of Contents\n")
            for title, _ in self.sections:
                lines.append(f"- [{title}](#{slugify(title)})")
        return "\n".join(lines)

    def _render_section(self, title: str, body: str) -> str:
        return f"## {title}\n\n{body}"

    def _render_footer(self) -> str:
        return f"---\n\n*Report generated by COG Validator v{__version__}*"


class HtmlReportFormatter(ReportFormatter):
    """
    Generate self-contained HTML reports.

    Sections are rendered as Markdown, converted to HTML with mistune and
    wrapped in a minimal styled template.
    """

    def _render_header(self) -> str:
        # Title is part of the HTML template
        return ""

    def _render_section(self, title: str, body: str) -> str:
        return f"## {title}\n\n{body}"

    def _render_footer(self) -> str:
        return ""

    def format(self) -> str:
        markdown_content = super().format()
        html_body = self._markdown_to_html(markdown_content)
        return self._wrap_in_html_template(html_body)

    def _markdown_to_html(self, markdown: str) -> str:
        md_parser = mistune.create_markdown(plugins=['table'])
        return str(md_parser(markdown))

    def _wrap_in_html_template(self, html_body: str) -> str:
        title = html.escape(f"{self.report_title}: {self.filename}")
        return HTML_TEMPLATE.format(title=title, body=html_body, version=__version__)
