# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render labelled spans over a line of text as caret diagnostics."""

from __future__ import annotations

from .builder import ReportBuilder, resolve_caret_color
from .config import ConfigError, LayoutConfig, OutOfBoundsPolicy, ReportConfig, TrimMode, TrimPadding
from .console import print_report
from .errors import (
    EmptyInputError,
    LabelChildEmptyMessageError,
    LabelEmptyMessageError,
    NoLabelsError,
    OutOfBoundsError,
    ReportBuildError,
)
from .formatter import SegmentFormatter, format_segment
from .labels import ChildLabel, Label
from .report import Report, WriterMeta
from .spans import MAX_POSITION, Span, to_span
from .styles import Color, RgbColor, TextAttribute, parse_style, strip_ansi, style_from_name
from .wrapping import StyleScope, WrappedMessage, wrap_text

__version__ = "0.1.0"

__all__ = [
    "MAX_POSITION",
    "ChildLabel",
    "Color",
    "ConfigError",
    "EmptyInputError",
    "Label",
    "LabelChildEmptyMessageError",
    "LabelEmptyMessageError",
    "LayoutConfig",
    "NoLabelsError",
    "OutOfBoundsError",
    "OutOfBoundsPolicy",
    "Report",
    "ReportBuildError",
    "ReportBuilder",
    "ReportConfig",
    "RgbColor",
    "SegmentFormatter",
    "Span",
    "StyleScope",
    "TextAttribute",
    "TrimMode",
    "TrimPadding",
    "WrappedMessage",
    "WriterMeta",
    "__version__",
    "format_segment",
    "parse_style",
    "print_report",
    "resolve_caret_color",
    "strip_ansi",
    "style_from_name",
    "to_span",
    "wrap_text",
]
