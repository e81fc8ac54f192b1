# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from caretline import ChildLabel, Label, Report, ReportBuilder, Span, strip_ansi

CHILD_LABELS_INPUT = "This is a test input string"
OVERLAPPING_INPUT = "Another test input, more text, even more text"


@pytest.fixture
def nested_children_builder() -> ReportBuilder:
    """Return a builder holding one label with two child labels."""
    label = Label(
        Span(5, 14),
        "This is a test label",
        child_labels=(ChildLabel("first child"), ChildLabel("second child")),
    )
    return ReportBuilder(CHILD_LABELS_INPUT).push(label)


@pytest.fixture
def overlapping_labels_builder() -> ReportBuilder:
    """Return a builder holding three overlapping labels."""
    return ReportBuilder(OVERLAPPING_INPUT).extend(
        [
            Label(Span(3, 14), "first"),
            Label(Span(7, 15), "second"),
            Label(Span(14, 26), "third"),
        ]
    )


@pytest.fixture
def plain_lines() -> Callable[[Report], list[str]]:
    """Return a helper rendering a report into ANSI-free lines."""

    def render(report: Report) -> list[str]:
        return strip_ansi(report.render()).split("\n")

    return render
