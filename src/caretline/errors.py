# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exceptions raised while validating labels for a report."""

from __future__ import annotations

from .spans import Span


class ReportBuildError(RuntimeError):
    """Raised when a report cannot be assembled from the builder state."""


class NoLabelsError(ReportBuildError):
    """Raised when ``finish`` is called before any label was pushed."""

    def __init__(self) -> None:
        """Create the error with its fixed message."""

        super().__init__("no labels were pushed to the report builder")


class EmptyInputError(ReportBuildError):
    """Raised when the reference input is empty."""

    def __init__(self) -> None:
        """Create the error with its fixed message."""

        super().__init__("the reference input is empty")


class LabelEmptyMessageError(ReportBuildError):
    """Raised when a label carries an empty message."""

    def __init__(self, index: int, span: Span) -> None:
        """Record the offending label.

        Args:
            index: Declaration index of the label.
            span: Range of the label.
        """

        self.index = index
        self.span = span
        super().__init__(f"label #{index} at {span} has an empty message")


class LabelChildEmptyMessageError(ReportBuildError):
    """Raised when a child label carries an empty message."""

    def __init__(self, index: int, child_index: int, span: Span) -> None:
        """Record the offending child label.

        Args:
            index: Declaration index of the parent label.
            child_index: Position of the child within its parent.
            span: Range of the parent label.
        """

        self.index = index
        self.child_index = child_index
        self.span = span
        super().__init__(f"child #{child_index} of label #{index} at {span} has an empty message")


class OutOfBoundsError(ReportBuildError):
    """Raised when a label range leaves the input and truncation is disabled."""

    def __init__(self, attempted: Span, valid: Span) -> None:
        """Record the rejected range and the valid bounds.

        Args:
            attempted: Range the label asked for.
            valid: Range covered by the input.
        """

        self.attempted = attempted
        self.valid = valid
        super().__init__(f"label range [{attempted.describe()}] is outside the input range [{valid.describe()}]")


__all__ = [
    "EmptyInputError",
    "LabelChildEmptyMessageError",
    "LabelEmptyMessageError",
    "NoLabelsError",
    "OutOfBoundsError",
    "ReportBuildError",
]
