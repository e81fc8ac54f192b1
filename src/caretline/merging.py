# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Merge overlapping label ranges into caret segments.

Candidates are folded left to right. The fold only works on input sorted by
start, end and declaration order, so :func:`merge_overlaps` sorts first
instead of trusting the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .segments import CaretSegment, PositionedLabel
from .spans import Span

LOGGER = logging.getLogger(__name__)


def caret_offset(width: int) -> int:
    """Return where the caret sits inside an underbar of ``width`` columns.

    Args:
        width: Number of covered columns.

    Returns:
        int: Caret offset from the first covered column.
    """

    if width > 4:
        return 2
    if width > 2:
        return width // 2 - 1
    return 0


@dataclass(frozen=True, slots=True)
class MergeCandidate:
    """One label waiting to be merged.

    ``label.position`` and ``label.offset`` are relative to ``span.start``.
    """

    span: Span
    label: PositionedLabel
    index: int = 0

    @property
    def start(self) -> int:
        """Return the first column of the candidate span."""

        return self.span.start

    @property
    def sort_key(self) -> tuple[int, int, int]:
        """Return the ordering key: start, end, then declaration index."""

        return self.span.start, self.span.end, self.index


@dataclass(slots=True)
class _Accumulator:
    """Segment under construction while the fold runs."""

    start: int
    end: int
    labels: list[PositionedLabel] = field(default_factory=list)

    @classmethod
    def open(cls, candidate: MergeCandidate) -> _Accumulator:
        """Start a segment from ``candidate``."""

        return cls(candidate.span.start, candidate.span.end, [candidate.label])

    @property
    def span(self) -> Span:
        """Return the range covered so far."""

        return Span(self.start, self.end)

    def absorb(self, candidate: MergeCandidate) -> None:
        """Fold ``candidate`` into this segment, extending its end."""

        self.end = max(self.end, candidate.span.end)
        self.labels.append(candidate.label.rebased(candidate.span.start - self.start))

    def flush(self) -> CaretSegment:
        """Return the finished segment with its labels ordered and deduplicated."""

        ordered = sorted(self.labels, key=lambda label: (label.position, label.offset, label.length))
        unique: list[PositionedLabel] = []
        for label in ordered:
            if label not in unique:
                unique.append(label)
        return CaretSegment(self.start, self.end, tuple(unique))


def merge_overlaps(
    candidates: Iterable[MergeCandidate],
    *,
    split_on_equal_start: bool = True,
) -> list[CaretSegment]:
    """Group candidates whose ranges overlap into caret segments.

    Args:
        candidates: One candidate per label, in any order.
        split_on_equal_start: Keep labels that start on the same column in
            separate segments even though they overlap.

    Returns:
        list[CaretSegment]: Segments sorted by ``(start, end)``.
    """

    ordered = sorted(candidates, key=lambda candidate: candidate.sort_key)
    segments: list[CaretSegment] = []
    accumulator: _Accumulator | None = None
    for candidate in ordered:
        if accumulator is None:
            accumulator = _Accumulator.open(candidate)
            continue
        span = candidate.span
        if split_on_equal_start and span.start == accumulator.start:
            segments.append(accumulator.flush())
            accumulator = _Accumulator.open(candidate)
        elif accumulator.span.contains_span(span):
            accumulator.absorb(candidate)
        elif span.start <= accumulator.end and span.end > accumulator.start:
            accumulator.absorb(candidate)
        else:
            segments.append(accumulator.flush())
            accumulator = _Accumulator.open(candidate)
    if accumulator is not None:
        segments.append(accumulator.flush())
    segments.sort(key=lambda segment: segment.sort_key)
    LOGGER.debug("merged %d labels into %d caret segments", len(ordered), len(segments))
    return segments


__all__ = ["MergeCandidate", "caret_offset", "merge_overlaps"]
