# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data model for merged caret segments."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .spans import Span, sat_add
from .styles import RgbColor
from .wrapping import WrappedMessage


@dataclass(frozen=True, slots=True)
class TokenizedChild:
    """Wrapped child label with its resolved caret colour."""

    message: WrappedMessage
    caret_color: RgbColor | None = None


@dataclass(frozen=True, slots=True)
class PositionedLabel:
    """Label placed inside a caret segment.

    Attributes:
        position: Caret column relative to the segment start.
        offset: First covered column relative to the segment start.
        length: Number of covered columns.
        message: Wrapped and styled label text.
        child_labels: Wrapped child labels in declaration order.
        caret_color: Colour of the structural glyphs drawn for this label.
        highlight_color: Colour used when echoing the covered input.
    """

    position: int
    offset: int
    length: int
    message: WrappedMessage
    child_labels: tuple[TokenizedChild, ...] = ()
    caret_color: RgbColor | None = None
    highlight_color: RgbColor | None = None

    def rebased(self, delta: int) -> PositionedLabel:
        """Return a copy moved ``delta`` columns to the right."""

        if delta == 0:
            return self
        return replace(self, position=sat_add(self.position, delta), offset=sat_add(self.offset, delta))

    @property
    def has_children(self) -> bool:
        """Return whether the label carries child labels."""

        return bool(self.child_labels)


@dataclass(frozen=True, slots=True)
class CaretSegment:
    """Maximal run of input covered by one underbar.

    ``start`` and ``end`` are absolute, inclusive positions in the reference
    input. Labels are ordered by caret position.
    """

    start: int
    end: int
    labels: tuple[PositionedLabel, ...]

    def __post_init__(self) -> None:
        """Reject reversed segments and carets outside the segment width."""

        if self.end < self.start:
            raise ValueError(f"segment end {self.end} precedes start {self.start}")
        width = self.end - self.start
        for label in self.labels:
            if not 0 <= label.position <= width:
                raise ValueError(f"label position {label.position} lies outside segment width {width}")

    @property
    def span(self) -> Span:
        """Return the absolute range covered by the segment."""

        return Span(self.start, self.end)

    @property
    def sort_key(self) -> tuple[int, int]:
        """Return the ``(start, end)`` ordering key."""

        return self.start, self.end

    def highlight_spans(self) -> list[tuple[Span, RgbColor]]:
        """Return the absolute span and highlight colour of every coloured label."""

        spans: list[tuple[Span, RgbColor]] = []
        for label in self.labels:
            if label.highlight_color is None:
                continue
            first = sat_add(self.start, label.offset)
            last = max(sat_add(first, label.length - 1), first)
            spans.append((Span(first, last), label.highlight_color))
        return spans


__all__ = ["CaretSegment", "PositionedLabel", "TokenizedChild"]
