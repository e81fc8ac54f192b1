# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Inclusive position ranges with saturating arithmetic.

Every label in a report points at an inclusive :class:`Span` of the input.
Positions are plain integers, so the helpers here clamp results to
``[0, MAX_POSITION]`` instead of relying on overflow checks.  Callers can hand
in adversarial bounds (negative numbers, ``sys.maxsize``) without the layout
code ever producing a negative width.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Final, TypeAlias

MAX_POSITION: Final[int] = sys.maxsize


def sat_add(left: int, right: int) -> int:
    """Return ``left + right`` clamped to ``[0, MAX_POSITION]``.

    Args:
        left: First operand.
        right: Second operand.

    Returns:
        int: Sum clamped to the representable position range.
    """

    return min(max(left + right, 0), MAX_POSITION)


def sat_sub(left: int, right: int) -> int:
    """Return ``left - right`` clamped to ``[0, MAX_POSITION]``.

    Args:
        left: Minuend.
        right: Subtrahend.

    Returns:
        int: Difference clamped to the representable position range.
    """

    return min(max(left - right, 0), MAX_POSITION)


@dataclass(frozen=True, slots=True, order=True)
class Span:
    """Inclusive ``[start, end]`` range of input positions.

    Ordering compares ``start`` first and ``end`` second, which is the order
    the merge pipeline relies on.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Reject reversed ranges."""

        if self.end < self.start:
            raise ValueError(f"span end {self.end} precedes start {self.start}")

    @classmethod
    def single(cls, position: int) -> Span:
        """Return a span covering exactly ``position``."""

        return cls(position, position)

    @classmethod
    def from_exclusive(cls, start: int, stop: int) -> Span:
        """Return the inclusive span for the half-open interval ``[start, stop)``.

        Args:
            start: First covered position.
            stop: Position one past the last covered position.

        Returns:
            Span: Inclusive span; an empty interval collapses onto ``start``.
        """

        return cls(start, max(sat_sub(stop, 1), start))

    @classmethod
    def from_start(cls, start: int) -> Span:
        """Return an open-ended span reaching :data:`MAX_POSITION`."""

        return cls(start, MAX_POSITION)

    @property
    def length(self) -> int:
        """Return the number of covered positions, saturating."""

        return sat_add(sat_sub(self.end, self.start), 1)

    def __len__(self) -> int:
        """Return the number of covered positions."""

        return self.length

    def __contains__(self, position: object) -> bool:
        """Return whether ``position`` is an int inside the span."""

        return isinstance(position, int) and self.start <= position <= self.end

    def overlaps(self, other: Span) -> bool:
        """Return ``True`` when both spans share at least one position."""

        return self.start <= other.end and other.start <= self.end

    def contains_span(self, other: Span) -> bool:
        """Return ``True`` when ``other`` lies entirely inside this span."""

        return self.start <= other.start and other.end <= self.end

    def clamp(self, upper: int) -> Span:
        """Return the span clamped into ``[0, upper]``.

        Args:
            upper: Largest valid position.

        Returns:
            Span: Clamped span; a span entirely past ``upper`` collapses onto it.
        """

        start = min(max(self.start, 0), upper)
        end = min(max(self.end, start), upper)
        return Span(start, end)

    def shift(self, delta: int) -> Span:
        """Return the span moved by ``delta`` positions, saturating at zero."""

        return Span(sat_add(self.start, delta), sat_add(self.end, delta))

    def describe(self) -> str:
        """Return the ``start - end`` form used in report range suffixes."""

        return f"{self.start} - {self.end}"

    def __str__(self) -> str:
        """Return the span as ``start..=end``, or the lone position."""

        if self.start == self.end:
            return str(self.start)
        return f"{self.start}..={self.end}"


SpanLike: TypeAlias = Span | range | slice | tuple[int, int] | int


def to_span(value: SpanLike) -> Span:
    """Coerce the supported range spellings into a :class:`Span`.

    ``range`` and ``slice`` objects are half-open like the rest of Python;
    two-item tuples are inclusive pairs; a bare ``int`` is a single position.
    A slice without a stop is open-ended.

    Args:
        value: Range value supplied by the caller.

    Returns:
        Span: Inclusive span equivalent to ``value``.

    Raises:
        TypeError: If ``value`` is not one of the supported spellings.
        ValueError: If a stepped range is given or the bounds are inverted.
    """

    if isinstance(value, Span):
        return value
    if isinstance(value, bool):
        raise TypeError("booleans are not positions")
    if isinstance(value, int):
        return Span.single(value)
    if isinstance(value, range):
        if value.step != 1:
            raise ValueError("stepped ranges cannot be annotated")
        return Span.from_exclusive(value.start, value.stop)
    if isinstance(value, slice):
        if value.step not in (None, 1):
            raise ValueError("stepped slices cannot be annotated")
        start = 0 if value.start is None else int(value.start)
        if value.stop is None:
            return Span.from_start(start)
        return Span.from_exclusive(start, int(value.stop))
    if isinstance(value, tuple) and len(value) == 2:
        start, end = value
        return Span(int(start), int(end))
    raise TypeError(f"unsupported span value: {value!r}")


__all__ = [
    "MAX_POSITION",
    "Span",
    "SpanLike",
    "sat_add",
    "sat_sub",
    "to_span",
]
