# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Trim the reference input down to the labelled window plus some context."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Final

from .config import TrimMode, TrimPadding
from .spans import Span, sat_add, sat_sub

LOGGER = logging.getLogger(__name__)

ELLIPSIS_PREFIX: Final[str] = "... "
ELLIPSIS_SUFFIX: Final[str] = " ..."
WORD_SEPARATOR: Final[str] = " "


def find_iter(haystack: str, needle: str, start: int = 0, end: int | None = None) -> Iterator[int]:
    """Yield every offset of ``needle`` in ``haystack[start:end]``, left to right.

    Offsets are absolute indexes into ``haystack``. Overlapping matches are
    reported.

    Args:
        haystack: Text to search.
        needle: Non-empty text to look for.
        start: First index searched.
        end: Index one past the last searched position.

    Yields:
        int: Offset of each match.

    Raises:
        ValueError: If ``needle`` is empty.
    """

    if not needle:
        raise ValueError("cannot search for an empty needle")
    stop = len(haystack) if end is None else end
    index = haystack.find(needle, max(start, 0), stop)
    while index != -1:
        yield index
        index = haystack.find(needle, index + 1, stop)


def rfind_iter(haystack: str, needle: str, start: int = 0, end: int | None = None) -> Iterator[int]:
    """Yield every offset of ``needle`` in ``haystack[start:end]``, right to left."""

    if not needle:
        raise ValueError("cannot search for an empty needle")
    stop = len(haystack) if end is None else end
    lower = max(start, 0)
    index = haystack.rfind(needle, lower, stop)
    while index != -1:
        yield index
        index = haystack.rfind(needle, lower, index + len(needle) - 1)


def _nth(matches: Iterator[int], count: int) -> int | None:
    """Return the ``count``-th match, or ``None`` when there are fewer."""

    for seen, index in enumerate(matches, start=1):
        if seen == count:
            return index
    return None


@dataclass(frozen=True, slots=True)
class TrimmedInput:
    """Reference input cut down to a window, with ellipsis markers."""

    text: str
    window_start: int
    window_end: int
    prefix: str = ""
    suffix: str = ""

    @classmethod
    def untrimmed(cls, text: str) -> TrimmedInput:
        """Return a result that leaves ``text`` unchanged."""

        return cls(text, 0, len(text))

    @property
    def is_trimmed(self) -> bool:
        """Return whether any context was cut away."""

        return bool(self.prefix or self.suffix)

    def rebase(self, span: Span) -> Span:
        """Map ``span`` from the original input onto the trimmed text.

        Args:
            span: Span over the original input.

        Returns:
            Span: Span over :attr:`text`.
        """

        shift = len(self.prefix)
        return Span(
            sat_add(sat_sub(span.start, self.window_start), shift),
            sat_add(sat_sub(span.end, self.window_start), shift),
        )


def trim_input(
    text: str,
    spans: Sequence[Span],
    *,
    mode: TrimMode = TrimMode.WORDS,
    padding: TrimPadding | None = None,
) -> TrimmedInput:
    """Cut ``text`` down to the window covered by ``spans`` plus context.

    In word mode the window grows left until just past the ``before + 1``-th
    space found scanning backwards, and right until the ``after + 1``-th space
    found scanning forwards from the last labelled column, never cutting into
    the labels themselves. Character mode grows each side by a fixed count.

    Args:
        text: Full reference input.
        spans: Label spans, already clamped to the input.
        mode: Whether padding counts words or characters.
        padding: Context to keep on each side.

    Returns:
        TrimmedInput: Trimmed text and the data needed to rebase spans.
    """

    if not text or not spans:
        return TrimmedInput.untrimmed(text)
    padding = padding or TrimPadding()
    first = min(span.start for span in spans)
    last = max(span.end for span in spans)
    if mode is TrimMode.CHARS:
        start = sat_sub(first, padding.before)
        end = min(sat_add(last, padding.after + 1), len(text))
    else:
        before = _nth(rfind_iter(text, WORD_SEPARATOR, 0, first), padding.before + 1)
        start = 0 if before is None else before + 1
        after = _nth(find_iter(text, WORD_SEPARATOR, last), padding.after + 1)
        end = len(text) if after is None else max(after, last + 1)
    prefix = ELLIPSIS_PREFIX if start > 0 else ""
    suffix = ELLIPSIS_SUFFIX if end < len(text) else ""
    trimmed = TrimmedInput(f"{prefix}{text[start:end]}{suffix}", start, end, prefix, suffix)
    if trimmed.is_trimmed:
        LOGGER.debug("trimmed input to window [%d, %d) of %d characters", start, end, len(text))
    return trimmed


__all__ = [
    "ELLIPSIS_PREFIX",
    "ELLIPSIS_SUFFIX",
    "TrimmedInput",
    "find_iter",
    "rfind_iter",
    "trim_input",
]
