# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Assembled caret reports and the writers that emit them.

Each caret segment is written as one chunk: the echoed input line, the
formatted caret lines and a blank separator line.  A chunk always reaches the
sink through a single ``write`` call.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Protocol

from .config import LayoutConfig
from .formatter import SegmentFormatter
from .segments import CaretSegment
from .styles import RESET, RgbColor
from .tokens import StyledLine

LOGGER = logging.getLogger(__name__)


class Sink(Protocol):
    """Object accepting rendered output."""

    def write(self, data: Any, /) -> Any: ...


@dataclass(frozen=True, slots=True)
class WriterMeta:
    """Progress information reported after each written segment."""

    index: int
    total: int

    @property
    def is_first(self) -> bool:
        """Return whether this is the first segment."""

        return self.index == 0

    @property
    def is_last(self) -> bool:
        """Return whether this is the last segment."""

        return self.index == self.total - 1

    @property
    def is_only(self) -> bool:
        """Return whether the report has a single segment."""

        return self.total == 1


WriteCallback = Callable[[OSError | None, WriterMeta], str | None]


def is_text_sink(sink: Sink) -> bool:
    """Return ``True`` when ``sink`` expects ``str`` rather than ``bytes``."""

    return isinstance(sink, io.TextIOBase) or hasattr(sink, "encoding")


def _emit(sink: Sink, chunk: str) -> None:
    """Write ``chunk`` as text or as UTF-8 bytes depending on ``sink``."""

    if is_text_sink(sink):
        sink.write(chunk)
    else:
        sink.write(chunk.encode("utf-8"))


def colorize_input(text: str, highlights: list[tuple[range, RgbColor]]) -> str:
    """Return ``text`` with each highlighted range wrapped in its colour.

    Later highlights overwrite earlier ones where they overlap.

    Args:
        text: Echoed input line.
        highlights: Position ranges over ``text`` paired with their colour.

    Returns:
        str: Text with truecolor escapes around every coloured run.
    """

    painted: list[RgbColor | None] = [None] * len(text)
    for positions, color in highlights:
        for position in positions:
            if 0 <= position < len(text):
                painted[position] = color
    pieces: list[str] = []
    run_start = 0
    for index in range(1, len(text) + 1):
        if index < len(text) and painted[index] == painted[run_start]:
            continue
        chunk = text[run_start:index]
        color = painted[run_start]
        pieces.append(chunk if color is None else f"{color.escape}{chunk}{RESET}")
        run_start = index
    return "".join(pieces)


@dataclass(frozen=True, slots=True)
class Report:
    """Immutable caret report ready to be written any number of times.

    Attributes:
        input: Reference input as echoed above every segment.
        segments: Caret segments sorted by ``(start, end)``.
        show_range_suffix: Append `` [start - end]`` to each echoed input line.
        colorize_echoed_input: Paint covered input using label highlight colours.
        layout: Column constants for the segment formatter.
    """

    input: str
    segments: tuple[CaretSegment, ...]
    show_range_suffix: bool = False
    colorize_echoed_input: bool = False
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def __len__(self) -> int:
        """Return the number of segments."""

        return len(self.segments)

    def echo_line(self, segment: CaretSegment) -> str:
        """Return the input line printed above ``segment``."""

        text = self.input
        if self.colorize_echoed_input:
            highlights = [(range(span.start, span.end + 1), color) for span, color in segment.highlight_spans()]
            text = colorize_input(text, highlights)
        if self.show_range_suffix:
            text = f"{text} [{segment.span.describe()}]"
        return text

    def lines(self, segment: CaretSegment) -> list[StyledLine]:
        """Return the formatted caret lines for ``segment``."""

        return SegmentFormatter(self.layout).format(segment)

    def render_segment(self, segment: CaretSegment) -> str:
        """Return the complete output chunk for ``segment``."""

        body = "".join(f"{line}\n" for line in self.lines(segment))
        return f"{self.echo_line(segment)}\n{body}\n"

    def render(self) -> str:
        """Return the whole report as one string."""

        return "".join(self.render_segment(segment) for segment in self.segments)

    def __str__(self) -> str:
        """Return the rendered report."""

        return self.render()

    def write(self, sink: Sink) -> None:
        """Write every segment to ``sink``.

        Args:
            sink: Text or binary writer; binary sinks receive UTF-8.

        Raises:
            OSError: If the sink fails; no further segments are written.
        """

        for _ in self.iter_write(sink):
            pass

    def iter_write(self, sink: Sink) -> Iterator[WriterMeta]:
        """Write one segment per step, yielding progress after each write.

        Abandoning the iterator early simply stops output.

        Args:
            sink: Text or binary writer.

        Yields:
            WriterMeta: Position of the segment just written.

        Raises:
            OSError: If the sink fails.
        """

        total = len(self.segments)
        for index, segment in enumerate(self.segments):
            _emit(sink, self.render_segment(segment))
            yield WriterMeta(index, total)

    def iter_write_with(self, sink: Sink, callback: WriteCallback) -> Iterator[WriterMeta]:
        """Write one segment per step and let ``callback`` act on each step.

        The callback receives the sink error of the step (or ``None``) and the
        step metadata. A returned string is written after the segment unless that
        segment failed to write. Returning normally after an error discards that
        error; raising from the callback propagates instead.

        Args:
            sink: Text or binary writer.
            callback: Hook invoked after every segment.

        Yields:
            WriterMeta: Position of the segment just processed.
        """

        total = len(self.segments)
        for index, segment in enumerate(self.segments):
            meta = WriterMeta(index, total)
            error: OSError | None = None
            try:
                _emit(sink, self.render_segment(segment))
            except OSError as exc:
                LOGGER.debug("sink write failed for segment %d of %d: %s", index + 1, total, exc)
                error = exc
            extra = callback(error, meta)
            if extra is not None and error is None:
                _emit(sink, extra)
            yield meta


__all__ = [
    "Report",
    "Sink",
    "WriteCallback",
    "WriterMeta",
    "colorize_input",
    "is_text_sink",
]
