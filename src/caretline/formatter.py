# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn one caret segment into the lines drawn beneath the echoed input.

A segment renders as an underbar with one ``┬`` per distinct caret position,
a separator of ``│`` connectors, and then one callout per label.  Labels are
resolved left to right: each turn line bends at the label's caret and runs
right past every connector that is still pending, so the message always sits
to the right of the connectors drawn on the following lines.

With the caret at column ``p`` and the rightmost pending caret at ``h`` (or
``p`` when nothing is pending), a callout with child labels puts its ``┬``
at ``h + 3`` and its arrowhead at ``h + 6``.  For ``p = 0`` and ``h = 4``::

    ╰──────┬──▶ message
           │
           ├─────▶ first child
           │
           ╰─────▶ last child
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .config import LayoutConfig
from .segments import CaretSegment, PositionedLabel, TokenizedChild
from .styles import RgbColor
from .tokens import Glyph, StyledLine

TURN_ALLOWANCE = 2
CHILD_HUB_OFFSET = 3
CHILD_ARROW_RULE = 2


def _connectors(labels: Sequence[PositionedLabel]) -> list[tuple[int, RgbColor | None]]:
    """Return each distinct caret position with the colour of its first label."""

    seen: dict[int, RgbColor | None] = {}
    for label in labels:
        seen.setdefault(label.position, label.caret_color)
    return sorted(seen.items())


@dataclass(frozen=True, slots=True)
class _Turn:
    """Geometry of one resolved label."""

    label: PositionedLabel
    pending: tuple[PositionedLabel, ...]
    hub: int

    @property
    def color(self) -> RgbColor | None:
        """Return the colour of the label being resolved."""

        return self.label.caret_color

    @property
    def shares_position(self) -> bool:
        """Return whether a pending label still uses this caret column."""

        return any(other.position == self.label.position for other in self.pending)


class SegmentFormatter:
    """Render caret segments using a fixed :class:`LayoutConfig`."""

    def __init__(self, layout: LayoutConfig | None = None) -> None:
        """Create a formatter.

        Args:
            layout: Column constants; defaults apply when omitted.
        """

        self._layout = layout or LayoutConfig()

    @property
    def layout(self) -> LayoutConfig:
        """Return the column constants used by this formatter."""

        return self._layout

    def format(self, segment: CaretSegment) -> list[StyledLine]:
        """Return every line drawn for ``segment``.

        Args:
            segment: Merged segment to render.

        Returns:
            list[StyledLine]: Lines in output order; the last ends in a reset.
        """

        labels = sorted(segment.labels, key=lambda label: label.position)
        lines = [self._underbar(segment, labels), self._separator(segment.start, labels)]
        pending = list(labels)
        while pending:
            label = pending.pop(0)
            rest = tuple(pending)
            hub = max((other.position for other in rest if other.position > label.position), default=label.position)
            turn = _Turn(label, rest, hub)
            if label.has_children:
                lines.extend(self._parent_lines(segment.start, turn))
                lines.extend(self._child_block(segment.start, turn))
            else:
                lines.extend(self._plain_lines(segment.start, turn))
            if pending:
                lines.append(self._separator(segment.start, pending))
        lines[-1].reset()
        return lines

    def _underbar(self, segment: CaretSegment, labels: Sequence[PositionedLabel]) -> StyledLine:
        """Return the rule under the segment with a ``┬`` at every caret."""

        line = StyledLine().space(segment.start)
        previous = -1
        color: RgbColor | None = None
        for position, color in _connectors(labels):
            line.rule(position - previous - 1, color)
            line.glyph(Glyph.DOWN, color)
            previous = position
        line.rule(segment.end - segment.start - previous, color)
        return line

    @staticmethod
    def _separator(start: int, pending: Sequence[PositionedLabel]) -> StyledLine:
        """Return a line holding one ``│`` per pending caret column."""

        line = StyledLine()
        for position, color in _connectors(pending):
            line.pad_to(start + position)
            line.glyph(Glyph.VERTICAL, color)
        return line

    def _turn_head(self, start: int, turn: _Turn, rule: int) -> StyledLine:
        """Return the corner of a turn line followed by ``rule`` columns of rule."""

        corner = Glyph.RIGHT_TEE if turn.shares_position else Glyph.UP_CORNER
        line = StyledLine().space(start + turn.label.position)
        line.glyph(corner, turn.color)
        return line.rule(rule, turn.color)

    def _plain_lines(self, start: int, turn: _Turn) -> list[StyledLine]:
        """Return the turn line and continuation lines of a childless label.

        Continuation lines carry a ``│`` under the arrowhead and align their
        text one column right of the first message line.
        """

        padding = self._layout.arrow_padding
        message = turn.label.message
        line = self._turn_head(start, turn, turn.hub + 1 - turn.label.position)
        line.glyph(Glyph.ARROW, turn.color).space(padding).extend(message.first)
        lines = [line]
        arrow_column = start + turn.hub + TURN_ALLOWANCE
        for text in message.lines[1:]:
            continuation = self._separator(start, turn.pending).pad_to(arrow_column)
            continuation.glyph(Glyph.VERTICAL, turn.color).space(padding + 1)
            lines.append(continuation.extend(text))
        return lines

    def _parent_lines(self, start: int, turn: _Turn) -> list[StyledLine]:
        """Return the turn line and continuation lines of a label with children."""

        padding = self._layout.arrow_padding
        message = turn.label.message
        line = self._turn_head(start, turn, turn.hub + TURN_ALLOWANCE - turn.label.position)
        line.glyph(Glyph.DOWN, turn.color).rule(CHILD_ARROW_RULE, turn.color)
        line.glyph(Glyph.ARROW if message.is_single else Glyph.LEFT_TEE, turn.color)
        line.space(padding).extend(message.first)
        lines = [line]
        for text in message.lines[1:]:
            continuation = self._hub_line(start, turn)
            continuation.space(CHILD_ARROW_RULE).glyph(Glyph.VERTICAL, turn.color)
            lines.append(continuation.space(padding + 1).extend(text))
        return lines

    def _hub_line(self, start: int, turn: _Turn) -> StyledLine:
        """Return the pending separator with a ``│`` under the parent's ``┬``."""

        line = self._separator(start, turn.pending).pad_to(start + turn.hub + CHILD_HUB_OFFSET)
        return line.glyph(Glyph.VERTICAL, turn.color)

    def _child_block(self, start: int, turn: _Turn) -> list[StyledLine]:
        """Return the lines of every child label hanging from the parent hub."""

        lines = [self._hub_line(start, turn)]
        children = turn.label.child_labels
        for index, child in enumerate(children):
            is_last = index == len(children) - 1
            lines.extend(self._child_lines(start, turn, child, is_last))
            if not is_last:
                lines.append(self._hub_line(start, turn))
        return lines

    def _child_lines(self, start: int, turn: _Turn, child: TokenizedChild, is_last: bool) -> list[StyledLine]:
        """Return the lines of one child label.

        Args:
            start: Column of the segment start.
            turn: Geometry of the parent label.
            child: Child label to render.
            is_last: Whether ``child`` closes the block with ``╰``.

        Returns:
            list[StyledLine]: One line per wrapped child message line.
        """

        indent = self._layout.child_indent
        padding = self._layout.arrow_padding
        parent_color = turn.color
        color = child.caret_color if child.caret_color is not None else parent_color
        only = child.message.is_single
        column = start + turn.hub + CHILD_HUB_OFFSET
        lines = []
        for index, text in enumerate(child.message.lines):
            line = self._separator(start, turn.pending).pad_to(column)
            if index == 0:
                line.glyph(Glyph.UP_CORNER if is_last else Glyph.RIGHT_TEE, parent_color)
                line.rule(indent + 2, color)
                line.glyph(Glyph.ARROW if only else Glyph.LEFT_TEE, color)
                line.space(padding)
            elif is_last:
                line.space(indent + 3).glyph(Glyph.VERTICAL, color).space(padding + 1)
            else:
                line.glyph(Glyph.VERTICAL, parent_color).space(indent + 2)
                line.glyph(Glyph.VERTICAL, color).space(padding + 1)
            lines.append(line.extend(text))
        return lines


def format_segment(segment: CaretSegment, layout: LayoutConfig | None = None) -> list[StyledLine]:
    """Render ``segment`` with ``layout`` (defaults apply when omitted)."""

    return SegmentFormatter(layout).format(segment)


__all__ = ["SegmentFormatter", "format_segment"]
