# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Word wrapping of label messages into styled lines."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from .styles import AnsiStyle
from .tokens import StyledLine

HYPHEN = "-"


class StyleScope(str, Enum):
    """Enumerate which wrapped lines receive a style."""

    ALL = "all"
    FIRST = "first"
    LAST = "last"


def _last_whitespace(text: str) -> int:
    """Return the index of the last whitespace in ``text``, or ``-1``."""

    for index in range(len(text) - 1, -1, -1):
        if text[index].isspace():
            return index
    return -1


def wrap_text(text: str, width: int) -> list[str]:
    """Split ``text`` into lines no wider than ``width``.

    Explicit line breaks always split. Longer lines break at the last
    whitespace at or before the width boundary; a word with no such
    whitespace is split one column early and hyphenated.

    Args:
        text: Raw message text.
        width: Maximum columns per line, excluding an injected hyphen.

    Returns:
        list[str]: Non-empty list of wrapped lines.

    Raises:
        ValueError: If ``width`` is smaller than one.
    """

    if width < 1:
        raise ValueError(f"wrap width must be positive, got {width}")
    lines: list[str] = []
    for raw in text.replace("\r", "").split("\n"):
        line = raw
        while len(line) > width:
            cut = _last_whitespace(line[: width + 1])
            if cut > 0:
                lines.append(line[:cut].rstrip())
                line = line[cut:].lstrip()
            elif cut == 0:
                line = line.lstrip()
            else:
                split = max(width - 1, 1)
                lines.append(line[:split] + HYPHEN)
                line = line[split:]
        lines.append(line.rstrip())
    kept = [line for line in lines if line]
    return kept or [""]


@dataclass(frozen=True, slots=True)
class WrappedMessage:
    """Label message after word wrapping, one styled line per visual line."""

    lines: tuple[StyledLine, ...]

    def __post_init__(self) -> None:
        """Require at least one line."""

        if not self.lines:
            raise ValueError("a wrapped message needs at least one line")

    @classmethod
    def from_text(cls, text: str, width: int) -> WrappedMessage:
        """Wrap ``text`` at ``width`` columns."""

        return cls(tuple(StyledLine.from_text(line) for line in wrap_text(text, width)))

    @property
    def first(self) -> StyledLine:
        """Return the first line."""

        return self.lines[0]

    @property
    def is_single(self) -> bool:
        """Return whether the message fits on one line."""

        return len(self.lines) == 1

    def with_style(self, style: AnsiStyle, scope: StyleScope = StyleScope.ALL) -> WrappedMessage:
        """Return a copy with ``style`` applied to the lines chosen by ``scope``.

        Args:
            style: Style to nest inside any existing styling.
            scope: Which lines to style.

        Returns:
            WrappedMessage: Restyled message.
        """

        last = len(self.lines) - 1
        styled = []
        for index, line in enumerate(self.lines):
            selected = (
                scope is StyleScope.ALL
                or (scope is StyleScope.FIRST and index == 0)
                or (scope is StyleScope.LAST and index == last)
            )
            styled.append(line.with_style(style) if selected else line)
        return WrappedMessage(tuple(styled))

    def with_styles(self, styles: Iterable[AnsiStyle], scope: StyleScope = StyleScope.ALL) -> WrappedMessage:
        """Apply ``styles`` in order, each nesting inside the previous one."""

        message = self
        for style in styles:
            message = message.with_style(style, scope)
        return message

    def insert_line(self, index: int, line: StyledLine) -> WrappedMessage:
        """Return a copy with ``line`` inserted before ``index``."""

        lines = list(self.lines)
        lines.insert(index, line)
        return WrappedMessage(tuple(lines))

    def plain_lines(self) -> tuple[str, ...]:
        """Return the visible text of each line."""

        return tuple(line.plain() for line in self.lines)

    def __iter__(self) -> Iterator[StyledLine]:
        """Iterate over the lines."""

        return iter(self.lines)

    def __len__(self) -> int:
        """Return the number of lines."""

        return len(self.lines)


__all__ = [
    "HYPHEN",
    "StyleScope",
    "WrappedMessage",
    "wrap_text",
]
