# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Styled line stream used to assemble every rendered report line.

A :class:`StyledLine` is an ordered list of tokens forming one visual line.
Spaces, rules, literals and resets coalesce with an identical neighbour on
push so two consecutive ``push`` calls render exactly like one larger token.
Styled tokens never coalesce because each one closes with its own reset.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from .styles import RESET, AnsiStyle, TextAttribute, is_foreground, sgr


class Glyph(str, Enum):
    """Enumerate the box-drawing glyphs used by caret reports."""

    VERTICAL = "│"
    RULE = "─"
    DOWN = "┬"
    UP_CORNER = "╰"
    RIGHT_TEE = "├"
    LEFT_TEE = "┤"
    ARROW = "▶"


@dataclass(frozen=True, slots=True)
class Space:
    """Run of blank columns."""

    width: int

    def render(self) -> str:
        """Return the blank run."""

        return " " * self.width

    @property
    def visible_width(self) -> int:
        """Return the number of columns covered."""

        return self.width


@dataclass(frozen=True, slots=True)
class Rule:
    """Run of horizontal rule glyphs."""

    width: int

    def render(self) -> str:
        """Return the ``─`` run."""

        return Glyph.RULE.value * self.width

    @property
    def visible_width(self) -> int:
        """Return the number of columns covered."""

        return self.width


@dataclass(frozen=True, slots=True)
class Connector:
    """Single box-drawing glyph occupying one column."""

    glyph: Glyph

    def render(self) -> str:
        """Return the glyph character."""

        return self.glyph.value

    @property
    def visible_width(self) -> int:
        """Return one column."""

        return 1


@dataclass(frozen=True, slots=True)
class Literal:
    """Run of message text without line breaks."""

    text: str

    def render(self) -> str:
        """Return the text unchanged."""

        return self.text

    @property
    def visible_width(self) -> int:
        """Return the length of the text."""

        return len(self.text)


@dataclass(frozen=True, slots=True)
class Reset:
    """SGR reset marker; occupies no columns."""

    def render(self) -> str:
        """Return the reset sequence."""

        return RESET

    @property
    def visible_width(self) -> int:
        """Return zero; a reset prints nothing visible."""

        return 0


@dataclass(frozen=True, slots=True)
class Styled:
    """Token wrapped in a stack of styles, outermost first."""

    styles: tuple[AnsiStyle, ...]
    inner: Token

    def render(self) -> str:
        """Return the inner token wrapped in its coalesced styles."""

        stack = coalesce_styles(self.styles)
        if not stack:
            return self.inner.render()
        return "".join(sgr(style) for style in stack) + self.inner.render() + RESET

    @property
    def visible_width(self) -> int:
        """Return the visible width of the inner token."""

        return self.inner.visible_width

    def nested(self, style: AnsiStyle) -> Styled:
        """Return a copy with ``style`` pushed innermost on the stack."""

        return Styled((*self.styles, style), self.inner)


Token: TypeAlias = Space | Rule | Connector | Literal | Reset | Styled


def coalesce_styles(styles: Sequence[AnsiStyle]) -> tuple[AnsiStyle, ...]:
    """Collapse a style stack into the minimal equivalent stack.

    A later foreground colour replaces an earlier one; a repeated attribute
    keeps only its first occurrence.

    Args:
        styles: Styles ordered outer to inner.

    Returns:
        tuple[AnsiStyle, ...]: Stack with redundant entries removed.
    """

    result: list[AnsiStyle] = []
    for style in styles:
        if is_foreground(style):
            result = [entry for entry in result if not is_foreground(entry)]
            result.append(style)
        elif isinstance(style, TextAttribute) and style in result:
            continue
        else:
            result.append(style)
    return tuple(result)


def _merge(left: Token, right: Token) -> Token | None:
    """Return ``left`` and ``right`` merged, or ``None`` when they cannot merge."""

    if isinstance(left, Space) and isinstance(right, Space):
        return Space(left.width + right.width)
    if isinstance(left, Rule) and isinstance(right, Rule):
        return Rule(left.width + right.width)
    if isinstance(left, Literal) and isinstance(right, Literal):
        return Literal(left.text + right.text)
    if isinstance(left, Reset) and isinstance(right, Reset):
        return left
    return None


class StyledLine:
    """One visual line built from coalescing tokens.

    The push helpers return ``self`` so lines read as a chain of glyph runs.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        """Create a line from ``tokens``, merging adjacent runs."""

        self._tokens: list[Token] = []
        for token in tokens:
            self.push(token)

    @classmethod
    def from_text(cls, text: str) -> StyledLine:
        """Return a line holding ``text`` as a single literal."""

        if "\n" in text:
            raise ValueError("styled lines cannot contain line breaks")
        return cls((Literal(text),))

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Return the tokens in render order."""

        return tuple(self._tokens)

    @property
    def width(self) -> int:
        """Return the number of columns the line occupies on screen."""

        return sum(token.visible_width for token in self._tokens)

    def push(self, token: Token) -> StyledLine:
        """Append ``token``, merging it into the previous token when possible.

        Zero-width spaces and rules are dropped. Empty literals are dropped.
        """

        if isinstance(token, (Space, Rule)) and token.width <= 0:
            return self
        if isinstance(token, Literal) and not token.text:
            return self
        if self._tokens:
            merged = _merge(self._tokens[-1], token)
            if merged is not None:
                self._tokens[-1] = merged
                return self
        self._tokens.append(token)
        return self

    def space(self, width: int) -> StyledLine:
        """Append a blank run of ``width`` columns."""

        return self.push(Space(width))

    def pad_to(self, column: int) -> StyledLine:
        """Append spaces until the line reaches ``column``."""

        return self.space(column - self.width)

    def rule(self, width: int, color: AnsiStyle | None = None) -> StyledLine:
        """Append a ``─`` run, optionally coloured."""

        if width <= 0:
            return self
        if color is None:
            return self.push(Rule(width))
        return self.push(Styled((color,), Rule(width)))

    def glyph(self, glyph: Glyph, color: AnsiStyle | None = None) -> StyledLine:
        """Append ``glyph``, optionally coloured."""

        if color is None:
            return self.push(Connector(glyph))
        return self.push(Styled((color,), Connector(glyph)))

    def text(self, text: str) -> StyledLine:
        """Append literal ``text``."""

        return self.push(Literal(text))

    def reset(self) -> StyledLine:
        """Append a style reset."""

        return self.push(Reset())

    def extend(self, other: StyledLine | Iterable[Token]) -> StyledLine:
        """Append every token of ``other`` in order."""

        tokens = other.tokens if isinstance(other, StyledLine) else other
        for token in tokens:
            self.push(token)
        return self

    def with_style(self, style: AnsiStyle) -> StyledLine:
        """Return a copy whose text is wrapped in ``style``.

        The new style nests inside any style already applied, so applying
        ``[outer, inner]`` in order yields ``outer`` then ``inner`` escapes.
        Structural tokens are left unstyled.
        """

        styled = StyledLine()
        for token in self._tokens:
            if isinstance(token, Literal):
                styled.push(Styled((style,), token))
            elif isinstance(token, Styled):
                styled.push(token.nested(style))
            else:
                styled.push(token)
        return styled

    def plain(self) -> str:
        """Return the line text without any escape sequences."""

        return "".join(_plain(token) for token in self._tokens)

    def render(self) -> str:
        """Return the line with its escape sequences."""

        return "".join(token.render() for token in self._tokens)

    def __str__(self) -> str:
        """Return the rendered line."""

        return self.render()

    def __iter__(self) -> Iterator[Token]:
        """Iterate over the tokens."""

        return iter(tuple(self._tokens))

    def __len__(self) -> int:
        """Return the number of tokens."""

        return len(self._tokens)

    def __eq__(self, other: object) -> bool:
        """Compare token sequences."""

        if not isinstance(other, StyledLine):
            return NotImplemented
        return self._tokens == other._tokens

    def __hash__(self) -> int:
        """Hash the token sequence."""

        return hash(tuple(self._tokens))

    def __repr__(self) -> str:
        """Return a debugging representation."""

        return f"StyledLine({self.render()!r})"


def _plain(token: Token) -> str:
    """Return the visible text of ``token``."""

    if isinstance(token, Styled):
        return _plain(token.inner)
    if isinstance(token, Reset):
        return ""
    return token.render()


__all__ = [
    "Connector",
    "Glyph",
    "Literal",
    "Reset",
    "Rule",
    "Space",
    "Styled",
    "StyledLine",
    "Token",
    "coalesce_styles",
]
