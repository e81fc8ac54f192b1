# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ANSI style primitives composed by the report renderer.

Three kinds of style exist: a named :class:`Color` from the 16-colour palette,
a 24-bit :class:`RgbColor`, and a :class:`TextAttribute` such as bold.  Each
renders to exactly one SGR escape sequence.  Named colours also map onto a
fixed RGB table so caret colours can be derived from a label's text colour.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Final, TypeAlias

from rich.color import Color as RichColor
from rich.color import ColorParseError

ESCAPE: Final[str] = "\033["
RESET: Final[str] = "\033[0m"
_ANSI_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*m")
_TRUECOLOR_RE: Final[re.Pattern[str]] = re.compile(r"^38;2;(\d{1,3});(\d{1,3});(\d{1,3})$")


class Hue(IntEnum):
    """Enumerate the eight base hues of the ANSI palette."""

    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7


@dataclass(frozen=True, slots=True)
class RgbColor:
    """24-bit foreground colour."""

    red: int
    green: int
    blue: int

    BLACK: ClassVar[RgbColor]
    RED: ClassVar[RgbColor]
    GREEN: ClassVar[RgbColor]
    YELLOW: ClassVar[RgbColor]
    BLUE: ClassVar[RgbColor]
    MAGENTA: ClassVar[RgbColor]
    CYAN: ClassVar[RgbColor]
    WHITE: ClassVar[RgbColor]
    BRIGHT_BLACK: ClassVar[RgbColor]
    BRIGHT_RED: ClassVar[RgbColor]
    BRIGHT_GREEN: ClassVar[RgbColor]
    BRIGHT_YELLOW: ClassVar[RgbColor]
    BRIGHT_BLUE: ClassVar[RgbColor]
    BRIGHT_MAGENTA: ClassVar[RgbColor]
    BRIGHT_CYAN: ClassVar[RgbColor]
    BRIGHT_WHITE: ClassVar[RgbColor]

    def __post_init__(self) -> None:
        """Reject channels outside ``0..255``."""

        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    @property
    def escape(self) -> str:
        """Return the truecolor SGR sequence for this colour."""

        return f"{ESCAPE}38;2;{self.red};{self.green};{self.blue}m"


@dataclass(frozen=True, slots=True)
class Color:
    """Named colour from the 16-colour ANSI palette."""

    hue: Hue
    bright: bool = False

    BLACK: ClassVar[Color]
    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    YELLOW: ClassVar[Color]
    BLUE: ClassVar[Color]
    MAGENTA: ClassVar[Color]
    CYAN: ClassVar[Color]
    WHITE: ClassVar[Color]
    BRIGHT_BLACK: ClassVar[Color]
    BRIGHT_RED: ClassVar[Color]
    BRIGHT_GREEN: ClassVar[Color]
    BRIGHT_YELLOW: ClassVar[Color]
    BRIGHT_BLUE: ClassVar[Color]
    BRIGHT_MAGENTA: ClassVar[Color]
    BRIGHT_CYAN: ClassVar[Color]
    BRIGHT_WHITE: ClassVar[Color]

    @property
    def code(self) -> int:
        """Return the SGR foreground code (30-37, or 90-97 when bright)."""

        return 30 + int(self.hue) + (60 if self.bright else 0)

    @property
    def escape(self) -> str:
        """Return the SGR sequence for this colour."""

        return f"{ESCAPE}{self.code}m"

    def to_rgb(self) -> RgbColor:
        """Return the fixed RGB equivalent of this palette entry."""

        return _PALETTE_RGB[(self.hue, self.bright)]


class TextAttribute(IntEnum):
    """Enumerate SGR text attributes by their code."""

    BOLD = 1
    DIM = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    INVERSE = 7
    HIDDEN = 8
    STRIKETHROUGH = 9

    @property
    def escape(self) -> str:
        """Return the SGR sequence for this attribute."""

        return f"{ESCAPE}{int(self)}m"


AnsiStyle: TypeAlias = Color | RgbColor | TextAttribute

_PALETTE_RGB: Final[dict[tuple[Hue, bool], RgbColor]] = {
    (Hue.BLACK, False): RgbColor(12, 12, 12),
    (Hue.RED, False): RgbColor(197, 15, 12),
    (Hue.GREEN, False): RgbColor(19, 161, 14),
    (Hue.YELLOW, False): RgbColor(193, 156, 0),
    (Hue.BLUE, False): RgbColor(0, 55, 218),
    (Hue.MAGENTA, False): RgbColor(136, 23, 152),
    (Hue.CYAN, False): RgbColor(58, 150, 221),
    (Hue.WHITE, False): RgbColor(204, 204, 204),
    (Hue.BLACK, True): RgbColor(118, 118, 118),
    (Hue.RED, True): RgbColor(231, 72, 86),
    (Hue.GREEN, True): RgbColor(22, 198, 12),
    (Hue.YELLOW, True): RgbColor(249, 241, 165),
    (Hue.BLUE, True): RgbColor(59, 120, 255),
    (Hue.MAGENTA, True): RgbColor(180, 0, 255),
    (Hue.CYAN, True): RgbColor(97, 214, 214),
    (Hue.WHITE, True): RgbColor(242, 242, 242),
}

for (_hue, _bright), _rgb in _PALETTE_RGB.items():
    _name = f"BRIGHT_{_hue.name}" if _bright else _hue.name
    setattr(Color, _name, Color(_hue, _bright))
    setattr(RgbColor, _name, _rgb)
del _hue, _bright, _rgb, _name


def sgr(style: AnsiStyle) -> str:
    """Return the SGR escape sequence for ``style``."""

    return style.escape


def is_foreground(style: AnsiStyle) -> bool:
    """Return ``True`` when ``style`` sets the foreground colour."""

    return isinstance(style, (Color, RgbColor))


def to_rgb(style: AnsiStyle) -> RgbColor | None:
    """Cast ``style`` to an RGB colour when it names one.

    Args:
        style: Style to convert.

    Returns:
        RgbColor | None: RGB equivalent for colours; ``None`` for attributes.
    """

    if isinstance(style, RgbColor):
        return style
    if isinstance(style, Color):
        return style.to_rgb()
    return None


def parse_style(sequence: str) -> AnsiStyle:
    """Parse a single SGR escape sequence back into a style.

    Args:
        sequence: Escape sequence such as ``"\\x1b[31m"`` or
            ``"\\x1b[38;2;1;2;3m"``.

    Returns:
        AnsiStyle: Style equivalent to ``sequence``.

    Raises:
        ValueError: If ``sequence`` is not a recognised SGR sequence.
    """

    if not (sequence.startswith(ESCAPE) and sequence.endswith("m")):
        raise ValueError(f"not an SGR sequence: {sequence!r}")
    body = sequence[len(ESCAPE) : -1]
    match = _TRUECOLOR_RE.match(body)
    if match:
        red, green, blue = (int(part) for part in match.groups())
        return RgbColor(red, green, blue)
    if not body.isdigit():
        raise ValueError(f"unsupported SGR sequence: {sequence!r}")
    code = int(body)
    if 30 <= code <= 37:
        return Color(Hue(code - 30))
    if 90 <= code <= 97:
        return Color(Hue(code - 90), bright=True)
    try:
        return TextAttribute(code)
    except ValueError as exc:
        raise ValueError(f"unsupported SGR code: {code}") from exc


def style_from_name(name: str) -> AnsiStyle:
    """Resolve a human-readable style name.

    Palette names (``"red"``, ``"bright_cyan"``) and attribute names
    (``"bold"``) resolve locally; anything else, such as ``"#ff8800"`` or
    ``"rgb(1,2,3)"``, is parsed by Rich and returned as an RGB colour.

    Args:
        name: Style name to resolve.

    Returns:
        AnsiStyle: Matching style.

    Raises:
        ValueError: If the name cannot be resolved.
    """

    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    bright = key.startswith("bright_")
    hue_key = key.removeprefix("bright_").upper()
    if hue_key in Hue.__members__:
        return Color(Hue[hue_key], bright)
    if key.upper() in TextAttribute.__members__:
        return TextAttribute[key.upper()]
    try:
        triplet = RichColor.parse(name.strip()).get_truecolor()
    except ColorParseError as exc:
        raise ValueError(f"unknown style name: {name!r}") from exc
    return RgbColor(triplet.red, triplet.green, triplet.blue)


def strip_ansi(text: str) -> str:
    """Return ``text`` with every SGR escape sequence removed."""

    return _ANSI_ESCAPE_RE.sub("", text)


__all__ = [
    "RESET",
    "AnsiStyle",
    "Color",
    "Hue",
    "RgbColor",
    "TextAttribute",
    "is_foreground",
    "parse_style",
    "sgr",
    "strip_ansi",
    "style_from_name",
    "to_rgb",
]
