# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Caller-facing label values pushed into a report builder."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .spans import Span, SpanLike, to_span
from .styles import AnsiStyle, RgbColor


@dataclass(frozen=True, slots=True)
class ChildLabel:
    """Secondary annotation rendered beneath its parent label."""

    message: str
    styles: tuple[AnsiStyle, ...] = ()
    caret_color: RgbColor | None = None

    def with_message(self, message: str) -> ChildLabel:
        """Return a copy with ``message`` replaced."""

        return replace(self, message=message)

    def with_style(self, style: AnsiStyle) -> ChildLabel:
        """Return a copy with ``style`` nested inside the existing styles."""

        return replace(self, styles=(*self.styles, style))

    def with_caret_color(self, color: RgbColor | None) -> ChildLabel:
        """Return a copy with an explicit caret colour."""

        return replace(self, caret_color=color)


@dataclass(frozen=True, slots=True)
class Label:
    """Annotated range of the reference input.

    Attributes:
        range: Inclusive span of annotated positions. Any spelling accepted by
            :func:`caretline.spans.to_span` may be passed.
        message: Label text; explicit line breaks are kept.
        child_labels: Child annotations in display order.
        styles: Styles wrapped around the message, outermost first.
        caret_color: Colour for the label's connector glyphs.
    """

    range: Span
    message: str
    child_labels: tuple[ChildLabel, ...] = field(default=())
    styles: tuple[AnsiStyle, ...] = ()
    caret_color: RgbColor | None = None

    def __post_init__(self) -> None:
        """Normalise the range and freeze the sequence fields."""

        object.__setattr__(self, "range", to_span(self.range))
        object.__setattr__(self, "child_labels", tuple(self.child_labels))
        object.__setattr__(self, "styles", tuple(self.styles))

    @classmethod
    def at(cls, value: SpanLike, message: str) -> Label:
        """Return a label for ``value`` carrying ``message``."""

        return cls(to_span(value), message)

    def with_message(self, message: str) -> Label:
        """Return a copy with ``message`` replaced."""

        return replace(self, message=message)

    def with_style(self, style: AnsiStyle) -> Label:
        """Return a copy with ``style`` nested inside the existing styles."""

        return replace(self, styles=(*self.styles, style))

    def with_child(self, child: ChildLabel | str) -> Label:
        """Return a copy with ``child`` appended to the child labels."""

        if isinstance(child, str):
            child = ChildLabel(child)
        return replace(self, child_labels=(*self.child_labels, child))

    def with_caret_color(self, color: RgbColor | None) -> Label:
        """Return a copy with an explicit caret colour."""

        return replace(self, caret_color=color)


__all__ = ["ChildLabel", "Label"]
