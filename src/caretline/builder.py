# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Validate labels and assemble them into a :class:`~caretline.report.Report`."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from .config import OutOfBoundsPolicy, ReportConfig
from .errors import (
    EmptyInputError,
    LabelChildEmptyMessageError,
    LabelEmptyMessageError,
    NoLabelsError,
    OutOfBoundsError,
)
from .labels import ChildLabel, Label
from .merging import MergeCandidate, caret_offset, merge_overlaps
from .report import Report
from .segments import PositionedLabel, TokenizedChild
from .spans import Span
from .styles import AnsiStyle, Color, RgbColor, is_foreground, to_rgb
from .tokens import StyledLine
from .trimming import TrimmedInput, trim_input
from .wrapping import WrappedMessage

LOGGER = logging.getLogger(__name__)

TRUNCATION_NOTICE: Final[str] = "[ Label Range Truncated ]"
TRUNCATION_STYLE: Final[AnsiStyle] = Color.BRIGHT_YELLOW


@dataclass(frozen=True, slots=True)
class _CheckedLabel:
    """Label that passed validation, with its span clamped to the input."""

    label: Label
    span: Span
    truncated: bool
    index: int


def resolve_caret_color(
    explicit: RgbColor | None,
    styles: tuple[AnsiStyle, ...],
    *,
    enabled: bool,
    fallback: RgbColor | None = None,
) -> RgbColor | None:
    """Return the colour used for a label's connector glyphs.

    Args:
        explicit: Colour set directly on the label.
        styles: The label's message styles, outermost first.
        enabled: Whether caret colouring is switched on.
        fallback: Parent colour used by child labels.

    Returns:
        RgbColor | None: Resolved colour, or ``None`` for uncoloured glyphs.
    """

    if not enabled:
        return None
    if explicit is not None:
        return explicit
    if styles:
        derived = to_rgb(styles[0])
        if derived is not None:
            return derived
    return fallback


def _highlight_color(caret_color: RgbColor | None, styles: tuple[AnsiStyle, ...]) -> RgbColor | None:
    """Return the colour painted over the echoed input for a label."""

    if caret_color is not None:
        return caret_color
    for style in styles:
        if is_foreground(style):
            return to_rgb(style)
    return None


class ReportBuilder:
    """Collect labels for one reference input and build the report.

    ``finish`` validates and builds without consuming the builder, so a failed
    attempt can be corrected with further pushes and retried.
    """

    def __init__(self, input: str, config: ReportConfig | None = None, labels: Iterable[Label] = ()) -> None:
        """Create a builder.

        Args:
            input: Reference text the labels point into.
            config: Report configuration; defaults apply when omitted.
            labels: Labels to start with, in declaration order.
        """

        self._input = input
        self._config = config or ReportConfig()
        self._labels: list[Label] = list(labels)

    @property
    def input(self) -> str:
        """Return the reference input."""

        return self._input

    @property
    def config(self) -> ReportConfig:
        """Return the active configuration."""

        return self._config

    @property
    def labels(self) -> tuple[Label, ...]:
        """Return the pushed labels in declaration order."""

        return tuple(self._labels)

    def push(self, label: Label) -> ReportBuilder:
        """Append ``label`` and return the builder for chaining."""

        self._labels.append(label)
        return self

    def extend(self, labels: Iterable[Label]) -> ReportBuilder:
        """Append every label of ``labels`` and return the builder."""

        self._labels.extend(labels)
        return self

    def with_config(self, config: ReportConfig) -> ReportBuilder:
        """Replace the configuration and return the builder."""

        self._config = config
        return self

    def finish(self) -> Report:
        """Validate the collected labels and assemble the report.

        Returns:
            Report: Immutable report ready to be written.

        Raises:
            NoLabelsError: If no label was pushed.
            EmptyInputError: If the input is empty.
            OutOfBoundsError: If a range leaves the input under the reject policy.
            LabelEmptyMessageError: If a label message is empty.
            LabelChildEmptyMessageError: If a child label message is empty.
        """

        checked = self._validate()
        config = self._config
        if config.trim_input:
            trimmed = trim_input(
                self._input,
                [item.span for item in checked],
                mode=config.trim_mode,
                padding=config.trim_padding,
            )
        else:
            trimmed = TrimmedInput.untrimmed(self._input)
        candidates = [self._candidate(item, trimmed) for item in checked]
        segments = merge_overlaps(candidates, split_on_equal_start=config.split_on_equal_start)
        return Report(
            input=trimmed.text,
            segments=tuple(segments),
            show_range_suffix=config.show_range_suffix,
            colorize_echoed_input=config.colorize_echoed_input,
            layout=config.layout,
        )

    def _validate(self) -> list[_CheckedLabel]:
        """Check the pushed labels and clamp their spans when the policy allows it.

        Returns:
            list[_CheckedLabel]: Labels in declaration order with their final spans.

        Raises:
            ReportBuildError: On the first failing check.
        """

        if not self._labels:
            LOGGER.debug("report rejected: no labels")
            raise NoLabelsError()
        if not self._input:
            LOGGER.debug("report rejected: empty input")
            raise EmptyInputError()
        valid = Span(0, len(self._input) - 1)
        policy = self._config.out_of_bounds_policy
        checked: list[_CheckedLabel] = []
        for index, label in enumerate(self._labels):
            span = label.range
            truncated = False
            if not valid.contains_span(span):
                if policy is OutOfBoundsPolicy.REJECT:
                    LOGGER.debug("label #%d range %s is out of bounds", index, span)
                    raise OutOfBoundsError(attempted=span, valid=valid)
                span = span.clamp(valid.end)
                truncated = True
                LOGGER.debug("label #%d range %s truncated to %s", index, label.range, span)
            if not label.message:
                raise LabelEmptyMessageError(index, label.range)
            for child_index, child in enumerate(label.child_labels):
                if not child.message:
                    raise LabelChildEmptyMessageError(index, child_index, label.range)
            checked.append(_CheckedLabel(label, span, truncated, index))
        return checked

    def _candidate(self, item: _CheckedLabel, trimmed: TrimmedInput) -> MergeCandidate:
        """Wrap and colour ``item`` and place it over the trimmed input."""

        config = self._config
        label = item.label
        span = trimmed.rebase(item.span)
        caret_color = resolve_caret_color(label.caret_color, label.styles, enabled=config.enable_caret_color)
        message = WrappedMessage.from_text(label.message, config.max_label_width).with_styles(label.styles)
        if item.truncated and config.out_of_bounds_policy is OutOfBoundsPolicy.TRUNCATE_INDICATE:
            notice = StyledLine.from_text(TRUNCATION_NOTICE).with_style(TRUNCATION_STYLE)
            message = message.insert_line(0, notice)
        positioned = PositionedLabel(
            position=caret_offset(span.length),
            offset=0,
            length=span.length,
            message=message,
            child_labels=tuple(self._child(child, caret_color) for child in label.child_labels),
            caret_color=caret_color,
            highlight_color=_highlight_color(caret_color, label.styles),
        )
        return MergeCandidate(span=span, label=positioned, index=item.index)

    def _child(self, child: ChildLabel, parent_color: RgbColor | None) -> TokenizedChild:
        """Wrap a child message and resolve its caret colour."""

        config = self._config
        message = WrappedMessage.from_text(child.message, config.max_child_label_width).with_styles(child.styles)
        color = resolve_caret_color(
            child.caret_color,
            child.styles,
            enabled=config.enable_caret_color,
            fallback=parent_color,
        )
        return TokenizedChild(message=message, caret_color=color)


__all__ = ["TRUNCATION_NOTICE", "ReportBuilder", "resolve_caret_color"]
