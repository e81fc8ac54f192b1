# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for report building and layout."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

DEFAULT_LABEL_WIDTH: Final[int] = 30
CHILD_WIDTH_REDUCTION: Final[int] = 4


class ConfigError(ValueError):
    """Raised when configuration input is invalid."""


class OutOfBoundsPolicy(str, Enum):
    """Enumerate how label ranges outside the input are handled."""

    REJECT = "reject"
    TRUNCATE_SILENT = "truncate_silent"
    TRUNCATE_INDICATE = "truncate_indicate"

    @property
    def truncates(self) -> bool:
        """Return whether out-of-bounds ranges are clamped instead of rejected."""

        return self is not OutOfBoundsPolicy.REJECT


class TrimMode(str, Enum):
    """Enumerate how much context input trimming keeps around the labels."""

    WORDS = "words"
    CHARS = "chars"


class TrimPadding(BaseModel):
    """Context kept on each side of the labelled window when trimming."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    before: int = Field(default=1, ge=0)
    after: int = Field(default=1, ge=0)


class LayoutConfig(BaseModel):
    """Column constants used by the caret segment formatter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    arrow_padding: int = Field(default=1, ge=0)
    child_indent: int = Field(default=3, ge=0)


class ReportConfig(BaseModel):
    """Options controlling validation, wrapping, trimming and output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_label_width: int = Field(default=DEFAULT_LABEL_WIDTH, ge=1)
    max_child_label_width: int = Field(default=DEFAULT_LABEL_WIDTH - CHILD_WIDTH_REDUCTION, ge=1)
    show_range_suffix: bool = False
    trim_input: bool = True
    trim_mode: TrimMode = TrimMode.WORDS
    trim_padding: TrimPadding = Field(default_factory=TrimPadding)
    colorize_echoed_input: bool = False
    enable_caret_color: bool = False
    out_of_bounds_policy: OutOfBoundsPolicy = OutOfBoundsPolicy.REJECT
    split_on_equal_start: bool = True
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    @model_validator(mode="before")
    @classmethod
    def _derive_child_width(cls, data: Any) -> Any:
        """Derive ``max_child_label_width`` from ``max_label_width`` when omitted.

        Args:
            data: Raw input handed to the model.

        Returns:
            Any: Input with the child width filled in.
        """

        if not isinstance(data, Mapping) or data.get("max_child_label_width") is not None:
            return data
        payload = dict(data)
        payload.pop("max_child_label_width", None)
        label_width = payload.get("max_label_width", DEFAULT_LABEL_WIDTH)
        if isinstance(label_width, int) and not isinstance(label_width, bool):
            payload["max_child_label_width"] = max(label_width - CHILD_WIDTH_REDUCTION, 1)
        return payload

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ReportConfig:
        """Build a configuration from a plain mapping such as parsed TOML.

        ``trim_padding`` may be given as a ``[before, after]`` pair and style
        enums by their string values.

        Args:
            data: Mapping of option names to values.

        Returns:
            ReportConfig: Validated configuration.

        Raises:
            ConfigError: If the mapping contains unknown keys or invalid values.
        """

        payload = dict(data)
        padding = payload.get("trim_padding")
        if isinstance(padding, Sequence) and not isinstance(padding, str):
            if len(padding) != 2:
                raise ConfigError("trim_padding expects a [before, after] pair")
            payload["trim_padding"] = {"before": padding[0], "after": padding[1]}
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


__all__ = [
    "ConfigError",
    "LayoutConfig",
    "OutOfBoundsPolicy",
    "ReportConfig",
    "TrimMode",
    "TrimPadding",
]
