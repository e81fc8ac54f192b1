# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for report configuration models."""

import pytest
from pydantic import ValidationError

from caretline.config import (
    ConfigError,
    LayoutConfig,
    OutOfBoundsPolicy,
    ReportConfig,
    TrimMode,
    TrimPadding,
)


def test_defaults() -> None:
    config = ReportConfig()

    assert config.max_label_width == 30
    assert config.max_child_label_width == 26
    assert config.trim_input is True
    assert config.trim_mode is TrimMode.WORDS
    assert config.trim_padding == TrimPadding(before=1, after=1)
    assert config.out_of_bounds_policy is OutOfBoundsPolicy.REJECT
    assert config.split_on_equal_start is True
    assert config.layout == LayoutConfig(arrow_padding=1, child_indent=3)
    assert not (config.show_range_suffix or config.colorize_echoed_input or config.enable_caret_color)


def test_child_width_follows_label_width() -> None:
    assert ReportConfig(max_label_width=10).max_child_label_width == 6
    assert ReportConfig(max_label_width=3).max_child_label_width == 1
    assert ReportConfig(max_label_width=10, max_child_label_width=9).max_child_label_width == 9


def test_widths_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        ReportConfig(max_label_width=0)
    with pytest.raises(ValidationError):
        ReportConfig(max_child_label_width=0)


def test_config_is_frozen() -> None:
    config = ReportConfig()

    with pytest.raises(ValidationError):
        config.max_label_width = 12  # type: ignore[misc]


def test_policy_truncation_flag() -> None:
    assert not OutOfBoundsPolicy.REJECT.truncates
    assert OutOfBoundsPolicy.TRUNCATE_SILENT.truncates
    assert OutOfBoundsPolicy.TRUNCATE_INDICATE.truncates


def test_from_mapping_accepts_plain_values() -> None:
    config = ReportConfig.from_mapping(
        {
            "max_label_width": 20,
            "trim_padding": [2, 0],
            "trim_mode": "chars",
            "out_of_bounds_policy": "truncate_indicate",
            "layout": {"arrow_padding": 2},
        },
    )

    assert config.max_child_label_width == 16
    assert config.trim_padding == TrimPadding(before=2, after=0)
    assert config.trim_mode is TrimMode.CHARS
    assert config.out_of_bounds_policy is OutOfBoundsPolicy.TRUNCATE_INDICATE
    assert config.layout == LayoutConfig(arrow_padding=2, child_indent=3)


@pytest.mark.parametrize(
    "payload",
    [{"bogus": True}, {"trim_padding": [1]}, {"out_of_bounds_policy": "explode"}, {"layout": {"child_indent": -1}}],
)
def test_from_mapping_rejects_invalid_input(payload: dict[str, object]) -> None:
    with pytest.raises(ConfigError):
        ReportConfig.from_mapping(payload)
