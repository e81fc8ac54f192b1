# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for inclusive spans and saturating arithmetic."""

import pytest

from caretline.spans import MAX_POSITION, Span, sat_add, sat_sub, to_span


def test_saturating_helpers_clamp_to_position_range() -> None:
    assert sat_sub(0, 5) == 0
    assert sat_sub(7, 2) == 5
    assert sat_add(MAX_POSITION, 1) == MAX_POSITION
    assert sat_add(-10, 3) == 0


def test_span_rejects_inverted_bounds() -> None:
    with pytest.raises(ValueError):
        Span(3, 2)


def test_span_length_saturates_at_max_position() -> None:
    assert Span(4, 4).length == 1
    assert len(Span(2, 9)) == 8
    assert Span(0, MAX_POSITION).length == MAX_POSITION


def test_span_formatting() -> None:
    assert str(Span(1, 1)) == "1"
    assert str(Span(1, 3)) == "1..=3"
    assert Span(5, 14).describe() == "5 - 14"


def test_span_relations() -> None:
    outer = Span(2, 10)
    assert outer.contains_span(Span(3, 4))
    assert not outer.contains_span(Span(9, 11))
    assert outer.overlaps(Span(10, 12))
    assert not outer.overlaps(Span(11, 12))
    assert 2 in outer
    assert 11 not in outer


def test_span_clamp_and_shift() -> None:
    assert Span(-3, 40).clamp(10) == Span(0, 10)
    assert Span(50, 60).clamp(10) == Span(10, 10)
    assert Span(2, 4).shift(-5) == Span(0, 0)
    assert Span(2, 4).shift(3) == Span(5, 7)


def test_to_span_accepts_python_spellings() -> None:
    assert to_span(range(2, 5)) == Span(2, 4)
    assert to_span(slice(1, 3)) == Span(1, 2)
    assert to_span(slice(3, None)) == Span(3, MAX_POSITION)
    assert to_span((4, 6)) == Span(4, 6)
    assert to_span(7) == Span(7, 7)
    assert to_span(range(0, 0)) == Span(0, 0)


@pytest.mark.parametrize("value", [True, "1..2", (1, 2, 3), 1.5])
def test_to_span_rejects_unsupported_values(value: object) -> None:
    with pytest.raises(TypeError):
        to_span(value)  # type: ignore[arg-type]


def test_to_span_rejects_stepped_ranges() -> None:
    with pytest.raises(ValueError):
        to_span(range(0, 10, 2))
    with pytest.raises(ValueError):
        to_span(slice(0, 10, 3))
