# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the caret segment formatter."""

from caretline.config import LayoutConfig
from caretline.formatter import SegmentFormatter, format_segment
from caretline.segments import CaretSegment, PositionedLabel, TokenizedChild
from caretline.styles import RESET, RgbColor
from caretline.tokens import Reset
from caretline.wrapping import WrappedMessage


def _label(position: int, text: str, width: int = 30, children: tuple[str, ...] = (), **extra: object) -> PositionedLabel:
    return PositionedLabel(
        position=position,
        offset=0,
        length=1,
        message=WrappedMessage.from_text(text, width),
        child_labels=tuple(TokenizedChild(WrappedMessage.from_text(child, 30)) for child in children),
        **extra,  # type: ignore[arg-type]
    )


def _plain(segment: CaretSegment, layout: LayoutConfig | None = None) -> list[str]:
    return [line.plain() for line in format_segment(segment, layout)]


def test_single_label_with_children() -> None:
    segment = CaretSegment(5, 14, (_label(2, "This is a test label", children=("first child", "second child")),))

    assert _plain(segment) == [
        " " * 5 + "──┬" + "─" * 7,
        " " * 7 + "│",
        " " * 7 + "╰──┬──▶ This is a test label",
        " " * 10 + "│",
        " " * 10 + "├─────▶ first child",
        " " * 10 + "│",
        " " * 10 + "╰─────▶ second child",
    ]


def test_three_labels_resolve_left_to_right() -> None:
    segment = CaretSegment(3, 26, (_label(2, "first"), _label(6, "second"), _label(13, "third")))

    assert _plain(segment) == [
        "   ──┬───┬──────┬──────────",
        "     │   │      │",
        "     ╰────────────▶ first",
        "         │      │",
        "         ╰────────▶ second",
        "                │",
        "                ╰─▶ third",
    ]


def test_underbar_rule_between_connectors_is_difference_minus_one() -> None:
    segment = CaretSegment(0, 9, (_label(1, "a"), _label(5, "b")))

    underbar = _plain(segment)[0]

    assert underbar == "─┬───┬────"
    assert len(underbar) == 10


def test_shared_position_uses_right_tee() -> None:
    segment = CaretSegment(0, 4, (_label(2, "a"), _label(2, "b")))

    assert _plain(segment) == [
        "──┬──",
        "  │",
        "  ├─▶ a",
        "  │",
        "  ╰─▶ b",
    ]


def test_wrapped_message_without_children_indents_continuations() -> None:
    segment = CaretSegment(0, 9, (_label(2, "aaa bbb", width=3), _label(6, "c")))

    assert _plain(segment) == [
        "──┬───┬───",
        "  │   │",
        "  ╰─────▶ aaa",
        "      │ │  bbb",
        "      │",
        "      ╰─▶ c",
    ]


def test_continuation_lines_keep_a_connector_under_the_arrow() -> None:
    color = RgbColor(9, 9, 9)
    segment = CaretSegment(0, 0, (_label(0, "aaa bbb", width=3, caret_color=color),))

    lines = format_segment(segment)

    assert [line.plain() for line in lines] == ["┬", "│", "╰─▶ aaa", "  │  bbb"]
    arrow_column = lines[2].plain().index("▶")
    assert lines[3].plain()[arrow_column] == "│"
    assert f"{color.escape}│{RESET}" in lines[3].render()


def test_wrapped_parent_with_children_uses_left_tee() -> None:
    segment = CaretSegment(0, 0, (_label(0, "aaa bbb", width=3, children=("kid",)),))

    assert _plain(segment) == [
        "┬",
        "│",
        "╰──┬──┤ aaa",
        "   │  │  bbb",
        "   │",
        "   ╰─────▶ kid",
    ]


def test_wrapped_children_pick_prefix_by_position_in_list() -> None:
    children = (
        TokenizedChild(WrappedMessage.from_text("xx\nyy", 10)),
        TokenizedChild(WrappedMessage.from_text("zz\nww", 10)),
    )
    label = PositionedLabel(0, 0, 1, WrappedMessage.from_text("p", 10), child_labels=children)

    assert _plain(CaretSegment(0, 0, (label,))) == [
        "┬",
        "│",
        "╰──┬──▶ p",
        "   │",
        "   ├─────┤ xx",
        "   │     │  yy",
        "   │",
        "   ╰─────┤ zz",
        "         │  ww",
    ]


def test_children_keep_pending_connectors_visible() -> None:
    segment = CaretSegment(0, 12, (_label(0, "a", children=("kid",)), _label(4, "b")))

    assert _plain(segment) == [
        "┬───┬────────",
        "│   │",
        "╰──────┬──▶ a",
        "    │  │",
        "    │  ╰─────▶ kid",
        "    │",
        "    ╰─▶ b",
    ]


def test_layout_constants_are_configurable() -> None:
    segment = CaretSegment(0, 0, (_label(0, "p", children=("kid",)),))
    layout = LayoutConfig(arrow_padding=2, child_indent=1)

    assert _plain(segment, layout) == [
        "┬",
        "│",
        "╰──┬──▶  p",
        "   │",
        "   ╰───▶  kid",
    ]


def test_last_line_ends_with_reset() -> None:
    lines = SegmentFormatter().format(CaretSegment(0, 2, (_label(0, "x"),)))

    assert lines[-1].tokens[-1] == Reset()
    assert str(lines[-1]).endswith(RESET)
    assert all(not line.tokens or line.tokens[-1] != Reset() for line in lines[:-1])


def test_caret_colors_paint_glyphs_per_label() -> None:
    red = RgbColor.RED
    blue = RgbColor.BLUE
    segment = CaretSegment(0, 5, (_label(0, "a", caret_color=red), _label(3, "b", caret_color=blue)))

    lines = [str(line) for line in format_segment(segment)]

    assert lines[0] == f"{red.escape}┬{RESET}{blue.escape}──{RESET}{blue.escape}┬{RESET}{blue.escape}──{RESET}"
    assert lines[1] == f"{red.escape}│{RESET}  {blue.escape}│{RESET}"
    assert lines[2].startswith(f"{red.escape}╰{RESET}{red.escape}────{RESET}{red.escape}▶{RESET} a")


def test_child_glyphs_fall_back_to_parent_color() -> None:
    red = RgbColor.RED
    green = RgbColor.GREEN
    children = (
        TokenizedChild(WrappedMessage.from_text("one", 10)),
        TokenizedChild(WrappedMessage.from_text("two", 10), caret_color=green),
    )
    label = PositionedLabel(0, 0, 1, WrappedMessage.from_text("p", 10), child_labels=children, caret_color=red)

    lines = [str(line) for line in format_segment(CaretSegment(0, 0, (label,)))]

    assert lines[4] == f"   {red.escape}├{RESET}{red.escape}─────{RESET}{red.escape}▶{RESET} one"
    assert lines[6] == f"   {red.escape}╰{RESET}{green.escape}─────{RESET}{green.escape}▶{RESET} two{RESET}"
