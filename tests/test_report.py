# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for report writers."""

import io

import pytest

from caretline import Color, Label, ReportBuilder, ReportConfig, RgbColor, Span, WriterMeta, strip_ansi
from caretline.report import Report, colorize_input, is_text_sink
from caretline.styles import RESET

TEXT = "first word then second word"


class RecordingSink:
    """Text sink remembering every write call."""

    encoding = "utf-8"

    def __init__(self) -> None:
        self.chunks: list[str] = []

    def write(self, data: str) -> int:
        self.chunks.append(data)
        return len(data)


class FailingSink:
    """Text sink failing on the first write."""

    encoding = "utf-8"

    def write(self, data: str) -> int:
        raise OSError("disk full")


def _two_segment_report(**options: bool) -> Report:
    config = ReportConfig(trim_input=False, **options)
    return (
        ReportBuilder(TEXT, config)
        .push(Label(Span(0, 4), "left"))
        .push(Label(Span(16, 21), "right"))
        .finish()
    )


def test_write_emits_one_chunk_per_segment() -> None:
    report = _two_segment_report()
    sink = RecordingSink()

    report.write(sink)

    assert len(sink.chunks) == 2
    assert all(chunk.startswith(f"{TEXT}\n") for chunk in sink.chunks)
    assert all(chunk.endswith("\n\n") for chunk in sink.chunks)
    assert "".join(sink.chunks) == report.render()


def test_text_and_binary_sinks() -> None:
    report = _two_segment_report()
    text_sink = io.StringIO()
    binary_sink = io.BytesIO()

    report.write(text_sink)
    report.write(binary_sink)

    assert is_text_sink(text_sink)
    assert not is_text_sink(binary_sink)
    assert binary_sink.getvalue().decode("utf-8") == text_sink.getvalue()


def test_report_can_be_written_repeatedly() -> None:
    report = _two_segment_report()
    first, second = io.StringIO(), io.StringIO()

    report.write(first)
    report.write(second)

    assert first.getvalue() == second.getvalue()


def test_range_suffix_follows_echoed_input() -> None:
    report = _two_segment_report(show_range_suffix=True)

    lines = report.render().split("\n")

    assert lines[0] == f"{TEXT} [0 - 4]"
    assert f"{TEXT} [16 - 21]" in lines


def test_iter_write_yields_progress_lazily() -> None:
    report = _two_segment_report()
    sink = RecordingSink()

    steps = report.iter_write(sink)
    first = next(steps)

    assert len(sink.chunks) == 1
    assert first == WriterMeta(0, 2)
    assert first.is_first and not first.is_last and not first.is_only

    second = next(steps)
    assert second.is_last
    with pytest.raises(StopIteration):
        next(steps)


def test_iter_write_propagates_sink_errors() -> None:
    report = _two_segment_report()

    with pytest.raises(OSError, match="disk full"):
        report.write(FailingSink())
    with pytest.raises(OSError):
        next(report.iter_write(FailingSink()))


def test_iter_write_with_injects_extra_content() -> None:
    report = _two_segment_report()
    sink = RecordingSink()
    seen: list[WriterMeta] = []

    def after_segment(error: OSError | None, meta: WriterMeta) -> str | None:
        assert error is None
        seen.append(meta)
        return None if meta.is_last else "-- more --\n"

    metas = list(report.iter_write_with(sink, after_segment))

    assert metas == seen
    assert sink.chunks[1] == "-- more --\n"
    assert len(sink.chunks) == 3


def test_iter_write_with_can_swallow_errors() -> None:
    report = _two_segment_report()
    errors: list[OSError | None] = []

    def intercept(error: OSError | None, meta: WriterMeta) -> None:
        errors.append(error)

    metas = list(report.iter_write_with(FailingSink(), intercept))

    assert len(metas) == 2
    assert all(isinstance(error, OSError) for error in errors)


def test_iter_write_with_can_replace_the_result() -> None:
    report = _two_segment_report()

    def abort(error: OSError | None, meta: WriterMeta) -> None:
        raise RuntimeError(f"stopped at {meta.index}")

    with pytest.raises(RuntimeError, match="stopped at 0"):
        list(report.iter_write_with(RecordingSink(), abort))


def test_single_segment_meta_is_only() -> None:
    report = ReportBuilder("just one").push(Label(Span(0, 3), "one")).finish()

    (meta,) = report.iter_write(io.StringIO())

    assert meta.is_only and meta.is_first and meta.is_last


def test_colorize_input_paints_runs() -> None:
    color = RgbColor(1, 2, 3)

    assert colorize_input("abcdef", [(range(1, 3), color)]) == f"a{color.escape}bc{RESET}def"
    assert colorize_input("abc", []) == "abc"


def test_colorize_input_later_highlights_win() -> None:
    red, blue = RgbColor.RED, RgbColor.BLUE

    painted = colorize_input("abcd", [(range(0, 3), red), (range(2, 4), blue)])

    assert painted == f"{red.escape}ab{RESET}{blue.escape}cd{RESET}"


def test_echoed_input_uses_label_colors() -> None:
    config = ReportConfig(trim_input=False, colorize_echoed_input=True)
    label = Label(Span(6, 9), "styled", styles=(Color.GREEN,))
    report = ReportBuilder(TEXT, config).push(label).finish()

    echo = report.render().split("\n")[0]

    assert echo == f"first {RgbColor.GREEN.escape}word{RESET} then second word"
    assert strip_ansi(echo) == TEXT


def test_iter_write_with_skips_extra_content_after_a_failed_write() -> None:
    report = _two_segment_report()
    calls: list[int] = []

    def annotate(error: OSError | None, meta: WriterMeta) -> str:
        calls.append(meta.index)
        return "-- more --\n"

    metas = list(report.iter_write_with(FailingSink(), annotate))

    assert [meta.index for meta in metas] == [0, 1]
    assert calls == [0, 1]
