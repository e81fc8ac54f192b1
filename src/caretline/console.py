# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich console integration for printing caret reports."""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import Literal

from rich.console import Console
from rich.text import Text

from .report import Report


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal.

    Returns:
        bool: ``True`` when ``sys.stdout`` reports TTY support, ``False`` otherwise.
    """

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


class RichConsoleManager:
    """Provision Rich :class:`Console` instances keyed by colour settings."""

    def __init__(self) -> None:
        """Initialise an empty console cache keyed by colour and TTY state."""

        self._cache: dict[tuple[bool, bool], Console] = {}

    def get(self, *, color: bool) -> Console:
        """Return a Rich console configured for the ``color`` preference.

        Args:
            color: ``True`` when ANSI colour output should be enabled.

        Returns:
            Console: Cached or newly constructed console.
        """

        tty = detect_tty()
        key = (color, tty)
        if key not in self._cache:
            color_system: Literal["auto", "standard", "256", "truecolor", "windows"] | None = (
                "auto" if color and tty else None
            )
            self._cache[key] = Console(
                color_system=color_system,
                force_terminal=tty,
                no_color=not (color and tty),
                emoji=False,
                highlight=False,
                soft_wrap=True,
            )
        return self._cache[key]

    def __call__(self, *, color: bool) -> Console:
        """Return the cached console for ``color``.

        Args:
            color: Whether coloured output is requested.

        Returns:
            Console: Shared console for the requested mode.
        """

        return self.get(color=color)


@lru_cache(maxsize=1)
def console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


def report_text(report: Report) -> list[Text]:
    """Return one Rich :class:`Text` per caret segment of ``report``.

    Args:
        report: Report to convert.

    Returns:
        list[Text]: Segment blocks without the trailing blank line.
    """

    return [Text.from_ansi(report.render_segment(segment).rstrip("\n")) for segment in report.segments]


def print_report(report: Report, console: Console | None = None, *, color: bool = True) -> None:
    """Print ``report`` through a Rich console.

    Rich decides whether escapes survive, so colour is dropped on consoles
    that do not support it.

    Args:
        report: Report to print.
        console: Console to print to; a managed console is used when omitted.
        color: Colour preference for the managed console.
    """

    target = console or console_manager().get(color=color)
    for block in report_text(report):
        target.print(block)
        target.line()


__all__ = [
    "RichConsoleManager",
    "console_manager",
    "detect_tty",
    "print_report",
    "report_text",
]
