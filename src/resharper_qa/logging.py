# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run loggers: a rich console renderer for the CLI and an in-memory collector."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from functools import cache
from typing import Final

from rich.console import Console, RenderableType
from rich.rule import Rule
from rich.text import Text

from .interfaces import RunLogger

_INFO_SYMBOL: Final[str] = "ℹ️ "
_OK_SYMBOL: Final[str] = "✅ "
_WARN_SYMBOL: Final[str] = "⚠️ "
_FAIL_SYMBOL: Final[str] = "❌ "


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def _console(color: bool, emoji: bool, tty: bool) -> Console:
    return Console(
        color_system="auto" if color and tty else None,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


@dataclass(frozen=True, slots=True)
class ConsoleRunLogger(RunLogger):
    """:class:`RunLogger` printing to a shared Rich console.

    Besides the protocol methods it renders the CLI's own status lines,
    section rules and tables so every console write honours the same
    colour, emoji and verbosity flags.
    """

    use_emoji: bool = True
    use_color: bool | None = None
    quiet: bool = False
    verbose: bool = False

    @property
    def color_enabled(self) -> bool:
        """Return ``True`` when ANSI styling applies to this logger's output."""
        return detect_tty() if self.use_color is None else self.use_color

    def debug(self, message: str) -> None:
        if self.verbose and not self.quiet:
            self._line(message, style="dim")

    def info(self, message: str) -> None:
        if not self.quiet:
            self._line(message, style="cyan", symbol=_INFO_SYMBOL)

    def warn(self, message: str) -> None:
        self._line(message, style="yellow", symbol=_WARN_SYMBOL)

    def ok(self, message: str) -> None:
        """Print a success line."""
        self._line(message, style="green", symbol=_OK_SYMBOL)

    def fail(self, message: str) -> None:
        """Print an error line; never suppressed by ``quiet``."""
        self._line(message, style="red", symbol=_FAIL_SYMBOL)

    def section(self, title: str) -> None:
        """Print a header separating blocks of output."""

        if self.color_enabled:
            self.render(Text(""))
            self.render(Rule(title))
        else:
            self.render(Text(f"\n--- {title} ---"))

    def render(self, renderable: RenderableType) -> None:
        """Print any Rich renderable, such as a table, on the shared console."""

        _console(self.color_enabled, self.use_emoji, detect_tty()).print(renderable)

    def _line(self, message: str, *, style: str, symbol: str = "") -> None:
        text = Text(f"{symbol if self.use_emoji else ''}{message}")
        if self.color_enabled:
            text.stylize(style)
        self.render(text)


class LogLevel(str, Enum):
    """Severity attached to a collected log entry."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class LogEntry:
    """Single message recorded by :class:`LogCollector`."""

    level: LogLevel
    message: str


@dataclass(slots=True)
class LogCollector(RunLogger):
    """:class:`RunLogger` that records messages in memory for later inspection."""

    entries: list[LogEntry] = field(default_factory=list)

    def debug(self, message: str) -> None:
        self.entries.append(LogEntry(LogLevel.DEBUG, message))

    def info(self, message: str) -> None:
        self.entries.append(LogEntry(LogLevel.INFO, message))

    def warn(self, message: str) -> None:
        self.entries.append(LogEntry(LogLevel.WARNING, message))

    def messages(self, level: LogLevel | None = None) -> list[str]:
        """Return recorded messages, optionally restricted to ``level``.

        Args:
            level: Level to filter on; ``None`` returns every message.

        Returns:
            list[str]: Messages in the order they were recorded.
        """

        return [entry.message for entry in self.entries if level is None or entry.level is level]


__all__ = [
    "ConsoleRunLogger",
    "LogCollector",
    "LogEntry",
    "LogLevel",
    "detect_tty",
]
