"""Leveled terminal output for trellis.

Messages at ``warning`` and above go to stderr; everything else goes to
stdout. The threshold comes from ``--log-level`` or ``TRELLIS_LOG_LEVEL``
and defaults to ``info``. Colour is disabled by ``--no-color``,
``NO_COLOR`` or ``TRELLIS_NO_COLOR``.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import IntEnum

from rich.console import Console
from rich.text import Text

LOG_LEVEL_ENV = "TRELLIS_LOG_LEVEL"
NO_COLOR_ENVS = ("NO_COLOR", "TRELLIS_NO_COLOR")


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


@dataclass(frozen=True)
class _LevelStyle:
    style: str
    stderr: bool


_STYLES = {
    LogLevel.TRACE: _LevelStyle("dim", False),
    LogLevel.DEBUG: _LevelStyle("cyan", False),
    LogLevel.INFO: _LevelStyle("", False),
    LogLevel.SUCCESS: _LevelStyle("green", False),
    LogLevel.WARNING: _LevelStyle("yellow", True),
    LogLevel.ERROR: _LevelStyle("bold red", True),
}

LOG_LEVEL_NAMES = tuple(level.name.lower() for level in LogLevel)

_threshold: LogLevel | None = None
_force_no_color = False


def parse_level(value: str | None) -> LogLevel:
    """Map a level name to a ``LogLevel``; unknown or empty names mean ``info``.

    Example:
        >>> parse_level("WARN")
        <LogLevel.WARNING: 40>
        >>> parse_level("loud")
        <LogLevel.INFO: 30>
    """
    name = (value or "").strip().upper()
    if name == "WARN":
        name = "WARNING"
    return LogLevel.__members__.get(name, LogLevel.INFO)


def threshold() -> LogLevel:
    global _threshold
    if _threshold is None:
        _threshold = parse_level(os.environ.get(LOG_LEVEL_ENV))
    return _threshold


def set_level(value: str | None) -> None:
    """Set the threshold; ``None`` re-reads the environment on next use."""
    global _threshold
    _threshold = None if value is None else parse_level(value)


def set_no_color(value: bool) -> None:
    global _force_no_color
    _force_no_color = value


def color_disabled() -> bool:
    return _force_no_color or any(os.environ.get(name) for name in NO_COLOR_ENVS)


def emit(level: LogLevel, message: str, *, style: str | None = None) -> None:
    if level < threshold():
        return
    entry = _STYLES[level]
    console = Console(
        file=sys.stderr if entry.stderr else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=color_disabled(),
    )
    console.print(Text(message, style=style or entry.style))


def trace(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.TRACE, message, style=style)


def debug(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.DEBUG, message, style=style)


def info(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.INFO, message, style=style)


def success(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.SUCCESS, message, style=style)


def warning(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.WARNING, message, style=style)


def error(message: str, *, style: str | None = None) -> None:
    emit(LogLevel.ERROR, message, style=style)
