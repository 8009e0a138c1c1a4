"""Log levels, source locations and log messages."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class LogLevel(enum.IntEnum):
    """Severity of a log message; higher values are more severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5
    OFF = 6


_LEVEL_NAMES = {
    LogLevel.TRACE: "Trace",
    LogLevel.DEBUG: "Debug",
    LogLevel.INFO: "Info",
    LogLevel.WARN: "Warn",
    LogLevel.ERROR: "Error",
    LogLevel.FATAL: "Fatal",
    LogLevel.OFF: "Off",
}


def level_name(level: LogLevel | int) -> str:
    """Return the display name of a log level."""
    return _LEVEL_NAMES[LogLevel(level)]


def _base_name(path: str) -> str:
    pos = path.rfind("/")
    if pos != -1:
        return path[pos + 1:]
    pos = path.rfind("\\")
    if pos != -1:
        return path[pos + 1:]
    return path


@dataclass(frozen=True)
class SourceLocation:
    """Where a log call was made; the file name is reduced to its base name."""

    file_name: str = ""
    line: int = 0
    func_name: str = ""

    def __post_init__(self) -> None:
        if self.file_name:
            object.__setattr__(self, "file_name", _base_name(self.file_name))


@dataclass(frozen=True)
class LogMsg:
    """A single log record handed to sinks."""

    level: LogLevel
    message: str
    location: SourceLocation = field(default_factory=SourceLocation)