"""Loggers that dispatch messages to sinks, and a process-wide logger."""

from __future__ import annotations

import sys
from typing import Any, Iterable

from .common import LogLevel, LogMsg, SourceLocation
from .sinks import Sink


class Logger:
    """Sends messages at or above ``level`` to every sink."""

    def __init__(self, sinks: Sink | Iterable[Sink], level: LogLevel = LogLevel.INFO) -> None:
        if isinstance(sinks, Sink):
            sinks = [sinks]
        self._sinks: list[Sink] = list(sinks)
        self.level = LogLevel(level)

    @property
    def sinks(self) -> tuple[Sink, ...]:
        return tuple(self._sinks)

    def _should_log(self, level: LogLevel) -> bool:
        return level >= self.level and bool(self._sinks)

    def _log(self, msg: LogMsg) -> None:
        for sink in self._sinks:
            sink.log(msg)

    def log(self, level: LogLevel, location: SourceLocation | None, message: str) -> None:
        """Log ``message`` at ``level`` from ``location``."""
        if not self._should_log(level):
            return
        self._log(LogMsg(LogLevel(level), message, location or SourceLocation()))

    def flush(self) -> None:
        """Flush every sink."""
        for sink in self._sinks:
            sink.flush()


class VariadicLogger(Logger):
    """Logger whose messages are built from a ``str.format`` pattern."""

    def log(
        self,
        location: SourceLocation | None,
        level: LogLevel,
        fmt: str,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Format ``fmt`` with the arguments and log it; skipped below the level."""
        if not self._should_log(level):
            return
        message = fmt.format(*args, **kwargs)
        self._log(LogMsg(LogLevel(level), message, location or SourceLocation()))


_current: VariadicLogger | None = None


def set_logger(logger: VariadicLogger | None) -> None:
    """Install the process-wide logger used by the ``log_*`` functions."""
    global _current
    _current = logger


def get_logger() -> VariadicLogger | None:
    """Return the process-wide logger, if one is installed."""
    return _current


def _log_from_caller(level: LogLevel, fmt: str, args: tuple, kwargs: dict) -> None:
    logger = _current
    if logger is None:
        return
    frame = sys._getframe(2)
    location = SourceLocation(frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name)
    logger.log(location, level, fmt, *args, **kwargs)


def log_trace(fmt: str, *args: Any, **kwargs: Any) -> None:
    _log_from_caller(LogLevel.TRACE, fmt, args, kwargs)


def log_debug(fmt: str, *args: Any, **kwargs: Any) -> None:
    _log_from_caller(LogLevel.DEBUG, fmt, args, kwargs)


def log_info(fmt: str, *args: Any, **kwargs: Any) -> None:
    _log_from_caller(LogLevel.INFO, fmt, args, kwargs)


def log_warn(fmt: str, *args: Any, **kwargs: Any) -> None:
    _log_from_caller(LogLevel.WARN, fmt, args, kwargs)


def log_error(fmt: str, *args: Any, **kwargs: Any) -> None:
    _log_from_caller(LogLevel.ERROR, fmt, args, kwargs)


def log_critical(fmt: str, *args: Any, **kwargs: Any) -> None:
    _log_from_caller(LogLevel.FATAL, fmt, args, kwargs)