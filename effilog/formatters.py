"""Formatters that turn log messages into text."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable

from .common import LogMsg, level_name
from .sysutil import get_process_id, get_thread_id


class Formatter(ABC):
    """Turns a log message into its output form."""

    @abstractmethod
    def format(self, msg: LogMsg) -> str:
        """Return the formatted message."""


class DefaultFormatter(Formatter):
    """Human readable one-line format with time, level, location, pid and tid."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or datetime.now

    def format(self, msg: LogMsg) -> str:
        now = self._clock()
        return (
            f"[{now:%Y-%m-%d %H:%M:%S}] [{level_name(msg.level)}] "
            f"[{msg.location.file_name}:{msg.location.line}] "
            f"[PID:{get_process_id()} TID:{get_thread_id()}] {msg.message}"
        )