"""Sinks receive log messages and deliver them somewhere."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from .common import LogMsg
from .formatters import DefaultFormatter, Formatter


class Sink(ABC):
    """Destination for log messages."""

    @abstractmethod
    def log(self, msg: LogMsg) -> None:
        """Deliver one message."""

    @abstractmethod
    def set_formatter(self, formatter: Formatter) -> None:
        """Replace the formatter used for messages."""

    def flush(self) -> None:
        """Push out anything buffered; nothing by default."""


class ConsoleSink(Sink):
    """Writes formatted messages to a text stream, standard output by default."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._formatter: Formatter = DefaultFormatter()

    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def log(self, msg: LogMsg) -> None:
        out = self._out()
        out.write("ConsoleSink Log\n")
        out.write(f"format:{self._formatter.format(msg)}\n")

    def set_formatter(self, formatter: Formatter) -> None:
        self._formatter = formatter

    def flush(self) -> None:
        self._out().flush()