"""Render decoded log records as text, by a pattern of % placeholders.

Placeholders:
    %l level, %D date and time, %S timestamp in seconds,
    %M timestamp in milliseconds, %p process id, %t thread id,
    %# line, %F file name, %f function name, %v message.
An unknown placeholder is kept as written; a trailing ``%`` is dropped.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

_PREFIX_LIMIT = 1023


@dataclass
class EffectiveMsg:
    """A decoded log record."""

    level: str = ""
    timestamp: int = 0
    pid: int = 0
    tid: int = 0
    line: int = 0
    file_name: str = ""
    func_name: str = ""
    log_info: str = ""


def _div_toward_zero(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def milliseconds_to_date_string(milliseconds: int) -> str:
    """Format a millisecond timestamp as local ``YYYY-MM-DD HH:MM:SS``."""
    seconds = _div_toward_zero(milliseconds, 1000)
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(seconds))


def combine_log_msg(msg: EffectiveMsg) -> str:
    """Render a record in the default ``[level][ms][pid:tid][file:func:line]`` form."""
    prefix = (
        f"[{msg.level}][{msg.timestamp}][{msg.pid}:{msg.tid}]"
        f"[{msg.file_name}:{msg.func_name}:{msg.line}]"
    )
    encoded = prefix.encode("utf-8")
    if len(encoded) > _PREFIX_LIMIT:
        prefix = encoded[:_PREFIX_LIMIT].decode("utf-8", errors="ignore")
    return prefix + msg.log_info


_Piece = Callable[[EffectiveMsg], str]

_FLAGS: dict[str, _Piece] = {
    "l": lambda msg: msg.level,
    "D": lambda msg: milliseconds_to_date_string(msg.timestamp),
    "S": lambda msg: str(_div_toward_zero(msg.timestamp, 1000)),
    "M": lambda msg: str(msg.timestamp),
    "p": lambda msg: str(msg.pid),
    "t": lambda msg: str(msg.tid),
    "#": lambda msg: str(msg.line),
    "F": lambda msg: msg.file_name,
    "f": lambda msg: msg.func_name,
    "v": lambda msg: msg.log_info,
}


def _literal(text: str) -> _Piece:
    return lambda msg: text


def _compile(pattern: str) -> list[_Piece]:
    pieces: list[_Piece] = []
    literal: list[str] = []
    chars = iter(pattern)
    for ch in chars:
        if ch != "%":
            literal.append(ch)
            continue
        if literal:
            pieces.append(_literal("".join(literal)))
            literal = []
        flag = next(chars, None)
        if flag is None:
            break
        pieces.append(_FLAGS.get(flag) or _literal("%" + flag))
    if literal:
        pieces.append(_literal("".join(literal)))
    return pieces


class DecodeFormatter:
    """Formats records by a pattern, or in the default form when none is set."""

    def __init__(self, pattern: str | None = None) -> None:
        self._pieces: list[_Piece] = []
        if pattern is not None:
            self.set_pattern(pattern)

    def set_pattern(self, pattern: str) -> None:
        """Use ``pattern`` for subsequent records; an empty one restores the default."""
        self._pieces = _compile(pattern)

    def format(self, msg: EffectiveMsg) -> str:
        """Return ``msg`` rendered as one line ending in a newline."""
        if self._pieces:
            body = "".join(piece(msg) for piece in self._pieces)
        else:
            body = combine_log_msg(msg)
        return body + "\n"