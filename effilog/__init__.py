"""Loggers and sinks, task runners, chunked compression, ECDH/AES encryption,
a memory-mapped byte buffer and a pattern-based formatter for decoded records."""

__version__ = "0.1.0"

__all__ = [
    "common",
    "compress",
    "crypt",
    "decode_formatter",
    "executor",
    "formatters",
    "logger",
    "mmapper",
    "sinks",
    "space",
    "sysutil",
    "thread_pool",
    "thread_queue",
]