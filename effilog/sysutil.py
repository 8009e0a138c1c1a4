"""Process, thread, memory-page and file helpers."""

from __future__ import annotations

import mmap
import os
import threading
import time
from pathlib import Path


def get_process_id() -> int:
    """Return the current process id."""
    return os.getpid()


def get_thread_id() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


def get_page_size() -> int:
    """Return the size of a memory page in bytes."""
    return mmap.PAGESIZE


def get_file_size(path: str | os.PathLike[str]) -> int:
    """Return the size of ``path`` in bytes, or 0 if it does not exist."""
    path = Path(path)
    if not path.exists():
        return 0
    if path.is_dir():
        raise IsADirectoryError(f"not a regular file: {path}")
    return path.stat().st_size


def local_time(timestamp: float) -> time.struct_time:
    """Convert seconds since the epoch to local broken-down time."""
    return time.localtime(timestamp)