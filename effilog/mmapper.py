"""A growable byte buffer kept in a memory-mapped file."""

from __future__ import annotations

import mmap
import os
import struct
from pathlib import Path

from .sysutil import get_file_size, get_page_size

DEFAULT_CAPACITY = 512 * 1024
HEADER_MAGIC = 0xDEADBEEF
_HEADER = struct.Struct("<II")


class MMapper:
    """Bytes appended to a file through a shared memory mapping.

    The file starts with an 8-byte header holding a magic number and the
    number of content bytes; the content follows it. The mapping grows in
    whole pages as content is added and keeps its content across reopening.
    """

    def __init__(self, file_path: str | os.PathLike[str]) -> None:
        self._path = Path(file_path)
        self._map: mmap.mmap | None = None
        self._capacity = 0
        self._reserve(max(get_file_size(self._path), DEFAULT_CAPACITY))
        self._init_header()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def capacity(self) -> int:
        """Size of the mapping in bytes, header included."""
        return self._capacity

    def _try_map(self, capacity: int) -> None:
        fd = os.open(self._path, os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0), 0o700)
        try:
            os.ftruncate(fd, capacity)
            self._map = mmap.mmap(fd, capacity, access=mmap.ACCESS_WRITE)
        finally:
            os.close(fd)

    def _unmap(self) -> None:
        if self._map is not None:
            self._map.close()
        self._map = None

    def _reserve(self, new_capacity: int) -> None:
        if new_capacity <= self._capacity:
            return
        page_size = get_page_size()
        new_capacity = -(-new_capacity // page_size) * page_size
        if new_capacity == self._capacity:
            return
        self._unmap()
        self._try_map(new_capacity)
        self._capacity = new_capacity

    def _ensure_capacity(self, new_size: int) -> None:
        real_size = new_size + _HEADER.size
        if real_size <= self._capacity:
            return
        page_size = get_page_size()
        new_capacity = self._capacity
        while new_capacity < real_size:
            new_capacity += page_size
        self._reserve(new_capacity)

    def _header(self) -> tuple[int, int] | None:
        if self._map is None or self._capacity < _HEADER.size:
            return None
        return _HEADER.unpack_from(self._map, 0)

    def _write_header(self, size: int) -> None:
        _HEADER.pack_into(self._map, 0, HEADER_MAGIC, size)

    def _init_header(self) -> None:
        header = self._header()
        if header is not None and header[0] != HEADER_MAGIC:
            self._write_header(0)

    def _is_valid(self) -> bool:
        header = self._header()
        return header is not None and header[0] == HEADER_MAGIC

    def _require_valid(self) -> None:
        if not self._is_valid():
            raise ValueError("memory mapping is closed or invalid")

    def resize(self, new_size: int) -> None:
        """Set the content length to ``new_size``, growing the mapping if needed."""
        self._require_valid()
        if new_size < 0:
            raise ValueError("size must not be negative")
        self._ensure_capacity(new_size)
        self._write_header(new_size)

    def data(self) -> bytes:
        """Return a copy of the content bytes."""
        if not self._is_valid():
            return b""
        return self._map[_HEADER.size:_HEADER.size + self.size()]

    def size(self) -> int:
        """Return the number of content bytes."""
        header = self._header()
        if header is None or header[0] != HEADER_MAGIC:
            return 0
        return header[1]

    def clear(self) -> None:
        """Drop all content."""
        if self._is_valid():
            self._write_header(0)

    def push(self, data: bytes) -> None:
        """Append ``data`` to the content."""
        self._require_valid()
        data = bytes(data)
        old_size = self.size()
        new_size = old_size + len(data)
        self._ensure_capacity(new_size)
        start = _HEADER.size + old_size
        self._map[start:start + len(data)] = data
        self._write_header(new_size)

    def ratio(self) -> float:
        """Return how much of the space available for content is in use."""
        if not self._is_valid():
            return 0.0
        return self.size() / (self._capacity - _HEADER.size)

    def empty(self) -> bool:
        """Return True if there is no content."""
        return self.size() == 0

    def close(self) -> None:
        """Write the mapping back to the file and release it."""
        if self._map is not None:
            self._map.flush()
        self._unmap()
        self._capacity = 0

    def __enter__(self) -> MMapper:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        try:
            self.close()
        except Exception:
            pass