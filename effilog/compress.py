"""Streaming compressors whose output can be cut into independently flushed chunks."""

from __future__ import annotations

import zlib
from abc import ABC, abstractmethod

import zstandard

_ZLIB_MAGICS = frozenset({b"\x78\x9c", b"\x78\xda", b"\x78\x5e", b"\x78\x01"})
_ZSTD_MAGICS = (b"\x28\xb5\x2f\xfd", b"\xfd\x2f\xb5\x28")
_ZLIB_MAX_MEM_LEVEL = 9
_ZSTD_LEVEL = 5
_ZSTD_BLOCKSIZE_MAX = 128 * 1024


class Compression(ABC):
    """Common interface of the streaming compressors."""

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        """Compress ``data`` as the next flushed chunk of the current stream."""

    @abstractmethod
    def compressed_bound(self, input_size: int) -> int:
        """Return the largest size a chunk of ``input_size`` bytes may compress to."""

    @abstractmethod
    def uncompress(self, data: bytes) -> bytes:
        """Decompress a chunk; a chunk that starts a new stream resets the decoder."""

    @abstractmethod
    def reset_stream(self) -> None:
        """Start a fresh compression stream."""


class ZlibCompression(Compression):
    """Deflate at the best compression level, flushing after every chunk.

    The compression stream exists only after :meth:`reset_stream` has been
    called; the decompression stream is opened by a chunk carrying a zlib
    header.
    """

    def __init__(self) -> None:
        self._compressor: zlib._Compress | None = None
        self._decompressor: zlib._Decompress | None = None

    def compress(self, data: bytes) -> bytes:
        if not data:
            return b""
        if self._compressor is None:
            raise RuntimeError("compression stream is not open; call reset_stream() first")
        try:
            return self._compressor.compress(data) + self._compressor.flush(zlib.Z_SYNC_FLUSH)
        except zlib.error as exc:
            raise ValueError(f"zlib compression failed: {exc}") from exc

    def compressed_bound(self, input_size: int) -> int:
        return input_size + 10

    def uncompress(self, data: bytes) -> bytes:
        if not data:
            return b""
        if bytes(data[:2]) in _ZLIB_MAGICS:
            self._decompressor = zlib.decompressobj(zlib.MAX_WBITS)
        if self._decompressor is None:
            raise ValueError("data does not start a zlib stream and no stream is open")
        try:
            return self._decompressor.decompress(data)
        except zlib.error as exc:
            raise ValueError(f"zlib decompression failed: {exc}") from exc

    def reset_stream(self) -> None:
        self._compressor = zlib.compressobj(
            zlib.Z_BEST_COMPRESSION,
            zlib.DEFLATED,
            zlib.MAX_WBITS,
            _ZLIB_MAX_MEM_LEVEL,
            zlib.Z_DEFAULT_STRATEGY,
        )


class ZstdCompression(Compression):
    """Zstandard at level 5, flushing a block after every chunk."""

    def __init__(self) -> None:
        self._cctx = zstandard.ZstdCompressor(level=_ZSTD_LEVEL)
        self._dctx = zstandard.ZstdDecompressor()
        self._compressor = self._cctx.compressobj()
        self._decompressor = self._dctx.decompressobj()

    def compress(self, data: bytes) -> bytes:
        if not data:
            return b""
        try:
            return self._compressor.compress(data) + self._compressor.flush(
                zstandard.COMPRESSOBJ_FLUSH_BLOCK
            )
        except zstandard.ZstdError as exc:
            raise ValueError(f"zstd compression failed: {exc}") from exc

    def compressed_bound(self, input_size: int) -> int:
        margin = 0
        if input_size < _ZSTD_BLOCKSIZE_MAX:
            margin = (_ZSTD_BLOCKSIZE_MAX - input_size) >> 11
        return input_size + (input_size >> 8) + margin

    def uncompress(self, data: bytes) -> bytes:
        if not data:
            return b""
        if bytes(data[:4]) in _ZSTD_MAGICS:
            self._decompressor = self._dctx.decompressobj()
        try:
            return self._decompressor.decompress(data)
        except zstandard.ZstdError as exc:
            raise ValueError(f"zstd decompression failed: {exc}") from exc

    def reset_stream(self) -> None:
        self._compressor = self._cctx.compressobj()