"""zlib payload codec (same format as PHP gzcompress)."""

from __future__ import annotations

import zlib

from shardcache.errors.exceptions import CompressionError

DEFAULT_LEVEL = 6
MIN_LEVEL = 0
MAX_LEVEL = 9


def compress(data: bytes, level: int = DEFAULT_LEVEL) -> bytes:
    try:
        return zlib.compress(data, level)
    except zlib.error as e:
        raise CompressionError(f"Cannot compress at level {level}: {e}", original=e) from e


def decompress(data: bytes) -> bytes:
    """Inflate a stored payload. Raises CompressionError on malformed input."""
    try:
        return zlib.decompress(data)
    except zlib.error as e:
        raise CompressionError(f"Corrupt cache payload: {e}", original=e) from e
