"""Custom exception hierarchy for shardcache."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ShardCacheError(Exception):
    """Base exception for all shardcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class EntryNotFoundError(ShardCacheError):
    """No file at the requested path.

    Raised by the storage primitives only. The engine turns it into a cache
    miss (None / False) on every read path.
    """

    def __init__(self, message: str = "", path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class StorageError(ShardCacheError):
    """Filesystem failure. Fatal, never retried.

    Examples: permission denied, disk full, path too long.
    """

    def __init__(
        self,
        message: str = "",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original


class CompressionError(ShardCacheError):
    """Stored bytes could not be decompressed (corrupt or foreign payload)."""

    def __init__(self, message: str = "", original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class InvalidNamespaceError(ShardCacheError, ValueError):
    """Namespace name is not a single safe path segment."""

    def __init__(self, message: str = "", namespace: str = "") -> None:
        super().__init__(message)
        self.namespace = namespace
