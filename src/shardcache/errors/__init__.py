"""Error handling — exception hierarchy for storage, codec and namespace failures."""

from shardcache.errors.exceptions import (
    CompressionError,
    EntryNotFoundError,
    InvalidNamespaceError,
    ShardCacheError,
    StorageError,
)

__all__ = [
    "ShardCacheError",
    "EntryNotFoundError",
    "StorageError",
    "CompressionError",
    "InvalidNamespaceError",
]
