"""shardcache — file-backed key/value cache with sharded, compressed entries."""

from shardcache.cache import CacheStats, FileCache
from shardcache.config.loader import load_settings
from shardcache.config.schema import CacheSettings
from shardcache.errors import (
    CompressionError,
    EntryNotFoundError,
    InvalidNamespaceError,
    ShardCacheError,
    StorageError,
)
from shardcache.log import setup_logging

__version__ = "0.1.0"

__all__ = [
    "FileCache",
    "CacheStats",
    "CacheSettings",
    "load_settings",
    "setup_logging",
    "ShardCacheError",
    "EntryNotFoundError",
    "StorageError",
    "CompressionError",
    "InvalidNamespaceError",
]
