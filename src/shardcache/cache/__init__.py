"""Cache subsystem — sharded, compressed, file-per-entry storage."""

from shardcache.cache.engine import FileCache
from shardcache.cache.keys import entry_path, hash_key, shard_name, validate_namespace
from shardcache.cache.protection import no_protection, write_access_markers
from shardcache.cache.stats import CacheStats
from shardcache.cache.storage import FileStorage

__all__ = [
    "FileCache",
    "FileStorage",
    "CacheStats",
    "entry_path",
    "hash_key",
    "shard_name",
    "validate_namespace",
    "no_protection",
    "write_access_markers",
]
