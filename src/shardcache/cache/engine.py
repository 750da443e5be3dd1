"""File cache engine — expiration, compression and entry-count eviction.

Every entry is one file at ``root/[namespace/]<shard>/<sha1>.cache`` holding
the zlib-compressed content. The file's mtime is the only timestamp, so
rewriting a key resets its age.

After each write the namespace is checked against ``max_entries``; when it
is over the limit the single oldest file is removed. The bound is therefore
soft: a burst of writes (or several processes writing at once) can overshoot
it until later writes trim it back.
"""

from __future__ import annotations

import copy
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from shardcache.cache.compression import (
    DEFAULT_LEVEL,
    MAX_LEVEL,
    MIN_LEVEL,
    compress,
    decompress,
)
from shardcache.cache.keys import ENTRY_GLOB, PathResolver, entry_path, namespace_dir
from shardcache.cache.protection import DirectoryProtector, no_protection, write_access_markers
from shardcache.cache.stats import CacheStats
from shardcache.cache.storage import FileStorage
from shardcache.config.defaults import DEFAULT_MAX_ENTRIES
from shardcache.errors.exceptions import CompressionError, EntryNotFoundError, StorageError
from shardcache.log import set_library_level
from shardcache.types import StoredFile

if TYPE_CHECKING:
    from shardcache.config.schema import CacheSettings

logger = logging.getLogger(__name__)


class FileCache:
    """File-backed key/value cache over opaque byte strings.

    ``max_age`` arguments are in seconds; 0 (or less) means the entry never
    expires by age. Read paths (``read``, ``check_cache``, ``is_valid``)
    report every failure as a miss. Write paths raise StorageError.
    """

    def __init__(
        self,
        root: str | Path,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        namespace: str | None = None,
        compression_level: int = DEFAULT_LEVEL,
        protector: DirectoryProtector | None = write_access_markers,
        storage: FileStorage | None = None,
    ) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        if not MIN_LEVEL <= compression_level <= MAX_LEVEL:
            raise ValueError(
                f"compression_level must be between {MIN_LEVEL} and {MAX_LEVEL}, "
                f"got {compression_level}"
            )

        self._root = Path(root)
        self._max_entries = max_entries
        self._compression_level = compression_level
        self._protector = protector or no_protection
        self._storage = storage or FileStorage()
        self._resolver = PathResolver(self._root, self._storage)
        self._stats = CacheStats()

        self._storage.ensure_directory(self._root)
        self._protector(self._root)

        self._namespace: str | None = None
        self.set_namespace(namespace)

    @classmethod
    def from_settings(cls, settings: CacheSettings) -> FileCache:
        set_library_level(settings.log_level)
        return cls(
            root=settings.cache_dir,
            max_entries=settings.max_entries,
            namespace=settings.namespace,
            compression_level=settings.compression_level,
            protector=write_access_markers if settings.protect_root else no_protection,
        )

    @property
    def root(self) -> Path:
        return self._root

    @property
    def namespace(self) -> str | None:
        return self._namespace

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def directory(self) -> Path:
        """Directory holding this handle's shards."""
        return namespace_dir(self._root, self._namespace)

    # ── Namespaces ──

    def set_namespace(self, name: str | None) -> None:
        """Switch this handle to another namespace (None for the root).

        Affects every later call on this instance. Prefer with_namespace()
        when the engine is shared between call sites.
        """
        directory = namespace_dir(self._root, name)
        self._storage.ensure_directory(directory)
        self._namespace = name

    def with_namespace(self, name: str | None) -> FileCache:
        """A new handle on the same root, bound to ``name``.

        Shares storage, limits, compression level and protector; has its own
        statistics.
        """
        new = copy.copy(self)
        new._stats = CacheStats()
        new.set_namespace(name)
        return new

    # ── Entries ──

    def path_for(self, key: str) -> Path:
        """Entry file path for ``key``; creates its shard directory."""
        return self._resolver.resolve(key, self._namespace)

    def write(self, key: str, content: bytes | str) -> None:
        """Store ``content`` under ``key``, replacing any previous entry.

        Strings are stored as UTF-8. Raises StorageError if the file cannot
        be written.
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        if self._storage.ensure_directory(self._root):
            # Root was removed (e.g. by clear_all) and has just been recreated
            self._protector(self._root)

        path = self.path_for(key)
        self._storage.put(path, compress(content, self._compression_level))
        self._stats.writes += 1
        self._enforce_entry_limit(keep=path)

    def read(
        self,
        key: str,
        max_age: float = 0,
        delete_expired: bool = True,
    ) -> bytes | None:
        """Return the content for ``key``, or None if missing or expired.

        Empty, unreadable and corrupt files are reported as misses.
        """
        if not self.check_cache(key, max_age, delete_expired):
            self._stats.misses += 1
            return None

        path = self._entry_path(key)
        try:
            raw = self._storage.get(path)
        except EntryNotFoundError:
            # Deleted between the check and the read
            self._stats.misses += 1
            return None
        except StorageError as e:
            logger.warning("Cannot read cache entry %s: %s", path, e)
            self._stats.misses += 1
            return None

        if not raw:
            logger.debug("Empty cache entry %s", path)
            self._stats.misses += 1
            return None

        try:
            content = decompress(raw)
        except CompressionError as e:
            logger.warning("Corrupt cache entry %s: %s", path, e)
            self._stats.misses += 1
            return None

        self._stats.hits += 1
        return content

    def is_valid(self, key: str, max_age: float = 0) -> bool:
        """True if ``key`` has an entry no older than ``max_age``. No side effects."""
        path = self._entry_path(key)
        try:
            modified = self._storage.mod_time(path)
        except EntryNotFoundError:
            return False
        except StorageError as e:
            logger.warning("Cannot stat cache entry %s: %s", path, e)
            return False
        return max_age <= 0 or time.time() - modified <= max_age

    def evict_if_expired(self, key: str, max_age: float) -> bool:
        """Delete ``key``'s entry if it is older than ``max_age``.

        Returns True if a file was removed. Raises StorageError if the file
        exists but cannot be deleted.
        """
        if max_age <= 0:
            return False

        path = self._entry_path(key)
        try:
            modified = self._storage.mod_time(path)
        except EntryNotFoundError:
            return False
        if time.time() - modified <= max_age:
            return False

        removed = self._storage.remove(path)
        if removed:
            self._stats.expirations += 1
            logger.debug("Expired cache entry %s (max_age=%ss)", path, max_age)
        return removed

    def check_cache(
        self,
        key: str,
        max_age: float = 0,
        delete_expired: bool = True,
    ) -> bool:
        """is_valid(), removing the entry on expiry when ``delete_expired``.

        Note that with ``delete_expired`` (the default) this check deletes
        data.
        """
        if self.is_valid(key, max_age):
            return True
        if delete_expired:
            try:
                self.evict_if_expired(key, max_age)
            except StorageError as e:
                logger.warning("Cannot remove expired entry for %r: %s", key, e)
        return False

    def delete(self, key: str) -> bool:
        """Remove ``key``'s entry. Returns False if there was none."""
        removed = self._storage.remove(self._entry_path(key))
        if removed:
            self._stats.deletes += 1
        return removed

    # ── Bulk maintenance ──

    def clear(self, max_age: float = 0) -> int:
        """Remove entries at least ``max_age`` seconds old (all when 0).

        Covers every shard of the active namespace; other namespaces and
        non-entry files such as the protection markers are left alone.
        Returns the number of entries removed.
        """
        now = time.time()
        removed = 0
        for stored in self._entry_files():
            if max_age > 0 and stored.age(now) < max_age:
                continue
            if self._storage.remove(stored.path):
                removed += 1

        self._stats.deletes += removed
        logger.debug("Cleared %d entries from %s (max_age=%ss)", removed, self.directory, max_age)
        return removed

    def clear_all(self) -> bool:
        """Delete the whole namespace directory tree.

        For the root namespace this removes the root itself, protection
        markers included; the next write recreates both. Returns False if
        something could not be removed.
        """
        ok = self._storage.remove_tree(self.directory)
        if not ok:
            logger.warning("Could not fully remove cache directory %s", self.directory)
        return ok

    def entry_count(self) -> int:
        return len(self._entry_files())

    def stats(self) -> CacheStats:
        """Handle counters plus the current on-disk entry count and size."""
        files = self._entry_files()
        return self._stats.model_copy(
            update={
                "entries": len(files),
                "size_mb": sum(f.size_bytes for f in files) / (1024 * 1024),
            }
        )

    # ── Internal helpers ──

    def _entry_path(self, key: str) -> Path:
        return entry_path(self._root, self._namespace, key)

    def _entry_files(self) -> list[StoredFile]:
        return self._storage.glob(self.directory, ENTRY_GLOB)

    def _enforce_entry_limit(self, keep: Path) -> None:
        files = self._entry_files()
        if len(files) <= self._max_entries:
            return

        candidates = [f for f in files if f.path != keep]
        if not candidates:
            return
        oldest = min(candidates, key=lambda f: f.modified_at)
        if self._storage.remove(oldest.path):
            self._stats.evictions += 1
            logger.debug(
                "Evicted %s (%d entries, limit %d)", oldest.path, len(files), self._max_entries
            )
