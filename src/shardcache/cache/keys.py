"""Path resolution — content-addressed, sharded entry paths."""

from __future__ import annotations

import hashlib
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING

from shardcache.errors.exceptions import InvalidNamespaceError
from shardcache.types import ENTRY_SUFFIX

if TYPE_CHECKING:
    from shardcache.cache.storage import FileStorage

_SHARD_WIDTH = 2
_SHARD_RE = re.compile(r"[0-9a-f]{2}")

# Entry files of one namespace, relative to its directory.
ENTRY_GLOB = f"[0-9a-f][0-9a-f]/*{ENTRY_SUFFIX}"


def hash_key(key: str) -> str:
    """Hash a cache key to a 40-char SHA1 hex digest."""
    return hashlib.sha1(key.encode("utf-8")).hexdigest()


def shard_name(digest: str) -> str:
    """Shard directory for a digest (first byte, 256 possible values)."""
    return digest[:_SHARD_WIDTH]


def is_shard_name(name: str) -> bool:
    return _SHARD_RE.fullmatch(name) is not None


def validate_namespace(name: str) -> str:
    """Return ``name`` if it is usable as a single directory name.

    Raises InvalidNamespaceError for empty names, ``.``/``..``, names
    containing a path separator or NUL, and names that look like a shard
    directory (two lowercase hex chars), since those would be mistaken for
    root-namespace shards.
    """
    if not name or name in (".", ".."):
        raise InvalidNamespaceError(f"Invalid namespace: {name!r}", namespace=name)
    if is_shard_name(name):
        raise InvalidNamespaceError(
            f"Namespace {name!r} clashes with shard directory names", namespace=name
        )
    separators = {"/", "\0", os.sep}
    if os.altsep:
        separators.add(os.altsep)
    if any(sep in name for sep in separators):
        raise InvalidNamespaceError(
            f"Namespace must be a single path segment: {name!r}", namespace=name
        )
    return name


def namespace_dir(root: Path, namespace: str | None = None) -> Path:
    """Directory holding the shards of ``namespace`` (the root when None)."""
    if namespace is None:
        return root
    return root / validate_namespace(namespace)


def entry_path(root: Path, namespace: str | None, key: str) -> Path:
    """Path of the entry file for ``key``: root/[namespace/]shard/digest.cache.

    Pure: does not touch the filesystem.
    """
    digest = hash_key(key)
    return namespace_dir(root, namespace) / shard_name(digest) / f"{digest}{ENTRY_SUFFIX}"


class PathResolver:
    """Maps keys to entry paths and makes sure the shard directory exists."""

    def __init__(self, root: Path, storage: FileStorage) -> None:
        self._root = root
        self._storage = storage

    def resolve(self, key: str, namespace: str | None = None) -> Path:
        path = entry_path(self._root, namespace, key)
        self._storage.ensure_directory(path.parent)
        return path
