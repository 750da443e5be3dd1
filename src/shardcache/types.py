"""Shared Pydantic models for shardcache."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

# File extension of every entry file; anything else under the root is ignored.
ENTRY_SUFFIX = ".cache"


class StoredFile(BaseModel):
    """A file as seen by the storage backend."""

    path: Path
    modified_at: float
    size_bytes: int = 0

    def age(self, now: float) -> float:
        return now - self.modified_at
