"""Cache statistics model."""

from __future__ import annotations

from pydantic import BaseModel


class CacheStats(BaseModel):
    """Counters for one cache handle plus a snapshot of what is on disk."""

    entries: int = 0
    size_mb: float = 0.0
    hits: int = 0
    misses: int = 0
    writes: int = 0
    deletes: int = 0
    expirations: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0
