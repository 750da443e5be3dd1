"""Package-level default configuration values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Default cache settings
DEFAULT_CACHE_DIR = Path.home() / ".shardcache" / "cache"
DEFAULT_MAX_ENTRIES = 10_000
DEFAULT_NAMESPACE = None
DEFAULT_COMPRESSION_LEVEL = 6
DEFAULT_PROTECT_ROOT = True

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_dir": DEFAULT_CACHE_DIR,
        "max_entries": DEFAULT_MAX_ENTRIES,
        "namespace": DEFAULT_NAMESPACE,
        "compression_level": DEFAULT_COMPRESSION_LEVEL,
        "protect_root": DEFAULT_PROTECT_ROOT,
        "log_level": DEFAULT_LOG_LEVEL,
    }
