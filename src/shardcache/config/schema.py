"""Pydantic model for cache configuration."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from shardcache.cache.keys import validate_namespace
from shardcache.config.defaults import (
    DEFAULT_CACHE_DIR,
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_PROTECT_ROOT,
)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class CacheSettings(BaseModel):
    cache_dir: Path = DEFAULT_CACHE_DIR
    max_entries: int = Field(default=DEFAULT_MAX_ENTRIES, ge=1)
    namespace: str | None = None
    compression_level: int = Field(default=DEFAULT_COMPRESSION_LEVEL, ge=0, le=9)
    protect_root: bool = DEFAULT_PROTECT_ROOT
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("cache_dir")
    @classmethod
    def expand_cache_dir(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("namespace")
    @classmethod
    def check_namespace(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return validate_namespace(v)

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)
