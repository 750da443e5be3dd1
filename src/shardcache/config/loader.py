"""YAML settings loading and validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from shardcache.config.hierarchy import load_config_hierarchy
from shardcache.config.schema import CacheSettings


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load any YAML file safely."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"Expected YAML mapping, got {type(raw).__name__} in {path}")

    return raw


def load_settings_file(path: str | Path) -> CacheSettings:
    """Load a settings YAML file and return validated CacheSettings.

    The file may either hold the settings at top level or nest them under a
    ``cache`` key.
    """
    raw = load_yaml(path)
    if "cache" in raw:
        raw = raw["cache"]
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid settings YAML: 'cache' must be a mapping in {path}")
    return CacheSettings(**raw)


def load_settings(**runtime_overrides: Any) -> CacheSettings:
    """Resolve settings from defaults, config files, env vars and overrides."""
    return CacheSettings(**load_config_hierarchy(**runtime_overrides))
