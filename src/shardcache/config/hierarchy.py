"""Layered cache configuration.

Sources, lowest priority first: package defaults, ``~/.shardcache/config.yaml``,
the nearest ``shardcache.yaml`` at or above the working directory,
``SHARDCACHE_*`` environment variables, then keyword overrides.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import yaml

from shardcache.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".shardcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "shardcache.yaml"


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(value)


# Environment variable -> (settings key, parser). A parser of None keeps the string.
_ENV_MAP: dict[str, tuple[str, Callable[[str], Any] | None]] = {
    "SHARDCACHE_DIR": ("cache_dir", Path),
    "SHARDCACHE_MAX_ENTRIES": ("max_entries", int),
    "SHARDCACHE_NAMESPACE": ("namespace", None),
    "SHARDCACHE_COMPRESSION_LEVEL": ("compression_level", int),
    "SHARDCACHE_PROTECT_ROOT": ("protect_root", _parse_bool),
    "SHARDCACHE_LOG_LEVEL": ("log_level", None),
}

_PARSERS = dict(_ENV_MAP.values())


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Merge every configuration source into one settings dict.

    Overrides whose value is None are treated as not given.
    """
    config = get_defaults()
    for layer in _file_layers():
        config.update(layer)
    config.update(_load_env_vars())
    config.update({k: v for k, v in runtime_overrides.items() if v is not None})
    return config


def _file_layers() -> Iterator[dict[str, Any]]:
    for path in (_GLOBAL_CONFIG_PATH, _find_project_config()):
        if path is None:
            continue
        data = _load_yaml_config(path)
        if data:
            logger.debug("Loaded cache config from %s", path)
            yield data


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Mapping stored in ``path``; None if it is absent, unreadable or not a mapping."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", path)
        return None
    return data


def _find_project_config() -> Path | None:
    cwd = Path.cwd()
    candidates = (directory / _PROJECT_CONFIG_NAME for directory in (cwd, *cwd.parents))
    return next((c for c in candidates if c.is_file()), None)


def _load_env_vars() -> dict[str, Any]:
    return {
        key: _coerce_env_value(key, os.environ[env_key])
        for env_key, (key, _) in _ENV_MAP.items()
        if env_key in os.environ
    }


def _coerce_env_value(key: str, value: str) -> Any:
    """Parse an environment string for settings ``key``.

    Unparseable values are passed through unchanged so that CacheSettings
    reports them.
    """
    parser = _PARSERS.get(key)
    if parser is None:
        return value
    try:
        return parser(value)
    except ValueError:
        logger.warning("SHARDCACHE setting %r has an unusable value: %r", key, value)
        return value
