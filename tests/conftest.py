import logging
import os
import time

import pytest

from shardcache.cache.engine import FileCache


@pytest.fixture(autouse=True)
def _restore_library_level():
    logger = logging.getLogger("shardcache")
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.fixture
def cache_root(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def cache(cache_root):
    return FileCache(cache_root)


@pytest.fixture
def age_entry():
    """Return a helper that back-dates a file's mtime by ``seconds``."""

    def _age(path, seconds):
        then = time.time() - seconds
        os.utime(path, (then, then))

    return _age
