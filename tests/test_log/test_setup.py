"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from shardcache.log import set_library_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_installs_rich_handler(self, restore_root_logger):
        setup_logging("INFO")
        assert restore_root_logger.level == logging.INFO
        assert any(isinstance(h, RichHandler) for h in restore_root_logger.handlers)

    def test_accepts_numeric_level(self, restore_root_logger):
        setup_logging(logging.DEBUG)
        assert restore_root_logger.level == logging.DEBUG

    def test_lowercase_name(self, restore_root_logger):
        setup_logging("warning")
        assert restore_root_logger.level == logging.WARNING


class TestSetLibraryLevel:
    def test_sets_package_logger_only(self, restore_root_logger):
        root_level = restore_root_logger.level
        set_library_level("debug")
        assert logging.getLogger("shardcache").level == logging.DEBUG
        assert restore_root_logger.level == root_level

    def test_accepts_numeric_level(self):
        set_library_level(logging.ERROR)
        assert logging.getLogger("shardcache.cache.storage").getEffectiveLevel() == logging.ERROR
