"""Tests for custom exception hierarchy."""

from pathlib import Path

import pytest

from shardcache.errors.exceptions import (
    CompressionError,
    EntryNotFoundError,
    InvalidNamespaceError,
    ShardCacheError,
    StorageError,
)


class TestExceptionHierarchy:
    def test_all_inherit_from_base(self):
        assert issubclass(EntryNotFoundError, ShardCacheError)
        assert issubclass(StorageError, ShardCacheError)
        assert issubclass(CompressionError, ShardCacheError)
        assert issubclass(InvalidNamespaceError, ShardCacheError)

    def test_all_inherit_from_exception(self):
        assert issubclass(ShardCacheError, Exception)

    def test_invalid_namespace_is_value_error(self):
        assert issubclass(InvalidNamespaceError, ValueError)

    def test_not_found_is_not_storage_error(self):
        assert not issubclass(EntryNotFoundError, StorageError)


class TestStorageError:
    def test_attributes(self):
        original = PermissionError("denied")
        err = StorageError("Failed to write", path=Path("/x"), original=original)
        assert err.path == Path("/x")
        assert err.original is original
        assert err.message == "Failed to write"
        assert "Failed to write" in str(err)

    def test_defaults(self):
        err = StorageError("boom")
        assert err.path is None
        assert err.original is None


class TestEntryNotFoundError:
    def test_attributes(self):
        err = EntryNotFoundError("missing", path=Path("/a/b.cache"))
        assert err.path == Path("/a/b.cache")


class TestCompressionError:
    def test_catchable_as_base(self):
        with pytest.raises(ShardCacheError):
            raise CompressionError("bad payload")
