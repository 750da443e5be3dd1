"""Filesystem storage backend — byte blobs addressed by path."""

from __future__ import annotations

import contextlib
import logging
import os
import stat
import tempfile
from pathlib import Path

from shardcache.errors.exceptions import EntryNotFoundError, StorageError
from shardcache.types import StoredFile

logger = logging.getLogger(__name__)

# root/namespace/shard is three levels; anything much deeper is not ours.
_DEFAULT_MAX_DEPTH = 16
_FILE_MODE = 0o666
_TEMP_PREFIX = "."
_TEMP_SUFFIX = ".tmp"


class FileStorage:
    """Raw read/write/delete/list of byte blobs on the local filesystem.

    Writes go to a hidden temp file in the target directory and are moved into
    place with os.replace, so a reader sees either the old or the new content.
    Missing files raise EntryNotFoundError; every other OS failure raises
    StorageError.
    """

    def __init__(self) -> None:
        self._file_mode = _FILE_MODE & ~_current_umask()

    def put(self, path: Path, data: bytes) -> None:
        self.ensure_directory(path.parent)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=_TEMP_PREFIX, suffix=_TEMP_SUFFIX
            )
        except OSError as e:
            raise StorageError(f"Cannot create temp file in {path.parent}: {e}", path, e) from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, self._file_mode)
            os.replace(tmp_name, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to write {path}: {e}", path, e) from e

    def get(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise EntryNotFoundError(f"No such entry: {path}", path) from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}", path, e) from e

    def remove(self, path: Path) -> bool:
        """Delete a file. Returns False if it was already gone."""
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}", path, e) from e
        return True

    def mod_time(self, path: Path) -> float:
        try:
            return path.stat().st_mtime
        except FileNotFoundError as e:
            raise EntryNotFoundError(f"No such entry: {path}", path) from e
        except OSError as e:
            raise StorageError(f"Failed to stat {path}: {e}", path, e) from e

    def list(self, directory: Path) -> list[StoredFile]:
        """Regular files directly inside ``directory`` (empty if it is missing)."""
        files: list[StoredFile] = []
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    try:
                        if not entry.is_file(follow_symlinks=False):
                            continue
                        st = entry.stat(follow_symlinks=False)
                    except FileNotFoundError:
                        # Removed between listing and stat
                        continue
                    files.append(
                        StoredFile.model_construct(
                            path=Path(entry.path),
                            modified_at=st.st_mtime,
                            size_bytes=st.st_size,
                        )
                    )
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Failed to list {directory}: {e}", directory, e) from e
        return files

    def glob(self, directory: Path, pattern: str) -> list[StoredFile]:
        """Regular files below ``directory`` matching a relative glob pattern."""
        result: list[StoredFile] = []
        try:
            for path in directory.glob(pattern):
                try:
                    st = path.stat()
                except FileNotFoundError:
                    continue
                if stat.S_ISREG(st.st_mode):
                    result.append(
                        StoredFile.model_construct(
                            path=path, modified_at=st.st_mtime, size_bytes=st.st_size
                        )
                    )
        except OSError as e:
            raise StorageError(f"Failed to list {directory}: {e}", directory, e) from e
        return result

    def ensure_directory(self, path: Path) -> bool:
        """Create ``path`` with parents. Returns True if this call created it."""
        if path.is_dir():
            return False
        try:
            path.mkdir(parents=True)
        except FileExistsError:
            # Another writer got there first
            return False
        except OSError as e:
            raise StorageError(f"Failed to create directory {path}: {e}", path, e) from e
        return True

    def remove_tree(self, directory: Path, max_depth: int = _DEFAULT_MAX_DEPTH) -> bool:
        """Delete ``directory`` and everything below it.

        Walks with an explicit stack, never following symlinks. Returns False
        if anything could not be removed or the tree is deeper than
        ``max_depth``; True if the directory is gone afterwards.
        """
        if not os.path.lexists(directory):
            return True
        if directory.is_symlink() or not directory.is_dir():
            return self._unlink_quietly(directory)

        # (path, depth, children_done)
        stack: list[tuple[Path, int, bool]] = [(directory, 0, False)]
        while stack:
            current, depth, children_done = stack.pop()
            if children_done:
                try:
                    current.rmdir()
                except FileNotFoundError:
                    pass
                except OSError as e:
                    logger.warning("Failed to remove directory %s: %s", current, e)
                    return False
                continue

            if depth > max_depth:
                logger.warning("Refusing to remove %s: deeper than %d levels", current, max_depth)
                return False

            stack.append((current, depth, True))
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except FileNotFoundError:
                stack.pop()
                continue
            except OSError as e:
                logger.warning("Failed to scan %s: %s", current, e)
                return False

            for entry in entries:
                child = Path(entry.path)
                if entry.is_dir(follow_symlinks=False):
                    stack.append((child, depth + 1, False))
                elif not self._unlink_quietly(child):
                    return False
        return True

    @staticmethod
    def _unlink_quietly(path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to remove %s: %s", path, e)
            return False
        return True


def _current_umask() -> int:
    # os.umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask
