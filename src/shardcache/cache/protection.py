"""Directory protection hooks, run when the engine creates a cache root."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

DirectoryProtector = Callable[[Path], None]

HTACCESS_NAME = ".htaccess"
HTACCESS_CONTENT = "deny from all"
INDEX_NAME = "index.html"


def write_access_markers(directory: Path) -> None:
    """Drop ``.htaccess`` (deny from all) and an empty ``index.html``.

    Keeps a cache root that lives under a web server's document root from
    being listed or served. Existing marker files are left as they are.
    """
    htaccess = directory / HTACCESS_NAME
    if not htaccess.exists():
        htaccess.write_text(HTACCESS_CONTENT)
        logger.debug("Wrote %s", htaccess)

    index = directory / INDEX_NAME
    if not index.exists():
        index.write_text("")
        logger.debug("Wrote %s", index)


def no_protection(directory: Path) -> None:
    """Protector that leaves the directory alone."""
