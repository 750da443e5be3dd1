"""Logging setup for applications embedding shardcache."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

error_console = Console(stderr=True)


def setup_logging(level: str | int = "WARNING") -> None:
    """Route log records to stderr through rich at the given level."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )


def set_library_level(level: str | int) -> None:
    """Set the threshold of the ``shardcache`` logger tree only."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.getLogger("shardcache").setLevel(level)
