"""Filesystem helpers: output-directory preparation and purging."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .tasks import run_indexed

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if missing."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_readable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.R_OK | os.X_OK)


def is_writable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK | os.X_OK)


def _remove(_: int, entry: Path) -> None:
    if entry.is_dir() and not entry.is_symlink():
        shutil.rmtree(entry)
    else:
        entry.unlink()


def purge_directory(path: Path, max_workers: int = 8) -> int:
    """Delete everything inside ``path``, creating it if missing.

    Returns the number of entries removed.
    """
    ensure_dir(path)
    entries = sorted(path.iterdir())
    run_indexed(_remove, entries, max_workers=max_workers)
    if entries:
        logger.debug(f"Purged {len(entries)} entries from {path}")
    return len(entries)


def indexed_name(prefix: str, index: int, suffix: str) -> str:
    """``<prefix>_<3-digit index>.<suffix>``, e.g. frame_007.jpg."""
    return f"{prefix}_{index:03d}.{suffix.lstrip('.')}"
