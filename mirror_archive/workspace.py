"""
Workspace Cleaner — Remove artifacts left by a previous run.

Re-running in the same directory must start from a clean slate, so the
mirror directory, tar file and compressed archive are deleted up front.
Failed runs leave their artifacts behind; the next run removes them here.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, List

from .config import ArchiveSettings

logger = logging.getLogger(__name__)


def remove_path(path: Path) -> bool:
    """
    Recursively remove a file or directory.

    Returns True if something was removed, False if the path was absent.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
        return True
    if path.exists() or path.is_symlink():
        path.unlink()
        return True
    return False


def clean_paths(paths: Iterable[Path]) -> List[Path]:
    """Remove each path that exists. Returns the paths that were removed."""
    removed = []
    for path in paths:
        if remove_path(path):
            logger.debug(f"Removed {path}")
            removed.append(path)
    return removed


def clean_workspace(settings: ArchiveSettings) -> List[Path]:
    """Remove stale clone directory, tar file and compressed archive."""
    if settings.clone_path.exists():
        logger.info("🧹 Cleaning up existing clone directory...")
    return clean_paths([settings.clone_path, settings.tar_path, settings.zst_path])
