"""
Stages — Timed wrappers around each external tool.

Each stage is one external command run from the settings' workdir:

    clone     git clone --mirror <url> repo-mirror
    archive   tar -cf repo.tar -C repo-mirror .
    compress  zstd -10 repo.tar -o repo.tar.zst
    inspect   ls -lh repo.tar.zst

The first three raise SubprocessError on failure. Inspection only logs.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, TypeVar

from .config import ArchiveSettings
from .process import ProcessRunner
from .validation import InspectionWarning, SubprocessError

logger = logging.getLogger(__name__)

T = TypeVar("T")

STAGE_CLONE = "Cloning repository with --mirror"
STAGE_ARCHIVE = "Creating tar archive"
STAGE_COMPRESS = "Compressing with zstd"
STAGE_INSPECT = "Getting file information"


def measure_execution_time(name: str, fn: Callable[[], T]) -> T:
    """
    Run fn between start/completion log markers and time it.

    Exceptions from fn propagate unchanged and no completion marker
    is logged for a failed stage.
    """
    logger.info(f"🚀 {name}...", extra={"stage": name})
    start = time.perf_counter()
    result = fn()
    duration = time.perf_counter() - start
    logger.info(
        f"✅ {name} completed in {duration:.2f} seconds",
        extra={"stage": name, "duration_s": round(duration, 2)},
    )
    return result


def clone_mirror(settings: ArchiveSettings, runner: ProcessRunner) -> None:
    logger.debug(f"Cloning {settings.redacted_url}")
    runner.check(
        ["git", "clone", "--mirror", settings.remote_url, settings.clone_dir],
        cwd=settings.workdir,
        secret=settings.token,
    )


def create_archive(settings: ArchiveSettings, runner: ProcessRunner) -> None:
    # -C keeps entries relative to the mirror root (no repo-mirror/ prefix)
    runner.check(
        ["tar", "-cf", settings.tar_file, "-C", settings.clone_dir, "."],
        cwd=settings.workdir,
    )


def compress_archive(settings: ArchiveSettings, runner: ProcessRunner) -> None:
    runner.check(
        [
            "zstd",
            f"-{settings.compression_level}",
            settings.tar_file,
            "-o",
            settings.zst_file,
        ],
        cwd=settings.workdir,
    )


def inspect_archive(settings: ArchiveSettings, runner: ProcessRunner) -> Optional[str]:
    """
    Log size and permissions of the compressed archive.

    Returns the ``ls -lh`` line, or None if it could not be read.
    """
    try:
        result = runner.run(["ls", "-lh", settings.zst_file], cwd=settings.workdir)
    except (SubprocessError, OSError) as e:
        logger.warning(
            f"⚠️ Could not inspect {settings.zst_file}: {e}",
            extra={"category": InspectionWarning.__name__},
        )
        return None

    if not result.ok:
        detail = result.stderr.strip() or f"exit code {result.returncode}"
        logger.warning(
            f"⚠️ Could not inspect {settings.zst_file}: {detail}",
            extra={"category": InspectionWarning.__name__},
        )
        return None

    line = result.stdout.strip()
    logger.info(f"📦 Output file: {line}")
    return line
