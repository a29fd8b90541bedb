"""
Mirror Archive Pipeline — Clone, archive, compress, report.

Strictly linear: each stage starts only after the previous one has
finished, and any failure in clone/archive/compress aborts the run with
the artifacts left on disk for the next run's cleanup.

## Usage

    from mirror_archive.config import ArchiveSettings
    from mirror_archive.pipeline import MirrorArchivePipeline

    settings = ArchiveSettings.from_env()
    archive = MirrorArchivePipeline(settings).run()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import ArchiveSettings
from .process import ProcessRunner, SubprocessRunner
from .stages import (
    STAGE_ARCHIVE,
    STAGE_CLONE,
    STAGE_COMPRESS,
    STAGE_INSPECT,
    clone_mirror,
    compress_archive,
    create_archive,
    inspect_archive,
    measure_execution_time,
)
from .workspace import clean_workspace

logger = logging.getLogger(__name__)


@dataclass
class MirrorArchivePipeline:
    """Produces a zstd-compressed tarball of a mirror clone."""

    settings: ArchiveSettings
    runner: ProcessRunner = field(default_factory=SubprocessRunner)
    file_info: Optional[str] = field(default=None, init=False)

    def run(self) -> Path:
        """Run every stage in order and return the compressed archive path."""
        settings = self.settings
        runner = self.runner

        settings.workdir.mkdir(parents=True, exist_ok=True)
        clean_workspace(settings)

        measure_execution_time(STAGE_CLONE, lambda: clone_mirror(settings, runner))
        measure_execution_time(STAGE_ARCHIVE, lambda: create_archive(settings, runner))
        measure_execution_time(STAGE_COMPRESS, lambda: compress_archive(settings, runner))
        self.file_info = measure_execution_time(
            STAGE_INSPECT, lambda: inspect_archive(settings, runner)
        )

        logger.info("🎉 Action completed successfully!")
        logger.info(f"💾 Final archive: {settings.zst_file}")
        return settings.zst_path
