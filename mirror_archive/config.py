"""
Archive Configuration — Resolve run inputs from the environment.

Inputs follow the GitHub Actions conventions, so the same command works
as a workflow step and from a shell:

    INPUT_GITHUB-TOKEN=ghs_xxxxx     (or GITHUB_TOKEN)
    GITHUB_REPOSITORY=owner/name

Everything else has a default. The resolved ArchiveSettings is passed
into the pipeline; nothing downstream reads the environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from .validation import (
    REDACTED,
    require_value,
    validate_compression_level,
    validate_repository,
)

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN", "GITHUB_TOKEN")
REPOSITORY_ENV_VAR = "GITHUB_REPOSITORY"
HOST_ENV_VAR = "GITHUB_SERVER_HOST"
LEVEL_ENV_VAR = "INPUT_COMPRESSION-LEVEL"

DEFAULT_HOST = "github.com"
DEFAULT_CLONE_DIR = "repo-mirror"
DEFAULT_TAR_FILE = "repo.tar"
DEFAULT_ZST_FILE = "repo.tar.zst"
DEFAULT_COMPRESSION_LEVEL = 10


@dataclass
class ArchiveSettings:
    """Inputs for a single mirror archive run."""

    token: str = field(repr=False)
    repository: str  # owner/name
    host: str = DEFAULT_HOST
    workdir: Path = field(default_factory=Path)
    clone_dir: str = DEFAULT_CLONE_DIR
    tar_file: str = DEFAULT_TAR_FILE
    zst_file: str = DEFAULT_ZST_FILE
    compression_level: int = DEFAULT_COMPRESSION_LEVEL

    def __post_init__(self) -> None:
        self.workdir = Path(self.workdir)

    @property
    def remote_url(self) -> str:
        """Clone URL with the token embedded as basic auth."""
        return f"https://x-access-token:{self.token}@{self.host}/{self.repository}.git"

    @property
    def redacted_url(self) -> str:
        """Clone URL safe for logs."""
        return f"https://x-access-token:{REDACTED}@{self.host}/{self.repository}.git"

    @property
    def clone_path(self) -> Path:
        return self.workdir / self.clone_dir

    @property
    def tar_path(self) -> Path:
        return self.workdir / self.tar_file

    @property
    def zst_path(self) -> Path:
        return self.workdir / self.zst_file

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "ArchiveSettings":
        """
        Build settings from environment variables.

        Explicit overrides (e.g. CLI options) win over the environment;
        overrides that are None are ignored. Raises ConfigurationError
        naming the first missing or invalid input.
        """
        env = os.environ if environ is None else environ
        given = {k: v for k, v in overrides.items() if v is not None}

        token = given.pop("token", None)
        if not token:
            token = next((env[name] for name in TOKEN_ENV_VARS if env.get(name)), None)
        token = require_value(token, "GitHub token is required")

        repository = given.pop("repository", None) or env.get(REPOSITORY_ENV_VAR)
        repository = require_value(
            repository, f"{REPOSITORY_ENV_VAR} environment variable is not set"
        )
        validate_repository(repository)

        host = given.pop("host", None) or env.get(HOST_ENV_VAR) or DEFAULT_HOST

        level = given.pop("compression_level", None)
        if level is None:
            level = env.get(LEVEL_ENV_VAR) or DEFAULT_COMPRESSION_LEVEL
        level = validate_compression_level(level)

        settings = cls(
            token=token,
            repository=repository,
            host=host,
            compression_level=level,
            **given,
        )
        logger.debug(
            f"Resolved settings: repository={settings.repository}, "
            f"host={settings.host}, workdir={settings.workdir}, level={level}"
        )
        return settings
