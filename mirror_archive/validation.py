"""
Validation — Error taxonomy and input checks.

Every failure a run can hit is one of these types, so the CLI has a
single place to turn them into a failed exit.

## Usage

    from mirror_archive.validation import ConfigurationError, require_value

    token = require_value(os.environ.get("GITHUB_TOKEN"), "GitHub token is required")
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

REDACTED = "***"

_REPOSITORY_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


class MirrorArchiveError(Exception):
    """Base class for errors that abort a mirror archive run."""
    pass


class ConfigurationError(MirrorArchiveError):
    """Raised when configuration is missing or invalid."""
    pass


class SubprocessError(MirrorArchiveError):
    """
    Raised when an external tool exits non-zero or cannot be spawned.

    returncode is None for spawn failures; not_found tells a missing
    binary apart from one that exists but could not be executed.
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
        not_found: bool = True,
    ):
        self.command: List[str] = list(command)
        self.returncode = returncode
        self.not_found = not_found
        self.stderr = stderr.strip()
        super().__init__(self._format_message())

    @property
    def tool(self) -> str:
        return self.command[0] if self.command else "<unknown>"

    def _format_message(self) -> str:
        if self.returncode is None and self.not_found:
            message = f"Unable to locate executable file: {self.tool}"
        elif self.returncode is None:
            message = f"Unable to run {self.tool}"
        else:
            message = f'"{self.tool}" failed with exit code {self.returncode}'
        if self.stderr:
            message += f": {self.stderr.splitlines()[-1]}"
        return message


class InspectionWarning(UserWarning):
    """Category for a failed artifact inspection. Logged, never raised."""
    pass


def require_value(value: Optional[str], message: str) -> str:
    """Return value, or raise ConfigurationError if it is missing or empty."""
    if value is None or not value.strip():
        raise ConfigurationError(message)
    return value.strip()


def validate_repository(repository: str) -> str:
    """Validate an ``owner/name`` repository identifier."""
    if not _REPOSITORY_RE.match(repository):
        raise ConfigurationError(
            f"Repository must be in owner/name form, got: {repository!r}"
        )
    return repository


def validate_compression_level(level: object) -> int:
    """Validate a zstd compression level (1..19)."""
    try:
        value = int(level)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise ConfigurationError(f"Compression level must be an integer, got: {level!r}")

    if not 1 <= value <= 19:
        raise ConfigurationError(f"Compression level must be between 1 and 19, got: {value}")
    return value


def redact(text: str, secret: Optional[str]) -> str:
    """Replace every occurrence of secret in text with ***."""
    if not secret:
        return text
    return text.replace(secret, REDACTED)
