"""
Process Runner — Narrow interface over external tool invocation.

The pipeline only ever talks to a ProcessRunner, so tests can swap in a
recording fake and assert on the exact argv without spawning binaries.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from .validation import SubprocessError, redact

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class ProcessResult:
    """Exit status and captured output of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """Runs a command and reports its exit code and output."""

    def run(self, command: Sequence[str], cwd: Optional[PathLike] = None) -> ProcessResult:
        raise NotImplementedError

    def check(
        self,
        command: Sequence[str],
        cwd: Optional[PathLike] = None,
        secret: Optional[str] = None,
    ) -> ProcessResult:
        """
        Run a command and raise SubprocessError unless it exits 0.

        ``secret`` is masked in the command and stderr carried by the
        error and in the debug log line.
        """
        safe_command = [redact(arg, secret) for arg in command]
        logger.debug(f"[command]{' '.join(safe_command)}")

        try:
            result = self.run(command, cwd=cwd)
        except SubprocessError as e:
            raise SubprocessError(
                safe_command, e.returncode, redact(e.stderr, secret), not_found=e.not_found,
            ) from None

        if not result.ok:
            stderr = redact(result.stderr or result.stdout, secret)
            if stderr.strip():
                logger.error(stderr.strip())
            raise SubprocessError(safe_command, result.returncode, stderr)

        return result


class SubprocessRunner(ProcessRunner):
    """ProcessRunner backed by subprocess.run. Blocks until the process exits."""

    def run(self, command: Sequence[str], cwd: Optional[PathLike] = None) -> ProcessResult:
        try:
            completed = subprocess.run(
                list(command),
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise SubprocessError(command, None, str(e)) from e
        except OSError as e:
            raise SubprocessError(command, None, str(e), not_found=False) from e

        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
