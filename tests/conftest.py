"""
Shared fixtures for mirror archive tests.

Provides a recording fake process runner and settings pointing at a
temporary workdir, so the pipeline runs without spawning git/tar/zstd.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

import pytest

from mirror_archive.config import ArchiveSettings
from mirror_archive.process import ProcessResult, ProcessRunner

ENV_VARS = (
    "INPUT_GITHUB-TOKEN",
    "INPUT_GITHUB_TOKEN",
    "GITHUB_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_SERVER_HOST",
    "INPUT_COMPRESSION-LEVEL",
    "GITHUB_ACTIONS",
    "GITHUB_OUTPUT",
    "LOG_LEVEL",
    "LOG_FORMAT",
)

LS_LINE = "-rw-r--r-- 1 runner docker 1.2M Oct 19 07:23 repo.tar.zst"

Outcome = Union[ProcessResult, Exception, Callable[[List[str], Optional[Path]], ProcessResult]]


class FakeRunner(ProcessRunner):
    """ProcessRunner that records calls and returns canned results per tool."""

    def __init__(self, outcomes: Optional[Dict[str, Outcome]] = None):
        self.outcomes = outcomes or {}
        self.calls: List[Tuple[List[str], Optional[Path]]] = []

    def run(self, command, cwd=None) -> ProcessResult:
        command = list(command)
        self.calls.append((command, cwd))
        outcome = self.outcomes.get(command[0], ProcessResult(returncode=0))
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome(command, cwd)
        return outcome

    @property
    def tools(self) -> List[str]:
        return [command[0] for command, _ in self.calls]

    def command_for(self, tool: str) -> List[str]:
        for command, _ in self.calls:
            if command[0] == tool:
                return command
        raise AssertionError(f"{tool} was never run")


def simulate_tool(command: List[str], cwd: Optional[Path]) -> ProcessResult:
    """Create the file each tool would produce, relative to cwd."""
    workdir = Path(cwd) if cwd is not None else Path.cwd()
    tool = command[0]
    if tool == "git":
        (workdir / command[-1]).mkdir()
        (workdir / command[-1] / "HEAD").write_text("ref: refs/heads/main\n")
    elif tool == "tar":
        (workdir / command[2]).write_bytes(b"tar")
    elif tool == "zstd":
        (workdir / command[-1]).write_bytes(b"zst")
    elif tool == "ls":
        return ProcessResult(returncode=0, stdout=LS_LINE + "\n")
    return ProcessResult(returncode=0)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip run inputs from the environment; anything set during a test is undone."""
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def settings(tmp_path: Path) -> ArchiveSettings:
    """Settings for acme/widgets with artifacts under tmp_path."""
    return ArchiveSettings(token="tok123", repository="acme/widgets", workdir=tmp_path)


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Runner where every tool succeeds and produces its output file."""
    return FakeRunner({tool: simulate_tool for tool in ("git", "tar", "zstd", "ls")})
