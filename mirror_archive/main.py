"""
Mirror Archive — CLI Entry Point

Usage:
    mirror-archive [--workdir DIR] [--level N]
    python -m mirror_archive --repository owner/name --token ghp_xxxxx

Inputs not given as options are read from the environment
(INPUT_GITHUB-TOKEN / GITHUB_TOKEN, GITHUB_REPOSITORY) and from a .env
file in the current directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from .config import ArchiveSettings
from .logging_config import setup_logging
from .pipeline import MirrorArchivePipeline

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "❌ Action failed: "
UNKNOWN_FAILURE = "❌ An unknown error occurred"


def report_failure(error: Exception) -> None:
    """Print a one-line failure message and annotate the workflow run."""
    message = str(error).strip()
    line = f"{FAILURE_PREFIX}{message}" if message else UNKNOWN_FAILURE
    click.secho(line, fg="red", err=True)

    if os.environ.get("GITHUB_ACTIONS") == "true":
        # Workflow command; shows up as an error annotation on the run
        click.echo(f"::error::{line}")


def write_step_output(name: str, value: str) -> None:
    """Append name=value to $GITHUB_OUTPUT when running as a workflow step."""
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        return
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")


@click.command("mirror-archive")
@click.option("--token", help="Access token (default: INPUT_GITHUB-TOKEN or GITHUB_TOKEN)")
@click.option("--repository", "-r", help="owner/name to mirror (default: GITHUB_REPOSITORY)")
@click.option("--host", help="Git host (default: GITHUB_SERVER_HOST or github.com)")
@click.option(
    "--workdir",
    "-C",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory the artifacts are written to",
)
@click.option("--level", type=int, help="zstd compression level, 1-19 (default: 10)")
@click.option("--log-level", help="DEBUG, INFO, WARNING, ERROR (default: LOG_LEVEL or INFO)")
@click.option("--log-format", type=click.Choice(["text", "json"]), help="Log output format")
@click.version_option(package_name="mirror-archive")
def cli(
    token: Optional[str],
    repository: Optional[str],
    host: Optional[str],
    workdir: Path,
    level: Optional[int],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """Create repo.tar.zst from a full mirror clone of a repository."""
    env_file = Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    setup_logging(level=log_level, format_type=log_format)

    try:
        settings = ArchiveSettings.from_env(
            token=token,
            repository=repository,
            host=host,
            workdir=workdir,
            compression_level=level,
        )
        archive_path = MirrorArchivePipeline(settings).run()
        write_step_output("archive-path", str(archive_path))
    except Exception as e:
        logger.debug("Run failed", exc_info=True)
        report_failure(e)
        raise SystemExit(1)

    click.echo(str(archive_path))


if __name__ == "__main__":
    cli()
