"""Main CLI command group for voxprep."""

from __future__ import annotations

import click

import voxprep
from voxprep.logging import configure_logging


@click.group()
@click.version_option(version=voxprep.__version__, prog_name="voxprep")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: VOXPREP_LOG_LEVEL or INFO).",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log format (default: VOXPREP_LOG_FORMAT or console).",
)
def cli(log_level: str | None, log_format: str | None) -> None:
    """voxprep — audio conditioning and placeholder transcription."""
    if log_level or log_format:
        configure_logging(log_format=log_format, level=log_level, force=True)
