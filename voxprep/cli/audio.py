"""`voxprep transcribe`, `features`, `clean` and `listen` commands."""

from __future__ import annotations

import asyncio
import functools
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from pydantic import ValidationError

from voxprep._types import CaptureState
from voxprep.cli.main import cli
from voxprep.config.audio import AudioConfig
from voxprep.config.settings import get_settings
from voxprep.exceptions import VoxprepError
from voxprep.transcriber import AudioTranscriber

if TYPE_CHECKING:
    from collections.abc import Callable


def _config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared options that override the environment/YAML configuration."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="YAML file with audio settings (default: VOXPREP_* environment).",
        ),
        click.option("--sample-rate", type=int, default=None, help="Sample rate in Hz."),
        click.option("--channels", type=int, default=None, help="Channel count."),
        click.option(
            "--silence-threshold", type=float, default=None, help="Noise-gate cutoff amplitude."
        ),
        click.option(
            "--min-duration",
            type=float,
            default=None,
            help="Seconds below which audio is too short to transcribe.",
        ),
        click.option(
            "--noise-reduction/--no-noise-reduction",
            default=None,
            help="Toggle noise gate and smoothing.",
        ),
        click.option("--vad/--no-vad", "vad_enabled", default=None, help="Toggle VAD."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_config(
    config_path: Path | None,
    sample_rate: int | None,
    channels: int | None,
    silence_threshold: float | None,
    min_duration: float | None,
    noise_reduction: bool | None,
    vad_enabled: bool | None,
) -> AudioConfig:
    """Resolve configuration: YAML or environment, then CLI overrides."""
    base = (
        AudioConfig.from_yaml_path(config_path)
        if config_path is not None
        else get_settings().to_config()
    )
    overrides = {
        "sample_rate": sample_rate,
        "channels": channels,
        "silence_threshold": silence_threshold,
        "min_audio_duration_s": min_duration,
        "noise_reduction": noise_reduction,
        "vad_enabled": vad_enabled,
    }
    data = base.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    return AudioConfig.model_validate(data)


def _handle_errors(func: Callable[..., None]) -> Callable[..., None]:
    """Print pipeline errors as ``Error: ...`` and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        try:
            func(*args, **kwargs)
        except (VoxprepError, ValidationError) as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)

    return wrapper


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@_config_options
@_handle_errors
def transcribe(file: Path, config_path: Path | None, **overrides: Any) -> None:
    """Transcribes an audio file."""
    transcriber = AudioTranscriber(_build_config(config_path, **overrides))
    click.echo(transcriber.transcribe(file))


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@_config_options
@_handle_errors
def features(file: Path, config_path: Path | None, **overrides: Any) -> None:
    """Prints acoustic features of the conditioned audio as JSON."""
    transcriber = AudioTranscriber(_build_config(config_path, **overrides))
    result = transcriber.analyze(transcriber.load(file))
    click.echo(json.dumps(asdict(result), indent=2))


@cli.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@_config_options
@_handle_errors
def clean(file: Path, output: Path, config_path: Path | None, **overrides: Any) -> None:
    """Conditions an audio file and writes the result as PCM 16-bit WAV."""
    transcriber = AudioTranscriber(_build_config(config_path, **overrides))
    cleaned = transcriber.preprocess(transcriber.load(file))
    transcriber.save_audio(cleaned, output)
    click.echo(f"Wrote {output}")


async def _listen(config: AudioConfig, duration: float | None) -> None:
    transcriber = AudioTranscriber(config)
    session = await transcriber.start_realtime()

    async def _print_results() -> None:
        async for text in session.results():
            click.echo(text)

    printer = asyncio.create_task(_print_results())
    try:
        if duration is None:
            await asyncio.Event().wait()
        else:
            await asyncio.sleep(duration)
    finally:
        if session.state is CaptureState.CAPTURING:
            await session.stop()
        await printer


@cli.command()
@click.option(
    "--duration",
    type=float,
    default=None,
    help="Stop after this many seconds (default: until Ctrl+C).",
)
@_config_options
@_handle_errors
def listen(duration: float | None, config_path: Path | None, **overrides: Any) -> None:
    """Transcribes the default microphone, one line per second of audio."""
    config = _build_config(config_path, **overrides)
    click.echo("Listening. Press Ctrl+C to stop.", err=True)
    try:
        asyncio.run(_listen(config, duration))
    except KeyboardInterrupt:
        click.echo("\nStopped.", err=True)
