"""Immutable parameter set controlling every pipeline stage."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from voxprep._audio_constants import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_CHANNELS,
    DEFAULT_MIN_AUDIO_DURATION_S,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_SILENCE_THRESHOLD,
    MIN_SAMPLE_RATE,
)
from voxprep.exceptions import ConfigError


class AudioConfig(BaseModel):
    """Audio pipeline configuration.

    Frozen: stages read it, nothing mutates it. Use ``model_copy(update=...)``
    to derive a variant.

    ``sample_rate`` below 100 Hz is rejected here rather than at call time,
    since the 10 ms VAD window (``sample_rate // 100``) would be empty.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sample_rate: int = Field(default=DEFAULT_SAMPLE_RATE, ge=MIN_SAMPLE_RATE)
    channels: int = Field(default=DEFAULT_CHANNELS, ge=1)
    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)
    silence_threshold: float = Field(default=DEFAULT_SILENCE_THRESHOLD, ge=0.0)
    min_audio_duration_s: float = Field(default=DEFAULT_MIN_AUDIO_DURATION_S, ge=0.0)
    noise_reduction: bool = True
    vad_enabled: bool = True

    @classmethod
    def from_yaml_path(cls, path: str | Path) -> AudioConfig:
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise ConfigError("File not found", source=str(path))

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Error reading file: {e}", source=str(path)) from e

        return cls.from_yaml_string(raw, source_path=str(path))

    @classmethod
    def from_yaml_string(cls, raw: str, source_path: str = "<string>") -> AudioConfig:
        """Load configuration from a YAML string.

        An empty document yields the defaults. Keys may be nested under a
        top-level ``audio`` mapping.
        """
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", source=source_path) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("YAML content must be a mapping", source=source_path)
        if isinstance(data.get("audio"), dict):
            data = data["audio"]

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(str(e), source=source_path) from e
