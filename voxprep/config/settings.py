"""Environment configuration via pydantic-settings.

All ``VOXPREP_*`` environment variables for the audio pipeline are read,
validated, and exposed here. Logging env vars (``VOXPREP_LOG_FORMAT``,
``VOXPREP_LOG_LEVEL``) stay in ``voxprep.logging`` for bootstrap-safety.

Usage::

    from voxprep.config.settings import get_settings

    config = get_settings().to_config()

``.env`` files in the working directory are loaded automatically.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from voxprep._audio_constants import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_CHANNELS,
    DEFAULT_MIN_AUDIO_DURATION_S,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_SILENCE_THRESHOLD,
    MIN_SAMPLE_RATE,
)
from voxprep.config.audio import AudioConfig


class AudioSettings(BaseSettings):
    """Audio pipeline settings read from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    sample_rate: int = Field(
        default=DEFAULT_SAMPLE_RATE,
        ge=MIN_SAMPLE_RATE,
        le=384_000,
        validation_alias="VOXPREP_SAMPLE_RATE",
    )
    channels: int = Field(default=DEFAULT_CHANNELS, ge=1, le=32, validation_alias="VOXPREP_CHANNELS")
    buffer_size: int = Field(
        default=DEFAULT_BUFFER_SIZE,
        gt=0,
        le=1_048_576,
        validation_alias="VOXPREP_BUFFER_SIZE",
    )
    silence_threshold: float = Field(
        default=DEFAULT_SILENCE_THRESHOLD,
        ge=0.0,
        le=1.0,
        validation_alias="VOXPREP_SILENCE_THRESHOLD",
    )
    min_audio_duration_s: float = Field(
        default=DEFAULT_MIN_AUDIO_DURATION_S,
        ge=0.0,
        validation_alias="VOXPREP_MIN_AUDIO_DURATION_S",
    )
    noise_reduction: bool = Field(default=True, validation_alias="VOXPREP_NOISE_REDUCTION")
    vad_enabled: bool = Field(default=True, validation_alias="VOXPREP_VAD_ENABLED")

    def to_config(self) -> AudioConfig:
        """Build the immutable AudioConfig consumed by the pipeline."""
        return AudioConfig(
            sample_rate=self.sample_rate,
            channels=self.channels,
            buffer_size=self.buffer_size,
            silence_threshold=self.silence_threshold,
            min_audio_duration_s=self.min_audio_duration_s,
            noise_reduction=self.noise_reduction,
            vad_enabled=self.vad_enabled,
        )


@lru_cache(maxsize=1)
def get_settings() -> AudioSettings:
    """Return the singleton ``AudioSettings`` instance.

    Cached after the first call.
    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    return AudioSettings()
