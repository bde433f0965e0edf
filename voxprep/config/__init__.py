"""Pipeline configuration: immutable AudioConfig plus environment settings."""

from __future__ import annotations

from voxprep.config.audio import AudioConfig
from voxprep.config.settings import AudioSettings, get_settings

__all__ = ["AudioConfig", "AudioSettings", "get_settings"]
