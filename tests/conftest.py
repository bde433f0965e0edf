"""Shared fixtures for all tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path so tests can import the `voxprep` package
# when running pytest from the repository root without an editable install.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from tests.helpers import SAMPLE_RATE, make_sine, make_speech_like, make_wav_bytes  # noqa: E402
from voxprep.config.audio import AudioConfig  # noqa: E402
from voxprep.config.settings import get_settings  # noqa: E402


@pytest.fixture
def config() -> AudioConfig:
    """Default configuration (16kHz mono, all stages on)."""
    return AudioConfig()


@pytest.fixture
def sine_wav_bytes() -> bytes:
    """1 second of PCM 16-bit, 16kHz, mono audio (440Hz sine tone)."""
    return make_wav_bytes(make_sine(duration=1.0, amplitude=0.5), SAMPLE_RATE)


@pytest.fixture
def sine_wav_path(tmp_path: Path, sine_wav_bytes: bytes) -> Path:
    """Path to a 1 second 440Hz PCM 16-bit WAV file."""
    path = tmp_path / "sine.wav"
    path.write_bytes(sine_wav_bytes)
    return path


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; isolate env changes between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def speech_wav_path(tmp_path: Path) -> Path:
    """Path to 1.5s of audio: 0.5s noise floor then a 1s 440Hz tone."""
    path = tmp_path / "speech.wav"
    path.write_bytes(make_wav_bytes(make_speech_like(), SAMPLE_RATE))
    return path
