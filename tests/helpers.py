"""Shared test helpers for signal and capture tests.

Usage:
    from tests.helpers import (
        SAMPLE_RATE,
        FakeInputStream,
        make_alternating,
        make_sine,
        make_wav_bytes,
    )
"""

from __future__ import annotations

import io
import threading
import wave

import numpy as np

SAMPLE_RATE = 16000


def make_sine(
    frequency: float = 440.0,
    sample_rate: int = SAMPLE_RATE,
    duration: float = 1.0,
    amplitude: float = 0.5,
) -> np.ndarray:
    """Float32 sine wave."""
    t = np.arange(int(sample_rate * duration)) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)


def make_alternating(n_samples: int, amplitude: float = 0.5) -> np.ndarray:
    """Float32 signal flipping sign every sample (zero-crossing rate 1.0)."""
    signs = np.where(np.arange(n_samples) % 2 == 0, 1.0, -1.0)
    return (amplitude * signs).astype(np.float32)


def make_wav_bytes(
    samples: np.ndarray,
    sample_rate: int = SAMPLE_RATE,
    channels: int = 1,
    sampwidth: int = 2,
) -> bytes:
    """WAV bytes built with the stdlib writer from float samples in [-1, 1]."""
    if sampwidth == 2:
        pcm = (np.asarray(samples) * 32767).astype("<i2").tobytes()
    elif sampwidth == 1:
        pcm = ((np.asarray(samples) * 127) + 128).astype(np.uint8).tobytes()
    else:
        pcm = (np.asarray(samples) * 8388607).astype("<i4").tobytes()
        pcm = b"".join(pcm[i : i + 3] for i in range(0, len(pcm), 4))
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sampwidth)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return buffer.getvalue()


class FakeInputStream:
    """Stand-in for sounddevice.InputStream.

    Tests push audio with ``feed()``, which invokes the callback the way the
    driver thread would.
    """

    def __init__(self, callback, channels: int = 1, fail_on_start: bool = False) -> None:
        self.callback = callback
        self.channels = channels
        self.fail_on_start = fail_on_start
        self.started = False
        self.stopped = False
        self.closed = False
        self.stop_thread: int | None = None

    def start(self) -> None:
        if self.fail_on_start:
            raise RuntimeError("device busy")
        self.started = True

    def stop(self) -> None:
        self.stopped = True
        self.stop_thread = threading.get_ident()

    def close(self) -> None:
        self.closed = True

    def feed(self, samples: np.ndarray, status: object = None) -> None:
        indata = np.asarray(samples, dtype=np.float32).reshape(-1, self.channels)
        self.callback(indata, len(indata), None, status)


class FakeStreamFactory:
    """Stream factory recording the stream it created."""

    def __init__(self, fail_on_start: bool = False, error: Exception | None = None) -> None:
        self.fail_on_start = fail_on_start
        self.error = error
        self.stream: FakeInputStream | None = None
        self.calls = 0

    def __call__(self, config, callback) -> FakeInputStream:
        self.calls += 1
        if self.error is not None:
            raise self.error
        self.stream = FakeInputStream(
            callback, channels=config.channels, fail_on_start=self.fail_on_start
        )
        return self.stream


def make_speech_like(
    sample_rate: int = SAMPLE_RATE,
    lead_in_s: float = 0.5,
    tone_s: float = 1.0,
    seed: int = 42,
) -> np.ndarray:
    """Quiet noise lead-in followed by a loud 440Hz tone.

    The lead-in gives the VAD calibration a noise floor, so the tone survives
    silence suppression.
    """
    rng = np.random.default_rng(seed=seed)
    noise = (0.001 * rng.standard_normal(int(sample_rate * lead_in_s))).astype(np.float32)
    tone = make_sine(sample_rate=sample_rate, duration=tone_s, amplitude=0.5)
    return np.concatenate([noise, tone])
