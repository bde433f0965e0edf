"""Audio decoding and encoding functions.

Converts between WAV files/bytes and numpy float32 sample arrays. Only
16-bit signed PCM WAV is decoded; multi-channel audio stays interleaved.
"""

from __future__ import annotations

import io
import wave
from pathlib import Path
from typing import Any

import numpy as np
import soundfile as sf

from voxprep._audio_constants import (
    BYTES_PER_SAMPLE_INT16,
    PCM_INT16_MAX,
    PCM_INT16_MIN,
    PCM_INT16_SCALE,
)
from voxprep.exceptions import (
    AudioDecodeError,
    AudioEncodeError,
    AudioIOError,
    UnsupportedFormatError,
)
from voxprep.logging import get_logger

logger = get_logger("preprocessing.audio_io")

_WAV_EXTENSIONS = frozenset({".wav", ".wave"})

# Recognized containers that have no decoder.
_UNIMPLEMENTED_EXTENSIONS: dict[str, str] = {
    ".mp3": "MP3",
    ".flac": "FLAC",
    ".ogg": "OGG",
    ".opus": "OPUS",
    ".m4a": "M4A",
    ".aac": "AAC",
}

# libsndfile major formats accepted as WAV.
_WAV_CONTAINERS = frozenset({"WAV", "WAVEX"})


def load_audio(path: str | Path) -> tuple[np.ndarray, int]:
    """Load an audio file as a float32 sample array.

    Dispatch is by file extension. Recognized but unimplemented containers
    fail before the file is read.

    Args:
        path: Path to the audio file.

    Returns:
        Tuple (float32 interleaved samples, sample rate in Hz).

    Raises:
        UnsupportedFormatError: Extension has no decoder.
        AudioIOError: The file could not be read.
        AudioDecodeError: The WAV contents are malformed.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix in _UNIMPLEMENTED_EXTENSIONS:
        raise UnsupportedFormatError(
            _UNIMPLEMENTED_EXTENSIONS[suffix],
            f"{_UNIMPLEMENTED_EXTENSIONS[suffix]} decoding is not implemented",
        )
    if suffix not in _WAV_EXTENSIONS:
        raise UnsupportedFormatError(suffix or "<no extension>", "unrecognized file extension")

    try:
        audio_bytes = path.read_bytes()
    except OSError as err:
        raise AudioIOError(str(path), err.strerror or str(err)) from err

    return decode_audio(audio_bytes)


def decode_audio(audio_bytes: bytes) -> tuple[np.ndarray, int]:
    """Decode WAV bytes to a float32 sample array.

    Byte buffers carry no extension, so the container is assumed to be WAV.
    Each int16 sample is converted with ``value / 32768.0``.

    Args:
        audio_bytes: WAV file bytes.

    Returns:
        Tuple (float32 interleaved samples, sample rate in Hz).

    Raises:
        AudioDecodeError: Empty buffer or malformed WAV header.
        UnsupportedFormatError: Not a WAV container, or not 16-bit PCM.
    """
    if not audio_bytes:
        raise AudioDecodeError("empty audio (0 bytes)")

    try:
        info = sf.info(io.BytesIO(audio_bytes))
    except RuntimeError:
        # Fallback to wave stdlib (plain WAV PCM headers libsndfile rejects)
        data, sample_rate, channels = _decode_wav_stdlib(audio_bytes)
    else:
        data, sample_rate, channels = _decode_with_soundfile(audio_bytes, info)

    logger.debug(
        "audio_decoded",
        samples=len(data),
        channels=channels,
        sample_rate=sample_rate,
        duration_s=round(len(data) / (sample_rate * channels), 3) if sample_rate else 0.0,
    )

    return data, sample_rate


def _decode_with_soundfile(audio_bytes: bytes, info: Any) -> tuple[np.ndarray, int, int]:
    """Decode with libsndfile after checking container and sample encoding."""
    if info.format not in _WAV_CONTAINERS:
        raise UnsupportedFormatError(info.format, "only WAV containers are decoded")
    if info.subtype != "PCM_16":
        raise UnsupportedFormatError(
            f"WAV/{info.subtype}", "only 16-bit signed PCM samples are decoded"
        )

    try:
        pcm, sample_rate = sf.read(io.BytesIO(audio_bytes), dtype="int16", always_2d=True)
    except RuntimeError as err:
        raise AudioDecodeError(str(err)) from err

    # (frames, channels) row-major -> interleaved
    data = pcm.reshape(-1).astype(np.float32) / PCM_INT16_SCALE
    return data, int(sample_rate), int(info.channels)


def _decode_wav_stdlib(audio_bytes: bytes) -> tuple[np.ndarray, int, int]:
    """Decode WAV PCM using wave stdlib as fallback.

    Raises:
        AudioDecodeError: If the WAV header is invalid.
        UnsupportedFormatError: If samples are not 16-bit.
    """
    try:
        with wave.open(io.BytesIO(audio_bytes), "rb") as wf:
            n_channels = wf.getnchannels()
            sampwidth = wf.getsampwidth()
            sample_rate = wf.getframerate()
            raw_data = wf.readframes(wf.getnframes())
    except (wave.Error, EOFError) as err:
        raise AudioDecodeError(f"invalid WAV file: {err}") from err

    if sampwidth != BYTES_PER_SAMPLE_INT16:
        raise UnsupportedFormatError(
            f"WAV/PCM_{sampwidth * 8}", "only 16-bit signed PCM samples are decoded"
        )

    # Drop a trailing partial sample rather than failing in frombuffer.
    usable = len(raw_data) - len(raw_data) % BYTES_PER_SAMPLE_INT16
    data = np.frombuffer(raw_data[:usable], dtype="<i2").astype(np.float32) / PCM_INT16_SCALE
    return data, sample_rate, n_channels


def encode_pcm16(audio: np.ndarray, sample_rate: int, channels: int = 1) -> bytes:
    """Encode a float32 sample array to WAV PCM 16-bit bytes.

    Each sample becomes ``clamp(round(x * 32767), -32768, 32767)``.

    Args:
        audio: Float32 samples, interleaved when ``channels > 1``.
        sample_rate: Sample rate in Hz.
        channels: Channel count written to the header.

    Returns:
        Complete WAV file bytes (with header).

    Raises:
        AudioEncodeError: If the sample count is not a whole number of frames.
    """
    if channels < 1:
        raise AudioEncodeError(f"channel count must be >= 1, got {channels}")
    if len(audio) % channels != 0:
        raise AudioEncodeError(
            f"{len(audio)} samples do not fill whole frames of {channels} channels"
        )

    scaled = np.rint(np.asarray(audio, dtype=np.float64) * PCM_INT16_MAX)
    pcm_data = np.clip(scaled, PCM_INT16_MIN, PCM_INT16_MAX).astype("<i2")

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(BYTES_PER_SAMPLE_INT16)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm_data.tobytes())

    return buffer.getvalue()


def save_audio(audio: np.ndarray, path: str | Path, sample_rate: int, channels: int = 1) -> None:
    """Write samples to ``path`` as a PCM 16-bit WAV file.

    Raises:
        AudioEncodeError: If the samples cannot be framed.
        AudioIOError: If the file cannot be written.
    """
    path = Path(path)
    wav_bytes = encode_pcm16(audio, sample_rate, channels)
    try:
        path.write_bytes(wav_bytes)
    except OSError as err:
        raise AudioIOError(str(path), err.strerror or str(err)) from err

    logger.debug("audio_saved", path=str(path), samples=len(audio), channels=channels)
