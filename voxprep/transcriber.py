"""AudioTranscriber — entry points from file, bytes, samples, or microphone to text.

Chain: load -> AudioPreprocessingPipeline -> extract_features -> Transcriber.
Callers receive a plain string; no structured metadata crosses this boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from voxprep.capture.session import CaptureSession
from voxprep.config.audio import AudioConfig
from voxprep.features import extract_features
from voxprep.logging import get_logger
from voxprep.preprocessing.audio_io import decode_audio, load_audio, save_audio
from voxprep.preprocessing.pipeline import AudioPreprocessingPipeline
from voxprep.transcription.placeholder import PlaceholderTranscriber

if TYPE_CHECKING:
    from pathlib import Path

    from voxprep._types import AcousticFeatures
    from voxprep.capture.session import StreamFactory
    from voxprep.transcription.interface import Transcriber

logger = get_logger("transcriber")


class AudioTranscriber:
    """Turns audio into placeholder text using one immutable AudioConfig.

    Args:
        config: Pipeline configuration. Default: ``AudioConfig()``.
        transcriber: Text policy. Default: PlaceholderTranscriber using
            ``config.min_audio_duration_s``.
    """

    def __init__(
        self,
        config: AudioConfig | None = None,
        transcriber: Transcriber | None = None,
    ) -> None:
        self._config = config or AudioConfig()
        self._pipeline = AudioPreprocessingPipeline(self._config)
        self._transcriber = transcriber or PlaceholderTranscriber(
            min_audio_duration_s=self._config.min_audio_duration_s
        )

    @property
    def config(self) -> AudioConfig:
        """Pipeline configuration."""
        return self._config

    @property
    def pipeline(self) -> AudioPreprocessingPipeline:
        """Conditioning pipeline."""
        return self._pipeline

    def load(self, path: str | Path) -> np.ndarray:
        """Load a WAV file as float32 samples.

        Raises:
            UnsupportedFormatError: Not a 16-bit PCM WAV.
            AudioDecodeError: Malformed WAV.
            AudioIOError: File could not be read.
        """
        audio, sample_rate = load_audio(path)
        self._check_sample_rate(sample_rate, source=str(path))
        return audio

    def preprocess(self, audio: np.ndarray) -> np.ndarray:
        """Noise reduction, VAD and normalization as configured."""
        return self._pipeline.process(audio)

    def analyze(self, audio: np.ndarray) -> AcousticFeatures:
        """Features of the conditioned signal."""
        return extract_features(self.preprocess(audio), self._config.sample_rate)

    def transcribe_samples(self, audio: np.ndarray) -> str:
        """Condition ``audio`` and return its transcription."""
        features = self.analyze(audio)
        text = self._transcriber.transcribe(features)
        logger.debug(
            "transcribed",
            policy=self._transcriber.name,
            duration_s=round(features.duration, 3),
            energy=features.energy,
            zero_crossing_rate=features.zero_crossing_rate,
        )
        return text

    def transcribe(self, path: str | Path) -> str:
        """Transcribe an audio file."""
        return self.transcribe_samples(self.load(path))

    def transcribe_bytes(self, audio_bytes: bytes) -> str:
        """Transcribe in-memory WAV bytes."""
        audio, sample_rate = decode_audio(audio_bytes)
        self._check_sample_rate(sample_rate, source="<bytes>")
        return self.transcribe_samples(audio)

    def save_audio(self, audio: np.ndarray, path: str | Path) -> None:
        """Write samples as PCM 16-bit WAV with the configured rate and channels.

        Raises:
            AudioEncodeError: Sample count is not a multiple of the channel count.
            AudioIOError: File could not be written.
        """
        save_audio(audio, path, self._config.sample_rate, self._config.channels)

    def create_session(self, stream_factory: StreamFactory | None = None) -> CaptureSession:
        """Create an idle capture session bound to this transcriber."""
        return CaptureSession(self, stream_factory=stream_factory)

    async def start_realtime(self, stream_factory: StreamFactory | None = None) -> CaptureSession:
        """Create and start a capture session.

        Raises:
            DeviceUnavailableError: No input device.
            StreamInitError: The input stream could not be started.
        """
        session = self.create_session(stream_factory)
        await session.start()
        return session

    def _check_sample_rate(self, sample_rate: int, source: str) -> None:
        # Samples are processed at the configured rate, never resampled.
        if sample_rate != self._config.sample_rate:
            logger.warning(
                "sample_rate_mismatch",
                source=source,
                file_sample_rate=sample_rate,
                config_sample_rate=self._config.sample_rate,
            )
