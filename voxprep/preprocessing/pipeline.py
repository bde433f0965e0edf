"""Audio conditioning pipeline.

Orchestrates stages in sequence: [Noise Reduce] -> [VAD] -> Gain Normalize.
Noise reduction and VAD are toggled by AudioConfig; normalization always runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from voxprep.logging import get_logger
from voxprep.preprocessing.audio_io import decode_audio, encode_pcm16
from voxprep.preprocessing.gain_normalize import GainNormalizeStage
from voxprep.preprocessing.noise_reduce import NoiseReduceStage
from voxprep.preprocessing.vad_stage import VoiceActivityStage

if TYPE_CHECKING:
    from voxprep.config.audio import AudioConfig
    from voxprep.preprocessing.stages import AudioStage

logger = get_logger("preprocessing.pipeline")


def build_stages(config: AudioConfig) -> list[AudioStage]:
    """Create the stage list described by ``config``."""
    stages: list[AudioStage] = []
    if config.noise_reduction:
        stages.append(NoiseReduceStage(silence_threshold=config.silence_threshold))
    if config.vad_enabled:
        stages.append(VoiceActivityStage(sample_rate=config.sample_rate))
    stages.append(GainNormalizeStage())
    return stages


class AudioPreprocessingPipeline:
    """Audio conditioning pipeline.

    Every stage is a pure function of (config, input): the input array is
    never modified and each stage returns a new one.

    Args:
        config: Pipeline configuration (enabled stages, parameters).
        stages: Stages to execute. If None, built from ``config``.
    """

    def __init__(
        self,
        config: AudioConfig,
        stages: list[AudioStage] | None = None,
    ) -> None:
        self._config = config
        self._stages = stages if stages is not None else build_stages(config)

    @property
    def config(self) -> AudioConfig:
        """Pipeline configuration."""
        return self._config

    @property
    def stages(self) -> list[AudioStage]:
        """List of pipeline stages."""
        return list(self._stages)

    def process(self, audio: np.ndarray) -> np.ndarray:
        """Run ``audio`` through all stages.

        The original input is passed to every stage as ``reference`` so the
        VAD can measure energy on the un-gated, un-smoothed signal.

        Args:
            audio: Float32 samples at ``config.sample_rate``.

        Returns:
            Conditioned float32 samples, same length as the input.
        """
        reference = np.asarray(audio, dtype=np.float32)
        processed = reference
        sample_rate = self._config.sample_rate

        for stage in self._stages:
            processed, sample_rate = stage.process(processed, sample_rate, reference=reference)
            logger.debug(
                "stage_complete",
                stage=stage.name,
                sample_rate=sample_rate,
                samples=len(processed),
            )

        return processed

    def process_bytes(self, audio_bytes: bytes) -> bytes:
        """Decode WAV bytes, condition them, and encode back to PCM 16-bit WAV.

        Raises:
            AudioDecodeError: If the input WAV is malformed.
            UnsupportedFormatError: If the input is not 16-bit PCM WAV.
        """
        audio, _sample_rate = decode_audio(audio_bytes)
        processed = self.process(audio)
        return encode_pcm16(processed, self._config.sample_rate, self._config.channels)
