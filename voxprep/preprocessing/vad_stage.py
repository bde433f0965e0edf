"""VAD stage for the audio conditioning pipeline."""

from __future__ import annotations

import numpy as np

from voxprep.preprocessing.stages import AudioStage
from voxprep.vad.energy import EnergyVAD


class VoiceActivityStage(AudioStage):
    """Silence suppression via EnergyVAD.

    The threshold is calibrated on the current (noise-reduced) signal, window
    energies are measured on the pipeline ``reference`` (the input before
    noise reduction), and silent windows are zeroed in the current signal.

    Args:
        sample_rate: Sample rate in Hz (>= 100).

    Raises:
        ConfigError: If ``sample_rate`` is below 100 Hz.
    """

    def __init__(self, sample_rate: int) -> None:
        self._vad = EnergyVAD(sample_rate)

    @property
    def name(self) -> str:
        """Identifier name for the stage."""
        return "vad"

    @property
    def detector(self) -> EnergyVAD:
        """Underlying detector."""
        return self._vad

    def process(
        self,
        audio: np.ndarray,
        sample_rate: int,
        *,
        reference: np.ndarray | None = None,
    ) -> tuple[np.ndarray, int]:
        """Zero silent windows of ``audio``.

        Returns:
            Tuple (suppressed float32 audio, unchanged sample rate).
        """
        if sample_rate != self._vad.sample_rate:
            msg = f"VAD configured for {self._vad.sample_rate} Hz, got {sample_rate} Hz"
            raise ValueError(msg)
        return self._vad.apply(audio, reference=reference), sample_rate
