"""Gain Normalize stage for the audio conditioning pipeline.

Scales the signal so its absolute peak lands at 0.95, leaving 5% headroom.
"""

from __future__ import annotations

import numpy as np

from voxprep._audio_constants import NORMALIZE_PEAK
from voxprep.preprocessing.stages import AudioStage


class GainNormalizeStage(AudioStage):
    """Peak-normalize audio.

    All-zero and empty input is returned unchanged (as a copy); there is no
    division when the peak is zero.

    Args:
        target_peak: Linear peak after scaling. Default: 0.95.
    """

    def __init__(self, target_peak: float = NORMALIZE_PEAK) -> None:
        if not 0.0 < target_peak <= 1.0:
            msg = f"target_peak must be in (0, 1], got {target_peak}"
            raise ValueError(msg)
        self._target_peak = target_peak

    @property
    def name(self) -> str:
        """Identifier name for the stage."""
        return "gain_normalize"

    def process(
        self,
        audio: np.ndarray,
        sample_rate: int,
        *,
        reference: np.ndarray | None = None,
    ) -> tuple[np.ndarray, int]:
        """Scale audio so that ``max(|x|) == target_peak``.

        Returns:
            Tuple (normalized float32 audio, unchanged sample rate).
        """
        audio = np.asarray(audio, dtype=np.float32)
        if len(audio) == 0:
            return audio.copy(), sample_rate

        peak = float(np.max(np.abs(audio)))
        if peak <= 0.0:
            return audio.copy(), sample_rate

        gain = self._target_peak / peak
        return (audio * gain).astype(np.float32), sample_rate
