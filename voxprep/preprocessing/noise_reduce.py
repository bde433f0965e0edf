"""Noise Reduce stage for the audio conditioning pipeline.

Two order-dependent passes: a hard noise gate, then a first-order
exponential moving average (low-pass) over the gated signal.
"""

from __future__ import annotations

import numpy as np
from scipy.signal import lfilter

from voxprep._audio_constants import DEFAULT_SILENCE_THRESHOLD, SMOOTHING_ALPHA
from voxprep.preprocessing.stages import AudioStage


def noise_gate(audio: np.ndarray, threshold: float) -> np.ndarray:
    """Zero every sample with ``|x| < threshold``; others pass unchanged."""
    audio = np.asarray(audio, dtype=np.float32)
    return np.where(np.abs(audio) < threshold, np.float32(0.0), audio).astype(np.float32)


def smooth(audio: np.ndarray, alpha: float = SMOOTHING_ALPHA) -> np.ndarray:
    """First-order exponential moving average.

    ``y[0] = x[0]`` and ``y[i] = alpha * x[i] + (1 - alpha) * y[i - 1]``.
    """
    audio = np.asarray(audio, dtype=np.float32)
    if len(audio) == 0:
        return audio.copy()

    decay = 1.0 - alpha
    # Initial state makes y[0] = alpha*x[0] + decay*x[0] = x[0].
    zi = np.array([decay * float(audio[0])])
    smoothed, _ = lfilter([alpha], [1.0, -decay], audio.astype(np.float64), zi=zi)
    return smoothed.astype(np.float32)


class NoiseReduceStage(AudioStage):
    """Noise gate followed by exponential smoothing.

    Args:
        silence_threshold: Gate cutoff amplitude. Default: 0.01.
        alpha: Smoothing coefficient. Default: 0.1.
    """

    def __init__(
        self,
        silence_threshold: float = DEFAULT_SILENCE_THRESHOLD,
        alpha: float = SMOOTHING_ALPHA,
    ) -> None:
        if silence_threshold < 0:
            msg = f"silence_threshold must be >= 0, got {silence_threshold}"
            raise ValueError(msg)
        if not 0.0 < alpha <= 1.0:
            msg = f"alpha must be in (0, 1], got {alpha}"
            raise ValueError(msg)
        self._silence_threshold = silence_threshold
        self._alpha = alpha

    @property
    def name(self) -> str:
        """Identifier name for the stage."""
        return "noise_reduce"

    def process(
        self,
        audio: np.ndarray,
        sample_rate: int,
        *,
        reference: np.ndarray | None = None,
    ) -> tuple[np.ndarray, int]:
        """Gate then smooth the whole block.

        Returns:
            Tuple (filtered float32 audio, unchanged sample rate).
        """
        gated = noise_gate(audio, self._silence_threshold)
        return smooth(gated, self._alpha), sample_rate
