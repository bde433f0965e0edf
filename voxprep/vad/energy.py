"""Energy-based Voice Activity Detection with adaptive threshold.

The signal is split into non-overlapping 10 ms windows and each window's
mean-square energy is compared to a threshold calibrated from the quietest
part of the first seconds of audio. Windows below the threshold are silence.

Calibration and application are two independent passes: calibration looks
only at a bounded prefix of the signal being suppressed, application covers
the whole signal. In the pipeline the two passes read different signals:
calibration sees the noise-reduced input, application measures the raw
capture. Gating and smoothing lower the calibrated threshold relative to the
raw energies, so the detector keeps more windows than either signal alone
would suggest.
"""

from __future__ import annotations

import numpy as np

from voxprep._audio_constants import (
    MIN_SAMPLE_RATE,
    VAD_CALIBRATION_S,
    VAD_FALLBACK_THRESHOLD,
    VAD_THRESHOLD_MULTIPLIER,
    VAD_WINDOWS_PER_SECOND,
)
from voxprep.exceptions import ConfigError
from voxprep.logging import get_logger

logger = get_logger("vad.energy")


def window_energies(signal: np.ndarray, window_size: int) -> np.ndarray:
    """Mean-square energy of consecutive non-overlapping windows.

    A trailing partial window is measured over the samples it has.

    Args:
        signal: Float samples.
        window_size: Samples per window (> 0).

    Returns:
        Float64 array with one energy per window (empty for empty input).
    """
    if window_size <= 0:
        msg = f"window_size must be positive, got {window_size}"
        raise ValueError(msg)

    squared = np.square(np.asarray(signal, dtype=np.float64))
    n_full = len(squared) // window_size
    full_end = n_full * window_size

    energies = squared[:full_end].reshape(n_full, window_size).mean(axis=1)
    if full_end < len(squared):
        energies = np.append(energies, squared[full_end:].mean())
    return energies


def calibrate_threshold(signal: np.ndarray, window_size: int, calibration_samples: int) -> float:
    """Estimate the silence threshold from the start of the signal.

    Takes at most ``calibration_samples`` from the start, sorts the window
    energies, and doubles the value at index ``len // 4`` (25th percentile).

    Returns:
        The threshold, or exactly 0.01 when the prefix is shorter than one window.
    """
    prefix = np.asarray(signal)[:calibration_samples]
    if len(prefix) < window_size:
        return VAD_FALLBACK_THRESHOLD

    energies = np.sort(window_energies(prefix, window_size))
    return float(energies[len(energies) // 4] * VAD_THRESHOLD_MULTIPLIER)


class EnergyVAD:
    """Adaptive energy-threshold voice activity detector.

    Args:
        sample_rate: Sample rate in Hz. Must be >= 100 so the 10 ms window
            holds at least one sample.

    Raises:
        ConfigError: If ``sample_rate`` is below 100 Hz.
    """

    def __init__(self, sample_rate: int) -> None:
        if sample_rate < MIN_SAMPLE_RATE:
            raise ConfigError(
                f"sample_rate must be >= {MIN_SAMPLE_RATE} Hz for 10ms VAD windows, "
                f"got {sample_rate}"
            )
        self._sample_rate = sample_rate
        self._window_size = sample_rate // VAD_WINDOWS_PER_SECOND
        self._calibration_samples = VAD_CALIBRATION_S * sample_rate

    @property
    def sample_rate(self) -> int:
        """Configured sample rate in Hz."""
        return self._sample_rate

    @property
    def window_size(self) -> int:
        """Samples per 10 ms window."""
        return self._window_size

    def calibrate(self, signal: np.ndarray) -> float:
        """Threshold from the first 3 seconds of ``signal``."""
        return calibrate_threshold(signal, self._window_size, self._calibration_samples)

    def speech_mask(self, signal: np.ndarray, threshold: float) -> np.ndarray:
        """Per-sample boolean mask, True where the enclosing window is speech.

        Windows are classified independently; no smoothing across windows.
        """
        signal = np.asarray(signal)
        if len(signal) == 0:
            return np.zeros(0, dtype=bool)
        is_speech = window_energies(signal, self._window_size) >= threshold
        return np.repeat(is_speech, self._window_size)[: len(signal)]

    def apply(self, audio: np.ndarray, reference: np.ndarray | None = None) -> np.ndarray:
        """Zero every window of ``audio`` whose energy is below the threshold.

        The threshold is calibrated on ``audio``; window energies are measured
        on ``reference``.

        Args:
            audio: Samples to calibrate on and suppress (e.g. the noise-reduced
                signal).
            reference: Signal the window energies are measured on, same length
                as ``audio``. Defaults to ``audio`` itself.

        Returns:
            New float32 array with silent windows zeroed.
        """
        audio = np.asarray(audio, dtype=np.float32)
        reference = audio if reference is None else np.asarray(reference, dtype=np.float32)
        if len(reference) != len(audio):
            msg = f"reference has {len(reference)} samples, audio has {len(audio)}"
            raise ValueError(msg)
        if len(audio) == 0:
            return audio.copy()

        threshold = self.calibrate(audio)
        mask = self.speech_mask(reference, threshold)

        logger.debug(
            "vad_calibrated",
            threshold=threshold,
            windows=-(-len(audio) // self._window_size),
            silent_samples=int(len(mask) - np.count_nonzero(mask)),
        )

        return np.where(mask, audio, np.float32(0.0)).astype(np.float32)
