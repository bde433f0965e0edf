"""Scalar acoustic descriptors of a conditioned signal.

Every division here is guarded: empty and all-zero input yield 0.0 rather
than NaN or a ZeroDivisionError.
"""

from __future__ import annotations

import numpy as np

from voxprep._types import AcousticFeatures


def signal_energy(audio: np.ndarray) -> float:
    """Mean-square amplitude; 0.0 for an empty signal."""
    audio = np.asarray(audio, dtype=np.float64)
    if len(audio) == 0:
        return 0.0
    return float(np.mean(np.square(audio)))


def zero_crossing_rate(audio: np.ndarray) -> float:
    """Fraction of adjacent sample pairs whose sign differs.

    Zero counts as non-negative. Signals shorter than 2 samples give 0.0.
    """
    audio = np.asarray(audio)
    if len(audio) < 2:
        return 0.0
    non_negative = audio >= 0
    crossings = np.count_nonzero(non_negative[1:] != non_negative[:-1])
    return crossings / (len(audio) - 1)


def time_weighted_centroid(audio: np.ndarray) -> float:
    """Energy-weighted mean of normalized sample position, in [0, 1).

    ``sum(x[i]^2 * i / n) / sum(x[i]^2)``. This is a time-domain proxy for
    where energy concentrates in the clip, NOT a frequency-domain spectral
    centroid; no transform is involved. 0.0 when the signal has no energy.
    """
    squared = np.square(np.asarray(audio, dtype=np.float64))
    total = float(np.sum(squared))
    if total <= 0.0:
        return 0.0
    positions = np.arange(len(squared), dtype=np.float64) / len(squared)
    return float(np.dot(squared, positions) / total)


def extract_features(audio: np.ndarray, sample_rate: int) -> AcousticFeatures:
    """Compute all descriptors for ``audio``.

    Args:
        audio: Conditioned float32 samples.
        sample_rate: Sample rate in Hz (> 0).

    Returns:
        AcousticFeatures with ``duration = len(audio) / sample_rate`` seconds.
    """
    if sample_rate <= 0:
        msg = f"sample_rate must be positive, got {sample_rate}"
        raise ValueError(msg)

    return AcousticFeatures(
        energy=signal_energy(audio),
        zero_crossing_rate=zero_crossing_rate(audio),
        time_weighted_centroid=time_weighted_centroid(audio),
        duration=len(audio) / sample_rate,
    )
