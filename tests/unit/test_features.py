"""Tests for acoustic feature extraction."""

from __future__ import annotations

import numpy as np
import pytest

from tests.helpers import make_alternating, make_sine
from voxprep._types import AcousticFeatures
from voxprep.features import (
    extract_features,
    signal_energy,
    time_weighted_centroid,
    zero_crossing_rate,
)


class TestSignalEnergy:
    def test_mean_square(self) -> None:
        assert signal_energy(np.array([0.5, -0.5, 0.5, -0.5])) == pytest.approx(0.25)

    def test_empty(self) -> None:
        assert signal_energy(np.zeros(0)) == 0.0

    def test_sine_energy_is_half_amplitude_squared(self) -> None:
        assert signal_energy(make_sine(amplitude=0.5)) == pytest.approx(0.125, rel=1e-3)


class TestZeroCrossingRate:
    def test_alternating_signal(self) -> None:
        assert zero_crossing_rate(make_alternating(100)) == pytest.approx(1.0)

    def test_constant_signal(self) -> None:
        assert zero_crossing_rate(np.ones(10)) == 0.0

    def test_zero_counts_as_non_negative(self) -> None:
        assert zero_crossing_rate(np.array([0.0, -1.0])) == 1.0
        assert zero_crossing_rate(np.array([0.0, 0.0, 1.0])) == 0.0

    @pytest.mark.parametrize("n", [0, 1])
    def test_fewer_than_two_samples(self, n: int) -> None:
        assert zero_crossing_rate(np.ones(n)) == 0.0

    def test_sine_crossings(self) -> None:
        # 440Hz crosses zero 880 times per second
        rate = zero_crossing_rate(make_sine(frequency=440.0, duration=1.0))
        assert rate == pytest.approx(880 / 15999, abs=1e-3)


class TestTimeWeightedCentroid:
    def test_energy_at_start(self) -> None:
        assert time_weighted_centroid(np.array([1.0, 0.0, 0.0, 0.0])) == 0.0

    def test_energy_at_end(self) -> None:
        assert time_weighted_centroid(np.array([0.0, 0.0, 0.0, 1.0])) == pytest.approx(0.75)

    def test_uniform_energy_is_near_half(self) -> None:
        centroid = time_weighted_centroid(np.ones(1000))
        assert centroid == pytest.approx(0.4995)

    def test_silence(self) -> None:
        assert time_weighted_centroid(np.zeros(100)) == 0.0

    def test_empty(self) -> None:
        assert time_weighted_centroid(np.zeros(0)) == 0.0


class TestExtractFeatures:
    def test_returns_all_fields(self) -> None:
        features = extract_features(make_alternating(16000), 16000)

        assert isinstance(features, AcousticFeatures)
        assert features.energy == pytest.approx(0.25)
        assert features.zero_crossing_rate == pytest.approx(1.0)
        assert 0.0 <= features.time_weighted_centroid < 1.0
        assert features.duration == 1.0

    def test_duration_uses_sample_rate(self) -> None:
        assert extract_features(np.zeros(4000), 8000).duration == 0.5

    def test_empty_signal(self) -> None:
        features = extract_features(np.zeros(0, dtype=np.float32), 16000)
        assert features == AcousticFeatures(0.0, 0.0, 0.0, 0.0)

    @pytest.mark.parametrize("sample_rate", [0, -16000])
    def test_invalid_sample_rate(self, sample_rate: int) -> None:
        with pytest.raises(ValueError):
            extract_features(np.ones(10), sample_rate)

    def test_features_are_frozen(self) -> None:
        features = extract_features(np.ones(10), 16000)
        with pytest.raises(AttributeError):
            features.energy = 1.0  # type: ignore[misc]
