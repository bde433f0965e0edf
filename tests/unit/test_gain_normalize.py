"""Tests for GainNormalizeStage."""

from __future__ import annotations

import numpy as np
import pytest

from voxprep.preprocessing.gain_normalize import GainNormalizeStage


class TestGainNormalizeStage:
    def test_name(self) -> None:
        assert GainNormalizeStage().name == "gain_normalize"

    def test_peak_scaled_to_095(self) -> None:
        audio = np.array([0.1, -0.5, 0.25], dtype=np.float32)

        result, sample_rate = GainNormalizeStage().process(audio, 16000)

        assert sample_rate == 16000
        np.testing.assert_allclose(result, [0.19, -0.95, 0.475], rtol=1e-6)

    def test_quiet_signal_is_amplified(self) -> None:
        audio = np.array([0.001, -0.002], dtype=np.float32)
        result, _sr = GainNormalizeStage().process(audio, 16000)
        assert float(np.max(np.abs(result))) == pytest.approx(0.95, rel=1e-6)

    def test_all_zero_returned_unchanged(self) -> None:
        audio = np.zeros(5, dtype=np.float32)

        result, _sr = GainNormalizeStage().process(audio, 16000)

        np.testing.assert_array_equal(result, audio)
        assert result is not audio

    def test_empty(self) -> None:
        result, _sr = GainNormalizeStage().process(np.zeros(0, dtype=np.float32), 16000)
        assert len(result) == 0

    def test_custom_target(self) -> None:
        result, _sr = GainNormalizeStage(target_peak=0.5).process(
            np.array([0.25, -1.0], dtype=np.float32), 16000
        )
        np.testing.assert_allclose(result, [0.125, -0.5], rtol=1e-6)

    @pytest.mark.parametrize("target", [0.0, -0.5, 1.01])
    def test_invalid_target_rejected(self, target: float) -> None:
        with pytest.raises(ValueError):
            GainNormalizeStage(target_peak=target)

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_second_pass_changes_signal_by_less_than_one_percent(self, seed: int) -> None:
        rng = np.random.default_rng(seed)
        audio = (rng.standard_normal(16000) * rng.uniform(0.01, 3.0)).astype(np.float32)
        stage = GainNormalizeStage()

        once, _sr = stage.process(audio, 16000)
        twice, _sr = stage.process(once, 16000)

        assert float(np.max(np.abs(twice - once))) < 0.01 * float(np.max(np.abs(once)))

    @pytest.mark.parametrize("scale", [1e-4, 0.5, 1.0, 40.0])
    def test_output_within_unit_range(self, scale: float) -> None:
        rng = np.random.default_rng(7)
        audio = (rng.uniform(-1.0, 1.0, 8000) * scale).astype(np.float32)

        result, _sr = GainNormalizeStage().process(audio, 16000)

        assert float(np.max(np.abs(result))) <= 1.0
        assert float(np.max(np.abs(result))) == pytest.approx(0.95, rel=1e-5)
