"""Tests for the noise gate, exponential smoothing, and NoiseReduceStage."""

from __future__ import annotations

import numpy as np
import pytest

from voxprep.preprocessing.noise_reduce import NoiseReduceStage, noise_gate, smooth


class TestNoiseGate:
    def test_strictly_below_threshold_is_zeroed(self) -> None:
        audio = np.array([0.1, -0.24, 0.25, -0.25, 0.5], dtype=np.float32)

        gated = noise_gate(audio, 0.25)

        np.testing.assert_array_equal(gated, [0.0, 0.0, 0.25, -0.25, 0.5])

    def test_zero_threshold_passes_everything(self) -> None:
        audio = np.array([0.0, 1e-6, -1e-6], dtype=np.float32)
        np.testing.assert_array_equal(noise_gate(audio, 0.0), audio)

    def test_input_not_modified(self) -> None:
        audio = np.array([0.001, 0.5], dtype=np.float32)
        noise_gate(audio, 0.01)
        assert audio[0] == np.float32(0.001)


class TestSmooth:
    def test_first_sample_passes_through(self) -> None:
        smoothed = smooth(np.array([1.0, 0.0, 0.0], dtype=np.float32), alpha=0.1)
        np.testing.assert_allclose(smoothed, [1.0, 0.9, 0.81], rtol=1e-6)

    def test_step_response(self) -> None:
        smoothed = smooth(np.array([0.0, 1.0, 1.0], dtype=np.float32), alpha=0.1)
        np.testing.assert_allclose(smoothed, [0.0, 0.1, 0.19], rtol=1e-6)

    def test_alpha_one_is_identity(self) -> None:
        audio = np.array([0.3, -0.7, 0.2], dtype=np.float32)
        np.testing.assert_allclose(smooth(audio, alpha=1.0), audio, rtol=1e-6)

    def test_empty(self) -> None:
        assert len(smooth(np.zeros(0, dtype=np.float32))) == 0

    def test_output_is_float32(self) -> None:
        assert smooth(np.ones(4, dtype=np.float32)).dtype == np.float32


class TestNoiseReduceStage:
    def test_name(self) -> None:
        assert NoiseReduceStage().name == "noise_reduce"

    def test_gate_runs_before_smoothing(self) -> None:
        """Sub-threshold samples are removed before they can leak into the average."""
        stage = NoiseReduceStage(silence_threshold=0.25, alpha=0.5)
        audio = np.array([0.2, 0.0, 1.0], dtype=np.float32)

        result, sample_rate = stage.process(audio, 16000)

        assert sample_rate == 16000
        np.testing.assert_allclose(result, [0.0, 0.0, 0.5], rtol=1e-6)

    def test_preserves_length(self) -> None:
        audio = np.random.default_rng(0).uniform(-1, 1, 1234).astype(np.float32)
        result, _sr = NoiseReduceStage().process(audio, 16000)
        assert len(result) == 1234

    def test_negative_threshold_rejected(self) -> None:
        with pytest.raises(ValueError, match="silence_threshold"):
            NoiseReduceStage(silence_threshold=-0.01)

    @pytest.mark.parametrize("alpha", [0.0, -0.1, 1.5])
    def test_alpha_out_of_range_rejected(self, alpha: float) -> None:
        with pytest.raises(ValueError, match="alpha"):
            NoiseReduceStage(alpha=alpha)
