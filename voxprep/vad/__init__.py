"""Energy-based voice activity detection."""

from __future__ import annotations

from voxprep.vad.energy import EnergyVAD, calibrate_threshold, window_energies

__all__ = ["EnergyVAD", "calibrate_threshold", "window_energies"]
