"""Centralized audio format constants for the voxprep pipeline.

Single source of truth for PCM format parameters and the default values
shared across configuration, preprocessing, VAD, features, and capture.
"""

from __future__ import annotations

# --- PCM 16-bit format ---
# Signed 16-bit integer range: [-32768, 32767]
PCM_INT16_MAX: int = 32767
PCM_INT16_MIN: int = -32768
# Decoding divides by 32768.0 so int16 maps to [-1.0, ~0.99997].
PCM_INT16_SCALE: float = 32768.0

# Bytes per sample for 16-bit PCM.
BYTES_PER_SAMPLE_INT16: int = 2

# --- Configuration defaults ---
DEFAULT_SAMPLE_RATE: int = 16000
DEFAULT_CHANNELS: int = 1
DEFAULT_BUFFER_SIZE: int = 4096
DEFAULT_SILENCE_THRESHOLD: float = 0.01
DEFAULT_MIN_AUDIO_DURATION_S: float = 0.5

# --- Noise reduction ---
# Coefficient of the first-order exponential smoothing filter.
SMOOTHING_ALPHA: float = 0.1

# --- VAD ---
# Window length is sample_rate // VAD_WINDOWS_PER_SECOND (10ms).
VAD_WINDOWS_PER_SECOND: int = 100
# Lowest sample rate that yields a non-empty VAD window.
MIN_SAMPLE_RATE: int = VAD_WINDOWS_PER_SECOND
VAD_CALIBRATION_S: int = 3
# Used when the calibration prefix is shorter than one window.
VAD_FALLBACK_THRESHOLD: float = 0.01
VAD_THRESHOLD_MULTIPLIER: float = 2.0

# --- Normalization ---
# Target peak after gain normalization (5% headroom).
NORMALIZE_PEAK: float = 0.95

# --- Realtime capture ---
# Pending transcriptions held for the caller before the consumer blocks.
RESULT_QUEUE_SIZE: int = 100
# One-second batches waiting for the consumer; further batches are dropped.
BATCH_QUEUE_SIZE: int = 10
