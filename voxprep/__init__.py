"""voxprep — audio ingestion and signal-conditioning pipeline.

Loads 16-bit PCM WAV (or captures from the microphone), cleans the waveform
with a noise gate, smoothing filter, energy VAD and peak normalization,
derives scalar acoustic features, and maps them to placeholder text.
"""

from __future__ import annotations

from voxprep._types import AcousticFeatures, CaptureState
from voxprep.config.audio import AudioConfig
from voxprep.transcriber import AudioTranscriber

__version__ = "0.1.0"

__all__ = [
    "AcousticFeatures",
    "AudioConfig",
    "AudioTranscriber",
    "CaptureState",
    "__version__",
]
