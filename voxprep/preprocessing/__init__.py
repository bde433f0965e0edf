"""Audio conditioning pipeline.

Conditions decoded audio before feature extraction.
Pipeline: Ingestion -> [Noise Reduce] -> [VAD] -> Gain Normalize -> float32 samples.
"""

from __future__ import annotations

from voxprep.preprocessing.pipeline import AudioPreprocessingPipeline
from voxprep.preprocessing.stages import AudioStage

__all__ = ["AudioPreprocessingPipeline", "AudioStage"]
