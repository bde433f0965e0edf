"""Core types for voxprep.

Enums and dataclasses shared by the pipeline stages, the feature extractor,
the transcription policy, and the capture session.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CaptureState(Enum):
    """State of a realtime capture session.

    Valid transitions:
        IDLE -> CAPTURING (input stream opened and started)
        CAPTURING -> IDLE (stream detached on stop)
    """

    IDLE = "idle"
    CAPTURING = "capturing"


@dataclass(frozen=True, slots=True)
class AcousticFeatures:
    """Scalar descriptors of a conditioned signal.

    Derived per invocation and never persisted.

    Attributes:
        energy: Mean-square amplitude (>= 0).
        zero_crossing_rate: Fraction of adjacent sample pairs changing sign, in [0, 1].
        time_weighted_centroid: Position in time where energy concentrates, in [0, 1].
        duration: Signal length in seconds.
    """

    energy: float
    zero_crossing_rate: float
    time_weighted_centroid: float
    duration: float
