"""Base interface for audio conditioning pipeline stages."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np


class AudioStage(ABC):
    """Individual audio conditioning stage.

    Each stage receives a numpy float32 array and sample rate, and returns
    a new array with the sample rate. Stages never modify their input.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier name for the stage (e.g. 'noise_reduce', 'vad')."""
        ...

    @abstractmethod
    def process(
        self,
        audio: np.ndarray,
        sample_rate: int,
        *,
        reference: np.ndarray | None = None,
    ) -> tuple[np.ndarray, int]:
        """Process a block of audio.

        Args:
            audio: Numpy float32 array with audio samples.
            sample_rate: Current audio sample rate in Hz.
            reference: The pipeline input before any stage ran, same length
                as ``audio``. Stages that measure the raw capture (VAD) read
                it; others ignore it.

        Returns:
            Tuple (processed audio, sample rate).
        """
        ...
