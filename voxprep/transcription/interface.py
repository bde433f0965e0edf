"""Transcriber interface.

Contract every text producer implements: (features) -> str. An acoustic model
can replace the placeholder policy behind this interface without touching the
conditioning stages or the feature extractor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from voxprep._types import AcousticFeatures


class Transcriber(ABC):
    """Produces text from the descriptors of a conditioned signal."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier of the transcription policy."""
        ...

    @abstractmethod
    def transcribe(self, features: AcousticFeatures) -> str:
        """Return a non-empty transcription for ``features``."""
        ...
