"""Text synthesis from acoustic features."""

from __future__ import annotations

from voxprep.transcription.interface import Transcriber
from voxprep.transcription.placeholder import PlaceholderTranscriber

__all__ = ["PlaceholderTranscriber", "Transcriber"]
