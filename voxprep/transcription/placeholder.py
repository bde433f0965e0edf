"""Rule-based placeholder transcription.

Stands in for an acoustic model. Output is a deterministic function of the
features and the minimum duration; it is built to be testable, not to be
linguistically plausible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from voxprep._audio_constants import DEFAULT_MIN_AUDIO_DURATION_S
from voxprep.transcription.interface import Transcriber

if TYPE_CHECKING:
    from voxprep._types import AcousticFeatures

TOO_SHORT_TEXT = "Audio too short to transcribe"
SILENCE_TEXT = "Silence or very low audio detected. "

# Words per second by zero-crossing rate band: (lower bound, rate).
# First band whose bound is exceeded wins.
_SPEECH_RATE_BANDS: tuple[tuple[float, int], ...] = (
    (0.10, 150),
    (0.05, 120),
)
_SLOW_SPEECH_RATE = 80

_SPEECH_ENERGY_THRESHOLD = 0.01
_HIGH_CENTROID_THRESHOLD = 0.5


def estimate_word_count(duration: float, zero_crossing_rate: float) -> int:
    """Estimated words spoken in ``duration`` seconds, truncated to int."""
    rate = _SLOW_SPEECH_RATE
    for bound, band_rate in _SPEECH_RATE_BANDS:
        if zero_crossing_rate > bound:
            rate = band_rate
            break
    return int(duration * rate)


class PlaceholderTranscriber(Transcriber):
    """Deterministic text from energy, zero-crossing rate, centroid and duration.

    Args:
        min_audio_duration_s: Clips shorter than this get the "too short" text.
    """

    def __init__(self, min_audio_duration_s: float = DEFAULT_MIN_AUDIO_DURATION_S) -> None:
        if min_audio_duration_s < 0:
            msg = f"min_audio_duration_s must be >= 0, got {min_audio_duration_s}"
            raise ValueError(msg)
        self._min_audio_duration_s = min_audio_duration_s

    @property
    def name(self) -> str:
        return "placeholder"

    def transcribe(self, features: AcousticFeatures) -> str:
        if features.duration < self._min_audio_duration_s:
            return TOO_SHORT_TEXT

        if features.energy <= _SPEECH_ENERGY_THRESHOLD:
            return SILENCE_TEXT

        words = estimate_word_count(features.duration, features.zero_crossing_rate)
        band = (
            "High-frequency"
            if features.time_weighted_centroid > _HIGH_CENTROID_THRESHOLD
            else "Low-frequency"
        )
        return (
            "Detected speech content. "
            f"Duration: {features.duration:.1f} seconds. "
            f"Estimated words: {words}. "
            f"{band} speech detected. "
        )
