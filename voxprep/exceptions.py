"""Typed exceptions for voxprep.

Hierarchy:
    VoxprepError (base)
    +-- ConfigError
    +-- AudioError
    |   +-- UnsupportedFormatError
    |   +-- AudioDecodeError
    |   +-- AudioEncodeError
    |   +-- AudioIOError
    +-- CaptureError
        +-- DeviceUnavailableError
        +-- StreamInitError
        +-- InvalidTransitionError

None of these are retried internally. UnsupportedFormatError means the input
will never be accepted; AudioDecodeError means this particular input is broken.
"""

from __future__ import annotations


class VoxprepError(Exception):
    """Base for all voxprep exceptions."""


# --- Configuration ---


class ConfigError(VoxprepError):
    """Invalid or unreadable pipeline configuration."""

    def __init__(self, detail: str, source: str | None = None) -> None:
        self.detail = detail
        self.source = source
        if source is None:
            super().__init__(f"Invalid configuration: {detail}")
        else:
            super().__init__(f"Invalid configuration '{source}': {detail}")


# --- Audio ---


class AudioError(VoxprepError):
    """Audio-related error."""


class UnsupportedFormatError(AudioError):
    """Container or sample encoding that has no decoder."""

    def __init__(self, format_name: str, reason: str = "format not implemented") -> None:
        self.format_name = format_name
        self.reason = reason
        super().__init__(f"Unsupported audio format '{format_name}': {reason}")


class AudioDecodeError(AudioError):
    """Supported container whose contents could not be decoded."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Could not decode audio: {detail}")


class AudioEncodeError(AudioError):
    """Samples could not be encoded to the output container."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Could not encode audio: {detail}")


class AudioIOError(AudioError):
    """Reading or writing an audio file failed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"I/O failure on '{path}': {reason}")


# --- Capture ---


class CaptureError(VoxprepError):
    """Realtime capture error."""


class DeviceUnavailableError(CaptureError):
    """No usable audio input device."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"No audio input device available: {reason}")


class StreamInitError(CaptureError):
    """Device was found but the input stream could not be built or started."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to start input stream: {reason}")


class InvalidTransitionError(CaptureError):
    """Invalid state transition in the capture state machine."""

    def __init__(self, from_state: str, to_state: str) -> None:
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(f"Invalid transition: {from_state} -> {to_state}")
