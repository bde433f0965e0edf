"""Realtime microphone capture feeding the conditioning pipeline."""

from __future__ import annotations

from voxprep.capture.buffer import CaptureBuffer
from voxprep.capture.session import CaptureSession, open_input_stream
from voxprep.capture.state_machine import CaptureStateMachine

__all__ = ["CaptureBuffer", "CaptureSession", "CaptureStateMachine", "open_input_stream"]
