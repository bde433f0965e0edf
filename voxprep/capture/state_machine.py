"""CaptureStateMachine — lifecycle of a realtime capture session.

States:
    IDLE -> CAPTURING -> IDLE

Pure, synchronous component. It does not know sounddevice or asyncio; the
CaptureSession calls transition() once the stream has actually been opened
or detached. Invalid transitions raise InvalidTransitionError.
"""

from __future__ import annotations

from voxprep._types import CaptureState
from voxprep.exceptions import InvalidTransitionError

# Valid transitions: {current_state: {allowed_target_states}}
_VALID_TRANSITIONS: dict[CaptureState, frozenset[CaptureState]] = {
    CaptureState.IDLE: frozenset({CaptureState.CAPTURING}),
    CaptureState.CAPTURING: frozenset({CaptureState.IDLE}),
}


class CaptureStateMachine:
    """State machine for capture sessions. Starts IDLE."""

    def __init__(self) -> None:
        self._state = CaptureState.IDLE

    @property
    def state(self) -> CaptureState:
        """Current session state."""
        return self._state

    def can_transition(self, target: CaptureState) -> bool:
        """Whether ``target`` is reachable from the current state."""
        return target in _VALID_TRANSITIONS[self._state]

    def ensure_can_transition(self, target: CaptureState) -> None:
        """Raise InvalidTransitionError unless ``target`` is reachable."""
        if not self.can_transition(target):
            raise InvalidTransitionError(self._state.value, target.value)

    def transition(self, target: CaptureState) -> None:
        """Transition to the target state.

        Raises:
            InvalidTransitionError: If the transition is invalid.
        """
        self.ensure_can_transition(target)
        self._state = target
