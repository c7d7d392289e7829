"""
Optimistic mutation bookkeeping.

A calendar move is shown by the widget before the server has accepted it.
Each such change is tracked as idle -> pending -> applied | reverted so a
failed or abandoned request always ends in an explicit revert.
"""
from enum import Enum
from typing import Any, Optional

from app_lib.exceptions import ApplicationException


class MutationState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    APPLIED = "applied"
    REVERTED = "reverted"


class InvalidTransition(ApplicationException):
    """Raised when a mutation is moved out of order (e.g. applied twice)."""

    def __init__(self, current: MutationState, target: MutationState):
        super().__init__(
            f"Cannot move mutation from {current.value} to {target.value}",
            {"current": current.value, "target": target.value},
        )


_ALLOWED = {
    MutationState.IDLE: {MutationState.PENDING},
    MutationState.PENDING: {MutationState.APPLIED, MutationState.REVERTED},
    MutationState.APPLIED: set(),
    MutationState.REVERTED: set(),
}


class PendingMutation:
    def __init__(self, event_id: Any, payload: Any = None):
        self.event_id = event_id
        self.payload = payload
        self.state = MutationState.IDLE
        self.reason: Optional[str] = None

    def _move(self, target: MutationState):
        if target not in _ALLOWED[self.state]:
            raise InvalidTransition(self.state, target)
        self.state = target

    def begin(self) -> "PendingMutation":
        self._move(MutationState.PENDING)
        return self

    def apply(self) -> "PendingMutation":
        self._move(MutationState.APPLIED)
        return self

    def revert(self, reason: Optional[str] = None) -> "PendingMutation":
        self._move(MutationState.REVERTED)
        self.reason = reason
        return self

    @property
    def is_pending(self) -> bool:
        return self.state == MutationState.PENDING

    @property
    def is_settled(self) -> bool:
        return self.state in (MutationState.APPLIED, MutationState.REVERTED)

    def __repr__(self):
        return f"PendingMutation(event_id={self.event_id!r}, state={self.state.value})"
