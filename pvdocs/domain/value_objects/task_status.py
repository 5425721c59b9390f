"""
TaskState value object

Represents the status of one document inside a batch OCR run.
Enforces valid state transitions.
"""
from __future__ import annotations

from enum import Enum


class TaskState(str, Enum):
    """Valid OCR task states."""
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"
    SKIPPED = "skipped"
    REVIEW = "review"
    ALREADY_PROCESSED = "already_processed"

    def can_transition_to(self, new_state: TaskState) -> bool:
        """
        Check if transition to new state is valid.

        Valid transitions:
        - PENDING → PROCESSING, SKIPPED (cancelled before a worker claimed it)
        - PROCESSING → SUCCESS, ERROR, SKIPPED
        - SUCCESS, ERROR, SKIPPED, REVIEW, ALREADY_PROCESSED → (none - terminal)

        ALREADY_PROCESSED is assigned when the batch is built and never reached
        through a transition.
        """
        return new_state in _VALID_TRANSITIONS.get(self, frozenset())

    def is_terminal(self) -> bool:
        """Check if this is a terminal state (no further transitions allowed)."""
        return self in _TERMINAL_STATES

    def is_active(self) -> bool:
        """Check if the task still waits on a worker."""
        return self in {TaskState.PENDING, TaskState.PROCESSING}


_VALID_TRANSITIONS = {
    TaskState.PENDING: frozenset({TaskState.PROCESSING, TaskState.SKIPPED}),
    TaskState.PROCESSING: frozenset({TaskState.SUCCESS, TaskState.ERROR, TaskState.SKIPPED}),
}

_TERMINAL_STATES = frozenset(
    {
        TaskState.SUCCESS,
        TaskState.ERROR,
        TaskState.SKIPPED,
        TaskState.REVIEW,
        TaskState.ALREADY_PROCESSED,
    }
)
