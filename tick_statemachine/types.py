"""Shared type aliases and errors for the state machine."""
from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Hashable, Union

# Caller-owned identities. Usually Enum members or strings.
StateId = Hashable
TriggerId = Hashable

Predicate = Callable[[], bool]

# A guard is either a predicate or the name of one registered in Guards.
Guard = Union[Predicate, str]

if TYPE_CHECKING:
    from tick_statemachine.outcome import TransitionOutcome

Callback = Callable[["TransitionOutcome"], None]


class FailureReason(Enum):
    """Why a fire() call did not transition."""

    NOT_CONFIGURED = auto()
    NO_TRANSITION = auto()
    AMBIGUOUS = auto()
    GUARD_REJECTED = auto()


class InvalidTriggerError(ValueError):
    """Raised when fire() is given None or an empty string as the trigger."""

    def __init__(self, state: Any, message: str) -> None:
        self.state = state
        super().__init__(message)


def state_name(value: Any) -> str:
    """Display name for a state or trigger: ``Enum.name`` or ``str()``."""
    if isinstance(value, Enum):
        return value.name
    return str(value)
