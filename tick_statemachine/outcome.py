"""TransitionOutcome - the record produced by one fire() call."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tick_statemachine.transition import Transition
from tick_statemachine.types import FailureReason, StateId, TriggerId, state_name


@dataclass(frozen=True, slots=True)
class TransitionOutcome:
    """
    Result of offering a trigger to the machine.

    Attributes:
        from_state: State the machine was in when fire() was called.
        trigger: Trigger that was fired.
        to_state: Resolved target state; equals from_state when nothing resolved.
        transition: The chosen transition, or None if resolution found none.
        failed: True if the machine did not transition.
        reason: Which failure case applied, None on success.
    """

    from_state: StateId
    trigger: TriggerId
    to_state: StateId
    transition: Transition | None = None
    failed: bool = False
    reason: FailureReason | None = None

    @classmethod
    def failure(
        cls,
        from_state: StateId,
        trigger: TriggerId,
        reason: FailureReason,
        transition: Transition | None = None,
    ) -> TransitionOutcome:
        to_state = transition.destination if transition is not None else from_state
        return cls(
            from_state=from_state,
            trigger=trigger,
            to_state=to_state,
            transition=transition,
            failed=True,
            reason=reason,
        )

    @classmethod
    def success(cls, from_state: StateId, trigger: TriggerId, transition: Transition) -> TransitionOutcome:
        return cls(
            from_state=from_state,
            trigger=trigger,
            to_state=transition.destination,
            transition=transition,
        )

    @property
    def internal(self) -> bool:
        return self.transition is not None and self.transition.internal

    @property
    def succeeded(self) -> bool:
        return not self.failed

    def as_event(self) -> dict[str, Any]:
        """Flat dict for a telemetry event log."""
        return {
            "type": "fire",
            "start_state": state_name(self.from_state),
            "end_state": state_name(self.to_state),
            "trigger": state_name(self.trigger),
        }
