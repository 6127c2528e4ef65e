"""System factory for driving a StateMachine from a host loop."""
from __future__ import annotations

from typing import Callable, Iterable

from tick_statemachine.machine import StateMachine
from tick_statemachine.outcome import TransitionOutcome
from tick_statemachine.types import TriggerId


def make_fire_system(
    machine: StateMachine,
    poll: Callable[[], Iterable[TriggerId]],
    on_outcome: Callable[[TransitionOutcome], None] | None = None,
    run_periodic: bool = True,
) -> Callable[[], None]:
    """Return a system that feeds polled triggers to ``machine`` each tick.

    Every trigger returned by ``poll`` is fired in order and its outcome
    passed to ``on_outcome``. The current state's periodic() then runs,
    after any transitions of this tick. The system enforces no timing; the
    host decides how often to call it.
    """

    def fire_system() -> None:
        for trigger in poll():
            outcome = machine.fire(trigger)
            if on_outcome is not None:
                on_outcome(outcome)
        if run_periodic:
            machine.periodic()

    return fire_system
