"""StateMachine - fires triggers against a MachineConfig.

- Synchronous and single-threaded: fire() runs to completion inside the
  caller's tick and never blocks.
- A trigger that resolves to no transition is a routine event. fire()
  returns a failed TransitionOutcome and the current state is kept.
- Exceptions raised by guards and callbacks propagate to the caller. The
  machine does not roll back; the current state and last outcome only
  change once every callback of the transition has returned.

Callback order for an external transition:

    source on_exit -> transition action -> destination on_entry -> state updated

Internal transitions run only the action.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque

from tick_statemachine.machine_config import MachineConfig
from tick_statemachine.outcome import TransitionOutcome
from tick_statemachine.transition import Transition
from tick_statemachine.types import (
    FailureReason,
    InvalidTriggerError,
    StateId,
    TriggerId,
    state_name,
)

logger = logging.getLogger("tick_statemachine.machine")


def _run_periodic(state: Any) -> bool:
    fn = getattr(state, "periodic", None)
    if callable(fn):
        fn()
        return True
    return False


class StateMachine:
    """
    Execution engine over a shared MachineConfig.

    Args:
        config: The built configuration. Treated as read-only.
        initial_state: State the machine starts in. Need not be configured.
        recheck_guards: Re-evaluate the chosen transition's guard just before
            committing it. A guard that no longer holds fails the fire with
            FailureReason.GUARD_REJECTED.
        debug: Record each successful transition in an event buffer, see
            drain_events().
        event_limit: Size of the debug event buffer. Oldest events are
            dropped once it is full.
    """

    def __init__(
        self,
        config: MachineConfig,
        initial_state: StateId,
        *,
        recheck_guards: bool = True,
        debug: bool = False,
        event_limit: int = 64,
    ) -> None:
        if not isinstance(config, MachineConfig):
            raise TypeError(
                f"config must be a MachineConfig, not {type(config).__name__}"
            )
        if initial_state is None:
            raise ValueError("initial_state must not be None")
        if event_limit <= 0:
            raise ValueError("event_limit must be positive")
        self._config = config
        self._current: StateId = initial_state
        self._last: TransitionOutcome | None = None
        self._recheck_guards = recheck_guards
        self._debug = debug
        self._events: Deque[dict[str, Any]] = deque(maxlen=event_limit)

    # ------- Accessors ------- #

    @property
    def config(self) -> MachineConfig:
        return self._config

    @property
    def current_state(self) -> StateId:
        return self._current

    @property
    def last_outcome(self) -> TransitionOutcome | None:
        """Outcome of the most recent completed fire(), None before the first one."""
        return self._last

    @property
    def debug(self) -> bool:
        return self._debug

    def was_last_fire_successful(self) -> bool:
        return self._last is None or not self._last.failed

    def in_state(self, state: StateId) -> bool:
        return self._current == state

    # ------- Firing ------- #

    def fire(self, trigger: TriggerId) -> TransitionOutcome:
        """Offer ``trigger`` to the current state and return what happened.

        ``None`` and the empty string are not triggers and raise
        InvalidTriggerError. If a callback raises, neither the current state
        nor ``last_outcome`` is updated.
        """
        if trigger is None or (isinstance(trigger, str) and not trigger):
            raise InvalidTriggerError(
                self._current,
                f"Cannot fire an empty trigger ({trigger!r}) in state {state_name(self._current)}",
            )

        source = self._current
        outcome = self._select(source, trigger)
        if outcome.failed:
            self._last = outcome
            logger.debug(
                "fire %s in %s failed: %s",
                state_name(trigger), state_name(source), outcome.reason.name,
            )
            return outcome

        transition = outcome.transition
        assert transition is not None
        self._commit(transition, outcome)
        self._last = outcome
        return outcome

    def _select(self, source: StateId, trigger: TriggerId) -> TransitionOutcome:
        resolution = self._config.resolution(source, trigger)
        if resolution is None:
            return TransitionOutcome.failure(source, trigger, FailureReason.NOT_CONFIGURED)

        if resolution.ambiguous:
            first, second = resolution.rivals
            logger.warning(
                "Ambiguous guards for %s in %s: both %s and %s hold; not transitioning",
                state_name(trigger),
                state_name(source),
                state_name(first.destination),
                state_name(second.destination),
            )
            return TransitionOutcome.failure(source, trigger, FailureReason.AMBIGUOUS)

        transition = resolution.transition
        if transition is None:
            return TransitionOutcome.failure(source, trigger, FailureReason.NO_TRANSITION)

        if self._recheck_guards and transition.conditional:
            if not transition.check(self._config.guards):
                return TransitionOutcome.failure(
                    source, trigger, FailureReason.GUARD_REJECTED, transition
                )

        return TransitionOutcome.success(source, trigger, transition)

    def _commit(self, transition: Transition, outcome: TransitionOutcome) -> None:
        if not transition.internal:
            self._config.run_on_exit(outcome.from_state, outcome)
        transition.run_action(outcome)
        if not transition.internal:
            self._config.run_on_entry(transition.destination, outcome)
        self._current = transition.destination

        logger.debug(
            "%s --%s--> %s%s",
            state_name(outcome.from_state),
            state_name(outcome.trigger),
            state_name(outcome.to_state),
            " (internal)" if transition.internal else "",
        )
        if self._debug:
            self._events.append(outcome.as_event())

    # ------- Host loop ------- #

    def periodic(self) -> None:
        """Run the current state's periodic() if it has a callable one.

        A state wrapping another object through a ``state`` attribute has
        that object's periodic() run instead.
        """
        current = self._current
        if _run_periodic(current):
            return
        inner = getattr(current, "state", None)
        if inner is not None:
            _run_periodic(inner)

    def drain_events(self) -> list[dict[str, Any]]:
        """Return and clear the recorded transition events (debug mode only)."""
        events = list(self._events)
        self._events.clear()
        return events

    def __repr__(self) -> str:
        return f"StateMachine(current={self._current!r})"
