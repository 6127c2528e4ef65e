"""StateConfig - outgoing transitions and callbacks of one state."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tick_statemachine.transition import Transition
from tick_statemachine.types import Callback, Guard, StateId, TriggerId

if TYPE_CHECKING:
    from tick_statemachine.guards import Guards
    from tick_statemachine.outcome import TransitionOutcome


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of resolving a trigger against one state's transitions.

    ``candidates`` is every transition registered for the trigger, in
    registration order. ``ambiguous`` is set when two conditional guards
    held at once, in which case ``transition`` is None.
    """

    transition: Transition | None
    candidates: tuple[Transition, ...] = ()
    ambiguous: bool = False
    rivals: tuple[Transition, ...] = ()


class StateConfig:
    """Per-state transition registry. Created through MachineConfig.configure().

    Registration methods return ``self`` so calls can be chained::

        config.configure(State.IDLE) \\
            .permit(Trigger.PREPARE, State.READY) \\
            .permit_if(Trigger.POLL, State.WAITING, sensor_ready)
    """

    def __init__(self, state: StateId, guards: Guards | None = None) -> None:
        self._state = state
        self._guards = guards
        self._transitions: list[Transition] = []
        self._on_entry: Callback | None = None
        self._on_exit: Callback | None = None
        self._use_default_on_entry: bool = True
        self._use_default_on_exit: bool = True

    @property
    def state(self) -> StateId:
        return self._state

    @property
    def transitions(self) -> list[Transition]:
        return list(self._transitions)

    @property
    def use_default_on_entry(self) -> bool:
        return self._use_default_on_entry

    @property
    def use_default_on_exit(self) -> bool:
        return self._use_default_on_exit

    # ------- Registration ------- #

    def _add_unconditional(
        self, trigger: TriggerId, destination: StateId, action: Callback | None, internal: bool,
    ) -> StateConfig:
        # First unconditional registration for a trigger wins.
        for existing in self._transitions:
            if existing.trigger == trigger and not existing.conditional:
                return self
        self._transitions.append(
            Transition(self._state, destination, trigger, action=action, internal=internal)
        )
        return self

    def _add_conditional(
        self, trigger: TriggerId, destination: StateId, guard: Guard,
        action: Callback | None, internal: bool,
    ) -> StateConfig:
        if guard is None:
            raise TypeError("Conditional transitions require a guard")
        self._transitions.append(
            Transition(self._state, destination, trigger, guard=guard, action=action, internal=internal)
        )
        return self

    def permit(
        self, trigger: TriggerId, destination: StateId, action: Callback | None = None,
    ) -> StateConfig:
        """Allow ``trigger`` to move this state to ``destination``."""
        return self._add_unconditional(trigger, destination, action, internal=False)

    def permit_internal(
        self, trigger: TriggerId, destination: StateId | None = None, action: Callback | None = None,
    ) -> StateConfig:
        """As permit(), but entry and exit callbacks are skipped.

        ``destination`` defaults to this state.
        """
        if destination is None:
            destination = self._state
        return self._add_unconditional(trigger, destination, action, internal=True)

    def permit_if(
        self, trigger: TriggerId, destination: StateId, guard: Guard, action: Callback | None = None,
    ) -> StateConfig:
        """Allow ``trigger`` to move to ``destination`` while ``guard`` holds.

        The guard is evaluated when the trigger is fired, never here.
        """
        return self._add_conditional(trigger, destination, guard, action, internal=False)

    def permit_internal_if(
        self, trigger: TriggerId, destination: StateId, guard: Guard, action: Callback | None = None,
    ) -> StateConfig:
        return self._add_conditional(trigger, destination, guard, action, internal=True)

    def on_entry(self, callback: Callback) -> StateConfig:
        self._on_entry = callback
        return self

    def on_exit(self, callback: Callback) -> StateConfig:
        self._on_exit = callback
        return self

    def disable_default_on_entry(self) -> StateConfig:
        """Skip the machine-wide entry callback for this state."""
        self._use_default_on_entry = False
        return self

    def disable_default_on_exit(self) -> StateConfig:
        """Skip the machine-wide exit callback for this state."""
        self._use_default_on_exit = False
        return self

    # ------- Queries ------- #

    def transitions_for(self, trigger: TriggerId) -> list[Transition]:
        """Transitions registered for ``trigger``, in registration order."""
        if trigger is None:
            return []
        return [t for t in self._transitions if t.trigger == trigger]

    def triggers(self) -> list[TriggerId]:
        """Distinct triggers with at least one transition, first-seen order."""
        seen: list[TriggerId] = []
        for t in self._transitions:
            if t.trigger not in seen:
                seen.append(t.trigger)
        return seen

    def resolution(self, trigger: TriggerId) -> Resolution:
        """Pick at most one transition for ``trigger``.

        Transitions are scanned in registration order. An unconditional
        transition is taken unless a conditional one has already matched,
        and a later match of either kind replaces an earlier unconditional
        one. A second conditional whose guard also holds makes the result
        ambiguous and nothing is chosen.
        """
        candidates = tuple(self.transitions_for(trigger))
        best: Transition | None = None
        matched: Transition | None = None
        for transition in candidates:
            if not transition.conditional:
                if matched is None:
                    best = transition
                continue
            if not transition.check(self._guards):
                continue
            if matched is not None:
                return Resolution(None, candidates, ambiguous=True, rivals=(matched, transition))
            best = transition
            matched = transition
        return Resolution(best, candidates)

    def resolve(self, trigger: TriggerId) -> Transition | None:
        return self.resolution(trigger).transition

    # ------- Callbacks ------- #

    def run_on_entry(self, outcome: TransitionOutcome) -> None:
        if self._on_entry is not None:
            self._on_entry(outcome)

    def run_on_exit(self, outcome: TransitionOutcome) -> None:
        if self._on_exit is not None:
            self._on_exit(outcome)

    def __repr__(self) -> str:
        return f"StateConfig({self._state!r}, transitions={len(self._transitions)})"
