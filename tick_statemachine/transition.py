"""Transition descriptor."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tick_statemachine.types import Callback, Guard, StateId, TriggerId

if TYPE_CHECKING:
    from tick_statemachine.guards import Guards
    from tick_statemachine.outcome import TransitionOutcome


@dataclass(frozen=True, slots=True)
class Transition:
    """An edge from ``source`` to ``destination`` taken on ``trigger``.

    A transition with a ``guard`` is conditional. The guard is either a
    zero-argument predicate or the name of a predicate registered in a
    :class:`~tick_statemachine.guards.Guards` registry.

    Internal transitions run their ``action`` without firing the entry and
    exit callbacks of either state.
    """

    source: StateId
    destination: StateId
    trigger: TriggerId
    guard: Guard | None = None
    action: Callback | None = None
    internal: bool = False

    @property
    def conditional(self) -> bool:
        return self.guard is not None

    @property
    def reentrant(self) -> bool:
        """True when the transition leads back into its own source."""
        return self.source == self.destination

    def check(self, guards: Guards | None = None) -> bool:
        """Evaluate the guard. Unconditional transitions always pass.

        Named guards are looked up in ``guards``; a missing registry or an
        unknown name raises KeyError.
        """
        if self.guard is None:
            return True
        if isinstance(self.guard, str):
            if guards is None:
                raise KeyError(
                    f"Guard {self.guard!r} is named but no registry was given"
                )
            return guards.check(self.guard)
        return bool(self.guard())

    def run_action(self, outcome: TransitionOutcome) -> None:
        if self.action is not None:
            self.action(outcome)
