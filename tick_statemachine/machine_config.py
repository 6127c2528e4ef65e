"""MachineConfig - registry of state configurations."""
from __future__ import annotations

from typing import Any, Iterator

from tick_statemachine.guards import Guards
from tick_statemachine.outcome import TransitionOutcome
from tick_statemachine.state_config import Resolution, StateConfig
from tick_statemachine.transition import Transition
from tick_statemachine.types import Callback, StateId, TriggerId, state_name


class MachineConfig:
    """Maps each state to its StateConfig.

    Build it once, before any machine fires, then share it read-only
    between the machines that use it.
    """

    def __init__(self, guards: Guards | None = None) -> None:
        self._configs: dict[StateId, StateConfig] = {}
        self._guards = guards if guards is not None else Guards()
        self._default_on_entry: Callback | None = None
        self._default_on_exit: Callback | None = None

    @property
    def guards(self) -> Guards:
        return self._guards

    def configure(self, state: StateId) -> StateConfig:
        """Return the StateConfig for ``state``, creating it on first use."""
        config = self._configs.get(state)
        if config is None:
            config = StateConfig(state, self._guards)
            self._configs[state] = config
        return config

    def lookup(self, state: StateId) -> StateConfig | None:
        return self._configs.get(state)

    def resolution(self, state: StateId, trigger: TriggerId) -> Resolution | None:
        config = self._configs.get(state)
        if config is None:
            return None
        return config.resolution(trigger)

    def resolve_transition(self, state: StateId, trigger: TriggerId) -> Transition | None:
        config = self._configs.get(state)
        if config is None:
            return None
        return config.resolve(trigger)

    # ------- Machine-wide callbacks ------- #

    def default_on_entry(self, callback: Callback) -> MachineConfig:
        """Run ``callback`` on entry to every state that has not opted out."""
        self._default_on_entry = callback
        return self

    def default_on_exit(self, callback: Callback) -> MachineConfig:
        """Run ``callback`` on exit from every state that has not opted out."""
        self._default_on_exit = callback
        return self

    def run_on_entry(self, state: StateId, outcome: TransitionOutcome) -> None:
        config = self._configs.get(state)
        if self._default_on_entry is not None and (config is None or config.use_default_on_entry):
            self._default_on_entry(outcome)
        if config is not None:
            config.run_on_entry(outcome)

    def run_on_exit(self, state: StateId, outcome: TransitionOutcome) -> None:
        config = self._configs.get(state)
        if self._default_on_exit is not None and (config is None or config.use_default_on_exit):
            self._default_on_exit(outcome)
        if config is not None:
            config.run_on_exit(outcome)

    # ------- Introspection ------- #

    def states(self) -> list[StateId]:
        return list(self._configs)

    def triggers(self) -> list[TriggerId]:
        """Every trigger used by any state, first-seen order."""
        seen: list[TriggerId] = []
        for config in self._configs.values():
            for trigger in config.triggers():
                if trigger not in seen:
                    seen.append(trigger)
        return seen

    def describe(self) -> dict[str, Any]:
        """Return the configured graph as plain data for telemetry."""
        states: dict[str, Any] = {}
        for state, config in self._configs.items():
            by_trigger: dict[str, list[dict[str, Any]]] = {}
            for t in config.transitions:
                by_trigger.setdefault(state_name(t.trigger), []).append({
                    "type": "conditional" if t.conditional else "unconditional",
                    "destination": state_name(t.destination),
                    "internal": t.internal,
                })
            states[state_name(state)] = {"transitions": by_trigger}
        return {
            "states": states,
            "triggers": [state_name(t) for t in self.triggers()],
        }

    def __contains__(self, state: object) -> bool:
        return state in self._configs

    def __len__(self) -> int:
        return len(self._configs)

    def __iter__(self) -> Iterator[StateConfig]:
        return iter(list(self._configs.values()))
