"""tick-statemachine - Guarded finite state machines for fixed-tick control loops."""
from __future__ import annotations

from tick_statemachine.guards import Guards
from tick_statemachine.machine import StateMachine
from tick_statemachine.machine_config import MachineConfig
from tick_statemachine.outcome import TransitionOutcome
from tick_statemachine.state_config import Resolution, StateConfig
from tick_statemachine.systems import make_fire_system
from tick_statemachine.transition import Transition
from tick_statemachine.types import FailureReason, InvalidTriggerError

__all__ = [
    "FailureReason",
    "Guards",
    "InvalidTriggerError",
    "MachineConfig",
    "Resolution",
    "StateConfig",
    "StateMachine",
    "Transition",
    "TransitionOutcome",
    "make_fire_system",
]
