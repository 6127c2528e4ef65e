"""Tests for MachineConfig registry, defaults and describe()."""
from enum import Enum, auto

from tick_statemachine import MachineConfig, StateConfig, Transition, TransitionOutcome


class Mode(Enum):
    IDLE = auto()
    INTAKE = auto()
    SHOOT = auto()


class Event(Enum):
    START_INTAKE = auto()
    STOP = auto()
    FIRE = auto()
    SPIN = auto()


class TestRegistry:
    """Test cases for configure/lookup/resolve_transition."""

    def test_configure_creates_once(self):
        """Repeated configure(state) returns the same StateConfig."""
        config = MachineConfig()
        first = config.configure(Mode.IDLE)
        second = config.configure(Mode.IDLE)
        assert isinstance(first, StateConfig)
        assert first is second
        assert first.state is Mode.IDLE
        assert len(config) == 1

    def test_configure_keeps_registrations(self):
        """Registrations through separate configure calls accumulate."""
        config = MachineConfig()
        config.configure(Mode.IDLE).permit(Event.START_INTAKE, Mode.INTAKE)
        config.configure(Mode.IDLE).permit(Event.FIRE, Mode.SHOOT)
        assert len(config.lookup(Mode.IDLE).transitions) == 2

    def test_equal_values_share_config(self):
        """Equal state values map to one configuration."""
        config = MachineConfig()
        assert config.configure("idle") is config.configure("".join(["id", "le"]))

    def test_lookup_does_not_create(self):
        """lookup() on an unknown state returns None and registers nothing."""
        config = MachineConfig()
        assert config.lookup(Mode.SHOOT) is None
        assert Mode.SHOOT not in config
        assert len(config) == 0

    def test_resolve_transition_delegates(self):
        """resolve_transition uses the state's own resolution."""
        config = MachineConfig()
        config.configure(Mode.IDLE).permit(Event.START_INTAKE, Mode.INTAKE)

        t = config.resolve_transition(Mode.IDLE, Event.START_INTAKE)

        assert isinstance(t, Transition)
        assert t.destination is Mode.INTAKE
        assert config.resolve_transition(Mode.IDLE, Event.FIRE) is None

    def test_resolve_transition_unconfigured_state(self):
        """An unconfigured state resolves to None without being created."""
        config = MachineConfig()
        assert config.resolve_transition(Mode.SHOOT, Event.STOP) is None
        assert config.resolution(Mode.SHOOT, Event.STOP) is None
        assert Mode.SHOOT not in config

    def test_states_and_iteration(self):
        """states() and iteration follow configuration order."""
        config = MachineConfig()
        config.configure(Mode.SHOOT)
        config.configure(Mode.IDLE)
        assert config.states() == [Mode.SHOOT, Mode.IDLE]
        assert [c.state for c in config] == [Mode.SHOOT, Mode.IDLE]

    def test_triggers_across_states(self):
        """triggers() lists every trigger once."""
        config = MachineConfig()
        config.configure(Mode.IDLE).permit(Event.START_INTAKE, Mode.INTAKE).permit(Event.FIRE, Mode.SHOOT)
        config.configure(Mode.INTAKE).permit(Event.STOP, Mode.IDLE)
        config.configure(Mode.SHOOT).permit(Event.STOP, Mode.IDLE)
        assert config.triggers() == [Event.START_INTAKE, Event.FIRE, Event.STOP]


class TestDefaultCallbacks:
    """Machine-wide entry/exit callbacks."""

    def _outcome(self):
        t = Transition(Mode.IDLE, Mode.INTAKE, Event.START_INTAKE)
        return TransitionOutcome.success(Mode.IDLE, Event.START_INTAKE, t)

    def test_default_runs_before_state_callback(self):
        """Default entry runs, then the state's own entry."""
        log = []
        config = MachineConfig()
        config.default_on_entry(lambda o: log.append("default"))
        config.configure(Mode.INTAKE).on_entry(lambda o: log.append("state"))

        config.run_on_entry(Mode.INTAKE, self._outcome())

        assert log == ["default", "state"]

    def test_default_runs_for_unconfigured_state(self):
        """States with no configuration still get the default."""
        log = []
        config = MachineConfig()
        config.default_on_exit(lambda o: log.append(o.from_state))

        config.run_on_exit(Mode.IDLE, self._outcome())

        assert log == [Mode.IDLE]

    def test_state_can_opt_out(self):
        """disable_default_on_* skips the default for that state only."""
        log = []
        config = MachineConfig()
        config.default_on_entry(lambda o: log.append("entry"))
        config.default_on_exit(lambda o: log.append("exit"))
        config.configure(Mode.INTAKE).disable_default_on_entry().disable_default_on_exit()

        config.run_on_entry(Mode.INTAKE, self._outcome())
        config.run_on_exit(Mode.INTAKE, self._outcome())
        config.run_on_entry(Mode.SHOOT, self._outcome())

        assert log == ["entry"]

    def test_default_setters_chain(self):
        config = MachineConfig()
        assert config.default_on_entry(lambda o: None).default_on_exit(lambda o: None) is config


class TestDescribe:
    """Structure description for telemetry."""

    def test_describe_structure(self):
        """States, transitions per trigger and triggers are listed by name."""
        config = MachineConfig()
        config.configure(Mode.IDLE) \
            .permit(Event.START_INTAKE, Mode.INTAKE) \
            .permit_if(Event.FIRE, Mode.SHOOT, lambda: True) \
            .permit_internal(Event.SPIN)
        config.configure(Mode.INTAKE).permit(Event.STOP, Mode.IDLE)

        desc = config.describe()

        assert desc["triggers"] == ["START_INTAKE", "FIRE", "SPIN", "STOP"]
        assert set(desc["states"]) == {"IDLE", "INTAKE"}
        idle = desc["states"]["IDLE"]["transitions"]
        assert idle["START_INTAKE"] == [
            {"type": "unconditional", "destination": "INTAKE", "internal": False}
        ]
        assert idle["FIRE"] == [
            {"type": "conditional", "destination": "SHOOT", "internal": False}
        ]
        assert idle["SPIN"] == [
            {"type": "unconditional", "destination": "IDLE", "internal": True}
        ]

    def test_describe_does_not_evaluate_guards(self):
        """Describing the graph never calls guards."""
        calls = []
        config = MachineConfig()
        config.configure("a").permit_if("t", "b", lambda: calls.append(1) or True)
        config.describe()
        assert calls == []

    def test_describe_empty(self):
        assert MachineConfig().describe() == {"states": {}, "triggers": []}
