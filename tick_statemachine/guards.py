"""Guards registry."""
from __future__ import annotations

from tick_statemachine.types import Predicate


class Guards:
    """Maps guard name strings to zero-argument predicates."""

    def __init__(self) -> None:
        self._guards: dict[str, Predicate] = {}

    def register(self, name: str, fn: Predicate) -> None:
        """Register a named guard. Overwrites if already registered."""
        self._guards[name] = fn

    def check(self, name: str) -> bool:
        """Evaluate a guard. Raises KeyError if not registered."""
        return bool(self._guards[name]())

    def has(self, name: str) -> bool:
        """Check if guard name is registered."""
        return name in self._guards

    def names(self) -> list[str]:
        """List all registered guard names."""
        return list(self._guards)
