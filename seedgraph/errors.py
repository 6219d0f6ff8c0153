"""Resolution errors and the validation error variants."""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union


MARKER_HINT = "@auto_seed marker"


def format_cycle(cycle: Sequence[str]) -> str:
    """Render a cycle path as 'A → B → A'."""
    return " → ".join(cycle)


def missing_message(unit: str, missing: str) -> str:
    return (
        f"Seeder '{unit}' depends on '{missing}' which was not discovered "
        f"or is missing the {MARKER_HINT}"
    )


class ResolutionError(RuntimeError):
    """Raised when seed units cannot be put into a complete execution order."""


class CircularDependencyError(ResolutionError):
    """Raised when a unit depends on itself, directly or transitively."""

    def __init__(self, cycle: Sequence[str]):
        self.cycle: Tuple[str, ...] = tuple(cycle)
        super().__init__(f"Circular dependency detected: {format_cycle(self.cycle)}")


class MissingDependencyError(ResolutionError):
    """Raised when a unit declares a dependency that was never discovered."""

    def __init__(self, unit: str, missing: str):
        self.unit = unit
        self.missing = missing
        super().__init__(missing_message(unit, missing))


@dataclass(frozen=True)
class MissingDependency:
    """A unit declares a dependency with no discovered unit behind it."""

    unit: str
    missing: str
    kind: str = "missing_dependency"

    @property
    def message(self) -> str:
        return missing_message(self.unit, self.missing)


@dataclass(frozen=True)
class CircularDependency:
    """
    A dependency cycle.

    The cycle path ends with the unit it started from, so a self-reference
    reads ('X', 'X').
    """

    cycle: Tuple[str, ...]
    kind: str = "circular_dependency"

    @property
    def message(self) -> str:
        return f"Circular dependency detected: {format_cycle(self.cycle)}"


ValidationError = Union[MissingDependency, CircularDependency]
