"""Graph data model for seed units and their declared dependencies."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple


@dataclass(frozen=True)
class SeedUnit:
    """
    A discovered seeding unit.

    Attributes:
        identifier: Canonical, fully-qualified dotted name of the unit.
        depends_on: Canonical identifiers of the units that must run first,
                    in declaration order.
        source: File the unit was declared in, if known.
    """

    identifier: str
    depends_on: Tuple[str, ...] = ()
    source: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self):
        # Collapse repeated dependencies, keeping the first position
        object.__setattr__(self, "depends_on", tuple(dict.fromkeys(self.depends_on)))

    @property
    def short_name(self) -> str:
        """Return the identifier without its namespace."""
        return self.identifier.rsplit(".", 1)[-1]

    @property
    def has_dependencies(self) -> bool:
        return bool(self.depends_on)

    @property
    def dependency_short_names(self) -> List[str]:
        """Return the dependency identifiers without their namespaces."""
        return [dependency.rsplit(".", 1)[-1] for dependency in self.depends_on]


class DependencyGraph:
    """
    A directed graph of seed units.

    Nodes are unit identifiers in discovery order, and edges represent
    'unit -> dependency' relationships. Dependencies that point at
    identifiers not in the graph are kept on the edge list so that
    resolution can report them.
    """

    def __init__(self, units: Optional[Iterable[SeedUnit]] = None):
        self._units: Dict[str, SeedUnit] = {}
        if units is not None:
            for unit in units:
                self.add_unit(unit)

    @property
    def identifiers(self) -> List[str]:
        """Return all unit identifiers in discovery order."""
        return list(self._units)

    @property
    def units(self) -> List[SeedUnit]:
        """Return all units in discovery order."""
        return list(self._units.values())

    @property
    def edges(self) -> Dict[str, Set[str]]:
        """Return adjacency list representation of edges."""
        return {identifier: set(unit.depends_on) for identifier, unit in self._units.items()}

    def add_unit(self, unit: SeedUnit) -> bool:
        """
        Add a unit to the graph.

        An identifier already present keeps its first declaration.

        Returns:
            True if the unit was added, False if the identifier was already known.
        """
        if unit.identifier in self._units:
            return False
        self._units[unit.identifier] = unit
        return True

    def get_unit(self, identifier: str) -> Optional[SeedUnit]:
        """Get the unit registered under the identifier."""
        return self._units.get(identifier)

    def get_dependencies(self, identifier: str) -> Tuple[str, ...]:
        """Get the declared dependencies of a unit, in declaration order."""
        unit = self._units.get(identifier)
        return unit.depends_on if unit is not None else ()

    def iter_edges(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all edges as (unit, dependency) tuples."""
        for identifier, unit in self._units.items():
            for dependency in unit.depends_on:
                yield identifier, dependency

    def iter_missing(self) -> Iterator[Tuple[str, str]]:
        """Iterate over edges whose dependency was never discovered."""
        for identifier, dependency in self.iter_edges():
            if dependency not in self._units:
                yield identifier, dependency

    def __len__(self) -> int:
        """Return the number of units in the graph."""
        return len(self._units)

    def __contains__(self, identifier: str) -> bool:
        """Check if an identifier is in the graph."""
        return identifier in self._units

    def __iter__(self) -> Iterator[SeedUnit]:
        return iter(self._units.values())

    def __repr__(self) -> str:
        edge_count = sum(len(unit.depends_on) for unit in self._units.values())
        missing_count = sum(1 for _ in self.iter_missing())
        return f"DependencyGraph(units={len(self._units)}, edges={edge_count}, missing={missing_count})"
