"""Side-effect-free inspection of a dependency graph."""

from typing import List, Sequence, Set, FrozenSet

from .errors import CircularDependency, MissingDependency, ValidationError
from .model import DependencyGraph
from .toposort import walk


def validate_graph(graph: DependencyGraph) -> List[ValidationError]:
    """
    Collect every missing dependency and dependency cycle in a graph.

    Runs the same traversal as resolution but records problems instead of
    raising, so the full set of problems is visible at once. Each distinct
    cycle is reported once, regardless of where the traversal entered it.

    Args:
        graph: The dependency graph to inspect.

    Returns:
        Validation errors in the order they were found; empty if the graph
        can be resolved.
    """
    errors: List[ValidationError] = []
    seen_cycles: Set[FrozenSet[str]] = set()

    def record_missing(unit: str, missing: str) -> None:
        errors.append(MissingDependency(unit=unit, missing=missing))

    def record_cycle(cycle: Sequence[str]) -> None:
        members = frozenset(cycle)
        if members in seen_cycles:
            return
        seen_cycles.add(members)
        errors.append(CircularDependency(cycle=tuple(cycle)))

    walk(graph, on_missing=record_missing, on_cycle=record_cycle)

    return errors
