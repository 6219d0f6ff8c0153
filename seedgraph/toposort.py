"""Dependency-first ordering of seed units."""

from enum import Enum
from typing import Callable, Dict, Iterator, List, Sequence

from .errors import CircularDependencyError, MissingDependencyError, ResolutionError
from .model import DependencyGraph, SeedUnit


class VisitState(Enum):
    UNVISITED = 0
    IN_PROGRESS = 1
    DONE = 2


MissingHandler = Callable[[str, str], None]
CycleHandler = Callable[[Sequence[str]], None]


def walk(
    graph: DependencyGraph,
    on_missing: MissingHandler,
    on_cycle: CycleHandler,
) -> List[SeedUnit]:
    """
    Depth-first traversal of the graph with post-order emission.

    Units are visited in discovery order and each unit is emitted only after
    all of its dependencies have been emitted. The traversal keeps an
    explicit stack, so chain depth is not bound by the recursion limit.

    A dependency that is not in the graph is passed to ``on_missing`` and a
    dependency that is still on the current path is passed to ``on_cycle``.
    If a handler returns instead of raising, the offending edge is skipped
    and the traversal carries on.

    Args:
        graph: The dependency graph to traverse.
        on_missing: Called with (unit, missing identifier).
        on_cycle: Called with the cycle path, closing on its first unit.

    Returns:
        Units in emission order.
    """
    state: Dict[str, VisitState] = {}
    ordered: List[SeedUnit] = []

    for start in graph.identifiers:
        if state.get(start, VisitState.UNVISITED) is not VisitState.UNVISITED:
            continue

        # Parallel stacks: the current path and each frame's remaining dependencies
        path: List[str] = [start]
        pending: List[Iterator[str]] = [iter(graph.get_dependencies(start))]
        state[start] = VisitState.IN_PROGRESS

        while path:
            current = path[-1]
            for dependency in pending[-1]:
                if dependency not in graph:
                    on_missing(current, dependency)
                    continue

                dependency_state = state.get(dependency, VisitState.UNVISITED)
                if dependency_state is VisitState.IN_PROGRESS:
                    on_cycle(path[path.index(dependency):] + [dependency])
                    continue

                if dependency_state is VisitState.UNVISITED:
                    state[dependency] = VisitState.IN_PROGRESS
                    path.append(dependency)
                    pending.append(iter(graph.get_dependencies(dependency)))
                    break
            else:
                # Every dependency is done: emit the unit
                path.pop()
                pending.pop()
                state[current] = VisitState.DONE
                ordered.append(graph.get_unit(current))

    return ordered


def _raise_missing(unit: str, missing: str) -> None:
    raise MissingDependencyError(unit, missing)


def _raise_cycle(cycle: Sequence[str]) -> None:
    raise CircularDependencyError(cycle)


def resolve_order(graph: DependencyGraph) -> List[SeedUnit]:
    """
    Compute the execution order of all units in the graph.

    Dependencies always precede their dependents. Units with no ordering
    constraint between them keep their discovery order.

    Args:
        graph: The dependency graph to order.

    Returns:
        Every unit of the graph, exactly once, in execution order.

    Raises:
        MissingDependencyError: A unit depends on an identifier that is not in the graph.
        CircularDependencyError: A unit depends on itself, directly or transitively.
    """
    ordered = walk(graph, on_missing=_raise_missing, on_cycle=_raise_cycle)

    if len(ordered) != len(graph):
        raise ResolutionError(
            f"Resolved {len(ordered)} seeders but discovered {len(graph)}"
        )

    return ordered

