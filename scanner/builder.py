"""Graph builder that orchestrates scanning and graph construction."""

from pathlib import Path
from typing import Iterable, List, Optional, Set

import structlog

from seedgraph.model import DependencyGraph, SeedUnit
from .discovery import PathPatterns, iter_candidate_files
from .extractor import extract_units


logger = structlog.get_logger(__name__)


def scan_units(
    paths: PathPatterns,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
    markers: Optional[Set[str]] = None,
) -> List[SeedUnit]:
    """
    Scan paths and extract every seed unit they declare, in discovery order.

    Args:
        paths: A path, a glob pattern, or an ordered list of either.
        include_ext: File extensions to scan (default: .py and manifest formats).
        exclude_dirs: Directory names to exclude (default: .git, venv, etc.).
        max_depth: Maximum directory depth to scan.
        markers: Decorator names that mark a seed unit.

    Returns:
        Units as found, possibly with repeated identifiers.
    """
    units: List[SeedUnit] = []
    file_count = 0

    for file_path in iter_candidate_files(
        paths,
        include_ext=include_ext,
        exclude_dirs=exclude_dirs,
        max_depth=max_depth,
    ):
        file_count += 1
        units.extend(extract_units(file_path, markers))

    logger.debug("scan_finished", files=file_count, units=len(units))
    return units


def graph_from_units(units: Iterable[SeedUnit]) -> DependencyGraph:
    """
    Build a dependency graph from units in discovery order.

    The first declaration of an identifier wins. A later declaration with a
    different dependency list is reported as a warning and ignored.
    """
    graph = DependencyGraph()

    for unit in units:
        if graph.add_unit(unit):
            continue

        kept = graph.get_unit(unit.identifier)
        if kept.depends_on != unit.depends_on:
            logger.warning(
                "duplicate_unit",
                unit=unit.identifier,
                kept_source=str(kept.source) if kept.source else None,
                ignored_source=str(unit.source) if unit.source else None,
            )

    return graph


def build_graph(
    paths: PathPatterns,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
    markers: Optional[Set[str]] = None,
) -> DependencyGraph:
    """
    Scan paths and build the dependency graph of the seed units found.

    Args:
        paths: A path, a glob pattern, or an ordered list of either.
        include_ext: File extensions to scan (default: .py and manifest formats).
        exclude_dirs: Directory names to exclude (default: .git, venv, etc.).
        max_depth: Maximum directory depth to scan.
        markers: Decorator names that mark a seed unit.

    Returns:
        DependencyGraph of all discovered units.
    """
    return graph_from_units(
        scan_units(
            paths,
            include_ext=include_ext,
            exclude_dirs=exclude_dirs,
            max_depth=max_depth,
            markers=markers,
        )
    )
