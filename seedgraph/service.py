"""
Seeder discovery entry point.

``SeederResolver.discover`` scans for seed units and returns them in
execution order; ``SeederResolver.validate`` reports every problem of the
last scanned graph without raising.
"""

from typing import List, Optional

import structlog

from scanner.builder import build_graph
from scanner.discovery import PathPatterns
from settings.models import AutoSeedConfig
from .errors import ValidationError
from .model import DependencyGraph, SeedUnit
from .toposort import resolve_order
from .validator import validate_graph


logger = structlog.get_logger(__name__)


class SeederResolver:
    """
    Discovers seed units and resolves them in dependency order.

    Each scan builds a fresh graph; only the most recent one is kept, for
    ``validate``.
    """

    def __init__(self, config: Optional[AutoSeedConfig] = None):
        self.config = config or AutoSeedConfig()
        self._graph = DependencyGraph()

    @property
    def graph(self) -> DependencyGraph:
        """Return the graph as last scanned."""
        return self._graph

    def scan(self, paths: Optional[PathPatterns] = None) -> DependencyGraph:
        """
        Scan paths and replace the current graph with what they declare.

        Args:
            paths: A path, a glob pattern, or an ordered list of either.
                   If None, uses the configured scan paths.

        Returns:
            The freshly built graph.
        """
        if paths is None:
            paths = self.config.scan_patterns()

        self._graph = build_graph(
            paths,
            include_ext=set(self.config.include_ext),
            exclude_dirs=set(self.config.exclude_dirs),
            max_depth=self.config.max_depth,
            markers=set(self.config.markers),
        )
        return self._graph

    def discover(self, paths: Optional[PathPatterns] = None) -> List[SeedUnit]:
        """
        Discover seed units and return them in execution order.

        Args:
            paths: A path, a glob pattern, or an ordered list of either.
                   If None, uses the configured scan paths.

        Returns:
            Every discovered unit, dependencies first.

        Raises:
            MissingDependencyError: A unit depends on an undiscovered identifier.
            CircularDependencyError: Units depend on each other in a cycle.
        """
        graph = self.scan(paths)
        ordered = resolve_order(graph)
        logger.info("discovery_finished", units=len(ordered))
        return ordered

    def validate(self, paths: Optional[PathPatterns] = None) -> List[ValidationError]:
        """
        Report every missing dependency and cycle.

        Args:
            paths: If given, scan these first; otherwise inspect the graph as
                   last scanned.

        Returns:
            Validation errors, empty if the graph resolves cleanly.
        """
        if paths is not None:
            self.scan(paths)
        return validate_graph(self._graph)
