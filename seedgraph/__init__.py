"""Seed unit graph: model, ordering and validation."""

from .model import SeedUnit, DependencyGraph
from .errors import (
    CircularDependency,
    CircularDependencyError,
    MissingDependency,
    MissingDependencyError,
    ResolutionError,
    ValidationError,
)
from .toposort import resolve_order
from .validator import validate_graph
from .marker import auto_seed, units_from_classes

__all__ = [
    "SeedUnit",
    "DependencyGraph",
    "CircularDependency",
    "CircularDependencyError",
    "MissingDependency",
    "MissingDependencyError",
    "ResolutionError",
    "ValidationError",
    "resolve_order",
    "validate_graph",
    "auto_seed",
    "units_from_classes",
]
