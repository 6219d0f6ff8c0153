"""
The seed unit marker.

Classes decorated with ``auto_seed`` are picked up by the scanner without
being imported. The decorator also records its metadata on the class, so
classes that are already imported can be registered directly with
``units_from_classes``.
"""

import inspect
from abc import ABC, ABCMeta
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from scanner.resolver import normalize_identifier, package_of
from .model import SeedUnit


AUTO_SEED_ATTRIBUTE = "__auto_seed__"

DependencyRef = Union[str, type]


@dataclass(frozen=True)
class AutoSeed:
    """Metadata recorded by the ``auto_seed`` decorator."""

    depends_on: Tuple[str, ...] = ()


def class_identifier(cls: type) -> str:
    """Return the canonical identifier of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _canonical(reference: DependencyRef, owner: type) -> str:
    if isinstance(reference, type):
        return class_identifier(reference)
    module = owner.__module__
    return normalize_identifier(reference, module, package_of(module))


def auto_seed(
    cls: Optional[Union[type, Sequence[DependencyRef]]] = None,
    *,
    depends_on: Sequence[DependencyRef] = (),
):
    """
    Mark a class as a seed unit.

    Usable bare (``@auto_seed``) or with dependencies
    (``@auto_seed(depends_on=[PermissionSeeder, "roles.RoleSeeder"])``).
    Dependencies may be classes or names; names are resolved against the
    decorated class's module.
    """
    if cls is not None and not isinstance(cls, type):
        depends_on = tuple(cls)
        cls = None

    def decorate(target: type) -> type:
        references = tuple(_canonical(reference, target) for reference in depends_on)
        setattr(target, AUTO_SEED_ATTRIBUTE, AutoSeed(depends_on=references))
        return target

    if cls is not None:
        return decorate(cls)
    return decorate


def _declares_abc(cls: type) -> bool:
    """Check whether the class itself lists ``ABC`` or sets ``metaclass=ABCMeta``."""
    if ABC in cls.__bases__:
        return True
    return isinstance(cls, ABCMeta) and not any(isinstance(base, ABCMeta) for base in cls.__bases__)


def is_concrete(cls: type) -> bool:
    """
    Check whether a class can be instantiated as a seed unit.

    Matches the static scan: a class is abstract if it has abstract methods,
    sets ``__abstract__ = True``, or declares ``ABC`` / ``ABCMeta`` itself.
    Subclasses of such a class are concrete once nothing is left abstract.
    """
    if inspect.isabstract(cls) or vars(cls).get("__abstract__", False):
        return False
    return not _declares_abc(cls)


def units_from_classes(classes: Iterable[type]) -> List[SeedUnit]:
    """
    Build seed units from already imported classes.

    Only classes decorated with ``auto_seed`` themselves (not merely
    inheriting the marker) and that are concrete become units.
    """
    units: List[SeedUnit] = []
    for cls in classes:
        marker = vars(cls).get(AUTO_SEED_ATTRIBUTE)
        if not isinstance(marker, AutoSeed) or not is_concrete(cls):
            continue
        try:
            source = inspect.getsourcefile(cls)
        except TypeError:
            source = None
        units.append(
            SeedUnit(
                identifier=class_identifier(cls),
                depends_on=marker.depends_on,
                source=Path(source) if source else None,
            )
        )
    return units
