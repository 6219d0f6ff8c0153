"""Extraction of seed unit metadata from candidate files."""

import ast
from pathlib import Path
from typing import Any, List, Optional, Set, Tuple

import structlog

from seedgraph.model import SeedUnit
from .parser import is_source_file, parse_manifest, parse_source
from .resolver import collect_imports, normalize_identifier, package_of


logger = structlog.get_logger(__name__)

DEFAULT_MARKERS = {"auto_seed", "AutoSeed"}

# Names that make a class abstract when used as base, metaclass or method decorator
ABSTRACT_BASES = {"ABC"}
ABSTRACT_METACLASSES = {"ABCMeta"}
ABSTRACT_DECORATORS = {"abstractmethod"}


def module_name_for(file_path: Path) -> Optional[Tuple[str, bool]]:
    """
    Derive the dotted module name of a Python file from its enclosing packages.

    Args:
        file_path: Path to a Python source file.

    Returns:
        (module name, is package) or None if the file is not inside a package.
    """
    file_path = file_path.resolve()
    directory = file_path.parent

    if not (directory / "__init__.py").is_file():
        return None

    is_package = file_path.name == "__init__.py"
    parts: List[str] = [] if is_package else [file_path.stem]

    while (directory / "__init__.py").is_file():
        parts.insert(0, directory.name)
        if directory.parent == directory:
            break
        directory = directory.parent

    if not all(part.isidentifier() for part in parts):
        return None

    return ".".join(parts), is_package


def _tail_name(node: ast.expr) -> Optional[str]:
    """Get the last name of a (possibly dotted or called) expression."""
    if isinstance(node, ast.Call):
        node = node.func
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _reference_text(node: ast.expr) -> str:
    """Turn a dependency expression into the reference it spells."""
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return f"{_reference_text(node.value)}.{node.attr}"
    raise ValueError(f"Unsupported dependency expression: {ast.dump(node)}")


def find_marker(node: ast.ClassDef, markers: Set[str]) -> Optional[ast.expr]:
    """Return the seed marker decorator of a class, if it has one."""
    for decorator in node.decorator_list:
        if _tail_name(decorator) in markers:
            return decorator
    return None


def declared_dependencies(marker: ast.expr) -> List[str]:
    """
    Read the dependency references written in a marker decorator.

    Raises:
        ValueError: If the dependency list is not a literal list or tuple.
    """
    if not isinstance(marker, ast.Call):
        return []

    value: Optional[ast.expr] = None
    for keyword in marker.keywords:
        if keyword.arg == "depends_on":
            value = keyword.value
            break
    else:
        if marker.args:
            value = marker.args[0]

    if value is None:
        return []
    if not isinstance(value, (ast.List, ast.Tuple)):
        raise ValueError("depends_on must be a literal list or tuple")

    return [_reference_text(element) for element in value.elts]


def is_abstract(node: ast.ClassDef) -> bool:
    """
    Check whether a class definition is abstract.

    Only the class body and header are inspected: an ``ABC`` base,
    ``metaclass=ABCMeta``, an ``@abstractmethod`` or ``__abstract__ = True``.
    ``seedgraph.marker.is_concrete`` applies the same rules to imported classes.
    """
    if any(_tail_name(base) in ABSTRACT_BASES for base in node.bases):
        return True

    for keyword in node.keywords:
        if keyword.arg == "metaclass" and _tail_name(keyword.value) in ABSTRACT_METACLASSES:
            return True

    for statement in node.body:
        if isinstance(statement, (ast.FunctionDef, ast.AsyncFunctionDef)):
            if any(_tail_name(d) in ABSTRACT_DECORATORS for d in statement.decorator_list):
                return True
        elif isinstance(statement, ast.Assign):
            targets = [t.id for t in statement.targets if isinstance(t, ast.Name)]
            if "__abstract__" in targets and isinstance(statement.value, ast.Constant):
                if statement.value.value is True:
                    return True

    return False


def extract_source_units(
    file_path: Path,
    markers: Optional[Set[str]] = None,
) -> List[SeedUnit]:
    """
    Extract seed units from a Python source file.

    A unit is every top-level class that carries the marker and is not
    abstract. Files outside a package, or that cannot be parsed, yield
    nothing.

    Args:
        file_path: Path to the source file.
        markers: Decorator names that mark a seed unit. If None, uses DEFAULT_MARKERS.

    Returns:
        Units in declaration order.
    """
    if markers is None:
        markers = DEFAULT_MARKERS

    located = module_name_for(file_path)
    if located is None:
        logger.debug("file_skipped", path=str(file_path), reason="no_namespace")
        return []
    module, is_package = located
    package = package_of(module, is_package)

    tree = parse_source(file_path)
    if tree is None:
        return []

    imports = collect_imports(tree, package)
    units: List[SeedUnit] = []

    for node in tree.body:
        if not isinstance(node, ast.ClassDef):
            continue

        marker = find_marker(node, markers)
        if marker is None:
            continue

        identifier = f"{module}.{node.name}"
        if is_abstract(node):
            logger.debug("unit_skipped", unit=identifier, reason="abstract")
            continue

        try:
            depends_on = tuple(
                normalize_identifier(reference, module, package, imports)
                for reference in declared_dependencies(marker)
            )
        except ValueError as exc:
            logger.debug("unit_skipped", unit=identifier, reason=str(exc))
            continue

        units.append(SeedUnit(identifier=identifier, depends_on=depends_on, source=file_path))

    return units


def _manifest_entry(entry: Any) -> Tuple[Any, Any, bool]:
    if isinstance(entry, str):
        return entry, [], False
    if isinstance(entry, dict):
        abstract = entry.get("abstract", False)
        if not isinstance(abstract, bool):
            raise ValueError(f"abstract of {entry.get('name')!r} must be true or false")
        return entry.get("name"), entry.get("depends_on") or [], abstract
    raise ValueError(f"Unsupported seeder entry: {entry!r}")


def extract_manifest_units(file_path: Path) -> List[SeedUnit]:
    """
    Extract seed units from a manifest file.

    A manifest is a mapping with a ``namespace`` and a ``seeders`` list;
    each entry is a unit name or a mapping with ``name``, ``depends_on``
    and ``abstract``. Documents of any other shape yield nothing.

    Args:
        file_path: Path to the manifest.

    Returns:
        Units in declaration order.
    """
    data = parse_manifest(file_path)
    if data is None:
        return []

    namespace = data.get("namespace")
    seeders = data.get("seeders")
    if not isinstance(namespace, str) or not isinstance(seeders, list):
        logger.debug("file_skipped", path=str(file_path), reason="not_a_manifest")
        return []
    if not all(part.isidentifier() for part in namespace.split(".")):
        logger.debug("file_skipped", path=str(file_path), reason="invalid_namespace")
        return []

    units: List[SeedUnit] = []

    for entry in seeders:
        try:
            name, depends_on, abstract = _manifest_entry(entry)
            if not isinstance(name, str) or not name.isidentifier():
                raise ValueError(f"Invalid seeder name: {name!r}")
            if not isinstance(depends_on, list) or not all(isinstance(d, str) for d in depends_on):
                raise ValueError(f"depends_on of '{name}' must be a list of names")
            references = tuple(
                normalize_identifier(reference, namespace, namespace)
                for reference in depends_on
            )
        except ValueError as exc:
            logger.debug("unit_skipped", path=str(file_path), reason=str(exc))
            continue

        if abstract:
            continue

        units.append(SeedUnit(identifier=f"{namespace}.{name}", depends_on=references, source=file_path))

    return units


def extract_units(
    file_path: Path,
    markers: Optional[Set[str]] = None,
) -> List[SeedUnit]:
    """Extract seed units from a source or manifest file."""
    if is_source_file(file_path):
        return extract_source_units(file_path, markers)
    return extract_manifest_units(file_path)
