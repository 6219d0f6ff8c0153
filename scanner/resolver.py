"""Name resolution utilities for mapping dependency references to canonical identifiers."""

import ast
from typing import Dict, Optional


def package_of(module: str, is_package: bool = False) -> str:
    """
    Get the package a module belongs to.

    Args:
        module: Dotted module name.
        is_package: True if the module is itself a package (an ``__init__.py``).

    Returns:
        Dotted package name, or an empty string for a top-level module.
    """
    if is_package:
        return module
    return module.rpartition(".")[0]


def resolve_relative(reference: str, package: str) -> str:
    """
    Resolve a leading-dot reference against a package, like a relative import.

    One dot is the package itself, each further dot goes one level up.

    Raises:
        ValueError: If the reference climbs above the top-level package.
    """
    level = len(reference) - len(reference.lstrip("."))
    remainder = reference[level:]
    parts = package.split(".") if package else []

    if level - 1 > len(parts):
        raise ValueError(f"Relative reference '{reference}' goes beyond the top-level package")

    base = parts[: len(parts) - (level - 1)]
    if remainder:
        base.append(remainder)
    return ".".join(base)


def _check_identifier(identifier: str, reference: str) -> str:
    if not identifier or not all(part.isidentifier() for part in identifier.split(".")):
        raise ValueError(f"'{reference}' is not a valid seeder reference")
    return identifier


def normalize_identifier(
    reference: str,
    module: str,
    package: str,
    imports: Optional[Dict[str, str]] = None,
) -> str:
    """
    Normalize a dependency reference to a canonical identifier.

    Tries, in order:
    1. Leading dots: relative to the package.
    2. First segment bound by an import: expanded through that import.
    3. Bare name: a class of the declaring module.
    4. Anything else: already fully qualified.

    Args:
        reference: The reference as written, e.g. 'RoleSeeder' or '.roles.RoleSeeder'.
        module: Dotted name of the declaring module (or manifest namespace).
        package: Dotted name of the declaring package.
        imports: Local names bound by the module's imports, mapped to what they refer to.

    Returns:
        The canonical dotted identifier.

    Raises:
        ValueError: If the reference cannot be resolved.
    """
    cleaned = reference.strip()

    if cleaned.startswith("."):
        return _check_identifier(resolve_relative(cleaned, package), reference)

    head, _, rest = cleaned.partition(".")

    if imports and head in imports:
        target = imports[head]
        return _check_identifier(f"{target}.{rest}" if rest else target, reference)

    if not rest:
        return _check_identifier(f"{module}.{cleaned}", reference)

    return _check_identifier(cleaned, reference)


def collect_imports(tree: ast.Module, package: str) -> Dict[str, str]:
    """
    Map the names bound by a module's top-level imports to their targets.

    ``import a.b`` binds 'a', ``import a.b as c`` binds 'c' to 'a.b' and
    ``from .roles import RoleSeeder as Roles`` binds 'Roles' to
    '<package>.roles.RoleSeeder'. Star imports bind nothing.
    """
    imports: Dict[str, str] = {}

    for node in tree.body:
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.asname:
                    imports[alias.asname] = alias.name
                else:
                    head = alias.name.split(".")[0]
                    imports[head] = head

        elif isinstance(node, ast.ImportFrom):
            if node.level:
                try:
                    source = resolve_relative("." * node.level + (node.module or ""), package)
                except ValueError:
                    continue
            else:
                source = node.module or ""

            for alias in node.names:
                if alias.name == "*":
                    continue
                imports[alias.asname or alias.name] = f"{source}.{alias.name}" if source else alias.name

    return imports
