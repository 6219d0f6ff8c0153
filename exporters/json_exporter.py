"""JSON exporter for resolved seed units and validation errors (machine-friendly format)."""

import json
from typing import Any, Dict, List, Sequence

from seedgraph.errors import CircularDependency, ValidationError
from seedgraph.model import SeedUnit


def to_json(units: Sequence[SeedUnit], indent: int = 2) -> str:
    """
    Convert resolved units to JSON format.

    Args:
        units: Units in execution order.
        indent: JSON indentation level.

    Returns:
        JSON string with the unit count and one entry per unit.
    """
    seeders: List[Dict[str, Any]] = []
    for order, unit in enumerate(units, start=1):
        seeders.append({
            "order": order,
            "identifier": unit.identifier,
            "short_name": unit.short_name,
            "depends_on": list(unit.depends_on),
        })

    data: Dict[str, Any] = {
        "total": len(seeders),
        "seeders": seeders,
    }

    return json.dumps(data, indent=indent)


def errors_to_json(errors: Sequence[ValidationError], indent: int = 2) -> str:
    """
    Convert validation errors to JSON format.

    Args:
        errors: Errors as reported by validation.
        indent: JSON indentation level.

    Returns:
        JSON string with a validity flag and one entry per error.
    """
    entries: List[Dict[str, Any]] = []
    for error in errors:
        entry: Dict[str, Any] = {"kind": error.kind, "message": error.message}
        if isinstance(error, CircularDependency):
            entry["cycle"] = list(error.cycle)
        else:
            entry["unit"] = error.unit
            entry["missing"] = error.missing
        entries.append(entry)

    return json.dumps({"valid": not entries, "errors": entries}, indent=indent)
