"""Mermaid flowchart exporter for resolved seed units."""

import re
from typing import Dict, List, Sequence

from seedgraph.model import SeedUnit


def to_mermaid(
    units: Sequence[SeedUnit],
    orientation: str = "TD",
    fenced: bool = False,
) -> str:
    """
    Convert resolved units to Mermaid flowchart syntax.

    Edges point from a dependency to the unit that needs it, so the chart
    reads in execution order.

    Args:
        units: Units in execution order.
        orientation: Flowchart orientation (TD, TB, LR, RL, BT).
        fenced: If True, wrap the chart in a ```mermaid code fence.

    Returns:
        Mermaid flowchart string.
    """
    lines = [f"flowchart {orientation}"]

    node_ids = _assign_ids(units)

    # Add node definitions with labels
    for unit in units:
        lines.append(f'    {node_ids[unit.identifier]}["{unit.short_name}"]')

    # Add edges
    edges: List[str] = []
    for unit in units:
        for dependency in unit.depends_on:
            dependency_id = node_ids.get(dependency) or _sanitize_id_simple(dependency)
            edges.append(f"    {dependency_id} --> {node_ids[unit.identifier]}")

    if edges:
        lines.append("")
        lines.extend(edges)

    if fenced:
        lines = ["```mermaid", *lines, "```"]

    return "\n".join(lines)


def _assign_ids(units: Sequence[SeedUnit]) -> Dict[str, str]:
    """
    Map identifiers to Mermaid node IDs.

    Short names are used where they are unique; units sharing a short name
    fall back to their full identifier.
    """
    name_counts: Dict[str, int] = {}
    for unit in units:
        name = _node_name(unit.short_name)
        name_counts[name] = name_counts.get(name, 0) + 1

    node_ids: Dict[str, str] = {}
    for unit in units:
        name = _node_name(unit.short_name)
        if name_counts[name] == 1:
            node_ids[unit.identifier] = _sanitize_id_simple(name)
        else:
            node_ids[unit.identifier] = _sanitize_id_simple(unit.identifier)
    return node_ids


def _node_name(short_name: str) -> str:
    """Drop the 'Seeder' suffix, unless nothing would be left."""
    trimmed = short_name.replace("Seeder", "")
    return trimmed or short_name


def _sanitize_id_simple(value: str) -> str:
    """Sanitize a string to be a valid Mermaid ID."""
    # Replace separators and dots with underscores
    sanitized = re.sub(r"[/\\.\-\s]", "_", value)
    # Remove any remaining invalid characters
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "", sanitized)
    # Ensure it starts with a letter
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n_" + sanitized
    return sanitized or "unknown"
