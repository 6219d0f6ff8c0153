"""Exporters for converting resolved seed units to various output formats."""

from .mermaid_exporter import to_mermaid
from .table_exporter import to_table, to_tree
from .json_exporter import to_json, errors_to_json

__all__ = ["to_mermaid", "to_table", "to_tree", "to_json", "errors_to_json"]
