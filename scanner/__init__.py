"""Scanner module for seed unit discovery and metadata extraction."""

from .discovery import iter_candidate_files, expand_patterns
from .parser import parse_source, parse_manifest
from .extractor import extract_units
from .resolver import normalize_identifier
from .builder import build_graph, scan_units

__all__ = [
    "iter_candidate_files",
    "expand_patterns",
    "parse_source",
    "parse_manifest",
    "extract_units",
    "normalize_identifier",
    "build_graph",
    "scan_units",
]
