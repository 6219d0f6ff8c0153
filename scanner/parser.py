"""Parsers for reading seed unit declarations from source and manifest files."""

import ast
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
import yaml

from .discovery import SOURCE_EXTENSIONS


logger = structlog.get_logger(__name__)


def read_text(file_path: Path) -> Optional[str]:
    """Read a file as UTF-8, or return None if it cannot be read."""
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("file_unreadable", path=str(file_path), error=str(exc))
        return None


def parse_source(file_path: Path) -> Optional[ast.Module]:
    """
    Parse a Python source file without importing it.

    Args:
        file_path: Path to the file to parse.

    Returns:
        The module syntax tree, or None if the file cannot be read or parsed.
    """
    content = read_text(file_path)
    if content is None:
        return None

    try:
        return ast.parse(content, filename=str(file_path))
    except (SyntaxError, ValueError, RecursionError) as exc:
        logger.debug("source_unparsable", path=str(file_path), error=str(exc))
        return None


def parse_manifest(file_path: Path) -> Optional[Dict[str, Any]]:
    """
    Parse a seed manifest file.

    Args:
        file_path: Path to a YAML, JSON or TOML file.

    Returns:
        The top-level mapping, or None if parsing fails or the document
        is not a mapping.
    """
    suffix = file_path.suffix.lower()

    content = read_text(file_path)
    if content is None:
        return None

    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        elif suffix == ".json":
            data = json.loads(content)
        elif suffix == ".toml":
            data = tomllib.loads(content)
        else:
            return None
    except (ValueError, RecursionError, yaml.YAMLError) as exc:
        logger.debug("manifest_unparsable", path=str(file_path), error=str(exc))
        return None

    if not isinstance(data, dict):
        return None
    return data


def is_source_file(file_path: Path) -> bool:
    """Check if a file is Python source rather than a manifest."""
    return file_path.suffix.lower() in SOURCE_EXTENSIONS
