"""Config file discovery and loading.

Walk-up finder locates ``autoseed.toml``, or a ``pyproject.toml`` with a
``[tool.autoseed]`` table, similar to how git finds .git/.
Supports the AUTOSEED_CONFIG env var and the --config CLI flag as overrides.
"""

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .models import AutoSeedConfig

CONFIG_FILENAME = "autoseed.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "AUTOSEED_CONFIG"


class ConfigError(Exception):
    """Raised when a config file cannot be read or holds invalid settings."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Invalid config in {path}: {reason}")


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(path, str(exc)) from exc


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = _read_toml(pyproject)
    except ConfigError:
        return False
    return "autoseed" in data.get("tool", {})


def find_config(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from *start* (default: cwd) looking for a config file.

    In each directory ``autoseed.toml`` wins over ``pyproject.toml``; a
    ``pyproject.toml`` only counts if it has a ``[tool.autoseed]`` table.
    Checks the AUTOSEED_CONFIG env var first.

    Returns the path to the config file, or None if not found.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = current / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[Path] = None, cwd: Optional[Path] = None) -> AutoSeedConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns the default config anchored at *cwd* if no file is found.

    Raises:
        ConfigError: If the file cannot be parsed or fails validation.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return AutoSeedConfig(base_dir=(cwd or Path.cwd()).resolve())

    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        data = data.get("tool", {}).get("autoseed", {})

    try:
        config = AutoSeedConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(path, str(exc)) from exc

    return config.model_copy(update={"base_dir": path.resolve().parent})
