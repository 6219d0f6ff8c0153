"""Configuration and logging setup."""

from .models import AutoSeedConfig
from .discovery import ConfigError, find_config, load_config
from .logging import configure_logging

__all__ = [
    "AutoSeedConfig",
    "ConfigError",
    "find_config",
    "load_config",
    "configure_logging",
]
