"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``autoseed.toml`` (or the
``[tool.autoseed]`` table of ``pyproject.toml``) only contains overrides.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from scanner.discovery import DEFAULT_EXCLUDE_DIRS, DEFAULT_EXTENSIONS
from scanner.extractor import DEFAULT_MARKERS


class AutoSeedConfig(BaseModel):
    """Scan settings for seed unit discovery."""

    model_config = {"frozen": True}

    paths: List[str] = Field(default_factory=lambda: ["seeders", "*/seeders", "*/*/seeders"])
    include_ext: List[str] = Field(default_factory=lambda: sorted(DEFAULT_EXTENSIONS))
    exclude_dirs: List[str] = Field(default_factory=lambda: sorted(DEFAULT_EXCLUDE_DIRS))
    max_depth: Optional[int] = None
    markers: List[str] = Field(default_factory=lambda: sorted(DEFAULT_MARKERS))

    # Directory relative scan paths are resolved against; set by the loader
    base_dir: Optional[Path] = None

    @field_validator("include_ext")
    @classmethod
    def _dotted_extensions(cls, value: List[str]) -> List[str]:
        return [ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in value]

    @field_validator("max_depth")
    @classmethod
    def _non_negative_depth(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 0:
            raise ValueError("max_depth must be zero or positive")
        return value

    def scan_patterns(self) -> List[str]:
        """Return the scan paths, anchored at ``base_dir`` when they are relative."""
        base = self.base_dir or Path.cwd()
        return [
            pattern if Path(pattern).is_absolute() else str(base / pattern)
            for pattern in self.paths
        ]
