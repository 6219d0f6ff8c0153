"""Shared fixtures for building seed unit trees on disk."""

import logging
import textwrap
from pathlib import Path

import pytest
import structlog


def _make_package(root: Path, dotted: str) -> Path:
    directory = root
    for part in dotted.split("."):
        directory = directory / part
        directory.mkdir(exist_ok=True)
        (directory / "__init__.py").touch()
    return directory


def _write_module(directory: Path, name: str, source: str) -> Path:
    path = directory / name
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


@pytest.fixture
def make_package():
    """Create a dotted package (with __init__.py files) under a root."""
    return _make_package


@pytest.fixture
def write_module():
    """Write dedented source to a file in a directory."""
    return _write_module


@pytest.fixture
def seeders_dir(tmp_path: Path) -> Path:
    """An empty ``app.seeders`` package."""
    return _make_package(tmp_path, "app.seeders")


@pytest.fixture
def auth_seeders(seeders_dir: Path) -> Path:
    """Permission, role and user seeders chained by their dependencies."""
    _write_module(seeders_dir, "permissions.py", """
        from seedgraph import auto_seed


        @auto_seed
        class PermissionSeeder:
            def run(self):
                pass
    """)
    _write_module(seeders_dir, "roles.py", """
        from seedgraph import auto_seed

        from .permissions import PermissionSeeder


        @auto_seed(depends_on=[PermissionSeeder])
        class RoleSeeder:
            def run(self):
                pass
    """)
    _write_module(seeders_dir, "users.py", """
        from seedgraph import auto_seed


        @auto_seed(depends_on=[".roles.RoleSeeder"])
        class UserSeeder:
            def run(self):
                pass
    """)
    return seeders_dir


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("AUTOSEED_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    structlog.reset_defaults()
