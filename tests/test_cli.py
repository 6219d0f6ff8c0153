"""Tests for the autoseed command line interface."""

import json
from pathlib import Path

import pytest

from cli import main, parse_args


@pytest.fixture
def in_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from tmp_path so the default scan paths and config lookup stay inside it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cyclic_seeders(seeders_dir, write_module):
    """Two seeders depending on each other."""
    write_module(seeders_dir, "cycle.py", """
        @auto_seed(depends_on=["Y"])
        class X:
            pass


        @auto_seed(depends_on=["X"])
        class Y:
            pass
    """)
    return seeders_dir


class TestParseArgs:
    """Tests for argument parsing."""

    def test_list_defaults(self):
        """Test list defaults to table output of the configured paths."""
        parsed = parse_args(["list"])

        assert parsed.command == "list"
        assert parsed.paths == []
        assert parsed.format == "table"
        assert parsed.orientation == "TD"
        assert parsed.ascii_style == "tree"

    def test_command_required(self):
        """Test a subcommand must be given."""
        with pytest.raises(SystemExit):
            parse_args([])

    def test_unknown_format_rejected(self):
        """Test only known output formats are accepted."""
        with pytest.raises(SystemExit):
            parse_args(["list", "-f", "yaml"])


class TestList:
    """Tests for the list command."""

    def test_table_from_default_paths(self, in_project, auth_seeders, capsys):
        """Test seeders under */seeders are listed without arguments."""
        assert main(["list"]) == 0

        out = capsys.readouterr().out
        assert out.index("PermissionSeeder") < out.index("RoleSeeder") < out.index("UserSeeder")

    def test_json(self, in_project, auth_seeders, capsys):
        """Test JSON output lists units in execution order."""
        assert main(["list", str(auth_seeders), "-f", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["total"] == 3
        assert [entry["short_name"] for entry in data["seeders"]] == [
            "PermissionSeeder", "RoleSeeder", "UserSeeder",
        ]

    def test_mermaid(self, in_project, auth_seeders, capsys):
        """Test Mermaid output with orientation and fence."""
        assert main(["list", str(auth_seeders), "-f", "mermaid", "--orientation", "LR", "--fenced"]) == 0

        out = capsys.readouterr().out
        assert out.startswith("```mermaid\nflowchart LR")
        assert "Permission --> Role" in out

    def test_show_dependencies(self, in_project, auth_seeders, capsys):
        """Test the dependency tree is appended in ASCII style."""
        assert main(["list", str(auth_seeders), "--show-dependencies", "--ascii-style", "ascii"]) == 0

        out = capsys.readouterr().out
        assert "Dependency Tree:" in out
        assert "\\-- RoleSeeder" in out

    def test_output_file(self, in_project, auth_seeders, capsys):
        """Test -o writes the output to a file."""
        target = in_project / "order.json"

        assert main(["list", str(auth_seeders), "-f", "json", "-o", str(target)]) == 0

        assert json.loads(target.read_text())["total"] == 3
        assert "Output written to" in capsys.readouterr().err

    def test_no_seeders(self, in_project, capsys):
        """Test an empty scan warns but succeeds."""
        assert main(["list"]) == 0

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "No seeders found" in captured.err

    def test_cycle_fails(self, in_project, cyclic_seeders, capsys):
        """Test a cycle exits non-zero with the cycle on stderr."""
        assert main(["list", str(cyclic_seeders)]) == 1

        err = capsys.readouterr().err
        assert "Failed to discover seeders" in err
        assert "Circular dependency detected: app.seeders.cycle.X → app.seeders.cycle.Y → app.seeders.cycle.X" in err

    def test_max_depth(self, in_project, tmp_path, make_package, write_module, capsys):
        """Test --max-depth keeps nested seeders out of the scan."""
        nested = make_package(tmp_path, "app.seeders.deep")
        write_module(nested, "deep.py", "@auto_seed\nclass DeepSeeder:\n    pass\n")

        assert main(["list", str(tmp_path / "app" / "seeders"), "--max-depth", "0"]) == 0
        assert "No seeders found" in capsys.readouterr().err

    def test_config_file(self, in_project, auth_seeders, capsys):
        """Test scan paths come from an autoseed.toml in the project."""
        (in_project / "autoseed.toml").write_text('paths = ["app/seeders"]\ninclude_ext = [".py"]\n')

        assert main(["list", "-f", "json"]) == 0
        assert json.loads(capsys.readouterr().out)["total"] == 3

    def test_exclude_dir_keeps_configured_exclusions(self, in_project, auth_seeders, make_package, write_module, capsys):
        """Test --exclude-dir adds to the exclusions from the config file."""
        write_module(make_package(in_project, "app.seeders.legacy"), "old.py", "@auto_seed\nclass OldSeeder:\n    pass\n")
        write_module(make_package(in_project, "app.seeders.drafts"), "wip.py", "@auto_seed\nclass WipSeeder:\n    pass\n")
        (in_project / "autoseed.toml").write_text('paths = ["app/seeders"]\nexclude_dirs = ["legacy"]\n')

        assert main(["list", "-f", "json", "--exclude-dir", "drafts"]) == 0

        names = [entry["short_name"] for entry in json.loads(capsys.readouterr().out)["seeders"]]
        assert names == ["PermissionSeeder", "RoleSeeder", "UserSeeder"]

    def test_invalid_config(self, in_project, capsys):
        """Test a broken config file exits non-zero."""
        config = in_project / "broken.toml"
        config.write_text("max_depth = -5\n")

        assert main(["list", "--config", str(config)]) == 1
        assert "Invalid config" in capsys.readouterr().err


class TestValidate:
    """Tests for the validate command."""

    def test_clean(self, in_project, auth_seeders, capsys):
        """Test a clean tree exits zero."""
        assert main(["validate", str(auth_seeders)]) == 0
        assert "All 3 seeders resolve cleanly." in capsys.readouterr().out

    def test_reports_all_errors(self, in_project, cyclic_seeders, write_module, capsys):
        """Test every problem is listed and the exit code is non-zero."""
        write_module(cyclic_seeders, "lonely.py", """
            @auto_seed(depends_on=["Missing"])
            class Z:
                pass
        """)

        assert main(["validate", str(cyclic_seeders)]) == 1

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert all(line.startswith("- ") for line in lines)
        assert any("Circular dependency detected" in line for line in lines)
        assert any("'app.seeders.lonely.Missing'" in line for line in lines)

    def test_json(self, in_project, cyclic_seeders, capsys):
        """Test JSON error output."""
        assert main(["validate", str(cyclic_seeders), "--json"]) == 1

        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is False
        assert data["errors"][0]["cycle"] == [
            "app.seeders.cycle.X", "app.seeders.cycle.Y", "app.seeders.cycle.X",
        ]
