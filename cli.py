#!/usr/bin/env python3
"""
autoseed CLI

A tool for discovering seed units across a codebase, resolving them into a
dependency-respecting execution order, and reporting dependency problems.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from exporters import errors_to_json, to_json, to_mermaid, to_table
from seedgraph.errors import ResolutionError
from seedgraph.service import SeederResolver
from settings import AutoSeedConfig, ConfigError, configure_logging, load_config


def _add_scan_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every subcommand."""
    parser.add_argument(
        "paths",
        nargs="*",
        help="Directories, files or glob patterns to scan (default: configured paths)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file (default: autoseed.toml or [tool.autoseed] found by walking up)",
    )

    parser.add_argument(
        "--include-ext",
        nargs="+",
        default=None,
        help="File extensions to include (e.g., .py .yaml)",
    )

    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Directory names to exclude",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum directory depth to scan",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Emit logs as JSON lines",
    )


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="autoseed",
        description="Discover seed units and resolve them in dependency order.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autoseed list                          # Configured paths, table output
  autoseed list app/*/seeders            # Scan every seeders package under app/
  autoseed list -f mermaid               # Mermaid diagram of the dependencies
  autoseed list -f json -o seeders.json  # JSON output to file
  autoseed list --show-dependencies      # Table plus dependency tree
  autoseed validate                      # Report missing dependencies and cycles
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="List discoverable seeders in execution order",
    )
    _add_scan_arguments(list_parser)

    list_parser.add_argument(
        "-f", "--format",
        choices=["table", "json", "mermaid"],
        default="table",
        help="Output format (default: table)",
    )

    list_parser.add_argument(
        "--show-dependencies",
        action="store_true",
        help="Append the full dependency tree to table output",
    )

    list_parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Dependency tree style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    list_parser.add_argument(
        "--orientation",
        choices=["TD", "TB", "LR", "RL", "BT"],
        default="TD",
        help="Mermaid flowchart orientation (default: TD)",
    )

    list_parser.add_argument(
        "--fenced",
        action="store_true",
        help="Wrap Mermaid output in a ```mermaid code fence",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Report missing dependencies and dependency cycles",
    )
    _add_scan_arguments(validate_parser)

    validate_parser.add_argument(
        "--json",
        action="store_true",
        help="Output errors as JSON",
    )

    return parser.parse_args(args)


def build_config(parsed: argparse.Namespace) -> AutoSeedConfig:
    """
    Load the config file and apply command line overrides.

    Raises:
        ConfigError: If the config file is invalid.
    """
    config = load_config(Path(parsed.config) if parsed.config else None)

    overrides = {}
    if parsed.include_ext:
        overrides["include_ext"] = parsed.include_ext
    if parsed.exclude_dir:
        overrides["exclude_dirs"] = sorted(set(parsed.exclude_dir) | set(config.exclude_dirs))
    if parsed.max_depth is not None:
        overrides["max_depth"] = parsed.max_depth

    if overrides:
        config = AutoSeedConfig.model_validate({**config.model_dump(), **overrides})

    return config


def _write_output(output: str, destination: Optional[str]) -> int:
    if destination:
        try:
            output_path = Path(destination)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)
    return 0


def run_list(parsed: argparse.Namespace, resolver: SeederResolver, paths: Optional[List[str]]) -> int:
    """List seeders in execution order."""
    try:
        units = resolver.discover(paths)
    except ResolutionError as e:
        print("Error: Failed to discover seeders", file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not units:
        print("Warning: No seeders found with the @auto_seed marker.", file=sys.stderr)
        return 0

    if parsed.format == "mermaid":
        output = to_mermaid(units, orientation=parsed.orientation, fenced=parsed.fenced)
    elif parsed.format == "json":
        output = to_json(units)
    else:  # table (default)
        output = to_table(
            units,
            show_dependencies=parsed.show_dependencies,
            style=parsed.ascii_style,
        )

    return _write_output(output, parsed.output)


def run_validate(parsed: argparse.Namespace, resolver: SeederResolver, paths: Optional[List[str]]) -> int:
    """Report every validation error; non-zero exit code if there are any."""
    resolver.scan(paths)
    errors = resolver.validate()

    if parsed.json:
        output = errors_to_json(errors)
    elif errors:
        output = "\n".join(f"- {error.message}" for error in errors)
    else:
        output = f"All {len(resolver.graph)} seeders resolve cleanly."

    status = _write_output(output, parsed.output)
    return 1 if errors else status


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    configure_logging(verbose=parsed.verbose, log_json=parsed.log_json)

    try:
        config = build_config(parsed)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    resolver = SeederResolver(config)
    paths = parsed.paths or None

    if parsed.command == "validate":
        return run_validate(parsed, resolver, paths)
    return run_list(parsed, resolver, paths)


if __name__ == "__main__":
    sys.exit(main())
