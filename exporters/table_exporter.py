"""Text table (rendered with rich) and dependency tree exporter for resolved seed units."""

from io import StringIO
from typing import List, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.table import Table

from seedgraph.model import SeedUnit


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "

HEADERS = ("#", "Seeder", "Dependencies")
MAX_LISTED_DEPENDENCIES = 2
TABLE_WIDTH = 120


def format_dependencies(names: Sequence[str]) -> str:
    """
    Format dependency names for a table cell.

    More than two dependencies are cut to the first two plus a '+N more' note.
    """
    if not names:
        return "none"

    shown = list(names[:MAX_LISTED_DEPENDENCIES])
    if len(names) > MAX_LISTED_DEPENDENCIES:
        shown.append(f"+{len(names) - MAX_LISTED_DEPENDENCIES} more")
    return ", ".join(shown)


def _create_console() -> Console:
    """Create a colourless Console that renders to a StringIO buffer."""
    return Console(file=StringIO(), no_color=True, highlight=False, width=TABLE_WIDTH)


def _render_table(rows: List[Tuple[str, str, str]], style: str = "tree") -> str:
    table = Table(
        box=box.ASCII if style == "ascii" else box.SQUARE,
        show_header=True,
        pad_edge=True,
        expand=False,
    )
    table.add_column(HEADERS[0], justify="right", no_wrap=True)
    table.add_column(HEADERS[1], no_wrap=True)
    table.add_column(HEADERS[2])

    for row in rows:
        table.add_row(*row)

    console = _create_console()
    console.print(table)
    return console.file.getvalue().rstrip("\n")


def to_tree(units: Sequence[SeedUnit], style: str = "tree") -> str:
    """
    Render each unit followed by its direct dependencies.

    Args:
        units: Units in execution order.
        style: "tree" (Unicode) or "ascii" (pure ASCII).

    Returns:
        Dependency tree string.
    """
    branch, last = (ASCII_BRANCH, ASCII_LAST) if style == "ascii" else (UNICODE_BRANCH, UNICODE_LAST)

    lines: List[str] = []
    for index, unit in enumerate(units):
        lines.append(unit.short_name)

        names = unit.dependency_short_names
        if not names:
            lines.append(f"    {last}(no dependencies)")
        for position, name in enumerate(names):
            connector = last if position == len(names) - 1 else branch
            lines.append(f"    {connector}{name}")

        if index < len(units) - 1:
            lines.append("")

    return "\n".join(lines)


def to_table(
    units: Sequence[SeedUnit],
    show_dependencies: bool = False,
    style: str = "tree",
) -> str:
    """
    Convert resolved units to a numbered table.

    Args:
        units: Units in execution order.
        show_dependencies: If True, append the full dependency tree.
        style: Border and tree style - "tree" (Unicode) or "ascii" (pure ASCII).

    Returns:
        Table string.
    """
    rows = [
        (str(order), unit.short_name, format_dependencies(unit.dependency_short_names))
        for order, unit in enumerate(units, start=1)
    ]

    lines = [_render_table(rows, style=style)]

    if show_dependencies and units:
        lines.append("")
        lines.append("Dependency Tree:")
        lines.append("")
        lines.append(to_tree(units, style=style))

    return "\n".join(lines)
