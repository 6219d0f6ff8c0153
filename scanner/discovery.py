"""File discovery utilities for locating seed unit candidates."""

import glob
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set, Union


SOURCE_EXTENSIONS = {".py"}
MANIFEST_EXTENSIONS = {".yaml", ".yml", ".json", ".toml"}
DEFAULT_EXTENSIONS = SOURCE_EXTENSIONS | MANIFEST_EXTENSIONS
DEFAULT_EXCLUDE_DIRS = {
    ".git", ".hg", ".svn",
    "node_modules", "__pycache__", ".tox", ".nox",
    "venv", ".venv", "env", ".env",
    ".idea", ".vscode",
    "build", "dist", ".eggs", "*.egg-info",
}

PathPatterns = Union[str, Path, Iterable[Union[str, Path]]]


def normalize_patterns(patterns: PathPatterns) -> List[str]:
    """Turn a single pattern or a sequence of patterns into a list of strings."""
    if isinstance(patterns, (str, Path)):
        return [str(patterns)]
    return [str(pattern) for pattern in patterns]


def expand_patterns(patterns: PathPatterns) -> List[Path]:
    """
    Expand path patterns into existing paths.

    Plain paths are kept as they are; patterns containing glob characters
    are expanded (``**`` matches any number of directories). Paths that do
    not exist are dropped.

    Args:
        patterns: A path, a glob pattern, or an ordered list of either.

    Returns:
        Existing paths in pattern order, each listed once.
    """
    expanded: List[Path] = []
    seen: Set[Path] = set()

    for pattern in normalize_patterns(patterns):
        if glob.has_magic(pattern):
            matches = [Path(match) for match in sorted(glob.glob(pattern, recursive=True))]
        else:
            matches = [Path(pattern)]

        for match in matches:
            if not match.exists():
                continue
            resolved = match.resolve()
            if resolved not in seen:
                seen.add(resolved)
                expanded.append(resolved)

    return expanded


def iter_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over files in a directory tree.

    Args:
        root: Root directory to scan.
        include_ext: Set of file extensions to include (e.g., {'.py', '.yaml'}).
                    If None, uses DEFAULT_EXTENSIONS.
        exclude_dirs: Set of directory names to skip.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Maximum depth to descend. None means unlimited.

    Yields:
        Path objects for matching files.
    """
    if include_ext is None:
        include_ext = DEFAULT_EXTENSIONS
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    root = root.resolve()

    def _walk(current: Path, depth: int) -> Iterator[Path]:
        if max_depth is not None and depth > max_depth:
            return

        try:
            entries = sorted(current.iterdir())
        except PermissionError:
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name in exclude_dirs:
                    continue
                # Check for glob patterns in exclude_dirs
                if any(entry.name.endswith(pat.lstrip("*")) for pat in exclude_dirs if pat.startswith("*")):
                    continue
                yield from _walk(entry, depth + 1)
            elif entry.is_file():
                if entry.suffix.lower() in include_ext:
                    yield entry

    yield from _walk(root, 0)


def iter_candidate_files(
    patterns: PathPatterns,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over every candidate file matched by the given patterns, once each.

    Matched directories are walked recursively; matched files are yielded
    directly if their extension is recognized. Files reachable through
    several overlapping patterns keep the position of their first match.

    Args:
        patterns: A path, a glob pattern, or an ordered list of either.
        include_ext: File extensions to consider. If None, uses DEFAULT_EXTENSIONS.
        exclude_dirs: Directory names to skip while walking.
        max_depth: Maximum depth to descend below each matched directory.

    Yields:
        Resolved file paths in scan order.
    """
    if include_ext is None:
        include_ext = DEFAULT_EXTENSIONS

    seen: Set[Path] = set()

    for path in expand_patterns(patterns):
        if path.is_dir():
            files: Iterable[Path] = iter_files(
                root=path,
                include_ext=include_ext,
                exclude_dirs=exclude_dirs,
                max_depth=max_depth,
            )
        elif path.suffix.lower() in include_ext:
            files = [path]
        else:
            continue

        for file_path in files:
            file_path = file_path.resolve()
            if file_path not in seen:
                seen.add(file_path)
                yield file_path
