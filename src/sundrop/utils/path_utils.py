"""Path utility module for the sundrop sprite bundler.

Provides centralized path classification, normalization and glob expansion so
the index builder and the reference scanner agree on how configured locations
and scan patterns map onto the filesystem.
"""

import os
import re
from collections.abc import Iterator
from pathlib import Path

from sundrop.constants import DEFAULT_CONFIG_FILENAMES

_BRACE_GROUP = re.compile(r"\{([^{}]*)\}")


class PathResolver:
    """Centralized utility for path resolution relative to a project directory.

    Attributes:
        cwd: The project directory relative paths are resolved against
    """

    def __init__(self, cwd: str | Path | None = None) -> None:
        """Initialize the path resolver.

        Args:
            cwd: Project directory; defaults to the process working directory.
        """
        self.cwd = self.normalize_path(cwd) if cwd is not None else Path.cwd()

    def normalize_path(self, path: str | Path) -> Path:
        """Convert a string path to a Path object.

        Args:
            path: String or Path object

        Returns:
            A Path object.
        """
        return Path(path) if isinstance(path, str) else path

    def resolve(self, path: str | Path) -> Path:
        """Resolve a path against the project directory.

        Args:
            path: Relative or absolute path

        Returns:
            The absolute, normalized path.
        """
        return (self.cwd / self.normalize_path(path)).resolve()

    def ensure_dir_exists(self, path: str | Path) -> Path:
        """Ensure a directory exists, creating it if necessary.

        Args:
            path: Directory path

        Returns:
            Path to the directory.
        """
        dir_path = self.normalize_path(path)
        dir_path.mkdir(exist_ok=True, parents=True)
        return dir_path

    def get_config_path(self) -> Path | None:
        """Find a configuration file in the project directory.

        Checks the default config file names in priority order.

        Returns:
            The first existing configuration file, or None.
        """
        for filename in DEFAULT_CONFIG_FILENAMES:
            candidate = self.cwd / filename
            if candidate.is_file():
                return candidate
        return None


# Create a global instance for easy import
path_resolver = PathResolver()


def is_filesystem_path(location: str) -> bool:
    """Tell a filesystem path apart from a package identifier.

    Relative paths must start with "." (``./icons``, ``../shared``); anything
    else that is not absolute is treated as a package identifier.

    Args:
        location: A configured source location

    Returns:
        True if the location is a filesystem path.
    """
    return location.startswith((".", "/")) or os.path.isabs(location)


def expand_braces(pattern: str) -> list[str]:
    """Expand shell-style brace alternatives in a glob pattern.

    ``./**/*.{html,css}`` becomes ``["./**/*.html", "./**/*.css"]``. Nested and
    repeated groups are expanded left to right; a pattern without braces is
    returned unchanged.

    Args:
        pattern: Glob pattern possibly containing ``{a,b}`` groups

    Returns:
        The expanded patterns in alternative order, without duplicates.
    """
    match = _BRACE_GROUP.search(pattern)
    if match is None:
        return [pattern]

    expanded: list[str] = []
    head, tail = pattern[: match.start()], pattern[match.end() :]
    for alternative in match.group(1).split(","):
        for candidate in expand_braces(f"{head}{alternative}{tail}"):
            if candidate not in expanded:
                expanded.append(candidate)
    return expanded


def iter_glob(base_dir: Path, pattern: str) -> Iterator[Path]:
    """Yield files under base_dir matching a glob pattern with brace support.

    Leading ``./`` segments are dropped, absolute patterns are matched from
    the filesystem root, and directories are never yielded.

    Args:
        base_dir: Directory the pattern is relative to
        pattern: Glob pattern, e.g. ``./**/*.{html,css}``

    Yields:
        Absolute paths of matching files, sorted per expanded pattern.
    """
    for expanded in expand_braces(pattern):
        root = base_dir
        if os.path.isabs(expanded):
            root = Path(Path(expanded).anchor)
            expanded = os.path.relpath(expanded, root)
        while expanded.startswith("./"):
            expanded = expanded[2:]
        if not expanded:
            continue
        for path in sorted(root.glob(expanded)):
            if path.is_file():
                yield path.resolve()


def glob_files(base_dir: Path, pattern: str) -> list[Path]:
    """List files matching a glob pattern, deduplicated, in deterministic order.

    Args:
        base_dir: Directory the pattern is relative to
        pattern: Glob pattern with optional brace alternatives

    Returns:
        Matching file paths; a file matched by several alternatives appears once,
        at the position of its first match.
    """
    return list(dict.fromkeys(iter_glob(base_dir, pattern)))
