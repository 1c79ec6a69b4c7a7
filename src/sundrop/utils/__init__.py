"""Module initialization."""

from sundrop.utils.path_utils import (
    PathResolver,
    expand_braces,
    glob_files,
    is_filesystem_path,
    path_resolver,
)

__all__ = [
    # Path utilities
    "PathResolver",
    "expand_braces",
    "glob_files",
    "is_filesystem_path",
    "path_resolver",
]
