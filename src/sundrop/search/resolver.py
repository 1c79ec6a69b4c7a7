"""Package location resolution for icon source locations.

Source locations that are not filesystem paths name a package that ships icon
files, optionally followed by a subdirectory (``heroicons/24/outline``,
``@scope/icons/svg``). The resolver turns such an identifier into a
directory. Resolution is pluggable: the index builder only depends on the
``PackageResolver`` protocol.
"""

import importlib.util
import logging
from pathlib import Path
from typing import Protocol

from sundrop.constants import NODE_MODULES_DIR, SCOPED_PACKAGE_MARKER
from sundrop.exceptions import PackageNotFoundError

logger = logging.getLogger(__name__)


class PackageResolver(Protocol):
    """Resolves a package identifier to an installed directory."""

    def resolve(self, identifier: str) -> Path:
        """Return the directory for identifier or raise PackageNotFoundError."""
        ...


def split_package_identifier(identifier: str) -> tuple[str, list[str]]:
    """Split a package identifier into package name and subpath parts.

    Scoped identifiers keep their first two segments as the package name.

    >>> split_package_identifier("@scope/icons/svg/solid")
    ('@scope/icons', ['svg', 'solid'])
    >>> split_package_identifier("heroicons/24")
    ('heroicons', ['24'])

    Args:
        identifier: Package identifier with an optional subpath

    Returns:
        Tuple of (package name, subpath segments).
    """
    parts = [part for part in identifier.split("/") if part]
    if identifier.startswith(SCOPED_PACKAGE_MARKER):
        return "/".join(parts[:2]), parts[2:]
    return parts[0] if parts else "", parts[1:]


class DefaultPackageResolver:
    """Resolves packages through Python imports, then ``node_modules`` lookup.

    Resolution order for the package name:
    1. The Python import system, for non-scoped names that are importable
       module names (icon sets shipped as Python package data).
    2. ``node_modules/<name>`` in the project directory and each of its parents.

    The subpath is appended to the package root and must exist as a directory.

    Attributes:
        cwd: Project directory where the ``node_modules`` lookup starts
    """

    def __init__(self, cwd: Path) -> None:
        """Initialize the resolver.

        Args:
            cwd: Project directory where the ``node_modules`` lookup starts
        """
        self.cwd = cwd

    def resolve(self, identifier: str) -> Path:
        """Resolve a package identifier to a directory.

        Args:
            identifier: Package identifier with an optional subpath

        Returns:
            The resolved directory.

        Raises:
            PackageNotFoundError: If the package or its subpath cannot be found.
        """
        package_name, subpath = split_package_identifier(identifier)
        searched: list[str] = []

        package_root = self._find_python_package(package_name)
        if package_root is None:
            logger.debug(f"Could not import {package_name}, trying {NODE_MODULES_DIR} lookup")
            package_root = self._find_node_module(package_name, searched)

        if package_root is None:
            raise PackageNotFoundError(
                f"Could not resolve {package_name}",
                {"package": package_name, "searched": searched},
                location=identifier,
            )

        resolved = package_root.joinpath(*subpath)
        if not resolved.is_dir():
            raise PackageNotFoundError(
                f"Could not resolve {identifier}: {resolved} is not a directory",
                {"package": package_name, "package_root": str(package_root)},
                location=identifier,
            )

        logger.debug(f"Resolved package {identifier} to {resolved}")
        return resolved

    def _find_python_package(self, package_name: str) -> Path | None:
        """Locate an importable Python package directory without importing it."""
        if not package_name.isidentifier():
            return None

        try:
            spec = importlib.util.find_spec(package_name)
        except (ImportError, ValueError):
            return None

        if spec is None or not spec.submodule_search_locations:
            return None

        return Path(next(iter(spec.submodule_search_locations)))

    def _find_node_module(self, package_name: str, searched: list[str]) -> Path | None:
        """Look for node_modules/<package_name> in cwd and its parents."""
        if not package_name:
            return None

        for directory in (self.cwd, *self.cwd.parents):
            candidate = directory / NODE_MODULES_DIR / package_name
            searched.append(str(candidate))
            if candidate.is_dir():
                return candidate

        return None
