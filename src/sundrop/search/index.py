"""Icon index: the mapping from logical icon name to icon file.

The index is built once per build from the configured source locations.
Registration order is part of the contract: source locations are processed in
configured order and files within a location in sorted path order, and a
later registration of a name replaces an earlier one. Given the same files
and configuration the index is therefore identical across runs.

Every icon file is registered under its base name (file name without the
``.svg`` extension) and under ``prefix + base name`` for each configured
prefix. Aliases are resolved after all locations are indexed; aliases whose
target is unknown are collected instead of registered.
"""

import asyncio
import logging
import time
from collections.abc import Iterator, Mapping
from pathlib import Path

from sundrop.constants import ICON_FILE_EXTENSION
from sundrop.exceptions import SourceLocationUnresolvedError
from sundrop.models.config import SearchConfig
from sundrop.search.resolver import DefaultPackageResolver, PackageResolver
from sundrop.utils import file_utils
from sundrop.utils.path_utils import PathResolver, is_filesystem_path

logger = logging.getLogger(__name__)


class IconIndex(Mapping[str, Path]):
    """Read-only mapping of icon name to absolute icon path.

    Attributes:
        invalid_aliases: Aliases whose target icon was not indexed
        valid_alias_count: Number of aliases registered
    """

    def __init__(
        self,
        entries: Mapping[str, Path] | None = None,
        invalid_aliases: frozenset[str] = frozenset(),
        valid_alias_count: int = 0,
    ) -> None:
        self._entries: dict[str, Path] = dict(entries or {})
        self.invalid_aliases = invalid_aliases
        self.valid_alias_count = valid_alias_count

    def __getitem__(self, name: str) -> Path:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"IconIndex({len(self._entries)} names, {len(self.invalid_aliases)} invalid aliases)"

    @property
    def paths(self) -> set[Path]:
        """Distinct icon files in the index."""
        return set(self._entries.values())


def icon_names(icon_path: Path, id_prefixes: list[str]) -> list[str]:
    """Names an icon file is registered under.

    >>> icon_names(Path("/icons/arrow.svg"), ["icon-", "i-"])
    ['arrow', 'icon-arrow', 'i-arrow']

    Args:
        icon_path: Path to the icon file
        id_prefixes: Configured prefixes

    Returns:
        The base name followed by one prefixed name per prefix.
    """
    base_name = icon_path.name.removesuffix(ICON_FILE_EXTENSION)
    return [base_name, *(f"{prefix}{base_name}" for prefix in id_prefixes)]


def resolve_source_location(
    location: str, path_resolver: PathResolver, package_resolver: PackageResolver
) -> Path:
    """Resolve a configured source location to an existing directory.

    Args:
        location: Filesystem path or package identifier
        path_resolver: Resolver for paths relative to the project directory
        package_resolver: Resolver for package identifiers

    Returns:
        The directory to index.

    Raises:
        SourceLocationUnresolvedError: If a filesystem location does not exist.
        PackageNotFoundError: If a package identifier cannot be resolved.
    """
    if not is_filesystem_path(location):
        return package_resolver.resolve(location)

    directory = path_resolver.resolve(location)
    if not file_utils.dir_exists(directory):
        raise SourceLocationUnresolvedError(
            f"Icon source location not found: {location}",
            {"location": location, "resolved": str(directory)},
            location=location,
        )
    return directory


def build_index_sync(
    config: SearchConfig, package_resolver: PackageResolver | None = None
) -> IconIndex:
    """Build the icon index for a search configuration.

    Args:
        config: Search configuration
        package_resolver: Resolver for package identifiers; defaults to
            DefaultPackageResolver rooted at config.cwd

    Returns:
        A new IconIndex.

    Raises:
        SourceLocationUnresolvedError: If any source location cannot be found.
    """
    started = time.perf_counter()
    resolver = package_resolver or DefaultPackageResolver(config.cwd)
    paths = PathResolver(config.cwd)
    entries: dict[str, Path] = {}

    for location in config.paths:
        directory = resolve_source_location(location, paths, resolver)
        icon_files = file_utils.list_files(directory, f"*{ICON_FILE_EXTENSION}", recursive=True)
        logger.debug(f"Found {len(icon_files)} icon files in {location} ({directory})")

        for icon_file in icon_files:
            icon_path = icon_file.resolve()
            for name in icon_names(icon_path, config.id_prefixes):
                previous = entries.get(name)
                if previous is not None and previous != icon_path:
                    logger.debug(f"Icon name {name} now points at {icon_path} (was {previous})")
                entries[name] = icon_path

    icon_count = len(entries)
    invalid_aliases: set[str] = set()
    valid_aliases = 0

    for alias, icon_name in config.aliases.items():
        target = entries.get(icon_name)
        if target is None:
            logger.warning(f"Skipping invalid alias {alias} (no icon named {icon_name})")
            invalid_aliases.add(alias)
            continue

        entries[alias] = target
        valid_aliases += 1

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"Indexed {icon_count} SVG icon names + {valid_aliases} valid aliases "
        f"in {elapsed_ms:.1f}ms"
    )

    return IconIndex(entries, frozenset(invalid_aliases), valid_aliases)


async def build_index(
    config: SearchConfig, package_resolver: PackageResolver | None = None
) -> IconIndex:
    """Build the icon index without blocking the event loop.

    Directory enumeration and package resolution run in a worker thread.

    Args:
        config: Search configuration
        package_resolver: Resolver for package identifiers

    Returns:
        A new IconIndex.
    """
    return await asyncio.to_thread(build_index_sync, config, package_resolver)
