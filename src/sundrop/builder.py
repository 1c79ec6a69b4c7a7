"""Build orchestration: index, scan, render, write.

``bundle_sprites`` is safe to call repeatedly (for example from a file
watcher): each call builds a fresh index and match set unless the caller
passes an ``IconSearch`` whose index should be reused. The output sink is only
called with a fully rendered document, so a failed build never touches the
existing sprite sheet.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

from sundrop.exceptions import InvalidAliasError, OutputWriteError, chain_exception
from sundrop.models.config import BuildConfig
from sundrop.models.results import BuildResult, NoMatchesFound
from sundrop.search.icon_search import IconSearch
from sundrop.search.resolver import PackageResolver
from sundrop.sprite.generator import SpriteGenerator
from sundrop.sprite.optimizer import SvgOptimizer
from sundrop.utils import file_utils

logger = logging.getLogger(__name__)


class OutputSink(Protocol):
    """Destination for the rendered sprite sheet."""

    def write(self, path: Path, data: bytes) -> int:
        """Write data to path and return the number of bytes written."""
        ...


class FileSink:
    """Writes the sprite sheet to disk atomically."""

    def write(self, path: Path, data: bytes) -> int:
        """Write data to path.

        Raises:
            OutputWriteError: If the file cannot be written.
        """
        try:
            return file_utils.atomic_write(path, data)
        except OSError as e:
            raise chain_exception(
                OutputWriteError(
                    f"Failed to write sprite sheet: {path}", {"path": str(path), "error": str(e)}
                ),
                e,
            )


async def bundle_sprites(
    config: BuildConfig,
    *,
    sink: OutputSink | None = None,
    search: IconSearch | None = None,
    package_resolver: PackageResolver | None = None,
    optimizer: SvgOptimizer | None = None,
) -> BuildResult | NoMatchesFound:
    """Build the sprite sheet for a project.

    Args:
        config: Build configuration
        sink: Output destination; defaults to FileSink
        search: Search engine to reuse (its index is kept between builds)
        package_resolver: Resolver for package source locations
        optimizer: Optimizer for the sprite document

    Returns:
        BuildResult when a sprite sheet was written, NoMatchesFound when no
        indexed icon is referenced by the project.

    Raises:
        SourceLocationUnresolvedError: If a source location cannot be found.
        InvalidAliasError: If strict_aliases is set and an alias is invalid.
        RenderError: If an icon cannot be loaded or the sprite cannot be optimized.
        OutputWriteError: If the sprite sheet cannot be written.
    """
    search = search or IconSearch(config, package_resolver)
    if len(search.index) == 0:
        await search.rebuild_index()

    if config.strict_aliases and search.invalid_aliases:
        invalid = sorted(search.invalid_aliases)
        raise InvalidAliasError(
            f"Aliases point at unknown icons: {', '.join(invalid)}", {"aliases": invalid}
        )

    matches = await search.search()
    files_scanned = search.last_report.files_scanned if search.last_report else 0

    if not matches:
        logger.warning("No icon matches found, sprite sheet not written")
        return NoMatchesFound(files_scanned=files_scanned, invalid_aliases=search.invalid_aliases)

    logger.info(f"Found {len(matches)} matches to bundle up")

    generator = SpriteGenerator(
        matches,
        id_prefix=config.output_prefix,
        id_prefixes=config.id_prefixes,
        optimizer=optimizer,
    )
    sprite_sheet = await generator.render()

    out = config.output_path
    bytes_written = await asyncio.to_thread((sink or FileSink()).write, out, sprite_sheet)
    logger.info(f"Saved SVG sprite to {out} ({bytes_written} bytes)")

    return BuildResult(
        out=out,
        bytes_written=bytes_written,
        matches=matches,
        invalid_aliases=search.invalid_aliases,
    )
