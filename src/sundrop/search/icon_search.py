"""Icon search engine tying the index and the scanner together."""

import logging

from sundrop.models.config import SearchConfig
from sundrop.models.results import MatchSet
from sundrop.search.index import IconIndex, build_index
from sundrop.search.resolver import PackageResolver
from sundrop.search.scanner import ScanReport, scan

logger = logging.getLogger(__name__)


class IconSearch:
    """Finds the indexed icons a project references.

    The index is built on the first search and reused by later searches on
    the same instance; create a new instance (or call ``rebuild_index``) to
    pick up added or removed icon files.

    Attributes:
        config: Search configuration
        package_resolver: Resolver used for package source locations
        index: The icon index (empty until the first search)
        last_report: Report of the most recent scan
    """

    def __init__(
        self, config: SearchConfig, package_resolver: PackageResolver | None = None
    ) -> None:
        self.config = config
        self.package_resolver = package_resolver
        self.index = IconIndex()
        self.last_report: ScanReport | None = None

    @property
    def invalid_aliases(self) -> frozenset[str]:
        """Aliases skipped while building the current index."""
        return self.index.invalid_aliases

    async def rebuild_index(self) -> IconIndex:
        """Replace the index with a freshly built one."""
        self.index = await build_index(self.config, self.package_resolver)
        return self.index

    async def search(self) -> MatchSet:
        """Scan the project and return the matched icons.

        Returns:
            Matched name -> icon path, in first-occurrence order.
        """
        if len(self.index) == 0:
            await self.rebuild_index()

        self.last_report = await scan(
            self.index,
            self.config.cwd,
            self.config.search_pattern,
            batch_size=self.config.scan_batch_size,
        )
        return self.last_report.matches
