"""Bundle the SVG icons a project references into a single sprite sheet.

Typical use::

    import asyncio
    from sundrop import BuildConfig, bundle_sprites

    config = BuildConfig(paths=["./icons"], out="dist/sprites.svg")
    asyncio.run(bundle_sprites(config))
"""

from sundrop.builder import FileSink, OutputSink, bundle_sprites
from sundrop.models.config import BuildConfig, LoggingConfig, SearchConfig
from sundrop.models.results import BuildResult, NoMatchesFound
from sundrop.search.icon_search import IconSearch
from sundrop.sprite.generator import SpriteGenerator

__all__ = [
    "BuildConfig",
    "BuildResult",
    "FileSink",
    "IconSearch",
    "LoggingConfig",
    "NoMatchesFound",
    "OutputSink",
    "SearchConfig",
    "SpriteGenerator",
    "bundle_sprites",
]
