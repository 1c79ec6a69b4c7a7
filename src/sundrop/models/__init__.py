"""Configuration and result models."""

from sundrop.models.config import BuildConfig, LoggingConfig, SearchConfig
from sundrop.models.results import BuildResult, MatchSet, NoMatchesFound, SpriteFragment

__all__ = [
    "BuildConfig",
    "BuildResult",
    "LoggingConfig",
    "MatchSet",
    "NoMatchesFound",
    "SearchConfig",
    "SpriteFragment",
]
