"""Result models for the sundrop sprite bundler.

Defines the values handed between the search engine, the sprite generator and
the build orchestrator, and the two terminal outcomes of a build.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Matched icon name -> absolute icon file path, in match (insertion) order
MatchSet = dict[str, Path]


class SpriteFragment(BaseModel):
    """One icon prepared for merging into the sprite sheet.

    Attributes:
        output_id: The id the icon receives in the sprite
        raw_markup: Icon markup with the id injected on its root element
        source: The icon file the markup was loaded from
    """

    model_config = ConfigDict(frozen=True)

    output_id: str
    raw_markup: str
    source: Path


class BuildResult(BaseModel):
    """Outcome of a build that wrote a sprite sheet."""

    model_config = ConfigDict(frozen=True)

    out: Path
    bytes_written: int
    matches: MatchSet
    invalid_aliases: frozenset[str] = Field(default_factory=frozenset)

    @property
    def icon_count(self) -> int:
        """Number of icons bundled into the sprite sheet."""
        return len(self.matches)


class NoMatchesFound(BaseModel):
    """Outcome of a build whose scan found no referenced icons.

    No output is written in this case; an existing sprite sheet is left as is.
    """

    model_config = ConfigDict(frozen=True)

    files_scanned: int = 0
    invalid_aliases: frozenset[str] = Field(default_factory=frozenset)
