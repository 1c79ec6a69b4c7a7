"""Tests for the icon index builder."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from samples import ARROW_SVG, CLOSE_SVG, write_file
from sundrop.exceptions import PackageNotFoundError, SourceLocationUnresolvedError
from sundrop.models.config import SearchConfig
from sundrop.search.index import IconIndex, build_index, build_index_sync, icon_names


class TestIconNames:
    """Test the names an icon file is registered under."""

    def test_base_name_only(self):
        """Test an icon without prefixes is registered under its file stem."""
        assert icon_names(Path("/icons/arrow.svg"), []) == ["arrow"]

    def test_prefixed_names(self):
        """Test each prefix adds a name."""
        assert icon_names(Path("/icons/arrow.svg"), ["icon-", "i-"]) == [
            "arrow",
            "icon-arrow",
            "i-arrow",
        ]

    def test_dotted_file_name(self):
        """Test only the .svg extension is removed."""
        assert icon_names(Path("/icons/arrow.left.svg"), []) == ["arrow.left"]


class TestBuildIndex:
    """Test building the index from source locations."""

    def test_prefix_registers_both_names(self, tmp_path: Path, icons_dir: Path):
        """Test indexing arrow.svg with prefix icon- yields arrow and icon-arrow."""
        config = SearchConfig(cwd=tmp_path, paths=["./icons"], id_prefix="icon-")

        index = build_index_sync(config)

        arrow = (icons_dir / "arrow.svg").resolve()
        assert index["arrow"] == arrow
        assert index["icon-arrow"] == arrow
        assert arrow.is_absolute()

    def test_indexes_recursively_and_ignores_other_files(self, tmp_path: Path):
        """Test nested icons are found and non-SVG files are skipped."""
        write_file(tmp_path / "icons" / "solid" / "star.svg", ARROW_SVG)
        write_file(tmp_path / "icons" / "README.md", "# icons")
        write_file(tmp_path / "icons" / "close.svg.bak", CLOSE_SVG)
        config = SearchConfig(cwd=tmp_path, paths=["./icons"])

        index = build_index_sync(config)

        assert dict(index) == {"star": (tmp_path / "icons" / "solid" / "star.svg").resolve()}

    def test_deterministic(self, tmp_path: Path, icons_dir: Path):
        """Test indexing the same tree twice yields identical content and order."""
        config = SearchConfig(cwd=tmp_path, paths=["./icons"], id_prefix=["icon-", "i-"])

        first = build_index_sync(config)
        second = build_index_sync(config)

        assert list(first.items()) == list(second.items())

    def test_later_location_wins(self, tmp_path: Path):
        """Test a name registered by a later source location replaces the earlier one."""
        write_file(tmp_path / "base" / "arrow.svg", ARROW_SVG)
        override = write_file(tmp_path / "theme" / "arrow.svg", ARROW_SVG)
        config = SearchConfig(cwd=tmp_path, paths=["./base", "./theme"])

        index = build_index_sync(config)

        assert index["arrow"] == override.resolve()

    def test_absolute_location(self, tmp_path: Path, icons_dir: Path):
        """Test absolute source locations are used as-is."""
        config = SearchConfig(cwd=tmp_path / "elsewhere", paths=[str(icons_dir)])

        index = build_index_sync(config)

        assert set(index) == {"arrow", "close", "user"}

    def test_valid_alias(self, tmp_path: Path, icons_dir: Path):
        """Test an alias resolves to its target's file."""
        config = SearchConfig(
            cwd=tmp_path, paths=["./icons"], id_prefix="icon-", aliases={"back": "arrow"}
        )

        index = build_index_sync(config)

        assert index["back"] == index["arrow"]
        assert index.valid_alias_count == 1
        assert index.invalid_aliases == frozenset()

    def test_alias_to_prefixed_name(self, tmp_path: Path, icons_dir: Path):
        """Test aliases may target prefixed names."""
        config = SearchConfig(
            cwd=tmp_path, paths=["./icons"], id_prefix="icon-", aliases={"x": "icon-close"}
        )

        index = build_index_sync(config)

        assert index["x"] == (icons_dir / "close.svg").resolve()

    def test_invalid_alias_is_collected(self, tmp_path: Path, icons_dir: Path):
        """Test an alias to an unknown icon is not indexed but reported."""
        config = SearchConfig(
            cwd=tmp_path,
            paths=["./icons"],
            aliases={"back": "arrow", "bogus": "does-not-exist"},
        )

        index = build_index_sync(config)

        assert "bogus" not in index
        assert index.invalid_aliases == frozenset({"bogus"})
        assert index.valid_alias_count == 1

    def test_missing_location_fails(self, tmp_path: Path):
        """Test a missing filesystem location aborts indexing."""
        config = SearchConfig(cwd=tmp_path, paths=["./missing"])

        with pytest.raises(SourceLocationUnresolvedError) as exc_info:
            build_index_sync(config)

        assert exc_info.value.location == "./missing"
        assert exc_info.value.details["resolved"] == str((tmp_path / "missing").resolve())

    def test_missing_location_after_valid_one_fails(self, tmp_path: Path, icons_dir: Path):
        """Test no partial index is returned when a later location is missing."""
        config = SearchConfig(cwd=tmp_path, paths=["./icons", "./missing"])

        with pytest.raises(SourceLocationUnresolvedError):
            build_index_sync(config)

    def test_package_location_uses_resolver(self, tmp_path: Path, icons_dir: Path):
        """Test package identifiers are delegated to the package resolver."""
        resolver = MagicMock()
        resolver.resolve.return_value = icons_dir
        config = SearchConfig(cwd=tmp_path, paths=["@acme/icons/svg"])

        index = build_index_sync(config, resolver)

        resolver.resolve.assert_called_once_with("@acme/icons/svg")
        assert "arrow" in index

    def test_package_resolution_failure_propagates(self, tmp_path: Path):
        """Test resolver failures abort indexing."""
        resolver = MagicMock()
        resolver.resolve.side_effect = PackageNotFoundError(
            "Could not resolve acme-icons", location="acme-icons"
        )
        config = SearchConfig(cwd=tmp_path, paths=["acme-icons"])

        with pytest.raises(PackageNotFoundError):
            build_index_sync(config, resolver)

    def test_no_locations(self, tmp_path: Path):
        """Test an empty configuration yields an empty index."""
        index = build_index_sync(SearchConfig(cwd=tmp_path))

        assert len(index) == 0
        assert index.paths == set()

    @pytest.mark.asyncio()
    async def test_async_build(self, search_config: SearchConfig):
        """Test the coroutine wrapper returns the same index."""
        index = await build_index(search_config)

        assert isinstance(index, IconIndex)
        assert list(index.items()) == list(build_index_sync(search_config).items())
