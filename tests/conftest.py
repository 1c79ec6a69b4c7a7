"""Common fixtures for testing the sundrop sprite bundler."""

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from samples import (
    ARROW_SVG,
    CLOSE_SVG,
    SVG_WITH_DIMENSIONS,
    SVG_WITH_FILL,
    SVG_WITH_NAMESPACE,
    SVG_WITH_STYLE_FILL,
    USER_SVG,
    write_file,
)
from sundrop.models.config import BuildConfig, SearchConfig


@pytest.fixture()
def icons_dir(tmp_path: Path) -> Path:
    """Create an icons directory with a handful of sample icons."""
    icons = tmp_path / "icons"
    write_file(icons / "arrow.svg", ARROW_SVG)
    write_file(icons / "close.svg", CLOSE_SVG)
    write_file(icons / "user.svg", USER_SVG)
    return icons


@pytest.fixture()
def style_icons_dir(tmp_path: Path) -> Path:
    """Create an icons directory exercising the fill and sizing rules."""
    icons = tmp_path / "style-icons"
    write_file(icons / "colored.svg", SVG_WITH_FILL)
    write_file(icons / "styled.svg", SVG_WITH_STYLE_FILL)
    write_file(icons / "sized.svg", SVG_WITH_DIMENSIONS)
    write_file(icons / "exported.svg", SVG_WITH_NAMESPACE)
    return icons


@pytest.fixture()
def src_dir(tmp_path: Path) -> Path:
    """Create an empty project source directory."""
    src = tmp_path / "src"
    src.mkdir()
    return src


@pytest.fixture()
def search_config(tmp_path: Path, icons_dir: Path) -> SearchConfig:
    """Create a search configuration for the sample icons."""
    return SearchConfig(
        cwd=tmp_path,
        paths=["./icons"],
        id_prefix="icon-",
        search_pattern="src/**/*.html",
    )


@pytest.fixture()
def make_build_config(tmp_path: Path, icons_dir: Path) -> Callable[..., BuildConfig]:
    """Create a factory for build configurations rooted at tmp_path."""

    def _make(**overrides: object) -> BuildConfig:
        data: dict[str, object] = {
            "cwd": tmp_path,
            "paths": ["./icons"],
            "id_prefix": "icon-",
            "search_pattern": "src/**/*.html",
            "out": "sprites.svg",
        }
        data.update(overrides)
        return BuildConfig.model_validate(data)

    return _make


@pytest.fixture()
def umask_022() -> Iterator[None]:
    """Run the test with the common 022 umask and restore the previous one."""
    previous = os.umask(0o022)
    yield
    os.umask(previous)
