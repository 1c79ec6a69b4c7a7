"""Tests for the reference scanner."""

import logging
from pathlib import Path

import pytest

from samples import write_file
from sundrop.search.scanner import ScanState, find_project_files, scan, scan_files

ARROW = Path("/icons/arrow.svg")
CLOSE = Path("/icons/close.svg")
USER = Path("/icons/user.svg")

INDEX = {
    "arrow": ARROW,
    "icon-arrow": ARROW,
    "close": CLOSE,
    "icon-close": CLOSE,
    "user": USER,
    "icon-user": USER,
}


def make_reader(contents: dict[Path, str], calls: list[Path] | None = None):
    """Create an in-memory file reader that records the files it reads."""

    async def reader(path: Path) -> str:
        if calls is not None:
            calls.append(path)
        return contents[path]

    return reader


class TestScanState:
    """Test the per-file claim step."""

    def test_first_occurrence_claims_file(self):
        """Test the first name seen for an icon file becomes its match key."""
        state = ScanState(remaining=set(INDEX))

        state.claim_tokens(["icon-arrow", "arrow"], INDEX)

        assert state.matches == {"icon-arrow": ARROW}
        assert "arrow" not in state.remaining
        assert state.files_scanned == 1

    def test_unknown_tokens_are_ignored(self):
        """Test tokens that are not index names change nothing."""
        state = ScanState(remaining=set(INDEX))

        state.claim_tokens(["div", "class", "Arrow"], INDEX)

        assert state.matches == {}
        assert state.remaining == set(INDEX)

    def test_exhausted(self):
        """Test the state reports exhaustion once every name is seen."""
        state = ScanState(remaining={"arrow"})

        state.claim_tokens(["arrow", "close"], {"arrow": ARROW})

        assert state.exhausted


class TestScanFiles:
    """Test scanning a list of files."""

    @pytest.mark.asyncio()
    async def test_dedup_by_icon_path(self):
        """Test an icon referenced under several names is matched once."""
        files = [Path("/p/a.html")]
        reader = make_reader({files[0]: '<use href="#icon-arrow"/> arrow icon-arrow'})

        report = await scan_files(INDEX, files, reader=reader)

        assert report.matches == {"icon-arrow": ARROW}

    @pytest.mark.asyncio()
    async def test_first_occurrence_across_files(self):
        """Test earlier files decide the match key."""
        first, second = Path("/p/a.html"), Path("/p/b.html")
        reader = make_reader({first: "arrow", second: "icon-arrow close"})

        report = await scan_files(INDEX, [first, second], reader=reader)

        assert report.matches == {"arrow": ARROW, "close": CLOSE}
        assert list(report.matches) == ["arrow", "close"]

    @pytest.mark.asyncio()
    async def test_match_order_follows_occurrence(self):
        """Test matches are ordered by first occurrence, left to right."""
        files = [Path("/p/a.html")]
        reader = make_reader({files[0]: "user then close then arrow"})

        report = await scan_files(INDEX, files, reader=reader)

        assert list(report.matches) == ["user", "close", "arrow"]

    @pytest.mark.asyncio()
    async def test_unreadable_file_is_skipped(self):
        """Test a file that fails to read counts as empty and the scan goes on."""
        files = [Path("/p/gone.html"), Path("/p/page.html")]
        contents = {files[1]: "close"}

        async def reader(path: Path) -> str:
            if path not in contents:
                raise FileNotFoundError(path)
            return contents[path]

        report = await scan_files(INDEX, files, reader=reader)

        assert report.matches == {"close": CLOSE}
        assert report.files_scanned == 2

    @pytest.mark.asyncio()
    async def test_early_exit(self):
        """Test no further files are read once every index name is seen."""
        files = [Path(f"/p/{n}.html") for n in range(10)]
        contents = {path: "nothing here" for path in files}
        contents[files[0]] = " ".join(INDEX)
        calls: list[Path] = []

        report = await scan_files(INDEX, files, batch_size=1, reader=make_reader(contents, calls))

        assert calls == [files[0]]
        assert report.files_scanned == 1
        assert report.files_total == 10
        assert report.stopped_early
        assert set(report.matches.values()) == {ARROW, CLOSE, USER}

    @pytest.mark.asyncio()
    async def test_early_exit_inside_batch(self):
        """Test files already read in the exhausting batch are not processed."""
        files = [Path(f"/p/{n}.html") for n in range(4)]
        contents = {path: "nothing" for path in files}
        contents[files[1]] = " ".join(INDEX)

        report = await scan_files(INDEX, files, batch_size=4, reader=make_reader(contents))

        assert report.files_scanned == 2

    @pytest.mark.asyncio()
    async def test_no_early_exit_without_all_names(self):
        """Test every file is scanned while some names are still unseen."""
        files = [Path(f"/p/{n}.html") for n in range(3)]
        contents = {path: "arrow close user" for path in files}

        report = await scan_files(INDEX, files, batch_size=1, reader=make_reader(contents))

        assert report.files_scanned == 3
        assert not report.stopped_early

    @pytest.mark.asyncio()
    @pytest.mark.parametrize("batch_size", [1, 2, 3, 50])
    async def test_batch_size_does_not_change_result(self, batch_size: int):
        """Test the match set is independent of the read batch size."""
        files = [Path(f"/p/{n}.html") for n in range(5)]
        contents = {
            files[0]: "plain text",
            files[1]: "icon-close",
            files[2]: "close user",
            files[3]: "icon-user arrow",
            files[4]: "icon-arrow",
        }

        report = await scan_files(INDEX, files, batch_size=batch_size, reader=make_reader(contents))

        assert list(report.matches.items()) == [
            ("icon-close", CLOSE),
            ("user", USER),
            ("arrow", ARROW),
        ]

    @pytest.mark.asyncio()
    async def test_no_tokens_across_file_boundaries(self):
        """Test the end of one file and the start of the next do not form a token."""
        first, second = Path("/p/a.html"), Path("/p/b.html")
        reader = make_reader({first: "<i>ar", second: "row</i>"})

        report = await scan_files(INDEX, [first, second], reader=reader)

        assert report.matches == {}

    @pytest.mark.asyncio()
    async def test_no_files(self):
        """Test scanning nothing yields nothing."""
        report = await scan_files(INDEX, [])

        assert report.matches == {}
        assert report.files_total == 0


class TestScan:
    """Test scanning project files from a glob."""

    def test_find_project_files_with_braces(self, tmp_path: Path):
        """Test brace alternatives select several extensions in deterministic order."""
        write_file(tmp_path / "b.css", "")
        write_file(tmp_path / "a.html", "")
        write_file(tmp_path / "nested" / "c.html", "")
        write_file(tmp_path / "d.js", "")

        files = find_project_files(tmp_path, "./**/*.{html,css}")

        assert files == [
            (tmp_path / "a.html").resolve(),
            (tmp_path / "nested" / "c.html").resolve(),
            (tmp_path / "b.css").resolve(),
        ]

    @pytest.mark.asyncio()
    async def test_scan_project(self, tmp_path: Path, icons_dir: Path, src_dir: Path):
        """Test a project scan matches the icons referenced in its files."""
        write_file(src_dir / "index.html", '<svg><use href="#icon-close"></use></svg>')
        write_file(src_dir / "about.html", '<svg><use href="#icon-arrow"></use></svg>')
        index = {
            "close": icons_dir / "close.svg",
            "icon-close": icons_dir / "close.svg",
            "arrow": icons_dir / "arrow.svg",
            "icon-arrow": icons_dir / "arrow.svg",
        }

        report = await scan(index, tmp_path, "src/**/*.html")

        assert list(report.matches) == ["icon-arrow", "icon-close"]
        assert report.files_scanned == 2

    @pytest.mark.asyncio()
    async def test_scan_reads_binary_content(self, tmp_path: Path, icons_dir: Path):
        """Test undecodable bytes do not abort the scan."""
        (tmp_path / "page.html").write_bytes(b"\xff\xfe arrow \x80")

        report = await scan({"arrow": icons_dir / "arrow.svg"}, tmp_path, "*.html")

        assert report.matches == {"arrow": icons_dir / "arrow.svg"}

    @pytest.mark.asyncio()
    async def test_empty_index(self, tmp_path: Path, src_dir: Path):
        """Test an empty index yields an empty match set without reading files."""
        write_file(src_dir / "index.html", "arrow")
        calls: list[Path] = []

        report = await scan({}, tmp_path, "src/**/*.html", reader=make_reader({}, calls))

        assert report.matches == {}
        assert calls == []

    @pytest.mark.asyncio()
    async def test_file_deleted_after_enumeration(
        self, tmp_path: Path, icons_dir: Path, src_dir: Path, caplog: pytest.LogCaptureFixture
    ):
        """Test a project file removed before it is read is skipped with a warning."""
        kept = write_file(src_dir / "index.html", "arrow")
        deleted = src_dir / "draft.html"
        index = {"arrow": icons_dir / "arrow.svg"}

        with caplog.at_level(logging.WARNING, logger="sundrop.search.scanner"):
            report = await scan_files(index, [deleted, kept])

        assert report.matches == index
        assert f"Skipping unreadable project file {deleted}" in caplog.text
