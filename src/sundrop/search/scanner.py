"""Reference scanner: finds which indexed icons a project actually uses.

Project files are enumerated from the configured glob in sorted order and
read in bounded concurrent batches. Each file is tokenized on its own, and the
claim step runs sequentially in file order, so the result does not depend on
the batch size:

* a token that is still an unmatched index name is removed from the
  remaining names;
* if its icon file has not been claimed by an earlier name, the token
  becomes the match key for that file (first occurrence wins, in
  file-enumeration order, then left to right within a file);
* once every index name has been seen, no further files are read;
* a file that cannot be read when its batch comes up is logged and
  treated as empty.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from sundrop.constants import FILE_READ_BATCH_SIZE
from sundrop.models.results import MatchSet
from sundrop.search.tokenizer import iter_tokens
from sundrop.utils import file_utils
from sundrop.utils.path_utils import glob_files

logger = logging.getLogger(__name__)

FileReader = Callable[[Path], Awaitable[str]]


async def read_project_file(path: Path) -> str:
    """Read a project file in a worker thread, replacing undecodable bytes."""
    return await asyncio.to_thread(file_utils.read_text, path, "replace")


async def read_or_skip(reader: FileReader, path: Path) -> str:
    """Read a project file, treating one that vanished or became unreadable as empty.

    Files can be saved or deleted between enumeration and reading.
    """
    try:
        return await reader(path)
    except OSError as e:
        logger.warning(f"Skipping unreadable project file {path}: {e}")
        return ""


@dataclass
class ScanState:
    """Accumulator shared across all files of one scan.

    Attributes:
        remaining: Index names not yet seen in any file
        claimed: Icon files already bundled under some name
        matches: Match key -> icon file, in claim order
        files_scanned: Number of files whose tokens were processed
    """

    remaining: set[str]
    claimed: set[Path] = field(default_factory=set)
    matches: MatchSet = field(default_factory=dict)
    files_scanned: int = 0

    @property
    def exhausted(self) -> bool:
        """True once every index name has been matched."""
        return not self.remaining

    def claim_tokens(self, tokens: Iterable[str], index: Mapping[str, Path]) -> None:
        """Apply the tokens of one file to the accumulator."""
        self.files_scanned += 1
        for token in tokens:
            if token not in self.remaining:
                continue

            icon_path = index[token]
            if icon_path not in self.claimed:
                self.claimed.add(icon_path)
                self.matches[token] = icon_path

            self.remaining.discard(token)
            if self.exhausted:
                return


@dataclass(frozen=True)
class ScanReport:
    """Matches found by a scan plus bookkeeping for logging and tests."""

    matches: MatchSet
    files_scanned: int
    files_total: int

    @property
    def stopped_early(self) -> bool:
        return self.files_scanned < self.files_total


def find_project_files(cwd: Path, search_pattern: str) -> list[Path]:
    """Enumerate the project files to scan.

    Args:
        cwd: Project directory the pattern is relative to
        search_pattern: Glob pattern with optional brace alternatives

    Returns:
        Absolute file paths in deterministic order.
    """
    return glob_files(cwd, search_pattern)


async def scan_files(
    index: Mapping[str, Path],
    file_paths: list[Path],
    batch_size: int = FILE_READ_BATCH_SIZE,
    reader: FileReader = read_project_file,
) -> ScanReport:
    """Scan the given files for references to index names.

    Args:
        index: Icon name -> icon path
        file_paths: Files to scan, in claim order
        batch_size: Number of files read concurrently
        reader: Coroutine returning a file's text

    Returns:
        The scan report.
    """
    state = ScanState(remaining=set(index))

    for start in range(0, len(file_paths), batch_size):
        if state.exhausted:
            break

        batch = file_paths[start : start + batch_size]
        contents = await asyncio.gather(*(read_or_skip(reader, path) for path in batch))

        for content in contents:
            if state.exhausted:
                break
            state.claim_tokens(iter_tokens(content), index)

    if state.exhausted and state.files_scanned < len(file_paths):
        logger.info(
            f"Early exit: all icons found after scanning {state.files_scanned} "
            f"of {len(file_paths)} files"
        )

    return ScanReport(state.matches, state.files_scanned, len(file_paths))


async def scan(
    index: Mapping[str, Path],
    cwd: Path,
    search_pattern: str,
    batch_size: int = FILE_READ_BATCH_SIZE,
    reader: FileReader = read_project_file,
) -> ScanReport:
    """Find the icons referenced by the project files matching search_pattern.

    Args:
        index: Icon name -> icon path
        cwd: Project directory
        search_pattern: Glob of files to scan
        batch_size: Number of files read concurrently
        reader: Coroutine returning a file's text

    Returns:
        The scan report; its matches map each matched name to its icon path,
        with every icon path appearing at most once.
    """
    started = time.perf_counter()
    file_paths = await asyncio.to_thread(find_project_files, cwd, search_pattern)

    if not index:
        logger.warning("Icon index is empty, nothing to scan for")
        return ScanReport({}, 0, len(file_paths))

    report = await scan_files(index, file_paths, batch_size, reader)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"Scanned {report.files_scanned} files in {elapsed_ms:.1f}ms")
    return report
