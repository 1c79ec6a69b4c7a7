"""File system abstraction for the sundrop sprite bundler.

Provides a consistent interface for the file operations the bundler performs:
reading icon and project files, listing icon files inside a source location,
and writing the finished sprite sheet atomically so an interrupted build never
leaves a truncated output behind.
"""

import os
import stat
import tempfile
from pathlib import Path

from sundrop.utils.path_utils import path_resolver

# Type aliases for clarity and documentation
PathLike = str | Path
FileContent = str | bytes


def read_text(file_path: PathLike, errors: str = "strict") -> str:
    """Read text content from a file.

    Args:
        file_path: Path to the file (string or Path object)
        errors: Decoding error policy passed to ``open``; project files are read
            with "replace" so binary content never aborts a scan

    Returns:
        The text content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        UnicodeDecodeError: If the file content cannot be decoded and errors is "strict"
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, encoding="utf-8", errors=errors) as f:
        return f.read()


def write_bytes(file_path: PathLike, content: bytes, make_dirs: bool = True) -> int:
    """Write binary content to a file.

    Args:
        file_path: Path to the file (string or Path object)
        content: Binary content to write
        make_dirs: Whether to create parent directories if they don't exist

    Returns:
        Number of bytes written

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)

    if make_dirs:
        path_resolver.ensure_dir_exists(normalized_path.parent)

    with open(normalized_path, "wb") as f:
        return f.write(content)


def dir_exists(dir_path: PathLike) -> bool:
    """Check if a directory exists.

    Args:
        dir_path: Path to the directory (string or Path object)

    Returns:
        True if the directory exists, False otherwise
    """
    normalized_path = path_resolver.normalize_path(dir_path)
    return normalized_path.is_dir()


def list_files(dir_path: PathLike, pattern: str = "*", recursive: bool = False) -> list[Path]:
    """List files in a directory matching a pattern, in sorted order.

    Args:
        dir_path: Path to the directory (string or Path object)
        pattern: Glob pattern to match file names
        recursive: Whether to search recursively

    Returns:
        Sorted list of Path objects for matching files (directories excluded)

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    normalized_path = path_resolver.normalize_path(dir_path)

    if not normalized_path.exists():
        raise FileNotFoundError(f"Directory not found: {normalized_path}")

    if not normalized_path.is_dir():
        raise NotADirectoryError(f"Not a directory: {normalized_path}")

    if recursive:
        paths = normalized_path.rglob(pattern)
    else:
        paths = normalized_path.glob(pattern)

    return sorted(p for p in paths if p.is_file())


def _target_mode(file_path: Path) -> int:
    """Permission bits for the written file: the existing mode, else 0o666 minus the umask."""
    try:
        return stat.S_IMODE(file_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write(file_path: PathLike, content: FileContent, make_dirs: bool = True) -> int:
    """Write to a file atomically by using a temporary file.

    The file is either completely written or left unchanged. A replaced file
    keeps its permission bits; a new file gets the default mode for the
    current umask rather than the private mode of the temporary file.

    Args:
        file_path: Path to the file (string or Path object)
        content: Content to write (string content is encoded as UTF-8)
        make_dirs: Whether to create parent directories if they don't exist

    Returns:
        Number of bytes written

    Raises:
        FileNotFoundError: If the parent directory does not exist and make_dirs is False
        PermissionError: If the file cannot be written due to permissions
    """
    normalized_path = path_resolver.normalize_path(file_path)
    data = content.encode("utf-8") if isinstance(content, str) else content

    if make_dirs:
        path_resolver.ensure_dir_exists(normalized_path.parent)

    # Temporary file in the target directory so os.replace stays on one filesystem
    fd, temp_name = tempfile.mkstemp(
        dir=normalized_path.parent, prefix=f".{normalized_path.name}.", suffix=".tmp"
    )
    temp_file = Path(temp_name)
    os.close(fd)

    try:
        written = write_bytes(temp_file, data, make_dirs=False)
        os.chmod(temp_file, _target_mode(normalized_path))
        os.replace(temp_file, normalized_path)
    except Exception:
        if temp_file.exists():
            temp_file.unlink()
        raise

    return written
