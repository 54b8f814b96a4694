"""Local file system adapter.

Implements the FileSystem port using the standard library pathlib. OSError
values are mapped to the workspace filesystem error vocabulary so callers
see a small fixed set of failures.
"""

import errno
import os
import tempfile
from pathlib import Path

from tfview.domain.exceptions import (
    FileAlreadyExists,
    FileIsADirectory,
    FileNotFoundInWorkspace,
    NoPermissions,
)


def map_os_error(error: OSError, path: Path) -> Exception:
    """Map an OSError to the workspace filesystem error vocabulary.

    Args:
        error: Error raised by a filesystem call.
        path: Path the call was applied to.

    Returns:
        Matching domain error, or the original error if it has no mapping.
    """
    if error.errno == errno.ENOENT:
        return FileNotFoundInWorkspace(str(path))
    if error.errno == errno.EISDIR:
        return FileIsADirectory(str(path))
    if error.errno == errno.EEXIST:
        return FileAlreadyExists(str(path))
    if error.errno in (errno.EPERM, errno.EACCES):
        return NoPermissions(str(path))
    return error


class LocalFileSystem:
    """Local file system implementation using pathlib.

    This adapter implements the FileSystem port protocol for standard
    local file system operations.
    """

    def __init__(self, staging_dir: Path | None = None) -> None:
        """Initialize the adapter.

        Args:
            staging_dir: Directory for generated diff content. Defaults to
                a "tfview" folder in the system temp directory.
        """
        self._staging_dir = staging_dir

    def list_dir(self, path: Path) -> list[tuple[str, bool]]:
        """List directory entries as (name, is_directory) pairs.

        Raises:
            FileNotFoundInWorkspace: If the directory no longer exists.
            NoPermissions: If the directory cannot be read.
        """
        try:
            return [(entry.name, entry.is_dir()) for entry in path.iterdir()]
        except OSError as e:
            raise map_os_error(e, path) from e

    def read_text(self, path: Path) -> str:
        """Read a file as UTF-8 text.

        Raises:
            FileNotFoundInWorkspace: If the file doesn't exist.
            FileIsADirectory: If path is a directory.
        """
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise map_os_error(e, path) from e

    def write_text(self, path: Path, content: str, overwrite: bool = True) -> None:
        """Write text to a file, creating parent directories.

        Raises:
            FileAlreadyExists: If the file exists and overwrite is False.
            NoPermissions: If the file cannot be written.
        """
        mode = "w" if overwrite else "x"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open(mode, encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as e:
            raise map_os_error(e, path) from e

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        return path.exists()

    def file_mtimes(self, root: Path, skip_dirs: frozenset[str] = frozenset()) -> dict[Path, float]:
        """Modification times of all files below a directory."""
        mtimes: dict[Path, float] = {}
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [name for name in dirnames if name not in skip_dirs]
            for name in filenames:
                path = Path(dirpath) / name
                try:
                    mtimes[path] = path.stat().st_mtime
                except FileNotFoundError:
                    continue
        return mtimes

    def temp_dir(self) -> Path:
        """Directory used to stage generated diff content."""
        if self._staging_dir is None:
            return Path(tempfile.gettempdir()) / "tfview"
        return self._staging_dir
