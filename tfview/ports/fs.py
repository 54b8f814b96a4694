"""File System port interface.

Defines abstract interface for the filesystem operations used to browse the
workspace and stage diff content.
"""

from pathlib import Path
from typing import Protocol


class FileSystem(Protocol):
    """Protocol for file system operations."""

    def list_dir(self, path: Path) -> list[tuple[str, bool]]:
        """List directory entries.

        Args:
            path: Directory to list.

        Returns:
            (name, is_directory) pairs.

        Raises:
            FileNotFoundInWorkspace: If the directory no longer exists.
            NoPermissions: If the directory cannot be read.
        """
        ...

    def read_text(self, path: Path) -> str:
        """Read a file as UTF-8 text.

        Raises:
            FileNotFoundInWorkspace: If the file doesn't exist.
        """
        ...

    def write_text(self, path: Path, content: str, overwrite: bool = True) -> None:
        """Write text to a file, creating parent directories.

        Raises:
            FileAlreadyExists: If the file exists and overwrite is False.
        """
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...

    def file_mtimes(self, root: Path, skip_dirs: frozenset[str] = frozenset()) -> dict[Path, float]:
        """Modification times of all files below a directory.

        Args:
            root: Directory to walk.
            skip_dirs: Directory names not descended into.

        Returns:
            Mapping of file path to modification time. Files that vanish
            during the walk are left out.
        """
        ...

    def temp_dir(self) -> Path:
        """Directory used to stage generated diff content."""
        ...
