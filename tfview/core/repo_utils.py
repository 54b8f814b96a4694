"""Workspace discovery utilities.

Functions for finding the TFVC workspace root from any subdirectory.
"""

from pathlib import Path

TFVIEW_DIR = ".tfview"

# Metadata folder tf creates at the root of a local workspace
TFVC_LOCAL_WORKSPACE_DIR = "$tf"

WORKSPACE_MARKERS = (TFVIEW_DIR, TFVC_LOCAL_WORKSPACE_DIR)


def find_workspace_root(start_path: Path | None = None) -> Path | None:
    """Find the workspace root by walking up directories.

    Searches for a .tfview/ or $tf/ directory starting from start_path and
    walking up to the filesystem root.

    Args:
        start_path: Directory to start searching from. Defaults to CWD.

    Returns:
        Absolute path of the directory holding a marker, or None.
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while True:
        if any((current / marker).is_dir() for marker in WORKSPACE_MARKERS):
            return current

        parent = current.parent
        if parent == current:
            return None

        current = parent


def resolve_workspace(start_path: Path | None = None) -> tuple[Path, Path]:
    """Find the workspace root and its .tfview config directory.

    Server workspaces have no local marker, so the start directory is used
    when no marker is found.

    Args:
        start_path: Directory to start searching from. Defaults to CWD.

    Returns:
        Tuple of (workspace_root, config_dir). config_dir may not exist.
    """
    if start_path is None:
        start_path = Path.cwd()

    root = find_workspace_root(start_path) or start_path.resolve()
    return root, root / TFVIEW_DIR
