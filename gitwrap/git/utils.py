"""Filesystem helpers for locating git repositories."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

# Layout of a bare repository, or of the inside of a .git directory
BARE_REPOSITORY_DIRS = ("info", "objects", "refs")
BARE_REPOSITORY_FILES = ("HEAD",)


def is_git_repository(path: Path | str) -> bool:
    """Check if a directory is a git repository.

    True when the directory holds a .git directory, or when it has the
    bare layout (info/, objects/, refs/ and a HEAD file). Does not run git.

    Args:
        path: Directory to check.

    Returns:
        True if path is a git repository.
    """
    path = Path(path)

    if (path / ".git").is_dir():
        return True

    return all((path / name).is_dir() for name in BARE_REPOSITORY_DIRS) and all(
        (path / name).is_file() for name in BARE_REPOSITORY_FILES
    )


def find_git_root(start_path: Path | str) -> Optional[Path]:
    """Find the root of a git repository.

    Walks up the directory tree from start_path looking for a repository.

    Args:
        start_path: Path to start searching from.

    Returns:
        Path to the repository root, or None if not in a git repository.
    """
    path = Path(start_path).resolve()

    for parent in [path] + list(path.parents):
        if is_git_repository(parent):
            return parent

    return None
