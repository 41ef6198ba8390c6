"""gitwrap - a thin Python binding over the git executable."""

__version__ = "0.1.0"

from gitwrap.config import GitSettings
from gitwrap.errors import (
    CommandError,
    DuplicateEntityError,
    GitError,
    GitWrapError,
    MissingEntityError,
    NotARepositoryError,
    RepositoryUninitializedError,
)
from gitwrap.git import GitRepository, LogEntry, StashEntry, is_git_repository, run_git_command

__all__ = [
    "__version__",
    "GitSettings",
    "GitRepository",
    "LogEntry",
    "StashEntry",
    "is_git_repository",
    "run_git_command",
    "GitWrapError",
    "GitError",
    "CommandError",
    "DuplicateEntityError",
    "MissingEntityError",
    "NotARepositoryError",
    "RepositoryUninitializedError",
]
