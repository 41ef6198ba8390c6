"""Git integration for gitwrap.

This package runs the git executable, parses its textual output into
records, and groups the common operations on GitRepository.
"""

from gitwrap.git.parsers import (
    LOG_FORMAT,
    LogEntry,
    StashEntry,
    parse_branches,
    parse_log,
    parse_log_line,
    parse_stash_line,
    parse_stashes,
    split_lines,
)
from gitwrap.git.repository import GitRepository, ResetMode
from gitwrap.git.runner import build_command, flatten_args, run_git_command
from gitwrap.git.utils import find_git_root, is_git_repository

__all__ = [
    # Main class
    "GitRepository",
    "ResetMode",
    # Records
    "LogEntry",
    "StashEntry",
    # Runner
    "build_command",
    "flatten_args",
    "run_git_command",
    # Parsers
    "LOG_FORMAT",
    "parse_branches",
    "parse_log",
    "parse_log_line",
    "parse_stash_line",
    "parse_stashes",
    "split_lines",
    # Utility functions
    "find_git_root",
    "is_git_repository",
]
