"""Parsers for git's line-oriented output."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Field order must match LOG_FORMAT
LOG_SEPARATOR = "|"
LOG_FORMAT = LOG_SEPARATOR.join(["%H", "%an", "%ae", "%cn", "%ce", "%ad", "%s"])
LOG_FIELD_COUNT = 7

CURRENT_BRANCH_MARKER = "* "

# Format: stash@{0}: WIP on branch: message  /  stash@{0}: On branch: message
STASH_PATTERN = re.compile(r"^(?P<name>[^:]+): (?:WIP on|On) (?P<branch>[^:]+): (?P<message>.*)$")


@dataclass(frozen=True)
class LogEntry:
    """A single commit from git log."""

    commit: str
    author_name: str
    author_email: str
    committer_name: str
    committer_email: str
    date: str
    message: str

    @property
    def short_hash(self) -> str:
        return self.commit[:7]

    def one_line(self) -> str:
        """Get a one-line representation."""
        return f"{self.short_hash} {self.message[:60]}{'...' if len(self.message) > 60 else ''}"


@dataclass(frozen=True)
class StashEntry:
    """A single entry from git stash list.

    Fields are None when the line did not have the expected shape.
    """

    name: Optional[str] = None
    branch: Optional[str] = None
    message: Optional[str] = None


def split_lines(output: str) -> list[str]:
    """Split command output into trimmed, non-blank lines."""
    lines = []
    for line in output.split("\n"):
        line = line.strip()
        if line:
            lines.append(line)
    return lines


def parse_branches(output: str) -> list[str]:
    """Parse git branch output into branch names.

    The active branch is listed with a leading "* " which is removed.
    """
    branches = []
    for line in split_lines(output):
        if line.startswith(CURRENT_BRANCH_MARKER):
            line = line[len(CURRENT_BRANCH_MARKER):]
        branches.append(line)
    return branches


def parse_log_line(line: str, sep: str = LOG_SEPARATOR) -> Optional[LogEntry]:
    """Parse one line produced with LOG_FORMAT.

    The line is split on every separator, so a separator inside the
    subject cuts the message short at its first occurrence.

    Args:
        line: Line from git log with LOG_FORMAT.
        sep: Separator used in the format string.

    Returns:
        LogEntry, or None if the line has too few fields.
    """
    parts = line.strip().split(sep)
    if len(parts) < LOG_FIELD_COUNT:
        return None
    return LogEntry(*parts[:LOG_FIELD_COUNT])


def parse_log(output: str) -> list[LogEntry]:
    """Parse git log output produced with LOG_FORMAT."""
    entries = []
    for line in split_lines(output):
        entry = parse_log_line(line)
        if entry is None:
            logger.debug(f"Skipping malformed log line: {line!r}")
            continue
        entries.append(entry)
    return entries


def parse_stash_line(line: str) -> StashEntry:
    """Parse one line of git stash list output."""
    match = STASH_PATTERN.match(line)
    if not match:
        return StashEntry()
    return StashEntry(
        name=match.group("name"),
        branch=match.group("branch"),
        message=match.group("message"),
    )


def parse_stashes(output: str) -> list[StashEntry]:
    """Parse git stash list output, newest stash first."""
    return [parse_stash_line(line) for line in split_lines(output)]
