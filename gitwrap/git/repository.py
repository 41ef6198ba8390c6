"""Git repository operations for gitwrap."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal, Optional

from gitwrap.config.settings import GitSettings
from gitwrap.errors import (
    CommandError,
    DuplicateEntityError,
    MissingEntityError,
    RepositoryUninitializedError,
)
from gitwrap.git.parsers import (
    LOG_FORMAT,
    LogEntry,
    StashEntry,
    parse_branches,
    parse_log,
    parse_stashes,
    split_lines,
)
from gitwrap.git.runner import run_git_command
from gitwrap.git.utils import find_git_root, is_git_repository

logger = logging.getLogger(__name__)

__all__ = ["GitRepository", "ResetMode"]

ResetMode = Literal["soft", "mixed", "hard", "merge", "keep"]


class GitRepository:
    """Runs git operations against one working directory."""

    def __init__(
        self,
        path: Path | str | None = None,
        settings: Optional[GitSettings] = None,
    ):
        """Initialize a GitRepository.

        Args:
            path: Working directory; overrides settings.repository when given.
            settings: Executable and default arguments. Defaults are
                resolved from the environment when omitted.
        """
        settings = settings or GitSettings()
        if path is not None:
            settings = settings.with_repository(path)
        self.settings = settings

    @property
    def path(self) -> Path:
        """Directory git runs in."""
        if self.settings.repository is not None:
            return self.settings.repository
        return Path.cwd()

    @classmethod
    def find(
        cls,
        start_path: Path | str,
        settings: Optional[GitSettings] = None,
    ) -> Optional["GitRepository"]:
        """Find a git repository from a starting path.

        Args:
            start_path: Path to start searching from.
            settings: Settings for the returned repository.

        Returns:
            GitRepository instance, or None if not found.
        """
        root = find_git_root(start_path)
        if root:
            return cls(root, settings=settings)
        return None

    def _run(self, command: str, *args: Any) -> str:
        """Run a git command in this repository and return its raw output."""
        result = run_git_command(command, *args, settings=self.settings)
        return result.stdout or ""

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_repository(self) -> bool:
        """Check whether the working directory is itself a repository."""
        return is_git_repository(self.path)

    def is_reachable(self, remote: Optional[str] = None) -> bool:
        """Check whether a remote answers ls-remote.

        Args:
            remote: Remote name or URL; git's default remote when omitted.

        Returns:
            True if ls-remote exited with status zero, False otherwise,
            including when git itself could not be started.
        """
        try:
            result = run_git_command(
                "ls-remote", "--exit-code", remote, settings=self.settings, check=False
            )
        except CommandError:
            return False
        return result.returncode == 0

    def branch_exists(self, name: str) -> bool:
        return name in self.branches()

    def tag_exists(self, name: str) -> bool:
        return name in self.tags()

    def remote_exists(self, name: str) -> bool:
        return name in self.remotes()

    def on_branch(self, name: str) -> bool:
        """Check whether HEAD points at the given branch."""
        return self.current_branch() == name

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    def branches(self) -> list[str]:
        """Get local branch names."""
        return parse_branches(self._run("branch"))

    def tags(self) -> list[str]:
        return split_lines(self._run("tag"))

    def remotes(self) -> list[str]:
        return split_lines(self._run("remote"))

    def untracked_files(self) -> list[str]:
        """Get untracked files, honouring ignore rules."""
        return split_lines(self._run("ls-files", "--other", "--exclude-standard"))

    def staged_files(self) -> list[str]:
        """Get files staged in the index."""
        return split_lines(self._run("diff", "--cached", "--name-only"))

    def current_branch(self) -> str:
        """Get current branch name.

        Returns:
            Branch name, or "HEAD" when detached.

        Raises:
            RepositoryUninitializedError: If HEAD cannot be resolved.
        """
        try:
            return self._run("rev-parse", "--abbrev-ref", "HEAD").strip()
        except CommandError as e:
            raise RepositoryUninitializedError(str(self.path)) from e

    def log(self, ref: Optional[str] = None, limit: Optional[int] = None) -> list[LogEntry]:
        """Get commit history.

        A "|" inside a commit subject truncates that entry's message at the
        first "|", since the same character separates the fields.

        Args:
            ref: Branch, tag or commit to list from; HEAD when omitted.
            limit: Maximum number of commits; the whole history when omitted.

        Returns:
            List of LogEntry objects, newest first.
        """
        return parse_log(
            self._run("log", f"--format={LOG_FORMAT}", limit and f"--max-count={limit}", ref)
        )

    def stashes(self) -> list[StashEntry]:
        """List all stashes, newest first."""
        return parse_stashes(self._run("stash", "list"))

    def show(self, ref: str, path: Optional[str] = None) -> str:
        """Show a commit, or a file as of a commit.

        Args:
            ref: Commit reference.
            path: If given, show this file's contents at ref.

        Returns:
            Raw output of git show.
        """
        return self._run("show", f"{ref}:{path}" if path else ref)

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def create_branch(self, name: str) -> None:
        """Create a new branch at HEAD.

        Raises:
            DuplicateEntityError: If the branch already exists.
        """
        if self.branch_exists(name):
            raise DuplicateEntityError("branch", name)
        self._run("branch", name)

    def create_tag(self, name: str) -> None:
        """Create a lightweight tag at HEAD.

        Raises:
            DuplicateEntityError: If the tag already exists.
        """
        if self.tag_exists(name):
            raise DuplicateEntityError("tag", name)
        self._run("tag", name)

    def add(self, path: Optional[str] = None) -> None:
        """Stage a path, or everything when path is omitted."""
        self._run("add", path or ".")

    def commit(self, message: Optional[str] = None, *files: str) -> None:
        """Create a commit.

        Empty commits and empty messages are allowed.

        Args:
            message: Commit message.
            *files: Paths to commit; all tracked changes (-a) when omitted.
        """
        self._run(
            "commit",
            list(files) or "-a",
            "--allow-empty",
            "--allow-empty-message",
            message and ["--message", message],
        )

    def checkout(self, ref: str) -> None:
        self._run("checkout", ref)

    def clone(self, url: str, directory: Optional[str] = None) -> None:
        """Clone url into directory, relative to the working directory."""
        self._run("clone", url, directory)

    def init(self, directory: Optional[str] = None, bare: bool = False) -> None:
        self._run("init", bare and "--bare", directory)

    def fetch(self, remote: Optional[str] = None, ref: Optional[str] = None) -> None:
        self._run("fetch", remote, ref)

    def pull(self, remote: Optional[str] = None, ref: Optional[str] = None) -> None:
        self._run("pull", remote, ref)

    def push(self, remote: Optional[str] = None, ref: Optional[str] = None) -> None:
        self._run("push", remote, ref)

    def reset(self, commit: Optional[str] = None, mode: Optional[ResetMode] = None) -> None:
        """Reset HEAD, optionally with --soft, --mixed, --hard, ..."""
        self._run("reset", mode and f"--{mode}", commit)

    def rm(self, path: str, recursive: bool = False) -> None:
        self._run("rm", path, recursive and "-r")

    def remote_add(self, name: str, url: str) -> None:
        self._run("remote", "add", name, url)

    def remote_remove(self, name: str) -> None:
        """Remove a remote.

        Raises:
            MissingEntityError: If no remote has that name.
        """
        if not self.remote_exists(name):
            raise MissingEntityError("remote", name)
        self._run("remote", "remove", name)

    def stash(self, message: Optional[str] = None) -> Optional[str]:
        """Stash current changes.

        git exits with status zero when there is nothing to stash, so the
        stash list is compared before and after. A concurrent stash from
        another process can fool this check.

        Args:
            message: Optional stash message.

        Returns:
            Name of the new stash (e.g. "stash@{0}"), or None if nothing
            was stashed.
        """
        before = self.stashes()
        self._run("stash", "push", message and ["--message", message])
        after = self.stashes()

        if len(after) > len(before):
            logger.debug(f"Created {after[0].name}")
            return after[0].name
        return None

    def stash_pop(self, name: Optional[str] = None) -> None:
        self._run("stash", "pop", name)

    def stash_apply(self, name: Optional[str] = None) -> None:
        self._run("stash", "apply", name)

    def config(self, key: str, value: Optional[str] = None) -> Optional[str]:
        """Get or set a config value.

        Args:
            key: Config key, e.g. "user.name".
            value: If given, the value to set.

        Returns:
            The trimmed output (the value when reading), or None if git
            failed, e.g. because the key is not set.
        """
        try:
            return self._run("config", key, value).strip()
        except CommandError:
            logger.debug(f"git config {key} failed, treating as unset")
            return None
