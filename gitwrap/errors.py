"""Centralized exception hierarchy for gitwrap.

Every error raised by the library derives from GitWrapError so callers can
catch broadly, while the concrete subclasses let them tell "expected"
failures (duplicate or missing entities) apart from real git failures.
"""

from __future__ import annotations

from typing import Any, Optional


class GitWrapError(Exception):
    """Base exception for all gitwrap errors.

    Attributes:
        message: Human-readable error message.
        code: Optional error code for programmatic handling.
        details: Optional dictionary with additional error context.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(GitWrapError):
    """Raised when there's a configuration problem."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            message=f"Invalid configuration for '{field}': {reason}",
            code="INVALID_CONFIG",
            details={"field": field, "value": str(value)[:100], "reason": reason},
        )


# =============================================================================
# Git Errors
# =============================================================================

class GitError(GitWrapError):
    """Base exception for git operation failures."""
    pass


class CommandError(GitError):
    """Raised when the git executable exits with a non-zero status."""

    def __init__(
        self,
        executable: str,
        argv: list[str],
        output: str,
        returncode: int,
    ):
        super().__init__(
            message=f"Error running command: {executable} {' '.join(argv)}\n{output}",
            code="COMMAND_FAILED",
            details={
                "executable": executable,
                "argv": list(argv),
                "returncode": returncode,
            },
        )
        self.executable = executable
        self.argv = list(argv)
        self.output = output
        self.returncode = returncode


class DuplicateEntityError(GitError):
    """Raised when creating a branch or tag that already exists."""

    def __init__(self, kind: str, name: str):
        super().__init__(
            message=f"{kind.capitalize()} already exists: {name}",
            code="DUPLICATE_ENTITY",
            details={"kind": kind, "name": name},
        )
        self.kind = kind
        self.name = name


class MissingEntityError(GitError):
    """Raised when removing an entity (e.g. a remote) that does not exist."""

    def __init__(self, kind: str, name: str):
        super().__init__(
            message=f"No such {kind}: {name}",
            code="MISSING_ENTITY",
            details={"kind": kind, "name": name},
        )
        self.kind = kind
        self.name = name


class RepositoryUninitializedError(GitError):
    """Raised when HEAD cannot be resolved, e.g. before the first commit."""

    def __init__(self, path: Optional[str] = None):
        details = {}
        if path:
            details["path"] = path
        super().__init__(
            message="Repository not initialized",
            code="REPOSITORY_UNINITIALIZED",
            details=details,
        )


class NotARepositoryError(GitError):
    """Raised when path is not a git repository."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Not a git repository: {path}",
            code="NOT_A_REPOSITORY",
            details={"path": path},
        )
