"""Invocation of the git executable."""

from __future__ import annotations

import logging
import subprocess
from typing import Any, Iterable, Optional

from gitwrap.config.settings import GitSettings
from gitwrap.errors import CommandError

logger = logging.getLogger(__name__)


def flatten_args(args: Iterable[Any]) -> list[str]:
    """Flatten nested argument lists and drop falsy tokens.

    None, False, empty strings and empty lists never reach git; nested
    lists and tuples are spliced in place. Order of the remaining tokens
    is preserved.

    Args:
        args: Argument tokens, possibly nested.

    Returns:
        Flat list of string tokens.
    """
    flat: list[str] = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            flat.extend(flatten_args(arg))
        elif arg:
            flat.append(str(arg))
    return flat


def build_command(command: str, args: Iterable[Any], settings: GitSettings) -> list[str]:
    """Build the argument vector passed to the executable.

    Returns everything after the executable itself:
    ``--no-pager <command> <args...> <default args...>``.
    """
    if not command:
        raise ValueError("git command name cannot be empty")
    return ["--no-pager", command] + flatten_args(args) + flatten_args(settings.default_args)


def run_git_command(
    command: str,
    *args: Any,
    settings: Optional[GitSettings] = None,
    check: bool = True,
) -> subprocess.CompletedProcess:
    """Run a git command and return the result.

    Standard error is merged into standard output, so ``result.stdout``
    holds everything git printed.

    Args:
        command: Git subcommand, e.g. ``"branch"``.
        *args: Argument tokens; falsy ones are dropped, nested lists flattened.
        settings: Executable, working directory and default arguments.
        check: If True, raise CommandError on non-zero exit.

    Returns:
        CompletedProcess with the untrimmed captured output.

    Raises:
        CommandError: If check=True and git exits with a non-zero status, or
            whenever the executable cannot be started.
    """
    settings = settings or GitSettings()
    argv = build_command(command, args, settings)

    logger.debug(f"Running git command: {settings.executable} {' '.join(argv)}")

    try:
        result = subprocess.run(
            [settings.executable] + argv,
            cwd=settings.cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )
    except OSError as e:
        # Missing executable or working directory; 127 is the shell's "not found"
        logger.debug(f"Could not start {settings.executable}: {e}")
        raise CommandError(settings.executable, argv, str(e), 127) from e

    if check and result.returncode != 0:
        logger.debug(f"Git command exited with {result.returncode}: {' '.join(argv)}")
        raise CommandError(settings.executable, argv, result.stdout or "", result.returncode)

    return result
