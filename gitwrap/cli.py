"""CLI entry point for gitwrap."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gitwrap import __version__
from gitwrap.config import GitSettings, load_settings
from gitwrap.errors import GitWrapError, NotARepositoryError, RepositoryUninitializedError
from gitwrap.git import GitRepository, find_git_root, is_git_repository
from gitwrap.utils.logging import setup_logging

app = typer.Typer(
    name="gitwrap",
    help="Run common git operations and print their parsed results",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]gitwrap[/bold] version {__version__}")
        raise typer.Exit()


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Turn gitwrap errors into a red message and exit status 1."""
    try:
        yield
    except GitWrapError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        raise typer.Exit(1)


def _get_settings(ctx: typer.Context) -> GitSettings:
    return ctx.obj["settings"]


def _get_repo(ctx: typer.Context) -> GitRepository:
    """Get the repository selected by --repo, or the one around the cwd.

    Raises:
        NotARepositoryError: If no --repo was given and the cwd is not
            inside a repository.
    """
    settings = _get_settings(ctx)
    if settings.repository is not None:
        return GitRepository(settings=settings)

    root = find_git_root(Path.cwd())
    if root is None:
        raise NotARepositoryError(str(Path.cwd()))
    return GitRepository(root, settings=settings)


@app.callback()
def main(
    ctx: typer.Context,
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        "-C",
        help="Run git in this directory instead of the enclosing repository",
    ),
    git: Optional[str] = typer.Option(
        None,
        "--git",
        help="Path to the git executable",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every git invocation",
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """gitwrap - structured output from common git commands."""
    with _handle_errors():
        settings = load_settings(config_path=config, force_reload=config is not None)

    if git:
        settings = settings.model_copy(update={"executable": git})
    if repo is not None:
        settings = settings.with_repository(repo)

    setup_logging(
        level=getattr(logging, settings.log.level),
        log_file=settings.log.resolved_file,
        verbose=verbose,
    )

    ctx.obj = {"settings": settings}


@app.command()
def branches(ctx: typer.Context) -> None:
    """List local branches, marking the current one."""
    with _handle_errors():
        repo = _get_repo(ctx)
        names = repo.branches()
        try:
            current = repo.current_branch()
        except RepositoryUninitializedError:
            current = None

    for name in names:
        if name == current:
            console.print(f"[green]* {escape(name)}[/green]", highlight=False)
        else:
            console.print(f"  {name}", highlight=False, markup=False)


@app.command()
def tags(ctx: typer.Context) -> None:
    """List tags."""
    with _handle_errors():
        names = _get_repo(ctx).tags()
    for name in names:
        console.print(name, highlight=False, markup=False)


@app.command()
def remotes(ctx: typer.Context) -> None:
    """List remotes."""
    with _handle_errors():
        names = _get_repo(ctx).remotes()
    for name in names:
        console.print(name, highlight=False, markup=False)


@app.command()
def untracked(ctx: typer.Context) -> None:
    """List untracked files that are not ignored."""
    with _handle_errors():
        files = _get_repo(ctx).untracked_files()
    for path in files:
        console.print(path, highlight=False, markup=False)


@app.command()
def staged(ctx: typer.Context) -> None:
    """List files staged for the next commit."""
    with _handle_errors():
        files = _get_repo(ctx).staged_files()
    for path in files:
        console.print(path, highlight=False, markup=False)


@app.command("current-branch")
def current_branch(ctx: typer.Context) -> None:
    """Print the current branch."""
    with _handle_errors():
        name = _get_repo(ctx).current_branch()
    console.print(name, highlight=False, markup=False)


@app.command()
def log(
    ctx: typer.Context,
    ref: Optional[str] = typer.Argument(None, help="Branch, tag or commit to start from"),
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of commits to show"),
) -> None:
    """Show commit history."""
    with _handle_errors():
        entries = _get_repo(ctx).log(ref, limit=limit)

    if not entries:
        console.print("[dim]No commits found.[/dim]")
        return

    table = Table(title="Commits")
    table.add_column("Commit", style="cyan", no_wrap=True)
    table.add_column("Author", style="green")
    table.add_column("Date", style="yellow")
    table.add_column("Message")

    for entry in entries:
        table.add_row(entry.short_hash, escape(entry.author_name), entry.date, escape(entry.message))

    console.print(table)


@app.command()
def stashes(ctx: typer.Context) -> None:
    """List stashes."""
    with _handle_errors():
        entries = _get_repo(ctx).stashes()

    if not entries:
        console.print("[dim]No stashes.[/dim]")
        return

    table = Table(title="Stashes")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Branch", style="green")
    table.add_column("Message")

    for entry in entries:
        table.add_row(entry.name or "-", escape(entry.branch or "-"), escape(entry.message or "-"))

    console.print(table)


@app.command()
def branch(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the branch to create"),
) -> None:
    """Create a branch at HEAD."""
    with _handle_errors():
        _get_repo(ctx).create_branch(name)
    console.print(f"[green]Created branch {escape(name)}[/green]", highlight=False)


@app.command()
def tag(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the tag to create"),
) -> None:
    """Create a tag at HEAD."""
    with _handle_errors():
        _get_repo(ctx).create_tag(name)
    console.print(f"[green]Created tag {escape(name)}[/green]", highlight=False)


@app.command()
def commit(
    ctx: typer.Context,
    files: Optional[list[str]] = typer.Argument(None, help="Files to commit (default: all tracked changes)"),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Commit message"),
) -> None:
    """Commit changes."""
    with _handle_errors():
        repo = _get_repo(ctx)
        repo.commit(message, *(files or []))
        entries = repo.log("HEAD", limit=1)

    if entries:
        console.print(f"[green]{escape(entries[0].one_line())}[/green]", highlight=False)


@app.command()
def stash(
    ctx: typer.Context,
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Stash message"),
) -> None:
    """Stash working tree changes."""
    with _handle_errors():
        name = _get_repo(ctx).stash(message)

    if name is None:
        console.print("[dim]No local changes to save.[/dim]")
    else:
        console.print(f"[green]Saved {escape(name)}[/green]", highlight=False)


@app.command("config")
def config_value(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Config key, e.g. user.name"),
    value: Optional[str] = typer.Argument(None, help="Value to set"),
) -> None:
    """Get or set a git config value."""
    with _handle_errors():
        result = _get_repo(ctx).config(key, value)

    if result is None:
        console.print(f"[dim]{escape(key)} is not set[/dim]", highlight=False)
        raise typer.Exit(1)
    if result:
        console.print(result, highlight=False, markup=False)


@app.command()
def reachable(
    ctx: typer.Context,
    remote: Optional[str] = typer.Argument(None, help="Remote name or URL"),
) -> None:
    """Check whether a remote can be reached."""
    with _handle_errors():
        ok = _get_repo(ctx).is_reachable(remote)

    if ok:
        console.print("[green]reachable[/green]")
    else:
        console.print("[red]unreachable[/red]")
        raise typer.Exit(1)


@app.command("is-repo")
def is_repo(
    path: Path = typer.Argument(Path("."), help="Directory to check"),
) -> None:
    """Check whether a directory is a git repository."""
    if is_git_repository(path):
        console.print(f"[green]{escape(str(path))} is a git repository[/green]", highlight=False)
    else:
        console.print(f"[red]{escape(str(path))} is not a git repository[/red]", highlight=False)
        raise typer.Exit(1)


@app.command()
def settings(ctx: typer.Context) -> None:
    """Show current configuration."""
    current = _get_settings(ctx)

    console.print(Panel("[bold]Current Configuration[/bold]", border_style="blue"))
    console.print(f"  Executable:   {current.executable}", highlight=False, markup=False)
    console.print(f"  Repository:   {current.repository or '(current directory)'}", highlight=False, markup=False)
    console.print(f"  Default args: {' '.join(current.default_args) or '-'}", highlight=False, markup=False)
    console.print(f"  Log level:    {current.log.level}", highlight=False, markup=False)
