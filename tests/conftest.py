"""Pytest configuration and fixtures for gitwrap tests."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Generator

import pytest

from gitwrap.config import GitSettings, reset_settings
from gitwrap.git import GitRepository


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from cached settings and GITWRAP_* variables."""
    for key in list(os.environ):
        if key.upper().startswith("GITWRAP_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings(tmp_path: Path) -> GitSettings:
    """Settings bound to a temporary working directory."""
    return GitSettings(executable="git", repository=tmp_path)


@pytest.fixture
def fake_repo(tmp_path: Path) -> Path:
    """A directory that looks like a repository on disk."""
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepository:
    """A real, freshly initialized repository with one commit."""
    path = tmp_path / "repo"
    path.mkdir()
    env_args = ["-c", "user.name=Test User", "-c", "user.email=test@example.com"]

    subprocess.run(["git", "init", "-q"], cwd=path, check=True)
    (path / "README.md").write_text("hello\n")
    subprocess.run(["git", "add", "README.md"], cwd=path, check=True)
    subprocess.run(
        ["git", *env_args, "commit", "-q", "-m", "Initial commit"],
        cwd=path,
        check=True,
    )
    subprocess.run(["git", "config", "user.name", "Test User"], cwd=path, check=True)
    subprocess.run(["git", "config", "user.email", "test@example.com"], cwd=path, check=True)

    return GitRepository(path, settings=GitSettings(executable=shutil.which("git") or "git"))
