"""Tests for configuration loading."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from gitwrap.config import (
    GitSettings,
    _expand_env_vars,
    _transform_config_to_settings,
    get_settings,
    load_settings,
    reset_settings,
)
from gitwrap.config.settings import LogConfig
from gitwrap.errors import InvalidConfigError


class TestExpandEnvVars:
    """Tests for environment variable expansion."""

    def test_expand_simple_var(self, monkeypatch) -> None:
        """Test expanding a simple environment variable."""
        monkeypatch.setenv("TEST_VAR", "test_value")
        assert _expand_env_vars("${TEST_VAR}") == "test_value"

    def test_expand_missing_var(self) -> None:
        """Test expanding a missing environment variable returns None."""
        assert _expand_env_vars("${NONEXISTENT_GITWRAP_VAR}") is None

    def test_expand_in_nested_structures(self, monkeypatch) -> None:
        """Test expanding variables in dictionaries and lists."""
        monkeypatch.setenv("REPO_HOME", "/srv/repos")
        data = {"repository": "${REPO_HOME}/app", "default_args": ["-c", "x=${REPO_HOME}"]}
        result = _expand_env_vars(data)
        assert result["repository"] == "/srv/repos/app"
        assert result["default_args"] == ["-c", "x=/srv/repos"]


class TestTransformConfig:
    """Tests for mapping YAML documents onto settings fields."""

    def test_unknown_sections_dropped(self) -> None:
        result = _transform_config_to_settings({"executable": "/usr/bin/git", "other": 1})
        assert result == {"executable": "/usr/bin/git"}

    def test_empty_default_args_dropped(self) -> None:
        result = _transform_config_to_settings({"default_args": ["-c", None, "a=b"]})
        assert result["default_args"] == ["-c", "a=b"]


class TestGitSettings:
    """Tests for the settings model."""

    def test_defaults(self) -> None:
        settings = GitSettings()
        assert settings.executable
        assert settings.repository is None
        assert settings.default_args == []
        assert settings.log.level == "WARNING"
        assert settings.cwd is None

    def test_empty_executable_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GitSettings(executable="  ")

    def test_repository_expanded(self) -> None:
        settings = GitSettings(repository="~/projects/app")
        assert settings.repository == Path.home() / "projects" / "app"
        assert settings.cwd == str(Path.home() / "projects" / "app")

    def test_with_repository_copies(self, tmp_path) -> None:
        """Test with_repository leaves the original untouched."""
        base = GitSettings(executable="git", default_args=["-q"])
        bound = base.with_repository(tmp_path)

        assert bound.repository == tmp_path
        assert bound.default_args == ["-q"]
        assert base.repository is None

    def test_log_level_normalized(self) -> None:
        assert LogConfig(level="debug").level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            LogConfig(level="chatty")

    def test_env_vars(self, monkeypatch) -> None:
        """Test GITWRAP_* environment variables are read."""
        monkeypatch.setenv("GITWRAP_EXECUTABLE", "/opt/git")
        monkeypatch.setenv("GITWRAP_DEFAULT_ARGS", '["-c", "core.quotepath=off"]')
        monkeypatch.setenv("GITWRAP_LOG__LEVEL", "INFO")

        settings = GitSettings()

        assert settings.executable == "/opt/git"
        assert settings.default_args == ["-c", "core.quotepath=off"]
        assert settings.log.level == "INFO"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_load_from_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            """
executable: /usr/local/bin/git
repository: {repo}
default_args:
  - -c
  - color.ui=never
log:
  level: debug
""".format(repo=str(tmp_path).replace("\\", "/"))
        )

        settings = load_settings(config_path=config_path, force_reload=True)

        assert settings.executable == "/usr/local/bin/git"
        assert settings.repository == tmp_path
        assert settings.default_args == ["-c", "color.ui=never"]
        assert settings.log.level == "DEBUG"

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(config_path=tmp_path / "missing.yaml", force_reload=True)
        assert settings.default_args == []

    def test_empty_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("")
        settings = load_settings(config_path=config_path, force_reload=True)
        assert settings.repository is None

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- just\n- a list\n")

        with pytest.raises(InvalidConfigError):
            load_settings(config_path=config_path, force_reload=True)

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("executable: /from/file/git\n")
        monkeypatch.setenv("GITWRAP_EXECUTABLE", "/from/env/git")

        settings = load_settings(config_path=config_path, force_reload=True)

        assert settings.executable == "/from/env/git"

    def test_nested_env_overrides_file_section(self, tmp_path: Path, monkeypatch) -> None:
        """Test a nested GITWRAP_LOG__* variable beats the file's log section."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("log:\n  level: ERROR\n  file: ~/gitwrap.log\n")
        monkeypatch.setenv("GITWRAP_LOG__LEVEL", "DEBUG")

        settings = load_settings(config_path=config_path, force_reload=True)

        assert settings.log.level == "DEBUG"
        assert settings.log.file == "~/gitwrap.log"

    def test_lowercase_env_overrides_file(self, tmp_path: Path, monkeypatch) -> None:
        """Test environment names are matched case-insensitively."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text("executable: /file/git\n")
        monkeypatch.setenv("gitwrap_executable", "/env/git")

        settings = load_settings(config_path=config_path, force_reload=True)

        assert settings.executable == "/env/git"

    def test_cached(self, tmp_path: Path) -> None:
        """Test settings are cached until reset."""
        first = load_settings(config_path=tmp_path / "missing.yaml", force_reload=True)
        assert get_settings() is first

        reset_settings()
        assert load_settings(config_path=tmp_path / "missing.yaml") is not first
