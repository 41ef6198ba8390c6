"""Configuration settings models using Pydantic."""

import shutil
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


def _default_executable() -> str:
    """Resolve the git executable from PATH, falling back to plain 'git'."""
    return shutil.which("git") or "git"


class LogConfig(BaseModel):
    """Configuration for logging output."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def resolved_file(self) -> Optional[Path]:
        """Get the log file path with ~ expanded."""
        return Path(self.file).expanduser() if self.file else None


class GitSettings(BaseSettings):
    """Settings for invoking git.

    An instance is passed explicitly to every repository and runner call;
    the library never mutates it. GITWRAP_* environment variables take
    precedence over keyword arguments, including values from the config file.
    """

    model_config = SettingsConfigDict(
        env_prefix="GITWRAP_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    executable: str = Field(default_factory=_default_executable)
    repository: Optional[Path] = None
    default_args: list[str] = Field(default_factory=list)
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Let GITWRAP_* variables outrank values loaded from the config file."""
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("executable cannot be empty")
        return v.strip()

    @field_validator("repository")
    @classmethod
    def expand_repository(cls, v: Optional[Path]) -> Optional[Path]:
        return v.expanduser() if v is not None else None

    @property
    def cwd(self) -> Optional[str]:
        """Working directory for git invocations, None for the current one."""
        return str(self.repository) if self.repository is not None else None

    def with_repository(self, path: Path | str | None) -> "GitSettings":
        """Return a copy of these settings bound to another working directory."""
        repository = Path(path).expanduser() if path is not None else None
        return self.model_copy(update={"repository": repository})
