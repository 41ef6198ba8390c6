"""Configuration management for gitwrap."""

import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml

from gitwrap.errors import InvalidConfigError

from .settings import GitSettings, LogConfig

# Cached instance used by the CLI
_settings: Optional[GitSettings] = None

# Default config location
CONFIG_DIR = Path.home() / ".gitwrap"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

SETTINGS_SECTIONS = ("executable", "repository", "default_args", "log")


def _expand_env_vars(value: Any) -> Any:
    """Recursively expand ${ENV_VAR} syntax in strings."""
    if isinstance(value, str):
        pattern = r"\$\{([^}]+)\}"
        matches = re.findall(pattern, value)
        for var_name in matches:
            env_value = os.environ.get(var_name, "")
            value = value.replace(f"${{{var_name}}}", env_value)
        return value if value else None
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


def _load_yaml_file(path: Path) -> dict:
    """Load a YAML file and return its contents."""
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise InvalidConfigError(str(path), type(content).__name__, "top level must be a mapping")
    return content


def _transform_config_to_settings(config: dict) -> dict:
    """Keep only the known sections, dropping unset values."""
    settings_dict = {}
    for section in SETTINGS_SECTIONS:
        if config.get(section) is not None:
            settings_dict[section] = config[section]
    if "default_args" in settings_dict:
        settings_dict["default_args"] = [a for a in settings_dict["default_args"] if a]
    return settings_dict


def load_settings(config_path: Optional[Path] = None, force_reload: bool = False) -> GitSettings:
    """
    Load settings with priority: env vars > config file > defaults.

    Args:
        config_path: Optional path to a custom config file
        force_reload: Force reload even if settings are cached

    Returns:
        GitSettings instance
    """
    global _settings

    if _settings is not None and not force_reload:
        return _settings

    config = _load_yaml_file(config_path or CONFIG_FILE)
    expanded = _expand_env_vars(config)
    settings_dict = _transform_config_to_settings(expanded)

    _settings = GitSettings(**settings_dict)
    return _settings


def get_settings() -> GitSettings:
    """Get the current settings instance, loading if necessary."""
    if _settings is None:
        return load_settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None


__all__ = [
    "GitSettings",
    "LogConfig",
    "get_settings",
    "load_settings",
    "reset_settings",
    "CONFIG_DIR",
    "CONFIG_FILE",
]
