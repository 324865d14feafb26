"""Configuration file manager for loading, saving, and managing file-editor settings."""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from .constants import (
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    ENV_MAX_READ_BYTES,
    ENV_WORKSPACE_ROOT,
    ENV_WRITES_ENABLED,
)
from .schema import FileEditorSettings

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigurationError(Exception):
    """Raised when configuration operations fail."""

    pass


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Returns:
        Path to ~/.file-editor/settings.json
    """
    return Path.home() / ".file-editor" / "settings.json"


def load_config(config_path: Path | None = None) -> FileEditorSettings:
    """Load configuration from JSON file.

    Args:
        config_path: Optional path to config file. Defaults to ~/.file-editor/settings.json

    Returns:
        FileEditorSettings loaded from file, or default settings if file doesn't exist

    Raises:
        ConfigurationError: If file exists but is invalid JSON or fails validation

    Example:
        >>> settings = load_config()
        >>> settings.filesystem.writes_enabled
        True
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return FileEditorSettings()

    try:
        with open(config_path) as f:
            data = json.load(f)
        return FileEditorSettings(**data)

    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration file {config_path}: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed for {config_path}:\n{e}") from e
    except (OSError, TypeError) as e:
        raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e


def save_config(settings: FileEditorSettings, config_path: Path | None = None) -> None:
    """Save configuration to JSON file.

    Sets restrictive permissions (0o600) on POSIX systems.

    Args:
        settings: FileEditorSettings instance to save
        config_path: Optional path to config file. Defaults to ~/.file-editor/settings.json

    Raises:
        ConfigurationError: If save operation fails
    """
    if config_path is None:
        config_path = get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        old_umask = os.umask(0o077) if os.name != "nt" else None
        try:
            with open(config_path, "w") as f:
                f.write(settings.model_dump_json_pretty())

            if os.name != "nt":
                os.chmod(config_path, 0o600)
        finally:
            if old_umask is not None:
                os.umask(old_umask)

    except OSError as e:
        raise ConfigurationError(f"Failed to save configuration to {config_path}: {e}") from e


def merge_with_env() -> dict[str, Any]:
    """Collect environment variable overrides for the settings file.

    Environment variables take precedence over file settings. Values that
    cannot be parsed (e.g. a non-numeric FILE_EDITOR_MAX_READ_BYTES) are ignored.

    Returns:
        Nested dictionary of overrides, suitable for :func:`deep_merge`

    Example:
        >>> os.environ["FILE_EDITOR_WRITES_ENABLED"] = "false"
        >>> merge_with_env()
        {'filesystem': {'writes_enabled': False}}
    """
    env_overrides: dict[str, Any] = {}

    if os.getenv(ENV_WORKSPACE_ROOT):
        env_overrides.setdefault("filesystem", {})["workspace_root"] = os.getenv(
            ENV_WORKSPACE_ROOT
        )
    if os.getenv(ENV_WRITES_ENABLED):
        env_overrides.setdefault("filesystem", {})["writes_enabled"] = (
            os.getenv(ENV_WRITES_ENABLED, "true").lower() in _TRUE_VALUES
        )
    if os.getenv(ENV_MAX_READ_BYTES):
        try:
            env_overrides.setdefault("filesystem", {})["max_read_bytes"] = int(
                os.getenv(ENV_MAX_READ_BYTES, "")
            )
        except ValueError:
            pass

    if os.getenv(ENV_LOG_LEVEL):
        env_overrides.setdefault("logging", {})["level"] = os.getenv(ENV_LOG_LEVEL)
    if os.getenv(ENV_LOG_DIR):
        env_overrides.setdefault("logging", {})["log_dir"] = os.getenv(ENV_LOG_DIR)

    return env_overrides


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Override dictionary (takes precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(config_path: Path | None = None) -> FileEditorSettings:
    """Load settings from file and apply environment overrides.

    A ``.env`` file in the working directory is loaded first, so its values
    count as environment variables.

    Raises:
        ConfigurationError: If the file is invalid or the merged settings fail validation
    """
    load_dotenv(find_dotenv(usecwd=True))
    settings = load_config(config_path)

    overrides = merge_with_env()
    if not overrides:
        return settings

    merged = deep_merge(settings.model_dump(), overrides)
    try:
        return FileEditorSettings(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment override:\n{e}") from e
