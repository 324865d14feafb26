"""Configuration package for file-editor."""

from .manager import (
    ConfigurationError,
    deep_merge,
    get_config_path,
    load_config,
    load_settings,
    merge_with_env,
    save_config,
)
from .schema import FileEditorSettings, FilesystemConfig, LoggingConfig, ServerConfig

__all__ = [
    # Schema
    "FileEditorSettings",
    "FilesystemConfig",
    "LoggingConfig",
    "ServerConfig",
    # Manager
    "ConfigurationError",
    "get_config_path",
    "load_config",
    "load_settings",
    "save_config",
    "merge_with_env",
    "deep_merge",
]
