"""Pydantic models for file-editor configuration schema."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from file_editor.config.constants import (
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
    DEFAULT_MAX_READ_BYTES,
    DEFAULT_SERVER_NAME,
    DEFAULT_TRANSPORT,
)

# Module-level constants for validation
VALID_TRANSPORTS = {"stdio"}
VALID_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}


class ServerConfig(BaseModel):
    """MCP server configuration."""

    name: str = DEFAULT_SERVER_NAME
    transport: str = DEFAULT_TRANSPORT

    @field_validator("transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        """Validate transport name."""
        if v not in VALID_TRANSPORTS:
            raise ValueError(f"Invalid transport: {v}. Valid transports: {VALID_TRANSPORTS}")
        return v


class FilesystemConfig(BaseModel):
    """Filesystem access configuration for the tools."""

    workspace_root: Path | None = Field(
        default=None,
        description="Restrict every tool to paths under this directory. Unrestricted if not set.",
    )
    writes_enabled: bool = Field(
        default=True,
        description="Enable mutating tools (replace, delete, insert, multi-edit)",
    )
    max_read_bytes: int = Field(
        default=DEFAULT_MAX_READ_BYTES,
        gt=0,
        description="Maximum file size in bytes for read_file",
    )

    @field_validator("workspace_root")
    @classmethod
    def expand_workspace_root(cls, v: Path | None) -> Path | None:
        """Expand user home directory in workspace_root and resolve to absolute path."""
        if v is None:
            return None
        return Path(v).expanduser().resolve()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "info"
    log_dir: str = DEFAULT_LOG_DIR

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and lower-case the log level name."""
        level = v.lower()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Valid levels: {VALID_LOG_LEVELS}")
        return level

    @field_validator("log_dir")
    @classmethod
    def expand_log_dir(cls, v: str) -> str:
        """Expand user home directory in log_dir."""
        return str(Path(v).expanduser())


class FileEditorSettings(BaseModel):
    """Root configuration model for file-editor settings."""

    version: str = "1.0"
    server: ServerConfig = Field(default_factory=ServerConfig)
    filesystem: FilesystemConfig = Field(default_factory=FilesystemConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def model_dump_json_pretty(self, **kwargs: Any) -> str:
        """Dump model to pretty-printed JSON string."""
        return self.model_dump_json(indent=2, exclude_none=False, **kwargs)

    @classmethod
    def get_json_schema(cls) -> dict[str, Any]:
        """Get JSON schema for the settings model."""
        return cls.model_json_schema()

    @property
    def workspace_root(self) -> Path | None:
        return self.filesystem.workspace_root

    @property
    def writes_enabled(self) -> bool:
        return self.filesystem.writes_enabled

    @property
    def max_read_bytes(self) -> int:
        return self.filesystem.max_read_bytes

    @property
    def log_file(self) -> Path:
        """Full path of the server log file."""
        return Path(self.logging.log_dir).expanduser() / DEFAULT_LOG_FILE
