"""Configuration constants for file-editor.

Single source of truth for default configuration values. Kept apart from
schema.py and manager.py to avoid circular imports.
"""

# Default paths
DEFAULT_LOG_DIR = "~/.file-editor/logs"
DEFAULT_LOG_FILE = "file-editor.log"

# Server
DEFAULT_SERVER_NAME = "FileEditor"
DEFAULT_TRANSPORT = "stdio"

# Filesystem limits
DEFAULT_MAX_READ_BYTES = 10_485_760  # 10MB

# Environment variable names
ENV_WORKSPACE_ROOT = "FILE_EDITOR_WORKSPACE_ROOT"
ENV_WRITES_ENABLED = "FILE_EDITOR_WRITES_ENABLED"
ENV_MAX_READ_BYTES = "FILE_EDITOR_MAX_READ_BYTES"
ENV_LOG_LEVEL = "FILE_EDITOR_LOG_LEVEL"
ENV_LOG_DIR = "FILE_EDITOR_LOG_DIR"
