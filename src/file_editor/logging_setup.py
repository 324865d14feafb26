"""Logging configuration for the server process.

stdout carries the MCP protocol stream, so log records go to a file under
``logging.log_dir`` and never to the console.
"""

import logging
import os
from pathlib import Path

from file_editor.config.constants import ENV_LOG_LEVEL
from file_editor.config.schema import FileEditorSettings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(settings: FileEditorSettings | None = None, log_file: Path | None = None) -> str:
    """Setup logging to file (not console).

    Level comes from FILE_EDITOR_LOG_LEVEL, then settings, then INFO.

    Args:
        settings: File editor settings (optional, loaded with env overrides if not provided)
        log_file: Override for the log file location

    Returns:
        Path to log file as string

    Example:
        >>> setup_logging()
        '/Users/user/.file-editor/logs/file-editor.log'
    """
    if settings is None:
        from file_editor.config import load_settings

        settings = load_settings()

    if log_file is None:
        log_file = settings.log_file
    log_file.parent.mkdir(parents=True, exist_ok=True)

    log_level = (os.getenv(ENV_LOG_LEVEL) or settings.logging.level or "INFO").upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    logging.basicConfig(
        level=numeric_level,
        format=LOG_FORMAT,
        filename=str(log_file),
        filemode="a",
        force=True,
    )

    logger.info(f"Logging initialized at {log_level} to {log_file}")
    return str(log_file)
