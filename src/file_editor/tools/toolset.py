"""Base class for file-editor toolsets.

Toolsets encapsulate related tools with shared dependencies (the settings),
avoiding global state and enabling dependency injection for testing. The
base class also owns path validation, which every tool performs before it
touches the filesystem.
"""

import logging
import os
import stat
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any, Literal

from file_editor.config import FileEditorSettings
from file_editor.exceptions import FileEditorError
from file_editor.utils.responses import create_error_response, create_success_response

logger = logging.getLogger(__name__)

PathKind = Literal["file", "directory"]


class FileEditorToolset(ABC):
    """Base class for file-editor toolsets.

    Each toolset receives a FileEditorSettings instance, making it easy to
    swap in a sandboxed or read-only configuration in tests.

    Example:
        >>> class MyTools(FileEditorToolset):
        ...     def get_tools(self):
        ...         return [self.my_tool]
        ...
        ...     async def my_tool(self, file_path: str) -> dict:
        ...         resolved = self._resolve_path(file_path, "file_path")
        ...         if isinstance(resolved, dict):
        ...             return resolved
        ...         return self._create_success_response(
        ...             result=str(resolved), message="Tool executed successfully"
        ...         )
    """

    def __init__(self, settings: FileEditorSettings | None = None):
        """Initialize toolset with settings.

        Args:
            settings: File editor settings. Defaults to FileEditorSettings()
        """
        self.settings = settings if settings is not None else FileEditorSettings()

    @abstractmethod
    def get_tools(self) -> list[Callable]:
        """Get list of tool functions.

        Tools are async callables with ``Annotated`` parameters and docstrings;
        the server registers each under its method name.

        Returns:
            List of callable tool functions
        """
        pass

    def _create_success_response(self, result: Any, message: str = "") -> dict:
        """Create standardized success response.

        Args:
            result: Structured tool result
            message: Text returned to the client

        Returns:
            Structured response dict with success=True
        """
        return create_success_response(result, message)

    def _create_error_response(self, error: str, message: str) -> dict:
        """Create standardized error response.

        Tools return this instead of raising so that every failure reaches the
        client as a readable message.

        Args:
            error: Machine-readable error code (e.g., "content_mismatch")
            message: Human-friendly error message

        Returns:
            Structured response dict with success=False
        """
        return create_error_response(error, message)

    def _error_from(self, exc: FileEditorError) -> dict:
        """Convert a file editor exception into an error response."""
        return self._create_error_response(error=exc.code, message=str(exc))

    def _resolve_path(
        self, path: str, parameter_name: str, kind: PathKind = "file"
    ) -> dict | Path:
        """Validate a path parameter before any filesystem access.

        Checks, in order:
        1. The path is absolute
        2. It lies under workspace_root, when one is configured
        3. It exists and is accessible
        4. It is a regular file (or a directory, for ``kind="directory"``)

        Args:
            path: Path as provided by the caller
            parameter_name: Parameter name used in the error message
            kind: Expected kind of filesystem entry

        Returns:
            Path object if valid, or error dict if validation fails

        Example:
            >>> resolved = self._resolve_path("/tmp/notes.txt", "file_path")
            >>> if isinstance(resolved, dict):
            ...     return resolved  # Error response
        """
        if not os.path.isabs(path):
            logger.warning(f"Rejected relative {parameter_name}: {path}")
            return self._create_error_response(
                error="relative_path",
                message=(
                    f'The {parameter_name} must be an absolute path. You provided a relative path: "{path}". '
                    'Please provide the full absolute path (e.g., "/home/user/file.txt" on Linux/Mac '
                    'or "C:\\Users\\user\\file.txt" on Windows).'
                ),
            )

        requested = Path(path)

        workspace_root = self.settings.workspace_root
        if workspace_root is not None:
            try:
                resolved = requested.resolve()
            except (OSError, RuntimeError) as e:
                logger.error(f"Error resolving path {path}: {e}")
                return self._create_error_response(
                    error="os_error", message=f'Error resolving path "{path}": {e}'
                )
            if not resolved.is_relative_to(workspace_root):
                logger.warning(
                    f"Path outside workspace: {path} -> {resolved} (workspace: {workspace_root})"
                )
                return self._create_error_response(
                    error="path_outside_workspace",
                    message=f'The path "{path}" resolves outside the workspace "{workspace_root}".',
                )

        noun = "File" if kind == "file" else "Directory"
        try:
            mode = os.stat(requested).st_mode
        except (FileNotFoundError, NotADirectoryError):
            return self._create_error_response(
                error="not_found",
                message=(
                    f'{noun} not found: "{path}". '
                    f"Please verify that the {kind} exists and the path is correct."
                ),
            )
        except PermissionError:
            logger.warning(f"Permission denied for {path}")
            qualifier = "" if kind == "file" else "directory "
            return self._create_error_response(
                error="permission_denied",
                message=(
                    f'Permission denied: Cannot access {qualifier}"{path}". '
                    f"Please check {kind} permissions."
                ),
            )
        except OSError as e:
            return self._create_error_response(
                error="os_error", message=f'Error accessing {kind} "{path}": {e}'
            )

        if kind == "file" and not stat.S_ISREG(mode):
            return self._create_error_response(
                error="not_a_file",
                message=(
                    f'The path "{path}" exists but is not a file. '
                    "Please ensure you're providing the path to a file, not a directory."
                ),
            )
        if kind == "directory" and not stat.S_ISDIR(mode):
            return self._create_error_response(
                error="not_a_directory",
                message=(
                    f'The path "{path}" exists but is not a directory. '
                    "Please ensure you're providing the path to a directory."
                ),
            )

        logger.debug(f"Path resolved: {path}")
        return requested
