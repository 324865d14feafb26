"""File Editor - line-anchored file editing tools served over MCP."""

from importlib.metadata import PackageNotFoundError, version

# Read version from package metadata (pyproject.toml)
try:
    __version__ = version("file-editor")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "0.0.0.dev"

from file_editor.editing import BatchEditCoordinator, BatchEditResult, EditRequest

__all__ = ["BatchEditCoordinator", "BatchEditResult", "EditRequest", "__version__"]
