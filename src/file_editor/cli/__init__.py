"""Command-line interface for File Editor."""

from file_editor.cli.app import app

__all__ = ["app"]
