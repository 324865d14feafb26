"""Tool implementations for File Editor."""

from file_editor.tools.editing import EditingTools
from file_editor.tools.filesystem import FileSystemTools
from file_editor.tools.toolset import FileEditorToolset

__all__ = ["FileEditorToolset", "FileSystemTools", "EditingTools"]
