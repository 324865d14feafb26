"""Utility modules for File Editor."""

from file_editor.utils.files import match_glob, read_whole_file, write_whole_file
from file_editor.utils.responses import (
    create_error_response,
    create_success_response,
    is_error_response,
)

__all__ = [
    "read_whole_file",
    "write_whole_file",
    "match_glob",
    "create_success_response",
    "create_error_response",
    "is_error_response",
]
