"""Read-only filesystem tools: reading, searching and listing.

Every tool takes absolute paths, validates them through the toolset's
``_resolve_path`` and reports failures as error responses. Line numbers in
requests and output are 1-based.
"""

import logging
import os
import re
import stat
from pathlib import Path
from typing import Annotated

from pydantic import Field

from file_editor.editing.lines import split_lines
from file_editor.exceptions import FileAccessError
from file_editor.tools.toolset import FileEditorToolset
from file_editor.utils.files import match_glob, read_whole_file

logger = logging.getLogger(__name__)


def format_match_blocks(
    lines: list[str], regex: re.Pattern, lines_before: int = 0, lines_after: int = 0
) -> list[str]:
    """Render one block per matching line with its surrounding context.

    Each block starts with ``Match at line N:``; context lines are prefixed
    with ``>`` for the matching line and a space otherwise.
    """
    blocks = []
    for index, line in enumerate(lines):
        if not regex.search(line):
            continue

        line_number = index + 1
        first = max(1, line_number - lines_before)
        last = min(len(lines), line_number + lines_after)

        context = "\n".join(
            f"{'>' if n == line_number else ' '} {n} | {lines[n - 1]}"
            for n in range(first, last + 1)
        )
        blocks.append(f"Match at line {line_number}:\n{context}")
    return blocks


class FileSystemTools(FileEditorToolset):
    """Tools for inspecting files and directories.

    Example:
        >>> tools = FileSystemTools(FileEditorSettings())
        >>> result = await tools.read_file("/home/user/notes.txt", show_line_numbers=True)
        >>> print(result["message"])
        1 | first line
        2 | second line
    """

    def get_tools(self) -> list:
        """Get list of filesystem tools.

        Returns:
            List of filesystem tool functions
        """
        return [
            self.read_file,
            self.search_file,
            self.list_files,
            self.search_directory,
        ]

    def _compile(self, pattern: str) -> re.Pattern | dict:
        try:
            return re.compile(pattern)
        except re.error as e:
            return self._create_error_response(
                error="invalid_regex",
                message=f'Invalid regular expression "{pattern}": {e}',
            )

    async def read_file(
        self,
        file_path: Annotated[str, Field(description="Absolute path to the file to read")],
        show_line_numbers: Annotated[
            bool, Field(description="Whether to prefix each line with its line number")
        ] = False,
        start_line: Annotated[
            int | None,
            Field(ge=1, description="Starting line number (1-based). Cannot be used with full=true"),
        ] = None,
        end_line: Annotated[
            int | None,
            Field(ge=1, description="Ending line number (1-based). Cannot be used with full=true"),
        ] = None,
        full: Annotated[
            bool | None,
            Field(description="Read the entire file. Cannot be used with start_line or end_line"),
        ] = None,
    ) -> dict:
        """Read the contents of a file. You can read the entire file or specific line ranges.

        Returns:
            Success response whose message is the requested text (optionally
            numbered as ``"N | line"``), with result:
            {
                "path": str,
                "start_line": int,
                "end_line": int,
                "total_lines": int,
                "content": str
            }
        """
        if full and (start_line is not None or end_line is not None):
            return self._create_error_response(
                error="invalid_arguments",
                message=(
                    'Cannot use "full" parameter together with "start_line" or "end_line". '
                    "Choose either full=true or specify line ranges."
                ),
            )
        if (start_line is None) != (end_line is None):
            return self._create_error_response(
                error="invalid_arguments",
                message='Both "start_line" and "end_line" must be provided together.',
            )
        if start_line is not None and end_line is not None and start_line > end_line:
            return self._create_error_response(
                error="invalid_range",
                message='"start_line" must be less than or equal to "end_line".',
            )

        resolved = self._resolve_path(file_path, "file_path")
        if isinstance(resolved, dict):
            return resolved

        try:
            file_size = resolved.stat().st_size
            if file_size > self.settings.max_read_bytes:
                return self._create_error_response(
                    error="file_too_large",
                    message=(
                        f"File size ({file_size} bytes) exceeds max read limit "
                        f'({self.settings.max_read_bytes} bytes): "{file_path}".'
                    ),
                )
            lines = split_lines(read_whole_file(resolved))
        except FileAccessError as e:
            return self._create_error_response(
                error=e.code, message=f'Error reading file "{file_path}": {e.original_error}'
            )
        except OSError as e:
            return self._create_error_response(
                error="os_error", message=f'Error reading file "{file_path}": {e}'
            )

        total_lines = len(lines)
        first = 1
        if start_line is not None and end_line is not None and not full:
            if start_line > total_lines:
                return self._create_error_response(
                    error="line_out_of_range",
                    message=f"Start line {start_line} is beyond the file length ({total_lines} lines).",
                )
            if end_line > total_lines:
                return self._create_error_response(
                    error="line_out_of_range",
                    message=f"End line {end_line} is beyond the file length ({total_lines} lines).",
                )
            first = start_line
            lines = lines[start_line - 1 : end_line]

        content = "\n".join(lines)
        if show_line_numbers:
            text = "\n".join(f"{first + i} | {line}" for i, line in enumerate(lines))
        else:
            text = content

        return self._create_success_response(
            result={
                "path": file_path,
                "start_line": first,
                "end_line": first + len(lines) - 1,
                "total_lines": total_lines,
                "content": content,
            },
            message=text,
        )

    async def search_file(
        self,
        file_path: Annotated[str, Field(description="Absolute path to the file")],
        regexp: Annotated[str, Field(description="Regular expression pattern to search for")],
        lines_before: Annotated[
            int, Field(ge=0, description="Number of lines to show before each match")
        ] = 0,
        lines_after: Annotated[
            int, Field(ge=0, description="Number of lines to show after each match")
        ] = 0,
    ) -> dict:
        """Search for regex patterns in a file and show matching lines with context.

        Returns:
            Success response with result {"path", "match_count"} and the match
            blocks (or a "No matches found" notice) as message
        """
        resolved = self._resolve_path(file_path, "file_path")
        if isinstance(resolved, dict):
            return resolved

        regex = self._compile(regexp)
        if isinstance(regex, dict):
            return regex

        try:
            lines = split_lines(read_whole_file(resolved))
        except FileAccessError as e:
            return self._create_error_response(
                error=e.code, message=f'Error searching file "{file_path}": {e.original_error}'
            )

        blocks = format_match_blocks(lines, regex, lines_before, lines_after)
        if not blocks:
            message = f'No matches found for pattern "{regexp}" in file "{file_path}".'
        else:
            message = "\n\n".join(blocks)

        return self._create_success_response(
            result={"path": file_path, "match_count": len(blocks)}, message=message
        )

    async def list_files(
        self,
        directory_path: Annotated[
            str, Field(description="Absolute path to the directory to list")
        ],
    ) -> dict:
        """List all files and subdirectories in a given directory.

        Returns:
            Success response with one ``[DIR] name`` or ``[FILE] name (N bytes)``
            line per entry as message, and result:
            {
                "path": str,
                "entries": [{"name": str, "type": "file" | "directory" | "other", "size": int | None}]
            }
        """
        resolved = self._resolve_path(directory_path, "directory_path", kind="directory")
        if isinstance(resolved, dict):
            return resolved

        entries = []
        lines = []
        try:
            for name in sorted(os.listdir(resolved)):
                stats = (resolved / name).stat()
                if stat.S_ISDIR(stats.st_mode):
                    entries.append({"name": name, "type": "directory", "size": None})
                    lines.append(f"[DIR] {name}")
                elif stat.S_ISREG(stats.st_mode):
                    entries.append({"name": name, "type": "file", "size": stats.st_size})
                    lines.append(f"[FILE] {name} ({stats.st_size} bytes)")
                else:
                    entries.append({"name": name, "type": "other", "size": None})
                    lines.append(f"[FILE] {name}")
        except PermissionError:
            return self._create_error_response(
                error="permission_denied",
                message=f'Permission denied reading directory "{directory_path}".',
            )
        except OSError as e:
            return self._create_error_response(
                error="os_error", message=f'Error listing directory "{directory_path}": {e}'
            )

        if not lines:
            message = f'Directory "{directory_path}" is empty.'
        else:
            message = "\n".join(lines)

        return self._create_success_response(
            result={"path": directory_path, "entries": entries}, message=message
        )

    async def search_directory(
        self,
        directory_path: Annotated[
            str, Field(description="Absolute path to the directory to search")
        ],
        regexp: Annotated[str, Field(description="Regular expression pattern to search for")],
        recursive: Annotated[
            bool, Field(description="Search recursively in subdirectories")
        ] = False,
        lines_before: Annotated[
            int, Field(ge=0, description="Number of lines to show before each match")
        ] = 0,
        lines_after: Annotated[
            int, Field(ge=0, description="Number of lines to show after each match")
        ] = 0,
        include: Annotated[
            str | None,
            Field(description='Glob pattern for files to include (e.g., "*.ts", "*.js")'),
        ] = None,
        exclude: Annotated[
            str | None, Field(description="Glob pattern for files/directories to exclude")
        ] = None,
    ) -> dict:
        """Search for regex patterns across all files in a directory.

        Include and exclude patterns are matched against bare file names.
        Directories matching ``exclude`` are not descended into. Files that
        cannot be read are reported as warnings and do not stop the search.

        Returns:
            Success response with result:
            {
                "path": str,
                "match_count": int,
                "files": [str],     # files with at least one match
                "warnings": [str]   # unreadable files
            }
        """
        resolved = self._resolve_path(directory_path, "directory_path", kind="directory")
        if isinstance(resolved, dict):
            return resolved

        regex = self._compile(regexp)
        if isinstance(regex, dict):
            return regex

        sections: list[str] = []
        matched_files: list[str] = []
        warnings: list[str] = []
        total_matches = 0

        def search_in_file(file: Path) -> None:
            nonlocal total_matches
            try:
                lines = split_lines(read_whole_file(file))
            except FileAccessError as e:
                warning = f"Warning: Could not read file {file}: {e.original_error}"
                warnings.append(warning)
                sections.append(warning)
                return

            blocks = format_match_blocks(lines, regex, lines_before, lines_after)
            if blocks:
                total_matches += len(blocks)
                matched_files.append(str(file))
                sections.append(f"File: {file}\n" + "\n\n".join(blocks))

        def walk(directory: Path) -> None:
            for name in sorted(os.listdir(directory)):
                item = directory / name
                if item.is_dir():
                    if recursive and not (exclude and match_glob(name, exclude)):
                        walk(item)
                elif item.is_file():
                    if match_glob(name, include) and not (exclude and match_glob(name, exclude)):
                        search_in_file(item)
                else:
                    logger.debug(f"Skipping {item}: not a regular file or directory")

        try:
            walk(resolved)
        except OSError as e:
            return self._create_error_response(
                error="os_error", message=f'Error searching directory "{directory_path}": {e}'
            )

        if total_matches == 0:
            message = f'No matches found for pattern "{regexp}" in directory "{directory_path}".'
        else:
            message = (
                f"Found {total_matches} match(es) in {len(matched_files)} file(s):\n\n"
                + "\n\n".join(sections)
            )

        return self._create_success_response(
            result={
                "path": directory_path,
                "match_count": total_matches,
                "files": matched_files,
                "warnings": warnings,
            },
            message=message,
        )
