"""Mutating tools: regex replacement and line-anchored edits.

Line-based tools require the caller to echo the current text of the line
they target (``line_start_contents`` / ``line_contents``). The echo is
compared after whitespace normalisation, which protects against edits based
on a stale view of the file.
"""

import logging
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field

from file_editor.editing.batch import BatchEditCoordinator, EditRequest
from file_editor.editing.lines import (
    delete_lines,
    insert_lines,
    join_lines,
    regex_replace,
    replace_lines,
    split_lines,
    verify_line_content,
)
from file_editor.exceptions import FileAccessError, FileEditorError
from file_editor.tools.toolset import FileEditorToolset
from file_editor.utils.files import read_whole_file, write_whole_file

logger = logging.getLogger(__name__)


class EditingTools(FileEditorToolset):
    """Tools that modify files in place.

    All tools here are refused with ``writes_disabled`` when the settings
    disable writes.

    Example:
        >>> tools = EditingTools(FileEditorSettings())
        >>> result = await tools.delete_from_file("/tmp/a.txt", 2, 3, "second line")
        >>> result["message"]
        'Successfully deleted lines 2-3 from "/tmp/a.txt".'
    """

    def get_tools(self) -> list:
        """Get list of editing tools.

        Returns:
            List of editing tool functions
        """
        return [
            self.replace_in_file,
            self.delete_from_file,
            self.insert_into_file,
            self.replace_lines_in_file,
            self.multireplace_lines_in_file,
        ]

    def _prepare(self, file_path: str) -> dict | Path:
        """Check that writes are enabled and validate the target file."""
        if not self.settings.writes_enabled:
            return self._create_error_response(
                error="writes_disabled",
                message=(
                    "Filesystem writes are disabled. "
                    "Set filesystem.writes_enabled=true in configuration."
                ),
            )
        return self._resolve_path(file_path, "file_path")

    def _failure(self, exc: FileEditorError, action: str, file_path: str) -> dict:
        """Error response for a failed edit; I/O failures name the action attempted."""
        if isinstance(exc, FileAccessError):
            return self._create_error_response(
                error=exc.code, message=f'Error {action} file "{file_path}": {exc.original_error}'
            )
        return self._error_from(exc)

    async def replace_in_file(
        self,
        file_path: Annotated[str, Field(description="Absolute path to the file")],
        regex_source: Annotated[
            str, Field(description="Regular expression pattern to search for")
        ],
        target: Annotated[str, Field(description="String to replace matches with")],
        multiple: Annotated[
            bool,
            Field(
                description="Allow multiple replacements. If false, fails if multiple matches found."
            ),
        ] = False,
    ) -> dict:
        """Replace all occurrences of a regex pattern with a target string in a file.

        ``target`` may reference groups as ``\\1`` or ``\\g<name>``.
        """
        resolved = self._prepare(file_path)
        if isinstance(resolved, dict):
            return resolved

        try:
            content = read_whole_file(resolved)
            new_content, count = regex_replace(
                content, regex_source, target, multiple, path=file_path
            )
            write_whole_file(resolved, new_content)
        except FileEditorError as e:
            return self._failure(e, "performing replacement in", file_path)

        logger.info(f"Replaced {count} match(es) of {regex_source!r} in {file_path}")
        return self._create_success_response(
            result={"path": file_path, "replacements": count},
            message=(
                f'Successfully replaced {count} occurrence(s) of "{regex_source}" '
                f'with "{target}" in "{file_path}".'
            ),
        )

    async def delete_from_file(
        self,
        file_path: Annotated[str, Field(description="Absolute path to the file")],
        line_start: Annotated[int, Field(ge=1, description="Starting line number (1-based)")],
        line_end: Annotated[int, Field(ge=1, description="Ending line number (1-based)")],
        line_start_contents: Annotated[
            str,
            Field(description="Expected content of the starting line (used for verification)"),
        ],
    ) -> dict:
        """Delete content from a file between specified line numbers."""
        resolved = self._prepare(file_path)
        if isinstance(resolved, dict):
            return resolved

        try:
            lines = split_lines(read_whole_file(resolved))
            verify_line_content(lines, line_start, line_start_contents, path=file_path)
            new_lines = delete_lines(lines, line_start, line_end)
            write_whole_file(resolved, join_lines(new_lines))
        except FileEditorError as e:
            return self._failure(e, "deleting content from", file_path)

        logger.info(f"Deleted lines {line_start}-{line_end} from {file_path}")
        return self._create_success_response(
            result={"path": file_path, "total_lines": len(new_lines)},
            message=f'Successfully deleted lines {line_start}-{line_end} from "{file_path}".',
        )

    async def insert_into_file(
        self,
        file_path: Annotated[str, Field(description="Absolute path to the file")],
        line_number: Annotated[
            int,
            Field(ge=0, description="Line number to insert at (1-based). Use 0 to append to end."),
        ],
        line_contents: Annotated[
            str, Field(description="Expected content of the target line (used for verification)")
        ],
        where: Annotated[
            Literal["before", "after"],
            Field(description="Whether to insert before or after the target line"),
        ],
        contents: Annotated[str, Field(description="Content to insert")],
    ) -> dict:
        """Insert content into a file at a specific line position.

        With ``line_number=0`` the content is appended and ``line_contents``
        is not checked.
        """
        resolved = self._prepare(file_path)
        if isinstance(resolved, dict):
            return resolved

        try:
            lines = split_lines(read_whole_file(resolved))
            if line_number != 0:
                verify_line_content(lines, line_number, line_contents, path=file_path)
            new_lines = insert_lines(lines, line_number, where, contents)
            write_whole_file(resolved, join_lines(new_lines))
        except FileEditorError as e:
            return self._failure(e, "inserting content into", file_path)

        position = "end of file" if line_number == 0 else f"{where} line {line_number}"
        logger.info(f"Inserted content at {position} in {file_path}")
        return self._create_success_response(
            result={"path": file_path, "total_lines": len(new_lines)},
            message=f'Successfully inserted content {position} in "{file_path}".',
        )

    async def replace_lines_in_file(
        self,
        file_path: Annotated[str, Field(description="Absolute path to the file")],
        line_start: Annotated[int, Field(ge=1, description="Starting line number (1-based)")],
        line_end: Annotated[int, Field(ge=1, description="Ending line number (1-based)")],
        line_start_contents: Annotated[
            str,
            Field(description="Expected content of the starting line (used for verification)"),
        ],
        contents: Annotated[str, Field(description="New content to replace the lines with")],
    ) -> dict:
        """Replace content between specific line numbers in a file."""
        resolved = self._prepare(file_path)
        if isinstance(resolved, dict):
            return resolved

        try:
            lines = split_lines(read_whole_file(resolved))
            verify_line_content(lines, line_start, line_start_contents, path=file_path)
            new_lines = replace_lines(lines, line_start, line_end, contents)
            write_whole_file(resolved, join_lines(new_lines))
        except FileEditorError as e:
            return self._failure(e, "replacing content in", file_path)

        logger.info(f"Replaced lines {line_start}-{line_end} in {file_path}")
        return self._create_success_response(
            result={"path": file_path, "total_lines": len(new_lines)},
            message=f'Successfully replaced lines {line_start}-{line_end} in "{file_path}".',
        )

    async def multireplace_lines_in_file(
        self,
        file_path: Annotated[str, Field(description="Absolute path to the file")],
        edits: Annotated[
            list[EditRequest], Field(description="Array of edit operations to perform")
        ],
    ) -> dict:
        """Replace multiple line ranges in a file. All line numbers and content refer to the original file state.

        Ranges must not overlap. Edits that fail validation are reported and
        skipped; the others are applied and the file is written once.
        """
        resolved = self._prepare(file_path)
        if isinstance(resolved, dict):
            return resolved

        requests = [
            edit if isinstance(edit, EditRequest) else EditRequest.model_validate(edit)
            for edit in edits
        ]

        try:
            result = BatchEditCoordinator(resolved, requests).run()
        except FileEditorError as e:
            return self._failure(e, "performing multi-edit in", file_path)

        return self._create_success_response(
            result=result.to_dict(), message=result.format_report()
        )
