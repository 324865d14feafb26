"""Single-range line-edit primitives.

A line buffer is the ``list[str]`` produced by splitting file text on ``"\\n"``.
Line numbers at this module's boundary are 1-based. Every primitive returns a
new list and leaves its input untouched; failures are raised as
``FileEditorError`` subclasses.
"""

import re
from collections.abc import Sequence
from typing import Literal

from file_editor.exceptions import (
    AmbiguousMatchError,
    ContentMismatchError,
    InvalidPatternError,
    InvalidRangeError,
    LineNotFoundError,
    LineOutOfRangeError,
    NoMatchError,
)
from file_editor.utils.files import LINE_SEPARATOR

InsertPosition = Literal["before", "after"]

_WHITESPACE_RUN = re.compile(r"\s+")


def split_lines(text: str) -> list[str]:
    """Split text into a line buffer. Empty text yields a single empty line."""
    return text.split(LINE_SEPARATOR)


def join_lines(lines: Sequence[str]) -> str:
    """Join a line buffer back into text; inverse of :func:`split_lines`."""
    return LINE_SEPARATOR.join(lines)


def normalize_content(text: str) -> str:
    """Trim surrounding whitespace and collapse inner whitespace runs to one space."""
    return _WHITESPACE_RUN.sub(" ", text.strip())


def verify_line_content(
    lines: Sequence[str], line_number: int, expected: str, path: str = ""
) -> str:
    """Check that ``line_number`` holds ``expected`` (whitespace-insensitive).

    Args:
        lines: Line buffer to check
        line_number: 1-based line number
        expected: Text the caller believes is on that line
        path: File path used in error messages

    Returns:
        The actual, un-normalized line

    Raises:
        LineNotFoundError: If the line does not exist
        ContentMismatchError: If the normalized texts differ
    """
    if line_number < 1 or line_number > len(lines):
        raise LineNotFoundError(path, line_number, len(lines))

    actual = lines[line_number - 1]
    normalized_actual = normalize_content(actual)
    normalized_expected = normalize_content(expected)
    if normalized_actual != normalized_expected:
        raise ContentMismatchError(path, line_number, normalized_expected, normalized_actual)
    return actual


def _check_range(lines: Sequence[str], start: int, end: int) -> None:
    if start < 1 or start > len(lines) or end > len(lines):
        raise LineOutOfRangeError(start, end, len(lines))
    if start > end:
        raise InvalidRangeError(start, end)


def delete_lines(lines: Sequence[str], start: int, end: int) -> list[str]:
    """Remove lines ``start`` through ``end`` inclusive.

    Raises:
        LineOutOfRangeError: If the range reaches outside the buffer
        InvalidRangeError: If ``start > end``
    """
    _check_range(lines, start, end)
    return [*lines[: start - 1], *lines[end:]]


def insert_lines(
    lines: Sequence[str], target_line: int, position: InsertPosition, text: str
) -> list[str]:
    """Insert the lines of ``text`` before or after ``target_line``.

    ``target_line == 0`` appends after the last line whatever ``position`` is.

    Raises:
        LineOutOfRangeError: If ``target_line`` is neither 0 nor a valid line
    """
    new_lines = split_lines(text)
    if target_line == 0:
        return [*lines, *new_lines]

    if target_line < 1 or target_line > len(lines):
        raise LineOutOfRangeError(target_line, target_line, len(lines))

    index = target_line if position == "after" else target_line - 1
    return [*lines[:index], *new_lines, *lines[index:]]


def replace_lines(lines: Sequence[str], start: int, end: int, text: str) -> list[str]:
    """Replace lines ``start`` through ``end`` inclusive with the lines of ``text``.

    Raises:
        LineOutOfRangeError: If the range reaches outside the buffer
        InvalidRangeError: If ``start > end``
    """
    _check_range(lines, start, end)
    return [*lines[: start - 1], *split_lines(text), *lines[end:]]


def regex_replace(
    text: str, pattern: str, replacement: str, allow_multiple: bool, path: str = ""
) -> tuple[str, int]:
    """Substitute every match of ``pattern`` in ``text``.

    Matches are counted before anything is replaced so that ambiguous
    single replacements can be refused.

    Args:
        text: Whole-file text
        pattern: Python regular expression
        replacement: ``re.sub`` template (supports ``\\1`` and ``\\g<name>``)
        allow_multiple: Permit more than one match
        path: File path used in error messages

    Returns:
        Tuple of (new text, number of matches replaced)

    Raises:
        InvalidPatternError: If the pattern or the template is invalid
        NoMatchError: If nothing matches
        AmbiguousMatchError: If several matches are found and allow_multiple is False
    """
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e

    count = sum(1 for _ in regex.finditer(text))
    if count == 0:
        raise NoMatchError(path, pattern)
    if count > 1 and not allow_multiple:
        raise AmbiguousMatchError(path, pattern, count)

    try:
        new_text = regex.sub(replacement, text)
    except re.error as e:
        raise InvalidPatternError(replacement, str(e)) from e
    return new_text, count
