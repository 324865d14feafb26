"""Custom exceptions for file editing errors.

This module provides a hierarchy of exception classes raised by the line-edit
primitives, the batch coordinator and the file collaborator. Every exception
carries a machine-readable ``code`` that toolsets copy into error responses,
and a user-facing message that tells the caller how to recover.
"""

REREAD_HINT = (
    "Please re-read the file with show_line_numbers=true to see the current content "
    "and update your request accordingly."
)


class FileEditorError(Exception):
    """Base exception for all file editor errors.

    This is the root of the exception hierarchy. All custom file editor
    exceptions should inherit from this class.
    """

    code = "file_editor_error"


class FileAccessError(FileEditorError):
    """Reading or writing a file failed after validation succeeded.

    Attributes:
        path: Absolute path of the file
        operation: "read" or "write"
        original_error: The underlying OSError or UnicodeError
    """

    code = "file_access_error"

    def __init__(self, path: str, operation: str, original_error: OSError | UnicodeError):
        self.path = path
        self.operation = operation
        self.original_error = original_error
        super().__init__(f'Error during {operation} of file "{path}": {original_error}')


class LineNotFoundError(FileEditorError):
    """A referenced line does not exist in the file."""

    code = "line_not_found"

    def __init__(self, path: str, line_number: int, total_lines: int):
        self.path = path
        self.line_number = line_number
        self.total_lines = total_lines
        super().__init__(
            f'Line {line_number} does not exist in file "{path}". '
            f"The file has {total_lines} lines. "
            "Please verify the line number and re-read the file with show_line_numbers=true "
            "to see the current content."
        )


class LineOutOfRangeError(FileEditorError):
    """A line range reaches past the end of the buffer."""

    code = "line_out_of_range"

    def __init__(self, line_start: int, line_end: int, total_lines: int):
        self.line_start = line_start
        self.line_end = line_end
        self.total_lines = total_lines
        super().__init__(
            f"Line range {line_start}-{line_end} is beyond file length ({total_lines} lines)."
        )


class InvalidRangeError(FileEditorError):
    """line_start is greater than line_end."""

    code = "invalid_range"

    def __init__(self, line_start: int, line_end: int):
        self.line_start = line_start
        self.line_end = line_end
        super().__init__("line_start must be less than or equal to line_end.")


def content_mismatch_message(path: str, line_number: int, expected: str, actual: str) -> str:
    """Build the message shared by single and batch content verification failures.

    Args:
        path: File the line belongs to
        line_number: 1-based line number that was checked
        expected: Normalized expected text
        actual: Normalized actual text

    Returns:
        Multi-line message with both normalized strings and a re-read hint
    """
    return (
        f'Line content verification failed for line {line_number} in "{path}".\n'
        f'Expected (normalized): "{expected}"\n'
        f'Actual (normalized): "{actual}"\n'
        f"{REREAD_HINT}"
    )


class ContentMismatchError(FileEditorError):
    """The text at a line does not match what the caller expected.

    Attributes:
        path: File the line belongs to
        line_number: 1-based line number
        expected: Normalized expected text
        actual: Normalized actual text
    """

    code = "content_mismatch"

    def __init__(self, path: str, line_number: int, expected: str, actual: str):
        self.path = path
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        super().__init__(content_mismatch_message(path, line_number, expected, actual))


class InvalidPatternError(FileEditorError):
    """A regular expression or replacement template could not be compiled."""

    code = "invalid_regex"

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f'Invalid regular expression "{pattern}": {reason}')


class NoMatchError(FileEditorError):
    """A regex substitution found nothing to replace."""

    code = "no_match"

    def __init__(self, path: str, pattern: str):
        self.path = path
        self.pattern = pattern
        super().__init__(f'No matches found for regex pattern "{pattern}" in file "{path}".')


class AmbiguousMatchError(FileEditorError):
    """A single-replacement substitution matched more than once.

    Attributes:
        count: Number of matches found
    """

    code = "multiple_matches"

    def __init__(self, path: str, pattern: str, count: int):
        self.path = path
        self.pattern = pattern
        self.count = count
        super().__init__(
            f'Multiple matches found ({count}) for regex pattern "{pattern}" in file "{path}", '
            "but multiple=false. Either set multiple=true or refine your regex to match only "
            "one occurrence."
        )


class OverlappingRangesError(FileEditorError):
    """Two edits in one batch target overlapping original line ranges.

    Raised before any edit is applied; the file is left untouched.

    Attributes:
        line_number: Start line of the first edit found to overlap its predecessor
    """

    code = "overlapping_ranges"

    def __init__(self, line_number: int):
        self.line_number = line_number
        super().__init__(
            f"Found overlapping ranges starting from line {line_number}. "
            "Please make sure the line ranges are mutually exclusive."
        )
