"""Line-edit primitives and the batch edit coordinator."""

from file_editor.editing.batch import (
    BatchEditCoordinator,
    BatchEditResult,
    EditOutcome,
    EditRequest,
    ShiftRecord,
    translate_range,
)
from file_editor.editing.lines import (
    InsertPosition,
    delete_lines,
    insert_lines,
    join_lines,
    normalize_content,
    regex_replace,
    replace_lines,
    split_lines,
    verify_line_content,
)

__all__ = [
    "BatchEditCoordinator",
    "BatchEditResult",
    "EditOutcome",
    "EditRequest",
    "ShiftRecord",
    "translate_range",
    "InsertPosition",
    "delete_lines",
    "insert_lines",
    "join_lines",
    "normalize_content",
    "regex_replace",
    "replace_lines",
    "split_lines",
    "verify_line_content",
]
