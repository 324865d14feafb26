"""Batch edit coordinator.

Applies several line-range replacements to one file in a single pass. Every
edit addresses lines of the *original* file; edits applied earlier in the
batch change the line count, so each later edit is translated into working
buffer coordinates through a ledger of the shifts applied so far.

Processing model:

1. Read the file once into an immutable snapshot.
2. Sort edits by ``(line_start, line_end)``; reject the whole batch if any two
   ranges overlap (nothing is written).
3. For each edit in sorted order, validate it against the snapshot, translate
   its range, and splice the replacement into the working buffer. A failing
   edit is recorded and skipped; it never touches the buffer or the ledger.
4. Write the working buffer back exactly once.
5. Report outcomes in the order the caller submitted the edits.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from file_editor.editing.lines import join_lines, normalize_content, split_lines
from file_editor.exceptions import OverlappingRangesError, content_mismatch_message
from file_editor.utils.files import read_whole_file, write_whole_file

logger = logging.getLogger(__name__)


class EditRequest(BaseModel):
    """One line-range replacement, expressed against the original file."""

    model_config = ConfigDict(frozen=True)

    line_start: int = Field(ge=1, description="Starting line number (1-based) from original file")
    line_end: int = Field(ge=1, description="Ending line number (1-based) from original file")
    line_start_contents: str = Field(
        description="Expected content of the starting line from original file"
    )
    contents: str = Field(description="New content to replace the lines with")


@dataclass(frozen=True)
class ShiftRecord:
    """Line-count change produced by one applied edit."""

    original_start: int
    original_end: int
    shift: int


@dataclass
class EditOutcome:
    """Result of a single edit, indexed by the caller's submission order."""

    index: int
    succeeded: bool
    original_line_start: int
    original_line_end: int
    line_shift: int | None = None
    failure_reason: str | None = None

    def describe(self) -> str:
        """Render the outcome as one report line."""
        prefix = (
            f"Edit {self.index}: {'SUCCESS' if self.succeeded else 'FAILED'} - "
            f"lines {self.original_line_start}-{self.original_line_end}"
        )
        if self.succeeded:
            return f"{prefix} (shift: {format_shift(self.line_shift or 0)} lines)"
        return f"{prefix} - {self.failure_reason}"


@dataclass
class BatchEditResult:
    """Outcomes of a committed batch."""

    path: str
    outcomes: list[EditOutcome] = field(default_factory=list)
    final_line_count: int = 0

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failure_count(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.succeeded)

    @property
    def summary(self) -> str:
        return (
            f"Completed {self.success_count} successful edits and "
            f"{self.failure_count} failed edits in {self.path}."
        )

    def format_report(self) -> str:
        """Summary line followed by one line per edit in submission order."""
        if not self.outcomes:
            return self.summary
        return self.summary + "\n\n" + "\n".join(o.describe() for o in self.outcomes)

    def to_dict(self) -> dict:
        """Structured form used in tool responses."""
        return {
            "path": self.path,
            "successful": self.success_count,
            "failed": self.failure_count,
            "final_line_count": self.final_line_count,
            "outcomes": [
                {
                    "index": o.index,
                    "success": o.succeeded,
                    "line_start": o.original_line_start,
                    "line_end": o.original_line_end,
                    "shift": o.line_shift,
                    "error": o.failure_reason,
                }
                for o in self.outcomes
            ],
        }


def format_shift(shift: int) -> str:
    """Format a shift with an explicit plus sign for growth ("+2", "0", "-4")."""
    return f"+{shift}" if shift > 0 else str(shift)


def sort_edit_indices(edits: Sequence[EditRequest]) -> list[int]:
    """Submission indices ordered by ``(line_start, line_end)``; ties keep submission order."""
    return sorted(range(len(edits)), key=lambda i: (edits[i].line_start, edits[i].line_end))


def check_overlaps(ordered: Sequence[EditRequest]) -> None:
    """Reject a sorted batch whose ranges are not mutually exclusive.

    Raises:
        OverlappingRangesError: Naming the start line of the first offending edit
    """
    previous_end = 0
    for edit in ordered:
        if edit.line_start <= previous_end:
            raise OverlappingRangesError(edit.line_start)
        previous_end = edit.line_end


def translate_range(
    line_start: int, line_end: int, ledger: Sequence[ShiftRecord]
) -> tuple[int, int]:
    """Map an original 1-based range to 0-based working buffer indices.

    Sums the shift of every applied edit whose original start is at or
    before ``line_start``. With non-overlapping, ascending application this is
    every edit applied so far.
    """
    offset = sum(record.shift for record in ledger if record.original_start <= line_start)
    return line_start - 1 + offset, line_end - 1 + offset


class BatchEditCoordinator:
    """Applies one batch of edits to one file.

    Instances are single-use: create one per batch call. The coordinator owns
    the original snapshot and the working buffer for the duration of
    :meth:`run` and shares no state between calls.

    Example:
        >>> result = BatchEditCoordinator(Path("/tmp/notes.txt"), edits).run()
        >>> print(result.format_report())
    """

    def __init__(
        self,
        path: Path,
        edits: Sequence[EditRequest],
        reader: Callable[[Path], str] = read_whole_file,
        writer: Callable[[Path, str], None] = write_whole_file,
    ):
        """Initialize the coordinator.

        Args:
            path: Absolute path of an existing regular file
            edits: Edit requests in caller submission order
            reader: Whole-file reader (injectable for tests)
            writer: Whole-file writer (injectable for tests)
        """
        self.path = path
        self.edits = list(edits)
        self._read = reader
        self._write = writer

    def run(self) -> BatchEditResult:
        """Validate, apply and commit the batch.

        Returns:
            BatchEditResult with one outcome per submitted edit

        Raises:
            OverlappingRangesError: If any two ranges overlap (file untouched)
            FileAccessError: If reading or writing the file fails
        """
        original = tuple(split_lines(self._read(self.path)))

        order = sort_edit_indices(self.edits)
        check_overlaps([self.edits[i] for i in order])

        logger.info(
            f"Applying {len(self.edits)} edit(s) to {self.path} ({len(original)} lines)"
        )

        working = list(original)
        ledger: list[ShiftRecord] = []
        outcomes: dict[int, EditOutcome] = {}

        for index in order:
            edit = self.edits[index]
            reason = self._validate(edit, original)
            if reason is None:
                reason = self._apply(edit, working, ledger)

            if reason is None:
                outcomes[index] = EditOutcome(
                    index=index,
                    succeeded=True,
                    original_line_start=edit.line_start,
                    original_line_end=edit.line_end,
                    line_shift=ledger[-1].shift,
                )
            else:
                logger.debug(f"Edit {index} on {self.path} failed: {reason}")
                outcomes[index] = EditOutcome(
                    index=index,
                    succeeded=False,
                    original_line_start=edit.line_start,
                    original_line_end=edit.line_end,
                    failure_reason=reason,
                )

        self._write(self.path, join_lines(working))

        result = BatchEditResult(
            path=str(self.path),
            outcomes=[outcomes[i] for i in range(len(self.edits))],
            final_line_count=len(working),
        )
        logger.info(
            f"Batch on {self.path} finished: {result.success_count} succeeded, "
            f"{result.failure_count} failed"
        )
        return result

    def _validate(self, edit: EditRequest, original: Sequence[str]) -> str | None:
        """Check an edit against the original snapshot. Returns a failure reason or None."""
        total = len(original)
        if edit.line_start > total:
            return f"Line {edit.line_start} does not exist in the original file ({total} lines)."
        if edit.line_end > total:
            return f"Line {edit.line_end} does not exist in the original file ({total} lines)."
        if edit.line_start > edit.line_end:
            return "line_start must be less than or equal to line_end."

        actual = normalize_content(original[edit.line_start - 1])
        expected = normalize_content(edit.line_start_contents)
        if actual != expected:
            return content_mismatch_message(str(self.path), edit.line_start, expected, actual)
        return None

    def _apply(
        self, edit: EditRequest, working: list[str], ledger: list[ShiftRecord]
    ) -> str | None:
        """Splice an edit into the working buffer. Returns a failure reason or None."""
        current_start, current_end = translate_range(edit.line_start, edit.line_end, ledger)

        if current_start >= len(working):
            return (
                f"After previous edits, the target line range starting at original line "
                f"{edit.line_start} no longer exists in the file."
            )
        current_end = min(current_end, len(working) - 1)

        replacement = split_lines(edit.contents)
        shift = len(replacement) - (edit.line_end - edit.line_start + 1)
        working[current_start : current_end + 1] = replacement

        ledger.append(ShiftRecord(edit.line_start, edit.line_end, shift))
        return None
