"""Whole-file I/O and glob matching used by the editing tools.

Files are read and written with ``newline=""`` so no newline translation
happens: splitting on ``"\\n"`` and joining with ``"\\n"`` reproduces the
original bytes, including any ``"\\r"`` at the end of CRLF lines.
"""

import fnmatch
import logging
import os
import stat
import tempfile
from pathlib import Path

from file_editor.exceptions import FileAccessError

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"


def read_whole_file(path: Path) -> str:
    """Read a UTF-8 text file without newline translation.

    Args:
        path: Absolute path to an existing regular file

    Returns:
        Full file content

    Raises:
        FileAccessError: If the file cannot be read or is not valid UTF-8
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise FileAccessError(str(path), "read", e) from e


def write_whole_file(path: Path, content: str) -> None:
    """Replace a file's content atomically.

    The text goes to a temp file in the same directory, which is then
    renamed over ``path``. A failed write leaves the original untouched.

    Raises:
        FileAccessError: If the file cannot be written
    """
    temp_path = None
    try:
        temp_fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        with os.fdopen(temp_fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if path.exists():
            os.chmod(temp_path, stat.S_IMODE(path.stat().st_mode))
        os.replace(temp_path, path)
    except (OSError, UnicodeError) as e:
        if temp_path is not None and os.path.exists(temp_path):
            os.unlink(temp_path)
        logger.error(f"Failed to write {path}: {e}")
        raise FileAccessError(str(path), "write", e) from e


def match_glob(name: str, pattern: str | None) -> bool:
    """Match a bare file name against a glob pattern.

    ``*`` matches any run of characters and ``?`` a single character; the
    whole name must match. An empty pattern matches everything.
    """
    if not pattern:
        return True
    return fnmatch.fnmatchcase(name, pattern)
