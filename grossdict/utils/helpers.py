"""Shared utility functions."""

import os

from grossdict.utils.constants import Constants


def expand_file_path(filepath: str | None) -> str | None:
    """Expand user home directory in file path.

    Args:
        filepath: File path (may contain ~)

    Returns:
        Expanded file path string, or None if filepath is None
    """
    if not filepath:
        return None
    return os.path.expanduser(filepath)


def line_bounds(text: str, pos: int) -> tuple[int, int]:
    """Return the (start, end) offsets of the line containing ``pos``.

    ``end`` is the offset of the terminating newline, or ``len(text)``.
    """
    start = text.rfind("\n", 0, max(pos, 0)) + 1
    end = text.find("\n", pos)
    if end == -1:
        end = len(text)
    return start, end


def last_token(text: str) -> str:
    """Return the last whitespace-delimited token with trailing punctuation stripped."""
    words = text.split()
    if not words:
        return ""
    return words[-1].rstrip(Constants.TRAILING_PUNCTUATION)
