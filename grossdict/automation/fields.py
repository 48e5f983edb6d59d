"""Placeholder field navigation.

Fields are bracket-delimited spans (``[___]``, ``[x]``, ``[]``). They are
derived from the text on every call and never cached, since any edit shifts
their offsets.
"""

import re
from dataclasses import dataclass

from grossdict.editor.buffer import TextBuffer
from grossdict.utils.constants import Constants

FIELD_PATTERN = re.compile(r"\[[^\]]*\]")


@dataclass(frozen=True)
class PlaceholderField:
    """Offsets of a bracketed field; ``end`` is exclusive."""

    start: int
    end: int

    def text(self, buffer_text: str) -> str:
        """Return the field's text including brackets."""
        return buffer_text[self.start : self.end]


def find_fields(text: str) -> list[PlaceholderField]:
    """Return every bracketed field in left-to-right order."""
    return [PlaceholderField(m.start(), m.end()) for m in FIELD_PATTERN.finditer(text)]


def next_field(text: str, from_offset: int) -> PlaceholderField | None:
    """Return the first field starting at or after ``from_offset``.

    Wraps to the first field of the buffer when none follows.

    Args:
        text: Buffer text
        from_offset: Offset to search from (usually the selection end)

    Returns:
        The target field, or None if the buffer has no fields
    """
    fields = find_fields(text)
    if not fields:
        return None
    for field in fields:
        if field.start >= from_offset:
            return field
    return fields[0]


def prev_field(text: str, from_offset: int) -> PlaceholderField | None:
    """Return the last field starting more than one character before ``from_offset``.

    The one-character slack skips the field the caret was just placed
    after. Wraps to the last field of the buffer when none precedes.
    """
    fields = find_fields(text)
    if not fields:
        return None
    for field in reversed(fields):
        if field.start < from_offset - 1:
            return field
    return fields[-1]


def is_inside_field(text: str, offset: int) -> bool:
    """Whether ``offset`` lies within the nearest enclosing bracket pair.

    Offsets after the opening bracket up to and including the closing
    bracket count; the offset right after the closing bracket does not.
    """
    left = text.rfind("[", 0, offset)
    if left < 0:
        return False
    right = text.find("]", left)
    if right < 0:
        return False
    return left < offset <= right


def field_index_at(text: str, offset: int) -> int:
    """Return the 1-based index of the field containing or following ``offset``.

    Wraps to 1 past the last field. Returns 0 when the buffer has no fields.
    """
    fields = find_fields(text)
    if not fields:
        return 0
    for index, field in enumerate(fields):
        if field.start <= offset <= field.end:
            return index + 1
    for index, field in enumerate(fields):
        if field.start >= offset:
            return index + 1
    return 1


def field_progress(text: str, offset: int) -> str:
    """Progress display such as ``"2 / 5"``; empty when there are no fields."""
    total = len(find_fields(text))
    if total == 0:
        return ""
    return f"{field_index_at(text, offset)} / {total}"


def select_field(buffer: TextBuffer, field: PlaceholderField) -> None:
    """Select exactly the field so the next keystroke replaces it."""
    buffer.set_selection(field.start, field.end)
    buffer.focus()


def has_unfilled_fields(text: str) -> bool:
    """Whether any bracketed field remains."""
    return FIELD_PATTERN.search(text) is not None


def is_complete(text: str) -> bool:
    """A report is complete when it has content and no unfilled fields."""
    return not has_unfilled_fields(text) and len(text.strip()) > Constants.MIN_COMPLETE_LENGTH
