"""Snapshot history tape with undo, redo and point-in-time restore.

The tape is a linear list of buffer snapshots and a position index. Recording
while the index is behind the end discards the redo branch; identical
consecutive snapshots are never stored; the oldest entries are evicted once
the tape reaches its limit.
"""

from datetime import datetime
from enum import Enum

from loguru import logger
from pydantic import BaseModel, Field

from grossdict.editor.buffer import TextBuffer
from grossdict.utils.constants import Constants


class SnapshotLabel(Enum):
    """Why a snapshot was taken."""

    TYPED = "typed"
    WORD_BOUNDARY = "word"
    PASTE = "paste"
    CLIPBOARD_PASTE = "clipboard"
    BLOCK_INSERT = "block"
    DRAFT_LOADED = "draft"
    PRE_UNDO = "pre-undo"
    NEW_CASE = "new case"
    NEW_SPECIMEN = "new specimen"

    @property
    def display_name(self) -> str:
        """Label shown in the history browser."""
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    SnapshotLabel.TYPED: "typed",
    SnapshotLabel.WORD_BOUNDARY: "word boundary",
    SnapshotLabel.PASTE: "paste",
    SnapshotLabel.CLIPBOARD_PASTE: "clipboard paste",
    SnapshotLabel.BLOCK_INSERT: "block insert",
    SnapshotLabel.DRAFT_LOADED: "draft loaded",
    SnapshotLabel.PRE_UNDO: "pre-undo",
    SnapshotLabel.NEW_CASE: "new case",
    SnapshotLabel.NEW_SPECIMEN: "new specimen",
}


class HistorySnapshot(BaseModel):
    """One entry on the history tape."""

    text: str
    label: SnapshotLabel
    timestamp: datetime = Field(default_factory=datetime.now)


class DiffStats(BaseModel):
    """Characters added and removed between two snapshots."""

    added: int
    removed: int


def diff_stats(old_text: str, new_text: str) -> DiffStats:
    """Estimate added and removed characters between two texts.

    Trims the common prefix and common suffix and reports the length of the
    unmatched middle of each text. This is O(n) and good enough for a
    "+12 -3" summary; it is not a minimal diff (a transposition is reported
    as both an addition and a removal).
    """
    start = 0
    limit = min(len(old_text), len(new_text))
    while start < limit and old_text[start] == new_text[start]:
        start += 1
    old_end = len(old_text)
    new_end = len(new_text)
    while old_end > start and new_end > start and old_text[old_end - 1] == new_text[new_end - 1]:
        old_end -= 1
        new_end -= 1
    return DiffStats(added=new_end - start, removed=old_end - start)


class HistoryTape:
    """Ordered buffer snapshots plus a position index (-1 when empty).

    Attributes:
        buffer: Host buffer accessor
        limit: Maximum number of snapshots kept
    """

    def __init__(self, buffer: TextBuffer, limit: int = Constants.HISTORY_LIMIT) -> None:
        self.buffer = buffer
        self.limit = limit
        self._entries: list[HistorySnapshot] = []
        self._index = -1
        self._restoring = False

    @property
    def entries(self) -> list[HistorySnapshot]:
        """Snapshots, oldest first."""
        return list(self._entries)

    @property
    def index(self) -> int:
        """Position of the current entry, -1 when empty."""
        return self._index

    @property
    def restoring(self) -> bool:
        """True while a snapshot is being written back into the buffer."""
        return self._restoring

    @property
    def current(self) -> HistorySnapshot | None:
        """The entry at the current position."""
        if self._index < 0:
            return None
        return self._entries[self._index]

    def __len__(self) -> int:
        return len(self._entries)

    def can_undo(self) -> bool:
        """Whether undo would move (counting unsaved live text)."""
        return self._index > 0 or (self._index >= 0 and self.is_dirty())

    def can_redo(self) -> bool:
        """Whether redo would move."""
        return self._index < len(self._entries) - 1

    def is_dirty(self) -> bool:
        """Whether the live buffer differs from the current entry."""
        current = self.current
        return current is None or current.text != self.buffer.text

    def record_snapshot(self, label: SnapshotLabel) -> bool:
        """Append the live buffer text under ``label``.

        Skipped while restoring and when the text equals the current entry.

        Returns:
            True if a snapshot was appended
        """
        if self._restoring:
            return False
        text = self.buffer.text
        if self._index >= 0 and self._entries[self._index].text == text:
            return False
        if self._index < len(self._entries) - 1:
            dropped = len(self._entries) - self._index - 1
            del self._entries[self._index + 1 :]
            logger.debug(f"[history] discarded {dropped} redo entries")
        self._entries.append(HistorySnapshot(text=text, label=label))
        self._index = len(self._entries) - 1
        while len(self._entries) > self.limit:
            self._entries.pop(0)
            self._index -= 1
        logger.debug(f"[history] recorded {label.value} at {self._index}")
        return True

    def _restore(self, snapshot: HistorySnapshot) -> None:
        self._restoring = True
        try:
            self.buffer.text = snapshot.text
            self.buffer.set_selection(len(snapshot.text))
            self.buffer.focus()
        finally:
            self._restoring = False

    def undo(self) -> bool:
        """Step back one entry.

        Unsaved live text is recorded first (as pre-undo) so redo can return
        to it.

        Returns:
            False when there is nothing to undo
        """
        if self.is_dirty():
            self.record_snapshot(SnapshotLabel.PRE_UNDO)
        if self._index <= 0:
            return False
        self._index -= 1
        self._restore(self._entries[self._index])
        return True

    def redo(self) -> bool:
        """Step forward one entry; False when already at the end."""
        if self._index >= len(self._entries) - 1:
            return False
        self._index += 1
        self._restore(self._entries[self._index])
        return True

    def restore_to(self, index: int) -> bool:
        """Jump to an arbitrary entry; False when ``index`` is out of range."""
        if index < 0 or index >= len(self._entries):
            return False
        self._index = index
        self._restore(self._entries[index])
        return True

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()
        self._index = -1
