"""Host text buffer contract.

The automation layer never owns the buffer. It reads and mutates it only
through the ``TextBuffer`` protocol. The host delivers notifications after
its own edit has been applied; programmatic writes to ``text`` are reported
too (as ``EditKind.OTHER``), exactly like a native edit.
"""

from collections.abc import Callable
from enum import Enum
from typing import Protocol


class EditKind(Enum):
    """Kind of edit reported with a mutation notification."""

    PLAIN_INSERT = "plain_insert"
    NEWLINE = "newline"  # new line / new paragraph
    PASTE = "paste"  # paste or drop
    OTHER = "other"  # deletions, replacements, composition, programmatic writes


MutationListener = Callable[[EditKind], None]
SelectionListener = Callable[[], None]
BeforeInsertListener = Callable[[str], None]


class TextBuffer(Protocol):
    """Accessor for the host's editable text and selection."""

    @property
    def text(self) -> str:
        """Full buffer text."""

    @text.setter
    def text(self, value: str) -> None: ...

    @property
    def selection(self) -> tuple[int, int]:
        """Selection as (start, end); a caret has start == end."""

    def set_selection(self, start: int, end: int | None = None) -> None:
        """Select [start, end); a caret when end is omitted."""

    def focus(self) -> None:
        """Give the buffer input focus."""

    def has_focus(self) -> bool:
        """Whether the buffer currently has input focus."""

    def subscribe(
        self,
        on_mutation: MutationListener,
        on_selection: SelectionListener,
        on_before_insert: BeforeInsertListener | None = None,
    ) -> None:
        """Register notification callbacks."""


class MemoryBuffer:
    """In-process TextBuffer used by the CLI and by tests.

    ``type_text``, ``paste`` and ``delete_backward`` simulate native edits and
    deliver notifications the way a text widget would.
    """

    def __init__(self, text: str = "", cursor: int | None = None) -> None:
        self._text = text
        pos = len(text) if cursor is None else cursor
        self._start = pos
        self._end = pos
        self._focused = True
        self._mutation_listeners: list[MutationListener] = []
        self._selection_listeners: list[SelectionListener] = []
        self._before_insert_listeners: list[BeforeInsertListener] = []

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str) -> None:
        self._text = value
        self._start = min(self._start, len(value))
        self._end = min(self._end, len(value))
        self._notify_mutation(EditKind.OTHER)

    @property
    def selection(self) -> tuple[int, int]:
        return self._start, self._end

    @property
    def cursor(self) -> int:
        """Selection end, where typing continues."""
        return self._end

    def set_selection(self, start: int, end: int | None = None) -> None:
        length = len(self._text)
        start = max(0, min(start, length))
        end = start if end is None else max(start, min(end, length))
        self._start = start
        self._end = end
        self._notify_selection()

    def focus(self) -> None:
        self._focused = True

    def blur(self) -> None:
        """Take input focus away from the buffer."""
        self._focused = False

    def has_focus(self) -> bool:
        return self._focused

    def subscribe(
        self,
        on_mutation: MutationListener,
        on_selection: SelectionListener,
        on_before_insert: BeforeInsertListener | None = None,
    ) -> None:
        self._mutation_listeners.append(on_mutation)
        self._selection_listeners.append(on_selection)
        if on_before_insert is not None:
            self._before_insert_listeners.append(on_before_insert)

    def type_text(self, data: str, kind: EditKind | None = None) -> None:
        """Replace the selection with ``data`` the way a keystroke would."""
        if kind is None:
            kind = EditKind.NEWLINE if data == "\n" else EditKind.PLAIN_INSERT
        for listener in list(self._before_insert_listeners):
            listener(data)
        self._splice(data, kind)

    def paste(self, data: str) -> None:
        """Replace the selection with pasted ``data``."""
        self._splice(data, EditKind.PASTE)

    def delete_backward(self, count: int = 1) -> None:
        """Delete the selection, or ``count`` characters before the caret."""
        start, end = self.selection
        if start == end:
            start = max(0, start - count)
        self._text = self._text[:start] + self._text[end:]
        self._start = self._end = start
        self._notify_mutation(EditKind.OTHER)
        self._notify_selection()

    def _splice(self, data: str, kind: EditKind) -> None:
        start, end = self.selection
        self._text = self._text[:start] + data + self._text[end:]
        self._start = self._end = start + len(data)
        self._notify_mutation(kind)
        self._notify_selection()

    def _notify_mutation(self, kind: EditKind) -> None:
        for listener in list(self._mutation_listeners):
            listener(kind)

    def _notify_selection(self) -> None:
        for listener in list(self._selection_listeners):
            listener()
