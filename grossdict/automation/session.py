"""Dictation session: wires the automation components to one host buffer.

The session subscribes to the buffer's notifications and routes each one
through the increment engine first, then the history tape and auto-advance.
Every public operation is guarded so an unexpected error is logged and
reported as ``False`` instead of interrupting dictation.
"""

import functools
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from loguru import logger

from grossdict.automation.auto_advance import AutoAdvanceController
from grossdict.automation.events import AdvanceEvent, Notice, NoticeKind
from grossdict.automation.fields import field_progress, is_complete
from grossdict.automation.history import HistoryTape, SnapshotLabel
from grossdict.automation.increment import IncrementEngine
from grossdict.automation.rapid import ANCHOR, RapidMode
from grossdict.core.config import Config, NumberingFormat, Preferences
from grossdict.editor.buffer import EditKind, TextBuffer
from grossdict.editor.scheduling import Debouncer, Scheduler
from grossdict.storage.preferences import PreferenceStore

F = TypeVar("F", bound=Callable[..., Any])

AdvanceListener = Callable[[AdvanceEvent], None]
NoticeListener = Callable[[Notice], None]


def _guarded(method: F) -> F:
    """Log and swallow unexpected errors, returning False."""

    @functools.wraps(method)
    def wrapper(self: "DictationSession", *args: Any, **kwargs: Any) -> Any:
        try:
            return method(self, *args, **kwargs)
        except Exception:  # pylint: disable=broad-except
            logger.exception(f"Dictation operation {method.__name__} failed")
            return False

    return wrapper  # type: ignore[return-value]


class DictationSession:
    """One dictation buffer with block labelling, field navigation and history.

    Attributes:
        buffer: Host buffer accessor
        config: Runtime settings
        prefs: User preferences (shared with the auto-advance controller)
        engine: Block label increment engine
        controller: Auto-advance controller
        tape: History tape
        rapid: Rapid mode sequencer
    """

    def __init__(
        self,
        buffer: TextBuffer,
        scheduler: Scheduler,
        config: Config | None = None,
        store: PreferenceStore | None = None,
    ) -> None:
        self.buffer = buffer
        self.config = config or Config()
        self._store = store

        self.prefs = store.load() if store is not None else Preferences()
        if self.config.numbering_format is not None:
            self.prefs.numbering_format = self.config.numbering_format

        self.engine = IncrementEngine(buffer, self.prefs.numbering_format)
        self.controller = AutoAdvanceController(
            buffer,
            scheduler,
            self.prefs,
            on_prefs_changed=self._save_prefs,
            on_notice=self._notify,
            learn_window_ms=self.config.learn_window_ms,
            learn_min_back_chars=self.config.learn_min_back_chars,
        )
        self.tape = HistoryTape(buffer, self.config.history_limit)
        self.rapid = RapidMode(buffer, lambda: self.engine.fmt, store)

        self._snapshot_timer = Debouncer(scheduler)
        self._draft_timer = Debouncer(scheduler)
        self._advance_listeners: list[AdvanceListener] = []
        self._notice_listeners: list[NoticeListener] = []
        self._quiet = False
        self._was_complete = False

        buffer.subscribe(self.on_buffer_changed, self.on_selection_changed, self.before_insert)

    # Listeners

    def add_advance_listener(self, listener: AdvanceListener) -> None:
        """Call ``listener`` after every block label insertion."""
        self._advance_listeners.append(listener)

    def add_notice_listener(self, listener: NoticeListener) -> None:
        """Call ``listener`` with every transient notice."""
        self._notice_listeners.append(listener)

    def _notify(self, notice: Notice) -> None:
        for listener in list(self._notice_listeners):
            listener(notice)

    def _save_prefs(self) -> None:
        if self._store is not None:
            self._store.save(self.prefs)

    @contextmanager
    def _programmatic(self) -> Iterator[None]:
        """Suppress reactive triggers while the session rewrites the buffer."""
        self._quiet = True
        try:
            yield
        finally:
            self._quiet = False

    # Host notifications

    @_guarded
    def on_buffer_changed(self, kind: EditKind) -> None:
        """Handle a mutation the host has already applied."""
        if self._quiet or self.tape.restoring or self.engine.consume_ignore():
            return

        event = self.engine.on_mutation(kind)
        if event is not None:
            self._handle_advance(event)
        elif kind == EditKind.PASTE:
            self.controller.abandon()
        self.controller.on_buffer_changed()

        if event is None:
            if kind == EditKind.PASTE:
                self._schedule_snapshot(self.config.paste_snapshot_delay_ms, SnapshotLabel.PASTE)
            else:
                self._schedule_snapshot(self.config.typed_snapshot_delay_ms, SnapshotLabel.TYPED)
        self._schedule_draft_save()
        self._check_completion()

    @_guarded
    def on_selection_changed(self) -> None:
        """Handle a selection change."""
        if self._quiet or self.tape.restoring:
            return
        event = self.engine.on_selection()
        if event is not None:
            self._handle_advance(event)
        self.controller.on_selection_changed()

    @_guarded
    def before_insert(self, data: str) -> None:
        """Record a word-boundary snapshot before a space or newline lands."""
        if self._quiet or self.tape.restoring:
            return
        if data in (" ", "\n"):
            self.tape.record_snapshot(SnapshotLabel.WORD_BOUNDARY)

    def _handle_advance(self, event: AdvanceEvent) -> None:
        self._snapshot_timer.cancel()
        self.tape.record_snapshot(SnapshotLabel.BLOCK_INSERT)
        self.controller.abandon()
        if self.rapid.active and event.was_placeholder:
            self.rapid.on_block_inserted(event.prefix)
        logger.info(f"Block {event.prefix.strip()} inserted")
        self._notify(Notice(NoticeKind.BLOCK_INSERTED, event.prefix))
        for listener in list(self._advance_listeners):
            listener(event)

    @_guarded
    def _record_snapshot(self, label: SnapshotLabel) -> None:
        self.tape.record_snapshot(label)

    @_guarded
    def _save_draft(self) -> None:
        if self._store is not None:
            self._store.save_draft(self.buffer.text)

    def _schedule_snapshot(self, delay_ms: float, label: SnapshotLabel) -> None:
        self._snapshot_timer.schedule(delay_ms, lambda: self._record_snapshot(label))

    def _schedule_draft_save(self) -> None:
        if self._store is None:
            return
        self._draft_timer.schedule(self.config.draft_save_delay_ms, self._save_draft)

    def _check_completion(self) -> None:
        complete = is_complete(self.buffer.text)
        if complete and not self._was_complete:
            self._notify(Notice(NoticeKind.ALL_FIELDS_COMPLETE))
        self._was_complete = complete

    # Field navigation and preferences

    def _at_rapid_anchor(self) -> bool:
        text = self.buffer.text
        if not text.endswith(ANCHOR):
            return False
        return self.buffer.selection == (len(text) - len(ANCHOR), len(text))

    @_guarded
    def next_field(self) -> bool:
        """Select the next field; at the rapid-mode anchor, append the next specimen."""
        if self.rapid.active and self.rapid.template and self._at_rapid_anchor():
            return self.rapid_append_next()
        return self.controller.go_next_field()

    @_guarded
    def prev_field(self) -> bool:
        """Select the previous field."""
        return self.controller.go_prev_field()

    @_guarded
    def toggle_auto_advance(self) -> bool:
        """Flip auto-advance and persist it; returns the new setting."""
        return self.controller.toggle_auto()

    @_guarded
    def set_delay(self, delay_ms: int) -> bool:
        """Set the auto-advance delay (clamped) and persist it."""
        self.prefs.delay_ms = delay_ms
        self._save_prefs()
        return True

    @_guarded
    def set_format(self, fmt: NumberingFormat) -> bool:
        """Switch the numbering format for future insertions and persist it."""
        self.prefs.numbering_format = fmt
        self.engine.fmt = fmt
        self._save_prefs()
        return True

    @_guarded
    def add_continuation_char(self, value: str) -> bool:
        """Add a hold character (the first non-space character of ``value``)."""
        value = value.strip()
        if not value or value[0] in self.prefs.continuation_chars:
            return False
        self.prefs.continuation_chars = [*self.prefs.continuation_chars, value[0]]
        self._save_prefs()
        return True

    @_guarded
    def remove_continuation_char(self, char: str) -> bool:
        """Remove a hold character."""
        if char not in self.prefs.continuation_chars:
            return False
        self.prefs.continuation_chars = [c for c in self.prefs.continuation_chars if c != char]
        self._save_prefs()
        return True

    @_guarded
    def add_continuation_word(self, value: str) -> bool:
        """Add a hold word (lowercased)."""
        word = value.strip().lower()
        if not word or word in self.prefs.continuation_words:
            return False
        self.prefs.continuation_words = [*self.prefs.continuation_words, word]
        self._save_prefs()
        return True

    @_guarded
    def remove_continuation_word(self, word: str) -> bool:
        """Remove a hold word."""
        word = word.lower()
        if word not in self.prefs.continuation_words:
            return False
        self.prefs.continuation_words = [w for w in self.prefs.continuation_words if w != word]
        self._save_prefs()
        return True

    @_guarded
    def clear_learned_words(self) -> bool:
        """Forget every learned hold word."""
        self.controller.clear_learned_words()
        return True

    # Manual block insertion

    @_guarded
    def insert_next_block(self) -> bool:
        """Insert the next block label at the caret."""
        event = self.engine.insert_next_block()
        if event is None:
            self._notify(Notice(NoticeKind.NO_BLOCK))
            return False
        self._handle_advance(event)
        return True

    @_guarded
    def insert_next_group(self) -> bool:
        """Start the next specimen's first block on a new line."""
        event = self.engine.insert_next_group()
        if event is None:
            self._notify(Notice(NoticeKind.NO_BLOCK))
            return False
        self._handle_advance(event)
        return True

    @_guarded
    def undo_last_insert(self) -> bool:
        """Remove the last automatic label insertion if it is still before the caret."""
        if self.engine.undo_last_insert():
            return True
        self._notify(Notice(NoticeKind.NOTHING_TO_UNDO_INSERT))
        return False

    # History

    @_guarded
    def undo(self) -> bool:
        """Step back on the history tape."""
        self._snapshot_timer.cancel()
        if not self.tape.undo():
            self._notify(Notice(NoticeKind.NOTHING_TO_UNDO))
            return False
        self.controller.abandon()
        self._notify(Notice(NoticeKind.UNDONE))
        self._schedule_draft_save()
        return True

    @_guarded
    def redo(self) -> bool:
        """Step forward on the history tape."""
        self._snapshot_timer.cancel()
        if not self.tape.redo():
            self._notify(Notice(NoticeKind.NOTHING_TO_REDO))
            return False
        self.controller.abandon()
        self._notify(Notice(NoticeKind.REDONE))
        self._schedule_draft_save()
        return True

    @_guarded
    def restore_to(self, index: int) -> bool:
        """Jump to an entry picked in the history browser."""
        self._snapshot_timer.cancel()
        if not self.tape.restore_to(index):
            return False
        self.controller.abandon()
        self._notify(Notice(NoticeKind.RESTORED))
        self._schedule_draft_save()
        return True

    # Buffer-wide operations

    def _replace_buffer(self, text: str, cursor: int) -> None:
        self._snapshot_timer.cancel()
        with self._programmatic():
            self.buffer.text = text
            self.buffer.set_selection(cursor)
            self.buffer.focus()
        self.controller.abandon()

    @_guarded
    def clipboard_paste(self, text: str) -> bool:
        """Replace the whole buffer with pasted text."""
        if not text.strip():
            return False
        self._replace_buffer(text, 0)
        self.tape.record_snapshot(SnapshotLabel.CLIPBOARD_PASTE)
        self._schedule_draft_save()
        self._check_completion()
        return True

    @_guarded
    def load_draft(self) -> bool:
        """Restore the saved draft into an empty buffer."""
        if self._store is None:
            return False
        draft = self._store.load_draft()
        if not draft:
            return False
        self._replace_buffer(draft, len(draft))
        self.tape.record_snapshot(SnapshotLabel.DRAFT_LOADED)
        self._check_completion()
        return True

    def _reset(self, label: SnapshotLabel) -> None:
        self._replace_buffer("", 0)
        self._draft_timer.cancel()
        self.tape.clear()
        self.engine.last_insert = None
        self.controller.abandon(stop_watching=True)
        if self._store is not None:
            self._store.clear_draft()
        self._was_complete = False
        self.tape.record_snapshot(label)

    @_guarded
    def new_case(self) -> bool:
        """Clear everything for a new case, restarting rapid mode."""
        self._reset(SnapshotLabel.NEW_CASE)
        if self.rapid.active:
            self.rapid.reset()
        return True

    @_guarded
    def new_specimen(self) -> bool:
        """Clear the buffer for the next specimen."""
        self._reset(SnapshotLabel.NEW_SPECIMEN)
        return True

    # Rapid mode

    @_guarded
    def rapid_toggle(self) -> bool:
        """Switch rapid mode; returns the new state."""
        return self.rapid.toggle()

    @_guarded
    def rapid_save_template(self, text: str) -> bool:
        """Store the rapid-mode template."""
        if not text.strip():
            return False
        self.rapid.save_template(text)
        return True

    @_guarded
    def rapid_apply_first(self) -> bool:
        """Replace the buffer with the first specimen block."""
        self._snapshot_timer.cancel()
        with self._programmatic():
            applied = self.rapid.apply_first()
        if not applied:
            return False
        self.controller.abandon()
        self.tape.record_snapshot(SnapshotLabel.PASTE)
        self._schedule_draft_save()
        return True

    @_guarded
    def rapid_append_next(self) -> bool:
        """Append the next specimen block at the end of the buffer."""
        self._snapshot_timer.cancel()
        with self._programmatic():
            appended = self.rapid.append_next()
        if not appended:
            return False
        self.controller.abandon()
        self.tape.record_snapshot(SnapshotLabel.BLOCK_INSERT)
        self._schedule_draft_save()
        return True

    # Status

    def field_progress(self) -> str:
        """Field counter such as ``"2 / 5"``."""
        return field_progress(self.buffer.text, self.buffer.selection[0])

    def status_text(self) -> str:
        """Combined auto-advance and rapid-mode status."""
        parts = [self.controller.status_text(), self.rapid.status_text()]
        return " · ".join(part for part in parts if part)
