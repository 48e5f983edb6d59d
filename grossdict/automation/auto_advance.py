"""Auto-advance between placeholder fields.

The controller moves the caret to the next field once the current one looks
filled. Decisions are made by the pure ``transition`` function, which maps
``(state, event)`` to ``(state, effects)``; ``AutoAdvanceController`` owns the
timer and applies the effects against the buffer.

Phases per field visit:

    IDLE (anchor = -1)
      -> TRACKING (anchor set, no timer)
      -> COUNTING_DOWN (debounce timer armed)
      -> TRACKING again when the content holds, or IDLE when abandoned

After an auto-advance the controller watches for the user moving the caret
back; if that happens soon enough, the word that preceded the advance is
learned as a hold word.
"""

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from loguru import logger

from grossdict.automation.events import Notice, NoticeKind
from grossdict.automation.fields import (
    PlaceholderField,
    is_inside_field,
    next_field,
    prev_field,
    select_field,
)
from grossdict.core.config import Preferences
from grossdict.editor.buffer import TextBuffer
from grossdict.editor.scheduling import Debouncer, Scheduler
from grossdict.utils.constants import Constants
from grossdict.utils.helpers import last_token


class Phase(Enum):
    """Named phases of a field visit."""

    IDLE = "idle"
    TRACKING = "tracking"
    COUNTING_DOWN = "counting_down"


@dataclass(frozen=True)
class AdvanceState:
    """Runtime state of the controller (not persisted)."""

    anchor: int = -1
    timer_armed: bool = False
    last_advance_time: float = 0.0
    last_advance_from_pos: int = -1
    last_advance_context_word: str = ""
    watching_for_cursor_back: bool = False

    @property
    def phase(self) -> Phase:
        """Current phase derived from anchor and timer."""
        if self.anchor < 0:
            return Phase.IDLE
        if self.timer_armed:
            return Phase.COUNTING_DOWN
        return Phase.TRACKING


# Events


@dataclass(frozen=True)
class FieldEntered:
    """The caret landed on a field (manual navigation or auto-advance)."""

    start: int
    auto: bool = False
    from_pos: int = -1


@dataclass(frozen=True)
class BufferChanged:
    """The buffer was edited."""

    text: str
    cursor: int


@dataclass(frozen=True)
class TimerFired:
    """The debounce timer elapsed."""

    text: str
    cursor: int
    now: float


@dataclass(frozen=True)
class SelectionChanged:
    """The selection moved."""

    start: int
    now: float
    focused: bool
    inside_field: bool = False


@dataclass(frozen=True)
class Abandoned:
    """The field was abandoned (no fields left, block inserted, paste, reset)."""

    stop_watching: bool = False


@dataclass(frozen=True)
class AutoToggled:
    """Auto-advance mode was switched."""

    enabled: bool


Event = FieldEntered | BufferChanged | TimerFired | SelectionChanged | Abandoned | AutoToggled


# Effects


@dataclass(frozen=True)
class ArmTimer:
    """(Re)arm the debounce timer."""

    delay_ms: int


@dataclass(frozen=True)
class CancelTimer:
    """Cancel any pending debounce timer."""


@dataclass(frozen=True)
class NavigateNext:
    """Move to the next field after ``from_pos``."""

    from_pos: int


@dataclass(frozen=True)
class LearnWord:
    """Add ``word`` to the learned hold words."""

    word: str


Effect = ArmTimer | CancelTimer | NavigateNext | LearnWord


def hold_reason(filled: str, prefs: Preferences) -> str | None:
    """Return what holds the advance for the filled text, if anything.

    Args:
        filled: Text typed into the field so far
        prefs: Preferences carrying the hold sets

    Returns:
        The continuation character or word that holds, "" for empty text,
        or None when the field looks finished
    """
    text = filled.strip()
    if not text:
        return ""
    if text[-1] in prefs.continuation_chars:
        return text[-1]
    word = last_token(text).lower()
    if word in prefs.hold_words():
        return word
    return None


def should_hold(filled: str, prefs: Preferences) -> bool:
    """Whether the filled text suggests the user is not done."""
    return hold_reason(filled, prefs) is not None


def filled_text(text: str, anchor: int, cursor: int) -> str:
    """Text between the anchor and the caret, stripped."""
    return text[min(anchor, len(text)) : cursor].strip()


def transition(
    state: AdvanceState,
    event: Event,
    prefs: Preferences,
    learn_window_ms: float = 4000,
    learn_min_back_chars: int = 3,
) -> tuple[AdvanceState, list[Effect]]:
    """Compute the next state and the effects to apply.

    Args:
        state: Current controller state
        event: Incoming event
        prefs: Auto-advance preferences
        learn_window_ms: How long after an advance a caret-back still teaches
        learn_min_back_chars: How far back the caret must move to teach

    Returns:
        Tuple of (new state, effects)
    """
    if isinstance(event, FieldEntered):
        watching = event.auto and event.start >= event.from_pos
        return (
            replace(
                state,
                anchor=event.start,
                timer_armed=False,
                watching_for_cursor_back=watching,
            ),
            [CancelTimer()],
        )

    if isinstance(event, Abandoned):
        watching = False if event.stop_watching else state.watching_for_cursor_back
        return (
            replace(state, anchor=-1, timer_armed=False, watching_for_cursor_back=watching),
            [CancelTimer()],
        )

    if isinstance(event, AutoToggled):
        if event.enabled:
            return state, []
        return replace(state, timer_armed=False), [CancelTimer()]

    if isinstance(event, BufferChanged):
        if state.anchor < 0:
            return state, []
        if is_inside_field(event.text, event.cursor):
            return replace(state, timer_armed=False), [CancelTimer()]
        if not prefs.auto_advance:
            return state, []
        filled = filled_text(event.text, state.anchor, event.cursor)
        if should_hold(filled, prefs):
            return replace(state, timer_armed=False), [CancelTimer()]
        return replace(state, timer_armed=True), [ArmTimer(prefs.delay_ms)]

    if isinstance(event, TimerFired):
        if state.anchor < 0:
            return replace(state, timer_armed=False), []
        filled = filled_text(event.text, state.anchor, event.cursor)
        return (
            replace(
                state,
                timer_armed=False,
                last_advance_context_word=last_token(filled).lower(),
                last_advance_from_pos=event.cursor,
                last_advance_time=event.now,
            ),
            [NavigateNext(event.cursor)],
        )

    if isinstance(event, SelectionChanged):
        new_state = state
        effects: list[Effect] = []
        if state.watching_for_cursor_back:
            if event.now - state.last_advance_time > learn_window_ms:
                new_state = replace(new_state, watching_for_cursor_back=False)
            elif event.focused and event.start < state.last_advance_from_pos - learn_min_back_chars:
                new_state = replace(new_state, watching_for_cursor_back=False)
                effects.append(LearnWord(state.last_advance_context_word))
        # Entering a field (e.g. dictation software highlighting it) stops the countdown.
        if event.focused and event.inside_field and new_state.timer_armed:
            new_state = replace(new_state, timer_armed=False)
            effects.append(CancelTimer())
        return new_state, effects

    raise TypeError(f"Unknown auto-advance event: {event!r}")


class AutoAdvanceController:
    """Applies auto-advance transitions to a host buffer.

    Attributes:
        buffer: Host buffer accessor
        prefs: Preferences (auto flag, delay, hold sets, learned words)
        state: Current AdvanceState
    """

    def __init__(
        self,
        buffer: TextBuffer,
        scheduler: Scheduler,
        prefs: Preferences,
        on_prefs_changed: Callable[[], None] | None = None,
        on_notice: Callable[[Notice], None] | None = None,
        learn_window_ms: float = 4000,
        learn_min_back_chars: int = 3,
    ) -> None:
        self.buffer = buffer
        self.prefs = prefs
        self.state = AdvanceState()
        self._scheduler = scheduler
        self._timer = Debouncer(scheduler)
        self._on_prefs_changed = on_prefs_changed
        self._on_notice = on_notice
        self._learn_window_ms = learn_window_ms
        self._learn_min_back_chars = learn_min_back_chars

    @property
    def phase(self) -> Phase:
        """Current phase."""
        return self.state.phase

    def _dispatch(self, event: Event) -> None:
        self.state, effects = transition(
            self.state,
            event,
            self.prefs,
            self._learn_window_ms,
            self._learn_min_back_chars,
        )
        for effect in effects:
            self._apply(effect)

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, CancelTimer):
            self._timer.cancel()
        elif isinstance(effect, ArmTimer):
            logger.debug(f"[auto-advance] counting down {effect.delay_ms} ms")
            self._timer.schedule(effect.delay_ms, self._fire)
        elif isinstance(effect, NavigateNext):
            target = next_field(self.buffer.text, effect.from_pos)
            self._navigate(target, effect.from_pos, auto=True)
        elif isinstance(effect, LearnWord):
            self.learn_word(effect.word)

    def _fire(self) -> None:
        text = self.buffer.text
        cursor = self.buffer.selection[1]
        logger.debug(f"[auto-advance] advancing from {cursor}")
        try:
            self._dispatch(TimerFired(text, cursor, self._scheduler.now_ms()))
        except Exception:  # pylint: disable=broad-except
            logger.exception("Auto-advance failed")

    def _notify(self, notice: Notice) -> None:
        logger.info(notice.message)
        if self._on_notice is not None:
            self._on_notice(notice)

    def _navigate(self, target: PlaceholderField | None, from_pos: int, auto: bool) -> bool:
        if target is None:
            self._dispatch(Abandoned())
            self._notify(Notice(NoticeKind.NO_FIELDS))
            return False
        # Anchor first: selecting a line-start placeholder may insert a block
        # label, and the resulting advance must be able to clear it again.
        self._dispatch(FieldEntered(target.start, auto=auto, from_pos=from_pos))
        select_field(self.buffer, target)
        return True

    # Host-facing operations

    def go_next_field(self, from_pos: int | None = None) -> bool:
        """Select the next field, wrapping around.

        Returns:
            True if a field was selected
        """
        pos = self.buffer.selection[1] if from_pos is None else from_pos
        return self._navigate(next_field(self.buffer.text, pos), pos, auto=False)

    def go_prev_field(self, from_pos: int | None = None) -> bool:
        """Select the previous field, wrapping around."""
        pos = self.buffer.selection[0] if from_pos is None else from_pos
        return self._navigate(prev_field(self.buffer.text, pos), pos, auto=False)

    def on_buffer_changed(self) -> None:
        """Feed a buffer mutation into the state machine."""
        self._dispatch(BufferChanged(self.buffer.text, self.buffer.selection[1]))

    def on_selection_changed(self) -> None:
        """Feed a selection change into the learning sub-protocol."""
        start = self.buffer.selection[0]
        self._dispatch(
            SelectionChanged(
                start,
                self._scheduler.now_ms(),
                self.buffer.has_focus(),
                inside_field=is_inside_field(self.buffer.text, start),
            )
        )

    def abandon(self, stop_watching: bool = False) -> None:
        """Drop the current field and cancel any pending advance."""
        self._dispatch(Abandoned(stop_watching=stop_watching))

    def set_auto(self, enabled: bool) -> None:
        """Switch auto-advance; switching off cancels the timer but keeps the anchor."""
        self.prefs.auto_advance = enabled
        self._dispatch(AutoToggled(enabled))
        self._prefs_changed()
        self._notify(Notice(NoticeKind.AUTO_ADVANCE_ON if enabled else NoticeKind.AUTO_ADVANCE_OFF))

    def toggle_auto(self) -> bool:
        """Flip auto-advance; returns the new setting."""
        self.set_auto(not self.prefs.auto_advance)
        return self.prefs.auto_advance

    def learn_word(self, word: str) -> bool:
        """Add a hold word learned from a caret-back after an auto-advance.

        Words shorter than two characters or already in a hold set are ignored.

        Returns:
            True if the word was added
        """
        word = word.lower()
        if len(word) < Constants.MIN_LEARNED_WORD_LENGTH:
            return False
        if word in self.prefs.hold_words() or word in self.prefs.continuation_chars:
            return False
        self.prefs.learned_words = [*self.prefs.learned_words, word]
        self._prefs_changed()
        logger.info(f'Learned: "{word}" now pauses auto-advance')
        if self._on_notice is not None:
            self._on_notice(Notice(NoticeKind.LEARNED_WORD, word))
        return True

    def clear_learned_words(self) -> None:
        """Forget every learned hold word."""
        self.prefs.learned_words = []
        self._prefs_changed()

    def _prefs_changed(self) -> None:
        if self._on_prefs_changed is not None:
            self._on_prefs_changed()

    def status_text(self) -> str:
        """Footer status line for auto-advance."""
        if not self.prefs.auto_advance:
            return ""
        if self.state.anchor < 0:
            return "auto-next: on"
        text = self.buffer.text
        filled = filled_text(text, self.state.anchor, self.buffer.selection[1])
        reason = hold_reason(filled, self.prefs)
        if reason:
            if reason in self.prefs.continuation_chars:
                return f"auto-next: paused ({reason})"
            return f"auto-next: paused (“{reason}”)"
        if self._timer.pending:
            return "auto-next: counting…"
        return "auto-next: on"
