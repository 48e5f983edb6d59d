"""Reactive automation over a dictation buffer."""

from .auto_advance import AdvanceState, AutoAdvanceController, Phase, hold_reason, transition
from .events import AdvanceEvent, LastAutoInsert, Notice, NoticeKind
from .fields import (
    PlaceholderField,
    field_progress,
    find_fields,
    is_complete,
    is_inside_field,
    next_field,
    prev_field,
)
from .history import DiffStats, HistorySnapshot, HistoryTape, SnapshotLabel, diff_stats
from .increment import IncrementEngine
from .rapid import RapidMode
from .session import DictationSession

__all__ = [
    "AdvanceEvent",
    "AdvanceState",
    "AutoAdvanceController",
    "DictationSession",
    "DiffStats",
    "HistorySnapshot",
    "HistoryTape",
    "IncrementEngine",
    "LastAutoInsert",
    "Notice",
    "NoticeKind",
    "Phase",
    "PlaceholderField",
    "RapidMode",
    "SnapshotLabel",
    "diff_stats",
    "field_progress",
    "find_fields",
    "hold_reason",
    "is_complete",
    "is_inside_field",
    "next_field",
    "prev_field",
    "transition",
]
