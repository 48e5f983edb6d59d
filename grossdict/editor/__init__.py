"""Host-facing editor contract: buffer accessor and timers."""

from grossdict.editor.buffer import EditKind, MemoryBuffer, TextBuffer
from grossdict.editor.scheduling import (
    AsyncioScheduler,
    Debouncer,
    ManualScheduler,
    Scheduler,
    TimerHandle,
)

__all__ = [
    "AsyncioScheduler",
    "Debouncer",
    "EditKind",
    "ManualScheduler",
    "MemoryBuffer",
    "Scheduler",
    "TextBuffer",
    "TimerHandle",
]
