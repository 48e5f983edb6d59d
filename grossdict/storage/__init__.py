"""Persistence hooks for preferences, drafts and rapid-mode state."""

from grossdict.storage.preferences import (
    JsonPreferenceStore,
    MemoryPreferenceStore,
    PreferenceStore,
    StoredState,
)

__all__ = [
    "JsonPreferenceStore",
    "MemoryPreferenceStore",
    "PreferenceStore",
    "StoredState",
]
