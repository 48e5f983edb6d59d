"""Shared fixtures: an in-memory buffer driven by a virtual clock."""

import pytest

from grossdict.automation import DictationSession
from grossdict.core import Config
from grossdict.editor import ManualScheduler, MemoryBuffer
from grossdict.storage import MemoryPreferenceStore


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual clock starting at zero."""
    return ManualScheduler()


@pytest.fixture
def store() -> MemoryPreferenceStore:
    """Session-only preference store."""
    return MemoryPreferenceStore()


@pytest.fixture
def make_session(scheduler, store):
    """Factory for a session over a MemoryBuffer holding ``text``."""

    def factory(text: str = "", cursor: int | None = None, **config_values) -> DictationSession:
        buffer = MemoryBuffer(text, cursor)
        return DictationSession(buffer, scheduler, Config(**config_values), store)

    return factory
