"""Preference and draft persistence.

Storage is best effort: a store that cannot read falls back to defaults and a
store that cannot write reports False. Editing never stops because of it.
"""

import json
import os
from typing import Protocol

from loguru import logger
from pydantic import BaseModel, Field
from pydantic_core import PydanticSerializationError

from grossdict.core.config import Preferences, RapidSettings
from grossdict.core.errors import StorageError
from grossdict.utils.helpers import expand_file_path


class StoredState(BaseModel):
    """Everything a store persists."""

    preferences: Preferences = Field(default_factory=Preferences)
    draft: str | None = None
    rapid: RapidSettings = Field(default_factory=RapidSettings)


class PreferenceStore(Protocol):
    """Load/save hooks for persisted state."""

    def load(self) -> Preferences:
        """Return stored preferences, or defaults."""

    def save(self, prefs: Preferences) -> bool:
        """Persist preferences; False if storage is unavailable."""

    def load_draft(self) -> str | None:
        """Return the saved draft text, if any."""

    def save_draft(self, text: str) -> bool:
        """Persist the draft text."""

    def clear_draft(self) -> bool:
        """Forget the draft text."""

    def load_rapid(self) -> RapidSettings:
        """Return stored rapid-mode state, or defaults."""

    def save_rapid(self, settings: RapidSettings) -> bool:
        """Persist rapid-mode state."""


class MemoryPreferenceStore:
    """Session-only store."""

    def __init__(self, state: StoredState | None = None) -> None:
        self.state = state or StoredState()

    def load(self) -> Preferences:
        return self.state.preferences.model_copy(deep=True)

    def save(self, prefs: Preferences) -> bool:
        self.state.preferences = prefs.model_copy(deep=True)
        return True

    def load_draft(self) -> str | None:
        return self.state.draft

    def save_draft(self, text: str) -> bool:
        self.state.draft = text
        return True

    def clear_draft(self) -> bool:
        self.state.draft = None
        return True

    def load_rapid(self) -> RapidSettings:
        return self.state.rapid.model_copy()

    def save_rapid(self, settings: RapidSettings) -> bool:
        self.state.rapid = settings.model_copy()
        return True


class JsonPreferenceStore:
    """Store backed by a single JSON document on disk."""

    def __init__(self, path: str) -> None:
        self.path = expand_file_path(path) or path

    def _read(self) -> StoredState:
        if not os.path.exists(self.path):
            return StoredState()
        try:
            with open(self.path, encoding="utf-8") as f:
                return StoredState.model_validate(json.load(f))
        except (OSError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            logger.warning(f"Ignoring unreadable preferences {self.path}: {e}")
            return StoredState()

    def _write(self, state: StoredState) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            payload = state.model_dump_json(indent=2)
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
        except (OSError, ValueError, PydanticSerializationError) as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def _save(self, state: StoredState) -> bool:
        try:
            self._write(state)
        except StorageError as e:
            logger.warning(f"Preferences not saved, keeping session-only state: {e}")
            return False
        return True

    def load(self) -> Preferences:
        return self._read().preferences

    def save(self, prefs: Preferences) -> bool:
        state = self._read()
        state.preferences = prefs
        return self._save(state)

    def load_draft(self) -> str | None:
        return self._read().draft

    def save_draft(self, text: str) -> bool:
        state = self._read()
        state.draft = text
        return self._save(state)

    def clear_draft(self) -> bool:
        state = self._read()
        if state.draft is None:
            return True
        state.draft = None
        return self._save(state)

    def load_rapid(self) -> RapidSettings:
        return self._read().rapid

    def save_rapid(self, settings: RapidSettings) -> bool:
        state = self._read()
        state.rapid = settings
        return self._save(state)
