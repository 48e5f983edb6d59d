"""Configuration and persisted preferences."""

import argparse
import json
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from grossdict.core.errors import ConfigError
from grossdict.utils.constants import Constants
from grossdict.utils.helpers import expand_file_path


class NumberingFormat(Enum):
    """Block label numbering formats."""

    LETTER_NUMBER = "letter-number"  # A1, A2 ... B1
    NUMBER_LETTER = "number-letter"  # 1A, 1B ... 1Z, 1AA ... 2A


class Preferences(BaseModel):
    """User preferences persisted across sessions."""

    model_config = ConfigDict(validate_assignment=True)

    numbering_format: NumberingFormat = NumberingFormat.LETTER_NUMBER
    auto_advance: bool = False
    delay_ms: int = Constants.DEFAULT_DELAY_MS
    continuation_chars: list[str] = Field(
        default_factory=lambda: list(Constants.DEFAULT_CONTINUATION_CHARS)
    )
    continuation_words: list[str] = Field(
        default_factory=lambda: list(Constants.DEFAULT_CONTINUATION_WORDS)
    )
    learned_words: list[str] = Field(default_factory=list)

    @field_validator("delay_ms", mode="before")
    @classmethod
    def clamp_delay(cls, value: object) -> int:
        """Clamp the debounce delay; unparseable values fall back to the default."""
        try:
            delay = int(value)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            delay = Constants.DEFAULT_DELAY_MS
        if delay <= 0:
            delay = Constants.DEFAULT_DELAY_MS
        return max(Constants.MIN_DELAY_MS, min(Constants.MAX_DELAY_MS, delay))

    @field_validator("continuation_chars", "continuation_words", "learned_words", mode="before")
    @classmethod
    def parse_string_list(cls, value: object) -> object:
        """Accept a comma-separated string in place of a list."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    def hold_words(self) -> set[str]:
        """Return continuation and learned words, lowercased."""
        return {w.lower() for w in self.continuation_words} | {
            w.lower() for w in self.learned_words
        }


class Config(BaseModel):
    """Runtime settings for a dictation session."""

    preferences_file: str | None = None
    numbering_format: NumberingFormat | None = None

    history_limit: int = Constants.HISTORY_LIMIT
    typed_snapshot_delay_ms: int = 800
    paste_snapshot_delay_ms: int = 50
    draft_save_delay_ms: int = 300
    learn_window_ms: int = 4000
    learn_min_back_chars: int = 3

    verbose: bool = False
    debug: bool = False

    @field_validator("preferences_file", mode="before")
    @classmethod
    def expand_path(cls, value: str | None) -> str | None:
        """Expand ``~`` in the preferences path."""
        return expand_file_path(value)

    @model_validator(mode="after")
    def validate_cross_fields(self) -> "Config":
        """Check that limits and delays are usable."""
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        delays = (
            self.typed_snapshot_delay_ms,
            self.paste_snapshot_delay_ms,
            self.draft_save_delay_ms,
            self.learn_window_ms,
        )
        if any(delay < 0 for delay in delays):
            raise ValueError("delays must not be negative")
        if self.learn_min_back_chars < 0:
            raise ValueError("learn_min_back_chars must not be negative")
        return self


def _read_json_config(config_file: str) -> dict:
    path = expand_file_path(config_file)
    try:
        with open(path, encoding="utf-8") as f:  # type: ignore[arg-type]
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file {config_file}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_file} must contain a JSON object")
    return data


def load_config(
    config_file: str | None,
    args: argparse.Namespace | None = None,
    parser: argparse.ArgumentParser | None = None,
) -> Config:
    """Load configuration from a JSON file and CLI arguments.

    CLI arguments override JSON values. Arguments left at ``None`` do not
    override anything.

    Args:
        config_file: Path to a JSON config file, or None
        args: Parsed CLI arguments
        parser: Argument parser, used to report invalid configuration

    Returns:
        Validated Config

    Raises:
        ConfigError: If the file or the merged values are invalid and no
            parser is available to report the error
    """
    values: dict = {}
    try:
        if config_file:
            values.update(_read_json_config(config_file))

        if args is not None:
            for field_name in Config.model_fields:
                cli_value = getattr(args, field_name, None)
                if cli_value is not None and cli_value is not False:
                    values[field_name] = cli_value

        try:
            return Config(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
    except ConfigError as e:
        if parser is not None:
            parser.error(str(e))
        raise


class RapidSettings(BaseModel):
    """Persisted rapid-mode state."""

    active: bool = False
    template: str | None = None
    specimen_index: int = 0

    @field_validator("specimen_index", mode="before")
    @classmethod
    def non_negative_index(cls, value: object) -> int:
        """Corrupt or negative indexes restart at the first specimen."""
        try:
            index = int(value)  # type: ignore[call-overload]
        except (TypeError, ValueError):
            return 0
        return max(0, index)
