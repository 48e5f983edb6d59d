"""Core domain logic for grossdict."""

from .config import Config, NumberingFormat, Preferences, RapidSettings, load_config
from .errors import ConfigError, GrossDictError, StorageError
from .labels import (
    LineKind,
    ParsedLabel,
    classify_line,
    find_last_block,
    next_group_label,
    next_label,
    next_letter_suffix,
    parse_line,
)

__all__ = [
    "Config",
    "ConfigError",
    "GrossDictError",
    "LineKind",
    "NumberingFormat",
    "ParsedLabel",
    "Preferences",
    "RapidSettings",
    "StorageError",
    "classify_line",
    "find_last_block",
    "load_config",
    "next_group_label",
    "next_label",
    "next_letter_suffix",
    "parse_line",
]
