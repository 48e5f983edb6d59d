"""Exception types for grossdict.

Grammar mismatches are never exceptions; parsing functions return ``None``.
"""


class GrossDictError(Exception):
    """Base class for grossdict errors."""


class ConfigError(GrossDictError):
    """Raised when a configuration file cannot be read or validated."""


class StorageError(GrossDictError):
    """Raised by storage backends when preferences or drafts cannot be persisted."""
