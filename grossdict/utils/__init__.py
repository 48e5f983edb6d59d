"""Utility functions for grossdict."""

from grossdict.utils.constants import Constants
from grossdict.utils.helpers import expand_file_path, last_token, line_bounds
from grossdict.utils.logging import setup_logger

__all__ = [
    "Constants",
    "expand_file_path",
    "last_token",
    "line_bounds",
    "setup_logger",
]
