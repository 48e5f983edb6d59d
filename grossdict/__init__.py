"""grossdict - Block labelling and field navigation for gross dictation.

Cassette block labels (A1, A2 ... or 1A, 1B ...) inserted as the user
dictates, auto-advance between template fields, and a snapshot history.
"""

from .automation import DictationSession
from .core import Config, NumberingFormat, Preferences, load_config
from .editor import MemoryBuffer

__version__ = "0.1.0"
__all__ = [
    "Config",
    "DictationSession",
    "MemoryBuffer",
    "NumberingFormat",
    "Preferences",
    "load_config",
]
