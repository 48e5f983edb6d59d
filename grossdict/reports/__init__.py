"""Plain-text reports over a dictation buffer."""

from .block_map import write_block_map
from .footer import FooterSummary, build_footer, write_footer
from .history_tape import HistoryRow, build_history_rows, write_history_tape

__all__ = [
    "FooterSummary",
    "HistoryRow",
    "build_footer",
    "build_history_rows",
    "write_block_map",
    "write_footer",
    "write_history_tape",
]
