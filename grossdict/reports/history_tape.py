"""History browser rows, newest first."""

from typing import TextIO

from pydantic import BaseModel

from grossdict.automation.history import DiffStats, HistoryTape, diff_stats


class HistoryRow(BaseModel):
    """One row of the history browser.

    ``index`` is None for the unsaved row shown when the live text has
    diverged from the current entry.
    """

    index: int | None
    time: str
    label: str
    stats: DiffStats
    characters: int
    is_current: bool = False


def build_history_rows(tape: HistoryTape, current_text: str) -> list[HistoryRow]:
    """Build browser rows for a tape.

    Args:
        tape: History tape
        current_text: Live buffer text

    Returns:
        Rows, most recent first; an unsaved row leads when the buffer is dirty
    """
    entries = tape.entries
    rows: list[HistoryRow] = []
    current = tape.current
    if current is not None and current.text != current_text:
        rows.append(
            HistoryRow(
                index=None,
                time="now",
                label="unsaved",
                stats=diff_stats(current.text, current_text),
                characters=len(current_text),
            )
        )
    for i in range(len(entries) - 1, -1, -1):
        entry = entries[i]
        if i > 0:
            stats = diff_stats(entries[i - 1].text, entry.text)
        else:
            stats = DiffStats(added=len(entry.text), removed=0)
        rows.append(
            HistoryRow(
                index=i,
                time=entry.timestamp.strftime("%H:%M:%S"),
                label=entry.label.display_name,
                stats=stats,
                characters=len(entry.text),
                is_current=i == tape.index,
            )
        )
    return rows


def format_stats(stats: DiffStats) -> str:
    """Render stats as ``+12 −3``, or ``·`` when nothing changed."""
    parts = []
    if stats.added > 0:
        parts.append(f"+{stats.added}")
    if stats.removed > 0:
        parts.append(f"−{stats.removed}")
    return " ".join(parts) if parts else "·"


def write_history_tape(f: TextIO, rows: list[HistoryRow]) -> None:
    """Write the history browser as text, marking the current position with ``*``.

    Args:
        f: File object to write to
        rows: Rows from build_history_rows
    """
    if not rows:
        f.write("No history yet\n")
        return
    for row in rows:
        marker = "*" if row.is_current else " "
        f.write(
            f"{marker} {row.time:>8}  {row.label:<15} {format_stats(row.stats):<12} "
            f"{row.characters} c\n"
        )
