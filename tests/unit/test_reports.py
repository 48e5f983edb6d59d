"""Unit tests for the text reports."""

import io

from grossdict.automation import HistoryTape, SnapshotLabel
from grossdict.core import NumberingFormat
from grossdict.core.labels import build_block_map
from grossdict.editor import MemoryBuffer
from grossdict.reports import (
    build_footer,
    build_history_rows,
    write_block_map,
    write_footer,
    write_history_tape,
)

LN = NumberingFormat.LETTER_NUMBER


def _tape(*texts: str) -> tuple[HistoryTape, MemoryBuffer]:
    buffer = MemoryBuffer()
    tape = HistoryTape(buffer)
    for text in texts:
        buffer.text = text
        tape.record_snapshot(SnapshotLabel.TYPED)
    return tape, buffer


class TestFooter:
    """Test build_footer and write_footer."""

    def test_counts_blocks(self) -> None:
        """The footer counts block lines."""
        assert build_footer("A1-skin\nA2-fat", LN).blocks == 2

    def test_previews_next_block(self) -> None:
        """The footer previews the next label."""
        assert build_footer("A1-skin\nA2-fat", LN).next_block == "A3-"

    def test_reports_field_progress(self) -> None:
        """Field progress is measured from the cursor."""
        assert build_footer("A1-[___] and [___]", LN, cursor=0).field_progress == "1 / 2"

    def test_writes_lines(self) -> None:
        """The written footer includes the next block label."""
        f = io.StringIO()
        write_footer(f, build_footer("A1-skin", LN))
        assert "Next block: A2-" in f.getvalue()


class TestWriteBlockMap:
    """Test write_block_map."""

    def test_aligns_descriptions(self) -> None:
        """Labels are padded to a common width."""
        f = io.StringIO()
        write_block_map(f, build_block_map("A1-skin\nA2-A4-fat", LN))
        assert f.getvalue() == "A1     skin\nA2–A4  fat\n"

    def test_empty_map(self) -> None:
        """An empty map says so."""
        f = io.StringIO()
        write_block_map(f, [])
        assert f.getvalue() == "No blocks detected\n"


class TestHistoryRows:
    """Test build_history_rows."""

    def test_newest_first(self) -> None:
        """Rows run from the newest entry to the oldest."""
        tape, buffer = _tape("a", "ab")
        rows = build_history_rows(tape, buffer.text)
        assert [row.index for row in rows] == [1, 0]

    def test_unsaved_row_leads_when_dirty(self) -> None:
        """A diverged buffer adds an unsaved row on top."""
        tape, buffer = _tape("a")
        buffer.text = "abc"
        assert build_history_rows(tape, buffer.text)[0].label == "unsaved"

    def test_first_entry_counts_all_characters(self) -> None:
        """The oldest entry is compared against nothing."""
        tape, buffer = _tape("abc")
        assert build_history_rows(tape, buffer.text)[0].stats.added == 3

    def test_marks_current_position(self) -> None:
        """The current entry is flagged."""
        tape, buffer = _tape("a", "ab")
        tape.undo()
        rows = build_history_rows(tape, buffer.text)
        assert [row.is_current for row in rows] == [False, True]

    def test_writes_diff_stats(self) -> None:
        """Written rows show added and removed counts."""
        tape, buffer = _tape("abc", "abXYc")
        f = io.StringIO()
        write_history_tape(f, build_history_rows(tape, buffer.text))
        assert "+2" in f.getvalue().splitlines()[0]

    def test_empty_tape(self) -> None:
        """An empty tape says so."""
        tape, buffer = _tape()
        f = io.StringIO()
        write_history_tape(f, build_history_rows(tape, buffer.text))
        assert f.getvalue() == "No history yet\n"
