"""Block label increment engine.

Watches buffer mutations and selections and splices the next block label
into the buffer when a trigger condition holds. Triggers, in priority order:

1. A character typed at the start of a placeholder line (``x[___]-``) exposes
   the placeholder behind it.
2. A newline edit left the caret on a fresh empty line below a block line.
3. The first character was typed on a line below a block line.
4. The selection exactly spans a line-start placeholder (selection trigger).
"""

from loguru import logger

from grossdict.automation.events import AdvanceEvent, LastAutoInsert
from grossdict.core.config import NumberingFormat
from grossdict.core.labels import (
    LineKind,
    ParsedLabel,
    PlaceholderLine,
    classify_line,
    find_anchor_block,
    find_last_block,
    next_group_label,
    next_label,
    placeholder_label,
)
from grossdict.core.labels.formatting import next_secondary
from grossdict.editor.buffer import EditKind, TextBuffer
from grossdict.utils.helpers import line_bounds


def _advance_event(
    parsed: ParsedLabel | None,
    prefix: str,
    fmt: NumberingFormat,
    was_placeholder: bool = False,
) -> AdvanceEvent:
    if parsed is None:
        # A new series: report the block part of the inserted label.
        parsed_prefix = classify_line(prefix, fmt).label
        to_label = parsed_prefix.secondary if parsed_prefix is not None else prefix
        return AdvanceEvent(
            prefix=prefix, from_label=None, to_label=to_label, was_placeholder=was_placeholder
        )
    return AdvanceEvent(
        prefix=prefix,
        from_label=parsed.secondary,
        to_label=next_secondary(parsed),
        was_range=parsed.is_range,
        was_placeholder=was_placeholder,
    )


class IncrementEngine:
    """Inserts block labels into a host buffer.

    Attributes:
        buffer: Host buffer accessor
        fmt: Active numbering format; changing it never reparses existing text
        last_insert: Most recent engine insertion, for single-level undo
    """

    def __init__(
        self, buffer: TextBuffer, fmt: NumberingFormat = NumberingFormat.LETTER_NUMBER
    ) -> None:
        self.buffer = buffer
        self.fmt = fmt
        self.last_insert: LastAutoInsert | None = None
        self._ignore_next = False

    def consume_ignore(self) -> bool:
        """Consume the reentrancy flag.

        Returns:
            True if the current notification was caused by the engine's own
            splice and must be ignored
        """
        if self._ignore_next:
            self._ignore_next = False
            logger.debug("[increment] ignoring self-initiated mutation")
            return True
        return False

    def _write(self, text: str, cursor: int) -> None:
        self._ignore_next = True
        self.buffer.text = text
        self.buffer.set_selection(cursor)
        self.buffer.focus()

    def _record(self, inserted: str, was_placeholder: bool = False) -> None:
        self.last_insert = LastAutoInsert(
            inserted_text=inserted, length=len(inserted), was_placeholder=was_placeholder
        )

    # Reactive triggers

    def on_mutation(self, kind: EditKind) -> AdvanceEvent | None:
        """React to a host edit that has already been applied.

        Args:
            kind: Kind of edit the host reported

        Returns:
            AdvanceEvent if a label was inserted, otherwise None
        """
        if self.consume_ignore():
            return None

        text = self.buffer.text
        pos = self.buffer.selection[0]
        line_start, line_end = line_bounds(text, pos)
        line = text[line_start:line_end]

        if kind == EditKind.PLAIN_INSERT:
            event = self._fill_exposed_placeholder(text, pos, line_start, line)
            if event is not None:
                return event

        if kind == EditKind.NEWLINE and not line.strip():
            return self._label_fresh_line(text, line_start)

        if kind == EditKind.PLAIN_INSERT and len(line) == 1 and not line.isspace():
            return self._label_first_character(text, pos, line_start)

        return None

    def on_selection(self) -> AdvanceEvent | None:
        """Fill a line-start placeholder that the selection exactly spans."""
        text = self.buffer.text
        start, end = self.buffer.selection
        if start == end or start >= len(text):
            return None
        if text[start] != "[" or text[end - 1] != "]":
            return None
        line_start, line_end = line_bounds(text, start)
        if start != line_start:
            return None
        match = classify_line(text[line_start:line_end], self.fmt)
        if match.kind != LineKind.PLACEHOLDER or match.placeholder is None:
            return None
        if end != line_start + match.placeholder.bracket_length:
            return None
        logger.debug(f"[increment] selection spans placeholder at {line_start}")
        return self._replace_placeholder(text, line_start, match.placeholder)

    def _fill_exposed_placeholder(
        self, text: str, pos: int, line_start: int, line: str
    ) -> AdvanceEvent | None:
        # Edits inside the brackets never fill; only a character typed in front does.
        if len(line) > 1 and pos == line_start + 1:
            stray = classify_line(line[1:], self.fmt)
            if stray.kind == LineKind.PLACEHOLDER and stray.placeholder is not None:
                logger.debug(f"[increment] character typed before placeholder at {line_start}")
                return self._replace_placeholder(text, line_start, stray.placeholder, extra=1)
        return None

    def _replace_placeholder(
        self, text: str, line_start: int, placeholder: PlaceholderLine, extra: int = 0
    ) -> AdvanceEvent:
        prefix, parsed = placeholder_label(text, self.fmt, line_start, placeholder.separator)
        rest = text[line_start + extra + placeholder.raw_length :]
        self._write(text[:line_start] + prefix + rest, line_start + len(prefix))
        self._record(prefix, was_placeholder=True)
        logger.debug(f"[increment] placeholder filled with {prefix!r}")
        return _advance_event(parsed, prefix, self.fmt, was_placeholder=True)

    def _label_fresh_line(self, text: str, line_start: int) -> AdvanceEvent | None:
        parsed = find_anchor_block(text, self.fmt, line_start)
        if parsed is None:
            return None
        prefix = next_label(parsed)
        self._write(text[:line_start] + prefix + text[line_start:], line_start + len(prefix))
        self._record(prefix)
        logger.debug(f"[increment] fresh line labelled {prefix!r}")
        return _advance_event(parsed, prefix, self.fmt)

    def _label_first_character(self, text: str, pos: int, line_start: int) -> AdvanceEvent | None:
        parsed = find_anchor_block(text, self.fmt, line_start)
        if parsed is None:
            return None
        prefix = next_label(parsed)
        self._write(text[:line_start] + prefix + text[line_start:], pos + len(prefix))
        self._record(prefix)
        logger.debug(f"[increment] first character prefixed with {prefix!r}")
        return _advance_event(parsed, prefix, self.fmt)

    # Manual operations

    def _placeholder_at_caret(self, text: str) -> tuple[int, PlaceholderLine] | None:
        for pos in self.buffer.selection:
            line_start, line_end = line_bounds(text, pos)
            match = classify_line(text[line_start:line_end], self.fmt)
            if match.kind == LineKind.PLACEHOLDER and match.placeholder is not None:
                return line_start, match.placeholder
        return None

    def _append_line(self, prefix: str) -> None:
        text = self.buffer.text
        start, end = self.buffer.selection
        inserted = "\n" + prefix
        self._write(text[:start] + inserted + text[end:], start + len(inserted))
        self._record(inserted)

    def insert_next_block(self) -> AdvanceEvent | None:
        """Insert the next block label at the caret.

        Fills a placeholder on the caret's line if there is one; otherwise
        starts a new line after the caret with the next label.

        Returns:
            AdvanceEvent, or None if no block exists above the caret
        """
        text = self.buffer.text
        found = self._placeholder_at_caret(text)
        if found is not None:
            line_start, placeholder = found
            return self._replace_placeholder(text, line_start, placeholder)

        result = find_last_block(text, self.fmt, self.buffer.selection[0])
        if result is None:
            logger.debug("[increment] no block above caret")
            return None
        parsed = result[0]
        prefix = next_label(parsed)
        self._append_line(prefix)
        return _advance_event(parsed, prefix, self.fmt)

    def insert_next_group(self) -> AdvanceEvent | None:
        """Start the next specimen on a new line (A4 -> B1, 1D -> 2A)."""
        result = find_last_block(self.buffer.text, self.fmt, self.buffer.selection[0])
        if result is None:
            return None
        prefix = next_group_label(result[0])
        if prefix is None:
            logger.debug(f"[increment] no specimen after {result[0].primary}")
            return None
        self._append_line(prefix)
        return _advance_event(None, prefix, self.fmt)

    def undo_last_insert(self) -> bool:
        """Remove the last engine insertion if it sits right before the caret.

        Returns:
            True if the insertion was removed
        """
        insert = self.last_insert
        if insert is None:
            return False
        text = self.buffer.text
        pos = self.buffer.selection[0]
        start = pos - insert.length
        if start < 0 or text[start:pos] != insert.inserted_text:
            return False
        self._write(text[:start] + text[pos:], start)
        self.last_insert = None
        logger.debug(f"[increment] removed {insert.inserted_text!r}")
        return True
