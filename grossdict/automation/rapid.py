"""Rapid mode: batch specimens stamped from a saved template.

The template's first line is a specimen header ("A. The specimen is
received ..."). Each specimen block is the template with the header
relabelled, and the buffer always ends with an anchor field ``[___]`` so the
next-field command lands there once every field is filled.
"""

import re
from collections.abc import Callable

from loguru import logger

from grossdict.core.config import NumberingFormat, RapidSettings
from grossdict.editor.buffer import TextBuffer
from grossdict.storage.preferences import PreferenceStore
from grossdict.utils.constants import Constants

HEADER_LN = re.compile(r"^([A-Z])\.\s*")
HEADER_NL = re.compile(r"^(\d+)\.\s*")
LABEL_LN = re.compile(r"^([A-Za-z]\d+)")
LABEL_NL = re.compile(r"^(\d+[A-Za-z]+)")

ANCHOR = Constants.PLACEHOLDER_ANCHOR


class RapidMode:
    """Batch specimen sequencer.

    Attributes:
        buffer: Host buffer accessor
        settings: Active flag, template and current specimen index
    """

    def __init__(
        self,
        buffer: TextBuffer,
        format_source: Callable[[], NumberingFormat],
        store: PreferenceStore | None = None,
    ) -> None:
        self.buffer = buffer
        self._format_source = format_source
        self._store = store
        self.settings = store.load_rapid() if store is not None else RapidSettings()

    @property
    def active(self) -> bool:
        """Whether rapid mode is on."""
        return self.settings.active

    @property
    def template(self) -> str | None:
        """The saved template text."""
        return self.settings.template

    @property
    def specimen_index(self) -> int:
        """0-based index of the most recently appended specimen."""
        return self.settings.specimen_index

    def _persist(self) -> None:
        if self._store is not None:
            self._store.save_rapid(self.settings)

    def toggle(self) -> bool:
        """Switch rapid mode; returns the new state."""
        self.settings.active = not self.settings.active
        self._persist()
        return self.settings.active

    def save_template(self, text: str) -> None:
        """Remember the template used for every specimen."""
        self.settings.template = text
        self._persist()

    def clear_template(self) -> None:
        """Forget the template."""
        self.settings.template = None
        self._persist()

    def reset(self) -> None:
        """Restart at the first specimen, keeping the template."""
        self.settings.specimen_index = 0
        self._persist()

    def specimen_label(self, index: int) -> str:
        """Header label for a specimen: ``A.`` ... ``Z.`` (wrapping) or ``1.``."""
        if self._format_source() == NumberingFormat.NUMBER_LETTER:
            return f"{index + 1}."
        return chr(ord("A") + index % 26) + "."

    def build_specimen_block(self, index: int) -> str:
        """Return the template with its first-line header relabelled for ``index``.

        A header in either format ("A. ..." or "1. ...") is replaced; a
        template without a header gets the label prepended.
        """
        if not self.settings.template:
            return ""
        lines = self.settings.template.split("\n")
        first = lines[0]
        label = self.specimen_label(index)
        m = HEADER_LN.match(first) or HEADER_NL.match(first)
        rest = first[m.end() :] if m else first
        lines[0] = f"{label} {rest}"
        return "\n".join(lines)

    def apply_first(self) -> bool:
        """Replace the buffer with the first specimen block and the anchor field."""
        if not self.settings.template:
            return False
        self.settings.specimen_index = 0
        self._persist()
        self.buffer.set_selection(0)
        self.buffer.text = self.build_specimen_block(0) + "\n" + ANCHOR
        self.buffer.set_selection(0)
        self.buffer.focus()
        logger.debug("[rapid] applied first specimen")
        return True

    def append_next(self) -> bool:
        """Append the next specimen block, moving the anchor to the end.

        The caret lands at the start of the new block.
        """
        if not self.settings.template:
            return False
        self.settings.specimen_index += 1
        self._persist()

        current = self.buffer.text
        if current.endswith("\n" + ANCHOR):
            current = current[: -len(ANCHOR) - 1]
        elif current.endswith(ANCHOR):
            current = current[: -len(ANCHOR)]

        base = current.rstrip()
        block = self.build_specimen_block(self.settings.specimen_index)
        self.buffer.text = f"{base}\n\n{block}\n{ANCHOR}"
        self.buffer.set_selection(len(base) + 2)
        self.buffer.focus()
        logger.debug(f"[rapid] appended specimen {self.specimen_label(self.specimen_index)}")
        return True

    def on_block_inserted(self, prefix: str) -> None:
        """Move the caret left of the separator of a just-inserted label.

        Lets the user extend ``A1-`` into ``A1-A3`` before moving on.
        """
        if not prefix:
            return
        pattern = LABEL_NL if self._format_source() == NumberingFormat.NUMBER_LETTER else LABEL_LN
        m = pattern.match(prefix)
        label_length = len(m.group(1)) if m else max(0, len(prefix) - 1)
        separator_length = len(prefix) - label_length
        if separator_length > 0:
            self.buffer.set_selection(max(0, self.buffer.selection[0] - separator_length))

    def status_text(self) -> str:
        """Sidebar status line."""
        if not self.settings.active:
            return ""
        if not self.settings.template:
            return "Paste template to begin"
        return f"Active: Specimen {self.specimen_label(self.specimen_index)}"
