"""Events emitted by the automation layer."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel


class AdvanceEvent(BaseModel):
    """Emitted after a block label was inserted.

    ``from_label``/``to_label`` are the block parts of the labels (block
    numbers in letter-number format, letter suffixes in number-letter
    format). ``from_label`` is None when the label started a new series.
    """

    prefix: str
    from_label: int | str | None
    to_label: int | str
    was_range: bool = False
    was_placeholder: bool = False


@dataclass
class LastAutoInsert:
    """The most recent engine-performed insertion."""

    inserted_text: str
    length: int
    was_placeholder: bool = False


class NoticeKind(Enum):
    """Transient user notices; none of them are failures."""

    NOTHING_TO_UNDO = "Nothing to undo"
    NOTHING_TO_REDO = "Nothing to redo"
    UNDONE = "Undone"
    REDONE = "Redone"
    RESTORED = "Restored"
    NO_FIELDS = "No fields remaining"
    NO_BLOCK = "No block above cursor"
    NOTHING_TO_UNDO_INSERT = "Nothing to undo for the last insert"
    LEARNED_WORD = "Learned hold word"
    AUTO_ADVANCE_ON = "Auto-advance ON"
    AUTO_ADVANCE_OFF = "Auto-advance OFF"
    BLOCK_INSERTED = "Block"
    ALL_FIELDS_COMPLETE = "All fields complete"


@dataclass(frozen=True)
class Notice:
    """A transient message for the host's toast area."""

    kind: NoticeKind
    detail: str = ""

    @property
    def message(self) -> str:
        """Human-readable text."""
        if self.detail:
            return f"{self.kind.value}: {self.detail}"
        return self.kind.value
