"""Label grammar types."""

from dataclasses import dataclass
from enum import Enum

from grossdict.core.config import NumberingFormat


class LineKind(Enum):
    """Classification of a single buffer line."""

    RANGE = "range"  # A5-A10-  /  1A-1C-
    SINGLE = "single"  # A1-  /  1A-
    INDENTED = "indented"  # informational sub-line, never counted
    PLACEHOLDER = "placeholder"  # [___]- awaiting a label
    NONE = "none"


@dataclass(frozen=True)
class ParsedLabel:
    """A block label matched at the start of a line.

    For letter-number labels ``primary`` is the specimen letter and
    ``secondary`` the block number (int). For number-letter labels
    ``primary`` is the specimen number (str) and ``secondary`` the letter
    suffix (str). For ranges the fields describe the END of the range and
    ``range_start``/``range_start_primary`` the start.

    Attributes:
        primary: Specimen part of the label
        secondary: Block part of the label
        separator: Separator that followed the label
        raw_length: Length of the matched prefix; descriptive text starts there
        fmt: Numbering format the label was parsed under
        is_range: Whether the line names a block range
        range_start: Block part of the range start
        range_start_primary: Specimen part of the range start
    """

    primary: str
    secondary: int | str
    separator: str
    raw_length: int
    fmt: NumberingFormat
    is_range: bool = False
    range_start: int | str | None = None
    range_start_primary: str | None = None

    @property
    def label(self) -> str:
        """The label text without separator (the range end for ranges)."""
        return f"{self.primary}{self.secondary}"

    @property
    def start_label(self) -> str:
        """The label text of the range start, or of the block itself."""
        if not self.is_range:
            return self.label
        return f"{self.range_start_primary}{self.range_start}"


@dataclass(frozen=True)
class PlaceholderLine:
    """A bracket placeholder at the start of a line."""

    bracket_length: int  # length of "[___]"
    separator: str
    raw_length: int  # bracket plus separator


@dataclass(frozen=True)
class IndentedLabel:
    """An indented block-like sub-line."""

    indent: str
    primary: str
    secondary: int | str
    separator: str
    raw_length: int


@dataclass(frozen=True)
class LineMatch:
    """Tagged result of classifying a line."""

    kind: LineKind
    label: ParsedLabel | None = None
    placeholder: PlaceholderLine | None = None
    indented: IndentedLabel | None = None

    @property
    def counts(self) -> bool:
        """Whether this line can drive the block counter."""
        return self.kind in (LineKind.SINGLE, LineKind.RANGE)


NO_MATCH = LineMatch(LineKind.NONE)
