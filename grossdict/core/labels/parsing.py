"""Line classification for the block label grammar.

Each numbering format has an ordered list of tagged matchers. A line is
classified by the first matcher that accepts it, so a range is always
preferred over the single block its prefix would also match.
"""

import re
from collections.abc import Callable

from grossdict.core.config import NumberingFormat
from grossdict.core.labels import patterns
from grossdict.core.labels.types import (
    NO_MATCH,
    IndentedLabel,
    LineKind,
    LineMatch,
    ParsedLabel,
    PlaceholderLine,
)

Matcher = Callable[[str], LineMatch | None]


def suffix_order(suffix: str) -> tuple[int, str]:
    """Sort key for letter suffixes: A < Z < AA < AZ < BA."""
    return len(suffix), suffix


def _strip_line_ending(line: str) -> str:
    # Only line terminators; a trailing tab or space may be the separator.
    return line.rstrip("\r\n")


def _match_placeholder(line: str) -> LineMatch | None:
    m = patterns.PLACEHOLDER_LINE.match(line)
    if not m:
        return None
    placeholder = PlaceholderLine(
        bracket_length=len(m.group(1)),
        separator=m.group(2),
        raw_length=len(m.group(0)),
    )
    return LineMatch(LineKind.PLACEHOLDER, placeholder=placeholder)


def _indented_matcher(pattern: re.Pattern, numeric_secondary: bool) -> Matcher:
    def match(line: str) -> LineMatch | None:
        m = pattern.match(line)
        if not m:
            return None
        secondary: int | str = int(m.group(3)) if numeric_secondary else m.group(3)
        indented = IndentedLabel(
            indent=m.group(1),
            primary=m.group(2),
            secondary=secondary,
            separator=m.group(4),
            raw_length=len(m.group(0)),
        )
        return LineMatch(LineKind.INDENTED, indented=indented)

    return match


def _match_range_ln(line: str) -> LineMatch | None:
    m = patterns.RANGE_LN.match(line)
    if not m:
        return None
    start_letter = m.group(1)
    start_num = int(m.group(2))
    end_letter = m.group(3) or start_letter
    end_num = int(m.group(4))
    if end_letter == start_letter and end_num < start_num:
        return NO_MATCH
    label = ParsedLabel(
        primary=end_letter,
        secondary=end_num,
        separator=m.group(5),
        raw_length=len(m.group(0)),
        fmt=NumberingFormat.LETTER_NUMBER,
        is_range=True,
        range_start=start_num,
        range_start_primary=start_letter,
    )
    return LineMatch(LineKind.RANGE, label=label)


def _match_block_ln(line: str) -> LineMatch | None:
    m = patterns.BLOCK_LN.match(line)
    if not m:
        return None
    label = ParsedLabel(
        primary=m.group(1),
        secondary=int(m.group(2)),
        separator=m.group(3),
        raw_length=len(m.group(0)),
        fmt=NumberingFormat.LETTER_NUMBER,
    )
    return LineMatch(LineKind.SINGLE, label=label)


def _match_range_nl(line: str) -> LineMatch | None:
    m = patterns.RANGE_NL.match(line)
    if not m:
        return None
    start_specimen = m.group(1)
    start_suffix = m.group(2)
    end_specimen = m.group(3) or start_specimen
    end_suffix = m.group(4)
    same_specimen = int(end_specimen) == int(start_specimen)
    if same_specimen and suffix_order(end_suffix) < suffix_order(start_suffix):
        return NO_MATCH
    label = ParsedLabel(
        primary=end_specimen,
        secondary=end_suffix,
        separator=m.group(5),
        raw_length=len(m.group(0)),
        fmt=NumberingFormat.NUMBER_LETTER,
        is_range=True,
        range_start=start_suffix,
        range_start_primary=start_specimen,
    )
    return LineMatch(LineKind.RANGE, label=label)


def _match_block_nl(line: str) -> LineMatch | None:
    m = patterns.BLOCK_NL.match(line)
    if not m:
        return None
    label = ParsedLabel(
        primary=m.group(1),
        secondary=m.group(2),
        separator=m.group(3),
        raw_length=len(m.group(0)),
        fmt=NumberingFormat.NUMBER_LETTER,
    )
    return LineMatch(LineKind.SINGLE, label=label)


MATCHERS: dict[NumberingFormat, tuple[Matcher, ...]] = {
    NumberingFormat.LETTER_NUMBER: (
        _match_placeholder,
        _indented_matcher(patterns.INDENTED_LN, numeric_secondary=True),
        _match_range_ln,
        _match_block_ln,
    ),
    NumberingFormat.NUMBER_LETTER: (
        _match_placeholder,
        _indented_matcher(patterns.INDENTED_NL, numeric_secondary=False),
        _match_range_nl,
        _match_block_nl,
    ),
}


def classify_line(line: str, fmt: NumberingFormat) -> LineMatch:
    """Classify a line against the grammar of the given format.

    A malformed range (end before start within one specimen) classifies as
    NONE rather than falling through to the single-block matcher.

    Args:
        line: A single line of buffer text, without its newline
        fmt: Active numbering format

    Returns:
        LineMatch tagged with the line kind
    """
    line = _strip_line_ending(line)
    for matcher in MATCHERS[fmt]:
        result = matcher(line)
        if result is not None:
            return result
    return NO_MATCH


def parse_line(line: str, fmt: NumberingFormat) -> ParsedLabel | None:
    """Parse a block or block-range label at the start of a line.

    Returns:
        ParsedLabel, or None for indented, placeholder and non-label lines
    """
    return classify_line(line, fmt).label


def is_indented(line: str) -> bool:
    """Whether the line starts with whitespace."""
    return line[:1].isspace()


def find_last_block(
    text: str, fmt: NumberingFormat, up_to: int | None = None
) -> tuple[ParsedLabel, int] | None:
    """Find the nearest block label above ``up_to``.

    Indented sub-lines and placeholder lines are skipped; any other line
    that does not parse is passed over as well.

    Args:
        text: Buffer text
        fmt: Active numbering format
        up_to: Offset to scan upward from (defaults to the end of the text)

    Returns:
        Tuple of (parsed label, line index), or None when no block exists
    """
    head = text if up_to is None else text[:up_to]
    lines = head.split("\n")
    for index in range(len(lines) - 1, -1, -1):
        line = lines[index]
        if is_indented(line):
            continue
        match = classify_line(line, fmt)
        if match.kind == LineKind.PLACEHOLDER:
            continue
        if match.label is not None:
            return match.label, index
    return None


def find_anchor_block(text: str, fmt: NumberingFormat, line_start: int) -> ParsedLabel | None:
    """Return the label of the nearest meaningful line above ``line_start``.

    Blank, indented and placeholder lines are skipped. The first remaining
    line must itself be a block label; prose in between breaks the chain.
    """
    lines = text[:line_start].split("\n")
    # The slice ends with the newline before line_start, leaving an empty tail.
    for line in reversed(lines[:-1]):
        if not line.strip() or is_indented(line):
            continue
        match = classify_line(line, fmt)
        if match.kind == LineKind.PLACEHOLDER:
            continue
        return match.label
    return None
