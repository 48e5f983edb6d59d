"""Block map, footer summary and specimen inference."""

from dataclasses import dataclass

from grossdict.core.config import NumberingFormat
from grossdict.core.labels import patterns
from grossdict.core.labels.formatting import first_label, format_range_label, next_label
from grossdict.core.labels.parsing import classify_line, find_last_block, is_indented
from grossdict.core.labels.types import LineKind, ParsedLabel


@dataclass(frozen=True)
class BlockMapEntry:
    """One row of the block map display."""

    label: str
    desc: str
    indented: bool = False
    is_range: bool = False


def build_block_map(text: str, fmt: NumberingFormat) -> list[BlockMapEntry]:
    """Build the block map for a buffer.

    Args:
        text: Buffer text
        fmt: Active numbering format

    Returns:
        One entry per block, range or indented sub-line, in buffer order
    """
    entries = []
    for line in text.split("\n"):
        match = classify_line(line, fmt)
        if match.kind == LineKind.INDENTED and match.indented is not None:
            sub = match.indented
            entries.append(
                BlockMapEntry(
                    label=f"  {sub.primary}{sub.secondary}",
                    desc=line[sub.raw_length :].strip(),
                    indented=True,
                )
            )
        elif match.label is not None:
            entries.append(
                BlockMapEntry(
                    label=format_range_label(match.label),
                    desc=line[match.label.raw_length :].strip(),
                    is_range=match.label.is_range,
                )
            )
    return entries


def count_blocks(text: str, fmt: NumberingFormat) -> int:
    """Count lines carrying a block or range label."""
    return sum(1 for line in text.split("\n") if classify_line(line, fmt).counts)


def next_block_preview(text: str, fmt: NumberingFormat, cursor: int | None = None) -> str | None:
    """Return the label the next block insertion would produce, if any."""
    result = find_last_block(text, fmt, cursor)
    if result is None:
        return None
    return next_label(result[0])


def infer_specimen_from_text(text: str) -> str | None:
    """Return the specimen token (letter or number) of the last specimen header line."""
    letter = None
    for line in text.split("\n"):
        m = patterns.SPECIMEN_HEADER.match(line)
        if m:
            letter = m.group(1)
    return letter


def infer_specimen_site(text: str) -> str | None:
    """Extract the filled-in specimen site from a report.

    Matches ``specimen site "VALUE"`` and truncates VALUE at its first comma,
    which drops orientation details ("right breast lump, sutures long...").

    Returns:
        The site, or None if absent or still a placeholder
    """
    m = patterns.SPECIMEN_SITE.search(text)
    if not m:
        return None
    site = m.group(1).strip()
    if not site or site.startswith("["):
        return None
    comma = site.find(",")
    if comma > 2:
        site = site[:comma].strip()
    return site or None


def specimen_for_format(token: str, fmt: NumberingFormat) -> str | None:
    """Translate a specimen header token into the active format.

    Letter-number labels use letters, number-letter labels use numbers;
    ``C`` and ``3`` name the same specimen.
    """
    if fmt == NumberingFormat.NUMBER_LETTER:
        if token.isdigit():
            return str(int(token))
        return str(ord(token) - ord("A") + 1)
    if token.isdigit():
        number = int(token)
        if 1 <= number <= 26:
            return chr(ord("A") + number - 1)
        return None
    return token


def placeholder_label(
    text: str, fmt: NumberingFormat, line_start: int, separator: str | None
) -> tuple[str, ParsedLabel | None]:
    """Choose the label that fills a placeholder starting at ``line_start``.

    Scans upward, skipping indented and placeholder lines. The nearest block
    label is continued; a specimen header met first starts that specimen's
    series; with neither, the series starts at A1 (or 1A).

    Returns:
        Tuple of (label prefix, the block it continues or None)
    """
    lines = text[:line_start].split("\n")
    for line in reversed(lines):
        if is_indented(line):
            continue
        header = patterns.SPECIMEN_HEADER.match(line)
        if header:
            specimen = specimen_for_format(header.group(1), fmt)
            return first_label(fmt, specimen, separator), None
        match = classify_line(line, fmt)
        if match.label is not None:
            return next_label(match.label, separator), match.label
    return first_label(fmt, None, separator), None
