"""Label increment and formatting."""

from grossdict.core.config import NumberingFormat
from grossdict.core.labels.types import ParsedLabel
from grossdict.utils.constants import Constants


def next_letter_suffix(letters: str) -> str:
    """Increment a letter suffix like an odometer.

    A -> B, Z -> AA, AZ -> BA, ZZ -> AAA

    Args:
        letters: Uppercase letter suffix

    Returns:
        The following suffix
    """
    chars = list(letters)
    i = len(chars) - 1
    while i >= 0:
        if chars[i] < "Z":
            chars[i] = chr(ord(chars[i]) + 1)
            return "".join(chars)
        chars[i] = "A"
        i -= 1
    return "A" + "".join(chars)


def normalize_separator(separator: str | None) -> str:
    """Return the separator to reuse, defaulting to a hyphen."""
    if not separator:
        return Constants.DEFAULT_SEPARATOR
    return separator


def next_secondary(parsed: ParsedLabel) -> int | str:
    """Block part of the label following ``parsed``."""
    if parsed.fmt == NumberingFormat.NUMBER_LETTER:
        return next_letter_suffix(str(parsed.secondary))
    return int(parsed.secondary) + 1


def next_label(parsed: ParsedLabel, separator: str | None = None) -> str:
    """Return the prefix (label + separator) of the block after ``parsed``.

    A4- -> A5-, 1D- -> 1E-, 1Z- -> 1AA-. For ranges the increment continues
    from the range end: A5-A10- -> A11-.

    Args:
        parsed: The label to continue from
        separator: Separator override (e.g. the one a placeholder carried)

    Returns:
        The next label prefix
    """
    sep = normalize_separator(separator or parsed.separator)
    return f"{parsed.primary}{next_secondary(parsed)}{sep}"


def next_group_label(parsed: ParsedLabel, separator: str | None = None) -> str | None:
    """Return the first label prefix of the next specimen.

    A4- -> B1-, 1D- -> 2A-. There is no specimen after Z in letter-number
    format, so Z returns None.
    """
    sep = normalize_separator(separator or parsed.separator)
    if parsed.fmt == NumberingFormat.NUMBER_LETTER:
        return f"{int(parsed.primary) + 1}A{sep}"
    if parsed.primary >= "Z":
        return None
    return f"{chr(ord(parsed.primary) + 1)}1{sep}"


def first_label(
    fmt: NumberingFormat, specimen: str | None = None, separator: str | None = None
) -> str:
    """Return the first label prefix of a specimen (A1- or 1A-)."""
    sep = normalize_separator(separator)
    if fmt == NumberingFormat.NUMBER_LETTER:
        return f"{specimen or '1'}A{sep}"
    return f"{specimen or 'A'}1{sep}"


def format_range_label(parsed: ParsedLabel) -> str:
    """Display label for a block map entry (A1 or A1–A3)."""
    if not parsed.is_range:
        return parsed.label
    return f"{parsed.start_label}{Constants.RANGE_DISPLAY_SEPARATOR}{parsed.label}"
