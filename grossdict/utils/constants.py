"""Constants used throughout the grossdict codebase."""


class Constants:
    """Centralized constants to avoid magic numbers and strings."""

    # Label separators
    DASH_VARIANTS = ("-", "–", "—")
    """Hyphen, en dash and em dash, all accepted as label separators."""

    DEFAULT_SEPARATOR = "-"
    """Separator used when a parsed label carries none."""

    RANGE_DISPLAY_SEPARATOR = "–"
    """Separator used when displaying a block range (e.g. A1–A3)."""

    # Placeholder fields
    PLACEHOLDER_ANCHOR = "[___]"
    """Bottom anchor field appended in rapid mode."""

    # Specimen header
    SPECIMEN_HEADER_PHRASE = "the specimen is received"
    """Phrase that follows a specimen letter on a specimen header line."""

    # Auto-advance
    MIN_DELAY_MS = 300
    """Lower clamp for the auto-advance debounce delay."""

    MAX_DELAY_MS = 8000
    """Upper clamp for the auto-advance debounce delay."""

    DEFAULT_DELAY_MS = 1500
    """Default auto-advance debounce delay."""

    DEFAULT_CONTINUATION_CHARS = (",", ".")
    """Trailing characters that hold an auto-advance."""

    DEFAULT_CONTINUATION_WORDS = (
        "with",
        "including",
        "includes",
        "and",
        "or",
        "to",
        "of",
        "the",
        "a",
        "an",
    )
    """Trailing words that hold an auto-advance."""

    TRAILING_PUNCTUATION = ".,;:!?"
    """Punctuation stripped from the last token before word matching."""

    MIN_LEARNED_WORD_LENGTH = 2
    """Shortest context word that can be learned as a hold word."""

    # History tape
    HISTORY_LIMIT = 500
    """Maximum number of snapshots kept on the history tape."""

    # Completion check
    MIN_COMPLETE_LENGTH = 50
    """A report needs more than this many characters to count as complete."""
