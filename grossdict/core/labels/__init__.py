"""Block label grammar: parsing, incrementing and block maps."""

from grossdict.core.labels.block_map import (
    BlockMapEntry,
    build_block_map,
    count_blocks,
    infer_specimen_from_text,
    infer_specimen_site,
    next_block_preview,
    placeholder_label,
    specimen_for_format,
)
from grossdict.core.labels.formatting import (
    first_label,
    format_range_label,
    next_group_label,
    next_label,
    next_letter_suffix,
    normalize_separator,
)
from grossdict.core.labels.parsing import (
    classify_line,
    find_anchor_block,
    find_last_block,
    parse_line,
)
from grossdict.core.labels.types import (
    IndentedLabel,
    LineKind,
    LineMatch,
    ParsedLabel,
    PlaceholderLine,
)

__all__ = [
    "BlockMapEntry",
    "IndentedLabel",
    "LineKind",
    "LineMatch",
    "ParsedLabel",
    "PlaceholderLine",
    "build_block_map",
    "classify_line",
    "count_blocks",
    "find_anchor_block",
    "find_last_block",
    "first_label",
    "format_range_label",
    "infer_specimen_from_text",
    "infer_specimen_site",
    "next_block_preview",
    "next_group_label",
    "next_label",
    "next_letter_suffix",
    "normalize_separator",
    "parse_line",
    "placeholder_label",
    "specimen_for_format",
]
