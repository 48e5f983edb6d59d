"""Footer summary: size, block count, next block and field progress."""

from typing import TextIO

from pydantic import BaseModel

from grossdict.automation.fields import field_progress, find_fields, is_complete
from grossdict.core.config import NumberingFormat
from grossdict.core.labels import count_blocks, infer_specimen_from_text, next_block_preview


class FooterSummary(BaseModel):
    """Status figures for a buffer."""

    characters: int
    blocks: int
    next_block: str | None = None
    specimen: str | None = None
    fields_total: int = 0
    field_progress: str = ""
    complete: bool = False


def build_footer(text: str, fmt: NumberingFormat, cursor: int | None = None) -> FooterSummary:
    """Summarize a buffer.

    Args:
        text: Buffer text
        fmt: Active numbering format
        cursor: Caret offset (defaults to the end of the text)

    Returns:
        FooterSummary
    """
    pos = len(text) if cursor is None else cursor
    return FooterSummary(
        characters=len(text),
        blocks=count_blocks(text, fmt),
        next_block=next_block_preview(text, fmt, pos),
        specimen=infer_specimen_from_text(text),
        fields_total=len(find_fields(text)),
        field_progress=field_progress(text, pos),
        complete=is_complete(text),
    )


def write_footer(f: TextIO, summary: FooterSummary) -> None:
    """Write the footer summary as ``key: value`` lines."""
    f.write(f"Characters: {summary.characters}\n")
    f.write(f"Blocks: {summary.blocks}\n")
    if summary.next_block:
        f.write(f"Next block: {summary.next_block.rstrip()}\n")
    if summary.specimen:
        f.write(f"Specimen: {summary.specimen}\n")
    if summary.fields_total:
        f.write(f"Fields: {summary.field_progress}\n")
    f.write(f"Complete: {'yes' if summary.complete else 'no'}\n")
