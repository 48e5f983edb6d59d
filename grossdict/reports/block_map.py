"""Block map report."""

from typing import TextIO

from grossdict.core.labels import BlockMapEntry


def write_block_map(f: TextIO, entries: list[BlockMapEntry]) -> None:
    """Write one line per block: label, then its description.

    Args:
        f: File object to write to
        entries: Block map entries in buffer order
    """
    if not entries:
        f.write("No blocks detected\n")
        return
    width = max(len(entry.label) for entry in entries)
    for entry in entries:
        f.write(f"{entry.label.ljust(width)}  {entry.desc}".rstrip() + "\n")
