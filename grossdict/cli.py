"""Command-line interface."""

import argparse

from grossdict.core.config import NumberingFormat


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="grossdict",
        description="Block labels, fields and summaries for gross dictation reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Footer summary: characters, blocks, next block, field progress
  %(prog)s report.txt

  # Block map with ranges and indented sub-lines
  %(prog)s report.txt --blocks

  # Append the next block label (A3- after A2) and save the file
  %(prog)s report.txt --append-block

  # Start the next specimen (A4 -> B1) in number-letter format
  %(prog)s report.txt --append-specimen --format number-letter

  # Five specimen blocks from a template, written to batch.txt
  %(prog)s batch.txt --rapid 5 --template template.txt

Example config.json:
{
  "numbering_format": "letter-number",
  "preferences_file": "~/.config/grossdict/preferences.json",
  "history_limit": 500,
  "verbose": true
}
        """,
    )

    parser.add_argument("file", nargs="?", help="Dictation text file")

    # Configuration
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        help="JSON configuration file (CLI args override JSON values)",
    )
    parser.add_argument(
        "--preferences",
        dest="preferences_file",
        type=str,
        help="JSON file holding persisted preferences",
    )
    parser.add_argument(
        "--format",
        dest="numbering_format",
        choices=[fmt.value for fmt in NumberingFormat],
        help="Block numbering format (default: stored preference, else letter-number)",
    )

    # Actions
    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("--blocks", action="store_true", help="Print the block map")
    actions.add_argument(
        "--fields", action="store_true", help="List placeholder fields with their offsets"
    )
    actions.add_argument(
        "--append-block",
        action="store_true",
        help="Append the next block label to the file",
    )
    actions.add_argument(
        "--append-specimen",
        action="store_true",
        help="Append the first block of the next specimen to the file",
    )
    actions.add_argument(
        "--rapid",
        type=int,
        metavar="N",
        help="Write N specimen blocks built from --template",
    )
    parser.add_argument("--template", type=str, help="Template file for --rapid")

    # Flags
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Debug logging (component traces on stderr)"
    )

    return parser
