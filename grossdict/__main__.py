"""Main entry point for grossdict package."""

import argparse
import sys

from loguru import logger

from grossdict.automation import DictationSession, find_fields
from grossdict.automation.rapid import ANCHOR
from grossdict.cli import create_parser
from grossdict.core import Config, load_config
from grossdict.core.labels import build_block_map
from grossdict.editor import ManualScheduler, MemoryBuffer
from grossdict.reports import build_footer, write_block_map, write_footer
from grossdict.storage import JsonPreferenceStore, MemoryPreferenceStore, PreferenceStore
from grossdict.utils.helpers import expand_file_path
from grossdict.utils.logging import setup_logger


def _validate_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Validate argument combinations."""
    if args.rapid is not None:
        if args.rapid < 1:
            parser.error("--rapid needs at least one specimen")
        if not args.template:
            parser.error("--rapid requires --template")
    elif not args.file:
        parser.error("a dictation file is required")
    if args.template and args.rapid is None:
        parser.error("--template is only used with --rapid")


def _read_text(path: str, parser: argparse.ArgumentParser) -> str:
    """Read a text file, reporting failures through the parser."""
    try:
        with open(expand_file_path(path), encoding="utf-8") as f:  # type: ignore[arg-type]
            return f.read()
    except OSError as e:
        parser.error(f"Cannot read {path}: {e}")
    return ""


def _write_text(path: str, text: str) -> None:
    """Write ``text`` with a single trailing newline."""
    with open(expand_file_path(path), "w", encoding="utf-8") as f:  # type: ignore[arg-type]
        f.write(text.rstrip("\n") + "\n")


def _create_store(config: Config) -> PreferenceStore:
    """Persisted store when a preferences file is configured, else session-only."""
    if config.preferences_file:
        return JsonPreferenceStore(config.preferences_file)
    return MemoryPreferenceStore()


def _open_session(text: str, config: Config) -> DictationSession:
    """Session over an in-memory buffer with the caret at the end of ``text``."""
    buffer = MemoryBuffer(text.rstrip("\n"))
    session = DictationSession(buffer, ManualScheduler(), config, _create_store(config))
    session.add_notice_listener(lambda notice: logger.debug(f"Notice: {notice.message}"))
    return session


def _print_fields(text: str) -> None:
    """List every placeholder field."""
    fields = find_fields(text)
    if not fields:
        print("No fields")
        return
    for index, field in enumerate(fields, start=1):
        print(f"{index:>3}. {field.start}-{field.end}  {field.text(text)}")


def _append(session: DictationSession, path: str, specimen: bool) -> None:
    """Append the next block (or specimen) label and save the file."""
    inserted = session.insert_next_group() if specimen else session.insert_next_block()
    if not inserted:
        logger.error("No block label found to continue from")
        sys.exit(1)
    _write_text(path, session.buffer.text)
    last_line = session.buffer.text.rsplit("\n", 1)[-1]
    logger.info(f"Appended {last_line!r} to {path}")


def _run_rapid(config: Config, args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Build a batch of specimen blocks from a template."""
    template = _read_text(args.template, parser)
    if not template.strip():
        parser.error(f"Template {args.template} is empty")
    session = _open_session("", config)
    if not session.rapid.active:
        session.rapid_toggle()
    session.rapid_save_template(template.rstrip("\n"))
    session.rapid_apply_first()
    for _ in range(args.rapid - 1):
        session.rapid_append_next()

    text = session.buffer.text
    if text.endswith("\n" + ANCHOR):
        text = text[: -len(ANCHOR) - 1]
    if args.file:
        _write_text(args.file, text)
        logger.info(f"Wrote {args.rapid} specimen blocks to {args.file}")
    else:
        print(text)


def main():
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load configuration
    config = load_config(args.config, args, parser)

    # Setup logging
    setup_logger(verbose=config.verbose, debug=config.debug)

    _validate_args(args, parser)

    if args.rapid is not None:
        _run_rapid(config, args, parser)
        return

    text = _read_text(args.file, parser)
    session = _open_session(text, config)
    fmt = session.engine.fmt

    if args.blocks:
        write_block_map(sys.stdout, build_block_map(text, fmt))
    elif args.fields:
        _print_fields(text)
    elif args.append_block or args.append_specimen:
        _append(session, args.file, specimen=args.append_specimen)
    else:
        write_footer(sys.stdout, build_footer(session.buffer.text, fmt))


if __name__ == "__main__":
    main()
