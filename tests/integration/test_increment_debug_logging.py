"""Regression tests for component debug logging.

With debug logging on, each automatic label insertion leaves an
``[increment]`` trace and an info line naming the inserted block.
"""

import io

import pytest
from loguru import logger

from grossdict.utils.logging import setup_logger


@pytest.fixture
def log_capture():
    """Capture DEBUG output after the package logger is configured."""
    setup_logger(verbose=True, debug=True)
    capture = io.StringIO()
    handler_id = logger.add(capture, level="DEBUG", format="{message}")
    yield capture
    logger.remove(handler_id)


def test_first_character_trigger_is_traced(make_session, log_capture):
    """The first-character trigger logs the prefix it inserted."""
    session = make_session("A1-tissue\n")
    session.buffer.type_text("x")
    assert "[increment] first character prefixed with 'A2-'" in log_capture.getvalue()


def test_fresh_line_trigger_is_traced(make_session, log_capture):
    """The newline trigger logs the label of the fresh line."""
    session = make_session("A1-tissue")
    session.buffer.type_text("\n")
    assert "[increment] fresh line labelled 'A2-'" in log_capture.getvalue()


def test_block_insert_info_message(make_session, log_capture):
    """Every insertion is announced at info level."""
    session = make_session("A1-tissue")
    session.buffer.type_text("\n")
    assert "Block A2- inserted" in log_capture.getvalue()


def test_self_initiated_mutation_is_ignored(make_session, log_capture):
    """The engine's own write is skipped, not re-processed."""
    session = make_session("A1-tissue")
    session.buffer.type_text("\n")
    assert "[increment] ignoring self-initiated mutation" in log_capture.getvalue()


def test_placeholder_fill_is_traced(make_session, log_capture):
    """Filling a placeholder logs the chosen label."""
    session = make_session("A1-skin\n[___]-tumor", cursor=0)
    session.next_field()
    assert "[increment] placeholder filled with 'A2-'" in log_capture.getvalue()


def test_auto_advance_countdown_is_traced(make_session, scheduler, log_capture):
    """The countdown logs its delay."""
    session = make_session("Received [___] in formalin.", cursor=0)
    session.toggle_auto_advance()
    session.next_field()
    session.buffer.type_text("breast mass")
    assert "[auto-advance] counting down 1500 ms" in log_capture.getvalue()
