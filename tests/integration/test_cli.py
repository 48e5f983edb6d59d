"""Integration tests for the command-line entry point."""

import sys

import pytest

from grossdict.__main__ import main

TEMPLATE = "A. The specimen is received in formalin, measuring [___] cm.\nA1-[___]"


def _run(monkeypatch, *argv: str) -> None:
    monkeypatch.setattr(sys, "argv", ["grossdict", *argv])
    main()


@pytest.fixture
def dictation(tmp_path):
    """A dictation file with two blocks of specimen A."""
    path = tmp_path / "case.txt"
    path.write_text("A. Skin ellipse.\nA1-tip\nA2-center\n")
    return path


class TestReports:
    """Test the read-only report actions."""

    def test_footer_by_default(self, monkeypatch, capsys, dictation) -> None:
        """The footer reports the block count and the next label."""
        _run(monkeypatch, str(dictation))
        out = capsys.readouterr().out
        assert "Blocks: 2" in out
        assert "Next block: A3-" in out

    def test_block_map(self, monkeypatch, capsys, dictation) -> None:
        """The block map lists each label with its description."""
        _run(monkeypatch, str(dictation), "--blocks")
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["A1  tip", "A2  center"]

    def test_fields(self, monkeypatch, capsys, tmp_path) -> None:
        """Placeholder fields are listed with their offsets."""
        path = tmp_path / "template.txt"
        path.write_text("Measuring [___] cm.\n")
        _run(monkeypatch, str(path), "--fields")
        assert capsys.readouterr().out == "  1. 10-15  [___]\n"

    def test_no_fields(self, monkeypatch, capsys, dictation) -> None:
        """A text without fields says so."""
        _run(monkeypatch, str(dictation), "--fields")
        assert capsys.readouterr().out == "No fields\n"

    def test_format_override(self, monkeypatch, capsys, tmp_path) -> None:
        """--format switches the numbering used for the next label."""
        path = tmp_path / "case.txt"
        path.write_text("1A-tip\n")
        _run(monkeypatch, str(path), "--format", "number-letter")
        assert "Next block: 1B-" in capsys.readouterr().out


class TestAppend:
    """Test the actions that modify the dictation file."""

    def test_append_block(self, monkeypatch, dictation) -> None:
        """The next block label is appended on a new line."""
        _run(monkeypatch, str(dictation), "--append-block")
        assert dictation.read_text() == "A. Skin ellipse.\nA1-tip\nA2-center\nA3-\n"

    def test_append_specimen(self, monkeypatch, dictation) -> None:
        """The next specimen's first block is appended."""
        _run(monkeypatch, str(dictation), "--append-specimen")
        assert dictation.read_text().endswith("A2-center\nB1-\n")

    def test_append_without_blocks_exits(self, monkeypatch, tmp_path) -> None:
        """Appending to a text with no labels fails."""
        path = tmp_path / "case.txt"
        path.write_text("Received fresh.\n")
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, str(path), "--append-block")
        assert exc_info.value.code == 1


class TestRapid:
    """Test batch generation from a template."""

    def test_rapid_prints_specimens(self, monkeypatch, capsys, tmp_path) -> None:
        """Each specimen gets its own header."""
        template = tmp_path / "template.txt"
        template.write_text(TEMPLATE + "\n")
        _run(monkeypatch, "--rapid", "3", "--template", str(template))
        out = capsys.readouterr().out
        assert "A. The specimen" in out
        assert "C. The specimen" in out

    def test_rapid_drops_anchor(self, monkeypatch, capsys, tmp_path) -> None:
        """The trailing anchor field is not part of the output."""
        template = tmp_path / "template.txt"
        template.write_text(TEMPLATE + "\n")
        _run(monkeypatch, "--rapid", "1", "--template", str(template))
        assert capsys.readouterr().out == TEMPLATE + "\n"

    def test_rapid_writes_file(self, monkeypatch, tmp_path) -> None:
        """With a file argument the batch is written there."""
        template = tmp_path / "template.txt"
        template.write_text(TEMPLATE + "\n")
        output = tmp_path / "out.txt"
        _run(monkeypatch, str(output), "--rapid", "2", "--template", str(template))
        assert "B. The specimen" in output.read_text()


class TestArgumentErrors:
    """Test argument validation."""

    def test_missing_file(self, monkeypatch) -> None:
        """A dictation file is required outside rapid mode."""
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch)
        assert exc_info.value.code == 2

    def test_rapid_requires_template(self, monkeypatch) -> None:
        """--rapid without --template is rejected."""
        with pytest.raises(SystemExit):
            _run(monkeypatch, "--rapid", "2")

    def test_unreadable_file(self, monkeypatch, tmp_path) -> None:
        """A missing input file is reported as a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            _run(monkeypatch, str(tmp_path / "missing.txt"))
        assert exc_info.value.code == 2

    def test_missing_preferences_file(self, monkeypatch, tmp_path, dictation) -> None:
        """A preferences file that does not exist yet falls back to defaults."""
        prefs = tmp_path / "prefs.json"
        _run(monkeypatch, str(dictation), "--append-block", "--preferences", str(prefs))
        assert dictation.read_text().endswith("A3-\n")
