"""Unit tests for placeholder field navigation."""

from grossdict.automation.fields import (
    field_index_at,
    field_progress,
    find_fields,
    has_unfilled_fields,
    is_complete,
    is_inside_field,
    next_field,
    prev_field,
    select_field,
)
from grossdict.editor import MemoryBuffer

TEXT = "Received [___] in formalin, measuring [x] by [] cm."
FIRST = TEXT.index("[___]")
SECOND = TEXT.index("[x]")
THIRD = TEXT.index("[]")


class TestFindFields:
    """Test find_fields behavior."""

    def test_finds_every_bracketed_span(self) -> None:
        """Empty and filled brackets are both fields."""
        assert [f.start for f in find_fields(TEXT)] == [FIRST, SECOND, THIRD]

    def test_end_is_exclusive(self) -> None:
        """A field's text includes both brackets."""
        assert find_fields(TEXT)[0].text(TEXT) == "[___]"

    def test_no_fields_in_plain_text(self) -> None:
        """Plain text has no fields."""
        assert find_fields("Received fresh.") == []


class TestNextField:
    """Test next_field behavior."""

    def test_finds_field_after_offset(self) -> None:
        """The first field starting at or after the offset wins."""
        field = next_field(TEXT, FIRST + 1)
        assert field is not None and field.start == SECOND

    def test_field_at_offset_counts(self) -> None:
        """A field starting exactly at the offset is selected."""
        field = next_field(TEXT, SECOND)
        assert field is not None and field.start == SECOND

    def test_wraps_to_first_field(self) -> None:
        """Past the last field, navigation wraps around."""
        field = next_field(TEXT, len(TEXT))
        assert field is not None and field.start == FIRST

    def test_none_without_fields(self) -> None:
        """A buffer without fields has no next field."""
        assert next_field("Received fresh.", 0) is None


class TestPrevField:
    """Test prev_field behavior."""

    def test_skips_field_just_left(self) -> None:
        """The field the caret sits right after is skipped."""
        field = prev_field(TEXT, SECOND + 1)
        assert field is not None and field.start == FIRST

    def test_finds_field_before_offset(self) -> None:
        """A field well before the offset is selected."""
        field = prev_field(TEXT, len(TEXT))
        assert field is not None and field.start == THIRD

    def test_wraps_to_last_field(self) -> None:
        """Before the first field, navigation wraps to the last."""
        field = prev_field(TEXT, 0)
        assert field is not None and field.start == THIRD


class TestIsInsideField:
    """Test is_inside_field behavior."""

    def test_inside_brackets(self) -> None:
        """An offset between the brackets is inside."""
        assert is_inside_field(TEXT, FIRST + 2)

    def test_on_closing_bracket(self) -> None:
        """The offset of the closing bracket is still inside."""
        assert is_inside_field(TEXT, FIRST + 4)

    def test_right_after_closing_bracket(self) -> None:
        """The offset right after the closing bracket is outside."""
        assert not is_inside_field(TEXT, FIRST + 5)

    def test_between_fields(self) -> None:
        """Plain text between fields is outside."""
        assert not is_inside_field(TEXT, FIRST + 8)

    def test_unclosed_bracket(self) -> None:
        """An unclosed bracket is not a field."""
        assert not is_inside_field("Received [fresh", 12)


class TestFieldProgress:
    """Test the field counter."""

    def test_index_of_field_containing_offset(self) -> None:
        """An offset inside the second field reports 2."""
        assert field_index_at(TEXT, SECOND + 1) == 2

    def test_progress_display(self) -> None:
        """Progress reads index / total."""
        assert field_progress(TEXT, SECOND) == "2 / 3"

    def test_no_fields_reports_zero(self) -> None:
        """Without fields the index is 0."""
        assert field_index_at("Received fresh.", 3) == 0

    def test_no_fields_shows_nothing(self) -> None:
        """Without fields the progress text is empty."""
        assert field_progress("Received fresh.", 3) == ""


class TestSelectField:
    """Test select_field behavior."""

    def test_selects_exact_span(self) -> None:
        """The whole field, brackets included, is selected."""
        buffer = MemoryBuffer(TEXT, 0)
        select_field(buffer, find_fields(TEXT)[1])
        assert buffer.selection == (SECOND, SECOND + 3)


class TestCompletion:
    """Test the completion check."""

    def test_unfilled_fields_detected(self) -> None:
        """Any bracket pair counts as unfilled."""
        assert has_unfilled_fields("Received [] fresh.")

    def test_complete_report(self) -> None:
        """Long enough text without fields is complete."""
        text = "Received fresh, labeled with the patient name, in a container of formalin."
        assert is_complete(text)

    def test_short_report_is_incomplete(self) -> None:
        """Short text is not complete even without fields."""
        assert not is_complete("Received fresh.")

    def test_report_with_fields_is_incomplete(self) -> None:
        """Remaining fields keep a report incomplete."""
        text = "Received fresh, labeled with the patient name, in a container of [___]."
        assert not is_complete(text)
