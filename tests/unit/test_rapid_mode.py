"""Unit tests for rapid mode specimen sequencing."""

from grossdict.automation import RapidMode
from grossdict.core import NumberingFormat
from grossdict.editor import MemoryBuffer
from grossdict.storage import MemoryPreferenceStore

TEMPLATE = "A. The specimen is received in formalin, measuring [___] cm.\nA1-[___]"


def _rapid(
    text: str = "", fmt: NumberingFormat = NumberingFormat.LETTER_NUMBER
) -> tuple[RapidMode, MemoryBuffer, MemoryPreferenceStore]:
    buffer = MemoryBuffer(text)
    store = MemoryPreferenceStore()
    rapid = RapidMode(buffer, lambda: fmt, store)
    rapid.save_template(TEMPLATE)
    return rapid, buffer, store


class TestSpecimenLabels:
    """Test specimen header labels."""

    def test_letter_labels(self) -> None:
        """The third specimen is C."""
        rapid, _, _ = _rapid()
        assert rapid.specimen_label(2) == "C."

    def test_letter_labels_wrap(self) -> None:
        """Letters wrap after Z."""
        rapid, _, _ = _rapid()
        assert rapid.specimen_label(26) == "A."

    def test_number_labels(self) -> None:
        """Number-letter format numbers its specimens."""
        rapid, _, _ = _rapid(fmt=NumberingFormat.NUMBER_LETTER)
        assert rapid.specimen_label(2) == "3."


class TestBuildSpecimenBlock:
    """Test build_specimen_block behavior."""

    def test_relabels_header(self) -> None:
        """The header letter follows the specimen index."""
        rapid, _, _ = _rapid()
        assert rapid.build_specimen_block(1).startswith("B. The specimen is received")

    def test_keeps_rest_of_template(self) -> None:
        """Only the first line changes."""
        rapid, _, _ = _rapid()
        assert rapid.build_specimen_block(1).split("\n")[1] == "A1-[___]"

    def test_headerless_template_gets_label(self) -> None:
        """A template without a header is prefixed with the label."""
        rapid, _, _ = _rapid()
        rapid.save_template("Received fresh.")
        assert rapid.build_specimen_block(0) == "A. Received fresh."

    def test_no_template_builds_nothing(self) -> None:
        """Without a template there is no block."""
        rapid, _, _ = _rapid()
        rapid.clear_template()
        assert rapid.build_specimen_block(0) == ""


class TestApplyAndAppend:
    """Test writing specimen blocks into the buffer."""

    def test_apply_first_adds_anchor(self) -> None:
        """The first block is followed by the anchor field."""
        rapid, buffer, _ = _rapid("old text")
        rapid.apply_first()
        assert buffer.text == TEMPLATE + "\n[___]"

    def test_apply_first_puts_caret_at_start(self) -> None:
        """The caret starts at the top of the buffer."""
        rapid, buffer, _ = _rapid("old text")
        rapid.apply_first()
        assert buffer.selection == (0, 0)

    def test_append_next_moves_anchor_to_end(self) -> None:
        """The anchor is replaced by a blank line, the next block and a new anchor."""
        rapid, buffer, _ = _rapid()
        rapid.apply_first()
        rapid.append_next()
        assert buffer.text == TEMPLATE + "\n\n" + rapid.build_specimen_block(1) + "\n[___]"

    def test_append_next_caret_at_new_block(self) -> None:
        """The caret lands at the start of the new block."""
        rapid, buffer, _ = _rapid()
        rapid.apply_first()
        rapid.append_next()
        assert buffer.selection[0] == buffer.text.index("B. The specimen")

    def test_append_next_advances_index(self) -> None:
        """Each append moves to the next specimen."""
        rapid, _, _ = _rapid()
        rapid.apply_first()
        rapid.append_next()
        rapid.append_next()
        assert rapid.specimen_index == 2

    def test_index_is_persisted(self) -> None:
        """The store tracks the current specimen."""
        rapid, _, store = _rapid()
        rapid.apply_first()
        rapid.append_next()
        assert store.load_rapid().specimen_index == 1

    def test_reset_restarts_sequence(self) -> None:
        """reset goes back to the first specimen."""
        rapid, _, _ = _rapid()
        rapid.apply_first()
        rapid.append_next()
        rapid.reset()
        assert rapid.specimen_index == 0


class TestOnBlockInserted:
    """Test caret placement after a rapid-mode block insertion."""

    def test_caret_moves_left_of_separator(self) -> None:
        """The caret sits between the label and its separator."""
        rapid, buffer, _ = _rapid("A1-skin\nA2-")
        rapid.on_block_inserted("A2-")
        assert buffer.selection == (len("A1-skin\nA2"), len("A1-skin\nA2"))


class TestStatusText:
    """Test the rapid-mode status line."""

    def test_inactive_shows_nothing(self) -> None:
        """No status while rapid mode is off."""
        rapid, _, _ = _rapid()
        assert rapid.status_text() == ""

    def test_active_names_current_specimen(self) -> None:
        """The status shows the current specimen label."""
        rapid, _, _ = _rapid()
        rapid.toggle()
        assert rapid.status_text() == "Active: Specimen A."

    def test_active_without_template_asks_for_one(self) -> None:
        """Without a template the status prompts for one."""
        rapid, _, _ = _rapid()
        rapid.clear_template()
        rapid.toggle()
        assert rapid.status_text() == "Paste template to begin"
