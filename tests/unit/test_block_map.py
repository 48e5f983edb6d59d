"""Unit tests for the block map, footer helpers and specimen inference."""

from grossdict.core import NumberingFormat
from grossdict.core.labels import (
    build_block_map,
    count_blocks,
    infer_specimen_from_text,
    infer_specimen_site,
    next_block_preview,
    placeholder_label,
    specimen_for_format,
)

LN = NumberingFormat.LETTER_NUMBER
NL = NumberingFormat.NUMBER_LETTER

REPORT = "A. The specimen is received fresh.\nA1-skin\nA2-A4-fat\n  A3-note\nRemainder in formalin."


class TestBuildBlockMap:
    """Test build_block_map behavior."""

    def test_lists_blocks_ranges_and_sub_lines(self) -> None:
        """Every block, range and indented sub-line gets an entry."""
        labels = [entry.label for entry in build_block_map(REPORT, LN)]
        assert labels == ["A1", "A2–A4", "  A3"]

    def test_description_follows_label(self) -> None:
        """The description is the text after the label prefix."""
        assert build_block_map(REPORT, LN)[1].desc == "fat"

    def test_marks_ranges(self) -> None:
        """Range entries are flagged."""
        assert build_block_map(REPORT, LN)[1].is_range

    def test_marks_indented_entries(self) -> None:
        """Indented sub-lines are flagged."""
        assert build_block_map(REPORT, LN)[2].indented


class TestCountBlocks:
    """Test count_blocks behavior."""

    def test_counts_blocks_and_ranges_only(self) -> None:
        """Indented sub-lines and prose are not counted."""
        assert count_blocks(REPORT, LN) == 2


class TestNextBlockPreview:
    """Test next_block_preview behavior."""

    def test_previews_label_after_last_block(self) -> None:
        """The preview continues from the range end."""
        assert next_block_preview(REPORT, LN) == "A5-"

    def test_no_preview_without_blocks(self) -> None:
        """Without a block there is nothing to preview."""
        assert next_block_preview("Received fresh.", LN) is None


class TestSpecimenInference:
    """Test specimen header and site inference."""

    def test_last_specimen_header_wins(self) -> None:
        """The last header names the current specimen."""
        text = "A. The specimen is received fresh.\nB. The specimen is received in formalin."
        assert infer_specimen_from_text(text) == "B"

    def test_no_header_infers_nothing(self) -> None:
        """Text without headers infers no specimen."""
        assert infer_specimen_from_text("A1-skin") is None

    def test_site_is_truncated_at_comma(self) -> None:
        """Orientation details after the first comma are dropped."""
        text = 'labeled with specimen site "right breast lump, sutures long superior"'
        assert infer_specimen_site(text) == "right breast lump"

    def test_unfilled_site_is_ignored(self) -> None:
        """A site that is still a field is not a site."""
        assert infer_specimen_site('specimen site "[___]"') is None

    def test_letter_header_maps_to_number(self) -> None:
        """Specimen C is specimen 3 in number-letter format."""
        assert specimen_for_format("C", NL) == "3"

    def test_number_header_maps_to_letter(self) -> None:
        """Specimen 2 is specimen B in letter-number format."""
        assert specimen_for_format("2", LN) == "B"


class TestPlaceholderLabel:
    """Test the label chosen for a line-start placeholder."""

    def test_continues_block_above(self) -> None:
        """A placeholder below A3 becomes A4."""
        text = "A3-skin\n[___]-tumor"
        prefix, _ = placeholder_label(text, LN, text.index("["), "-")
        assert prefix == "A4-"

    def test_specimen_header_starts_series(self) -> None:
        """A placeholder below a specimen header starts that specimen."""
        text = "B. The specimen is received fresh.\n[___]-tumor"
        prefix, _ = placeholder_label(text, LN, text.index("["), "-")
        assert prefix == "B1-"

    def test_number_header_starts_number_letter_series(self) -> None:
        """A digit header starts a number-letter series."""
        text = "2. The specimen is received fresh.\n[___]-tumor"
        prefix, _ = placeholder_label(text, NL, text.index("["), "-")
        assert prefix == "2A-"

    def test_no_block_starts_at_first_label(self) -> None:
        """With nothing above, the series starts at A1."""
        prefix, parsed = placeholder_label("[___]-tumor", LN, 0, "-")
        assert (prefix, parsed) == ("A1-", None)

    def test_skips_earlier_placeholders(self) -> None:
        """Unfilled placeholders above are skipped."""
        text = "A1-skin\n[___]-fat\n[___]-tumor"
        prefix, _ = placeholder_label(text, LN, text.rindex("["), "-")
        assert prefix == "A2-"
