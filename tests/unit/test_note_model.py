"""Unit tests for Note helpers."""

from blankpage.models.note import UNTITLED, Note


class TestDisplayTitle:
    def test_returns_title_when_set(self) -> None:
        assert Note(title="Groceries", content="eggs").display_title() == "Groceries"

    def test_derives_title_from_first_line_of_content(self) -> None:
        note = Note(title="", content="\n  \nFirst line\nsecond line")
        assert note.display_title() == "First line"

    def test_truncates_long_first_line_to_fifty_chars(self) -> None:
        note = Note(title="", content="x" * 80)
        assert note.display_title() == "x" * 50 + "..."

    def test_falls_back_to_untitled_for_empty_content(self) -> None:
        assert Note(title="", content="").display_title() == UNTITLED


class TestWordCount:
    def test_empty_content_has_no_words(self) -> None:
        assert Note(content="").word_count() == 0

    def test_counts_runs_separated_by_space_newline_and_tab(self) -> None:
        assert Note(content="one two\nthree\tfour  five\n\n").word_count() == 5

    def test_other_whitespace_does_not_split_words(self) -> None:
        # Carriage returns are not separators.
        assert Note(content="one\rtwo").word_count() == 1
