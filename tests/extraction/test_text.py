# ABOUTME: Tests for markdown cleanup of role descriptions
# ABOUTME: Covers emphasis, headings, line-break backslashes, team lines and blank-line runs

import pytest

from crewbase.extraction import clean_markdown
from crewbase.extraction.base import ExtractionError, read_lines


class TestCleanMarkdown:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("**Bold** and *italic*", "Bold and italic"),
            ("__Bold__ and _italic_", "Bold and italic"),
            ("### Ability\nVents", "Ability\nVents"),
            ("First line\\\nSecond line", "First line\nSecond line"),
            ("Team: Impostors\nKills crewmates", "Kills crewmates"),
            ("Team: Neutral Killer. Wins alone\nStabs", "Stabs"),
            ("One\n\n\n\nTwo", "One\n\nTwo"),
            ("   padded   ", "padded"),
        ],
    )
    def test_cleanup_rules(self, text, expected):
        assert clean_markdown(text) == expected

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_input(self, text):
        assert clean_markdown(text) == ""

    def test_team_word_inside_sentence_is_kept(self):
        assert clean_markdown("Works with the Team: Crewmate side") == "Works with the Team: Crewmate side"

    def test_clean_text_is_unchanged(self):
        text = "The Engineer can fix sabotages.\n\nOnce per game."
        assert clean_markdown(text) == text


class TestReadLines:
    def test_bytes_are_decoded(self):
        assert read_lines("## Engineer\nFixes".encode()) == ["## Engineer", "Fixes"]

    def test_invalid_utf8_raises(self):
        with pytest.raises(ExtractionError, match="UTF-8"):
            read_lines(b"\xff\xfe\xfa")

    @pytest.mark.parametrize("document", ["", "   \n\n", b""])
    def test_empty_document_raises(self, document):
        with pytest.raises(ExtractionError, match="empty"):
            read_lines(document)
