"""
Tests for text normalization.

Run with: pytest backend/core/menu_parsing/tests/test_normalizer.py -v
"""

from backend.core.menu_parsing.normalizer import normalize_text


class TestLineEndings:
    def test_crlf(self):
        assert normalize_text("Monday\r\nPasta") == "Monday\nPasta"

    def test_bare_cr(self):
        assert normalize_text("Monday\rPasta") == "Monday\nPasta"

    def test_unicode_line_separators(self):
        assert normalize_text("Monday\u2028Pasta\u2029Soup") == "Monday\nPasta\nSoup"


class TestPunctuation:
    def test_curly_quotes(self):
        assert normalize_text("\u2018Chef\u2019s\u2019 \u201cspecial\u201d") == "'Chef's' \"special\""

    def test_dashes(self):
        assert normalize_text("11:20am \u2014 1pm") == "11:20am - 1pm"
        assert normalize_text("11:20am\u20131pm") == "11:20am-1pm"

    def test_ellipsis(self):
        assert normalize_text("Soup\u2026") == "Soup..."


class TestWhitespace:
    def test_non_breaking_space(self):
        assert normalize_text("Fresh\u00a0Fruit") == "Fresh Fruit"

    def test_exotic_spaces(self):
        assert normalize_text("Fresh\u2003Fruit\u202fCup") == "Fresh Fruit Cup"

    def test_trims(self):
        assert normalize_text("  \n Monday \n ") == "Monday"


class TestTotality:
    def test_empty(self):
        assert normalize_text("") == ""

    def test_whitespace_only(self):
        assert normalize_text(" \r\n\t ") == ""

    def test_plain_text_unchanged(self):
        text = "Monday\nLunch 11:20am - 1pm\nPasta"
        assert normalize_text(text) == text

    def test_repeatable(self):
        text = "\u201cMonday\u201d \u2014 Lunch\u00a011am\r\n"
        assert normalize_text(normalize_text(text)) == normalize_text(text)
