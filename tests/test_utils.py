"""
Tests for utility functions.
"""

import pytest

from medlink_bot.utils.text import is_book_hospital_command, truncate_title


class TestTruncateTitle:

    def test_short_title_unchanged(self):
        assert truncate_title("St. Mary") == "St. Mary"

    def test_thirty_chars_cut_to_first_24(self):
        name = "Saint Mary's General Hospital"[:30].ljust(30, "X")
        assert truncate_title(name) == name[:24]

    def test_none_becomes_empty(self):
        assert truncate_title(None) == ""


class TestBookHospitalCommand:

    @pytest.mark.parametrize("text", ["book hospital", "BOOK hospital", "\tbook  hospital\n"])
    def test_matches(self, text):
        assert is_book_hospital_command(text) is True

    @pytest.mark.parametrize("text", ["book", "bookhospital", "book a hospital", "", None])
    def test_does_not_match(self, text):
        assert is_book_hospital_command(text) is False
