"""Tests for row and header helpers."""

import pytest

from csv_merge.utils import (
    clean_header,
    count_fields,
    first_field_key,
    is_empty_text,
    parse_category_base,
    split_fields,
    trim,
)


class TestFieldSplitting:
    def test_keeps_trailing_empty_fields(self):
        assert split_fields("a,b,,") == ["a", "b", "", ""]
        assert count_fields("a,b,,") == 4

    def test_single_field(self):
        assert count_fields("") == 1
        assert count_fields("abc") == 1

    def test_first_field_key(self):
        assert first_field_key("Bob,30") == "bob"
        assert first_field_key("solo") == "solo"
        assert first_field_key(",x") == ""


class TestHeaderCleaning:
    def test_strips_bom_and_whitespace(self):
        assert clean_header("\ufeff Name,Age \r") == "Name,Age"

    def test_is_empty_text(self):
        assert is_empty_text("")
        assert is_empty_text("  \t")
        assert not is_empty_text(" a ")


class TestParseCategoryBase:
    @pytest.mark.parametrize(
        "base, expected",
        [
            ("Batch7", ("Batch", 7)),
            ("AB123", ("AB", 123)),
            ("Group", ("Group", 1)),
            ("A007", ("A", 7)),
            ("42", ("", 42)),
            ("v2x", ("v2x", 1)),
            ("", ("", 1)),
        ],
    )
    def test_parse(self, base, expected):
        assert parse_category_base(base) == expected


class TestTrim:
    def test_trims_ascii_space_and_controls(self):
        assert trim(" \t\x00Bob,30\r\n\x1f ") == "Bob,30"

    def test_keeps_unicode_spaces(self):
        assert trim("\xa0Bob,30\u2003 ") == "\xa0Bob,30\u2003"

    def test_keeps_inner_whitespace(self):
        assert trim("  x, 1  ") == "x, 1"
