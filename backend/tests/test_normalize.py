"""
Unit tests for utils/normalize.py

Tests the input normalization helpers to ensure:
- Correct type conversion with explicit None/empty handling
- Clear ValidationError messages carrying the field name
- Lenient text helpers never raise
"""

import pytest

from utils.normalize import (
    ValidationError,
    collapse_whitespace,
    is_blank,
    slugify,
    to_int,
    to_list,
)


class TestToInt:
    """Tests for to_int()"""

    def test_valid_int_string(self):
        assert to_int("123") == 123
        assert to_int(" 7 ") == 7
        assert to_int("0") == 0

    def test_none_returns_none(self):
        assert to_int(None) is None

    def test_empty_with_default(self):
        assert to_int("", default=50) == 50
        assert to_int("   ", default=50) == 50

    def test_invalid_string_raises(self):
        with pytest.raises(ValidationError) as exc:
            to_int("abc")
        assert "Expected int" in str(exc.value)
        assert "abc" in str(exc.value)

    def test_float_string_raises(self):
        with pytest.raises(ValidationError):
            to_int("3.14")

    def test_minimum(self):
        assert to_int("1", minimum=1) == 1
        with pytest.raises(ValidationError) as exc:
            to_int("0", minimum=1, field="INGEST_PREVIEW_ROWS")
        assert exc.value.field == "INGEST_PREVIEW_ROWS"
        assert exc.value.received_value == "0"

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            to_int("bad")


class TestToList:
    """Tests for to_list()"""

    def test_comma_separated(self):
        assert to_list("a, b ,c") == ["a", "b", "c"]

    def test_none_and_empty(self):
        assert to_list(None) == []
        assert to_list("") == []

    def test_skips_empty_items(self):
        assert to_list("0,,2,") == ["0", "2"]

    def test_int_items(self):
        assert to_list("0, 2,5", item_type=int) == [0, 2, 5]

    def test_invalid_int_item_raises(self):
        with pytest.raises(ValidationError) as exc:
            to_list("0,x", item_type=int, field="select")
        assert exc.value.field == "select"

    def test_custom_separator(self):
        assert to_list("a|b", separator="|") == ["a", "b"]


class TestTextHelpers:
    """Tests for the lenient helpers used by the ingestion engine."""

    def test_is_blank(self):
        assert is_blank(None)
        assert is_blank("  \t")
        assert not is_blank(" x ")

    def test_collapse_whitespace(self):
        assert collapse_whitespace("  Total \t  Units ") == "Total Units"
        assert collapse_whitespace(None) == ""

    def test_slugify(self):
        assert slugify("Lodha  Group") == "lodha_group"
        assert slugify(" Palava City ") == "palava_city"

    def test_slugify_keeps_punctuation(self):
        assert slugify("2 BHK (Premium)") == "2_bhk_(premium)"
        assert slugify("A-1") == "a-1"

    def test_slugify_empty(self):
        assert slugify("") == ""
        assert slugify(None) == ""
