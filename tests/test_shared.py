"""Tests for shared text helpers."""

import pytest

from cvbuilder.shared import clean_text, derive_initials, safe_text, sanitize_for_xml_in_obj


class TestDeriveInitials:
    """Tests for the avatar fallback initials."""

    def test_first_letters_uppercased(self):
        assert derive_initials("John", "Doe") == "JD"
        assert derive_initials("ada", "lovelace") == "AL"

    @pytest.mark.parametrize("first,last", [("", "Doe"), ("John", ""), ("", ""), ("  ", "Doe")])
    def test_empty_when_either_name_empty(self, first, last):
        assert derive_initials(first, last) == ""

    @pytest.mark.parametrize("first,last", [(None, "Doe"), ("John", 7), ({}, [])])
    def test_total_for_malformed_values(self, first, last):
        """Non-string values degrade to an empty result instead of raising."""
        assert derive_initials(first, last) == ""


def test_safe_text():
    assert safe_text("x") == "x"
    assert safe_text(None) == ""
    assert safe_text(3) == ""


def test_clean_text_collapses_whitespace():
    assert clean_text("  Senior\u00A0 Project\n Manager ") == "Senior Project Manager"
    assert clean_text(None) == ""


def test_sanitize_for_xml_in_obj_strips_invalid_chars():
    data = {"identity": {"title": "Dev\x00ops"}, "list": ["a\u00ADb"], "n": 1}
    assert sanitize_for_xml_in_obj(data) == {"identity": {"title": "Devops"}, "list": ["a-b"], "n": 1}
