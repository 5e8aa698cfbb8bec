# tests/test_classifier.py

"""
Section Classifier Tests - taxonomy priority and table detection
"""

import pytest

from reportpack.sections import SECTION_LABELS, classify_section, contains_table, first_match
from reportpack.sections.classifier import SECTION_PATTERNS


class TestClassifySection:
    """Tests for classify_section()."""

    @pytest.mark.parametrize(
        "snippet,expected",
        [
            ("Content Modelling\nEntries and assets are modeled well", "Content Modelling"),
            ("Actions Required\nGlobal fields are unused", "Actions Required"),
            ("Rarely used content types", "Content Types"),
            ("Unused Global Fields", "Global Fields"),
            ("Areas of Opportunities\nAdd descriptions", "Areas of Opportunities"),
            ("Strengths\nConsistent naming", "Strengths"),
            ("Naming convention is inconsistent", "Naming Standards"),
            ("Webhooks\nTwo webhooks are failing", "Webhooks"),
            ("Stack Overview\nStack: acme", "Stack Overview"),
            ("Nothing recognizable here", "General"),
        ],
    )
    def test_labels(self, snippet, expected):
        assert classify_section(snippet) == expected

    def test_first_matching_label_wins(self):
        # Mentions Actions Required, Entries and Assets; Actions Required is declared first
        assert classify_section("Entries and assets listed under actions required") == "Actions Required"

    def test_case_insensitive(self):
        assert classify_section("ACTIONS REQUIRED") == "Actions Required"

    def test_only_first_300_characters_are_inspected(self):
        snippet = "x" * 300 + " webhooks"
        assert classify_section(snippet) == "General"

    def test_every_label_is_listed(self):
        assert SECTION_LABELS[-1] == "General"
        assert len(SECTION_LABELS) == len(SECTION_PATTERNS) + 1


class TestFirstMatch:
    """Tests for the generic first-match routine."""

    def test_returns_default_when_nothing_matches(self):
        assert first_match("abc", SECTION_PATTERNS, "fallback") == "fallback"

    def test_table_order_is_respected(self):
        import re

        table = [("one", [re.compile("a")]), ("two", [re.compile("a")])]
        assert first_match("a", table) == "one"


class TestContainsTable:
    """Tests for contains_table()."""

    @pytest.mark.parametrize(
        "snippet",
        [
            "Displaying 1 of 10 records",
            "displaying 5 12 records",
            "Content Type Title  Created On",
            "Field Name | Recommendation",
        ],
    )
    def test_detects_tables(self, snippet):
        assert contains_table(snippet)

    def test_caption_at_start_counts(self):
        assert contains_table("Displaying 3 of 3 records\nrow")

    def test_plain_text_is_not_a_table(self):
        assert not contains_table("The stack is in good shape overall.")
