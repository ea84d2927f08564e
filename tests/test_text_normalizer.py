#!/usr/bin/env python3
"""
Test suite for person name collation
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from src.normalizers.text_normalizer import collation_key, sort_roster, strip_accents


class TestStripAccents:
    """Test cases for strip_accents"""

    def test_removes_diacritics(self):
        """Test that Portuguese diacritics are removed"""
        assert strip_accents("João Antônio") == "Joao Antonio"
        assert strip_accents("Conceição") == "Conceicao"

    def test_handles_empty_input(self):
        """Test that empty input is handled gracefully"""
        assert strip_accents("") == ""
        assert strip_accents(None) == ""


class TestCollation:
    """Test cases for roster ordering"""

    def test_accents_ignored_at_first_level(self):
        """Test that accented names sort with their base letters"""
        assert sort_roster(["Zeca", "Érica", "Eduardo", "Ana"]) == ["Ana", "Eduardo", "Érica", "Zeca"]

    def test_case_ignored_at_first_level(self):
        """Test that case does not split the alphabet"""
        assert sort_roster(["bruno", "Carla", "Ana"]) == ["Ana", "bruno", "Carla"]

    def test_lowercase_before_uppercase_on_tie(self):
        """Test the case tie-break"""
        assert sort_roster(["Ana", "ana"]) == ["ana", "Ana"]

    def test_unaccented_before_accented_on_tie(self):
        """Test the accent tie-break"""
        assert sort_roster(["Élia", "Elia"]) == ["Elia", "Élia"]

    def test_punctuation_ignored_at_first_level(self):
        """Test that punctuation does not drive the order"""
        assert sort_roster(["Ana-Clara", "Ana Beatriz", "Ana Davi"]) == ["Ana Beatriz", "Ana Davi", "Ana-Clara"]

    def test_distinct_names_never_equal(self):
        """Test that different identifiers produce different keys"""
        assert collation_key("Ana") != collation_key("ana")

    def test_custom_sort_key(self):
        """Test that a caller-supplied key replaces collation"""
        assert sort_roster(["b", "A", "c"], sort_key=str) == ["A", "b", "c"]
