# tests/test_similarity.py
"""Tests for Jaccard scoring and keyword matching."""

from __future__ import annotations

import pytest

from subject_memory.index.similarity import find_matching_keywords, jaccard_similarity


class TestJaccardSimilarity:
    """Tests for jaccard_similarity()."""

    def test_subset(self):
        """Test |{a,b} ∩ {a,b,c}| / |{a,b} ∪ {a,b,c}| = 2/3."""
        assert jaccard_similarity({"a", "b"}, {"a", "b", "c"}) == pytest.approx(2 / 3)

    def test_disjoint(self):
        """Test that disjoint sets score 0.0."""
        assert jaccard_similarity({"a"}, {"b"}) == 0.0

    def test_identical(self):
        """Test that identical sets score 1.0."""
        assert jaccard_similarity({"a", "b"}, {"a", "b"}) == 1.0

    def test_both_empty(self):
        """Test that two empty sets score 0.0 instead of dividing by zero."""
        assert jaccard_similarity(set(), set()) == 0.0

    def test_symmetric(self):
        """Test that argument order does not matter."""
        a, b = {"x", "y"}, {"y", "z", "w"}
        assert jaccard_similarity(a, b) == jaccard_similarity(b, a)


class TestFindMatchingKeywords:
    """Tests for find_matching_keywords()."""

    def test_exact_matches_in_query_order(self):
        """Test that exact matches come back in query order."""
        assert find_matching_keywords(["web", "rust"], {"rust", "web", "cli"}) == ["web", "rust"]

    def test_substring_and_superstring_match(self):
        """Test the partial match fallback in both directions."""
        candidate = {"projects", "ai"}
        assert find_matching_keywords(["project"], candidate) == ["project"]
        assert find_matching_keywords(["aim"], candidate) == ["aim"]

    def test_no_match(self):
        """Test that unrelated keywords produce nothing."""
        assert find_matching_keywords(["go"], {"rust"}) == []

    def test_min_partial_length_guard(self):
        """Test that short keywords cannot match as substrings."""
        candidate = {"projects", "ai"}
        assert find_matching_keywords(["aim"], candidate, min_partial_length=3) == []
        assert find_matching_keywords(["project"], candidate, min_partial_length=3) == ["project"]

    def test_guard_does_not_affect_exact_matches(self):
        """Test that exact matches ignore the partial length guard."""
        assert find_matching_keywords(["ai"], {"ai"}, min_partial_length=5) == ["ai"]
