"""Tests for title similarity and cannibalization detection."""

import pytest

from seo_translate.similarity import check_similarity, levenshtein_distance, similarity


class TestLevenshteinDistance:
    """Tests for the edit distance."""

    @pytest.mark.parametrize("a,b,expected", [
        ("", "", 0),
        ("abc", "", 3),
        ("", "abc", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("hello world", "hello world!", 1),
        ("same", "same", 0),
    ])
    def test_known_distances(self, a, b, expected):
        assert levenshtein_distance(a, b) == expected

    def test_counts_characters_not_bytes(self):
        """Accented characters count as one edit each."""
        assert levenshtein_distance("café", "cafe") == 1


class TestSimilarity:
    """Tests for the normalized similarity score."""

    @pytest.mark.parametrize("text", ["", "a", "Hello World", "Guía de traducción"])
    def test_identity(self, text):
        assert similarity(text, text) == 1.0

    @pytest.mark.parametrize("a,b", [
        ("Hello World", "Hello World!"),
        ("SEO guide", "A guide to SEO"),
        ("abc", ""),
        ("kitten", "sitting"),
    ])
    def test_symmetric(self, a, b):
        assert similarity(a, b) == similarity(b, a)

    def test_both_empty(self):
        assert similarity("", "") == 1.0

    def test_one_empty(self):
        assert similarity("abc", "") == 0.0

    def test_case_and_whitespace_ignored(self):
        assert similarity("  Hello World ", "hello world") == 1.0

    def test_one_edit(self):
        assert similarity("Hello World", "Hello World!") == pytest.approx(1 - 1 / 12)

    def test_completely_different(self):
        assert similarity("abc", "xyz") == 0.0

    def test_score_in_range(self):
        score = similarity("Professional liability", "Liability for professionals")
        assert 0.0 <= score <= 1.0


class TestCheckSimilarity:
    """Tests for checking a title against existing titles."""

    def test_flags_near_duplicate(self):
        result = check_similarity("Hello World", ["Hello World!", "Completely Different"], 0.85)

        assert result.is_similar is True
        assert result.similarity_score == pytest.approx(0.9167, abs=1e-3)
        assert "Hello World!" in result.similar_titles
        assert "Completely Different" not in result.similar_titles

    def test_empty_existing(self):
        result = check_similarity("Hello World", [])

        assert result.is_similar is False
        assert result.similarity_score == 0.0
        assert result.similar_titles == []

    def test_empty_existing_with_zero_threshold(self):
        """Nothing to collide with means not similar, whatever the threshold."""
        result = check_similarity("Hello World", [], threshold=0.0)
        assert result.is_similar is False

    def test_preserves_input_order(self):
        existing = ["hello world!", "Other", "HELLO WORLD", "Hello Worlds"]
        result = check_similarity("Hello World", existing)

        assert result.similar_titles == ["hello world!", "HELLO WORLD", "Hello Worlds"]
        assert result.similarity_score == 1.0

    def test_threshold_is_inclusive(self):
        # 1 edit over 4 characters -> exactly 0.75
        result = check_similarity("abcd", ["abcx"], threshold=0.75)
        assert result.is_similar is True
        assert result.similar_titles == ["abcx"]

    def test_below_threshold_reports_max_score(self):
        result = check_similarity("abcd", ["abxy", "wxyz"], threshold=0.9)

        assert result.is_similar is False
        assert result.similarity_score == pytest.approx(0.5)
        assert result.similar_titles == []

    def test_accepts_generator(self):
        result = check_similarity("Title", (t for t in ["Title", "Other"]))
        assert result.similar_titles == ["Title"]


class TestPackageExports:
    """The scoring functions are available from the package root."""

    def test_similarity_exported(self):
        import seo_translate

        assert seo_translate.similarity("abc", "abc") == 1.0
        assert "similarity" in seo_translate.__all__
        assert seo_translate.check_similarity is check_similarity
