"""
Tests for Sentence Segmentation and Similarity
==============================================
"""

import pytest

from tos_compare.segmenter import normalize_sentence, segment, split_sentences
from tos_compare.similarity import jaccard, overall_similarity, word_set


class TestSplitSentences:
    """Tests for split_sentences."""

    def test_splits_on_terminal_punctuation_runs(self):
        text = "Hi. This is a longer sentence! Short? Another sentence here..."
        assert split_sentences(text) == [
            "This is a longer sentence",
            "Another sentence here",
        ]

    def test_drops_fragments_of_ten_characters_or_fewer(self):
        assert split_sentences("abcdefghij.") == []
        assert split_sentences("abcdefghijk.") == ["abcdefghijk"]

    def test_empty_text(self):
        assert split_sentences("") == []
        assert split_sentences("   ") == []

    def test_text_without_punctuation_is_one_sentence(self):
        assert split_sentences("A sentence without an ending") == [
            "A sentence without an ending"
        ]

    def test_segment_assigns_positions(self):
        doc = segment("First sentence is here. Second sentence is here.", "v1.txt")
        assert doc.label == "v1.txt"
        assert [s.index for s in doc.sentences] == [0, 1]
        assert doc.sentence_texts == ["First sentence is here", "Second sentence is here"]


class TestNormalizeSentence:
    """Tests for normalize_sentence."""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize_sentence("  The Company,   collects DATA!  ") == "the company collects data"

    def test_collapses_whitespace(self):
        assert normalize_sentence("a\t b\n\nc") == "a b c"


class TestJaccard:
    """Tests for the word-set similarity scorer."""

    @pytest.mark.parametrize("a, b", [
        ("a b c", "b c d"),
        ("The service may change", "service terms change often"),
        ("", "non empty"),
        ("one", "one two three"),
    ])
    def test_symmetric(self, a, b):
        assert jaccard(a, b) == jaccard(b, a)

    @pytest.mark.parametrize("text", ["a", "The company collects your data", "x y x y"])
    def test_identity_is_one(self, text):
        assert jaccard(text, text) == 1.0

    def test_known_value(self):
        assert jaccard("a b c", "b c d") == pytest.approx(0.5)

    def test_empty_sets_score_zero(self):
        assert jaccard("", "") == 0.0
        assert jaccard("", "word") == 0.0

    def test_duplicates_and_case_ignored(self):
        assert jaccard("a a b", "A B") == 1.0
        assert word_set("The the THE") == frozenset({"the"})


class TestOverallSimilarity:
    """Tests for whole-document similarity."""

    def test_percentage(self):
        assert overall_similarity("a b c d", "a b c e") == 60

    def test_invariant_under_sentence_reordering(self):
        text1 = "First sentence here. Second one there."
        text2 = "Second one there. First sentence here."
        assert overall_similarity(text1, text2) == 100

    def test_rewording_lowers_similarity(self):
        text1 = "First sentence here. Second one there."
        text2 = "Initial sentence here. Second one there."
        assert overall_similarity(text1, text2) < 100
