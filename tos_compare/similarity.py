"""
Similarity Scorer
=================
Symmetric word-set (Jaccard) similarity.
"""

from typing import FrozenSet

from .models import round_half_up


def word_set(text: str) -> FrozenSet[str]:
    """Distinct lower-cased whitespace-delimited words."""
    return frozenset(text.lower().split())


def jaccard(text1: str, text2: str) -> float:
    """
    Jaccard index of the word sets of two strings.

    Returns 0.0 when both strings contain no words.
    """
    words1 = word_set(text1)
    words2 = word_set(text2)
    union = words1 | words2
    if not union:
        return 0.0
    return len(words1 & words2) / len(union)


def overall_similarity(text1: str, text2: str) -> int:
    """Whole-document similarity as an integer percentage."""
    return round_half_up(jaccard(text1, text2) * 100)
