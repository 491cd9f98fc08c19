"""
Document Metrics
================
Readability (syllable heuristic + Flesch Reading Ease) and structural
counts, each with a cross-document comparator.

The heuristic Flesch score drives the reading level. Flesch-Kincaid grade,
Gunning Fog and reading time come from textstat and are reported alongside.
"""

import re
from typing import List

import textstat

from .models import (
    ReadabilityComparison, ReadabilityMetrics, StructuralComparison,
    StructuralMetrics, round_half_up, safe_ratio,
)
from .segmenter import split_sentences

# Flesch Reading Ease interpretations, checked top-down
READING_LEVELS = (
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
)
LOWEST_READING_LEVEL = "Very Difficult"

# Flesch points separating "similar" from "significantly easier"
READABILITY_RECOMMENDATION_THRESHOLD = 10
# Dead zone for the structural complexity label
COMPLEXITY_DEAD_ZONE = 5

_VOWEL_RUN_RE = re.compile(r'[aeiouy]+')
_NON_LETTER_RE = re.compile(r'[^a-z]')
_PARAGRAPH_BREAK_RE = re.compile(r'\n\s*\n')


def split_words(text: str) -> List[str]:
    """Whitespace-delimited words, empty tokens dropped."""
    return text.split()


def split_paragraphs(text: str) -> List[str]:
    """Blank-line separated blocks, empty blocks dropped."""
    return [p for p in _PARAGRAPH_BREAK_RE.split(text) if p.strip()]


def count_word_syllables(word: str) -> int:
    """
    Estimate syllables in one word.

    Vowel-cluster runs, minus one for a trailing silent 'e', floored at 1.
    Returns 0 for tokens with no letters.
    """
    letters = _NON_LETTER_RE.sub('', word.lower())
    if not letters:
        return 0
    syllables = len(_VOWEL_RUN_RE.findall(letters))
    if letters.endswith('e'):
        syllables -= 1
    return max(syllables, 1)


def count_syllables(text: str) -> int:
    return sum(count_word_syllables(w) for w in split_words(text))


def flesch_reading_ease(words: int, sentences: int, syllables: int) -> float:
    """Unrounded Flesch Reading Ease; 0.0 when there are no words or sentences."""
    if not words or not sentences:
        return 0.0
    return 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)


def reading_level(flesch_score: float) -> str:
    for floor, level in READING_LEVELS:
        if flesch_score >= floor:
            return level
    return LOWEST_READING_LEVEL


# =============================================================================
# READABILITY
# =============================================================================

def readability_metrics(text: str) -> ReadabilityMetrics:
    words = len(split_words(text))
    sentences = len(split_sentences(text))
    syllables = count_syllables(text)
    flesch = flesch_reading_ease(words, sentences, syllables)

    metrics = ReadabilityMetrics(
        word_count=words,
        sentence_count=sentences,
        syllable_count=syllables,
        flesch_raw=flesch,
        reading_level=reading_level(flesch),
    )
    if words:
        metrics.flesch_kincaid_grade = round(textstat.flesch_kincaid_grade(text), 1)
        metrics.gunning_fog = round(textstat.gunning_fog(text), 1)
        metrics.reading_time_seconds = round(textstat.reading_time(text), 2)
    return metrics


def readability_recommendation(metrics1: ReadabilityMetrics, metrics2: ReadabilityMetrics) -> str:
    threshold = READABILITY_RECOMMENDATION_THRESHOLD
    if metrics2.flesch_score > metrics1.flesch_score + threshold:
        return "Document 2 is significantly easier to read"
    if metrics1.flesch_score > metrics2.flesch_score + threshold:
        return "Document 1 is significantly easier to read"
    return "Both documents have similar readability levels"


def compare_readability(text1: str, text2: str) -> ReadabilityComparison:
    metrics1 = readability_metrics(text1)
    metrics2 = readability_metrics(text2)
    simpler = metrics2.flesch_score > metrics1.flesch_score
    return ReadabilityComparison(
        doc1=metrics1,
        doc2=metrics2,
        complexity_change='simpler' if simpler else 'more complex',
        recommendation=readability_recommendation(metrics1, metrics2),
    )


# =============================================================================
# STRUCTURE
# =============================================================================

def structural_metrics(text: str) -> StructuralMetrics:
    return StructuralMetrics(
        word_count=len(split_words(text)),
        sentence_count=len(split_sentences(text)),
        paragraph_count=len(split_paragraphs(text)),
        character_count=len(text),
    )


def complexity_change(struct1: StructuralMetrics, struct2: StructuralMetrics) -> str:
    if struct2.complexity > struct1.complexity + COMPLEXITY_DEAD_ZONE:
        return 'more complex'
    if struct1.complexity > struct2.complexity + COMPLEXITY_DEAD_ZONE:
        return 'less complex'
    return 'similar complexity'


def length_change_percentage(struct1: StructuralMetrics, struct2: StructuralMetrics) -> int:
    """Word-count change relative to document 1; 0 when document 1 has no words."""
    change = safe_ratio(struct2.word_count - struct1.word_count, struct1.word_count)
    return round_half_up(change * 100)


def compare_structure(text1: str, text2: str) -> StructuralComparison:
    struct1 = structural_metrics(text1)
    struct2 = structural_metrics(text2)
    return StructuralComparison(
        doc1=struct1,
        doc2=struct2,
        length_change_percentage=length_change_percentage(struct1, struct2),
        complexity_change=complexity_change(struct1, struct2),
    )
