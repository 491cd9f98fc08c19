"""
Sentence Segmenter
==================
Splits raw text into candidate sentence units and normalizes sentences
for exact comparison.
"""

import re
from typing import List, Tuple

from .models import Document, Sentence

# Fragments this short are abbreviations or list markers, not sentences
MIN_SENTENCE_LENGTH = 10

_TERMINATOR_RE = re.compile(r'[.!?]+')
_PUNCTUATION_RE = re.compile(r'[^\w\s]')
_WHITESPACE_RE = re.compile(r'\s+')


def split_sentences(text: str) -> List[str]:
    """
    Split text on runs of terminal punctuation.

    Args:
        text: Raw document text

    Returns:
        Trimmed fragments longer than MIN_SENTENCE_LENGTH characters,
        in document order
    """
    if not text:
        return []
    fragments = (part.strip() for part in _TERMINATOR_RE.split(text))
    return [f for f in fragments if len(f) > MIN_SENTENCE_LENGTH]


def normalize_sentence(sentence: str) -> str:
    """Lower-case, drop punctuation, collapse whitespace."""
    stripped = _PUNCTUATION_RE.sub('', sentence.lower())
    return _WHITESPACE_RE.sub(' ', stripped).strip()


def segment(text: str, label: str = "") -> Document:
    """Build an immutable Document from raw text."""
    sentences: Tuple[Sentence, ...] = tuple(
        Sentence(index=i, text=s) for i, s in enumerate(split_sentences(text))
    )
    return Document(label=label, text=text, sentences=sentences)
