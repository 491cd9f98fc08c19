"""
Content Matcher
===============
Greedy sentence pairing between two documents.

Each sentence of document 1 is classified, in order, as an exact match
(first document 2 sentence with the same normalized text), a partial match
(best Jaccard score strictly above PARTIAL_MATCH_THRESHOLD) or unique.
Document 2 sentences never selected as a target are unique to document 2.

Matching is first-found, not a global assignment: the outcome depends on
sentence order, and one document 2 sentence may be the target of several
document 1 sentences.
"""

from typing import List, Optional, Tuple

from config_logging import get_logger

from .models import ContentMatching, Document, MatchRecord, Sentence
from .segmenter import normalize_sentence
from .similarity import jaccard, overall_similarity

logger = get_logger('tos_compare.matcher')

PARTIAL_MATCH_THRESHOLD = 0.70


def find_exact(normalized: str, candidates: List[Tuple[Sentence, str]]) -> Optional[Sentence]:
    """First candidate whose normalized text equals ``normalized``."""
    for sentence, candidate_normalized in candidates:
        if candidate_normalized == normalized:
            return sentence
    return None


def find_best_partial(text: str, candidates: Tuple[Sentence, ...]) -> Tuple[Optional[Sentence], float]:
    """
    Highest-scoring candidate by Jaccard similarity.

    Ties keep the earliest candidate. Returns (None, 0.0) when nothing
    shares a word with ``text``.
    """
    best: Optional[Sentence] = None
    best_score = 0.0
    for candidate in candidates:
        score = jaccard(text, candidate.text)
        if score > best_score:
            best, best_score = candidate, score
    return best, best_score


def match_documents(doc1: Document, doc2: Document) -> ContentMatching:
    """
    Pair the sentences of two segmented documents.

    Args:
        doc1: First (older) document
        doc2: Second (newer) document

    Returns:
        ContentMatching with every doc1 sentence in exactly one of
        exact/partial/unique_to_doc1
    """
    result = ContentMatching()
    normalized2 = [(s, normalize_sentence(s.text)) for s in doc2.sentences]
    targeted = set()

    for sentence in doc1.sentences:
        exact = find_exact(normalize_sentence(sentence.text), normalized2)
        if exact is not None:
            targeted.add(exact.index)
            result.exact.append(MatchRecord(
                kind='exact',
                doc1_index=sentence.index,
                doc2_index=exact.index,
                doc1_text=sentence.text,
                doc2_text=exact.text,
            ))
            continue

        best, score = find_best_partial(sentence.text, doc2.sentences)
        if best is not None and score > PARTIAL_MATCH_THRESHOLD:
            targeted.add(best.index)
            result.partial.append(MatchRecord(
                kind='partial',
                doc1_index=sentence.index,
                doc2_index=best.index,
                doc1_text=sentence.text,
                doc2_text=best.text,
                similarity=score,
            ))
        else:
            result.unique_to_doc1.append(MatchRecord(
                kind='unique',
                doc1_index=sentence.index,
                doc1_text=sentence.text,
            ))

    result.unique_to_doc2 = [
        MatchRecord(kind='unique', doc2_index=s.index, doc2_text=s.text)
        for s in doc2.sentences if s.index not in targeted
    ]
    result.overall_similarity = overall_similarity(doc1.text, doc2.text)

    logger.debug(
        "Content matching complete",
        exact=len(result.exact),
        partial=len(result.partial),
        unique1=len(result.unique_to_doc1),
        unique2=len(result.unique_to_doc2),
    )
    return result
