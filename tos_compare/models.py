"""
TOS Compare Models v1.0.0
=========================
Value objects produced by a single comparison request.

Every object is built fresh per call and exposes ``to_dict()`` for JSON
serialization. Counts are always exact totals; exemplar lists are capped
only when serialized.
"""

import math
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any, Tuple

# Exemplars reported per match category
EXEMPLAR_LIMIT = 10

SEVERITY_ORDER = {'none': 0, 'low': 1, 'medium': 2, 'high': 3}


def round_half_up(value: float, ndigits: int = 0):
    """Round to ``ndigits`` places with halves going toward +inf.

    Returns an int when ``ndigits`` is 0.
    """
    factor = 10 ** ndigits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if ndigits == 0 else rounded


def safe_ratio(numerator: float, denominator: float) -> float:
    """Division that yields 0.0 for an empty denominator."""
    return numerator / denominator if denominator else 0.0


# =============================================================================
# DOCUMENTS & MATCHING
# =============================================================================

@dataclass(frozen=True)
class Sentence:
    """A sentence span and its zero-based position within its document."""
    index: int
    text: str


@dataclass(frozen=True)
class Document:
    """
    Raw text plus its ordered sentences.

    Attributes:
        label: Opaque identifier (e.g. original filename), never parsed
        text: Raw document text
        sentences: Sentences in document order
    """
    label: str
    text: str
    sentences: Tuple[Sentence, ...] = ()

    @property
    def sentence_texts(self) -> List[str]:
        return [s.text for s in self.sentences]


@dataclass
class MatchRecord:
    """
    Classification of one sentence by the content matcher.

    Attributes:
        kind: 'exact', 'partial' or 'unique'
        doc1_index: Position in document 1 (None for a sentence unique to document 2)
        doc2_index: Position in document 2 (None for a sentence unique to document 1)
        doc1_text: Sentence text from document 1
        doc2_text: Sentence text from document 2
        similarity: Jaccard score, set for partial matches only
    """
    kind: str
    doc1_index: Optional[int] = None
    doc2_index: Optional[int] = None
    doc1_text: str = ""
    doc2_text: str = ""
    similarity: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if self.kind == 'exact':
            return {
                'text': self.doc1_text,
                'doc1_index': self.doc1_index,
                'doc2_index': self.doc2_index,
            }
        if self.kind == 'partial':
            return {
                'doc1_text': self.doc1_text,
                'doc2_text': self.doc2_text,
                'similarity': self.similarity,
                'doc1_index': self.doc1_index,
                'doc2_index': self.doc2_index,
            }
        if self.doc1_index is not None:
            return {'text': self.doc1_text, 'index': self.doc1_index}
        return {'text': self.doc2_text, 'index': self.doc2_index}


@dataclass
class ContentMatching:
    """Sentence-level matching between two documents."""
    exact: List[MatchRecord] = field(default_factory=list)
    partial: List[MatchRecord] = field(default_factory=list)
    unique_to_doc1: List[MatchRecord] = field(default_factory=list)
    unique_to_doc2: List[MatchRecord] = field(default_factory=list)
    overall_similarity: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'exact_matches': len(self.exact),
            'partial_matches': len(self.partial),
            'unique_to_doc1': len(self.unique_to_doc1),
            'unique_to_doc2': len(self.unique_to_doc2),
            'match_details': {
                'exact': [m.to_dict() for m in self.exact[:EXEMPLAR_LIMIT]],
                'partial': [m.to_dict() for m in self.partial[:EXEMPLAR_LIMIT]],
                'unique1': [m.to_dict() for m in self.unique_to_doc1[:EXEMPLAR_LIMIT]],
                'unique2': [m.to_dict() for m in self.unique_to_doc2[:EXEMPLAR_LIMIT]],
            },
            'overall_similarity': self.overall_similarity,
        }


# =============================================================================
# LEXICAL FEATURES
# =============================================================================

@dataclass
class TermEntry:
    """Frequency of one vocabulary term in both documents."""
    term: str
    doc1_count: int = 0
    doc2_count: int = 0

    @property
    def difference(self) -> int:
        return self.doc2_count - self.doc1_count

    @property
    def significance(self) -> float:
        """|difference| / total mentions, 0 when neither document mentions it."""
        return safe_ratio(abs(self.difference), self.doc1_count + self.doc2_count)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'doc1_count': self.doc1_count,
            'doc2_count': self.doc2_count,
            'difference': self.difference,
            'significance': self.significance,
        }


@dataclass
class KeyTermsAnalysis:
    """Term comparison table plus rankings."""
    term_comparison: Dict[str, TermEntry] = field(default_factory=dict)
    doc1_top_terms: List[Tuple[str, int]] = field(default_factory=list)
    doc2_top_terms: List[Tuple[str, int]] = field(default_factory=list)
    significant_differences: List[TermEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'term_comparison': {t: e.to_dict() for t, e in self.term_comparison.items()},
            'doc1_top_terms': [{'term': t, 'count': c} for t, c in self.doc1_top_terms],
            'doc2_top_terms': [{'term': t, 'count': c} for t, c in self.doc2_top_terms],
            'significant_differences': [
                {'term': e.term, **e.to_dict()} for e in self.significant_differences
            ],
        }


@dataclass
class ClauseComparison:
    """Sentences tagged with one clause category in each document."""
    category: str
    doc1_clauses: List[str] = field(default_factory=list)
    doc2_clauses: List[str] = field(default_factory=list)

    @property
    def doc1_count(self) -> int:
        return len(self.doc1_clauses)

    @property
    def doc2_count(self) -> int:
        return len(self.doc2_clauses)

    @property
    def difference(self) -> int:
        return self.doc2_count - self.doc1_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            'doc1_count': self.doc1_count,
            'doc2_count': self.doc2_count,
            'doc1_clauses': list(self.doc1_clauses),
            'doc2_clauses': list(self.doc2_clauses),
            'difference': self.difference,
        }


@dataclass
class RiskFinding:
    """A risk rule that fired against a whole document."""
    type: str
    severity: str  # 'low', 'medium', 'high'
    occurrences: int

    @property
    def description(self) -> str:
        return f"Found {self.occurrences} instance(s) of {self.type.lower()}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'risk_level': self.severity,
            'matches': self.occurrences,
            'description': self.description,
        }


@dataclass
class RiskChange:
    """Severity of one finding type in both documents."""
    type: str
    doc1: str = 'none'
    doc2: str = 'none'

    @property
    def change(self) -> str:
        level1 = SEVERITY_ORDER.get(self.doc1, 0)
        level2 = SEVERITY_ORDER.get(self.doc2, 0)
        if level2 > level1:
            return 'increased'
        if level2 < level1:
            return 'decreased'
        return 'unchanged'

    def to_dict(self) -> Dict[str, Any]:
        return {'doc1': self.doc1, 'doc2': self.doc2, 'change': self.change}


@dataclass
class RiskAssessment:
    """Per-document findings, their comparison, and aggregate severities."""
    doc1_risks: List[RiskFinding] = field(default_factory=list)
    doc2_risks: List[RiskFinding] = field(default_factory=list)
    comparison: List[RiskChange] = field(default_factory=list)
    doc1_overall: str = 'low'
    doc2_overall: str = 'low'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'doc1_risks': [r.to_dict() for r in self.doc1_risks],
            'doc2_risks': [r.to_dict() for r in self.doc2_risks],
            'risk_comparison': {c.type: c.to_dict() for c in self.comparison},
            'overall_risk_level': {
                'doc1': self.doc1_overall,
                'doc2': self.doc2_overall,
            },
        }


# =============================================================================
# METRICS
# =============================================================================

@dataclass
class ReadabilityMetrics:
    """
    Readability of one document.

    ``flesch_raw`` is kept unrounded; ``flesch_score`` is the reported value.
    The textstat indices are supplementary and never feed the reading level.
    """
    word_count: int = 0
    sentence_count: int = 0
    syllable_count: int = 0
    flesch_raw: float = 0.0
    reading_level: str = ""
    flesch_kincaid_grade: float = 0.0
    gunning_fog: float = 0.0
    reading_time_seconds: float = 0.0

    @property
    def flesch_score(self) -> int:
        return round_half_up(self.flesch_raw)

    @property
    def average_words_per_sentence(self) -> int:
        return round_half_up(safe_ratio(self.word_count, self.sentence_count))

    @property
    def average_syllables_per_word(self) -> float:
        return round_half_up(safe_ratio(self.syllable_count, self.word_count), 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'word_count': self.word_count,
            'sentence_count': self.sentence_count,
            'syllable_count': self.syllable_count,
            'average_words_per_sentence': self.average_words_per_sentence,
            'average_syllables_per_word': self.average_syllables_per_word,
            'flesch_score': self.flesch_score,
            'reading_level': self.reading_level,
            'flesch_kincaid_grade': self.flesch_kincaid_grade,
            'gunning_fog': self.gunning_fog,
            'reading_time_seconds': self.reading_time_seconds,
        }


@dataclass
class ReadabilityComparison:
    doc1: ReadabilityMetrics
    doc2: ReadabilityMetrics
    complexity_change: str = ""
    recommendation: str = ""

    @property
    def flesch_score_difference(self) -> int:
        return self.doc2.flesch_score - self.doc1.flesch_score

    @property
    def word_count_difference(self) -> int:
        return self.doc2.word_count - self.doc1.word_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            'doc1': self.doc1.to_dict(),
            'doc2': self.doc2.to_dict(),
            'comparison': {
                'flesch_score_difference': self.flesch_score_difference,
                'word_count_difference': self.word_count_difference,
                'complexity_change': self.complexity_change,
                'recommendation': self.recommendation,
            },
        }


@dataclass
class StructuralMetrics:
    """Size and shape of one document."""
    word_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    character_count: int = 0

    @property
    def average_words_per_sentence(self) -> int:
        return round_half_up(safe_ratio(self.word_count, self.sentence_count))

    @property
    def average_sentences_per_paragraph(self) -> int:
        return round_half_up(safe_ratio(self.sentence_count, self.paragraph_count))

    @property
    def complexity(self) -> int:
        return self.average_words_per_sentence + self.average_sentences_per_paragraph

    def to_dict(self) -> Dict[str, Any]:
        return {
            'word_count': self.word_count,
            'sentence_count': self.sentence_count,
            'paragraph_count': self.paragraph_count,
            'average_words_per_sentence': self.average_words_per_sentence,
            'average_sentences_per_paragraph': self.average_sentences_per_paragraph,
            'character_count': self.character_count,
        }


@dataclass
class StructuralComparison:
    doc1: StructuralMetrics
    doc2: StructuralMetrics
    length_change_percentage: int = 0
    complexity_change: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'doc1': self.doc1.to_dict(),
            'doc2': self.doc2.to_dict(),
            'comparison': {
                'word_count_change': self.doc2.word_count - self.doc1.word_count,
                'sentence_count_change': self.doc2.sentence_count - self.doc1.sentence_count,
                'paragraph_count_change': self.doc2.paragraph_count - self.doc1.paragraph_count,
                'length_change_percentage': self.length_change_percentage,
                'structural_complexity_change': self.complexity_change,
            },
        }


# =============================================================================
# STRUCTURAL DIFF
# =============================================================================

@dataclass
class DiffRun:
    """
    A maximal contiguous span of one tag.

    Attributes:
        tag: 'added', 'removed' or 'unchanged'
        content: Exact text of the span, line terminators included
        granularity: 'line' or 'word'
        old_start/old_end: 1-based inclusive line range in document 1
        new_start/new_end: 1-based inclusive line range in document 2
            (line granularity only; None where the run does not exist)
    """
    tag: str
    content: str
    granularity: str = 'line'
    old_start: Optional[int] = None
    old_end: Optional[int] = None
    new_start: Optional[int] = None
    new_end: Optional[int] = None

    @property
    def lines(self) -> List[str]:
        """Line fragments of the span without terminators."""
        fragments = self.content.split('\n')
        if self.content.endswith('\n'):
            fragments.pop()
        return fragments

    def to_dict(self) -> Dict[str, Any]:
        result = {'type': self.tag, 'content': self.content}
        if self.granularity == 'line':
            result.update({
                'old_start': self.old_start,
                'old_end': self.old_end,
                'new_start': self.new_start,
                'new_end': self.new_end,
            })
        return result


@dataclass
class DiffLine:
    """One displayed line of the line diff."""
    tag: str
    content: str
    line_number_1: Optional[int] = None
    line_number_2: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.tag,
            'content': self.content,
            'line_number_1': self.line_number_1,
            'line_number_2': self.line_number_2,
        }


@dataclass
class DiffStatistics:
    added_lines: int = 0
    removed_lines: int = 0
    unchanged_lines: int = 0

    @property
    def total_lines(self) -> int:
        return self.added_lines + self.removed_lines + self.unchanged_lines

    @property
    def change_percentage(self) -> float:
        ratio = safe_ratio(self.added_lines + self.removed_lines, self.total_lines)
        return round_half_up(ratio * 100, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'added_lines': self.added_lines,
            'removed_lines': self.removed_lines,
            'unchanged_lines': self.unchanged_lines,
            'total_lines': self.total_lines,
            'change_percentage': self.change_percentage,
        }


@dataclass
class DiffResult:
    """Line and word diff of two normalized texts."""
    line_diff: List[DiffRun] = field(default_factory=list)
    line_rows: List[DiffLine] = field(default_factory=list)
    word_diff: List[DiffRun] = field(default_factory=list)
    statistics: DiffStatistics = field(default_factory=DiffStatistics)
    summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'line_diff': [r.to_dict() for r in self.line_diff],
            'line_rows': [r.to_dict() for r in self.line_rows],
            'word_diff': [r.to_dict() for r in self.word_diff],
            'statistics': self.statistics.to_dict(),
            'summary': self.summary,
        }


# =============================================================================
# REPORT
# =============================================================================

@dataclass
class ComparisonReport:
    """Everything derived from one document pair."""
    label1: str
    label2: str
    content_matching: ContentMatching
    key_terms: KeyTermsAnalysis
    clause_categories: List[ClauseComparison]
    risk_assessment: RiskAssessment
    readability: ReadabilityComparison
    structure: StructuralComparison
    diff: DiffResult
    doc1_length: int = 0
    doc2_length: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'content_matching': self.content_matching.to_dict(),
            'key_terms': self.key_terms.to_dict(),
            'clause_categories': {c.category: c.to_dict() for c in self.clause_categories},
            'risk_assessment': self.risk_assessment.to_dict(),
            'readability': self.readability.to_dict(),
            'structure': self.structure.to_dict(),
            'diff': self.diff.to_dict(),
            'metadata': {
                'file1_name': self.label1,
                'file2_name': self.label2,
                'file1_length': self.doc1_length,
                'file2_length': self.doc2_length,
                'analysis_type': 'comprehensive',
            },
        }
