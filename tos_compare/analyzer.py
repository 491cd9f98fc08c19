"""
Comparison Analyzer
===================
Assembles the full comparison report for one document pair.

``compare()`` is pure: it performs no I/O and every object it returns is
built for that call. Text extraction, narrative summaries and persistence
are the caller's concern.
"""

from config_logging import get_logger, handle_errors, ValidationError

from .differ import DocumentDiffer
from .lexical import analyze_clauses, analyze_key_terms, assess_risks
from .matcher import match_documents
from .metrics import compare_readability, compare_structure
from .models import ComparisonReport, DiffResult
from .segmenter import segment

logger = get_logger('tos_compare.analyzer')


def _require_text(value, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(
            f"{field} must be a string, got {type(value).__name__}",
            field=field,
        )
    return value


class ComparisonAnalyzer:
    """
    Runs every analysis stage over a document pair.

    Holds only read-only collaborators, so a single instance is shared
    across requests.
    """

    def __init__(self, differ: DocumentDiffer = None):
        self.differ = differ or DocumentDiffer()

    @handle_errors(logger)
    def compare(self, text1: str, text2: str, label1: str = "", label2: str = "") -> ComparisonReport:
        """
        Compare two documents.

        Args:
            text1: Plain text of the first (older) document
            text2: Plain text of the second (newer) document
            label1: Opaque identifier for the first document
            label2: Opaque identifier for the second document

        Returns:
            ComparisonReport

        Raises:
            ValidationError: If either text or label is not a string
            ProcessingError: If an analysis stage fails unexpectedly
        """
        _require_text(text1, 'text1')
        _require_text(text2, 'text2')
        _require_text(label1, 'label1')
        _require_text(label2, 'label2')

        with logger.log_operation('compare', label1=label1, label2=label2,
                                  length1=len(text1), length2=len(text2)):
            doc1 = segment(text1, label1)
            doc2 = segment(text2, label2)

            return ComparisonReport(
                label1=label1,
                label2=label2,
                content_matching=match_documents(doc1, doc2),
                key_terms=analyze_key_terms(text1, text2),
                clause_categories=analyze_clauses(doc1.sentence_texts, doc2.sentence_texts),
                risk_assessment=assess_risks(text1, text2),
                readability=compare_readability(text1, text2),
                structure=compare_structure(text1, text2),
                diff=self.differ.diff(text1, text2),
                doc1_length=len(text1),
                doc2_length=len(text2),
            )

    @handle_errors(logger)
    def diff(self, text1: str, text2: str) -> DiffResult:
        """Structural diff only."""
        _require_text(text1, 'text1')
        _require_text(text2, 'text2')
        with logger.log_operation('diff', length1=len(text1), length2=len(text2)):
            return self.differ.diff(text1, text2)


# Shared instance
_analyzer = ComparisonAnalyzer()


def compare(text1: str, text2: str, label1: str = "", label2: str = "") -> ComparisonReport:
    """Compare two documents with the shared analyzer."""
    return _analyzer.compare(text1, text2, label1, label2)


def diff_texts(text1: str, text2: str) -> DiffResult:
    """Structural diff of two texts with the shared analyzer."""
    return _analyzer.diff(text1, text2)
