"""
TOS Compare v1.0.0
==================
Deterministic comparison of two legal documents (e.g. two versions of a
Terms-of-Service).

Features:
- Sentence matching (exact, partial by word-set similarity, unique)
- Legal term frequency and significance
- Clause categorization by legal topic
- Risk pattern detection with aggregate severity
- Readability and structural metrics
- Line- and word-level structural diff with statistics

Usage:
    from tos_compare import compare
    report = compare(old_text, new_text, 'tos_2023.txt', 'tos_2024.txt')
    payload = report.to_dict()
"""

from .analyzer import ComparisonAnalyzer, compare, diff_texts
from .differ import DocumentDiffer, compute_diff, normalize_text
from .models import (
    ComparisonReport,
    ContentMatching,
    DiffResult,
    DiffRun,
    MatchRecord,
    RiskFinding,
    TermEntry,
)

__version__ = "1.0.0"
__all__ = [
    'compare',
    'diff_texts',
    'ComparisonAnalyzer',
    'DocumentDiffer',
    'compute_diff',
    'normalize_text',
    'ComparisonReport',
    'ContentMatching',
    'DiffResult',
    'DiffRun',
    'MatchRecord',
    'RiskFinding',
    'TermEntry',
]
