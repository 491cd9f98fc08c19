"""
Lexical Feature Extractor
=========================
Three independent passes over full document text:

- term frequency over the fixed legal vocabulary
- clause categorization of sentences
- risk rule scanning of the whole document
"""

from typing import Dict, Iterable, List, Tuple

from .models import (
    ClauseComparison, KeyTermsAnalysis, RiskAssessment, RiskChange,
    RiskFinding, TermEntry,
)
from .patterns import CLAUSE_CATEGORIES, RISK_RULES, TERM_PATTERNS

TOP_TERMS_LIMIT = 10
SIGNIFICANT_DIFFERENCE_LIMIT = 10
SIGNIFICANCE_THRESHOLD = 0.5


# =============================================================================
# TERM FREQUENCY
# =============================================================================

def term_frequency(text: str) -> Dict[str, int]:
    """Counts of vocabulary terms present in ``text``, in vocabulary order."""
    frequency = {}
    for term, pattern in TERM_PATTERNS.items():
        count = len(pattern.findall(text))
        if count:
            frequency[term] = count
    return frequency


def top_terms(frequency: Dict[str, int], limit: int = TOP_TERMS_LIMIT) -> List[Tuple[str, int]]:
    """Most frequent terms; equal counts keep vocabulary order."""
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def analyze_key_terms(text1: str, text2: str) -> KeyTermsAnalysis:
    terms1 = term_frequency(text1)
    terms2 = term_frequency(text2)

    comparison = {}
    for term in TERM_PATTERNS:
        if term in terms1 or term in terms2:
            comparison[term] = TermEntry(term, terms1.get(term, 0), terms2.get(term, 0))

    significant = [e for e in comparison.values() if e.significance > SIGNIFICANCE_THRESHOLD]
    significant.sort(key=lambda e: e.significance, reverse=True)

    return KeyTermsAnalysis(
        term_comparison=comparison,
        doc1_top_terms=top_terms(terms1),
        doc2_top_terms=top_terms(terms2),
        significant_differences=significant[:SIGNIFICANT_DIFFERENCE_LIMIT],
    )


# =============================================================================
# CLAUSE CATEGORIES
# =============================================================================

def categorize_sentences(sentences: Iterable[str]) -> Dict[str, List[str]]:
    """
    Tag sentences with every category that has a matching detector.

    Returns:
        Mapping of every category name to its sentences, in order
    """
    sentences = list(sentences)
    return {
        name: [s for s in sentences if any(p.search(s) for p in detectors)]
        for name, detectors in CLAUSE_CATEGORIES
    }


def analyze_clauses(sentences1: List[str], sentences2: List[str]) -> List[ClauseComparison]:
    clauses1 = categorize_sentences(sentences1)
    clauses2 = categorize_sentences(sentences2)
    return [
        ClauseComparison(name, clauses1[name], clauses2[name])
        for name, _ in CLAUSE_CATEGORIES
    ]


# =============================================================================
# RISK ASSESSMENT
# =============================================================================

def identify_risks(text: str) -> List[RiskFinding]:
    """Findings for every rule that matches anywhere in ``text``, in rule order."""
    findings = []
    for rule in RISK_RULES:
        occurrences = sum(1 for _ in rule.pattern.finditer(text))
        if occurrences:
            findings.append(RiskFinding(rule.type, rule.severity, occurrences))
    return findings


def overall_risk(findings: List[RiskFinding]) -> str:
    """
    Aggregate severity of a document.

    'high' with more than two high findings; 'medium' with any high finding
    or more than three medium ones; otherwise 'low'.
    """
    high = sum(1 for f in findings if f.severity == 'high')
    medium = sum(1 for f in findings if f.severity == 'medium')
    if high > 2:
        return 'high'
    if high > 0 or medium > 3:
        return 'medium'
    return 'low'


def compare_risks(risks1: List[RiskFinding], risks2: List[RiskFinding]) -> List[RiskChange]:
    """One RiskChange per finding type present in either document."""
    severities1 = {r.type: r.severity for r in risks1}
    severities2 = {r.type: r.severity for r in risks2}
    types = list(dict.fromkeys([r.type for r in risks1] + [r.type for r in risks2]))
    return [
        RiskChange(t, severities1.get(t, 'none'), severities2.get(t, 'none'))
        for t in types
    ]


def assess_risks(text1: str, text2: str) -> RiskAssessment:
    risks1 = identify_risks(text1)
    risks2 = identify_risks(text2)
    return RiskAssessment(
        doc1_risks=risks1,
        doc2_risks=risks2,
        comparison=compare_risks(risks1, risks2),
        doc1_overall=overall_risk(risks1),
        doc2_overall=overall_risk(risks2),
    )
