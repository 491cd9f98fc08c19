"""
Tests for Key Terms, Clause Categories and Risk Rules
=====================================================
"""

import pytest

from tos_compare.lexical import (
    analyze_clauses, analyze_key_terms, assess_risks, categorize_sentences,
    compare_risks, identify_risks, overall_risk, term_frequency, top_terms,
)
from tos_compare.models import RiskFinding
from tos_compare.patterns import CATEGORY_NAMES, LEGAL_TERMS, RISK_RULES


class TestPatternTables:
    """Sanity checks on the static tables."""

    def test_table_sizes(self):
        assert len(LEGAL_TERMS) == 33
        assert len(CATEGORY_NAMES) == 7
        assert len(RISK_RULES) == 8

    def test_rule_severities(self):
        assert {r.severity for r in RISK_RULES} == {'high', 'medium'}


class TestTermFrequency:
    """Tests for vocabulary counting."""

    def test_whole_word_case_insensitive(self):
        text = "Liability is limited. LIABILITY caps apply. Liabilities excluded."
        assert term_frequency(text) == {'liability': 2}

    def test_multi_word_term(self):
        assert term_frequency("Any third party and third-party vendor")['third party'] == 1

    def test_absent_terms_omitted(self):
        assert term_frequency("Nothing legal in here") == {}

    def test_top_terms_ties_keep_vocabulary_order(self):
        frequency = term_frequency("refund payment refund payment privacy")
        assert top_terms(frequency) == [('payment', 2), ('refund', 2), ('privacy', 1)]


class TestKeyTerms:
    """Tests for the cross-document term comparison."""

    def test_comparison_entries(self):
        result = analyze_key_terms("Refund policy. refund requests.", "No refund. Payment required.")
        assert list(result.term_comparison) == ['payment', 'refund']

        refund = result.term_comparison['refund']
        assert (refund.doc1_count, refund.doc2_count, refund.difference) == (2, 1, -1)
        assert refund.significance == pytest.approx(1 / 3)

        payment = result.term_comparison['payment']
        assert payment.difference == 1
        assert payment.significance == 1.0

        assert [e.term for e in result.significant_differences] == ['payment']
        assert result.doc1_top_terms == [('refund', 2)]

    def test_half_significance_not_reported(self):
        result = analyze_key_terms("privacy", "privacy privacy privacy")
        assert result.term_comparison['privacy'].significance == 0.5
        assert result.significant_differences == []

    def test_to_dict_shape(self):
        payload = analyze_key_terms("privacy", "").to_dict()
        assert payload['term_comparison']['privacy'] == {
            'doc1_count': 1, 'doc2_count': 0, 'difference': -1, 'significance': 1.0,
        }
        assert payload['doc1_top_terms'] == [{'term': 'privacy', 'count': 1}]
        assert payload['significant_differences'][0]['term'] == 'privacy'


class TestClauseCategories:
    """Tests for sentence categorization."""

    def test_sentences_tagged_by_detector(self):
        sentences = [
            "We use cookies to improve the service",
            "Disputes go to binding arbitration in court",
            "Nothing relevant here at all",
        ]
        result = categorize_sentences(sentences)
        assert list(result) == CATEGORY_NAMES
        assert result['Privacy & Data'] == [sentences[0]]
        assert result['Dispute Resolution'] == [sentences[1]]
        assert all(sentences[2] not in matched for matched in result.values())

    def test_sentence_can_belong_to_several_categories(self):
        sentence = "Our refund policy covers subscription fees and data collection"
        result = categorize_sentences([sentence])
        tagged = [name for name, matched in result.items() if matched]
        assert tagged == ['Privacy & Data', 'Payment & Billing']

    def test_analyze_clauses_counts(self):
        comparisons = analyze_clauses(
            ["Payment is due monthly"],
            ["Payment is due monthly", "A late fee applies"],
        )
        assert [c.category for c in comparisons] == CATEGORY_NAMES
        billing = comparisons[CATEGORY_NAMES.index('Payment & Billing')]
        assert (billing.doc1_count, billing.doc2_count, billing.difference) == (1, 2, 1)


class TestRiskAssessment:
    """Tests for risk rules and aggregation."""

    TWO_HIGH = "You waive the right to a class action. We may terminate your account at any time."

    def test_identify_risks_in_rule_order(self):
        findings = identify_risks(self.TWO_HIGH)
        assert [(f.type, f.severity) for f in findings] == [
            ('Arbitrary Termination', 'high'),
            ('Class Action Waiver', 'high'),
        ]
        assert findings[0].description == "Found 1 instance(s) of arbitrary termination"

    def test_occurrences_counted(self):
        findings = identify_risks("Binding arbitration applies.\nBinding arbitration is final.")
        assert len(findings) == 1
        assert findings[0].type == 'Mandatory Arbitration'
        assert findings[0].occurrences == 2

    def test_two_high_findings_are_medium(self):
        assert overall_risk(identify_risks(self.TWO_HIGH)) == 'medium'

    def test_three_high_findings_are_high(self):
        text = self.TWO_HIGH + " There is unlimited liability."
        assert overall_risk(identify_risks(text)) == 'high'

    @pytest.mark.parametrize("severities, expected", [
        ([], 'low'),
        (['medium'] * 3, 'low'),
        (['medium'] * 4, 'medium'),
        (['high'], 'medium'),
        (['high'] * 3, 'high'),
    ])
    def test_overall_risk_thresholds(self, severities, expected):
        findings = [RiskFinding(f"Rule {i}", s, 1) for i, s in enumerate(severities)]
        assert overall_risk(findings) == expected

    def test_compare_risks_changes(self):
        risks1 = [RiskFinding('Data Sharing', 'high', 1), RiskFinding('Content Rights', 'medium', 1)]
        risks2 = [RiskFinding('Data Sharing', 'high', 2), RiskFinding('No Warranty', 'medium', 1)]
        changes = {c.type: c.change for c in compare_risks(risks1, risks2)}
        assert changes == {
            'Data Sharing': 'unchanged',
            'Content Rights': 'decreased',
            'No Warranty': 'increased',
        }

    def test_assess_risks_to_dict(self):
        payload = assess_risks("", self.TWO_HIGH).to_dict()
        assert payload['doc1_risks'] == []
        assert payload['overall_risk_level'] == {'doc1': 'low', 'doc2': 'medium'}
        assert payload['risk_comparison']['Class Action Waiver'] == {
            'doc1': 'none', 'doc2': 'high', 'change': 'increased',
        }
