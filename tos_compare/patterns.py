"""
Static Pattern Tables
=====================
Legal vocabulary, clause-category detectors, and risk rules.

These are data: adding a term, category, or rule means editing a table
here. Every pattern is compiled once at import and shared read-only.
"""

import re
from typing import Dict, List, NamedTuple, Pattern, Tuple

# =============================================================================
# TERM VOCABULARY
# =============================================================================

LEGAL_TERMS: Tuple[str, ...] = (
    'liability', 'indemnification', 'arbitration', 'data sharing', 'privacy',
    'termination', 'jurisdiction', 'governing law', 'dispute resolution',
    'intellectual property', 'copyright', 'trademark', 'confidentiality',
    'warranty', 'disclaimer', 'limitation', 'damages', 'breach', 'force majeure',
    'modification', 'amendment', 'severability', 'entire agreement',
    'personal data', 'cookies', 'tracking', 'third party', 'user content',
    'subscription', 'payment', 'refund', 'cancellation', 'suspension',
)

# Whole-word, case-insensitive, no stemming
TERM_PATTERNS: Dict[str, Pattern] = {
    term: re.compile(rf'\b{re.escape(term)}\b', re.IGNORECASE)
    for term in LEGAL_TERMS
}

# =============================================================================
# CLAUSE CATEGORIES
# =============================================================================

_CLAUSE_SOURCES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ('Privacy & Data', (
        r'privacy.*policy', r'data.*collection', r'personal.*information',
        r'cookies', r'tracking', r'analytics', r'third.*party.*sharing',
    )),
    ('Liability & Risk', (
        r'liability', r'indemnification', r'damages', r'limitation.*liability',
        r'disclaimer', r'warranty', r'force.*majeure',
    )),
    ('Dispute Resolution', (
        r'arbitration', r'jurisdiction', r'governing.*law', r'dispute.*resolution',
        r'class.*action', r'litigation', r'court',
    )),
    ('Termination', (
        r'termination', r'suspension', r'cancellation', r'end.*service',
        r'account.*closure', r'breach',
    )),
    ('Intellectual Property', (
        r'intellectual.*property', r'copyright', r'trademark', r'patent',
        r'user.*content', r'license', r'ownership',
    )),
    ('Payment & Billing', (
        r'payment', r'billing', r'subscription', r'fee', r'refund',
        r'charge', r'price', r'cost',
    )),
    ('Service Terms', (
        r'service.*availability', r'uptime', r'maintenance', r'modification',
        r'update', r'feature', r'functionality',
    )),
)

CLAUSE_CATEGORIES: Tuple[Tuple[str, Tuple[Pattern, ...]], ...] = tuple(
    (name, tuple(re.compile(p, re.IGNORECASE) for p in sources))
    for name, sources in _CLAUSE_SOURCES
)

CATEGORY_NAMES: List[str] = [name for name, _ in CLAUSE_CATEGORIES]

# =============================================================================
# RISK RULES
# =============================================================================


class RiskRule(NamedTuple):
    pattern: Pattern
    severity: str
    type: str


RISK_RULES: Tuple[RiskRule, ...] = tuple(
    RiskRule(re.compile(pattern, re.IGNORECASE), severity, label)
    for pattern, severity, label in (
        (r'unlimited liability|no limitation.*liability', 'high', 'Unlimited Liability'),
        (r'arbitration.*mandatory|binding arbitration', 'medium', 'Mandatory Arbitration'),
        (r'may.*terminate.*any time|terminate.*without notice', 'high', 'Arbitrary Termination'),
        (r'share.*data.*third.*party|sell.*information', 'high', 'Data Sharing'),
        (r'no warranty|as is.*basis|disclaim.*warranties', 'medium', 'No Warranty'),
        (r'modify.*terms.*any time|change.*agreement.*notice', 'medium', 'Unilateral Changes'),
        (r'retain.*rights.*content|license.*perpetual', 'medium', 'Content Rights'),
        (r'class action.*waiver|waive.*right.*class', 'high', 'Class Action Waiver'),
    )
)
