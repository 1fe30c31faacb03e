"""
Card Severity Policy
====================
Single source of truth for the NORMAL/EXTREME flag of a diagnostic card.

Both the shock watch and the action plan read severity through
card_severity(); neither recomputes the thresholds on its own.

Rules:
    risk_management           largest position >= 25%
    cost_analysis             all-in fees >= 0.80%
    lifetime_income_security  core coverage < 80%
    any category              RED with score <= 35
"""

from typing import Any, Dict, Optional

from portfolio_diagnostics.models.portfolio import (
    CardSeverity,
    Category,
    DiagnosticResult,
    DiagnosticStatus,
)

EXTREME_TOP_POSITION_PCT = 0.25
EXTREME_ALL_IN_FEES = 0.008
EXTREME_CORE_COVERAGE = 0.80
EXTREME_RED_SCORE_MAX = 35.0


def _top_position_weight(details: Dict[str, Any]) -> Optional[float]:
    positions = details.get('top_positions') or []
    if not positions:
        return None
    return positions[0].get('weight')


def _number(details: Dict[str, Any], key: str) -> Optional[float]:
    value = details.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return None


def card_severity(category: Category, result: DiagnosticResult) -> CardSeverity:
    """
    EXTREME when a category-specific metric crosses its line, or when the
    card is RED with a very low score; NORMAL otherwise.
    """
    details = result.details or {}

    if category == Category.RISK_MANAGEMENT:
        top = _top_position_weight(details)
        if top is not None and top >= EXTREME_TOP_POSITION_PCT:
            return CardSeverity.EXTREME

    if category == Category.COST_ANALYSIS:
        fees = _number(details, 'all_in_fees')
        if fees is not None and fees >= EXTREME_ALL_IN_FEES:
            return CardSeverity.EXTREME

    if category == Category.LIFETIME_INCOME_SECURITY:
        coverage = _number(details, 'core_coverage_pct')
        if coverage is not None and coverage < EXTREME_CORE_COVERAGE:
            return CardSeverity.EXTREME

    if result.status == DiagnosticStatus.RED and result.score <= EXTREME_RED_SCORE_MAX:
        return CardSeverity.EXTREME
    return CardSeverity.NORMAL


def severity_map(diagnostics: Dict[Category, DiagnosticResult]) -> Dict[Category, CardSeverity]:
    return {category: card_severity(category, result) for category, result in diagnostics.items()}
