"""
Recommendation Generator
========================
Turns diagnostic verdicts into a short, ranked action list.

Categories are walked in a fixed order:
    risk -> cost -> tax -> return efficiency -> diversification
         -> protection -> planning -> lifetime income (when reported)

At most one recommendation per category, emitted when the category is not
GREEN (tax also whenever there are harvestable losses). Priority is the
assignment order; the list is capped at MAX_RECOMMENDATIONS.
"""

from typing import Callable, Dict, List, Optional

from portfolio_diagnostics.models.portfolio import (
    Category,
    DiagnosticResult,
    DiagnosticStatus,
    Recommendation,
)
from portfolio_diagnostics.utils.formatting import format_currency, format_pct
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

MAX_RECOMMENDATIONS = 5
FEE_SAVINGS_SHARE = 0.3
ITEMS_NAMED = 2

RECOMMENDATION_ORDER = (
    Category.RISK_MANAGEMENT,
    Category.COST_ANALYSIS,
    Category.TAX_EFFICIENCY,
    Category.RETURN_EFFICIENCY,
    Category.DIVERSIFICATION,
    Category.PROTECTION,
    Category.PLANNING_GAPS,
    Category.LIFETIME_INCOME_SECURITY,
)

# (title, description, impact) for one category's result, or None
Draft = Optional[tuple]


# ================================================================================
# PER-CATEGORY DRAFTS
# ================================================================================

def _risk_management(result: DiagnosticResult) -> Draft:
    if result.status == DiagnosticStatus.GREEN:
        return None
    d = result.details
    if d.get('has_concentration'):
        return (
            "Reduce position concentration",
            f"Largest position exceeds the {format_pct(d.get('max_single_position_pct', 0.0), 0)}% threshold",
            "Limits the damage any single holding can do to your plan",
        )
    if d.get('has_sector_concentration'):
        return (
            "Reduce sector concentration",
            f"{d.get('top_sector')} exceeds the {format_pct(d.get('max_sector_pct', 0.0), 0)}% sector guideline",
            "Less exposure to a downturn in one industry",
        )
    return (
        "Align portfolio risk with your target",
        f"Portfolio volatility {format_pct(d.get('current_volatility', 0.0))}% vs "
        f"{format_pct(d.get('target_volatility', 0.0))}% target",
        "Volatility that matches your risk tolerance",
    )


def _cost_analysis(result: DiagnosticResult) -> Draft:
    if result.status == DiagnosticStatus.GREEN:
        return None
    savings = result.details.get('annual_fees', 0.0) * FEE_SAVINGS_SHARE
    return (
        "Review fee structure",
        "Total fees may be elevated for your advice model",
        f"Potential savings of {format_currency(savings)}/year",
    )


def _tax_efficiency(result: DiagnosticResult) -> Draft:
    d = result.details
    harvestable = d.get('total_harvestable', 0.0)
    if harvestable > 0:
        return (
            "Harvest tax losses",
            "Realize losses in taxable accounts to offset gains",
            f"Potential {format_currency(d.get('estimated_tax_savings', 0.0))} tax savings",
        )
    if result.status == DiagnosticStatus.GREEN:
        return None
    return (
        "Improve asset location",
        "Move bonds and commodities from taxable to tax-advantaged accounts",
        "Lower annual tax drag",
    )


def _return_efficiency(result: DiagnosticResult) -> Draft:
    if result.status == DiagnosticStatus.GREEN:
        return None
    return (
        "Improve return efficiency",
        f"Work toward Sharpe ratio target of {result.details.get('target_sharpe', 0.0):.2f}",
        "Better risk-adjusted returns",
    )


def _diversification(result: DiagnosticResult) -> Draft:
    if result.status == DiagnosticStatus.GREEN:
        return None
    return (
        "Improve diversification",
        "Reduce concentration or add underweighted asset classes",
        "Lower portfolio correlation risk",
    )


def _protection(result: DiagnosticResult) -> Draft:
    if result.status == DiagnosticStatus.GREEN:
        return None
    d = result.details
    elevated = d.get('critical_count', 0) + d.get('high_count', 0)
    return (
        "Address vulnerability gaps",
        f"Portfolio has {elevated} high-risk exposure area{'s' if elevated != 1 else ''}",
        "Better protection against market stress",
    )


def _planning_gaps(result: DiagnosticResult) -> Draft:
    if result.status == DiagnosticStatus.GREEN:
        return None
    d = result.details
    critical = d.get('critical_missing') or []
    if critical:
        return (
            "Complete critical planning items",
            f"Missing: {', '.join(critical[:ITEMS_NAMED])}",
            "Comprehensive financial protection",
        )
    missing = d.get('missing_items') or []
    return (
        "Close planning gaps",
        f"Missing: {', '.join(missing[:ITEMS_NAMED])}",
        "A more complete financial plan",
    )


def _lifetime_income(result: DiagnosticResult) -> Draft:
    if result.status != DiagnosticStatus.RED:
        return None
    coverage = result.details.get('core_coverage_pct') or 0.0
    return (
        "Secure guaranteed lifetime income",
        f"Only {coverage * 100:.0f}% of core expenses covered by guarantees",
        "Eliminate dependence on market returns for basic needs",
    )


DRAFTERS: Dict[Category, Callable[[DiagnosticResult], Draft]] = {
    Category.RISK_MANAGEMENT: _risk_management,
    Category.COST_ANALYSIS: _cost_analysis,
    Category.TAX_EFFICIENCY: _tax_efficiency,
    Category.RETURN_EFFICIENCY: _return_efficiency,
    Category.DIVERSIFICATION: _diversification,
    Category.PROTECTION: _protection,
    Category.PLANNING_GAPS: _planning_gaps,
    Category.LIFETIME_INCOME_SECURITY: _lifetime_income,
}


# ================================================================================
# GENERATION
# ================================================================================

def generate_recommendations(
    diagnostics: Dict[Category, DiagnosticResult],
    lifetime_income: Optional[DiagnosticResult] = None,
    max_items: int = MAX_RECOMMENDATIONS,
) -> List[Recommendation]:
    """
    Ranked recommendations for one analysis.

    Args:
        diagnostics: The scored categories (missing categories are skipped)
        lifetime_income: Optional lifetime income result, walked last
        max_items: Cap on the returned list
    """
    results = dict(diagnostics)
    if lifetime_income is not None:
        results[Category.LIFETIME_INCOME_SECURITY] = lifetime_income

    recommendations: List[Recommendation] = []
    for category in RECOMMENDATION_ORDER:
        if len(recommendations) >= max_items:
            break
        result = results.get(category)
        if result is None:
            continue
        draft = DRAFTERS[category](result)
        if draft is None:
            continue
        priority = len(recommendations) + 1
        title, description, impact = draft
        recommendations.append(Recommendation(
            id=f"rec-{priority}",
            category=category,
            priority=priority,
            title=title,
            description=description,
            impact=impact,
        ))

    logger.debug(f"Generated {len(recommendations)} recommendation(s)")
    return recommendations


def optimization_recommendations(result: DiagnosticResult, start_priority: int) -> List[Recommendation]:
    """
    The optimization card's own suggestions as Recommendations.

    Priorities continue from `start_priority` so they rank after the main list
    when merged into an action plan.
    """
    if result.status == DiagnosticStatus.GREEN:
        return []
    actions = result.details.get('recommendations') or []
    recommendations = []
    for offset, action in enumerate(actions):
        priority = start_priority + offset
        recommendations.append(Recommendation(
            id=f"opt-{offset + 1}",
            category=Category.OPTIMIZATION,
            priority=priority,
            title="Capture optimization potential",
            description=action,
            impact=f"Up to +{format_pct(result.details.get('improvement_potential', 0.0), 0)}% Sharpe ratio",
        ))
    return recommendations
