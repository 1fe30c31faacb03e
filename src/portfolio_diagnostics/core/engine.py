"""
Diagnostics Engine
==================
Entry point analyze_portfolio(): one snapshot in, one PortfolioAnalysis out.

Stages:
    1. risk-tolerance overlay on the scoring config (optional)
    2. config validation (ScoringConfigError on inconsistency)
    3. portfolio metrics
    4. ten independent analyzers (+ lifetime income when supplied)
    5. health score and recommendations

The engine is pure: no I/O, no clock, no module state. Logging is the only
side effect.
"""

from collections import OrderedDict
from typing import Dict, Optional, Sequence

import numpy as np

from portfolio_diagnostics.analytics.diagnostics import (
    analyze_costs,
    analyze_crisis_resilience,
    analyze_diversification,
    analyze_goal_probability,
    analyze_lifetime_income,
    analyze_optimization,
    analyze_planning_gaps,
    analyze_protection,
    analyze_return_efficiency,
    analyze_risk_management,
    analyze_tax_efficiency,
    placeholder_result,
)
from portfolio_diagnostics.analytics.metrics import calculate_portfolio_metrics
from portfolio_diagnostics.config.risk_tolerance import apply_risk_adjustments
from portfolio_diagnostics.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from portfolio_diagnostics.config.validation import validate_scoring_config
from portfolio_diagnostics.decision.recommendations import generate_recommendations
from portfolio_diagnostics.models.portfolio import (
    DIAGNOSTIC_CATEGORIES,
    AdviceModel,
    Category,
    ClientInfo,
    DiagnosticResult,
    Holding,
    LifetimeIncomeInputs,
    PlanningChecklist,
    PortfolioAnalysis,
    RiskTolerance,
)
from portfolio_diagnostics.utils.formatting import round_half_up
from portfolio_diagnostics.utils.logger import get_logger, log_performance

logger = get_logger(__name__)


def health_score(diagnostics: Dict[Category, DiagnosticResult]) -> int:
    """Half-up rounded mean of the scored categories (0 when there are none)."""
    if not diagnostics:
        return 0
    return round_half_up(float(np.mean([r.score for r in diagnostics.values()])))


def resolve_config(
    config: ScoringConfig,
    risk_tolerance: RiskTolerance,
    apply_risk_tolerance: bool = True,
) -> ScoringConfig:
    """Overlay (when requested) then validate; the config every analyzer sees."""
    if apply_risk_tolerance:
        config = apply_risk_adjustments(config, RiskTolerance(risk_tolerance))
    return validate_scoring_config(config)


@log_performance(logger)
def analyze_portfolio(
    holdings: Sequence[Holding],
    client_info: ClientInfo,
    planning_checklist: PlanningChecklist,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    advice_model: AdviceModel = AdviceModel.SELF_DIRECTED,
    advisor_fee: float = 0.0,
    lifetime_income: Optional[LifetimeIncomeInputs] = None,
    apply_risk_tolerance: bool = True,
) -> PortfolioAnalysis:
    """
    Score a portfolio snapshot across the ten diagnostic categories.

    Args:
        holdings: Positions of the snapshot (may be empty)
        client_info: Risk tolerance and optional goal inputs
        planning_checklist: Estate / planning task completion
        config: Scoring thresholds (risk-tolerance overlay applied on top)
        advice_model: Selects the fee band of the cost analysis
        advisor_fee: Annual advisory fee as a fraction (0.01 = 1%)
        lifetime_income: Optional income inputs; adds lifetime_income_security
        apply_risk_tolerance: Set False to score against `config` as given

    Returns:
        PortfolioAnalysis with exactly the ten scored categories

    Raises:
        ScoringConfigError: If the (overlaid) config is inconsistent
    """
    holdings = list(holdings)
    config = resolve_config(config, client_info.risk_tolerance, apply_risk_tolerance)
    metrics = calculate_portfolio_metrics(holdings)

    lifetime_result = None
    if lifetime_income is not None:
        lifetime_result = analyze_lifetime_income(lifetime_income, config)

    if not holdings or metrics.total_value <= 0:
        logger.info("No holdings with value; returning placeholder diagnostics")
        diagnostics = OrderedDict()
        for category in DIAGNOSTIC_CATEGORIES:
            if category == Category.PLANNING_GAPS:
                diagnostics[category] = analyze_planning_gaps(planning_checklist, config)
            else:
                diagnostics[category] = placeholder_result(config)
        return PortfolioAnalysis(
            health_score=0,
            metrics=metrics,
            diagnostics=diagnostics,
            recommendations=[],
            lifetime_income_security=lifetime_result,
        )

    logger.debug(
        f"Analyzing {len(holdings)} holdings, value {metrics.total_value:,.0f}, "
        f"risk tolerance {RiskTolerance(client_info.risk_tolerance).value}"
    )

    results = {
        Category.RISK_MANAGEMENT: analyze_risk_management(holdings, client_info, metrics, config),
        Category.PROTECTION: analyze_protection(holdings, config),
        Category.RETURN_EFFICIENCY: analyze_return_efficiency(holdings, metrics, config),
        Category.COST_ANALYSIS: analyze_costs(holdings, metrics, config, advice_model, advisor_fee),
        Category.TAX_EFFICIENCY: analyze_tax_efficiency(holdings, metrics, config),
        Category.DIVERSIFICATION: analyze_diversification(holdings, metrics, config),
        Category.RISK_ADJUSTED: analyze_goal_probability(client_info, metrics, config, lifetime_income),
        Category.CRISIS_RESILIENCE: analyze_crisis_resilience(holdings, config),
        Category.OPTIMIZATION: analyze_optimization(metrics, config),
        Category.PLANNING_GAPS: analyze_planning_gaps(planning_checklist, config),
    }
    diagnostics = OrderedDict((category, results[category]) for category in DIAGNOSTIC_CATEGORIES)

    score = health_score(diagnostics)
    recommendations = generate_recommendations(diagnostics, lifetime_result)

    logger.info(f"Health score {score}/100 with {len(recommendations)} recommendation(s)")
    return PortfolioAnalysis(
        health_score=score,
        metrics=metrics,
        diagnostics=diagnostics,
        recommendations=recommendations,
        lifetime_income_security=lifetime_result,
    )
