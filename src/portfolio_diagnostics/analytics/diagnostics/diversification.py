"""
Diversification Diagnostic
==========================
Holding count for the portfolio's size band, top-3/top-10 concentration and
the bond sleeve when domestic equity dominates.

Score starts at 70 and loses:
    too few holdings        -30   (else too many: -10)
    top 10 above ceiling    -20
    top 3 above ceiling     -15
    thin bonds + US equity  -15
"""

from typing import Sequence

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.analytics.metrics.portfolio import asset_class_weights, position_weights
from portfolio_diagnostics.config.scoring import ScoringConfig
from portfolio_diagnostics.models.portfolio import (
    AssetClass,
    DiagnosticResult,
    DiagnosticStatus,
    Holding,
    PortfolioMetrics,
)
from portfolio_diagnostics.utils.formatting import format_pct
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

BASE_SCORE = 70.0
TOO_FEW_PENALTY = 30.0
TOO_MANY_PENALTY = 10.0
TOP10_PENALTY = 20.0
TOP3_PENALTY = 15.0
BONDS_UNDERWEIGHT_PENALTY = 15.0

DIVERSIFICATION_EDUCATION = (
    "True diversification means no single position or sector can materially impact your portfolio. "
    "Even 'diversified' portfolios can be concentrated in their top holdings."
)


def analyze_diversification(
    holdings: Sequence[Holding],
    metrics: PortfolioMetrics,
    config: ScoringConfig,
) -> DiagnosticResult:
    thresholds = config.diversification
    num_holdings = len(holdings)

    is_large = metrics.total_value >= thresholds.small_portfolio_threshold
    if is_large:
        min_holdings = thresholds.large_portfolio_min_holdings
        max_holdings = thresholds.large_portfolio_max_holdings
    else:
        min_holdings = thresholds.small_portfolio_min_holdings
        max_holdings = thresholds.small_portfolio_max_holdings

    class_weights = asset_class_weights(holdings)
    positions = position_weights(holdings)
    top3_weight = sum(p['weight'] for p in positions[:3])
    top10_weight = sum(p['weight'] for p in positions[:10])

    too_few = num_holdings < min_holdings
    too_many = num_holdings > max_holdings
    top10_concentrated = top10_weight > thresholds.top10_concentration_max
    top3_concentrated = top3_weight > thresholds.top3_concentration_max
    bonds_underweight = (
        class_weights[AssetClass.BONDS] < thresholds.bonds_underweight_min
        and class_weights[AssetClass.US_STOCKS] > thresholds.equity_dominance_max
    )

    score = BASE_SCORE
    if too_few:
        score -= TOO_FEW_PENALTY
    elif too_many:
        score -= TOO_MANY_PENALTY
    if top10_concentrated:
        score -= TOP10_PENALTY
    if top3_concentrated:
        score -= TOP3_PENALTY
    if bonds_underweight:
        score -= BONDS_UNDERWEIGHT_PENALTY
    score, status = score_and_status(score, config)

    if too_few:
        label = 'TOO FEW'
    elif too_many:
        label = 'TOO MANY'
    else:
        label = 'ADEQUATE'

    asset_class_count = sum(1 for w in class_weights.values() if w > 0)
    top10_max_label = format_pct(thresholds.top10_concentration_max, 0)

    if status == DiagnosticStatus.GREEN and (top3_concentrated or top10_concentrated or too_few):
        key_finding = (
            f"{num_holdings} holdings across {asset_class_count} asset classes is acceptable overall; "
            f"watch the top 3 positions at {format_pct(top3_weight, 0)}% of portfolio. {DIVERSIFICATION_EDUCATION}"
        )
    elif status == DiagnosticStatus.GREEN:
        key_finding = (
            f"{num_holdings} holdings across {asset_class_count} asset classes provides solid diversification. "
            f"Top 10 = {format_pct(top10_weight, 0)}% is within guidelines. {DIVERSIFICATION_EDUCATION}"
        )
    elif top3_concentrated:
        key_finding = (
            f"{num_holdings} holdings is {label.lower()}, but top 3 positions = {format_pct(top3_weight, 0)}% "
            f"of portfolio, a bad quarter for just 3 positions could significantly impact your wealth. "
            f"{DIVERSIFICATION_EDUCATION}"
        )
    elif top10_concentrated:
        key_finding = (
            f"Top 10 holdings = {format_pct(top10_weight, 0)}%, above {top10_max_label}% target. "
            f"{DIVERSIFICATION_EDUCATION}"
        )
    elif too_few:
        key_finding = (
            f"Only {num_holdings} holdings provides limited diversification. Consider "
            f"{min_holdings}-{max_holdings} positions for better risk distribution. {DIVERSIFICATION_EDUCATION}"
        )
    else:
        key_finding = (
            "Diversification could be improved through broader asset class exposure or reducing "
            f"concentration in top holdings. {DIVERSIFICATION_EDUCATION}"
        )

    logger.debug(f"Diversification: n={num_holdings} top3={top3_weight:.3f} top10={top10_weight:.3f} -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        f"Top 10: {format_pct(top10_weight, 0)}% (Target <{top10_max_label}%)",
        {
            'num_holdings': num_holdings,
            'asset_class_weights': {ac.value: w for ac, w in class_weights.items()},
            'top3': positions[:3],
            'top10': positions[:10],
            'top3_weight': top3_weight,
            'top10_weight': top10_weight,
            'holding_count_label': label,
            'min_holdings': min_holdings,
            'max_holdings': max_holdings,
            'is_large_portfolio': is_large,
            'bonds_underweight': bonds_underweight,
        },
    )
