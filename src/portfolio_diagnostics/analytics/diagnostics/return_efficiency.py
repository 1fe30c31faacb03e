"""
Return Efficiency Diagnostic
============================
Portfolio Sharpe measured as a percentage of the configured target.

The proportional framing matters: a Sharpe of 0.45 against a 0.50 target is
90% of target, which is what the per-holding labels and the score are built
on, not the absolute 0.05 gap.

    sharpe >= target   85 + min(15, (sharpe - target) * 30)
    sharpe <  target   pct_of_target * 0.85
"""

from typing import Dict, List, Sequence

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.analytics.metrics.portfolio import holdings_frame
from portfolio_diagnostics.config.scoring import ScoringConfig, SharpeThresholds
from portfolio_diagnostics.data.definitions.assumptions import RISK_FREE_RATE, get_ticker_estimate
from portfolio_diagnostics.models.portfolio import (
    DiagnosticResult,
    DiagnosticStatus,
    Holding,
    PortfolioMetrics,
)
from portfolio_diagnostics.utils.formatting import round_half_up, safe_divide
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

AT_TARGET_BASE = 85.0
AT_TARGET_BONUS_MAX = 15.0
AT_TARGET_BONUS_SLOPE = 30.0
BELOW_TARGET_SLOPE = 0.85

HOLDINGS_SHOWN = 15

SHARPE_EDUCATION = (
    "Sharpe ratio measures return earned per unit of risk, higher is better. "
    "Below target means you're taking more volatility than necessary for the returns."
)


def holding_label(pct_of_target: float, thresholds: SharpeThresholds) -> str:
    """GOOD / BELOW TARGET / POOR from a holding's Sharpe as a fraction of target."""
    if pct_of_target >= thresholds.holding_good_pct_of_target:
        return 'GOOD'
    if pct_of_target >= thresholds.holding_below_target_pct_of_target:
        return 'BELOW TARGET'
    return 'POOR'


def absolute_band(sharpe: float, thresholds: SharpeThresholds) -> str:
    """Absolute band: good >= threshold, neutral within the offset below it, weak otherwise."""
    if sharpe >= thresholds.holding_good_threshold:
        return 'good'
    if sharpe >= thresholds.holding_good_threshold - thresholds.holding_neutral_offset:
        return 'neutral'
    return 'weak'


def holding_efficiency(holdings: Sequence[Holding], thresholds: SharpeThresholds) -> List[Dict]:
    """
    Per-holding Sharpe with labels.

    Ticker estimates are used when the ticker is known, asset-class averages
    otherwise.
    """
    frame = holdings_frame(holdings)
    target = thresholds.portfolio_target
    rows = []
    for row in frame.itertuples(index=False):
        estimate = get_ticker_estimate(row.ticker)
        expected_return = estimate.expected_return if estimate else float(row.expected_return)
        volatility = estimate.volatility if estimate else float(row.volatility)
        sharpe = safe_divide(expected_return - RISK_FREE_RATE, volatility)
        pct_of_target = safe_divide(sharpe, target)
        rows.append({
            'ticker': row.ticker,
            'weight': float(row.weight),
            'sharpe': sharpe,
            'pct_of_target': round_half_up(pct_of_target * 100),
            'contribution': holding_label(pct_of_target, thresholds),
            'band': absolute_band(sharpe, thresholds),
            'expected_return': expected_return,
            'volatility': volatility,
            'uses_ticker_data': estimate is not None,
        })
    return rows


def analyze_return_efficiency(
    holdings: Sequence[Holding],
    metrics: PortfolioMetrics,
    config: ScoringConfig,
) -> DiagnosticResult:
    thresholds = config.sharpe
    target = thresholds.portfolio_target
    sharpe = metrics.sharpe_ratio
    pct_of_target = safe_divide(sharpe, target) * 100

    if sharpe >= target:
        score = AT_TARGET_BASE + min(AT_TARGET_BONUS_MAX, (sharpe - target) * AT_TARGET_BONUS_SLOPE)
    else:
        score = max(0.0, pct_of_target * BELOW_TARGET_SLOPE)
    score, status = score_and_status(score, config)

    efficiency = holding_efficiency(holdings, thresholds)
    ticker_count = sum(1 for h in efficiency if h['uses_ticker_data'])
    asset_class_count = len(efficiency) - ticker_count

    pct_label = round_half_up(pct_of_target)
    poor_cutoff = thresholds.holding_below_target_pct_of_target * 100
    if status == DiagnosticStatus.GREEN:
        if sharpe >= target:
            key_finding = f"Portfolio Sharpe {sharpe:.2f} meets {target:.2f} target. {SHARPE_EDUCATION}"
        else:
            key_finding = (
                f"Portfolio Sharpe {sharpe:.2f} is {pct_label}% of {target:.2f} target, "
                f"slightly below target. {SHARPE_EDUCATION}"
            )
    elif sharpe >= target:
        key_finding = (
            f"Portfolio Sharpe {sharpe:.2f} is at the {target:.2f} target, but the margin is thinner "
            f"than your scoring thresholds require. {SHARPE_EDUCATION}"
        )
    elif pct_of_target < poor_cutoff:
        key_finding = (
            f"Portfolio Sharpe {sharpe:.2f} is only {pct_label}% of target, "
            f"risk-adjusted returns are POOR. {SHARPE_EDUCATION}"
        )
    else:
        key_finding = (
            f"Portfolio Sharpe {sharpe:.2f} is {pct_label}% of {target:.2f} target, "
            f"below optimal. {SHARPE_EDUCATION}"
        )

    data_source_note = None
    if asset_class_count > 0:
        data_source_note = (
            f"{ticker_count} holdings use ticker-specific estimates; "
            f"{asset_class_count} use asset class averages."
        )

    return finalize(
        score,
        config,
        key_finding,
        f"Sharpe: {sharpe:.2f} ({pct_label}% of {target:.2f} target)",
        {
            'sharpe_ratio': sharpe,
            'target_sharpe': target,
            'pct_of_target': pct_label,
            'expected_return': metrics.expected_return,
            'volatility': metrics.volatility,
            'holding_efficiency': efficiency[:HOLDINGS_SHOWN],
            'good_pct_threshold': round_half_up(thresholds.holding_good_pct_of_target * 100),
            'below_target_pct_threshold': round_half_up(thresholds.holding_below_target_pct_of_target * 100),
            'ticker_data_count': ticker_count,
            'asset_class_count': asset_class_count,
            'data_source_note': data_source_note,
        },
    )
