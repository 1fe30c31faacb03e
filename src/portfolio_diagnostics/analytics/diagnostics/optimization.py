"""
Optimization Potential Diagnostic
=================================
How much room is left to improve the portfolio's Sharpe ratio.

A fixed uplift (achievable_sharpe_uplift, 15%) is assumed reachable by any
portfolio through cheaper funds and rebalancing; a portfolio below target
can improve by at least the gap to target.

    potential = max(uplift, target / current - 1)     (1.0 when current <= 0)
    score     = 100 - 100 * potential (+ above-target bonus)
    capped at 65 when potential > 15%, at 50 when potential > 20%

Current Sharpe itself is scored by return efficiency; this category only
looks at what could still be gained.
"""

from typing import Dict, List

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.config.scoring import ScoringConfig
from portfolio_diagnostics.data.definitions.assumptions import RISK_FREE_RATE
from portfolio_diagnostics.models.portfolio import DiagnosticResult, DiagnosticStatus, PortfolioMetrics
from portfolio_diagnostics.utils.formatting import format_pct, safe_divide
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

MAX_POTENTIAL = 1.0
ABOVE_TARGET_BONUS_MAX = 15.0
ABOVE_TARGET_BONUS_SLOPE = 30.0

# Before/after illustration
FEE_REDUCTION_SHARE = 0.5
FEE_REDUCTION_CAP = 0.005
VOLATILITY_TRIM = 0.95

OPTIMIZATION_EDUCATION = (
    "Optimization analyzes potential gains from fee reduction, rebalancing, and better diversification."
)


def improvement_potential(current_sharpe: float, target_sharpe: float, uplift: float) -> float:
    """Relative Sharpe improvement considered reachable."""
    if current_sharpe <= 0:
        return MAX_POTENTIAL
    return max(uplift, target_sharpe / current_sharpe - 1)


def optimization_actions(metrics: PortfolioMetrics, config: ScoringConfig) -> List[str]:
    thresholds = config.optimization
    actions = []
    if safe_divide(metrics.total_fees, metrics.total_value) > thresholds.high_fee_pct:
        actions.append("Reduce expense ratios by switching to index funds/ETFs")
    if metrics.volatility > thresholds.high_volatility:
        actions.append("Add bond allocation to reduce overall portfolio volatility")
    if metrics.sharpe_ratio < config.sharpe.portfolio_target:
        actions.append("Rebalance to improve risk-adjusted returns toward target")
    return actions


def before_after(metrics: PortfolioMetrics) -> Dict[str, Dict[str, float]]:
    """Illustrative optimized profile: half the fees back (max 0.5%), 5% less volatility."""
    fee_reduction = min(safe_divide(metrics.total_fees, metrics.total_value) * FEE_REDUCTION_SHARE, FEE_REDUCTION_CAP)
    optimized_return = metrics.expected_return + fee_reduction
    optimized_vol = metrics.volatility * VOLATILITY_TRIM
    optimized_sharpe = safe_divide(optimized_return - RISK_FREE_RATE, optimized_vol, default=metrics.sharpe_ratio)
    return {
        'current': {
            'expected_return': metrics.expected_return,
            'volatility': metrics.volatility,
            'sharpe_ratio': metrics.sharpe_ratio,
            'fees': metrics.total_fees,
        },
        'optimized': {
            'expected_return': optimized_return,
            'volatility': optimized_vol,
            'sharpe_ratio': optimized_sharpe,
            'fees': metrics.total_fees * FEE_REDUCTION_SHARE,
        },
    }


def analyze_optimization(metrics: PortfolioMetrics, config: ScoringConfig) -> DiagnosticResult:
    thresholds = config.optimization
    current = metrics.sharpe_ratio
    target = config.sharpe.portfolio_target

    potential = improvement_potential(current, target, thresholds.achievable_sharpe_uplift)

    score = 100 - potential * 100
    if current >= target:
        score += min(ABOVE_TARGET_BONUS_MAX, (current - target) * ABOVE_TARGET_BONUS_SLOPE)
    if potential > thresholds.moderate_potential_pct:
        score = min(score, thresholds.moderate_potential_score_cap)
    if potential > thresholds.high_potential_pct:
        score = min(score, thresholds.high_potential_score_cap)
    score, status = score_and_status(score, config)

    actions = optimization_actions(metrics, config)
    potential_label = format_pct(potential, 0)
    reachable_sharpe = current * (1 + potential) if current > 0 else target

    if status == DiagnosticStatus.GREEN and potential > thresholds.moderate_potential_pct:
        key_finding = (
            f"Portfolio is reasonably optimized; ~{potential_label}% Sharpe improvement is still "
            f"available if you want it. {OPTIMIZATION_EDUCATION}"
        )
    elif status == DiagnosticStatus.GREEN:
        key_finding = (
            f"Portfolio is well-optimized, only the baseline ~{potential_label}% Sharpe improvement "
            f"remains. {OPTIMIZATION_EDUCATION}"
        )
    elif potential <= thresholds.high_potential_pct:
        first_action = actions[0].lower() if actions else 'rebalancing'
        key_finding = (
            f"Moderate optimization opportunity: ~{potential_label}% Sharpe improvement possible "
            f"through {first_action}. {OPTIMIZATION_EDUCATION}"
        )
    else:
        action_text = '; '.join(actions[:2]) if actions else 'Rebalance toward the target allocation'
        key_finding = (
            f"Significant optimization opportunity: ~{potential_label}% Sharpe improvement possible. "
            f"{action_text}. {OPTIMIZATION_EDUCATION}"
        )

    logger.debug(f"Optimization: sharpe={current:.3f} potential={potential:.3f} -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        f"Improvement potential: +{potential_label}% ({current:.2f} -> {reachable_sharpe:.2f})",
        {
            'current_sharpe': current,
            'target_sharpe': target,
            'improvement_potential': potential,
            'reachable_sharpe': reachable_sharpe,
            'recommendations': actions,
            'before_after': before_after(metrics),
        },
    )
