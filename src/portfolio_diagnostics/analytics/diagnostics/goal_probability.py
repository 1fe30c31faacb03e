"""
Risk-Adjusted Goal Probability Diagnostic
=========================================
Closed-form ("Monte Carlo-lite") estimate of reaching the client's target.

    required = (target / value) ** (1 / years) - 1
    z        = (expected_return - required) / volatility
    prob     = clamp(50 + 30 * z, 5, 95)

Without a target amount and horizon the probability is neutral (50).
Guaranteed lifetime income that covers core expenses raises the score;
a rule-of-thumb max drawdown (volatility * 2.5) above the limit lowers it.
"""

from typing import Optional

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.config.scoring import GoalProbabilityThresholds, ScoringConfig
from portfolio_diagnostics.data.definitions.assumptions import (
    GOAL_PROBABILITY_Z_MULTIPLIER,
    MAX_DRAWDOWN_MULTIPLIER,
    MAX_GOAL_PROBABILITY,
    MIN_GOAL_PROBABILITY,
    NEUTRAL_GOAL_PROBABILITY,
    RISK_FREE_RATE,
    SORTINO_DOWNSIDE_FACTOR,
)
from portfolio_diagnostics.models.portfolio import (
    ClientInfo,
    DiagnosticResult,
    DiagnosticStatus,
    LifetimeIncomeInputs,
    PortfolioMetrics,
)
from portfolio_diagnostics.utils.formatting import clamp, format_currency, format_pct, safe_divide
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

GREEN_BAND_BASE = 70.0
YELLOW_BAND_BASE = 40.0
BAND_RANGE = 30.0
GREEN_BAND_WIDTH = 25.0   # probability points above green_min that span the green band
CORE_SECURED_BONUS = 15.0
PARTIAL_COVERAGE_BONUS = 5.0
DRAWDOWN_PENALTY = 20.0

GOAL_EDUCATION = (
    "This probability is based on a closed-form estimate using your current allocation, "
    "expected returns, and time horizon."
)


def goal_probability(client_info: ClientInfo, metrics: PortfolioMetrics) -> float:
    """Probability (percent) of reaching the target, 50 when goal inputs are missing."""
    target = client_info.target_amount
    years = client_info.years_to_goal
    if not (target and years and metrics.total_value):
        return NEUTRAL_GOAL_PROBABILITY

    required_return = (target / metrics.total_value) ** (1 / years) - 1
    z_score = safe_divide(metrics.expected_return - required_return, metrics.volatility)
    return clamp(
        NEUTRAL_GOAL_PROBABILITY + z_score * GOAL_PROBABILITY_Z_MULTIPLIER,
        MIN_GOAL_PROBABILITY,
        MAX_GOAL_PROBABILITY,
    )


def probability_score(probability: float, thresholds: GoalProbabilityThresholds) -> float:
    if probability >= thresholds.green_min:
        return GREEN_BAND_BASE + (probability - thresholds.green_min) / GREEN_BAND_WIDTH * BAND_RANGE
    if probability >= thresholds.yellow_min:
        return YELLOW_BAND_BASE + safe_divide(
            probability - thresholds.yellow_min, thresholds.green_min - thresholds.yellow_min
        ) * BAND_RANGE
    return safe_divide(probability, thresholds.yellow_min) * YELLOW_BAND_BASE


def band_label(probability: float, thresholds: GoalProbabilityThresholds) -> str:
    if probability >= thresholds.green_min:
        return 'Comfortable'
    if probability >= thresholds.yellow_min:
        return 'Borderline'
    return 'At Risk'


def core_coverage(lifetime_income: Optional[LifetimeIncomeInputs]) -> Optional[float]:
    """Guaranteed lifetime income / core expenses, None without income data."""
    if lifetime_income is None or not lifetime_income.has_data:
        return None
    return safe_divide(lifetime_income.guaranteed_lifetime_income_monthly, lifetime_income.core_expenses_monthly)


def analyze_goal_probability(
    client_info: ClientInfo,
    metrics: PortfolioMetrics,
    config: ScoringConfig,
    lifetime_income: Optional[LifetimeIncomeInputs] = None,
) -> DiagnosticResult:
    thresholds = config.goal_probability
    coverage = core_coverage(lifetime_income)
    core_secured = coverage is not None and coverage >= 1.0
    partially_covered = coverage is not None and thresholds.partial_income_coverage <= coverage < 1.0

    probability = goal_probability(client_info, metrics)
    max_drawdown = metrics.volatility * MAX_DRAWDOWN_MULTIPLIER
    sortino = safe_divide(metrics.expected_return - RISK_FREE_RATE, metrics.volatility * SORTINO_DOWNSIDE_FACTOR)

    score = clamp(probability_score(probability, thresholds), 0, 100)
    if core_secured:
        score += CORE_SECURED_BONUS
    elif partially_covered:
        score += PARTIAL_COVERAGE_BONUS
    score = min(100.0, score)
    drawdown_breached = max_drawdown > thresholds.max_drawdown_limit
    if drawdown_breached:
        score -= DRAWDOWN_PENALTY
    score, status = score_and_status(score, config)

    label = band_label(probability, thresholds)
    pct = f"{probability:.0f}%"
    income_note = None

    if core_secured and status == DiagnosticStatus.GREEN:
        key_finding = (
            f"EXCELLENT: Essential expenses are secured by lifetime income. {pct} probability for "
            f"discretionary & legacy goals. Since your basic needs are guaranteed, you can afford more "
            f"investment risk for growth. {GOAL_EDUCATION}"
        )
        income_note = "Your basic lifestyle is guaranteed regardless of market performance"
    elif core_secured:
        key_finding = (
            f"Essential expenses are secured by lifetime income, but discretionary & legacy goals "
            f"have only a {pct} probability at the current risk level. {GOAL_EDUCATION}"
        )
        income_note = "Your basic lifestyle is guaranteed regardless of market performance"
    elif drawdown_breached and status != DiagnosticStatus.GREEN:
        if probability >= thresholds.green_min:
            lead = f"{pct} probability of reaching goal, but"
        else:
            lead = f"{pct} probability is {label.upper()}, and"
        key_finding = (
            f"{lead} an estimated max drawdown of {format_pct(max_drawdown, 0)}% exceeds the "
            f"{format_pct(thresholds.max_drawdown_limit, 0)}% limit. A deep decline close to your goal date "
            f"could derail the plan. {GOAL_EDUCATION}"
        )
    elif status == DiagnosticStatus.GREEN:
        if probability >= thresholds.green_min:
            key_finding = f"{pct} probability of reaching goal, comfortable margin. {GOAL_EDUCATION}"
        else:
            key_finding = (
                f"{pct} probability of reaching goal, within an acceptable range for your plan. {GOAL_EDUCATION}"
            )
    elif probability >= thresholds.green_min:
        key_finding = (
            f"{pct} probability of reaching goal, but the margin is thinner than your scoring "
            f"thresholds require. {GOAL_EDUCATION}"
        )
    elif probability >= thresholds.yellow_min:
        key_finding = (
            f"{pct} probability is BORDERLINE, consider increasing savings, reducing goal, "
            f"or extending timeline. {GOAL_EDUCATION}"
        )
    elif partially_covered:
        key_finding = (
            f"{pct} probability is LOW, plan changes likely needed. Consider guaranteed income "
            f"to secure essentials. {GOAL_EDUCATION}"
        )
    else:
        key_finding = (
            f"{pct} probability is LOW, plan changes likely needed. Your entire lifestyle depends "
            f"on portfolio performance. {GOAL_EDUCATION}"
        )

    if partially_covered:
        shortfall = lifetime_income.core_expenses_monthly - lifetime_income.guaranteed_lifetime_income_monthly
        income_note = f"Portfolio must generate ~{format_currency(shortfall)}/mo to cover remaining core expenses"
    elif coverage is not None and coverage > 0 and not core_secured:
        income_note = "Full lifestyle risk depends on portfolio performance"

    if core_secured:
        headline = f"Discretionary goal: {pct} (Core Secured)"
    else:
        headline = f"Goal probability: {pct} ({label})"

    logger.debug(f"Goal probability: p={probability:.1f} drawdown={max_drawdown:.3f} -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        headline,
        {
            'probability': probability,
            'band_label': label,
            'sortino_ratio': sortino,
            'max_drawdown': max_drawdown,
            'max_drawdown_limit': thresholds.max_drawdown_limit,
            'green_min': thresholds.green_min,
            'yellow_min': thresholds.yellow_min,
            'income_secured': core_secured,
            'goal_type': 'discretionary-only' if core_secured else 'full',
            'core_coverage_pct': coverage,
            'income_security_note': income_note,
        },
    )
