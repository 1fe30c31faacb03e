"""
Crisis Resilience Diagnostic
============================
Replays the static historical shocks on the current stock/bond mix and
compares the average loss with the S&P 500's.

The score follows absolute loss severity; beating the S&P adds a bonus.
The better/similar/worse verdict is computed once by
classify_vs_benchmark() and feeds both the bonus and the prose.
"""

from enum import Enum
from typing import Sequence

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.analytics.diagnostics.protection import exposure_weights
from portfolio_diagnostics.config.scoring import CrisisResilienceThresholds, ScoringConfig
from portfolio_diagnostics.data.definitions.crisis import get_crisis_scenarios
from portfolio_diagnostics.models.portfolio import DiagnosticResult, DiagnosticStatus, Holding
from portfolio_diagnostics.utils.formatting import format_pct
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

BETTER_THAN_SP_BONUS = 10.0

# Average-loss bands of the severity score
MILD_LOSS_MAX = 0.25
MODERATE_LOSS_MAX = 0.35
SEVERE_LOSS_MAX = 0.45

CRISIS_EDUCATION = "Crisis resilience tests how your portfolio might perform in historical crash scenarios like 2008."


class BenchmarkComparison(str, Enum):
    BETTER = "BETTER"
    SIMILAR = "SIMILAR"
    WORSE = "WORSE"


def classify_vs_benchmark(
    avg_impact: float,
    avg_sp_impact: float,
    thresholds: CrisisResilienceThresholds,
) -> BenchmarkComparison:
    """
    Impacts are negative; a larger (less negative) impact loses less.

    BETTER when the portfolio loses less than the S&P by more than
    better_than_sp_threshold, WORSE when it loses more by more than
    similar_to_sp_range, SIMILAR in between.
    """
    difference = avg_impact - avg_sp_impact
    if difference > thresholds.better_than_sp_threshold:
        return BenchmarkComparison.BETTER
    if difference < -thresholds.similar_to_sp_range:
        return BenchmarkComparison.WORSE
    return BenchmarkComparison.SIMILAR


def severity_score(avg_loss: float) -> float:
    """Score from average loss magnitude (0.30 = a 30% average drawdown)."""
    if avg_loss < MILD_LOSS_MAX:
        return 85 + min(15.0, (MILD_LOSS_MAX - avg_loss) * 60)
    if avg_loss < MODERATE_LOSS_MAX:
        return 60 + (MODERATE_LOSS_MAX - avg_loss) * 250
    if avg_loss < SEVERE_LOSS_MAX:
        return 40 + (SEVERE_LOSS_MAX - avg_loss) * 200
    return max(0.0, 40 - (avg_loss - SEVERE_LOSS_MAX) * 100)


def analyze_crisis_resilience(holdings: Sequence[Holding], config: ScoringConfig) -> DiagnosticResult:
    weights = exposure_weights(holdings)

    scenarios = []
    for scenario in get_crisis_scenarios():
        scenarios.append({
            'key': scenario.key,
            'name': scenario.name,
            'portfolio_impact': scenario.portfolio_impact(weights.stocks, weights.bonds),
            'sp_impact': scenario.sp500_impact,
        })

    avg_impact = sum(s['portfolio_impact'] for s in scenarios) / len(scenarios)
    avg_sp_impact = sum(s['sp_impact'] for s in scenarios) / len(scenarios)
    comparison = classify_vs_benchmark(avg_impact, avg_sp_impact, config.crisis_resilience)

    avg_loss = abs(avg_impact)
    score = severity_score(avg_loss)
    if comparison == BenchmarkComparison.BETTER:
        score += BETTER_THAN_SP_BONUS
    score, status = score_and_status(score, config)

    avg_label = format_pct(avg_impact, 0)
    sp_label = format_pct(avg_sp_impact, 0)
    if comparison == BenchmarkComparison.BETTER:
        comparison_text = f"loses LESS than S&P 500 (avg {avg_label}% vs S&P {sp_label}%)"
    elif comparison == BenchmarkComparison.WORSE:
        comparison_text = f"loses MORE than S&P 500 (avg {avg_label}% vs S&P {sp_label}%)"
    else:
        comparison_text = f"performs similarly to S&P 500 in crashes (avg {avg_label}%)"

    if status == DiagnosticStatus.GREEN:
        outlook = "Strong defensive positioning." if avg_loss <= MILD_LOSS_MAX else "Downside is contained for your plan."
    elif status == DiagnosticStatus.YELLOW:
        outlook = "Moderate downside protection from diversification."
    else:
        outlook = "Projected losses are significant, consider defensive strategies."
    key_finding = f"In major crises, portfolio {comparison_text}. {outlook} {CRISIS_EDUCATION}"

    worst = min(scenarios, key=lambda s: s['portfolio_impact'])
    logger.debug(f"Crisis: avg={avg_impact:.3f} sp={avg_sp_impact:.3f} {comparison.value} -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        f"{worst['name']}: {format_pct(worst['portfolio_impact'], 0)}% vs S&P {format_pct(worst['sp_impact'], 0)}%",
        {
            'scenarios': scenarios,
            'avg_impact': avg_impact,
            'avg_sp_impact': avg_sp_impact,
            'difference': avg_impact - avg_sp_impact,
            'comparison': comparison.value,
            'beta': weights.stocks,
            'stock_weight': weights.stocks,
            'bond_weight': weights.bonds,
        },
    )
