"""
Lifetime Income Security Diagnostic
===================================
Share of core living expenses covered by income that cannot be outlived
(Social Security, pensions, lifetime annuities).

Reported next to the ten scored categories; it never enters the health
score.
"""

from typing import Optional

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.config.scoring import LifetimeIncomeThresholds, ScoringConfig
from portfolio_diagnostics.models.portfolio import DiagnosticResult, DiagnosticStatus, LifetimeIncomeInputs
from portfolio_diagnostics.utils.formatting import format_currency, safe_divide
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

NO_DATA_SCORE = 50.0
GREEN_BAND_BASE = 85.0
SURPLUS_BONUS_MAX = 15.0
SURPLUS_BONUS_SLOPE = 30.0
YELLOW_BAND_BASE = 40.0
YELLOW_BAND_RANGE = 45.0

INCOME_EDUCATION = (
    "Lifetime Income Security measures how much of your essential expenses are covered by income "
    "you can't outlive (Social Security, pensions, annuities)."
)


def coverage_score(coverage: float, thresholds: LifetimeIncomeThresholds) -> float:
    green = thresholds.core_coverage_green
    yellow = thresholds.core_coverage_yellow
    if coverage >= green:
        return GREEN_BAND_BASE + min(SURPLUS_BONUS_MAX, (coverage - green) * SURPLUS_BONUS_SLOPE)
    if coverage >= yellow:
        return YELLOW_BAND_BASE + safe_divide(coverage - yellow, green - yellow) * YELLOW_BAND_RANGE
    return safe_divide(coverage, yellow) * YELLOW_BAND_BASE


def analyze_lifetime_income(
    inputs: Optional[LifetimeIncomeInputs],
    config: ScoringConfig,
) -> DiagnosticResult:
    inputs = inputs or LifetimeIncomeInputs()

    if not inputs.has_data:
        score, status = score_and_status(NO_DATA_SCORE, config)
        return finalize(
            score,
            config,
            "Enter monthly living expenses and guaranteed income sources (Social Security, pensions, "
            "annuities) to see how much of your lifestyle is protected from market risk.",
            "No income data",
            {'needs_data_entry': True},
        )

    core = inputs.core_expenses_monthly
    total_expenses = core + inputs.discretionary_expenses_monthly + inputs.healthcare_expenses_monthly
    guaranteed = inputs.guaranteed_lifetime_income_monthly

    coverage = safe_divide(guaranteed, core)
    total_coverage = safe_divide(guaranteed, total_expenses)
    shortfall = max(0.0, core - guaranteed)
    surplus = max(0.0, guaranteed - core)

    score, status = score_and_status(coverage_score(coverage, config.lifetime_income_security), config)

    coverage_pct = f"{coverage * 100:.0f}%"
    if status == DiagnosticStatus.GREEN and shortfall > 0:
        key_finding = (
            f"Guaranteed income covers {coverage_pct} of core expenses, enough for your plan. "
            f"The last {format_currency(shortfall)}/mo comes from the portfolio. {INCOME_EDUCATION}"
        )
    elif status == DiagnosticStatus.GREEN:
        key_finding = (
            f"Guaranteed income ({format_currency(guaranteed)}/mo) covers {coverage_pct} of core expenses "
            f"({format_currency(core)}/mo). Market declines cannot threaten your basic needs. {INCOME_EDUCATION}"
        )
    elif status == DiagnosticStatus.YELLOW:
        key_finding = (
            f"Guaranteed income covers {coverage_pct} of core expenses. The remaining "
            f"{format_currency(shortfall)}/mo gap depends on portfolio performance. {INCOME_EDUCATION}"
        )
    elif coverage > 0:
        key_finding = (
            f"WARNING: Guaranteed income covers only {coverage_pct} of core expenses. A "
            f"{format_currency(shortfall)}/mo shortfall must come from portfolio withdrawals. {INCOME_EDUCATION}"
        )
    else:
        key_finding = (
            "CRITICAL: No guaranteed lifetime income identified. Your entire lifestyle depends on "
            f"portfolio performance. Consider Social Security optimization and/or annuities. {INCOME_EDUCATION}"
        )

    logger.debug(f"Lifetime income: coverage={coverage:.3f} -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        f"Core covered: {coverage_pct} ({format_currency(guaranteed)}/mo vs {format_currency(core)}/mo)",
        {
            'core_expenses_monthly': core,
            'discretionary_monthly': inputs.discretionary_expenses_monthly,
            'healthcare_monthly': inputs.healthcare_expenses_monthly,
            'total_expenses_monthly': total_expenses,
            'guaranteed_lifetime_income_monthly': guaranteed,
            'core_coverage_pct': coverage,
            'total_coverage_pct': total_coverage,
            'shortfall_core_monthly': shortfall,
            'surplus_for_lifestyle_monthly': surplus,
            'sources': [
                {
                    'source_name': s.source_name,
                    'monthly_amount': s.monthly_amount,
                    'guaranteed_for_life': s.guaranteed_for_life,
                    'source_type': s.source_type,
                }
                for s in inputs.guaranteed_sources
            ],
        },
    )
