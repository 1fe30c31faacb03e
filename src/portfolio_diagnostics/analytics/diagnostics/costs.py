"""
Cost Analysis Diagnostic
========================
All-in fees (product expense ratios + advisor fee) scored against the fee
band of the client's advice model.

The band depends on the model: 1.2% all-in is RED for a
self-directed investor and GREEN for a tactical advisor relationship.

    fees <= green_max    85 + (1 - fees/green_max) * 15
    fees <= yellow_max   40 + (1 - position_in_band) * 30
    above                max(0, 40 - (fees - yellow_max) * 200)
"""

from typing import Dict, List, Sequence

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.analytics.metrics.portfolio import holdings_frame
from portfolio_diagnostics.config.scoring import FeeBand, ScoringConfig
from portfolio_diagnostics.data.definitions.assumptions import FEE_IMPACT_YEARS
from portfolio_diagnostics.models.portfolio import (
    AdviceModel,
    DiagnosticResult,
    DiagnosticStatus,
    Holding,
    PortfolioMetrics,
)
from portfolio_diagnostics.utils.formatting import format_pct, safe_divide
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

GREEN_BAND_BASE = 85.0
GREEN_BAND_RANGE = 15.0
YELLOW_BAND_BASE = 40.0
YELLOW_BAND_RANGE = 30.0
ABOVE_BAND_SLOPE = 200.0

ADVICE_MODEL_LABELS: Dict[AdviceModel, str] = {
    AdviceModel.SELF_DIRECTED: 'self-directed',
    AdviceModel.ADVISOR_PASSIVE: 'passive advisor',
    AdviceModel.ADVISOR_TACTICAL: 'tactical advisor',
}

FEE_EDUCATION = "Fees compound over time, a 1% difference can reduce your portfolio by 20%+ over 20 years."


def fee_score(all_in_fees: float, band: FeeBand) -> float:
    """Score of an all-in fee level within one advice model's band."""
    if all_in_fees <= band.green_max:
        return GREEN_BAND_BASE + (1 - safe_divide(all_in_fees, band.green_max)) * GREEN_BAND_RANGE
    if all_in_fees <= band.yellow_max:
        position = safe_divide(all_in_fees - band.green_max, band.yellow_max - band.green_max)
        return YELLOW_BAND_BASE + (1 - position) * YELLOW_BAND_RANGE
    return max(0.0, YELLOW_BAND_BASE - (all_in_fees - band.yellow_max) * ABOVE_BAND_SLOPE)


def fee_impact(value: float, all_in_fees: float, years: int = FEE_IMPACT_YEARS) -> float:
    """Dollars lost to compounding fees over `years` on a static balance."""
    return value * (1 - (1 - all_in_fees) ** years)


def holding_fees(holdings: Sequence[Holding]) -> List[Dict]:
    """Annual fee per holding, most expensive first."""
    frame = holdings_frame(holdings)
    if not len(frame):
        return []
    frame['annual_fee'] = frame['value'] * frame['expense_ratio']
    ordered = frame.sort_values('annual_fee', ascending=False, kind='mergesort')
    return [
        {
            'ticker': row.ticker,
            'name': row.name,
            'value': float(row.value),
            'expense_ratio': float(row.expense_ratio),
            'annual_fee': float(row.annual_fee),
        }
        for row in ordered.itertuples(index=False)
    ]


def analyze_costs(
    holdings: Sequence[Holding],
    metrics: PortfolioMetrics,
    config: ScoringConfig,
    advice_model: AdviceModel = AdviceModel.SELF_DIRECTED,
    advisor_fee: float = 0.0,
) -> DiagnosticResult:
    advice_model = AdviceModel(advice_model)
    band = config.fees.for_model(advice_model)

    product_fees = safe_divide(metrics.total_fees, metrics.total_value)
    all_in_fees = product_fees + advisor_fee
    ten_year_impact = fee_impact(metrics.total_value, all_in_fees)

    score, status = score_and_status(fee_score(all_in_fees, band), config)

    model_label = ADVICE_MODEL_LABELS[advice_model]
    breakdown = (
        f"Advisor: {format_pct(advisor_fee, 2)}% + Products: {format_pct(product_fees, 2)}% "
        f"= {format_pct(all_in_fees, 2)}% total"
    )
    if status == DiagnosticStatus.GREEN:
        key_finding = f"{breakdown}. Fees are reasonable for {model_label} model. {FEE_EDUCATION}"
    elif status == DiagnosticStatus.YELLOW:
        key_finding = (
            f"{breakdown}. Fees are elevated for {model_label} "
            f"(typical max: {format_pct(band.green_max)}%). {FEE_EDUCATION}"
        )
    else:
        key_finding = (
            f"{breakdown}. Fees are HIGH for {model_label} "
            f"(above {format_pct(band.yellow_max)}% typical). {FEE_EDUCATION}"
        )

    logger.debug(f"Costs: all-in={all_in_fees:.4f} model={advice_model.value} -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        f"Total: {format_pct(all_in_fees, 2)}% (Advisor {format_pct(advisor_fee, 2)}% "
        f"+ Products {format_pct(product_fees, 2)}%)",
        {
            'product_fees': product_fees,
            'advisor_fee': advisor_fee,
            'all_in_fees': all_in_fees,
            'annual_fees': metrics.total_fees,
            'ten_year_impact': ten_year_impact,
            'holding_fees': holding_fees(holdings),
            'advice_model': advice_model.value,
            'model_label': model_label,
            'green_max': band.green_max,
            'yellow_max': band.yellow_max,
        },
    )
