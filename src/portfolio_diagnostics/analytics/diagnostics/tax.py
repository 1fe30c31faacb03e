"""
Tax Efficiency Diagnostic
=========================
Harvestable losses and asset location.

Only Taxable accounts matter: a loss inside an IRA/401k cannot be harvested,
and bonds or commodities inside a tax-advantaged account are already well
located.
"""

from typing import Dict, List, Sequence

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.config.scoring import ScoringConfig
from portfolio_diagnostics.data.definitions.assumptions import TAX_SAVINGS_RATE
from portfolio_diagnostics.models.portfolio import (
    AccountType,
    AssetClass,
    DiagnosticResult,
    DiagnosticStatus,
    Holding,
    PortfolioMetrics,
)
from portfolio_diagnostics.utils.formatting import format_currency, pluralize, safe_divide
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

BASE_SCORE = 80.0
HARVEST_BONUS = 10.0
INEFFICIENT_PENALTY = 30.0

TAX_INEFFICIENT_CLASSES = (AssetClass.BONDS, AssetClass.COMMODITIES)


def harvestable_losses(holdings: Sequence[Holding]) -> float:
    """Sum of unrealized losses in Taxable accounts (positive number)."""
    return float(sum(
        h.shares * (h.cost_basis - h.current_price)
        for h in holdings
        if h.account_type == AccountType.TAXABLE and h.current_price < h.cost_basis
    ))


def inefficient_in_taxable(holdings: Sequence[Holding]) -> List[Holding]:
    return [
        h for h in holdings
        if h.account_type == AccountType.TAXABLE and h.asset_class in TAX_INEFFICIENT_CLASSES
    ]


def _gain_loss_rows(holdings: Sequence[Holding]) -> List[Dict]:
    rows = []
    for h in holdings:
        gain_loss = h.unrealized_gain
        rows.append({
            'ticker': h.ticker,
            'name': h.name,
            'account_type': AccountType(h.account_type).value,
            'value': h.value,
            'cost_value': h.cost_value,
            'gain_loss': gain_loss,
            'gain_loss_pct': safe_divide(gain_loss, h.cost_value) * 100,
            'harvestable': h.account_type == AccountType.TAXABLE and gain_loss < 0,
        })
    # Losses first
    return sorted(rows, key=lambda r: r['gain_loss'])


def analyze_tax_efficiency(
    holdings: Sequence[Holding],
    metrics: PortfolioMetrics,
    config: ScoringConfig,
) -> DiagnosticResult:
    total_harvestable = harvestable_losses(holdings)
    tax_savings = total_harvestable * TAX_SAVINGS_RATE
    inefficient = inefficient_in_taxable(holdings)

    score = BASE_SCORE
    if total_harvestable > metrics.total_value * config.tax.harvest_bonus_pct:
        score += HARVEST_BONUS
    if inefficient:
        score -= INEFFICIENT_PENALTY
    score, status = score_and_status(score, config)

    if total_harvestable > 0:
        key_finding = (
            f"{format_currency(total_harvestable)} in unrealized losses in TAXABLE accounts could be "
            f"harvested for ~{format_currency(tax_savings)} tax savings"
        )
    elif status == DiagnosticStatus.GREEN and inefficient:
        count = len(inefficient)
        key_finding = (
            f"Tax positioning is acceptable overall; watch {count} bond/commodity "
            f"{pluralize(count, 'holding')} held in taxable accounts"
        )
    elif status == DiagnosticStatus.GREEN:
        key_finding = "Tax positioning is efficient, tax-inefficient assets properly placed"
    elif inefficient:
        count = len(inefficient)
        key_finding = (
            f"{count} tax-inefficient {pluralize(count, 'holding')} (bonds/commodities) "
            f"{pluralize(count, 'is', 'are')} in taxable accounts, consider moving to tax-advantaged"
        )
    else:
        key_finding = "Review asset location for potential tax optimization"

    taxable = [h for h in holdings if h.account_type == AccountType.TAXABLE]
    loss_candidates = [
        {
            'ticker': h.ticker,
            'account_type': AccountType(h.account_type).value,
            'unrealized_loss': h.shares * (h.cost_basis - h.current_price),
            'harvestable': h.account_type == AccountType.TAXABLE,
        }
        for h in holdings if h.current_price < h.cost_basis
    ]

    logger.debug(f"Tax: harvestable={total_harvestable:.2f} inefficient={len(inefficient)} -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        f"Harvestable losses (taxable only): {format_currency(total_harvestable)}",
        {
            'total_harvestable': total_harvestable,
            'estimated_tax_savings': tax_savings,
            'loss_candidates': loss_candidates,
            'all_holdings': _gain_loss_rows(holdings),
            'inefficient_in_taxable': [h.ticker for h in inefficient],
            'taxable_holdings_count': len(taxable),
            'total_holdings_count': len(holdings),
        },
    )
