"""
Portfolio Metrics Module
========================
Aggregates a holdings snapshot into the numbers every diagnostic reads.

Expected return and volatility are value-weighted averages of the static
asset-class tables. No correlation between holdings is modeled: volatility
is a linear blend, an upper bound on the true portfolio volatility.
"""

from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from portfolio_diagnostics.data.definitions.assumptions import (
    RISK_FREE_RATE,
    default_expense_ratio_for,
    expected_return_for,
    volatility_for,
)
from portfolio_diagnostics.data.definitions.taxonomy import get_sector
from portfolio_diagnostics.models.portfolio import (
    AccountType,
    AssetClass,
    Holding,
    PortfolioMetrics,
)
from portfolio_diagnostics.utils.formatting import safe_divide


HOLDINGS_COLUMNS = [
    'ticker', 'name', 'account_type', 'asset_class', 'sector',
    'shares', 'current_price', 'cost_basis',
    'value', 'cost_value', 'unrealized_gain',
    'expense_ratio', 'expected_return', 'volatility', 'weight',
]


# =========================
# HOLDINGS FRAME
# =========================

def holdings_frame(holdings: Sequence[Holding]) -> pd.DataFrame:
    """
    One row per holding with derived columns.

    expense_ratio is resolved (asset-class default when the holding has none),
    weight is value / total value (0 everywhere when the total is 0).
    Row order follows the input order.
    """
    rows = []
    for h in holdings:
        expense_ratio = h.expense_ratio if h.expense_ratio is not None else default_expense_ratio_for(h.asset_class)
        rows.append({
            'ticker': h.ticker,
            'name': h.name,
            'account_type': h.account_type,
            'asset_class': h.asset_class,
            'sector': get_sector(h.ticker),
            'shares': h.shares,
            'current_price': h.current_price,
            'cost_basis': h.cost_basis,
            'value': h.value,
            'cost_value': h.cost_value,
            'unrealized_gain': h.unrealized_gain,
            'expense_ratio': expense_ratio,
            'expected_return': expected_return_for(h.asset_class),
            'volatility': volatility_for(h.asset_class),
        })

    frame = pd.DataFrame(rows, columns=HOLDINGS_COLUMNS[:-1])
    total_value = float(frame['value'].sum()) if len(frame) else 0.0
    frame['weight'] = frame['value'] / total_value if total_value > 0 else 0.0
    return frame


# =========================
# PORTFOLIO METRICS
# =========================

def calculate_portfolio_metrics(holdings: Sequence[Holding]) -> PortfolioMetrics:
    """
    Totals, weighted return/volatility, Sharpe and annual fees.

    A portfolio with zero total value returns all-zero derived metrics so
    downstream quotients never see a zero denominator.
    """
    frame = holdings_frame(holdings)
    total_value = float(frame['value'].sum()) if len(frame) else 0.0
    total_cost = float(frame['cost_value'].sum()) if len(frame) else 0.0

    if total_value <= 0:
        return PortfolioMetrics(total_cost=total_cost)

    weights = frame['weight'].to_numpy(dtype=float)
    expected_return = float(np.dot(weights, frame['expected_return'].to_numpy(dtype=float)))
    volatility = float(np.dot(weights, frame['volatility'].to_numpy(dtype=float)))
    total_fees = float((frame['value'] * frame['expense_ratio']).sum())
    sharpe_ratio = safe_divide(expected_return - RISK_FREE_RATE, volatility)

    return PortfolioMetrics(
        total_value=total_value,
        total_cost=total_cost,
        expected_return=expected_return,
        volatility=volatility,
        sharpe_ratio=sharpe_ratio,
        total_fees=total_fees,
        unrealized_gain=total_value - total_cost,
        total_return=safe_divide(total_value - total_cost, total_cost),
    )


# =========================
# WEIGHT BREAKDOWNS
# =========================

def asset_class_weights(holdings: Sequence[Holding]) -> Dict[AssetClass, float]:
    """Weight per asset class; every class is present (0.0 when not held)."""
    frame = holdings_frame(holdings)
    weights = {asset_class: 0.0 for asset_class in AssetClass}
    if len(frame):
        for asset_class, weight in frame.groupby('asset_class', sort=False)['weight'].sum().items():
            weights[AssetClass(asset_class)] = float(weight)
    return weights


def sector_weights(holdings: Sequence[Holding]) -> Dict[str, float]:
    """Weight per sector, sectors in first-seen order."""
    frame = holdings_frame(holdings)
    if not len(frame):
        return {}
    grouped = frame.groupby('sector', sort=False)['weight'].sum()
    return {sector: float(weight) for sector, weight in grouped.items()}


def position_weights(holdings: Sequence[Holding]) -> List[Dict]:
    """
    Per-holding weights, largest first.

    Each account line is its own position; the same ticker held in two
    accounts shows up twice (see cross_account_exposure for the combined view).
    """
    frame = holdings_frame(holdings)
    if not len(frame):
        return []
    ordered = frame.sort_values('weight', ascending=False, kind='mergesort')
    return [
        {'ticker': row.ticker, 'weight': float(row.weight)}
        for row in ordered.itertuples(index=False)
    ]


def cross_account_exposure(holdings: Sequence[Holding]) -> List[Dict]:
    """
    Tickers held in more than one account type, with their combined weight.

    Sorted by combined weight, largest first.
    """
    frame = holdings_frame(holdings)
    if not len(frame):
        return []

    grouped = frame.groupby('ticker', sort=False)
    summary = pd.DataFrame({
        'combined_weight': grouped['weight'].sum(),
        'combined_value': grouped['value'].sum(),
        'account_count': grouped['account_type'].nunique(),
    })
    overlaps = summary[summary['account_count'] > 1]
    overlaps = overlaps.sort_values('combined_weight', ascending=False, kind='mergesort')

    exposure = []
    for ticker, row in overlaps.iterrows():
        accounts = frame.loc[frame['ticker'] == ticker, 'account_type']
        exposure.append({
            'ticker': ticker,
            'accounts': sorted({AccountType(a).value for a in accounts}),
            'combined_weight': float(row['combined_weight']),
            'combined_value': float(row['combined_value']),
        })
    return exposure
