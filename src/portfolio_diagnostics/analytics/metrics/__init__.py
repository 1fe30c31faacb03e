"""
Metrics Submodule
=================
Holdings aggregation and benchmark comparison.

Modules:
- portfolio: totals, weighted return/volatility, Sharpe, fees, weight breakdowns
- benchmark: deltas against the static reference portfolios
"""

from portfolio_diagnostics.analytics.metrics.portfolio import (
    holdings_frame,
    calculate_portfolio_metrics,
    asset_class_weights,
    sector_weights,
    position_weights,
    cross_account_exposure,
)

from portfolio_diagnostics.analytics.metrics.benchmark import (
    compare_to_benchmarks,
)


__all__ = [
    # Portfolio
    'holdings_frame',
    'calculate_portfolio_metrics',
    'asset_class_weights',
    'sector_weights',
    'position_weights',
    'cross_account_exposure',
    # Benchmark
    'compare_to_benchmarks',
]
