"""
Benchmark Comparison
====================
Portfolio metrics side by side with the static reference portfolios
(S&P 500, 60/40, Total World).
"""

from typing import Dict, Optional

from portfolio_diagnostics.data.definitions.assumptions import BENCHMARKS, Benchmark
from portfolio_diagnostics.models.portfolio import PortfolioMetrics
from portfolio_diagnostics.utils.formatting import safe_divide


def compare_to_benchmarks(
    metrics: PortfolioMetrics,
    benchmarks: Optional[Dict[str, Benchmark]] = None,
) -> Dict[str, Dict]:
    """
    Deltas of the portfolio against each benchmark.

    Positive return/Sharpe deltas favor the portfolio; positive volatility
    and expense-ratio deltas mean the portfolio is riskier or more expensive.

    Returns:
        {benchmark_key: {'name', 'expected_return', 'volatility', 'sharpe_ratio',
                         'expense_ratio', 'return_delta', 'volatility_delta',
                         'sharpe_delta', 'expense_ratio_delta'}}
    """
    benchmarks = benchmarks if benchmarks is not None else BENCHMARKS
    portfolio_expense_ratio = safe_divide(metrics.total_fees, metrics.total_value)

    comparison = {}
    for key, bench in benchmarks.items():
        comparison[key] = {
            'name': bench.name,
            'description': bench.description,
            'expected_return': bench.expected_return,
            'volatility': bench.volatility,
            'sharpe_ratio': bench.sharpe_ratio,
            'expense_ratio': bench.expense_ratio,
            'return_delta': metrics.expected_return - bench.expected_return,
            'volatility_delta': metrics.volatility - bench.volatility,
            'sharpe_delta': metrics.sharpe_ratio - bench.sharpe_ratio,
            'expense_ratio_delta': portfolio_expense_ratio - bench.expense_ratio,
        }
    return comparison
