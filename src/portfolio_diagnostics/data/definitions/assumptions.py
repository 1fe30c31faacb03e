"""
Capital Market Assumptions
==========================
Static per-asset-class estimates used by every diagnostic.

There is no market-data feed: expected returns, volatilities and expense
ratios are long-run planning estimates. Unknown asset classes or tickers
fall back to the documented defaults below.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from portfolio_diagnostics.models.portfolio import AssetClass, RiskTolerance


# ================================================================================
# ASSET-CLASS TABLES
# ================================================================================

EXPECTED_RETURNS: Dict[AssetClass, float] = {
    AssetClass.US_STOCKS: 0.09,
    AssetClass.INTL_STOCKS: 0.08,
    AssetClass.BONDS: 0.035,
    AssetClass.COMMODITIES: 0.05,
    AssetClass.CASH: 0.02,
    AssetClass.OTHER: 0.06,
}

VOLATILITY: Dict[AssetClass, float] = {
    AssetClass.US_STOCKS: 0.165,
    AssetClass.INTL_STOCKS: 0.19,
    AssetClass.BONDS: 0.04,
    AssetClass.COMMODITIES: 0.15,
    AssetClass.CASH: 0.005,
    AssetClass.OTHER: 0.12,
}

# Typical index-fund expense ratios by asset class
DEFAULT_EXPENSE_RATIOS: Dict[AssetClass, float] = {
    AssetClass.US_STOCKS: 0.0005,
    AssetClass.INTL_STOCKS: 0.001,
    AssetClass.BONDS: 0.0003,
    AssetClass.COMMODITIES: 0.004,
    AssetClass.CASH: 0.0,
    AssetClass.OTHER: 0.001,
}

# Conservative fallbacks for anything missing from the tables
FALLBACK_EXPECTED_RETURN = 0.06
FALLBACK_VOLATILITY = 0.12
FALLBACK_EXPENSE_RATIO = 0.0005

RISK_FREE_RATE = 0.03
INFLATION_RATE = 0.025

# Portfolio volatility each risk tolerance is expected to carry
TARGET_VOLATILITY: Dict[RiskTolerance, float] = {
    RiskTolerance.CONSERVATIVE: 0.08,
    RiskTolerance.MODERATE: 0.12,
    RiskTolerance.AGGRESSIVE: 0.18,
}


# ================================================================================
# MODEL CONSTANTS
# ================================================================================

# Flat marginal rate applied to harvestable losses
TAX_SAVINGS_RATE = 0.25

# Goal probability: 50 + z * 30, clamped to [5, 95]
NEUTRAL_GOAL_PROBABILITY = 50.0
GOAL_PROBABILITY_Z_MULTIPLIER = 30.0
MIN_GOAL_PROBABILITY = 5.0
MAX_GOAL_PROBABILITY = 95.0

# Rule-of-thumb drawdown and downside-deviation proxies
MAX_DRAWDOWN_MULTIPLIER = 2.5
SORTINO_DOWNSIDE_FACTOR = 0.7

# Horizon used for the compounding fee-drag estimate
FEE_IMPACT_YEARS = 10


# ================================================================================
# PER-TICKER ESTIMATES
# ================================================================================

@dataclass(frozen=True)
class TickerEstimate:
    expected_return: float
    volatility: float


# Only used for per-holding Sharpe labels; portfolio metrics stay asset-class based
TICKER_ESTIMATES: Dict[str, TickerEstimate] = {
    "SPY": TickerEstimate(0.09, 0.165),
    "VOO": TickerEstimate(0.09, 0.165),
    "VTI": TickerEstimate(0.092, 0.17),
    "QQQ": TickerEstimate(0.11, 0.22),
    "VXUS": TickerEstimate(0.08, 0.18),
    "VEA": TickerEstimate(0.078, 0.175),
    "VWO": TickerEstimate(0.085, 0.22),
    "BND": TickerEstimate(0.035, 0.05),
    "AGG": TickerEstimate(0.035, 0.05),
    "TLT": TickerEstimate(0.04, 0.14),
    "GLD": TickerEstimate(0.05, 0.15),
    "VNQ": TickerEstimate(0.075, 0.2),
}


def get_ticker_estimate(ticker: str) -> Optional[TickerEstimate]:
    return TICKER_ESTIMATES.get(ticker.upper())


def expected_return_for(asset_class: AssetClass) -> float:
    return EXPECTED_RETURNS.get(asset_class, FALLBACK_EXPECTED_RETURN)


def volatility_for(asset_class: AssetClass) -> float:
    return VOLATILITY.get(asset_class, FALLBACK_VOLATILITY)


def default_expense_ratio_for(asset_class: AssetClass) -> float:
    return DEFAULT_EXPENSE_RATIOS.get(asset_class, FALLBACK_EXPENSE_RATIO)


# ================================================================================
# BENCHMARKS
# ================================================================================

@dataclass(frozen=True)
class Benchmark:
    key: str
    name: str
    description: str
    allocation: Dict[AssetClass, float]
    expected_return: float
    volatility: float
    expense_ratio: float

    @property
    def sharpe_ratio(self) -> float:
        if self.volatility == 0:
            return 0.0
        return (self.expected_return - RISK_FREE_RATE) / self.volatility


BENCHMARKS: Dict[str, Benchmark] = {
    "sp500": Benchmark(
        key="sp500",
        name="S&P 500",
        description="100% US Large Cap",
        allocation={AssetClass.US_STOCKS: 1.0},
        expected_return=0.09,
        volatility=0.165,
        expense_ratio=0.0003,
    ),
    "balanced60_40": Benchmark(
        key="balanced60_40",
        name="60/40 Portfolio",
        description="60% Stocks, 40% Bonds",
        allocation={AssetClass.US_STOCKS: 0.60, AssetClass.BONDS: 0.40},
        expected_return=0.068,
        volatility=0.10,
        expense_ratio=0.0005,
    ),
    "total_world": Benchmark(
        key="total_world",
        name="Total World",
        description="60% US, 40% Intl Stocks",
        allocation={AssetClass.US_STOCKS: 0.60, AssetClass.INTL_STOCKS: 0.40},
        expected_return=0.085,
        volatility=0.175,
        expense_ratio=0.0007,
    ),
}
