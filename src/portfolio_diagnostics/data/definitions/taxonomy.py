"""
Ticker Taxonomy Module
======================
Sector classification for the sector-concentration check.

Coverage is deliberately small: common mega-caps and the broad funds that
show up in most retail portfolios. Anything not listed is bucketed as
"Other". Every bucket, "Other" included, counts toward the sector
concentration limit.
"""

from typing import Dict, List


UNKNOWN_SECTOR = "Other"

# ================================================================================
# SECTOR GROUPS
# ================================================================================

TECHNOLOGY = ['AAPL', 'MSFT', 'GOOGL', 'META', 'NVDA', 'QQQ']
CONSUMER_DISCRETIONARY = ['AMZN']
FINANCIALS = ['JPM', 'V']
HEALTHCARE = ['JNJ', 'UNH']
CONSUMER_STAPLES = ['PG']
ENERGY = ['XOM', 'CVX']

# Broad funds and non-equity sleeves
DIVERSIFIED = ['SPY', 'VTI']
FIXED_INCOME = ['BND', 'AGG']
COMMODITIES = ['GLD']
REAL_ESTATE = ['VNQ']

_SECTOR_GROUPS: Dict[str, List[str]] = {
    'Technology': TECHNOLOGY,
    'Consumer Discretionary': CONSUMER_DISCRETIONARY,
    'Financials': FINANCIALS,
    'Healthcare': HEALTHCARE,
    'Consumer Staples': CONSUMER_STAPLES,
    'Energy': ENERGY,
    'Diversified': DIVERSIFIED,
    'Fixed Income': FIXED_INCOME,
    'Commodities': COMMODITIES,
    'Real Estate': REAL_ESTATE,
}

SECTOR_MAPPING: Dict[str, str] = {
    ticker: sector
    for sector, tickers in _SECTOR_GROUPS.items()
    for ticker in tickers
}


def get_sector(ticker: str) -> str:
    """Sector for a ticker, UNKNOWN_SECTOR when not mapped."""
    return SECTOR_MAPPING.get(ticker.strip().upper(), UNKNOWN_SECTOR)
