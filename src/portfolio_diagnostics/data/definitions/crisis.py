"""
Crisis Definitions Module
=========================
Single source of truth for the historical stress scenarios used by the
crisis resilience diagnostic.

Each scenario is a static peak-to-trough shock for equities and bonds.
Cash, commodities and "Other" are treated as unaffected (a documented
simplification, the score only needs a relative comparison with the S&P).
"""

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class CrisisScenario:
    """
    A known historical market shock.

    Attributes:
        key: Stable identifier
        name: Human-readable crisis name
        equity_shock: Total return of broad equities through the crisis
        bond_shock: Total return of investment-grade bonds through the crisis
    """
    key: str
    name: str
    equity_shock: float
    bond_shock: float

    def portfolio_impact(self, stock_weight: float, bond_weight: float) -> float:
        """Linear impact on a portfolio with the given equity and bond weights."""
        return stock_weight * self.equity_shock + bond_weight * self.bond_shock

    @property
    def sp500_impact(self) -> float:
        return self.equity_shock

    def to_dict(self) -> dict:
        return {
            'key': self.key,
            'name': self.name,
            'equity_shock': self.equity_shock,
            'bond_shock': self.bond_shock,
        }


# =============================================================================
# CRISIS SCENARIOS - SINGLE SOURCE OF TRUTH
# =============================================================================

CRISIS_SCENARIOS: List[CrisisScenario] = [
    CrisisScenario(
        key="tech_bubble_2000",
        name="2000 Tech Crash",
        equity_shock=-0.45,
        bond_shock=0.10,
    ),
    CrisisScenario(
        key="financial_crisis_2008",
        name="2008 Financial Crisis",
        equity_shock=-0.55,
        bond_shock=0.05,
    ),
    CrisisScenario(
        key="covid_crash_2020",
        name="2020 Covid Shock",
        equity_shock=-0.34,
        bond_shock=0.02,
    ),
]


def get_crisis_scenarios() -> List[CrisisScenario]:
    """Return a copy of the scenario list (callers may sort or filter it)."""
    return list(CRISIS_SCENARIOS)
