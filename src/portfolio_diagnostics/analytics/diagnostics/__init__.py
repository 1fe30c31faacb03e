"""
Diagnostics Submodule
=====================
One pure analyzer per category. Each reads holdings/metrics plus the
ScoringConfig and returns a DiagnosticResult whose status is derived from
its score.

Modules:
- risk_management, protection, return_efficiency, costs, tax,
  diversification, goal_probability, crisis, optimization, planning
- lifetime_income: optional, reported outside the health score
- common: status derivation and the neutral placeholder
"""

from portfolio_diagnostics.analytics.diagnostics.common import (
    placeholder_result,
    score_and_status,
)
from portfolio_diagnostics.analytics.diagnostics.risk_management import analyze_risk_management
from portfolio_diagnostics.analytics.diagnostics.protection import analyze_protection
from portfolio_diagnostics.analytics.diagnostics.return_efficiency import analyze_return_efficiency
from portfolio_diagnostics.analytics.diagnostics.costs import analyze_costs
from portfolio_diagnostics.analytics.diagnostics.tax import analyze_tax_efficiency
from portfolio_diagnostics.analytics.diagnostics.diversification import analyze_diversification
from portfolio_diagnostics.analytics.diagnostics.goal_probability import analyze_goal_probability
from portfolio_diagnostics.analytics.diagnostics.crisis import analyze_crisis_resilience
from portfolio_diagnostics.analytics.diagnostics.optimization import analyze_optimization
from portfolio_diagnostics.analytics.diagnostics.planning import analyze_planning_gaps
from portfolio_diagnostics.analytics.diagnostics.lifetime_income import analyze_lifetime_income


__all__ = [
    'placeholder_result',
    'score_and_status',
    'analyze_risk_management',
    'analyze_protection',
    'analyze_return_efficiency',
    'analyze_costs',
    'analyze_tax_efficiency',
    'analyze_diversification',
    'analyze_goal_probability',
    'analyze_crisis_resilience',
    'analyze_optimization',
    'analyze_planning_gaps',
    'analyze_lifetime_income',
]
