"""
Decision Module
===============
From verdicts to actions: recommendations, action plan, card severity and
the shock watch.
"""

from portfolio_diagnostics.decision.recommendations import generate_recommendations, optimization_recommendations
from portfolio_diagnostics.decision.action_plan import build_action_plan
from portfolio_diagnostics.decision.severity import card_severity
from portfolio_diagnostics.decision.shock import ShockAlert, detect_shock

__all__ = [
    'generate_recommendations',
    'optimization_recommendations',
    'build_action_plan',
    'card_severity',
    'ShockAlert',
    'detect_shock',
]
