"""
Core Module
===========
Orchestration: the analyze_portfolio() engine and the command line.
"""

from portfolio_diagnostics.core.engine import analyze_portfolio, health_score

__all__ = [
    'analyze_portfolio',
    'health_score',
]
