"""
Portfolio Diagnostics Engine
============================
Deterministic scoring of a holdings snapshot across ten diagnostic
categories, with an aggregate health score and prioritised recommendations.

Main Components:
    - core: analyze_portfolio() entry point and the CLI
    - data: static market assumptions and file loaders
    - analytics: portfolio metrics and the diagnostic analyzers
    - decision: recommendations, action plan, card severity, shock watch
    - reporting: card copy and console report
    - config: scoring thresholds, risk-tolerance overlays, validation, files
    - models: type-safe data structures
    - utils: logging, exceptions, formatting helpers

Example:
    >>> from portfolio_diagnostics import analyze_portfolio, ClientInfo, PlanningChecklist
    >>> analysis = analyze_portfolio(holdings, ClientInfo(), PlanningChecklist())
    >>> analysis.health_score
"""

__version__ = "1.0.0"
__author__ = "Portfolio Analysis Team"

from portfolio_diagnostics.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from portfolio_diagnostics.core.engine import analyze_portfolio
from portfolio_diagnostics.models.portfolio import (
    AccountType,
    AdviceModel,
    AssetClass,
    Category,
    ClientInfo,
    DiagnosticResult,
    DiagnosticStatus,
    Holding,
    LifetimeIncomeInputs,
    PlanningChecklist,
    PortfolioAnalysis,
    Recommendation,
    RiskTolerance,
)

__all__ = [
    'analyze_portfolio',
    'DEFAULT_SCORING_CONFIG',
    'ScoringConfig',
    'AccountType',
    'AdviceModel',
    'AssetClass',
    'Category',
    'ClientInfo',
    'DiagnosticResult',
    'DiagnosticStatus',
    'Holding',
    'LifetimeIncomeInputs',
    'PlanningChecklist',
    'PortfolioAnalysis',
    'Recommendation',
    'RiskTolerance',
]
