"""
Config Module
=============
Scoring thresholds and how they are tuned.

Modules:
- scoring: ScoringConfig frozen dataclasses and DEFAULT_SCORING_CONFIG
- risk_tolerance: per-tolerance overlays (apply_risk_adjustments)
- validation: ordering preconditions (validate_scoring_config)
- loader: JSON/YAML load and save
"""

from portfolio_diagnostics.config.scoring import (
    DEFAULT_SCORING_CONFIG,
    ScoringConfig,
    status_for_score,
)
from portfolio_diagnostics.config.risk_tolerance import apply_risk_adjustments
from portfolio_diagnostics.config.validation import (
    collect_config_issues,
    validate_scoring_config,
)
from portfolio_diagnostics.config.loader import (
    load_scoring_config,
    save_scoring_config,
)


__all__ = [
    # Scoring
    'DEFAULT_SCORING_CONFIG',
    'ScoringConfig',
    'status_for_score',
    # Overlays
    'apply_risk_adjustments',
    # Validation
    'collect_config_issues',
    'validate_scoring_config',
    # Files
    'load_scoring_config',
    'save_scoring_config',
]
