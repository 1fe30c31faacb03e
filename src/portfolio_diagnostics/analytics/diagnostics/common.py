"""
Diagnostic Helpers
==================
Shared plumbing of the analyzers: score clamping, status derivation and the
neutral placeholder.

Every analyzer goes score -> status -> finding. finalize() is the only way a
DiagnosticResult is built, so status can never disagree with score.
"""

from typing import Any, Dict, Optional, Tuple

from portfolio_diagnostics.config.scoring import ScoringConfig
from portfolio_diagnostics.models.portfolio import DiagnosticResult, DiagnosticStatus
from portfolio_diagnostics.utils.formatting import clamp_score


PLACEHOLDER_SCORE = 50.0
PLACEHOLDER_FINDING = "Add holdings to begin analysis"
PLACEHOLDER_HEADLINE = "No data"


def score_and_status(raw_score: float, config: ScoringConfig) -> Tuple[float, DiagnosticStatus]:
    """Clamp to [0, 100] and derive the status from the clamped score."""
    score = clamp_score(raw_score)
    return score, config.status_for(score)


def finalize(
    score: float,
    config: ScoringConfig,
    key_finding: str,
    headline_metric: str,
    details: Optional[Dict[str, Any]] = None,
) -> DiagnosticResult:
    """Build the result; status is always re-derived from the clamped score."""
    score, status = score_and_status(score, config)
    return DiagnosticResult(
        status=status,
        score=score,
        key_finding=key_finding,
        headline_metric=headline_metric,
        details=details or {},
    )


def placeholder_result(config: ScoringConfig) -> DiagnosticResult:
    """
    Neutral result for categories that cannot be scored without holdings.

    Status still comes from the status table: YELLOW under the default
    thresholds, but a config with yellow_min above 50 turns it RED.
    """
    return finalize(PLACEHOLDER_SCORE, config, PLACEHOLDER_FINDING, PLACEHOLDER_HEADLINE)
