"""
Risk Tolerance Overlays
=======================
Per-tolerance adjustments applied on top of a base ScoringConfig.

A Conservative client gets tighter concentration limits, a higher bar for
goal probability and a lower tolerance for protection gaps; an Aggressive
client the opposite. Moderate reproduces the defaults exactly.

The overlay is a pure transform run before any analyzer, so analyzers never
branch on risk tolerance for threshold selection.
"""

from dataclasses import dataclass, replace
from typing import Dict

from portfolio_diagnostics.config.scoring import ScoringConfig
from portfolio_diagnostics.models.portfolio import RiskTolerance


@dataclass(frozen=True)
class RiskToleranceOverlay:
    """The keys an overlay replaces. Everything else in the config is untouched."""
    max_single_position_pct: float
    max_sector_pct: float
    top10_concentration_max: float
    top3_concentration_max: float
    goal_green_min: float
    goal_yellow_min: float
    sharpe_target: float
    protection_high_risk_threshold: float


RISK_TOLERANCE_ADJUSTMENTS: Dict[RiskTolerance, RiskToleranceOverlay] = {
    RiskTolerance.CONSERVATIVE: RiskToleranceOverlay(
        max_single_position_pct=0.08,
        max_sector_pct=0.25,
        top10_concentration_max=0.45,
        top3_concentration_max=0.35,
        goal_green_min=80,
        goal_yellow_min=60,
        sharpe_target=0.40,
        protection_high_risk_threshold=6,
    ),
    RiskTolerance.MODERATE: RiskToleranceOverlay(
        max_single_position_pct=0.10,
        max_sector_pct=0.30,
        top10_concentration_max=0.50,
        top3_concentration_max=0.40,
        goal_green_min=75,
        goal_yellow_min=50,
        sharpe_target=0.50,
        protection_high_risk_threshold=7,
    ),
    RiskTolerance.AGGRESSIVE: RiskToleranceOverlay(
        max_single_position_pct=0.15,
        max_sector_pct=0.40,
        top10_concentration_max=0.60,
        top3_concentration_max=0.50,
        goal_green_min=65,
        goal_yellow_min=40,
        sharpe_target=0.55,
        protection_high_risk_threshold=8,
    ),
}


def apply_risk_adjustments(base: ScoringConfig, risk_tolerance: RiskTolerance) -> ScoringConfig:
    """
    Return a new config with the overlay for `risk_tolerance` applied.

    Overridden keys: risk position/sector limits, diversification top-3 and
    top-10 ceilings, goal probability green/yellow cutoffs, the Sharpe
    portfolio target and per-holding good threshold, and the protection
    high-risk threshold. `base` is not modified.
    """
    overlay = RISK_TOLERANCE_ADJUSTMENTS[RiskTolerance(risk_tolerance)]

    return replace(
        base,
        risk_management=replace(
            base.risk_management,
            max_single_position_pct=overlay.max_single_position_pct,
            max_sector_pct=overlay.max_sector_pct,
        ),
        diversification=replace(
            base.diversification,
            top10_concentration_max=overlay.top10_concentration_max,
            top3_concentration_max=overlay.top3_concentration_max,
        ),
        goal_probability=replace(
            base.goal_probability,
            green_min=float(overlay.goal_green_min),
            yellow_min=float(overlay.goal_yellow_min),
        ),
        sharpe=replace(
            base.sharpe,
            portfolio_target=overlay.sharpe_target,
            holding_good_threshold=overlay.sharpe_target,
        ),
        protection=replace(
            base.protection,
            high_risk_threshold=float(overlay.protection_high_risk_threshold),
        ),
    )
