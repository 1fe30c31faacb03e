"""
Risk Management Diagnostic
==========================
Position concentration, sector concentration and volatility vs the
client's risk-tolerance target.

Score starts at 100 and loses a fixed penalty per breach:
    risk gap > severe       -40   (else > warning: -20)
    top position > max      -25
    top position > dominant -40   (on top of the -25)
    top sector > max        -15
"""

from typing import Sequence

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.analytics.metrics.portfolio import (
    asset_class_weights,
    cross_account_exposure,
    position_weights,
    sector_weights,
)
from portfolio_diagnostics.config.scoring import ScoringConfig
from portfolio_diagnostics.data.definitions.assumptions import TARGET_VOLATILITY
from portfolio_diagnostics.models.portfolio import (
    AssetClass,
    ClientInfo,
    DiagnosticResult,
    DiagnosticStatus,
    Holding,
    PortfolioMetrics,
    RiskTolerance,
)
from portfolio_diagnostics.utils.formatting import format_pct, safe_divide
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

BASE_SCORE = 100.0
SEVERE_GAP_PENALTY = 40.0
WARNING_GAP_PENALTY = 20.0
POSITION_PENALTY = 25.0
DOMINANT_POSITION_PENALTY = 40.0
SECTOR_PENALTY = 15.0

TOP_POSITIONS_SHOWN = 5


def analyze_risk_management(
    holdings: Sequence[Holding],
    client_info: ClientInfo,
    metrics: PortfolioMetrics,
    config: ScoringConfig,
) -> DiagnosticResult:
    thresholds = config.risk_management
    risk_tolerance = RiskTolerance(client_info.risk_tolerance)

    target_vol = TARGET_VOLATILITY[risk_tolerance]
    risk_gap = safe_divide(abs(metrics.volatility - target_vol), target_vol)

    positions = position_weights(holdings)
    top_position = positions[0] if positions else {'ticker': '', 'weight': 0.0}
    top_weight = top_position['weight']
    has_concentration = top_weight > thresholds.max_single_position_pct
    is_dominant = top_weight > thresholds.dominant_position_pct

    sectors = sector_weights(holdings)
    top_sector, top_sector_weight = max(sectors.items(), key=lambda kv: kv[1], default=('', 0.0))
    has_sector_concentration = top_sector_weight > thresholds.max_sector_pct

    domestic_weight = asset_class_weights(holdings)[AssetClass.US_STOCKS]

    # Scoring
    score = BASE_SCORE
    if risk_gap > thresholds.risk_gap_severe_threshold:
        score -= SEVERE_GAP_PENALTY
    elif risk_gap > thresholds.risk_gap_warning_threshold:
        score -= WARNING_GAP_PENALTY
    if has_concentration:
        score -= POSITION_PENALTY
    if is_dominant:
        score -= DOMINANT_POSITION_PENALTY
    if has_sector_concentration:
        score -= SECTOR_PENALTY

    score, status = score_and_status(score, config)
    green = status == DiagnosticStatus.GREEN

    max_pos_label = format_pct(thresholds.max_single_position_pct, 0)
    if has_concentration:
        if green:
            key_finding = (
                f"Top position ({top_position['ticker']}) is {format_pct(top_weight)}% of portfolio, "
                f"slightly above the {max_pos_label}% concentration guideline"
            )
        else:
            key_finding = (
                f"Top position ({top_position['ticker']}) is {format_pct(top_weight)}% of portfolio, "
                f"WELL ABOVE the {max_pos_label}% concentration guideline"
            )
    elif has_sector_concentration:
        verb = "slightly above" if green else "exceeding"
        key_finding = (
            f"Top sector concentration ({top_sector}) is {format_pct(top_sector_weight)}%, "
            f"{verb} the {format_pct(thresholds.max_sector_pct, 0)}% guideline"
        )
    elif risk_gap > thresholds.risk_gap_severe_threshold:
        direction = 'higher' if metrics.volatility > target_vol else 'lower'
        degree = "somewhat" if green else "significantly"
        key_finding = f"Portfolio volatility is {degree} {direction} than your {risk_tolerance.value} target"
    elif green:
        key_finding = "Portfolio risk is well-aligned with your stated risk tolerance"
    else:
        key_finding = "Some risk management adjustments may improve portfolio stability"

    logger.debug(
        f"Risk management: top={top_weight:.3f} sector={top_sector_weight:.3f} "
        f"gap={risk_gap:.3f} -> {score:.1f} {status.value}"
    )

    return finalize(
        score,
        config,
        key_finding,
        f"Largest Position: {format_pct(top_weight)}% (Max {max_pos_label}%)",
        {
            'current_volatility': metrics.volatility,
            'target_volatility': target_vol,
            'risk_gap': risk_gap,
            'top_positions': positions[:TOP_POSITIONS_SHOWN],
            'sector_weights': sectors,
            'top_sector': top_sector,
            'top_sector_weight': top_sector_weight,
            'has_concentration': has_concentration,
            'is_dominant_position': is_dominant,
            'has_sector_concentration': has_sector_concentration,
            'max_single_position_pct': thresholds.max_single_position_pct,
            'dominant_position_pct': thresholds.dominant_position_pct,
            'max_sector_pct': thresholds.max_sector_pct,
            'domestic_equity_weight': domestic_weight,
            'max_country_pct': thresholds.max_country_pct,
            'exceeds_country_limit': domestic_weight > thresholds.max_country_pct,
            'cross_account_exposure': cross_account_exposure(holdings),
        },
    )
