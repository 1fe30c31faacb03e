"""
Scoring Config Validation
=========================
Precondition checks on threshold ordering.

The analyzers trust their config: a yellow cutoff above the green cutoff or
an inverted fee band would silently produce nonsense verdicts. These checks
turn such configs into an explicit ScoringConfigError before any scoring
happens.
"""

from typing import List, Optional

from portfolio_diagnostics.config.scoring import FeeBand, ScoringConfig
from portfolio_diagnostics.models.portfolio import AdviceModel, PLANNING_ITEM_NAMES
from portfolio_diagnostics.utils.exceptions import ScoringConfigError
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

# Protection severity buckets below the configurable HIGH/CRITICAL split
PROTECTION_MODERATE_MAX = 5
PROTECTION_SCORE_MAX = 10


def _check_fraction(issues: List[str], name: str, value: float, allow_zero: bool = False) -> None:
    lower_ok = value >= 0 if allow_zero else value > 0
    if not (lower_ok and value <= 1):
        bound = "[0, 1]" if allow_zero else "(0, 1]"
        issues.append(f"{name} must be in {bound}, got {value}")


def _check_fee_band(issues: List[str], model: AdviceModel, band: FeeBand) -> None:
    if band.green_max <= 0:
        issues.append(f"fees.{model.value}.green_max must be > 0, got {band.green_max}")
    if band.yellow_max <= band.green_max:
        issues.append(
            f"fees.{model.value}: yellow_max ({band.yellow_max}) must be above green_max ({band.green_max})"
        )


def collect_config_issues(config: ScoringConfig) -> List[str]:
    """
    Check every ordering precondition.

    Returns:
        One message per violated rule; empty when the config is consistent.
    """
    issues: List[str] = []

    # Status table
    st = config.status_thresholds
    if not 0 <= st.yellow_min < st.green_min <= 100:
        issues.append(
            f"status_thresholds must satisfy 0 <= yellow_min < green_min <= 100 "
            f"(got yellow_min={st.yellow_min}, green_min={st.green_min})"
        )

    # Risk management
    rm = config.risk_management
    _check_fraction(issues, "risk_management.max_single_position_pct", rm.max_single_position_pct)
    _check_fraction(issues, "risk_management.dominant_position_pct", rm.dominant_position_pct)
    _check_fraction(issues, "risk_management.max_sector_pct", rm.max_sector_pct)
    _check_fraction(issues, "risk_management.max_country_pct", rm.max_country_pct)
    if rm.dominant_position_pct < rm.max_single_position_pct:
        issues.append(
            f"risk_management.dominant_position_pct ({rm.dominant_position_pct}) must not be below "
            f"max_single_position_pct ({rm.max_single_position_pct})"
        )
    if not 0 <= rm.risk_gap_warning_threshold < rm.risk_gap_severe_threshold:
        issues.append(
            f"risk_management must satisfy 0 <= risk_gap_warning_threshold < risk_gap_severe_threshold "
            f"(got {rm.risk_gap_warning_threshold}, {rm.risk_gap_severe_threshold})"
        )

    # Sharpe
    sh = config.sharpe
    if sh.portfolio_target <= 0:
        issues.append(f"sharpe.portfolio_target must be > 0, got {sh.portfolio_target}")
    if sh.holding_neutral_offset < 0:
        issues.append(f"sharpe.holding_neutral_offset must be >= 0, got {sh.holding_neutral_offset}")
    if not 0 <= sh.holding_below_target_pct_of_target < sh.holding_good_pct_of_target:
        issues.append(
            "sharpe.holding_below_target_pct_of_target must be below holding_good_pct_of_target "
            f"(got {sh.holding_below_target_pct_of_target}, {sh.holding_good_pct_of_target})"
        )

    # Fees, one band per advice model
    for model in AdviceModel:
        _check_fee_band(issues, model, config.fees.for_model(model))

    # Tax
    _check_fraction(issues, "tax.harvest_bonus_pct", config.tax.harvest_bonus_pct, allow_zero=True)

    # Diversification
    dv = config.diversification
    if dv.small_portfolio_threshold < 0:
        issues.append(f"diversification.small_portfolio_threshold must be >= 0, got {dv.small_portfolio_threshold}")
    for size in ("small", "large"):
        low = getattr(dv, f"{size}_portfolio_min_holdings")
        high = getattr(dv, f"{size}_portfolio_max_holdings")
        if not 0 < low <= high:
            issues.append(
                f"diversification.{size}_portfolio holding band must satisfy 0 < min <= max (got {low}, {high})"
            )
    _check_fraction(issues, "diversification.top10_concentration_max", dv.top10_concentration_max)
    _check_fraction(issues, "diversification.top3_concentration_max", dv.top3_concentration_max)
    _check_fraction(issues, "diversification.bonds_underweight_min", dv.bonds_underweight_min, allow_zero=True)
    _check_fraction(issues, "diversification.equity_dominance_max", dv.equity_dominance_max, allow_zero=True)

    # Goal probability
    gp = config.goal_probability
    if not 0 < gp.yellow_min < gp.green_min < 100:
        issues.append(
            f"goal_probability must satisfy 0 < yellow_min < green_min < 100 "
            f"(got yellow_min={gp.yellow_min}, green_min={gp.green_min})"
        )
    if gp.max_drawdown_limit <= 0:
        issues.append(f"goal_probability.max_drawdown_limit must be > 0, got {gp.max_drawdown_limit}")
    _check_fraction(issues, "goal_probability.partial_income_coverage", gp.partial_income_coverage)

    # Crisis resilience
    cr = config.crisis_resilience
    if cr.better_than_sp_threshold < 0 or cr.similar_to_sp_range < 0:
        issues.append(
            "crisis_resilience thresholds must be >= 0 "
            f"(got better_than_sp_threshold={cr.better_than_sp_threshold}, "
            f"similar_to_sp_range={cr.similar_to_sp_range})"
        )

    # Planning gaps
    pg = config.planning_gaps
    total_items = len(PLANNING_ITEM_NAMES)
    if not 0 < pg.yellow_min_complete <= pg.green_min_complete <= total_items:
        issues.append(
            f"planning_gaps must satisfy 0 < yellow_min_complete <= green_min_complete <= {total_items} "
            f"(got {pg.yellow_min_complete}, {pg.green_min_complete})"
        )
    unknown_items = [item for item in pg.critical_items if item not in PLANNING_ITEM_NAMES]
    if unknown_items:
        issues.append(
            f"planning_gaps.critical_items contains unknown checklist item(s): {', '.join(unknown_items)}"
        )

    # Protection
    pr = config.protection
    if not PROTECTION_MODERATE_MAX <= pr.high_risk_threshold <= PROTECTION_SCORE_MAX:
        issues.append(
            f"protection.high_risk_threshold must be in [{PROTECTION_MODERATE_MAX}, {PROTECTION_SCORE_MAX}], "
            f"got {pr.high_risk_threshold}"
        )
    if pr.max_high_risk_areas < 1:
        issues.append(f"protection.max_high_risk_areas must be >= 1, got {pr.max_high_risk_areas}")

    # Lifetime income
    li = config.lifetime_income_security
    if not 0 < li.core_coverage_yellow < li.core_coverage_green:
        issues.append(
            "lifetime_income_security must satisfy 0 < core_coverage_yellow < core_coverage_green "
            f"(got {li.core_coverage_yellow}, {li.core_coverage_green})"
        )

    # Optimization
    op = config.optimization
    if op.achievable_sharpe_uplift < 0:
        issues.append(f"optimization.achievable_sharpe_uplift must be >= 0, got {op.achievable_sharpe_uplift}")
    if not 0 <= op.moderate_potential_pct <= op.high_potential_pct:
        issues.append(
            "optimization must satisfy 0 <= moderate_potential_pct <= high_potential_pct "
            f"(got {op.moderate_potential_pct}, {op.high_potential_pct})"
        )
    if not 0 <= op.high_potential_score_cap <= op.moderate_potential_score_cap <= 100:
        issues.append(
            "optimization score caps must satisfy 0 <= high_potential_score_cap <= moderate_potential_score_cap <= 100 "
            f"(got {op.high_potential_score_cap}, {op.moderate_potential_score_cap})"
        )

    return issues


def validate_scoring_config(config: ScoringConfig, source: Optional[str] = None) -> ScoringConfig:
    """
    Raise ScoringConfigError if any precondition fails; return the config otherwise.

    Args:
        config: Config to check (usually after the risk-tolerance overlay)
        source: Optional label for the error message (file path, "defaults")
    """
    issues = collect_config_issues(config)
    if issues:
        logger.debug(f"Scoring config rejected with {len(issues)} issue(s)")
        raise ScoringConfigError(issues, source=source)
    return config
