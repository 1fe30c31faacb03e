"""
Scoring Configuration
=====================
Every threshold an analyzer compares against lives here, namespaced by
category. Values are frozen dataclasses: a ScoringConfig is an immutable
value passed into each analyze_portfolio() call, never a process-wide
setting.

Tuning:
    from dataclasses import replace
    cfg = replace(DEFAULT_SCORING_CONFIG,
                  status_thresholds=StatusThresholds(green_min=75, yellow_min=45))

Persisted configs are read/written by config.loader (JSON/YAML).
"""

from dataclasses import dataclass, field, fields, asdict, is_dataclass
from typing import Any, Dict, Tuple

from portfolio_diagnostics.models.portfolio import AdviceModel, DiagnosticStatus


# ================================================================================
# STATUS THRESHOLDS (shared by every category)
# ================================================================================

@dataclass(frozen=True)
class StatusThresholds:
    green_min: float = 70.0    # score >= green_min -> GREEN
    yellow_min: float = 40.0   # score >= yellow_min -> YELLOW, else RED


def status_for_score(score: float, thresholds: StatusThresholds) -> DiagnosticStatus:
    """The only place a status is derived from a score."""
    if score >= thresholds.green_min:
        return DiagnosticStatus.GREEN
    if score >= thresholds.yellow_min:
        return DiagnosticStatus.YELLOW
    return DiagnosticStatus.RED


# ================================================================================
# CATEGORY NAMESPACES
# ================================================================================

@dataclass(frozen=True)
class RiskManagementThresholds:
    max_single_position_pct: float = 0.10      # any holding above this is a concentration
    dominant_position_pct: float = 0.50        # a single holding above this dominates the portfolio
    max_sector_pct: float = 0.30
    max_country_pct: float = 0.50              # domestic equity share, reported in details
    risk_gap_severe_threshold: float = 0.15    # |vol - target| / target
    risk_gap_warning_threshold: float = 0.05


@dataclass(frozen=True)
class SharpeThresholds:
    portfolio_target: float = 0.50
    holding_good_threshold: float = 0.50       # absolute per-holding Sharpe band
    holding_neutral_offset: float = 0.15       # neutral band = good - offset
    holding_good_pct_of_target: float = 0.90   # GOOD label at >= 90% of target
    holding_below_target_pct_of_target: float = 0.70  # BELOW TARGET at >= 70%, else POOR


@dataclass(frozen=True)
class FeeBand:
    green_max: float
    yellow_max: float


@dataclass(frozen=True)
class FeeThresholds:
    """All-in fee ceilings per advice model (product fees + advisor fee)."""
    self_directed: FeeBand = field(default_factory=lambda: FeeBand(green_max=0.005, yellow_max=0.01))
    advisor_passive: FeeBand = field(default_factory=lambda: FeeBand(green_max=0.01, yellow_max=0.015))
    advisor_tactical: FeeBand = field(default_factory=lambda: FeeBand(green_max=0.015, yellow_max=0.02))

    def for_model(self, advice_model: AdviceModel) -> FeeBand:
        return getattr(self, AdviceModel(advice_model).value.replace('-', '_'))


@dataclass(frozen=True)
class TaxThresholds:
    harvest_bonus_pct: float = 0.03     # harvestable losses above 3% of value earn a bonus


@dataclass(frozen=True)
class DiversificationThresholds:
    small_portfolio_threshold: float = 250_000.0
    small_portfolio_min_holdings: int = 15
    small_portfolio_max_holdings: int = 40
    large_portfolio_min_holdings: int = 25
    large_portfolio_max_holdings: int = 60
    top10_concentration_max: float = 0.50
    top3_concentration_max: float = 0.40
    bonds_underweight_min: float = 0.10
    equity_dominance_max: float = 0.70  # US Stocks share that makes a thin bond sleeve a problem


@dataclass(frozen=True)
class GoalProbabilityThresholds:
    green_min: float = 75.0
    yellow_min: float = 50.0
    max_drawdown_limit: float = 0.40
    partial_income_coverage: float = 0.50   # lifetime income coverage that earns the partial bonus


@dataclass(frozen=True)
class CrisisResilienceThresholds:
    better_than_sp_threshold: float = 0.05   # avg loss smaller than S&P's by more than this -> better
    similar_to_sp_range: float = 0.10        # avg loss larger than S&P's by more than this -> worse


@dataclass(frozen=True)
class PlanningGapThresholds:
    green_min_complete: int = 6
    yellow_min_complete: int = 4
    critical_items: Tuple[str, ...] = ('will_trust', 'poa_directives', 'emergency_fund')


@dataclass(frozen=True)
class ProtectionThresholds:
    high_risk_threshold: float = 7.0   # sub-score above this is CRITICAL
    max_high_risk_areas: int = 2       # elevated areas named individually in the finding


@dataclass(frozen=True)
class LifetimeIncomeThresholds:
    core_coverage_green: float = 1.0
    core_coverage_yellow: float = 0.8


@dataclass(frozen=True)
class OptimizationThresholds:
    achievable_sharpe_uplift: float = 0.15   # improvement assumed reachable by any portfolio
    moderate_potential_pct: float = 0.15     # potential above this caps the score
    moderate_potential_score_cap: float = 65.0
    high_potential_pct: float = 0.20
    high_potential_score_cap: float = 50.0
    high_fee_pct: float = 0.005              # product fees above this suggest cheaper funds
    high_volatility: float = 0.15            # volatility above this suggests more bonds


# ================================================================================
# ROOT CONFIG
# ================================================================================

@dataclass(frozen=True)
class ScoringConfig:
    status_thresholds: StatusThresholds = field(default_factory=StatusThresholds)
    risk_management: RiskManagementThresholds = field(default_factory=RiskManagementThresholds)
    sharpe: SharpeThresholds = field(default_factory=SharpeThresholds)
    fees: FeeThresholds = field(default_factory=FeeThresholds)
    tax: TaxThresholds = field(default_factory=TaxThresholds)
    diversification: DiversificationThresholds = field(default_factory=DiversificationThresholds)
    goal_probability: GoalProbabilityThresholds = field(default_factory=GoalProbabilityThresholds)
    crisis_resilience: CrisisResilienceThresholds = field(default_factory=CrisisResilienceThresholds)
    planning_gaps: PlanningGapThresholds = field(default_factory=PlanningGapThresholds)
    protection: ProtectionThresholds = field(default_factory=ProtectionThresholds)
    lifetime_income_security: LifetimeIncomeThresholds = field(default_factory=LifetimeIncomeThresholds)
    optimization: OptimizationThresholds = field(default_factory=OptimizationThresholds)

    def status_for(self, score: float) -> DiagnosticStatus:
        return status_for_score(score, self.status_thresholds)

    def to_dict(self) -> Dict[str, Any]:
        """Nested plain dict (tuples become lists) suitable for JSON/YAML."""
        data = asdict(self)
        data['planning_gaps']['critical_items'] = list(self.planning_gaps.critical_items)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: "ScoringConfig" = None) -> "ScoringConfig":
        """
        Build a config from a (possibly partial) nested mapping.

        Missing sections and keys keep the values of `base` (defaults when
        omitted). Keys must already be snake_case; config.loader normalizes
        camelCase files before calling this.
        """
        return _merge_dataclass(base or DEFAULT_SCORING_CONFIG, data, path='')


def _merge_dataclass(instance: Any, overrides: Dict[str, Any], path: str) -> Any:
    if not isinstance(overrides, dict):
        raise TypeError(f"Expected a mapping for '{path or 'config'}', got {type(overrides).__name__}")

    known = {f.name: f for f in fields(instance)}
    unknown = sorted(set(overrides) - set(known))
    if unknown:
        raise KeyError(f"Unknown config key(s) under '{path or 'config'}': {', '.join(unknown)}")

    values = {}
    for name in known:
        current = getattr(instance, name)
        if name not in overrides:
            values[name] = current
            continue
        override = overrides[name]
        child_path = f"{path}.{name}" if path else name
        if is_dataclass(current):
            values[name] = _merge_dataclass(current, override, child_path)
        elif isinstance(current, tuple):
            values[name] = tuple(override)
        elif isinstance(current, bool):
            values[name] = bool(override)
        elif isinstance(current, int):
            values[name] = _whole_number(override, child_path)
        else:
            values[name] = float(override)
    return type(instance)(**values)


def _whole_number(value: Any, path: str) -> int:
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"'{path}' must be a whole number, got {value!r}")
    return int(number)


DEFAULT_SCORING_CONFIG = ScoringConfig()
