"""
Models Module
=============
Typed inputs and outputs of the diagnostics engine.

Inputs (Holding, ClientInfo, PlanningChecklist, LifetimeIncomeInputs) are
frozen: the engine never mutates what the caller hands in. Outputs
(DiagnosticResult, Recommendation, PortfolioAnalysis) are plain dataclasses
with to_dict()/to_json() for the UI, PDF and CLI consumers.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Optional, Any, Iterator, Tuple
from enum import Enum
import json


# ================================================================================
# ENUMS
# ================================================================================

class AssetClass(str, Enum):
    """Asset classes used by the static return/volatility tables."""
    US_STOCKS = "US Stocks"
    INTL_STOCKS = "Intl Stocks"
    BONDS = "Bonds"
    COMMODITIES = "Commodities"
    CASH = "Cash"
    OTHER = "Other"


class AccountType(str, Enum):
    TAXABLE = "Taxable"
    TAX_ADVANTAGED = "Tax-Advantaged"


class RiskTolerance(str, Enum):
    CONSERVATIVE = "Conservative"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"


class AdviceModel(str, Enum):
    """
    How the client is advised; selects the fee band in cost analysis.

    The same all-in fee can be GREEN for a tactical advisor and RED for a
    self-directed investor.
    """
    SELF_DIRECTED = "self-directed"
    ADVISOR_PASSIVE = "advisor-passive"
    ADVISOR_TACTICAL = "advisor-tactical"


class DiagnosticStatus(str, Enum):
    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"


class Category(str, Enum):
    """Identifier of each diagnostic (and recommendation category)."""
    RISK_MANAGEMENT = "risk_management"
    PROTECTION = "protection"
    RETURN_EFFICIENCY = "return_efficiency"
    COST_ANALYSIS = "cost_analysis"
    TAX_EFFICIENCY = "tax_efficiency"
    DIVERSIFICATION = "diversification"
    RISK_ADJUSTED = "risk_adjusted"
    CRISIS_RESILIENCE = "crisis_resilience"
    OPTIMIZATION = "optimization"
    PLANNING_GAPS = "planning_gaps"
    LIFETIME_INCOME_SECURITY = "lifetime_income_security"


# The ten categories that make up the health score, in display order
DIAGNOSTIC_CATEGORIES: Tuple[Category, ...] = (
    Category.RISK_MANAGEMENT,
    Category.PROTECTION,
    Category.RETURN_EFFICIENCY,
    Category.COST_ANALYSIS,
    Category.TAX_EFFICIENCY,
    Category.DIVERSIFICATION,
    Category.RISK_ADJUSTED,
    Category.CRISIS_RESILIENCE,
    Category.OPTIMIZATION,
    Category.PLANNING_GAPS,
)


class RiskSeverity(str, Enum):
    """Severity bucket of a single protection sub-score (0-10 scale)."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class CardSeverity(str, Enum):
    NORMAL = "NORMAL"
    EXTREME = "EXTREME"


class ShockSeverity(str, Enum):
    NORMAL = "NORMAL"
    ELEVATED = "ELEVATED"
    EXTREME = "EXTREME"


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key among snake_case / camelCase spellings."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


# ================================================================================
# INPUTS
# ================================================================================

@dataclass(frozen=True)
class Holding:
    """
    One position in one account.

    Value and gains are derived, never stored. expense_ratio=None means
    "unknown" and falls back to the asset-class default; 0.0 is a real
    zero-cost holding.
    """
    ticker: str
    name: str
    shares: float
    current_price: float
    cost_basis: float
    account_type: AccountType = AccountType.TAXABLE
    asset_class: AssetClass = AssetClass.OTHER
    expense_ratio: Optional[float] = None

    @property
    def value(self) -> float:
        return self.shares * self.current_price

    @property
    def cost_value(self) -> float:
        return self.shares * self.cost_basis

    @property
    def unrealized_gain(self) -> float:
        return self.shares * (self.current_price - self.cost_basis)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Holding":
        """Build from a mapping using snake_case or camelCase keys."""
        ticker = str(_pick(data, "ticker", "symbol", default="")).strip().upper()
        expense_ratio = _pick(data, "expense_ratio", "expenseRatio")
        return cls(
            ticker=ticker,
            name=str(_pick(data, "name", default=ticker)),
            shares=float(_pick(data, "shares", default=0.0)),
            current_price=float(_pick(data, "current_price", "currentPrice", default=0.0)),
            cost_basis=float(_pick(data, "cost_basis", "costBasis", default=0.0)),
            account_type=AccountType(_pick(data, "account_type", "accountType", default=AccountType.TAXABLE.value)),
            asset_class=AssetClass(_pick(data, "asset_class", "assetClass", default=AssetClass.OTHER.value)),
            expense_ratio=float(expense_ratio) if expense_ratio is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["account_type"] = self.account_type.value
        data["asset_class"] = self.asset_class.value
        return data


@dataclass(frozen=True)
class ClientInfo:
    """Client profile. Goal inputs are optional; both are needed for a goal probability."""
    risk_tolerance: RiskTolerance = RiskTolerance.MODERATE
    target_amount: Optional[float] = None
    years_to_goal: Optional[float] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientInfo":
        target = _pick(data, "target_amount", "targetAmount")
        years = _pick(data, "years_to_goal", "yearsToGoal")
        return cls(
            risk_tolerance=RiskTolerance(_pick(data, "risk_tolerance", "riskTolerance", default=RiskTolerance.MODERATE.value)),
            target_amount=float(target) if target is not None else None,
            years_to_goal=float(years) if years is not None else None,
            name=_pick(data, "name"),
        )


# Display names of the checklist items, in checklist order
PLANNING_ITEM_NAMES: Dict[str, str] = {
    "will_trust": "Will/Trust",
    "beneficiary_review": "Beneficiary Review",
    "poa_directives": "Power of Attorney",
    "digital_asset_plan": "Digital Asset Plan",
    "insurance_coverage": "Insurance Review",
    "emergency_fund": "Emergency Fund",
    "withdrawal_strategy": "Withdrawal Strategy",
}


@dataclass(frozen=True)
class PlanningChecklist:
    """Completion flags of the seven estate / financial-planning tasks."""
    will_trust: bool = False
    beneficiary_review: bool = False
    poa_directives: bool = False
    digital_asset_plan: bool = False
    insurance_coverage: bool = False
    emergency_fund: bool = False
    withdrawal_strategy: bool = False

    def items(self) -> Iterator[Tuple[str, bool]]:
        for key in PLANNING_ITEM_NAMES:
            yield key, bool(getattr(self, key))

    @property
    def completed_count(self) -> int:
        return sum(1 for _, done in self.items() if done)

    @property
    def total_count(self) -> int:
        return len(PLANNING_ITEM_NAMES)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanningChecklist":
        camel = {
            "will_trust": "willTrust",
            "beneficiary_review": "beneficiaryReview",
            "poa_directives": "poaDirectives",
            "digital_asset_plan": "digitalAssetPlan",
            "insurance_coverage": "insuranceCoverage",
            "emergency_fund": "emergencyFund",
            "withdrawal_strategy": "withdrawalStrategy",
        }
        return cls(**{key: bool(_pick(data, key, camel[key], default=False)) for key in PLANNING_ITEM_NAMES})

    @classmethod
    def all_complete(cls) -> "PlanningChecklist":
        return cls(**{key: True for key in PLANNING_ITEM_NAMES})


@dataclass(frozen=True)
class GuaranteedIncomeSource:
    """Social Security, pension or annuity income."""
    source_name: str
    monthly_amount: float
    guaranteed_for_life: bool = True
    source_type: str = "other-guaranteed"
    start_age: Optional[int] = None
    inflation_adjusted: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GuaranteedIncomeSource":
        start_age = _pick(data, "start_age", "startAge")
        return cls(
            source_name=str(_pick(data, "source_name", "sourceName", default="Income source")),
            monthly_amount=float(_pick(data, "monthly_amount", "monthlyAmount", default=0.0)),
            guaranteed_for_life=bool(_pick(data, "guaranteed_for_life", "guaranteedForLife", default=True)),
            source_type=str(_pick(data, "source_type", "sourceType", default="other-guaranteed")),
            start_age=int(start_age) if start_age is not None else None,
            inflation_adjusted=bool(_pick(data, "inflation_adjusted", "inflationAdj", default=False)),
        )


@dataclass(frozen=True)
class LifetimeIncomeInputs:
    """Monthly spending split and the guaranteed income that covers it."""
    core_expenses_monthly: float = 0.0
    discretionary_expenses_monthly: float = 0.0
    healthcare_expenses_monthly: float = 0.0
    guaranteed_sources: Tuple[GuaranteedIncomeSource, ...] = ()

    @property
    def has_data(self) -> bool:
        return self.core_expenses_monthly > 0 or len(self.guaranteed_sources) > 0

    @property
    def guaranteed_lifetime_income_monthly(self) -> float:
        return sum(s.monthly_amount for s in self.guaranteed_sources if s.guaranteed_for_life)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LifetimeIncomeInputs":
        sources = _pick(data, "guaranteed_sources", "guaranteedSources", default=[])
        return cls(
            core_expenses_monthly=float(_pick(data, "core_expenses_monthly", "coreLivingExpensesMonthly", default=0.0)),
            discretionary_expenses_monthly=float(
                _pick(data, "discretionary_expenses_monthly", "discretionaryExpensesMonthly", default=0.0)),
            healthcare_expenses_monthly=float(
                _pick(data, "healthcare_expenses_monthly", "healthcareLongTermCareMonthly", default=0.0)),
            guaranteed_sources=tuple(GuaranteedIncomeSource.from_dict(s) for s in sources),
        )


# ================================================================================
# OUTPUTS
# ================================================================================

@dataclass(frozen=True)
class PortfolioMetrics:
    """Aggregate numbers every analyzer reads. All zero for an empty/zero-value portfolio."""
    total_value: float = 0.0
    total_cost: float = 0.0
    expected_return: float = 0.0
    volatility: float = 0.0
    sharpe_ratio: float = 0.0
    total_fees: float = 0.0
    unrealized_gain: float = 0.0
    total_return: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DiagnosticResult:
    """
    Verdict of one diagnostic category.

    status is always derived from score through the shared status table
    (see config.scoring.status_for_score); analyzers never pick it directly.
    """
    status: DiagnosticStatus
    score: float
    key_finding: str
    headline_metric: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "score": self.score,
            "key_finding": self.key_finding,
            "headline_metric": self.headline_metric,
            "details": self.details,
        }


@dataclass
class Recommendation:
    """One ranked action. priority 1 is the most urgent."""
    id: str
    category: Category
    priority: int
    title: str
    description: str
    impact: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data


@dataclass
class PortfolioAnalysis:
    """
    Complete output of one analyze_portfolio() call.

    diagnostics holds exactly the ten scored categories in
    DIAGNOSTIC_CATEGORIES order. lifetime_income_security is reported
    alongside when income inputs were supplied but is not part of the
    health score.
    """
    health_score: int
    metrics: PortfolioMetrics
    diagnostics: Dict[Category, DiagnosticResult]
    recommendations: List[Recommendation] = field(default_factory=list)
    lifetime_income_security: Optional[DiagnosticResult] = None

    def diagnostic(self, category: Category) -> DiagnosticResult:
        if category == Category.LIFETIME_INCOME_SECURITY and self.lifetime_income_security is not None:
            return self.lifetime_income_security
        return self.diagnostics[category]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "health_score": self.health_score,
            "metrics": self.metrics.to_dict(),
            "diagnostics": {cat.value: result.to_dict() for cat, result in self.diagnostics.items()},
            "lifetime_income_security": (
                self.lifetime_income_security.to_dict() if self.lifetime_income_security else None
            ),
            "recommendations": [r.to_dict() for r in self.recommendations],
        }

    def to_json(self, indent: int = 2) -> str:
        """
        Export to JSON for programmatic use.

        Enum values inside details are serialized through their str value.
        """
        return json.dumps(self.to_dict(), indent=indent, default=_json_default)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    return str(obj)
