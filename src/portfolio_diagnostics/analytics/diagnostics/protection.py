"""
Protection & Vulnerability Diagnostic
=====================================
Six closed-form exposure sub-scores (0-10, higher = more exposed) computed
from asset-class weights:

    inflation      max(2, 10 - 20*commodities - 5*stocks - 2*bonds)
    interest rate  8*bonds (+2 when bonds > 40%)
    market crash   10*stocks
    liquidity      max(1, 5 - 20*cash)
    geographic     6*(1 - international)
    sequence       7 / 5 / 3 for stocks > 70% / > 50% / otherwise

Each sub-score gets a severity bucket; the category score is
100 - 25*critical - 15*high - 5*moderate.
"""

from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Sequence

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.analytics.metrics.portfolio import asset_class_weights
from portfolio_diagnostics.config.scoring import ScoringConfig
from portfolio_diagnostics.config.validation import PROTECTION_MODERATE_MAX, PROTECTION_SCORE_MAX
from portfolio_diagnostics.models.portfolio import (
    AssetClass,
    DiagnosticResult,
    DiagnosticStatus,
    Holding,
    RiskSeverity,
)
from portfolio_diagnostics.utils.formatting import clamp, round_half_up
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

PROTECTION_LOW_MAX = 3

BASE_SCORE = 100.0
CRITICAL_PENALTY = 25.0
HIGH_PENALTY = 15.0
MODERATE_PENALTY = 5.0

PROTECTION_EDUCATION = (
    "Protection analysis evaluates six major risk categories. "
    "High scores indicate significant exposure requiring attention."
)


@dataclass(frozen=True)
class ExposureWeights:
    stocks: float
    bonds: float
    commodities: float
    cash: float
    international: float


@dataclass(frozen=True)
class ProtectionRisk:
    name: str
    label: str
    description: str
    mitigation: str
    formula: Callable[[ExposureWeights], float]


@dataclass
class RiskDetail:
    name: str
    label: str
    score: int
    max_score: int
    severity: RiskSeverity
    description: str
    mitigation: str

    def to_dict(self) -> Dict:
        data = asdict(self)
        data['severity'] = self.severity.value
        return data


# ================================================================================
# RISK CATALOG
# ================================================================================

PROTECTION_RISKS: List[ProtectionRisk] = [
    ProtectionRisk(
        name='inflation_risk',
        label='Inflation Risk',
        description=(
            "Inflation erodes purchasing power over time. With 3% inflation, $100,000 today "
            "buys only $74,000 worth of goods in 10 years."
        ),
        mitigation="Consider TIPS, commodities, real estate, or I-Bonds to maintain purchasing power",
        formula=lambda w: max(2.0, 10 - w.commodities * 20 - w.stocks * 5 - w.bonds * 2),
    ),
    ProtectionRisk(
        name='interest_rate_risk',
        label='Interest Rate Risk',
        description=(
            "When interest rates rise, existing bond values fall. Longer-duration bonds are "
            "more sensitive to rate changes."
        ),
        mitigation="Shorten bond duration or ladder maturities to reduce rate sensitivity",
        formula=lambda w: w.bonds * 8 + (2 if w.bonds > 0.4 else 0),
    ),
    ProtectionRisk(
        name='market_crash_risk',
        label='Market Crash Risk',
        description=(
            "Equity markets can drop 30-50% in severe downturns. Recovery can take years, "
            "problematic if you need funds soon."
        ),
        mitigation="Add defensive assets (bonds, cash) or consider downside protection strategies",
        formula=lambda w: w.stocks * 10,
    ),
    ProtectionRisk(
        name='liquidity_risk',
        label='Liquidity Risk',
        description="Risk of being forced to sell investments at a loss to meet cash needs during market downturns.",
        mitigation="Maintain 6-12 months emergency fund in cash or money market",
        formula=lambda w: max(1.0, 5 - w.cash * 20),
    ),
    ProtectionRisk(
        name='concentration_risk',
        label='Geographic Concentration',
        description="Over-reliance on one country's market increases vulnerability to regional economic issues.",
        mitigation="Add 20-40% international diversification to reduce country-specific risk",
        formula=lambda w: (1 - w.international) * 6,
    ),
    ProtectionRisk(
        name='sequence_risk',
        label='Sequence of Returns Risk',
        description=(
            "Poor returns early in retirement, combined with withdrawals, can permanently deplete "
            "a portfolio even if markets later recover."
        ),
        mitigation=(
            "Establish guaranteed lifetime income (annuities, Social Security optimization) "
            "sufficient to cover core living expenses"
        ),
        formula=lambda w: 7 if w.stocks > 0.7 else 5 if w.stocks > 0.5 else 3,
    ),
]


def severity_for(sub_score: float, high_risk_threshold: float) -> RiskSeverity:
    """<=3 LOW, <=5 MODERATE, <=threshold HIGH, above CRITICAL."""
    if sub_score <= PROTECTION_LOW_MAX:
        return RiskSeverity.LOW
    if sub_score <= PROTECTION_MODERATE_MAX:
        return RiskSeverity.MODERATE
    if sub_score <= high_risk_threshold:
        return RiskSeverity.HIGH
    return RiskSeverity.CRITICAL


def exposure_weights(holdings: Sequence[Holding]) -> ExposureWeights:
    weights = asset_class_weights(holdings)
    return ExposureWeights(
        stocks=weights[AssetClass.US_STOCKS] + weights[AssetClass.INTL_STOCKS],
        bonds=weights[AssetClass.BONDS],
        commodities=weights[AssetClass.COMMODITIES],
        cash=weights[AssetClass.CASH],
        international=weights[AssetClass.INTL_STOCKS],
    )


def score_protection_risks(weights: ExposureWeights, high_risk_threshold: float) -> List[RiskDetail]:
    details = []
    for risk in PROTECTION_RISKS:
        sub_score = int(clamp(round_half_up(risk.formula(weights)), 0, PROTECTION_SCORE_MAX))
        details.append(RiskDetail(
            name=risk.name,
            label=risk.label,
            score=sub_score,
            max_score=PROTECTION_SCORE_MAX,
            severity=severity_for(sub_score, high_risk_threshold),
            description=risk.description,
            mitigation=risk.mitigation,
        ))
    return details


def _join_labels(risks: List[RiskDetail]) -> str:
    labels = [r.label for r in risks]
    if len(labels) <= 2:
        return ' and '.join(labels)
    return f"{', '.join(labels[:-1])} and {labels[-1]}"


def analyze_protection(holdings: Sequence[Holding], config: ScoringConfig) -> DiagnosticResult:
    thresholds = config.protection
    weights = exposure_weights(holdings)
    risk_details = score_protection_risks(weights, thresholds.high_risk_threshold)

    critical = [r for r in risk_details if r.severity == RiskSeverity.CRITICAL]
    high = [r for r in risk_details if r.severity == RiskSeverity.HIGH]
    moderate = [r for r in risk_details if r.severity == RiskSeverity.MODERATE]
    elevated = critical + high

    score = BASE_SCORE - CRITICAL_PENALTY * len(critical) - HIGH_PENALTY * len(high) - MODERATE_PENALTY * len(moderate)
    score, status = score_and_status(score, config)

    named = elevated[:thresholds.max_high_risk_areas]
    more = len(elevated) - len(named)
    more_text = f" (+{more} more)" if more > 0 else ""

    if status == DiagnosticStatus.GREEN:
        if elevated:
            worst_named = named[0]
            key_finding = (
                f"Protection is adequate overall; watch {worst_named.label} "
                f"({worst_named.score}/{PROTECTION_SCORE_MAX}). {worst_named.mitigation}"
            )
        else:
            key_finding = f"Portfolio shows adequate protection across all six risk categories. {PROTECTION_EDUCATION}"
    elif len(critical) >= 2:
        key_finding = f"CRITICAL vulnerabilities in {_join_labels(named)}{more_text}. {PROTECTION_EDUCATION}"
    elif len(critical) == 1:
        risk = critical[0]
        key_finding = f"CRITICAL: {risk.label} ({risk.score}/{PROTECTION_SCORE_MAX}). {risk.mitigation}"
    elif len(high) >= 2:
        key_finding = f"Elevated risk in {_join_labels(named)}{more_text}. {PROTECTION_EDUCATION}"
    elif len(high) == 1:
        risk = high[0]
        key_finding = f"Elevated {risk.label} ({risk.score}/{PROTECTION_SCORE_MAX}). {risk.description}"
    else:
        key_finding = f"Several moderate risk exposures add up; none is individually severe. {PROTECTION_EDUCATION}"

    worst = max(risk_details, key=lambda r: r.score)
    logger.debug(f"Protection: {len(critical)} critical, {len(high)} high, {len(moderate)} moderate -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        f"{len(critical)} critical, {len(high)} elevated risks "
        f"(worst: {worst.label} {worst.score}/{PROTECTION_SCORE_MAX})",
        {
            'risk_details': [r.to_dict() for r in risk_details],
            'stock_weight': weights.stocks,
            'bond_weight': weights.bonds,
            'commodity_weight': weights.commodities,
            'cash_weight': weights.cash,
            'intl_weight': weights.international,
            'high_risk_threshold': thresholds.high_risk_threshold,
            'critical_count': len(critical),
            'high_count': len(high),
            'moderate_count': len(moderate),
        },
    )
