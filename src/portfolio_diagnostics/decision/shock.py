"""
Shock Watch
===========
Portfolio-level fragility alert built from the diagnostic cards.

    EXTREME   2+ EXTREME cards, or 2+ RED cards
    ELEVATED  1 EXTREME or RED card, or 2+ YELLOW cards with the lowest <= 60
    NORMAL    otherwise (no alert)

Card severity comes from decision.severity; the thresholds are not
repeated here.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from portfolio_diagnostics.decision.severity import severity_map
from portfolio_diagnostics.models.portfolio import (
    CardSeverity,
    Category,
    DiagnosticResult,
    DiagnosticStatus,
    ShockSeverity,
)

YELLOW_CLUSTER_MIN = 2
YELLOW_CLUSTER_SCORE_MAX = 60.0
MAX_DRIVERS = 3

SHOCK_TITLES = {
    ShockSeverity.EXTREME: "Shock Watch: High Fragility Detected",
    ShockSeverity.ELEVATED: "Shock Watch: Elevated Risk Signals",
}

SHOCK_MESSAGES = {
    ShockSeverity.EXTREME: (
        "Your portfolio shows extreme fragility signals. In a sudden market move, these can force "
        "painful decisions. Address the top drivers below first."
    ),
    ShockSeverity.ELEVATED: (
        "Your portfolio shows elevated risk signals. Consider small, high-impact adjustments to "
        "reduce downside exposure."
    ),
}


@dataclass
class ShockDriver:
    category: Category
    score: float
    key_finding: str

    def to_dict(self) -> Dict:
        return {'category': self.category.value, 'score': self.score, 'key_finding': self.key_finding}


@dataclass
class ShockAlert:
    severity: ShockSeverity
    title: str
    message: str
    drivers: List[ShockDriver] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'severity': self.severity.value,
            'title': self.title,
            'message': self.message,
            'drivers': [d.to_dict() for d in self.drivers],
        }


def shock_severity(diagnostics: Dict[Category, DiagnosticResult]) -> ShockSeverity:
    severities = severity_map(diagnostics)
    extreme_count = sum(1 for s in severities.values() if s == CardSeverity.EXTREME)
    red_count = sum(1 for r in diagnostics.values() if r.status == DiagnosticStatus.RED)
    yellow_scores = [r.score for r in diagnostics.values() if r.status == DiagnosticStatus.YELLOW]

    if extreme_count >= 2 or red_count >= 2:
        return ShockSeverity.EXTREME
    if extreme_count >= 1 or red_count >= 1:
        return ShockSeverity.ELEVATED
    if len(yellow_scores) >= YELLOW_CLUSTER_MIN and min(yellow_scores) <= YELLOW_CLUSTER_SCORE_MAX:
        return ShockSeverity.ELEVATED
    return ShockSeverity.NORMAL


def detect_shock(diagnostics: Dict[Category, DiagnosticResult]) -> Optional[ShockAlert]:
    """
    Shock alert for a set of cards, None when severity is NORMAL.

    Drivers are the lowest-scoring EXTREME cards (RED cards when none is
    EXTREME, YELLOW cards for a yellow cluster), at most three.
    """
    if not diagnostics:
        return None

    severity = shock_severity(diagnostics)
    if severity == ShockSeverity.NORMAL:
        return None

    severities = severity_map(diagnostics)
    extreme = [c for c, s in severities.items() if s == CardSeverity.EXTREME]
    red = [c for c, r in diagnostics.items() if r.status == DiagnosticStatus.RED]
    yellow = [c for c, r in diagnostics.items() if r.status == DiagnosticStatus.YELLOW]
    source = extreme or red or yellow

    ranked = sorted(source, key=lambda c: diagnostics[c].score)
    drivers = [
        ShockDriver(category=c, score=diagnostics[c].score, key_finding=diagnostics[c].key_finding)
        for c in ranked[:MAX_DRIVERS]
    ]

    return ShockAlert(
        severity=severity,
        title=SHOCK_TITLES[severity],
        message=SHOCK_MESSAGES[severity],
        drivers=drivers,
    )
