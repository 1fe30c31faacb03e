"""
Planning Gaps Diagnostic
========================
Completion of the estate / financial-planning checklist.

The base score bands on the number of completed items; every missing item
listed in planning_gaps.critical_items costs an extra 15 points on top.
"""

from portfolio_diagnostics.analytics.diagnostics.common import finalize, score_and_status
from portfolio_diagnostics.config.scoring import PlanningGapThresholds, ScoringConfig
from portfolio_diagnostics.models.portfolio import (
    DiagnosticResult,
    DiagnosticStatus,
    PLANNING_ITEM_NAMES,
    PlanningChecklist,
)
from portfolio_diagnostics.utils.formatting import pluralize, safe_divide
from portfolio_diagnostics.utils.logger import get_logger

logger = get_logger(__name__)

GREEN_BAND_BASE = 70.0
YELLOW_BAND_BASE = 40.0
BAND_RANGE = 30.0
CRITICAL_ITEM_PENALTY = 15.0

ITEMS_NAMED = 2


def completion_score(completed: int, total: int, thresholds: PlanningGapThresholds) -> float:
    green_min = thresholds.green_min_complete
    yellow_min = thresholds.yellow_min_complete
    if completed >= green_min:
        # All items required for green: a complete checklist is the top of the band
        return GREEN_BAND_BASE + safe_divide(completed - green_min, total - green_min, default=1.0) * BAND_RANGE
    if completed >= yellow_min:
        return YELLOW_BAND_BASE + safe_divide(completed - yellow_min, green_min - yellow_min) * BAND_RANGE
    return safe_divide(completed, yellow_min) * YELLOW_BAND_BASE


def analyze_planning_gaps(checklist: PlanningChecklist, config: ScoringConfig) -> DiagnosticResult:
    thresholds = config.planning_gaps
    items = list(checklist.items())
    completed = checklist.completed_count
    total = checklist.total_count

    missing = [PLANNING_ITEM_NAMES[key] for key, done in items if not done]
    critical_missing = [
        PLANNING_ITEM_NAMES[key] for key, done in items
        if not done and key in thresholds.critical_items
    ]

    score = completion_score(completed, total, thresholds) - CRITICAL_ITEM_PENALTY * len(critical_missing)
    score, status = score_and_status(score, config)

    if completed == total:
        key_finding = "Financial plan is comprehensive, all planning items complete"
    elif status == DiagnosticStatus.GREEN:
        kind = "" if critical_missing else "minor "
        key_finding = (
            f"Most planning items complete, {len(missing)} {kind}"
            f"{pluralize(len(missing), 'item')} remaining"
        )
    elif critical_missing:
        extra = len(critical_missing) - ITEMS_NAMED
        more = f" (+{extra} more)" if extra > 0 else ""
        key_finding = f"Critical gaps: {', '.join(critical_missing[:ITEMS_NAMED])}{more}"
    else:
        key_finding = f"Planning gaps remain: {', '.join(missing[:ITEMS_NAMED])}"

    logger.debug(f"Planning: {completed}/{total} complete, {len(critical_missing)} critical missing -> {score:.1f}")

    return finalize(
        score,
        config,
        key_finding,
        f"Planning items: {completed}/{total} complete",
        {
            'checklist': dict(items),
            'completed': completed,
            'total': total,
            'completion_rate': safe_divide(completed, total),
            'missing_items': missing,
            'critical_missing': critical_missing,
            'critical_items': list(thresholds.critical_items),
        },
    )
