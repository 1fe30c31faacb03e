"""
Action Plan
===========
Merge recommendation lists from several sources (main list, per-card
suggestions) into one short plan.
"""

from typing import Dict, Iterable, List

from portfolio_diagnostics.models.portfolio import Category, Recommendation

MAX_ACTION_ITEMS = 6


def build_action_plan(
    recommendation_lists: Iterable[Iterable[Recommendation]],
    max_items: int = MAX_ACTION_ITEMS,
) -> List[Recommendation]:
    """
    One item per category, most urgent first.

    Within a category the lowest priority number survives (first seen on a
    tie). The result is sorted by priority, then by longer impact text, and
    capped at `max_items`.
    """
    best: Dict[Category, Recommendation] = {}
    for recommendations in recommendation_lists:
        for rec in recommendations:
            current = best.get(rec.category)
            if current is None or rec.priority < current.priority:
                best[rec.category] = rec

    ordered = sorted(best.values(), key=lambda r: (r.priority, -len(r.impact or '')))
    return ordered[:max_items]
