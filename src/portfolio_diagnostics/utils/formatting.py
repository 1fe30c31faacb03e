"""
Numeric & Text Helpers
======================
Guarded arithmetic and display formatting shared by every analyzer.
"""

import math


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Quotient, or `default` when the denominator is zero (never NaN/inf)."""
    if denominator == 0:
        return default
    return numerator / denominator


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clamp_score(score: float) -> float:
    """Diagnostic scores always live in [0, 100]."""
    return float(clamp(score, 0.0, 100.0))


def round_half_up(value: float) -> int:
    """Round .5 away from the floor (2.5 -> 3, -2.5 -> -2), platform independent."""
    return int(math.floor(value + 0.5))


def format_pct(value: float, decimals: int = 1) -> str:
    """0.1234 -> '12.3' (caller appends the % sign)."""
    return f"{value * 100:.{decimals}f}"


def format_currency(value: float) -> str:
    """12345.6 -> '$12,346'."""
    return f"${value:,.0f}"


def pluralize(count: int, singular: str, plural: str = None) -> str:
    if count == 1:
        return singular
    return plural or f"{singular}s"
