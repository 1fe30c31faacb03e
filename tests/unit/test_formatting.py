"""
Tests for the numeric and text helpers.
"""

import math

from portfolio_diagnostics.utils.formatting import (
    clamp_score,
    format_currency,
    format_pct,
    pluralize,
    round_half_up,
    safe_divide,
)


def test_safe_divide_guards_zero_denominator():
    assert safe_divide(1.0, 0.0) == 0.0
    assert safe_divide(1.0, 0.0, default=1.0) == 1.0
    assert safe_divide(3.0, 2.0) == 1.5
    assert not math.isnan(safe_divide(0.0, 0.0))


def test_clamp_score_bounds():
    assert clamp_score(-20) == 0.0
    assert clamp_score(135.5) == 100.0
    assert clamp_score(42) == 42.0
    assert isinstance(clamp_score(42), float)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(-2.5) == -2


def test_display_formatting():
    assert format_pct(0.1234) == "12.3"
    assert format_pct(0.10, 0) == "10"
    assert format_currency(12345.6) == "$12,346"
    assert pluralize(1, "item") == "item"
    assert pluralize(3, "item") == "items"
    assert pluralize(2, "is", "are") == "are"
