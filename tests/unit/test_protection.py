import pytest

from portfolio_diagnostics.analytics.diagnostics.protection import (
    ExposureWeights,
    analyze_protection,
    score_protection_risks,
    severity_for,
)
from portfolio_diagnostics.models.portfolio import AssetClass, DiagnosticStatus, RiskSeverity

from tests.fixtures.sample_portfolios import make_holding


@pytest.mark.parametrize("sub_score,expected", [
    (0, RiskSeverity.LOW),
    (3, RiskSeverity.LOW),
    (4, RiskSeverity.MODERATE),
    (5, RiskSeverity.MODERATE),
    (7, RiskSeverity.HIGH),
    (8, RiskSeverity.CRITICAL),
    (10, RiskSeverity.CRITICAL),
])
def test_severity_buckets(sub_score, expected):
    assert severity_for(sub_score, 7.0) == expected


def test_sub_scores_for_all_equity():
    weights = ExposureWeights(stocks=1.0, bonds=0.0, commodities=0.0, cash=0.0, international=0.0)
    scores = {r.name: r.score for r in score_protection_risks(weights, 7.0)}
    assert scores == {
        'inflation_risk': 5,
        'interest_rate_risk': 0,
        'market_crash_risk': 10,
        'liquidity_risk': 5,
        'concentration_risk': 6,
        'sequence_risk': 7,
    }


def test_heavy_bonds_add_rate_penalty():
    weights = ExposureWeights(stocks=0.4, bonds=0.6, commodities=0.0, cash=0.0, international=0.0)
    scores = {r.name: r.score for r in score_protection_risks(weights, 7.0)}
    assert scores['interest_rate_risk'] == 7  # 4.8 + 2, rounded


def test_single_equity_holding(single, config):
    result = analyze_protection(single, config)
    assert result.score == 35.0
    assert result.status == DiagnosticStatus.RED
    assert result.details['critical_count'] == 1
    assert result.details['high_count'] == 2
    assert result.details['moderate_count'] == 2
    assert result.key_finding.startswith("CRITICAL: Market Crash Risk (10/10)")
    assert result.headline_metric == "1 critical, 2 elevated risks (worst: Market Crash Risk 10/10)"


def test_defensive_mix_is_adequate(defensive, config):
    result = analyze_protection(defensive, config)
    assert result.score == 85.0
    assert result.status == DiagnosticStatus.GREEN
    assert "adequate protection across all six risk categories" in result.key_finding


def test_all_cash_is_exposed_to_inflation(config):
    result = analyze_protection([make_holding("SWVXX", 10000, AssetClass.CASH)], config)
    assert result.score == 60.0
    assert result.status == DiagnosticStatus.YELLOW
    assert result.key_finding.startswith("CRITICAL: Inflation Risk (10/10)")


def test_risk_details_are_serializable(single, config):
    details = analyze_protection(single, config).details['risk_details']
    assert len(details) == 6
    assert details[2]['severity'] == "CRITICAL"
    assert details[2]['max_score'] == 10
