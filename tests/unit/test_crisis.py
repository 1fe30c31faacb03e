import pytest

from portfolio_diagnostics.analytics.diagnostics.crisis import (
    BenchmarkComparison,
    analyze_crisis_resilience,
    classify_vs_benchmark,
    severity_score,
)
from portfolio_diagnostics.config.scoring import CrisisResilienceThresholds
from portfolio_diagnostics.data.definitions.crisis import get_crisis_scenarios
from portfolio_diagnostics.models.portfolio import DiagnosticStatus

SP_AVERAGE = -(0.45 + 0.55 + 0.34) / 3


@pytest.mark.parametrize("avg_impact,expected", [
    (-0.30, BenchmarkComparison.BETTER),
    (-0.45, BenchmarkComparison.SIMILAR),
    (-0.50, BenchmarkComparison.SIMILAR),
    (-0.60, BenchmarkComparison.WORSE),
])
def test_classify_vs_benchmark(avg_impact, expected):
    assert classify_vs_benchmark(avg_impact, -0.45, CrisisResilienceThresholds()) == expected


@pytest.mark.parametrize("avg_loss,expected", [
    (0.20, 88.0),
    (0.30, 72.5),
    (0.40, 50.0),
    (0.50, 35.0),
    (1.00, 0.0),
])
def test_severity_score(avg_loss, expected):
    assert severity_score(avg_loss) == pytest.approx(expected)


def test_scenarios_are_copies():
    scenarios = get_crisis_scenarios()
    scenarios.clear()
    assert len(get_crisis_scenarios()) == 3


def test_all_equity_matches_sp500(single, config):
    result = analyze_crisis_resilience(single, config)
    assert result.details['avg_impact'] == pytest.approx(SP_AVERAGE)
    assert result.details['comparison'] == 'SIMILAR'
    assert result.score == pytest.approx(40 + (0.45 + SP_AVERAGE) * 200)
    assert result.status == DiagnosticStatus.YELLOW
    assert "performs similarly to S&P 500" in result.key_finding
    assert result.headline_metric == "2008 Financial Crisis: -55% vs S&P -55%"


def test_defensive_mix_beats_sp500(defensive, config):
    result = analyze_crisis_resilience(defensive, config)
    avg_impact = (-0.184 - 0.248 - 0.1568) / 3
    assert result.details['avg_impact'] == pytest.approx(avg_impact)
    assert result.details['comparison'] == 'BETTER'
    assert result.score == pytest.approx(85 + (0.25 + avg_impact) * 60 + 10)
    assert result.status == DiagnosticStatus.GREEN
    assert "loses LESS than S&P 500" in result.key_finding
