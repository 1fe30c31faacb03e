"""
End-to-end properties of analyze_portfolio().
"""

import json
from dataclasses import replace

import pytest

from portfolio_diagnostics import analyze_portfolio
from portfolio_diagnostics.config.scoring import DEFAULT_SCORING_CONFIG, StatusThresholds
from portfolio_diagnostics.core.engine import health_score
from portfolio_diagnostics.models.portfolio import (
    DIAGNOSTIC_CATEGORIES,
    Category,
    ClientInfo,
    DiagnosticStatus,
    Holding,
    PlanningChecklist,
    RiskTolerance,
)
from portfolio_diagnostics.utils.exceptions import ScoringConfigError

from tests.fixtures.sample_portfolios import (
    balanced_holdings,
    concentrated_holdings,
    defensive_mix,
    income_inputs,
    moderate_client,
    single_holding,
    tax_loss_holdings,
)

PORTFOLIOS = {
    'single': single_holding,
    'balanced': balanced_holdings,
    'concentrated': concentrated_holdings,
    'defensive': defensive_mix,
    'tax_losses': tax_loss_holdings,
}


@pytest.mark.parametrize("name", sorted(PORTFOLIOS))
@pytest.mark.parametrize("risk_tolerance", list(RiskTolerance))
def test_scores_bounded_and_status_consistent(name, risk_tolerance):
    analysis = analyze_portfolio(PORTFOLIOS[name](), ClientInfo(risk_tolerance=risk_tolerance), PlanningChecklist())

    assert list(analysis.diagnostics) == list(DIAGNOSTIC_CATEGORIES)
    assert 0 <= analysis.health_score <= 100
    for result in analysis.diagnostics.values():
        assert 0.0 <= result.score <= 100.0
        assert result.status == DEFAULT_SCORING_CONFIG.status_for(result.score)
    assert len(analysis.recommendations) <= 5
    assert [r.priority for r in analysis.recommendations] == list(range(1, len(analysis.recommendations) + 1))


def test_single_holding_scenario(single, client, empty_checklist):
    analysis = analyze_portfolio(single, client, empty_checklist)
    scores = {c: r.score for c, r in analysis.diagnostics.items()}

    assert scores[Category.RISK_MANAGEMENT] == 0.0
    assert scores[Category.PROTECTION] == 35.0
    assert scores[Category.COST_ANALYSIS] == 100.0
    assert scores[Category.TAX_EFFICIENCY] == 80.0
    assert scores[Category.DIVERSIFICATION] == 0.0
    assert scores[Category.OPTIMIZATION] == 50.0
    assert scores[Category.PLANNING_GAPS] == 0.0
    assert analysis.health_score == 39
    assert analysis.recommendations[0].title == "Reduce position concentration"


def test_health_score_is_rounded_mean(single, client, empty_checklist):
    analysis = analyze_portfolio(single, client, empty_checklist)
    mean = sum(r.score for r in analysis.diagnostics.values()) / len(analysis.diagnostics)
    assert analysis.health_score == int(mean + 0.5)
    assert health_score(analysis.diagnostics) == analysis.health_score
    assert health_score({}) == 0


def test_idempotent(balanced, client, complete_checklist):
    first = analyze_portfolio(balanced, client, complete_checklist)
    second = analyze_portfolio(balanced, client, complete_checklist)
    assert first.to_dict() == second.to_dict()


def test_inputs_not_mutated(balanced, client, complete_checklist):
    before = [h.to_dict() for h in balanced]
    analyze_portfolio(balanced, client, complete_checklist)
    assert [h.to_dict() for h in balanced] == before


def test_empty_portfolio(client):
    checklist = PlanningChecklist.all_complete()
    analysis = analyze_portfolio([], client, checklist)

    assert analysis.health_score == 0
    assert analysis.recommendations == []
    assert analysis.metrics.total_value == 0.0
    for category, result in analysis.diagnostics.items():
        if category == Category.PLANNING_GAPS:
            assert result.score == 100.0
            assert result.status == DiagnosticStatus.GREEN
        else:
            assert result.score == 50.0
            assert result.status == DiagnosticStatus.YELLOW
            assert result.key_finding == "Add holdings to begin analysis"


def test_zero_value_portfolio_is_treated_as_empty(client, empty_checklist):
    holdings = [Holding("DEAD", "Delisted", shares=100, current_price=0.0, cost_basis=10.0)]
    analysis = analyze_portfolio(holdings, client, empty_checklist)
    assert analysis.health_score == 0
    assert analysis.diagnostics[Category.RISK_MANAGEMENT].key_finding == "Add holdings to begin analysis"


def test_concentrated_position_is_red(concentrated, client, empty_checklist):
    analysis = analyze_portfolio(concentrated, client, empty_checklist)
    assert analysis.diagnostics[Category.RISK_MANAGEMENT].status == DiagnosticStatus.RED


def test_complete_checklist_is_green(balanced, client, complete_checklist):
    analysis = analyze_portfolio(balanced, client, complete_checklist)
    assert analysis.diagnostics[Category.PLANNING_GAPS].status == DiagnosticStatus.GREEN


def test_lifetime_income_not_in_health_score(single, client, empty_checklist):
    without = analyze_portfolio(single, client, empty_checklist)
    with_income = analyze_portfolio(single, client, empty_checklist, lifetime_income=income_inputs(4000, 4000))

    assert Category.LIFETIME_INCOME_SECURITY not in with_income.diagnostics
    assert with_income.lifetime_income_security.status == DiagnosticStatus.GREEN
    assert without.lifetime_income_security is None
    # Secured income moves goal probability, so compare the mean of the ten cards instead of totals
    assert with_income.health_score == health_score(with_income.diagnostics)


def test_red_lifetime_income_is_recommended(balanced, client, complete_checklist):
    analysis = analyze_portfolio(balanced, client, complete_checklist, lifetime_income=income_inputs(4000, 1000))
    assert analysis.diagnostics.get(Category.LIFETIME_INCOME_SECURITY) is None
    assert analysis.recommendations[-1].category == Category.LIFETIME_INCOME_SECURITY


def test_risk_tolerance_overlay(balanced, complete_checklist):
    conservative = ClientInfo(risk_tolerance=RiskTolerance.CONSERVATIVE)
    overlaid = analyze_portfolio(balanced, conservative, complete_checklist)
    as_given = analyze_portfolio(balanced, conservative, complete_checklist, apply_risk_tolerance=False)
    moderate = analyze_portfolio(balanced, moderate_client(), complete_checklist)

    assert moderate.diagnostics[Category.RISK_MANAGEMENT].score == 100.0
    assert overlaid.diagnostics[Category.RISK_MANAGEMENT].score == 35.0
    assert as_given.diagnostics[Category.RISK_MANAGEMENT].score == 60.0


def test_inconsistent_config_is_rejected(single, client, empty_checklist):
    bad = replace(DEFAULT_SCORING_CONFIG, status_thresholds=StatusThresholds(green_min=30, yellow_min=40))
    with pytest.raises(ScoringConfigError):
        analyze_portfolio(single, client, empty_checklist, config=bad)


def test_json_export(single, client, empty_checklist):
    data = json.loads(analyze_portfolio(single, client, empty_checklist).to_json())
    assert set(data['diagnostics']) == {c.value for c in DIAGNOSTIC_CATEGORIES}
    assert data['diagnostics']['risk_management']['status'] == 'RED'
    assert data['recommendations'][0]['category'] == 'risk_management'
    assert data['lifetime_income_security'] is None
