import io

from portfolio_diagnostics.core.engine import analyze_portfolio
from portfolio_diagnostics.models.portfolio import Category, PlanningChecklist
from portfolio_diagnostics.reporting import CARD_COPY, card_title, format_report, print_report

from tests.fixtures.sample_portfolios import income_inputs, moderate_client


def test_card_copy_covers_every_category():
    assert set(CARD_COPY) == set(Category)
    assert card_title(Category.RISK_MANAGEMENT) == "Diversification Check"


def test_report_sections(single):
    analysis = analyze_portfolio(single, moderate_client(), PlanningChecklist())
    report = format_report(analysis)

    assert "📊 PORTFOLIO DIAGNOSTIC REPORT" in report
    assert f"{analysis.health_score:>12d}/100" in report
    assert "📐 VS BENCHMARKS" in report
    assert "🩺 DIAGNOSTICS" in report
    assert "✅ ACTION PLAN" in report
    assert "⚠️ EXTREME" in report
    assert "LIFETIME INCOME SECURITY" not in report
    for category in analysis.diagnostics:
        assert card_title(category) in report


def test_shock_watch_and_action_plan(single):
    analysis = analyze_portfolio(single, moderate_client(), PlanningChecklist())
    report = format_report(analysis)
    assert "🚨 SHOCK WATCH: HIGH FRAGILITY DETECTED" in report
    assert "1. Reduce position concentration" in report
    assert "Capture optimization potential" in report


def test_lifetime_income_block(single):
    analysis = analyze_portfolio(
        single, moderate_client(), PlanningChecklist(), lifetime_income=income_inputs(4000, 3000)
    )
    report = format_report(analysis, verbose=True)
    assert "LIFETIME INCOME SECURITY (not in health score)" in report
    assert "Why it matters:" in report


def test_empty_portfolio_report():
    analysis = analyze_portfolio([], moderate_client(), PlanningChecklist.all_complete())
    report = format_report(analysis)
    assert "VS BENCHMARKS" not in report
    assert "No actions needed right now." in report


def test_print_report_to_stream(single):
    analysis = analyze_portfolio(single, moderate_client(), PlanningChecklist())
    buffer = io.StringIO()
    print_report(analysis, file=buffer)
    assert buffer.getvalue().startswith("=" * 70)
