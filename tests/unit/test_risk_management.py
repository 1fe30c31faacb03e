import pytest

from portfolio_diagnostics.analytics.diagnostics.risk_management import analyze_risk_management
from portfolio_diagnostics.analytics.metrics import calculate_portfolio_metrics
from portfolio_diagnostics.models.portfolio import (
    AccountType,
    AssetClass,
    ClientInfo,
    DiagnosticStatus,
    RiskTolerance,
)

from tests.fixtures.sample_portfolios import make_holding


def _analyze(holdings, config, risk_tolerance=RiskTolerance.MODERATE):
    metrics = calculate_portfolio_metrics(holdings)
    return analyze_risk_management(holdings, ClientInfo(risk_tolerance=risk_tolerance), metrics, config)


def test_single_holding_breaches_everything(single, config):
    result = _analyze(single, config)
    assert result.score == 0.0
    assert result.status == DiagnosticStatus.RED
    assert "WELL ABOVE the 10% concentration guideline" in result.key_finding
    assert result.headline_metric == "Largest Position: 100.0% (Max 10%)"
    assert result.details['is_dominant_position'] is True
    assert result.details['risk_gap'] == pytest.approx(0.375)


def test_balanced_portfolio_is_well_aligned(balanced, config):
    result = _analyze(balanced, config)
    assert result.score == 100.0
    assert result.status == DiagnosticStatus.GREEN
    assert "well-aligned" in result.key_finding
    assert result.details['has_concentration'] is False
    assert result.details['has_sector_concentration'] is False
    assert result.details['current_volatility'] == pytest.approx(0.115)


def test_ninety_five_percent_position_is_red(concentrated, config):
    result = _analyze(concentrated, config)
    assert result.status == DiagnosticStatus.RED
    assert result.details['top_positions'][0]['ticker'] == "NVDA"
    assert result.details['top_positions'][0]['weight'] == pytest.approx(0.95)
    assert result.details['top_sector'] == "Technology"


def test_dominant_position_costs_extra(config):
    # Unmapped tickers all land in the "Other" sector; aggressive target keeps the gap a warning
    below = [make_holding("AAAA", 4500), make_holding("BBBB", 3000), make_holding("CCCC", 2500)]
    above = [make_holding("AAAA", 5500), make_holding("BBBB", 2500), make_holding("CCCC", 2000)]

    not_dominant = _analyze(below, config, RiskTolerance.AGGRESSIVE)
    dominant = _analyze(above, config, RiskTolerance.AGGRESSIVE)

    assert not_dominant.score == 40.0
    assert not_dominant.status == DiagnosticStatus.YELLOW
    assert dominant.score == 0.0
    assert dominant.details['is_dominant_position'] is True
    assert not_dominant.details['top_sector'] == "Other"


def test_cross_account_exposure_in_details(config):
    holdings = [
        make_holding("VTI", 5000, account_type=AccountType.TAXABLE),
        make_holding("VTI", 1000, account_type=AccountType.TAX_ADVANTAGED),
        make_holding("BND", 4000, AssetClass.BONDS),
    ]
    exposure = _analyze(holdings, config).details['cross_account_exposure']
    assert [e['ticker'] for e in exposure] == ["VTI"]
    assert exposure[0]['combined_weight'] == pytest.approx(0.6)


def test_domestic_equity_limit_flag(single, balanced, config):
    assert _analyze(single, config).details['exceeds_country_limit'] is True
    assert _analyze(balanced, config).details['exceeds_country_limit'] is True
    assert _analyze(balanced, config).details['domestic_equity_weight'] == pytest.approx(0.6)
