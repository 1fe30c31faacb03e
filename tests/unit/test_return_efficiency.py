from dataclasses import replace

import pytest

from portfolio_diagnostics.analytics.diagnostics.return_efficiency import (
    absolute_band,
    analyze_return_efficiency,
    holding_label,
)
from portfolio_diagnostics.analytics.metrics import calculate_portfolio_metrics
from portfolio_diagnostics.config.scoring import SharpeThresholds, StatusThresholds
from portfolio_diagnostics.models.portfolio import AssetClass, DiagnosticStatus

from tests.fixtures.sample_portfolios import make_holding


def _analyze(holdings, config):
    return analyze_return_efficiency(holdings, calculate_portfolio_metrics(holdings), config)


@pytest.mark.parametrize("pct_of_target,label", [
    (1.2, 'GOOD'),
    (0.9, 'GOOD'),
    (0.75, 'BELOW TARGET'),
    (0.7, 'BELOW TARGET'),
    (0.69, 'POOR'),
    (-0.5, 'POOR'),
])
def test_holding_label(pct_of_target, label):
    assert holding_label(pct_of_target, SharpeThresholds()) == label


@pytest.mark.parametrize("sharpe,band", [(0.6, 'good'), (0.5, 'good'), (0.4, 'neutral'), (0.3, 'weak')])
def test_absolute_band(sharpe, band):
    assert absolute_band(sharpe, SharpeThresholds()) == band


def test_single_equity_holding_below_target(single, config):
    result = _analyze(single, config)
    assert result.score == pytest.approx(0.06 / 0.165 / 0.5 * 100 * 0.85)
    assert result.status == DiagnosticStatus.YELLOW
    assert "below optimal" in result.key_finding
    assert result.headline_metric == "Sharpe: 0.36 (73% of 0.50 target)"
    assert result.details['pct_of_target'] == 73


def test_vti_uses_ticker_estimate(single, config):
    details = _analyze(single, config).details
    vti = details['holding_efficiency'][0]
    assert vti['uses_ticker_data'] is True
    assert vti['sharpe'] == pytest.approx((0.092 - 0.03) / 0.17)
    assert vti['contribution'] == 'BELOW TARGET'
    assert details['data_source_note'] is None


def test_all_bonds_is_poor(config):
    result = _analyze([make_holding("BNDX", 10000, AssetClass.BONDS)], config)
    assert result.score == pytest.approx(21.25)
    assert result.status == DiagnosticStatus.RED
    assert "POOR" in result.key_finding
    assert result.details['data_source_note'] == (
        "0 holdings use ticker-specific estimates; 1 use asset class averages."
    )


def test_meeting_target_earns_bonus(single, config):
    lowered = replace(config, sharpe=replace(config.sharpe, portfolio_target=0.30))
    result = _analyze(single, lowered)
    assert result.score == pytest.approx(85 + (0.06 / 0.165 - 0.30) * 30)
    assert result.status == DiagnosticStatus.GREEN
    assert "meets 0.30 target" in result.key_finding


def test_meeting_target_below_a_strict_green_cutoff(single, config):
    strict = replace(
        config,
        sharpe=replace(config.sharpe, portfolio_target=0.30),
        status_thresholds=StatusThresholds(green_min=90, yellow_min=40),
    )
    result = _analyze(single, strict)
    assert result.status == DiagnosticStatus.YELLOW
    assert "meets" not in result.key_finding
    assert result.key_finding.startswith("Portfolio Sharpe 0.36 is at the 0.30 target, but the margin is thinner")
