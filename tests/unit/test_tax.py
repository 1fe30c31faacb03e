from dataclasses import replace

import pytest

from portfolio_diagnostics.analytics.diagnostics.tax import (
    analyze_tax_efficiency,
    harvestable_losses,
    inefficient_in_taxable,
)
from portfolio_diagnostics.analytics.metrics import calculate_portfolio_metrics
from portfolio_diagnostics.config.scoring import StatusThresholds
from portfolio_diagnostics.models.portfolio import AccountType, AssetClass, DiagnosticStatus

from tests.fixtures.sample_portfolios import make_holding


def _analyze(holdings, config):
    return analyze_tax_efficiency(holdings, calculate_portfolio_metrics(holdings), config)


def test_only_taxable_losses_are_harvestable(tax_losses):
    assert harvestable_losses(tax_losses) == pytest.approx(2000.0)


def test_tax_advantaged_loss_contributes_nothing():
    holdings = [make_holding("VEA", 8000, AssetClass.INTL_STOCKS, AccountType.TAX_ADVANTAGED, cost_basis=125.0)]
    assert harvestable_losses(holdings) == 0.0


def test_harvest_bonus(tax_losses, config):
    result = _analyze(tax_losses, config)
    assert result.score == 90.0
    assert result.status == DiagnosticStatus.GREEN
    assert result.details['estimated_tax_savings'] == pytest.approx(500.0)
    assert result.key_finding == (
        "$2,000 in unrealized losses in TAXABLE accounts could be harvested for ~$500 tax savings"
    )
    assert result.headline_metric == "Harvestable losses (taxable only): $2,000"


def test_loss_candidates_flag_account_type(tax_losses, config):
    candidates = _analyze(tax_losses, config).details['loss_candidates']
    assert {c['ticker']: c['harvestable'] for c in candidates} == {"VXUS": True, "VEA": False}


def test_gain_loss_rows_losses_first(tax_losses, config):
    rows = _analyze(tax_losses, config).details['all_holdings']
    assert rows[0]['gain_loss'] == pytest.approx(-2000.0)
    assert rows[-1]['ticker'] == "VTI"
    assert rows[0]['gain_loss_pct'] == pytest.approx(-20.0)


def test_no_losses_no_misplacement(single, config):
    result = _analyze(single, config)
    assert result.score == 80.0
    assert result.status == DiagnosticStatus.GREEN
    assert result.key_finding.startswith("Tax positioning is efficient")


def test_bonds_in_taxable_account(config):
    holdings = [
        make_holding("BND", 5000, AssetClass.BONDS, AccountType.TAXABLE),
        make_holding("VTI", 5000),
    ]
    assert [h.ticker for h in inefficient_in_taxable(holdings)] == ["BND"]

    result = _analyze(holdings, config)
    assert result.score == 50.0
    assert result.status == DiagnosticStatus.YELLOW
    assert result.key_finding.startswith("1 tax-inefficient holding (bonds/commodities) is in taxable accounts")


def test_misplaced_bonds_under_relaxed_thresholds_read_as_watch_item(config):
    holdings = [
        make_holding("BND", 5000, AssetClass.BONDS, AccountType.TAXABLE),
        make_holding("VTI", 5000),
    ]
    relaxed = replace(config, status_thresholds=StatusThresholds(green_min=50, yellow_min=30))
    result = _analyze(holdings, relaxed)

    assert result.score == 50.0
    assert result.status == DiagnosticStatus.GREEN
    assert result.key_finding == (
        "Tax positioning is acceptable overall; watch 1 bond/commodity holding held in taxable accounts"
    )
    assert "consider moving" not in result.key_finding
