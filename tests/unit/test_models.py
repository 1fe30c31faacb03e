"""
Tests for the data model: derived properties, dict parsing, serialization.
"""

import json

import pytest

from portfolio_diagnostics.models.portfolio import (
    DIAGNOSTIC_CATEGORIES,
    AccountType,
    AssetClass,
    Category,
    ClientInfo,
    DiagnosticResult,
    DiagnosticStatus,
    Holding,
    LifetimeIncomeInputs,
    PlanningChecklist,
    PortfolioAnalysis,
    PortfolioMetrics,
    Recommendation,
    RiskTolerance,
)


def test_enums_are_string_valued():
    assert AssetClass.US_STOCKS == "US Stocks"
    assert AccountType.TAX_ADVANTAGED == "Tax-Advantaged"
    assert RiskTolerance("Aggressive") is RiskTolerance.AGGRESSIVE
    assert DiagnosticStatus.GREEN == "GREEN"


def test_diagnostic_categories_are_the_ten_scored():
    assert len(DIAGNOSTIC_CATEGORIES) == 10
    assert Category.LIFETIME_INCOME_SECURITY not in DIAGNOSTIC_CATEGORIES
    assert DIAGNOSTIC_CATEGORIES[0] == Category.RISK_MANAGEMENT
    assert DIAGNOSTIC_CATEGORIES[-1] == Category.PLANNING_GAPS


def test_holding_derived_values():
    h = Holding("VTI", "Total Market", shares=10, current_price=90.0, cost_basis=100.0)
    assert h.value == pytest.approx(900.0)
    assert h.cost_value == pytest.approx(1000.0)
    assert h.unrealized_gain == pytest.approx(-100.0)


def test_holding_from_dict_accepts_camel_case():
    h = Holding.from_dict({
        "ticker": "bnd",
        "name": "Total Bond",
        "shares": "50",
        "currentPrice": 72.5,
        "costBasis": 75,
        "accountType": "Tax-Advantaged",
        "assetClass": "Bonds",
        "expenseRatio": 0.0003,
    })
    assert h.ticker == "BND"
    assert h.shares == 50.0
    assert h.account_type is AccountType.TAX_ADVANTAGED
    assert h.asset_class is AssetClass.BONDS
    assert h.expense_ratio == pytest.approx(0.0003)


def test_holding_from_dict_keeps_missing_expense_ratio_unknown():
    h = Holding.from_dict({"ticker": "XYZ", "shares": 1, "current_price": 10, "cost_basis": 10})
    assert h.expense_ratio is None
    assert h.asset_class is AssetClass.OTHER
    assert h.account_type is AccountType.TAXABLE


def test_holding_from_dict_rejects_unknown_asset_class():
    with pytest.raises(ValueError):
        Holding.from_dict({"ticker": "XYZ", "assetClass": "Crypto"})


def test_client_info_from_dict():
    info = ClientInfo.from_dict({"riskTolerance": "Conservative", "targetAmount": 500000, "yearsToGoal": 12})
    assert info.risk_tolerance is RiskTolerance.CONSERVATIVE
    assert info.target_amount == 500000.0
    assert info.years_to_goal == 12.0
    assert ClientInfo.from_dict({}).risk_tolerance is RiskTolerance.MODERATE


def test_planning_checklist_items_order_and_counts():
    checklist = PlanningChecklist(will_trust=True, emergency_fund=True)
    keys = [key for key, _ in checklist.items()]
    assert keys == [
        "will_trust", "beneficiary_review", "poa_directives", "digital_asset_plan",
        "insurance_coverage", "emergency_fund", "withdrawal_strategy",
    ]
    assert checklist.completed_count == 2
    assert checklist.total_count == 7
    assert PlanningChecklist.all_complete().completed_count == 7


def test_planning_checklist_from_dict_camel_case():
    checklist = PlanningChecklist.from_dict({"willTrust": True, "poa_directives": True})
    assert checklist.will_trust
    assert checklist.poa_directives
    assert not checklist.emergency_fund


def test_lifetime_income_inputs():
    inputs = LifetimeIncomeInputs.from_dict({
        "coreLivingExpensesMonthly": 4000,
        "guaranteedSources": [
            {"sourceName": "Social Security", "monthlyAmount": 2500, "guaranteedForLife": True},
            {"sourceName": "Term annuity", "monthlyAmount": 1000, "guaranteedForLife": False},
        ],
    })
    assert inputs.has_data
    assert inputs.guaranteed_lifetime_income_monthly == pytest.approx(2500.0)
    assert not LifetimeIncomeInputs().has_data


def test_portfolio_analysis_to_json():
    result = DiagnosticResult(DiagnosticStatus.YELLOW, 50.0, "finding", "headline", {"tier": DiagnosticStatus.RED})
    analysis = PortfolioAnalysis(
        health_score=50,
        metrics=PortfolioMetrics(),
        diagnostics={Category.RISK_MANAGEMENT: result},
        recommendations=[
            Recommendation("rec-1", Category.RISK_MANAGEMENT, 1, "Title", "Description", "Impact")
        ],
    )
    data = json.loads(analysis.to_json())
    assert data["health_score"] == 50
    assert data["diagnostics"]["risk_management"]["status"] == "YELLOW"
    assert data["diagnostics"]["risk_management"]["details"]["tier"] == "RED"
    assert data["recommendations"][0]["category"] == "risk_management"
    assert data["lifetime_income_security"] is None
