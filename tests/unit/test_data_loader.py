import json

import pytest
import yaml

from portfolio_diagnostics.data.loader import load_client_file, load_holdings_file
from portfolio_diagnostics.models.portfolio import AccountType, AdviceModel, AssetClass, RiskTolerance
from portfolio_diagnostics.utils.exceptions import HoldingsFileError

HOLDINGS = [
    {"ticker": "vti", "name": "Total Market", "shares": 100, "currentPrice": 250.0,
     "costBasis": 200.0, "assetClass": "US Stocks", "expenseRatio": 0.0003},
    {"ticker": "BND", "shares": 50, "current_price": 72.5, "cost_basis": 80.0,
     "account_type": "Tax-Advantaged", "asset_class": "Bonds"},
]


def test_json_list(tmp_path):
    path = tmp_path / "holdings.json"
    path.write_text(json.dumps(HOLDINGS))
    holdings = load_holdings_file(str(path))

    assert [h.ticker for h in holdings] == ["VTI", "BND"]
    assert holdings[0].value == pytest.approx(25000.0)
    assert holdings[0].expense_ratio == pytest.approx(0.0003)
    assert holdings[1].expense_ratio is None
    assert holdings[1].account_type == AccountType.TAX_ADVANTAGED
    assert holdings[1].name == "BND"


def test_yaml_mapping_with_holdings_key(tmp_path):
    path = tmp_path / "portfolio.yaml"
    path.write_text(yaml.safe_dump({"holdings": HOLDINGS}))
    holdings = load_holdings_file(str(path))
    assert len(holdings) == 2
    assert holdings[1].asset_class == AssetClass.BONDS


def test_empty_yaml_is_empty_portfolio(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_holdings_file(str(path)) == []


def test_csv_with_blank_cells(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text(
        "ticker,name,shares,current_price,cost_basis,account_type,asset_class,expense_ratio\n"
        "VTI,Total Market,100,250,200,Taxable,US Stocks,0.0003\n"
        "GLD,Gold,10,180,190,Tax-Advantaged,Commodities,\n"
    )
    holdings = load_holdings_file(str(path))

    assert [h.ticker for h in holdings] == ["VTI", "GLD"]
    assert holdings[0].shares == 100.0
    assert holdings[1].expense_ratio is None
    assert holdings[1].asset_class == AssetClass.COMMODITIES
    assert holdings[1].unrealized_gain == pytest.approx(-100.0)


def test_missing_file(tmp_path):
    with pytest.raises(HoldingsFileError, match="file not found"):
        load_holdings_file(str(tmp_path / "nope.json"))


def test_unsupported_format(tmp_path):
    path = tmp_path / "holdings.xlsx"
    path.write_text("")
    with pytest.raises(HoldingsFileError, match="unsupported format"):
        load_holdings_file(str(path))


def test_malformed_json(tmp_path):
    path = tmp_path / "holdings.json"
    path.write_text("[{")
    with pytest.raises(HoldingsFileError, match="parse error") as excinfo:
        load_holdings_file(str(path))
    assert excinfo.value.__cause__ is not None


def test_bad_record_reports_row(tmp_path):
    path = tmp_path / "holdings.json"
    bad = dict(HOLDINGS[1], asset_class="Crypto")
    path.write_text(json.dumps([HOLDINGS[0], bad]))
    with pytest.raises(HoldingsFileError) as excinfo:
        load_holdings_file(str(path))
    assert excinfo.value.row == 2
    assert "Crypto" in str(excinfo.value)


def test_non_mapping_record(tmp_path):
    path = tmp_path / "holdings.json"
    path.write_text(json.dumps(["VTI"]))
    with pytest.raises(HoldingsFileError, match="mapping") as excinfo:
        load_holdings_file(str(path))
    assert excinfo.value.row == 1


def test_client_file(tmp_path):
    path = tmp_path / "client.yaml"
    path.write_text(yaml.safe_dump({
        "client": {"riskTolerance": "Conservative", "targetAmount": 500000, "yearsToGoal": 12},
        "planning_checklist": {"willTrust": True, "emergency_fund": True},
        "lifetimeIncome": {
            "coreLivingExpensesMonthly": 4000,
            "guaranteedSources": [{"sourceName": "Social Security", "monthlyAmount": 2500}],
        },
        "advice_model": "advisor-passive",
        "advisorFee": 0.008,
    }))
    client = load_client_file(str(path))

    assert client.client_info.risk_tolerance == RiskTolerance.CONSERVATIVE
    assert client.client_info.target_amount == 500000.0
    assert client.planning_checklist.completed_count == 2
    assert client.lifetime_income.guaranteed_lifetime_income_monthly == 2500.0
    assert client.advice_model == AdviceModel.ADVISOR_PASSIVE
    assert client.advisor_fee == pytest.approx(0.008)


def test_client_file_defaults(tmp_path):
    path = tmp_path / "client.json"
    path.write_text("{}")
    client = load_client_file(str(path))
    assert client.client_info.risk_tolerance == RiskTolerance.MODERATE
    assert client.planning_checklist.completed_count == 0
    assert client.lifetime_income is None
    assert client.advice_model is None


def test_client_file_bad_value(tmp_path):
    path = tmp_path / "client.json"
    path.write_text(json.dumps({"client": {"risk_tolerance": "Reckless"}}))
    with pytest.raises(HoldingsFileError, match="Reckless"):
        load_client_file(str(path))


def test_csv_keeps_na_like_tickers(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_text(
        "ticker,shares,current_price,cost_basis,asset_class\n"
        "NA,10,50,50,US Stocks\n"
        "NULL,5,20,20,US Stocks\n"
    )
    holdings = load_holdings_file(str(path))
    assert [h.ticker for h in holdings] == ["NA", "NULL"]
    assert holdings[0].value == pytest.approx(500.0)


def test_non_utf8_csv_wrapped(tmp_path):
    path = tmp_path / "holdings.csv"
    path.write_bytes(b"ticker,shares,current_price,cost_basis\n\xff\xfe,1,1,1\n")
    with pytest.raises(HoldingsFileError, match="Cannot load holdings"):
        load_holdings_file(str(path))
