import pytest

from portfolio_diagnostics.config.scoring import DEFAULT_SCORING_CONFIG
from portfolio_diagnostics.models.portfolio import ClientInfo, PlanningChecklist, RiskTolerance

from tests.fixtures.sample_portfolios import (
    balanced_holdings,
    concentrated_holdings,
    defensive_mix,
    single_holding,
    tax_loss_holdings,
)


@pytest.fixture
def config():
    return DEFAULT_SCORING_CONFIG


@pytest.fixture
def client():
    return ClientInfo(risk_tolerance=RiskTolerance.MODERATE)


@pytest.fixture
def empty_checklist():
    return PlanningChecklist()


@pytest.fixture
def complete_checklist():
    return PlanningChecklist.all_complete()


@pytest.fixture
def single():
    return single_holding()


@pytest.fixture
def balanced():
    return balanced_holdings()


@pytest.fixture
def concentrated():
    return concentrated_holdings(0.95)


@pytest.fixture
def defensive():
    return defensive_mix()


@pytest.fixture
def tax_losses():
    return tax_loss_holdings()
