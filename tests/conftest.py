# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from emicalc.adapters.calculator_local import InProcessCalculatorClient
from emicalc.api.calculator_service import create_calculator_app
from emicalc.api.gateway import create_gateway_app
from emicalc.domain.loan import LoanQuery


@pytest.fixture(scope="session")
def client():
    # gateway wired to the in-process calculator; no network involved
    return TestClient(create_gateway_app(calculator=InProcessCalculatorClient()))


@pytest.fixture(scope="session")
def calculator_client():
    return TestClient(create_calculator_app())


@pytest.fixture
def base_payload():
    """300k house, 20% down, 6% APR, 3600/yr property tax, 30 years."""
    return {
        "total_amount": 300000,
        "down_payment": 60000,
        "interest_rate": 6.0,
        "property_tax": 3600,
        "property_transfer_tax": 0,
        "years_expected_to_live": 30,
    }


@pytest.fixture
def base_query():
    return LoanQuery(
        total_amount=300000.0,
        down_payment=60000.0,
        interest_rate_annual_percent=6.0,
        property_tax_annual=3600.0,
        property_transfer_tax_one_time=0.0,
        term_years=30,
    )
