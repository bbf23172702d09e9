import pytest

from emicalc.adapters.calculator_local import InProcessCalculatorClient
from emicalc.domain.errors import CalculationUnavailable, ValidationError
from emicalc.domain.loan import MonthlyPayment
from emicalc.services.emi import request_monthly_emi


def test_valid_request_yields_monthly_payment(base_payload):
    result = request_monthly_emi(base_payload, InProcessCalculatorClient())
    assert isinstance(result, MonthlyPayment)
    assert result.amount == pytest.approx(1738.92, abs=0.01)


def test_invalid_request_yields_validation_error(base_payload):
    base_payload["total_amount"] = 0
    result = request_monthly_emi(base_payload, InProcessCalculatorClient())
    assert isinstance(result, ValidationError)
    assert result.message == "total amount cannot be zero"


def test_calculator_failure_propagates(base_payload):
    class Broken:
        def calculate(self, query):
            raise CalculationUnavailable("down")

    with pytest.raises(CalculationUnavailable):
        request_monthly_emi(base_payload, Broken())
