# src/emicalc/adapters/calculator_local.py
from __future__ import annotations

import math

from emicalc.domain.amortization import calculate
from emicalc.domain.errors import CalculationUnavailable
from emicalc.domain.loan import LoanQuery, MonthlyPayment
from emicalc.domain.ports import CalculatorClient


class InProcessCalculatorClient(CalculatorClient):
    """
    Runs the amortization in the caller's process.
    Used by tests and by the CLI when no calculation service is running.

    Fails the same way the calculation service does when the numbers
    overflow, so callers only ever handle CalculationUnavailable.
    """

    def calculate(self, query: LoanQuery) -> MonthlyPayment:
        try:
            payment = calculate(query)
        except ArithmeticError as e:
            raise CalculationUnavailable(f"calculation failed: {e}") from e
        if not math.isfinite(payment.amount):
            raise CalculationUnavailable("calculation failed: non-finite result")
        return payment
