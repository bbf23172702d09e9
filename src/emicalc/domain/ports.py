# src/emicalc/domain/ports.py
from __future__ import annotations

from typing import Protocol

from emicalc.domain.loan import LoanQuery, MonthlyPayment


# ----------------------------
# Calculation backend
# ----------------------------

class CalculatorClient(Protocol):
    def calculate(self, query: LoanQuery) -> MonthlyPayment:
        ...
