# src/emicalc/domain/loan.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LoanQuery:
    """
    A validated request for one monthly payment figure.

    Built once per request by the validator and never mutated afterwards.
    """
    total_amount: float                     # purchase price, currency units
    down_payment: float                     # paid up front, <= total_amount
    interest_rate_annual_percent: float     # e.g. 6.5 for 6.5% APR
    property_tax_annual: float              # recurring, any sign accepted
    property_transfer_tax_one_time: float   # capitalized into principal
    term_years: int                         # amortization period, >= 1


@dataclass(frozen=True)
class MonthlyPayment:
    amount: float
