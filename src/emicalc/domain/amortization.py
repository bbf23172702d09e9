# src/emicalc/domain/amortization.py
import math

import numpy as np

from emicalc.domain.loan import LoanQuery, MonthlyPayment


def annuity_payment(rate_monthly: float, n_months: int, principal: float) -> float:
    r = rate_monthly
    if r == 0:
        return principal / n_months
    # (1 + r)**n - 1, kept accurate when 1 + r rounds to 1.0
    growth_minus_one = math.expm1(n_months * math.log1p(r))
    if growth_minus_one == 0:
        return principal / n_months
    return principal * r * (1 + growth_minus_one) / growth_minus_one


def to_reported_precision(amount: float) -> float:
    # float32, round-half-to-even
    return float(np.float32(amount))


def calculate(query: LoanQuery) -> MonthlyPayment:
    """
    Monthly payment for a validated query.

    The transfer tax is capitalized into the principal; the annual property
    tax is spread evenly over twelve months on top of the amortized base.
    """
    rate_monthly = query.interest_rate_annual_percent / (12 * 100)
    n_months = query.term_years * 12
    principal = (query.total_amount - query.down_payment) + query.property_transfer_tax_one_time

    base = annuity_payment(rate_monthly, n_months, principal)
    monthly = base + query.property_tax_annual / 12

    return MonthlyPayment(amount=to_reported_precision(monthly))
