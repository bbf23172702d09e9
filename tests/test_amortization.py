import dataclasses
import math

import pytest

from emicalc.domain.amortization import annuity_payment, calculate, to_reported_precision


def test_reference_scenario_monthly_emi(base_query):
    """
    r = 6 / 1200 = 0.005, n = 360, P = 240000
    base ~= 1438.92, plus 3600 / 12 = 300
    """
    payment = calculate(base_query)
    assert payment.amount == pytest.approx(1738.92, abs=0.01)


def test_annuity_payment_matches_closed_form():
    r = 0.005
    n = 360
    growth = (1 + r) ** n
    expected = 240_000.0 * r * growth / (growth - 1)

    assert annuity_payment(r, n, 240_000.0) == pytest.approx(expected)
    assert annuity_payment(r, n, 240_000.0) == pytest.approx(1438.92, abs=0.01)


def test_annuity_payment_zero_rate_is_straight_line():
    assert annuity_payment(0.0, 120, 120_000.0) == pytest.approx(1000.0)


@pytest.mark.parametrize(
    "total, down, transfer, years, tax",
    [
        (300_000.0, 60_000.0, 0.0, 30, 3600.0),
        (120_000.0, 0.0, 0.0, 10, 0.0),
        (250_000.0, 50_000.0, 4_000.0, 15, 2400.0),
        (90_000.0, 90_000.0, 1_500.0, 5, -1200.0),
    ],
)
def test_zero_rate_is_principal_over_months_plus_tax(base_query, total, down, transfer, years, tax):
    query = dataclasses.replace(
        base_query,
        total_amount=total,
        down_payment=down,
        interest_rate_annual_percent=0.0,
        property_tax_annual=tax,
        property_transfer_tax_one_time=transfer,
        term_years=years,
    )

    expected = (total - down + transfer) / (years * 12) + tax / 12

    payment = calculate(query)
    assert math.isfinite(payment.amount)
    assert payment.amount == pytest.approx(expected, rel=1e-6, abs=1e-4)


def test_calculate_is_idempotent(base_query):
    first = calculate(base_query)
    second = calculate(base_query)
    assert first == second
    assert first.amount == second.amount


def test_higher_rate_means_higher_payment(base_query):
    rates = [0.0, 0.5, 1.0, 2.5, 4.0, 6.0, 8.0, 12.0, 20.0]
    amounts = [
        calculate(dataclasses.replace(base_query, interest_rate_annual_percent=r)).amount
        for r in rates
    ]
    assert all(a < b for a, b in zip(amounts, amounts[1:]))


def test_transfer_tax_is_capitalized_not_billed_monthly(base_query):
    with_tax = dataclasses.replace(base_query, property_transfer_tax_one_time=10_000.0)
    same_principal = dataclasses.replace(base_query, down_payment=50_000.0)

    assert calculate(with_tax).amount == pytest.approx(calculate(same_principal).amount)
    assert calculate(with_tax).amount > calculate(base_query).amount


def test_property_tax_adds_a_twelfth_per_month(base_query):
    no_tax = dataclasses.replace(base_query, property_tax_annual=0.0)
    assert calculate(base_query).amount - calculate(no_tax).amount == pytest.approx(300.0, abs=1e-3)


def test_negative_property_tax_lowers_payment(base_query):
    rebate = dataclasses.replace(base_query, property_tax_annual=-1200.0)
    assert calculate(rebate).amount == pytest.approx(calculate(base_query).amount - 400.0, abs=1e-3)


def test_result_is_reported_at_single_precision(base_query):
    amount = calculate(base_query).amount
    assert isinstance(amount, float)
    assert to_reported_precision(amount) == amount


def test_single_precision_rounds_to_nearest():
    # 2**24 + 1 is not representable in float32; ties go to the even neighbour
    assert to_reported_precision(16_777_217.0) == 16_777_216.0
    assert to_reported_precision(16_777_219.0) == 16_777_220.0
    assert to_reported_precision(0.1) == pytest.approx(0.1, rel=1e-7)
    assert to_reported_precision(0.1) != 0.1


def test_tiny_positive_rate_falls_back_to_straight_line(base_query):
    # 1 + r rounds to 1.0 in double precision
    query = dataclasses.replace(base_query, interest_rate_annual_percent=1e-16)

    payment = calculate(query)

    assert math.isfinite(payment.amount)
    assert payment.amount == pytest.approx(240_000 / 360 + 300, rel=1e-6)


def test_annuity_payment_small_rate_is_close_to_straight_line():
    assert annuity_payment(1e-18, 360, 240_000.0) == pytest.approx(240_000.0 / 360)
    assert annuity_payment(1e-9, 360, 240_000.0) == pytest.approx(240_000.0 / 360, rel=1e-6)
