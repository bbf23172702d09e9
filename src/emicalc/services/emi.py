# src/emicalc/services/emi.py
from __future__ import annotations

from typing import Any, Mapping

from emicalc.adapters.logging_utils import get_logger
from emicalc.domain.errors import ValidationError
from emicalc.domain.loan import MonthlyPayment
from emicalc.domain.ports import CalculatorClient
from emicalc.services.validation import validate_request

logger = get_logger(__name__)


def request_monthly_emi(
    raw: Mapping[str, Any],
    calculator: CalculatorClient,
) -> MonthlyPayment | ValidationError:
    """
    Validate `raw` and, if it holds up, hand the query to `calculator`.

    A ValidationError is returned as-is and the calculator is never called.
    CalculationUnavailable from the calculator propagates to the caller.
    """
    result = validate_request(raw)
    if isinstance(result, ValidationError):
        logger.info(
            "emi_validation_failed",
            extra={"context": {"field": result.field, "error": result.message}},
        )
        return result

    payment = calculator.calculate(result)
    logger.debug(
        "emi_calculated",
        extra={"context": {"term_years": result.term_years, "monthly_emi": payment.amount}},
    )
    return payment
