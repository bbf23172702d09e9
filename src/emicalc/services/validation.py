# src/emicalc/services/validation.py
import math
from typing import Any, Mapping

from emicalc.domain.errors import ValidationError
from emicalc.domain.loan import LoanQuery

# Wire names of the decimal fields; all default to 0.0 when omitted
DECIMAL_FIELDS = [
    "total_amount",
    "down_payment",
    "interest_rate",
    "property_tax",
    "property_transfer_tax",
]

TERM_FIELD = "years_expected_to_live"

# fields where a trailing "%" is tolerated
_PERCENT_FIELDS = {"interest_rate"}


class _BadValue(ValueError):
    def __init__(self, field_name: str) -> None:
        super().__init__(f"invalid value for {field_name}")
        self.field = field_name


def _to_num(val: Any, field_name: str) -> float:
    """
    Coerce values like:
      - 250000
      - "250000"
      - " 6.5 "
      - "6.5%"   (interest_rate only)
    into a finite float. Missing/None means 0.0.
    """
    if val is None:
        return 0.0
    if isinstance(val, bool):
        raise _BadValue(field_name)
    if isinstance(val, (int, float)):
        try:
            f = float(val)
        except OverflowError:
            # ints beyond float range
            raise _BadValue(field_name) from None
    elif isinstance(val, str):
        s = val.strip()
        if s.endswith("%") and field_name in _PERCENT_FIELDS:
            s = s[:-1].strip()
        try:
            f = float(s)
        except ValueError:
            raise _BadValue(field_name) from None
    else:
        raise _BadValue(field_name)

    if not math.isfinite(f):
        raise _BadValue(field_name)
    return f


def _to_int(val: Any, field_name: str) -> int:
    f = _to_num(val, field_name)
    if not f.is_integer():
        raise _BadValue(field_name)
    return int(f)


def validate_request(raw: Mapping[str, Any]) -> LoanQuery | ValidationError:
    """
    Turn a loosely-typed payload into a LoanQuery.

    Coercion problems are reported first. After that the domain rules run in
    a fixed order and the first one broken decides the message:

      1. total amount is zero
      2. term is not positive
      3. interest rate is negative
      4. property transfer tax is negative
      5. down payment exceeds total amount

    Only total_amount == 0 is rejected; a negative total passes through.
    Property tax may have any sign.
    """
    try:
        nums = {name: _to_num(raw.get(name), name) for name in DECIMAL_FIELDS}
        term = _to_int(raw.get(TERM_FIELD), TERM_FIELD)
    except _BadValue as e:
        return ValidationError(message=str(e), field=e.field)

    if nums["total_amount"] == 0:
        return ValidationError("total amount cannot be zero", "total_amount")

    if term <= 0:
        return ValidationError("invalid term, must be greater than zero", TERM_FIELD)

    if nums["interest_rate"] < 0:
        return ValidationError("invalid interest rate, must be ≥ 0", "interest_rate")

    if nums["property_transfer_tax"] < 0:
        return ValidationError(
            "invalid property transfer tax, must be ≥ 0", "property_transfer_tax"
        )

    if nums["down_payment"] > nums["total_amount"]:
        return ValidationError("down payment cannot exceed total amount", "down_payment")

    return LoanQuery(
        total_amount=nums["total_amount"],
        down_payment=nums["down_payment"],
        interest_rate_annual_percent=nums["interest_rate"],
        property_tax_annual=nums["property_tax"],
        property_transfer_tax_one_time=nums["property_transfer_tax"],
        term_years=term,
    )
