# src/emicalc/api/schemas.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel
from pydantic import ConfigDict

from emicalc.domain.loan import LoanQuery


# --------------------------------------------
# Gateway (public)
# --------------------------------------------

Status = Literal["ok", "nok"]


class EMIRequest(BaseModel):
    """
    Typed form of the POST /emi-calculator body, used by the CLI.

    The endpoint itself reads the body as a loose mapping so that the
    validator can report bad values with its own messages.
    """
    model_config = ConfigDict(extra="allow")

    total_amount: float = 0.0
    down_payment: float = 0.0
    interest_rate: float = 0.0
    property_tax: float = 0.0
    property_transfer_tax: float = 0.0
    years_expected_to_live: int = 0


class EMIResponse(BaseModel):
    status: Status
    monthly_emi: float | None = None
    error: str | None = None


# --------------------------------------------
# Calculation service (internal)
# --------------------------------------------

class CalculationRequest(BaseModel):
    """
    Wire form of a LoanQuery. Carries no validation rules of its own:
    the gateway has already enforced them.
    """
    model_config = ConfigDict(extra="ignore")

    total_amount: float
    down_payment: float
    interest_rate: float
    property_tax: float
    property_transfer_tax: float
    years_expected_to_live: int

    @classmethod
    def from_query(cls, query: LoanQuery) -> "CalculationRequest":
        return cls(
            total_amount=query.total_amount,
            down_payment=query.down_payment,
            interest_rate=query.interest_rate_annual_percent,
            property_tax=query.property_tax_annual,
            property_transfer_tax=query.property_transfer_tax_one_time,
            years_expected_to_live=query.term_years,
        )

    def to_query(self) -> LoanQuery:
        return LoanQuery(
            total_amount=self.total_amount,
            down_payment=self.down_payment,
            interest_rate_annual_percent=self.interest_rate,
            property_tax_annual=self.property_tax,
            property_transfer_tax_one_time=self.property_transfer_tax,
            term_years=self.years_expected_to_live,
        )


class CalculationResponse(BaseModel):
    monthly_emi: float
