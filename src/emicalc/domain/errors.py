# src/emicalc/domain/errors.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """
    Reported (returned, not raised) when raw input cannot become a LoanQuery.
    """
    message: str
    field: str | None = None

    def __str__(self) -> str:
        return self.message


class CalculationUnavailable(RuntimeError):
    """The calculation service could not be reached or gave no usable answer."""
