# src/emicalc/adapters/calculator_client.py
from __future__ import annotations

import time
from dataclasses import dataclass

import requests

from emicalc.adapters.config import AppConfig, config
from emicalc.adapters.logging_utils import get_logger
from emicalc.api.schemas import CalculationRequest, CalculationResponse
from emicalc.domain.errors import CalculationUnavailable
from emicalc.domain.loan import LoanQuery, MonthlyPayment

logger = get_logger(__name__)

CALCULATE_PATH = "/calculate-emi"

# statuses worth another attempt when retries are configured
_TRANSIENT_STATUSES = (502, 503, 504)


@dataclass(frozen=True)
class HttpCalculatorClient:
    base_url: str
    timeout_s: float = 10.0
    max_retries: int = 0
    backoff_base_s: float = 0.5

    def calculate(self, query: LoanQuery) -> MonthlyPayment:
        url = self.base_url.rstrip("/") + CALCULATE_PATH
        body = CalculationRequest.from_query(query).model_dump()

        last_err: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                resp = requests.post(
                    url,
                    json=body,
                    headers={"Accept": "application/json"},
                    timeout=self.timeout_s,
                )
            except requests.RequestException as e:
                last_err = e
                self._backoff(attempt)
                continue

            if resp.status_code in _TRANSIENT_STATUSES:
                last_err = CalculationUnavailable(f"calculator HTTP {resp.status_code}")
                self._backoff(attempt)
                continue

            if resp.status_code >= 400:
                raise self._failed(
                    url,
                    attempt + 1,
                    CalculationUnavailable(f"calculator HTTP {resp.status_code}: {resp.text}"),
                )

            try:
                parsed = CalculationResponse.model_validate(resp.json())
            except ValueError as e:
                raise self._failed(
                    url,
                    attempt + 1,
                    CalculationUnavailable(f"calculator returned an unusable body: {e}"),
                ) from e

            return MonthlyPayment(amount=parsed.monthly_emi)

        raise self._failed(
            url,
            self.max_retries + 1,
            CalculationUnavailable(f"calculator request failed: {last_err!r}"),
        ) from last_err

    def _failed(self, url: str, attempts: int, err: CalculationUnavailable) -> CalculationUnavailable:
        logger.warning(
            "calculator_call_failed",
            extra={"context": {"url": url, "attempts": attempts, "error": str(err)}},
        )
        return err

    def _backoff(self, attempt: int) -> None:
        # no sleep after the final attempt
        if attempt < self.max_retries:
            time.sleep(self.backoff_base_s * (2**attempt))


def make_calculator_client(settings: AppConfig | None = None) -> HttpCalculatorClient:
    settings = settings or config
    return HttpCalculatorClient(
        base_url=settings.CALCULATOR_URL,
        timeout_s=settings.CALCULATOR_TIMEOUT_S,
        max_retries=settings.CALCULATOR_MAX_RETRIES,
        backoff_base_s=settings.CALCULATOR_BACKOFF_BASE_S,
    )
