# src/emicalc/api/calculator_service.py
from __future__ import annotations

import math

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from emicalc.adapters.logging_utils import get_logger
from emicalc.domain.amortization import calculate
from .schemas import CalculationRequest, CalculationResponse

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/calculate-emi", response_model=CalculationResponse)
def calculate_emi(payload: CalculationRequest) -> CalculationResponse | JSONResponse:
    # Input arrives already validated by the gateway.
    query = payload.to_query()
    try:
        payment = calculate(query)
    except ArithmeticError:
        logger.exception("calculation_failed", extra={"context": payload.model_dump()})
        return JSONResponse(status_code=500, content={"error": "calculation failed"})

    if not math.isfinite(payment.amount):
        logger.error("calculation_non_finite", extra={"context": payload.model_dump()})
        return JSONResponse(status_code=500, content={"error": "calculation failed"})

    return CalculationResponse(monthly_emi=payment.amount)


def create_calculator_app() -> FastAPI:
    app = FastAPI(title="emicalc calculator")

    @app.exception_handler(RequestValidationError)
    async def _bad_payload(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = sorted({".".join(str(p) for p in err["loc"][1:]) or "body" for err in exc.errors()})
        return JSONResponse(status_code=400, content={"error": f"invalid payload: {', '.join(fields)}"})

    app.include_router(router)
    return app
