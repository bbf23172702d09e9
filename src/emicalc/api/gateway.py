# src/emicalc/api/gateway.py
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from emicalc.adapters.calculator_client import make_calculator_client
from emicalc.adapters.logging_utils import get_logger
from emicalc.domain.errors import CalculationUnavailable, ValidationError
from emicalc.domain.ports import CalculatorClient
from emicalc.services.emi import request_monthly_emi
from .schemas import EMIResponse

logger = get_logger(__name__)

router = APIRouter()


def _nok(status_code: int, error: str) -> JSONResponse:
    body = EMIResponse(status="nok", error=error).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def get_calculator(request: Request) -> CalculatorClient:
    return request.app.state.calculator


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post(
    "/emi-calculator",
    response_model=EMIResponse,
    response_model_exclude_none=True,
)
def emi_calculator(
    payload: dict[str, Any] = Body(...),
    calculator: CalculatorClient = Depends(get_calculator),
) -> Any:
    """
    Validate the loan parameters and ask the calculation service for the EMI.

    400 for input the validator rejects, 500 when the calculator can't answer.
    """
    try:
        result = request_monthly_emi(payload, calculator)
    except CalculationUnavailable as e:
        logger.warning("calculator_unavailable", extra={"context": {"error": str(e)}})
        return _nok(500, "calculation service unavailable")

    if isinstance(result, ValidationError):
        return _nok(400, result.message)

    return EMIResponse(status="ok", monthly_emi=result.amount)


def create_gateway_app(calculator: CalculatorClient | None = None) -> FastAPI:
    """
    Build the public gateway.

    The calculator is injected; without one, an HTTP client for the
    configured calculation service is created.
    """
    app = FastAPI(title="emicalc gateway")
    app.state.calculator = calculator if calculator is not None else make_calculator_client()

    @app.exception_handler(RequestValidationError)
    async def _bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _nok(400, "invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # only POST is served; any other method is reported as missing
        if exc.status_code in (404, 405):
            return _nok(404, "not found")
        if exc.status_code == 400:
            return _nok(400, "invalid request body")
        return _nok(exc.status_code, str(exc.detail))

    app.include_router(router)
    return app
