from __future__ import annotations

from typing import Optional

import typer
import uvicorn
from loguru import logger

from emicalc.adapters.calculator_client import HttpCalculatorClient, make_calculator_client
from emicalc.adapters.calculator_local import InProcessCalculatorClient
from emicalc.adapters.config import config
from emicalc.api.schemas import EMIRequest
from emicalc.domain.errors import CalculationUnavailable, ValidationError
from emicalc.services.emi import request_monthly_emi

app = typer.Typer(help="EMI calculator: public gateway, calculation service and one-off quotes.")


@app.command()
def gateway(
    host: Optional[str] = typer.Option(None, help="Bind address (default: EMICALC_GATEWAY_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: EMICALC_GATEWAY_PORT)"),
) -> None:
    """
    Serve the public /emi-calculator endpoint.
    """
    host = host or config.GATEWAY_HOST
    port = port or config.GATEWAY_PORT
    logger.info(
        "Starting gateway",
        host=host,
        port=port,
        calculator_url=config.CALCULATOR_URL,
    )
    uvicorn.run(
        "emicalc.api.gateway:create_gateway_app",
        factory=True,
        host=host,
        port=port,
        log_level=config.LOG_LEVEL.lower(),
    )


@app.command()
def calculator(
    host: Optional[str] = typer.Option(None, help="Bind address (default: EMICALC_CALCULATOR_HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: EMICALC_CALCULATOR_PORT)"),
) -> None:
    """
    Serve the internal calculation service.
    """
    host = host or config.CALCULATOR_HOST
    port = port or config.CALCULATOR_PORT
    logger.info("Starting calculation service", host=host, port=port)
    uvicorn.run(
        "emicalc.api.calculator_service:create_calculator_app",
        factory=True,
        host=host,
        port=port,
        log_level=config.LOG_LEVEL.lower(),
    )


@app.command()
def quote(
    total_amount: float = typer.Option(..., help="Purchase price"),
    down_payment: float = typer.Option(0.0, help="Paid up front"),
    interest_rate: float = typer.Option(0.0, help="Annual rate in percent, e.g. 6.5"),
    property_tax: float = typer.Option(0.0, help="Property tax per year"),
    property_transfer_tax: float = typer.Option(0.0, help="One-time transfer tax"),
    years: int = typer.Option(30, "--years", help="Years expected to live in the home"),
    remote: bool = typer.Option(
        False,
        "--remote",
        help="Ask the running calculation service instead of computing in-process.",
    ),
) -> None:
    """
    Print the monthly EMI for one set of loan parameters.
    """
    raw = EMIRequest(
        total_amount=total_amount,
        down_payment=down_payment,
        interest_rate=interest_rate,
        property_tax=property_tax,
        property_transfer_tax=property_transfer_tax,
        years_expected_to_live=years,
    ).model_dump()

    client: HttpCalculatorClient | InProcessCalculatorClient
    client = make_calculator_client() if remote else InProcessCalculatorClient()

    try:
        result = request_monthly_emi(raw, client)
    except CalculationUnavailable as exc:
        logger.error("Calculation service unavailable", error=str(exc))
        raise typer.Exit(code=2)

    if isinstance(result, ValidationError):
        typer.echo(f"error: {result.message}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"{result.amount:.2f}")


if __name__ == "__main__":
    app()
