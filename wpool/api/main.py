"""FastAPI application exposing the integer-only pricing entry points.

Callers without floating point (or outside Python) reach the fixed-point
implementation here, with the same domain-failure conditions as the
in-process API. Errors come back as 400 with a JSON body naming the kind:
DomainError, DivisionByZero or Overflow, with PricingError for any other
pricing failure.
"""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wpool import __version__
from wpool.api.endpoints import get_pow_config, router
from wpool.errors import DivisionByZero, DomainError, Overflow, PricingError, SafeIntError
from wpool.models import ErrorResponse

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("WPOOL_HOST", "0.0.0.0")
PORT = int(os.environ.get("WPOOL_PORT", "8000"))
DEBUG = os.environ.get("WPOOL_DEBUG", "false").lower() in ("true", "1", "yes")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Resolve the power series configuration before serving requests."""
    config = get_pow_config()
    logger.info("pricing_api_started", pow_max_terms=config.max_terms)
    yield


app = FastAPI(
    title="Weighted Pool Math",
    description="Integer-only pricing for constant-weighted AMM pools",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(router)


def error_kind(exc: Exception) -> str:
    """Map an exception to the error kind reported to callers."""
    if isinstance(exc, DivisionByZero):
        return "DivisionByZero"
    if isinstance(exc, Overflow):
        return "Overflow"
    if isinstance(exc, DomainError):
        return "DomainError"
    return "PricingError"


@app.exception_handler(PricingError)
@app.exception_handler(SafeIntError)
async def pricing_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report a failed computation as 400 with its error kind."""
    body = ErrorResponse(error=error_kind(exc), type=type(exc).__name__, detail=str(exc))
    logger.warning(
        "pricing_request_failed",
        path=request.url.path,
        error=body.error,
        error_type=body.type,
        detail=body.detail,
    )
    return JSONResponse(status_code=400, content=body.model_dump())


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the pricing API server.

    Configuration via environment variables:
    - WPOOL_HOST: Host to bind to (default: 0.0.0.0)
    - WPOOL_PORT: Port to bind to (default: 8000)
    - WPOOL_DEBUG: Enable debug/reload mode (default: false)
    - WPOOL_POW_MAX_TERMS: Power series term cap (default: 256)
    """
    uvicorn.run(
        "wpool.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
