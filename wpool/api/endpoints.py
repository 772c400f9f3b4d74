"""API endpoints for integer-only pricing.

Each endpoint takes 18-decimal fixed-point values as uint256 decimal strings
and returns {"result": "<uint256>"}. Failures are turned into 400 responses
by the exception handlers registered in wpool.api.main.

The series and squaring loops are CPU-bound, so every computation runs in
the default executor and never on the event loop.
"""

import asyncio
import os
from collections.abc import Callable
from functools import lru_cache, partial

import structlog
from fastapi import APIRouter, Depends

from wpool.config import DEFAULT_POW_CONFIG, PowConfig
from wpool.math.fixed_point import Bfp
from wpool.models import PoolRequest, PowRequest, ResultResponse, SwapRequest, TargetPriceRequest
from wpool.pricing import fixed_math

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_pow_config() -> PowConfig:
    """Dependency provider for the power series configuration.

    The term cap can be tuned with the WPOOL_POW_MAX_TERMS environment
    variable. The app resolves this once at startup, so a bad value stops
    the server from starting. Override this in tests to inject another
    configuration:
        app.dependency_overrides[get_pow_config] = lambda: PowConfig(max_terms=8)

    Raises:
        ValueError: If WPOOL_POW_MAX_TERMS is not a positive integer
    """
    max_terms = os.environ.get("WPOOL_POW_MAX_TERMS")
    if max_terms is None:
        return DEFAULT_POW_CONFIG
    try:
        return PowConfig(max_terms=int(max_terms))
    except ValueError as err:
        raise ValueError(
            f"WPOOL_POW_MAX_TERMS must be a positive integer, got {max_terms!r}"
        ) from err


async def _compute(operation: str, fn: Callable[[], Bfp]) -> ResultResponse:
    """Run a pricing computation off the event loop and wrap its result."""
    loop = asyncio.get_event_loop()
    result = await loop.run_in_executor(None, fn)
    logger.info("pricing_request_served", operation=operation, result=result.value)
    return ResultResponse(result=str(result.value))


@router.post("/pow-approx")
async def pow_approx(
    request: PowRequest, config: PowConfig = Depends(get_pow_config)
) -> ResultResponse:
    """Approximate base^exponent: exact integer part, series for the fraction."""
    base, exponent = request.to_bfp()
    return await _compute("pow_approx", partial(base.pow_approx, exponent, config=config))


@router.post("/power")
async def power(request: PowRequest, config: PowConfig = Depends(get_pow_config)) -> ResultResponse:
    """base^exponent, exact by squaring for whole exponents."""
    base, exponent = request.to_bfp()
    return await _compute("power", partial(base.power, exponent, config=config))


@router.post("/spot-price")
async def spot_price(request: PoolRequest) -> ResultResponse:
    return await _compute("spot_price", partial(fixed_math.spot_price, *request.pool()))


@router.post("/swap-amount-out/exact")
async def swap_amount_out_exact(request: SwapRequest) -> ResultResponse:
    return await _compute(
        "swap_amount_out_exact",
        partial(fixed_math.swap_amount_out_exact, *request.to_bfp()),
    )


@router.post("/swap-amount-out/approx")
async def swap_amount_out_approx(
    request: SwapRequest, config: PowConfig = Depends(get_pow_config)
) -> ResultResponse:
    return await _compute(
        "swap_amount_out_approx",
        partial(fixed_math.swap_amount_out_approx, *request.to_bfp(), config=config),
    )


@router.post("/spot-price-from-invariant/exact")
async def spot_price_from_invariant_exact(request: TargetPriceRequest) -> ResultResponse:
    return await _compute(
        "spot_price_from_invariant_exact",
        partial(fixed_math.spot_price_from_invariant_exact, *request.to_bfp()),
    )


@router.post("/spot-price-from-invariant/approx")
async def spot_price_from_invariant_approx(
    request: TargetPriceRequest, config: PowConfig = Depends(get_pow_config)
) -> ResultResponse:
    return await _compute(
        "spot_price_from_invariant_approx",
        partial(fixed_math.spot_price_from_invariant_approx, *request.to_bfp(), config=config),
    )
