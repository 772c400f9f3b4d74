"""Pydantic models for the integer-only pricing API."""

from wpool.models.requests import (
    ErrorResponse,
    PoolRequest,
    PowRequest,
    ResultResponse,
    SwapRequest,
    TargetPriceRequest,
)
from wpool.models.types import Uint256, validate_uint256

__all__ = [
    "ErrorResponse",
    "PoolRequest",
    "PowRequest",
    "ResultResponse",
    "SwapRequest",
    "TargetPriceRequest",
    "Uint256",
    "validate_uint256",
]
