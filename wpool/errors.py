"""Weighted pool error classes.

Domain errors are raised by input validation before any numeric work starts.
Arithmetic errors (DivisionByZero, Overflow, Underflow) come from the
fixed-point layer and are re-exported here so callers can catch every
failure kind from one place.
"""

from wpool.safe_int import DivisionByZero, Overflow, SafeIntError, Underflow

__all__ = [
    "PricingError",
    "DomainError",
    "ZeroBalanceError",
    "ZeroWeightError",
    "ZeroAmountError",
    "InvalidFeeError",
    "MaxInRatioError",
    "InvalidTargetPriceError",
    "PowBaseOutOfBounds",
    "SafeIntError",
    "DivisionByZero",
    "Overflow",
    "Underflow",
]


class PricingError(Exception):
    """Base error for weighted pool pricing operations."""

    pass


class DomainError(PricingError, ValueError):
    """An input lies outside the domain of the requested operation."""

    pass


class ZeroBalanceError(DomainError):
    """Token balance must be positive."""

    pass


class ZeroWeightError(DomainError):
    """Token weight must be positive."""

    pass


class ZeroAmountError(DomainError):
    """Swap amount must be positive."""

    pass


class InvalidFeeError(DomainError):
    """Swap fee must be in range [0, 1)."""

    pass


class MaxInRatioError(DomainError):
    """Input amount must be strictly less than the input balance."""

    pass


class InvalidTargetPriceError(DomainError):
    """Target spot price must be positive and not below the current spot price."""

    pass


class PowBaseOutOfBounds(DomainError):
    """Power base outside (0, 2) for a fractional exponent, or not positive."""

    pass
