"""Domain checks shared by the float and fixed-point pricing formulas.

The checks compare plain numbers, so they serve both representations: float
callers pass real values with one=1.0, fixed-point callers pass raw scaled
integers with one=10^18. Every check runs before any numeric work.
"""

from __future__ import annotations

import structlog

from wpool.errors import (
    InvalidFeeError,
    InvalidTargetPriceError,
    MaxInRatioError,
    ZeroAmountError,
    ZeroBalanceError,
    ZeroWeightError,
)

logger = structlog.get_logger()

Number = int | float


def validate_pool(
    balance_in: Number,
    weight_in: Number,
    balance_out: Number,
    weight_out: Number,
) -> None:
    """Require strictly positive balances and weights.

    Raises:
        ZeroWeightError: If weight_in or weight_out is not positive
        ZeroBalanceError: If balance_in or balance_out is not positive
    """
    # Validate weights
    if not weight_in > 0:
        _reject("weight_in", weight_in)
        raise ZeroWeightError(f"weight_in must be positive, got {weight_in}")
    if not weight_out > 0:
        _reject("weight_out", weight_out)
        raise ZeroWeightError(f"weight_out must be positive, got {weight_out}")

    # Validate balances
    if not balance_in > 0:
        _reject("balance_in", balance_in)
        raise ZeroBalanceError(f"balance_in must be positive, got {balance_in}")
    if not balance_out > 0:
        _reject("balance_out", balance_out)
        raise ZeroBalanceError(f"balance_out must be positive, got {balance_out}")


def validate_fee(fee: Number, *, one: Number) -> None:
    """Require 0 <= fee < one.

    Raises:
        InvalidFeeError: If fee is outside [0, one)
    """
    if not 0 <= fee < one:
        _reject("fee", fee)
        raise InvalidFeeError(f"Swap fee must be in range [0, 1), got {fee}")


def validate_swap(
    balance_in: Number,
    weight_in: Number,
    balance_out: Number,
    weight_out: Number,
    amount_in: Number,
    fee: Number,
    *,
    one: Number,
) -> None:
    """Validate a swap input tuple (Bi, Wi, Bo, Wo, Ai, fee).

    Raises:
        ZeroWeightError, ZeroBalanceError: If the pool side is degenerate
        ZeroAmountError: If amount_in is not positive
        MaxInRatioError: If amount_in >= balance_in
        InvalidFeeError: If fee is outside [0, 1)
    """
    validate_pool(balance_in, weight_in, balance_out, weight_out)

    if not amount_in > 0:
        _reject("amount_in", amount_in)
        raise ZeroAmountError(f"amount_in must be positive, got {amount_in}")

    # The input cannot meet or exceed the input reserve
    if amount_in >= balance_in:
        _reject("amount_in", amount_in, balance_in=balance_in)
        raise MaxInRatioError(f"Input {amount_in} must be less than balance {balance_in}")

    validate_fee(fee, one=one)


def validate_target_price(
    balance_in: Number,
    weight_in: Number,
    balance_out: Number,
    weight_out: Number,
    target_price: Number,
    fee: Number,
    *,
    one: Number,
) -> None:
    """Validate the inputs of spot_price_from_invariant.

    The comparison of target_price against the current spot price needs the
    spot price itself, so it happens in the pricing functions.

    Raises:
        ZeroWeightError, ZeroBalanceError: If the pool side is degenerate
        InvalidTargetPriceError: If target_price is not positive
        InvalidFeeError: If fee is outside [0, 1)
    """
    validate_pool(balance_in, weight_in, balance_out, weight_out)

    if not target_price > 0:
        _reject("target_price", target_price)
        raise InvalidTargetPriceError(f"target_price must be positive, got {target_price}")

    validate_fee(fee, one=one)


def _reject(argument: str, value: Number, **context: Number) -> None:
    logger.debug("pricing_domain_rejected", argument=argument, value=value, **context)
