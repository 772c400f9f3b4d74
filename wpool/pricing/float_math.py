"""Weighted pool pricing in floating point.

The *_exact functions use native exponentiation and serve as the reference
that every other implementation is checked against. The *_approx functions
run the same formulas through pow_approx, the series used by integer-only
callers, so their error can be studied without fixed-point rounding.

Formulas (Bi, Wi: input balance/weight; Bo, Wo: output balance/weight):

    spot_price   = (Bi / Wi) / (Bo / Wo)
    amount_out   = Bo * (1 - (Bi / (Bi + Ai * (1 - fee)))^(Wi / Wo))
    amount_in    = ((target / spot_price)^(Wo / (Wo + Wi)) - 1) * Bi / (1 - fee)

where the last one (spot_price_from_invariant) is the input amount whose swap
moves the pool's spot price to the target rate.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from wpool.config import DEFAULT_POW_CONFIG, PowConfig
from wpool.errors import InvalidTargetPriceError
from wpool.math.pow_approx import pow_approx

from .validation import validate_pool, validate_swap, validate_target_price

PowFn = Callable[[float, float], float]


def spot_price(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
) -> float:
    """Marginal price of the output token in units of the input token.

    Raises:
        DomainError: If any balance or weight is not positive
    """
    validate_pool(balance_in, weight_in, balance_out, weight_out)
    return (balance_in / weight_in) / (balance_out / weight_out)


def _amount_out(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
    amount_in: float,
    fee: float,
    power: PowFn,
) -> float:
    validate_swap(balance_in, weight_in, balance_out, weight_out, amount_in, fee, one=1.0)

    adjusted_in = amount_in * (1.0 - fee)
    base = balance_in / (balance_in + adjusted_in)
    exponent = weight_in / weight_out
    return balance_out * (1.0 - power(base, exponent))


def swap_amount_out_exact(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
    amount_in: float,
    fee: float,
) -> float:
    """Output amount for selling amount_in, with native exponentiation.

    Raises:
        DomainError: If amount_in >= balance_in, fee is outside [0, 1), or any
            of the balances, weights or amount_in is not positive
    """
    return _amount_out(
        balance_in, weight_in, balance_out, weight_out, amount_in, fee, math.pow
    )


def swap_amount_out_approx(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
    amount_in: float,
    fee: float,
    *,
    config: PowConfig = DEFAULT_POW_CONFIG,
) -> float:
    """Output amount for selling amount_in, with the power approximated.

    Agrees with swap_amount_out_exact within balance_out * SWAP_APPROX_TOLERANCE.
    """
    return _amount_out(
        balance_in,
        weight_in,
        balance_out,
        weight_out,
        amount_in,
        fee,
        lambda base, exponent: pow_approx(base, exponent, config=config),
    )


def _amount_to_price(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
    target_price: float,
    fee: float,
    power: PowFn,
) -> float:
    validate_target_price(
        balance_in, weight_in, balance_out, weight_out, target_price, fee, one=1.0
    )

    current = (balance_in / weight_in) / (balance_out / weight_out)
    ratio = target_price / current
    if ratio < 1.0:
        raise InvalidTargetPriceError(
            f"target_price {target_price} is below the current spot price {current}"
        )

    exponent = weight_out / (weight_out + weight_in)
    return (power(ratio, exponent) - 1.0) * balance_in / (1.0 - fee)


def spot_price_from_invariant_exact(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
    target_price: float,
    fee: float,
) -> float:
    """Input amount that moves the spot price to target_price.

    Args:
        balance_in, weight_in, balance_out, weight_out: Pool state
        target_price: Target spot exchange rate, at least the current spot price
        fee: Swap fee in [0, 1)

    Returns:
        Input amount, fee included, whose swap takes the spot price from its
        current value to target_price

    Raises:
        DomainError: If the pool is degenerate, the fee is out of range, or
            target_price is not positive or below the current spot price
    """
    return _amount_to_price(
        balance_in, weight_in, balance_out, weight_out, target_price, fee, math.pow
    )


def spot_price_from_invariant_approx(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
    target_price: float,
    fee: float,
    *,
    config: PowConfig = DEFAULT_POW_CONFIG,
) -> float:
    """Approximate counterpart of spot_price_from_invariant_exact.

    The price ratio target_price / spot_price is the power base, so it must
    stay below 2. The documented pow_approx bound (POW_APPROX_TOLERANCE) only
    covers ratios up to 1.95; closer to 2 the series converges slowly and the
    error grows, to about 3e-5 per unit of balance_in at a ratio of 1.999999.
    """
    return _amount_to_price(
        balance_in,
        weight_in,
        balance_out,
        weight_out,
        target_price,
        fee,
        lambda base, exponent: pow_approx(base, exponent, config=config),
    )
