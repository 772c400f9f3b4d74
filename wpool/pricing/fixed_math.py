"""Weighted pool pricing in 18-decimal fixed point.

Same formulas as wpool.pricing.float_math on Bfp values, for integer-only
callers. Every step rounds down (see wpool.math.fixed_point).

The *_exact functions take the power with Bfp.pow_exact (Decimal reference,
floored to 18 decimals); the *_approx functions use Bfp.power, which is exact
by squaring for whole exponents and the term-capped series otherwise.

Arithmetic failures surface as DivisionByZero or Overflow/Underflow, even
when the top-level inputs passed validation (for example a balance so small
that balance / weight floors to zero).
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from wpool.config import DEFAULT_POW_CONFIG, PowConfig
from wpool.errors import InvalidTargetPriceError
from wpool.math.fixed_point import BFP_ONE, Bfp

from .validation import validate_pool, validate_swap, validate_target_price

logger = structlog.get_logger()

BfpPowFn = Callable[[Bfp, Bfp], Bfp]


def _pow_exact(base: Bfp, exponent: Bfp) -> Bfp:
    return base.pow_exact(exponent)


def _pow_approx(config: PowConfig) -> BfpPowFn:
    return lambda base, exponent: base.power(exponent, config=config)


def spot_price(
    balance_in: Bfp,
    weight_in: Bfp,
    balance_out: Bfp,
    weight_out: Bfp,
) -> Bfp:
    """Spot price (Bi / Wi) / (Bo / Wo), each division rounded down.

    Raises:
        DomainError: If any balance or weight is zero
        DivisionByZero: If balance_out / weight_out floors to zero
    """
    validate_pool(balance_in.value, weight_in.value, balance_out.value, weight_out.value)

    numer = balance_in.div_down(weight_in)
    denom = balance_out.div_down(weight_out)
    return numer.div_down(denom)


def _amount_out(
    balance_in: Bfp,
    weight_in: Bfp,
    balance_out: Bfp,
    weight_out: Bfp,
    amount_in: Bfp,
    fee: Bfp,
    power: BfpPowFn,
) -> Bfp:
    validate_swap(
        balance_in.value,
        weight_in.value,
        balance_out.value,
        weight_out.value,
        amount_in.value,
        fee.value,
        one=Bfp.ONE,
    )

    # Fee is taken from the input before it enters the pool
    adjusted_in = amount_in.mul_down(BFP_ONE.sub(fee))

    # base = balance_in / (balance_in + adjusted_in), in (0.5, 1]
    base = balance_in.div_down(balance_in.add(adjusted_in))
    exponent = weight_in.div_down(weight_out)

    ratio = power(base, exponent)
    return balance_out.mul_down(BFP_ONE.sub(ratio))


def swap_amount_out_exact(
    balance_in: Bfp,
    weight_in: Bfp,
    balance_out: Bfp,
    weight_out: Bfp,
    amount_in: Bfp,
    fee: Bfp,
) -> Bfp:
    """Output amount for selling amount_in, power computed to full precision.

    Args:
        balance_in: Balance of input token (must be positive)
        weight_in: Weight of input token (must be positive)
        balance_out: Balance of output token (must be positive)
        weight_out: Weight of output token (must be positive)
        amount_in: Input amount before fee, below balance_in
        fee: Swap fee in [0, 1)

    Returns:
        Output amount, rounded down

    Raises:
        DomainError: If an input is outside its domain
        DivisionByZero, Overflow: On arithmetic failure
    """
    return _amount_out(
        balance_in, weight_in, balance_out, weight_out, amount_in, fee, _pow_exact
    )


def swap_amount_out_approx(
    balance_in: Bfp,
    weight_in: Bfp,
    balance_out: Bfp,
    weight_out: Bfp,
    amount_in: Bfp,
    fee: Bfp,
    *,
    config: PowConfig = DEFAULT_POW_CONFIG,
) -> Bfp:
    """Output amount for selling amount_in, power from the integer series."""
    return _amount_out(
        balance_in,
        weight_in,
        balance_out,
        weight_out,
        amount_in,
        fee,
        _pow_approx(config),
    )


def _amount_to_price(
    balance_in: Bfp,
    weight_in: Bfp,
    balance_out: Bfp,
    weight_out: Bfp,
    target_price: Bfp,
    fee: Bfp,
    power: BfpPowFn,
) -> Bfp:
    validate_target_price(
        balance_in.value,
        weight_in.value,
        balance_out.value,
        weight_out.value,
        target_price.value,
        fee.value,
        one=Bfp.ONE,
    )

    current = spot_price(balance_in, weight_in, balance_out, weight_out)
    ratio = target_price.div_down(current)
    if ratio < BFP_ONE:
        logger.debug(
            "target_price_below_spot",
            target_price=target_price.value,
            spot_price=current.value,
        )
        raise InvalidTargetPriceError(
            f"target_price {target_price} is below the current spot price {current}"
        )

    exponent = weight_out.div_down(weight_out.add(weight_in))
    growth = power(ratio, exponent).sub(BFP_ONE)
    return growth.mul_down(balance_in).div_down(BFP_ONE.sub(fee))


def spot_price_from_invariant_exact(
    balance_in: Bfp,
    weight_in: Bfp,
    balance_out: Bfp,
    weight_out: Bfp,
    target_price: Bfp,
    fee: Bfp,
) -> Bfp:
    """Input amount (fee included) that moves the spot price to target_price.

    Raises:
        DomainError: If an input is outside its domain, or target_price is
            below the current spot price
        DivisionByZero, Overflow: On arithmetic failure
    """
    return _amount_to_price(
        balance_in, weight_in, balance_out, weight_out, target_price, fee, _pow_exact
    )


def spot_price_from_invariant_approx(
    balance_in: Bfp,
    weight_in: Bfp,
    balance_out: Bfp,
    weight_out: Bfp,
    target_price: Bfp,
    fee: Bfp,
    *,
    config: PowConfig = DEFAULT_POW_CONFIG,
) -> Bfp:
    """Approximate counterpart of spot_price_from_invariant_exact.

    The documented pow_approx bound (POW_APPROX_TOLERANCE) only covers price
    ratios target_price / spot_price up to 1.95. Ratios between 1.95 and 2
    are accepted but less accurate, off by about 3e-5 per unit of balance_in
    at 1.999999.

    Raises:
        PowBaseOutOfBounds: If target_price / spot_price is not below 2
    """
    return _amount_to_price(
        balance_in,
        weight_in,
        balance_out,
        weight_out,
        target_price,
        fee,
        _pow_approx(config),
    )
