"""Fixed-point (Bfp) math library.

18-decimal fixed-point arithmetic for integer-only execution. A real value v
is stored as the integer v * 10^18 and every result must fit an unsigned
256-bit word.

Conventions:
- Rounding is floor (round down) in mul, div and the squaring steps of
  pow_int. Power series terms are computed as magnitudes, so each magnitude
  is floored: positive terms round down, negative terms round toward zero,
  and a series with negative terms can land a few wei above the floor of
  the true value.
- Products and quotients use unbounded Python-int intermediates, so a * b
  never overflows before it is divided back to the scale. Only the committed
  result is range checked.
- Failures raise instead of wrapping: DivisionByZero, Overflow, Underflow.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, localcontext
from typing import ClassVar

import structlog

from wpool.config import DEFAULT_POW_CONFIG, PowConfig
from wpool.constants import EXACT_POW_PRECISION, MAX_POW_BASE, MIN_POW_BASE, ONE_18
from wpool.errors import PowBaseOutOfBounds
from wpool.safe_int import S, SafeInt

__all__ = [
    # Classes
    "Bfp",
    "BFP_ONE",
    # Functions
    "mul_down",
    "div_down",
    "pow_int_raw",
    "pow_fraction_raw",
    # Constants
    "ONE_18",
]

logger = structlog.get_logger()


# =============================================================================
# Raw integer primitives
# =============================================================================


def mul_down(a: int, b: int) -> int:
    """Multiply two fixed-point values: floor(a * b / 10^18)."""
    return ((S(a) * S(b)) // ONE_18).to_uint256()


def div_down(a: int, b: int) -> int:
    """Divide two fixed-point values: floor(a * 10^18 / b).

    Raises:
        DivisionByZero: If b is zero
    """
    return ((S(a) * ONE_18) // S(b)).to_uint256()


def _sub_sign(a: int, b: int) -> tuple[int, bool]:
    """Return |a - b| and whether a - b is negative."""
    if a >= b:
        return a - b, False
    return b - a, True


def pow_int_raw(base: int, n: int) -> int:
    """Compute base^n for a non-negative integer n by repeated squaring.

    Args:
        base: Fixed-point base
        n: Plain (unscaled) integer exponent

    Returns:
        base^n in fixed-point, floor rounded at each multiplication
    """
    if n < 0:
        raise ValueError(f"pow_int_raw requires a non-negative exponent, got {n}")

    result = base if n % 2 else ONE_18
    n //= 2
    while n:
        base = mul_down(base, base)
        if n % 2:
            result = mul_down(result, base)
        n //= 2
    return result


def pow_fraction_raw(base: int, fraction: int, config: PowConfig = DEFAULT_POW_CONFIG) -> int:
    """Approximate base^fraction with the binomial series on scaled integers.

    Each term is kept as a magnitude with its sign tracked separately, so
    every intermediate stays unsigned:

        term_k = term_{k-1} * |fraction - (k - 1)| * |base - 1| / k

    Magnitudes are floored, so subtracted terms are rounded toward zero.

    Args:
        base: Fixed-point base in [MIN_POW_BASE, MAX_POW_BASE]
        fraction: Fixed-point exponent in [0, 1)
        config: Series term cap and early-exit precision (precision_raw)

    Returns:
        Approximation of base^fraction in fixed-point
    """
    x, x_negative = _sub_sign(base, ONE_18)
    term = ONE_18
    total: SafeInt = S(term)
    negative = False

    for k in range(1, config.max_terms + 1):
        big_k = k * ONE_18
        c, c_negative = _sub_sign(fraction, big_k - ONE_18)
        term = mul_down(term, mul_down(c, x))
        term = div_down(term, big_k)
        if term == 0:
            break

        if x_negative:
            negative = not negative
        if c_negative:
            negative = not negative

        total = total - term if negative else total + term

        if term < config.precision_raw:
            break
    else:
        logger.debug(
            "fixed_pow_series_term_cap_reached",
            base=base,
            fraction=fraction,
            max_terms=config.max_terms,
            last_term=term,
        )

    return total.to_uint256()


# =============================================================================
# Bfp class (wrapper for convenient usage)
# =============================================================================


class Bfp:
    """18-decimal fixed-point number stored as int.

    All values are stored as integers scaled by 10^18.
    Example: 1.5 is stored as 1_500_000_000_000_000_000
    """

    ONE: ClassVar[int] = ONE_18

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]  # Unhashable since we define __eq__

    def __init__(self, value: int) -> None:
        """Create Bfp from raw scaled value.

        Raises:
            Underflow: If value is negative
            Overflow: If value exceeds the uint256 range
        """
        self.value = S(value).to_uint256()

    @classmethod
    def from_wei(cls, wei: int) -> Bfp:
        """Create from raw wei value (already scaled to 18 decimals)."""
        return cls(wei)

    @classmethod
    def from_int(cls, i: int) -> Bfp:
        """Create from integer (will be scaled by 10^18)."""
        return cls(i * cls.ONE)

    @classmethod
    def from_decimal(cls, d: Decimal) -> Bfp:
        """Create from decimal (will be scaled by 10^18).

        Uses ROUND_HALF_UP for consistent rounding behavior.
        Requires non-negative input (matches unsigned semantics).
        """
        if d < 0:
            raise ValueError(f"Bfp.from_decimal requires non-negative input, got {d}")
        scaled = (d * cls.ONE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return cls(int(scaled))

    @classmethod
    def from_float(cls, f: float) -> Bfp:
        """Create from float via its shortest decimal repr (0.1 -> 10^17 wei)."""
        return cls.from_decimal(Decimal(repr(f)))

    def to_decimal(self) -> Decimal:
        """Convert to Decimal for display."""
        return Decimal(self.value) / Decimal(self.ONE)

    def to_float(self) -> float:
        """Convert to float for comparison against floating results."""
        return float(self.to_decimal())

    def add(self, other: Bfp) -> Bfp:
        """Add two Bfp values.

        Raises:
            Overflow: If the sum exceeds the uint256 range
        """
        return Bfp(self.value + other.value)

    def sub(self, other: Bfp) -> Bfp:
        """Subtract other from self.

        Raises:
            Underflow: If other is larger than self
        """
        return Bfp((S(self.value) - other.value).value)

    def mul_down(self, other: Bfp) -> Bfp:
        """Multiply with floor rounding: (a * b) // 10^18"""
        return Bfp(mul_down(self.value, other.value))

    def div_down(self, other: Bfp) -> Bfp:
        """Divide with floor rounding: (a * 10^18) // b

        Raises:
            DivisionByZero: If other is zero
        """
        return Bfp(div_down(self.value, other.value))

    def is_integer(self) -> bool:
        """True if the value is a whole number."""
        return self.value % self.ONE == 0

    def pow_int(self, n: int) -> Bfp:
        """Compute self^n for a plain non-negative integer n, exactly by squaring."""
        return Bfp(pow_int_raw(self.value, n))

    def pow_approx(self, exp: Bfp, *, config: PowConfig = DEFAULT_POW_CONFIG) -> Bfp:
        """Approximate self^exp: exact integer part times the series for the rest.

        Raises:
            PowBaseOutOfBounds: If self is zero, or not below 2 while exp has
                a fractional part
        """
        if self.value < MIN_POW_BASE:
            raise PowBaseOutOfBounds(f"Power base must be positive, got {self.value}")

        whole, fraction = divmod(exp.value, self.ONE)
        whole_pow = self.pow_int(whole)
        if fraction == 0:
            return whole_pow

        if self.value > MAX_POW_BASE:
            raise PowBaseOutOfBounds(
                f"Power base must be below 2 for fractional exponents, got {self.value}"
            )

        partial = Bfp(pow_fraction_raw(self.value, fraction, config))
        return whole_pow.mul_down(partial)

    def power(self, exp: Bfp, *, config: PowConfig = DEFAULT_POW_CONFIG) -> Bfp:
        """Compute self^exp, exactly by squaring when exp is a whole number.

        Falls back to pow_approx for fractional exponents.
        """
        if exp.is_integer():
            if self.value < MIN_POW_BASE:
                raise PowBaseOutOfBounds(f"Power base must be positive, got {self.value}")
            return self.pow_int(exp.value // self.ONE)
        return self.pow_approx(exp, config=config)

    def pow_exact(self, exp: Bfp) -> Bfp:
        """Compute self^exp with Decimal arithmetic, floored to 18 decimals.

        Correctly rounded at EXACT_POW_PRECISION significant digits before
        flooring, so the only error is the final truncation to the scale.
        Used as the reference power on the fixed-point exact paths.
        """
        if exp.value == 0:
            return Bfp(self.ONE)
        if self.value == 0:
            return Bfp(0)
        with localcontext() as ctx:
            ctx.prec = EXACT_POW_PRECISION
            result = self.to_decimal() ** exp.to_decimal()
            scaled = (result * self.ONE).to_integral_value(rounding=ROUND_FLOOR)
        return Bfp(int(scaled))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Bfp):
            return NotImplemented
        return self.value >= other.value

    def __repr__(self) -> str:
        return f"Bfp({self.value})"

    def __str__(self) -> str:
        return str(self.to_decimal())


BFP_ONE = Bfp(ONE_18)
