"""Pricing engines: one interface over every numeric representation.

A PricingEngine takes and returns real numbers (floats) at its boundary and
is free to compute in any representation underneath:

- FloatPricingEngine: native floats (exact oracle + float series)
- FixedPointPricingEngine: 18-decimal Bfp in process
- RemotePricingEngine: the integer-only HTTP entry points of wpool.api

Comparing engines through this interface keeps cross-representation checks
independent of any particular runtime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

import structlog

from wpool.config import DEFAULT_POW_CONFIG, PowConfig
from wpool.constants import POW_APPROX_TOLERANCE
from wpool.errors import DivisionByZero, DomainError, Overflow, PricingError
from wpool.math.fixed_point import Bfp
from wpool.math.pow_approx import pow_approx

from . import fixed_math, float_math

if TYPE_CHECKING:
    import httpx

logger = structlog.get_logger()


@runtime_checkable
class PricingEngine(Protocol):
    """Protocol for weighted pool pricing implementations.

    Attributes:
        name: Short identifier used in logs and test ids
        exact_tolerance: Absolute error of the *_exact operations against the
            native float oracle
        approx_tolerance: Absolute error of pow_approx (per unit of balance
            for the pricing operations)
    """

    name: str
    exact_tolerance: float
    approx_tolerance: float

    def pow_approx(self, base: float, exponent: float) -> float: ...

    def spot_price(
        self, balance_in: float, weight_in: float, balance_out: float, weight_out: float
    ) -> float: ...

    def swap_amount_out_exact(
        self,
        balance_in: float,
        weight_in: float,
        balance_out: float,
        weight_out: float,
        amount_in: float,
        fee: float,
    ) -> float: ...

    def swap_amount_out_approx(
        self,
        balance_in: float,
        weight_in: float,
        balance_out: float,
        weight_out: float,
        amount_in: float,
        fee: float,
    ) -> float: ...

    def spot_price_from_invariant_exact(
        self,
        balance_in: float,
        weight_in: float,
        balance_out: float,
        weight_out: float,
        target_price: float,
        fee: float,
    ) -> float: ...

    def spot_price_from_invariant_approx(
        self,
        balance_in: float,
        weight_in: float,
        balance_out: float,
        weight_out: float,
        target_price: float,
        fee: float,
    ) -> float: ...


class FloatPricingEngine:
    """Floating-point engine; its exact operations are the reference."""

    name = "float"
    exact_tolerance = 1e-12
    approx_tolerance = POW_APPROX_TOLERANCE

    def __init__(self, config: PowConfig = DEFAULT_POW_CONFIG) -> None:
        self.config = config

    def pow_approx(self, base: float, exponent: float) -> float:
        return pow_approx(base, exponent, config=self.config)

    def spot_price(
        self, balance_in: float, weight_in: float, balance_out: float, weight_out: float
    ) -> float:
        return float_math.spot_price(balance_in, weight_in, balance_out, weight_out)

    def swap_amount_out_exact(self, *args: float) -> float:
        return float_math.swap_amount_out_exact(*args)

    def swap_amount_out_approx(self, *args: float) -> float:
        return float_math.swap_amount_out_approx(*args, config=self.config)

    def spot_price_from_invariant_exact(self, *args: float) -> float:
        return float_math.spot_price_from_invariant_exact(*args)

    def spot_price_from_invariant_approx(self, *args: float) -> float:
        return float_math.spot_price_from_invariant_approx(*args, config=self.config)


class FixedPointPricingEngine:
    """In-process 18-decimal fixed-point engine.

    Inputs are converted with Bfp.from_float, results with Bfp.to_float.
    """

    name = "fixed"
    exact_tolerance = 1e-9
    approx_tolerance = POW_APPROX_TOLERANCE

    def __init__(self, config: PowConfig = DEFAULT_POW_CONFIG) -> None:
        self.config = config

    def pow_approx(self, base: float, exponent: float) -> float:
        base_bfp, exponent_bfp = _to_bfp((base, exponent))
        return base_bfp.pow_approx(exponent_bfp, config=self.config).to_float()

    def spot_price(self, *args: float) -> float:
        return fixed_math.spot_price(*_to_bfp(args)).to_float()

    def swap_amount_out_exact(self, *args: float) -> float:
        return fixed_math.swap_amount_out_exact(*_to_bfp(args)).to_float()

    def swap_amount_out_approx(self, *args: float) -> float:
        return fixed_math.swap_amount_out_approx(*_to_bfp(args), config=self.config).to_float()

    def spot_price_from_invariant_exact(self, *args: float) -> float:
        return fixed_math.spot_price_from_invariant_exact(*_to_bfp(args)).to_float()

    def spot_price_from_invariant_approx(self, *args: float) -> float:
        return fixed_math.spot_price_from_invariant_approx(
            *_to_bfp(args), config=self.config
        ).to_float()


class RemotePricingEngine:
    """Engine backed by the integer-only HTTP entry points (wpool.api).

    Values travel as 18-decimal scaled integers in decimal strings. Error
    responses are raised again locally as the matching error kind.

    Usage:
        with httpx.Client(base_url="http://localhost:8000") as client:
            engine = RemotePricingEngine(client)
            engine.spot_price(10, 0.1, 5, 0.2)
    """

    name = "remote"
    exact_tolerance = 1e-9
    approx_tolerance = POW_APPROX_TOLERANCE

    ERROR_KINDS: ClassVar[dict[str, type[Exception]]] = {
        "DomainError": DomainError,
        "DivisionByZero": DivisionByZero,
        "Overflow": Overflow,
    }

    def __init__(self, client: httpx.Client) -> None:
        self.client = client

    def _call(self, path: str, payload: dict[str, Any]) -> float:
        scaled = _to_bfp(tuple(payload.values()))
        body = {key: str(value.value) for key, value in zip(payload, scaled)}
        response = self.client.post(path, json=body)

        if response.status_code == 400:
            error = response.json()
            kind = self.ERROR_KINDS.get(error.get("error"), PricingError)
            logger.debug("remote_pricing_error", path=path, error=error)
            raise kind(error.get("detail", ""))

        response.raise_for_status()
        return Bfp(int(response.json()["result"])).to_float()

    def pow_approx(self, base: float, exponent: float) -> float:
        return self._call("/pow-approx", {"base": base, "exponent": exponent})

    def spot_price(
        self, balance_in: float, weight_in: float, balance_out: float, weight_out: float
    ) -> float:
        return self._call("/spot-price", _pool(balance_in, weight_in, balance_out, weight_out))

    def swap_amount_out_exact(self, *args: float) -> float:
        return self._call("/swap-amount-out/exact", _swap(*args))

    def swap_amount_out_approx(self, *args: float) -> float:
        return self._call("/swap-amount-out/approx", _swap(*args))

    def spot_price_from_invariant_exact(self, *args: float) -> float:
        return self._call("/spot-price-from-invariant/exact", _target(*args))

    def spot_price_from_invariant_approx(self, *args: float) -> float:
        return self._call("/spot-price-from-invariant/approx", _target(*args))


# =============================================================================
# Argument helpers
# =============================================================================


def _to_bfp(values: tuple[float, ...]) -> list[Bfp]:
    """Convert real inputs to Bfp, rejecting negatives as domain errors."""
    if any(value < 0 for value in values):
        raise DomainError(f"Fixed-point inputs must be non-negative, got {values}")
    return [Bfp.from_float(value) for value in values]


def _pool(
    balance_in: float, weight_in: float, balance_out: float, weight_out: float
) -> dict[str, float]:
    return {
        "balance_in": balance_in,
        "weight_in": weight_in,
        "balance_out": balance_out,
        "weight_out": weight_out,
    }


def _swap(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
    amount_in: float,
    fee: float,
) -> dict[str, float]:
    return {
        **_pool(balance_in, weight_in, balance_out, weight_out),
        "amount_in": amount_in,
        "fee": fee,
    }


def _target(
    balance_in: float,
    weight_in: float,
    balance_out: float,
    weight_out: float,
    target_price: float,
    fee: float,
) -> dict[str, float]:
    return {
        **_pool(balance_in, weight_in, balance_out, weight_out),
        "target_price": target_price,
        "fee": fee,
    }
