"""Pydantic models for the integer-only pricing API.

All numeric fields are 18-decimal fixed-point values carried as uint256
decimal strings, e.g. "1500000000000000000" for 1.5.
"""

from typing import Literal

from pydantic import BaseModel, Field

from wpool.math.fixed_point import Bfp
from wpool.models.types import Uint256


class PowRequest(BaseModel):
    """Arguments of pow_approx and power."""

    base: Uint256 = Field(description="Power base, below 2 for fractional exponents")
    exponent: Uint256 = Field(description="Exponent")

    def to_bfp(self) -> tuple[Bfp, Bfp]:
        return Bfp(int(self.base)), Bfp(int(self.exponent))


class PoolRequest(BaseModel):
    """Balances and weights of the two pool tokens involved in a price."""

    balance_in: Uint256 = Field(description="Balance of the input token")
    weight_in: Uint256 = Field(description="Weight of the input token")
    balance_out: Uint256 = Field(description="Balance of the output token")
    weight_out: Uint256 = Field(description="Weight of the output token")

    def pool(self) -> tuple[Bfp, Bfp, Bfp, Bfp]:
        return (
            Bfp(int(self.balance_in)),
            Bfp(int(self.weight_in)),
            Bfp(int(self.balance_out)),
            Bfp(int(self.weight_out)),
        )


class SwapRequest(PoolRequest):
    """Arguments of swap_amount_out_exact / swap_amount_out_approx."""

    amount_in: Uint256 = Field(description="Input amount before fee")
    fee: Uint256 = Field(description="Swap fee, below 10^18 (100%)")

    def to_bfp(self) -> tuple[Bfp, ...]:
        return (*self.pool(), Bfp(int(self.amount_in)), Bfp(int(self.fee)))


class TargetPriceRequest(PoolRequest):
    """Arguments of spot_price_from_invariant_exact / _approx."""

    target_price: Uint256 = Field(description="Target spot exchange rate")
    fee: Uint256 = Field(description="Swap fee, below 10^18 (100%)")

    def to_bfp(self) -> tuple[Bfp, ...]:
        return (*self.pool(), Bfp(int(self.target_price)), Bfp(int(self.fee)))


class ResultResponse(BaseModel):
    """Successful computation."""

    result: Uint256 = Field(description="Result as 18-decimal fixed-point")


class ErrorResponse(BaseModel):
    """Failed computation.

    error is the coarse kind callers branch on; type names the specific
    exception class for diagnostics.
    """

    error: Literal["DomainError", "DivisionByZero", "Overflow", "PricingError"]
    type: str
    detail: str
