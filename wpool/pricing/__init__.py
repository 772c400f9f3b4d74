"""Weighted pool pricing in float and fixed-point representations.

Both representations expose the same operations:
- spot_price
- swap_amount_out_exact / swap_amount_out_approx
- spot_price_from_invariant_exact / spot_price_from_invariant_approx

Import them through the module of the representation you need:

    from wpool.pricing import fixed_math, float_math
"""

from . import fixed_math, float_math

# Engines
from .engine import (
    FixedPointPricingEngine,
    FloatPricingEngine,
    PricingEngine,
    RemotePricingEngine,
)

__all__ = [
    # Representations
    "fixed_math",
    "float_math",
    # Engines
    "PricingEngine",
    "FloatPricingEngine",
    "FixedPointPricingEngine",
    "RemotePricingEngine",
]
