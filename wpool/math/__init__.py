"""Mathematical utilities for weighted pool pricing.

This package provides the numeric primitives the pricing formulas build on:
- pow_approx: bounded-error power approximation (floating point)
- Bfp: 18-decimal fixed-point arithmetic with a fixed-point power series
"""

from wpool.math.fixed_point import BFP_ONE, Bfp
from wpool.math.pow_approx import pow_approx, pow_fraction, pow_int

__all__ = ["BFP_ONE", "Bfp", "pow_approx", "pow_fraction", "pow_int"]
