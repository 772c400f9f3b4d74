"""Weighted pool math - constant-weighted AMM pricing with bounded-error powers."""

from wpool.math import Bfp, pow_approx

__version__ = "0.1.0"
__all__ = ["Bfp", "pow_approx", "__version__"]
