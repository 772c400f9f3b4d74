"""Numeric constants for weighted pool math.

Centralizes the fixed-point scale, the power approximation tunables and the
documented tolerances that callers compare results against.
"""

# Fixed-point scale: a real value v is stored as the integer v * 10^18
ONE_18 = 10**18

# Largest value any fixed-point result may take (unsigned 256-bit word)
UINT256_MAX = 2**256 - 1

# Power approximation domain for fractional exponents: 0 < base < 2.
# The binomial series in (base - 1) diverges at base >= 2.
MIN_POW_BASE = 1  # 1 wei
MAX_POW_BASE = 2 * ONE_18 - 1

# Maximum number of series terms summed for the fractional part of an
# exponent. This is the binding accuracy knob: error is non-increasing in it.
# With 256 terms the worst error over base in [0.05, 1.95] and exponent in
# (0, 10] stays below 1e-7.
POW_MAX_TERMS = 256

# Terms smaller than this stop the series early
POW_PRECISION = 1e-10
POW_PRECISION_RAW = ONE_18 // 10**10  # 1e-10 in fixed-point

# Documented absolute error of pow_approx over base in [0.05, 1.95] and
# exponent in (0, 10]
POW_APPROX_TOLERANCE = 1e-6

# Documented absolute error of swap_amount_out_approx per unit of balance_out:
# |approx - exact| <= balance_out * SWAP_APPROX_TOLERANCE
SWAP_APPROX_TOLERANCE = POW_APPROX_TOLERANCE

# Significant digits used by the Decimal-backed exact fixed-point power
EXACT_POW_PRECISION = 60
