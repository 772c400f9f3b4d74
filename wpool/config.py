"""Power approximation configuration."""

from dataclasses import dataclass

from wpool.constants import POW_MAX_TERMS, POW_PRECISION, POW_PRECISION_RAW


@dataclass(frozen=True)
class PowConfig:
    """Centralized configuration for the power series approximation.

    Holds the tunables of the binomial series used for fractional exponents,
    so tests and the API can run with different accuracy/cost trade-offs
    without touching call sites.

    Attributes:
        max_terms: Maximum number of series terms (default: 256). Binding
            error control: the approximation never gets worse as this grows.
        precision: Float early-exit threshold; the series stops once a term's
            magnitude falls below it (default: 1e-10).
        precision_raw: Same threshold for fixed-point series, in wei
            (default: 10^8, i.e. 1e-10 at 18 decimals).
    """

    max_terms: int = POW_MAX_TERMS
    precision: float = POW_PRECISION
    precision_raw: int = POW_PRECISION_RAW

    def __post_init__(self) -> None:
        if self.max_terms < 1:
            raise ValueError(f"max_terms must be at least 1, got {self.max_terms}")
        if self.precision < 0 or self.precision_raw < 0:
            raise ValueError("precision thresholds must be non-negative")


# Default configuration instance
DEFAULT_POW_CONFIG = PowConfig()
