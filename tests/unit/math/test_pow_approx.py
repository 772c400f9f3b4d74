"""Tests for the floating-point power approximation.

The scan grid mirrors the accuracy fence of the reference suite: base steps
down geometrically from 1.95 and exponent from 10, both by a factor of 0.95.
"""

import pytest
from structlog.testing import capture_logs

from tests.helpers import APPROX_TOLERANCE, SCAN_TOLERANCE, FixturePoint, points_for
from wpool.config import PowConfig
from wpool.constants import POW_APPROX_TOLERANCE
from wpool.errors import DomainError, PowBaseOutOfBounds
from wpool.math.pow_approx import pow_approx, pow_fraction, pow_int


def _geometric(start: float, stop: float, factor: float = 0.95) -> list[float]:
    values = []
    value = start
    while value > stop:
        values.append(value)
        value *= factor
    return values


class TestPowApproxIdentity:
    """Identity and exact cases."""

    @pytest.mark.parametrize("exponent", [0.0, 0.1, 0.5, 1.0, 2.75, 7.25, 10.0, -1.5])
    def test_base_one_is_exactly_one(self, exponent: float) -> None:
        """pow_approx(1, anything) == 1."""
        assert pow_approx(1.0, exponent) == 1.0

    def test_zero_exponent(self) -> None:
        assert pow_approx(0.37, 0.0) == 1.0

    def test_integer_exponent_has_no_series_error(self) -> None:
        """Whole exponents go through squaring only."""
        assert pow_approx(1.5, 3.0) == 3.375
        assert pow_approx(0.5, 4.0) == 0.0625

    def test_integer_exponent_allows_large_base(self) -> None:
        """Squaring is exact for any positive base."""
        assert pow_approx(3.0, 2.0) == 9.0

    def test_negative_exponent(self) -> None:
        assert pow_approx(0.5, -2.0) == 4.0
        assert pow_approx(1.5, -0.5) == pytest.approx(1.5**-0.5, abs=APPROX_TOLERANCE)


class TestPowApproxAccuracy:
    """Agreement with native exponentiation."""

    @pytest.mark.parametrize("point", points_for("pow_approx"), ids=lambda p: p.id)
    def test_fixture_points(self, point: FixturePoint) -> None:
        assert pow_approx(*point.args) == pytest.approx(point.result, abs=APPROX_TOLERANCE)

    def test_scan_grid_within_bound(self) -> None:
        """Error stays within the scan bound at every sampled grid point."""
        failures = []
        for base in _geometric(1.95, 0.05):
            for exponent in _geometric(10.0, 0.1):
                error = abs(pow_approx(base, exponent) - base**exponent)
                if error > SCAN_TOLERANCE:
                    failures.append((base, exponent, error))
        assert failures == []

    def test_scan_grid_within_documented_tolerance(self) -> None:
        """The documented tolerance is much tighter than the scan bound."""
        worst = max(
            abs(pow_approx(base, exponent) - base**exponent)
            for base in _geometric(1.95, 0.05)
            for exponent in _geometric(10.0, 0.1)
        )
        assert worst <= POW_APPROX_TOLERANCE

    def test_error_non_increasing_in_term_cap(self) -> None:
        """More terms never make the approximation worse."""
        base, exponent = 0.2, 0.5
        errors = [
            abs(pow_approx(base, exponent, config=PowConfig(max_terms=k)) - base**exponent)
            for k in (2, 4, 8, 16, 32, 64, 128, 256)
        ]
        assert errors == sorted(errors, reverse=True)
        assert errors[-1] < errors[0]


class TestPowApproxDomain:
    """Domain errors."""

    @pytest.mark.parametrize("base", [0.0, -0.5, -2.0])
    def test_non_positive_base_raises(self, base: float) -> None:
        with pytest.raises(PowBaseOutOfBounds):
            pow_approx(base, 1.5)

    @pytest.mark.parametrize("base", [0.0, -3.0])
    def test_non_positive_base_raises_for_integer_exponent(self, base: float) -> None:
        with pytest.raises(PowBaseOutOfBounds):
            pow_approx(base, 2.0)

    @pytest.mark.parametrize("base", [2.0, 2.5])
    def test_base_at_or_above_two_raises_for_fraction(self, base: float) -> None:
        """The series diverges, so there is no silent extrapolation."""
        with pytest.raises(PowBaseOutOfBounds, match="below 2"):
            pow_approx(base, 0.5)

    def test_pow_base_error_is_domain_error(self) -> None:
        assert issubclass(PowBaseOutOfBounds, DomainError)


class TestPowHelpers:
    """pow_int and pow_fraction."""

    def test_pow_int(self) -> None:
        assert pow_int(2.0, 10) == 1024.0
        assert pow_int(2.0, 0) == 1.0
        assert pow_int(2.0, -2) == 0.25

    def test_pow_fraction_zero(self) -> None:
        assert pow_fraction(0.7, 0.0) == 1.0

    def test_pow_fraction_half(self) -> None:
        assert pow_fraction(0.25, 0.5) == pytest.approx(0.5, abs=1e-9)

    def test_term_cap_reached_is_logged(self) -> None:
        """Hitting the cap before the precision cut-off leaves a debug event."""
        with capture_logs() as logs:
            pow_fraction(0.1, 0.5, PowConfig(max_terms=3))
        assert any(log["event"] == "pow_series_term_cap_reached" for log in logs)

    def test_precision_exit_is_not_logged(self) -> None:
        with capture_logs() as logs:
            pow_fraction(1.1, 0.5)
        assert logs == []


class TestPowConfig:
    """PowConfig validation."""

    def test_defaults(self) -> None:
        config = PowConfig()
        assert config.max_terms == 256
        assert config.precision == 1e-10
        assert config.precision_raw == 10**8

    def test_zero_terms_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_terms"):
            PowConfig(max_terms=0)

    def test_negative_precision_rejected(self) -> None:
        with pytest.raises(ValueError):
            PowConfig(precision=-1.0)

    def test_frozen(self) -> None:
        config = PowConfig()
        with pytest.raises(AttributeError):
            config.max_terms = 8  # type: ignore[misc]
