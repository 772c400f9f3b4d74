"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Tolerances and sample pools
- factories: Fixed-point value factories
- points: Fixture point tables
"""

from tests.helpers.constants import (
    APPROX_TOLERANCE,
    BALANCED_POOL,
    FLOAT_EQ_TOLERANCE,
    FRACTIONAL_POOL,
    SCAN_TOLERANCE,
    SKEWED_POOL,
)
from tests.helpers.factories import bfp, bfp_args, wei
from tests.helpers.points import FixturePoint, load_points, points_for

__all__ = [
    # Constants
    "APPROX_TOLERANCE",
    "FLOAT_EQ_TOLERANCE",
    "SCAN_TOLERANCE",
    "BALANCED_POOL",
    "SKEWED_POOL",
    "FRACTIONAL_POOL",
    # Factories
    "bfp",
    "bfp_args",
    "wei",
    # Points
    "FixturePoint",
    "load_points",
    "points_for",
]
