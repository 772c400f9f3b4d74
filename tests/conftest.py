"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from tests.helpers.points import PointTable, load_points
from wpool.api.endpoints import get_pow_config
from wpool.api.main import app
from wpool.pricing import (
    FixedPointPricingEngine,
    FloatPricingEngine,
    PricingEngine,
    RemotePricingEngine,
)


@pytest.fixture(scope="session")
def points() -> PointTable:
    """Immutable fixture point tables, keyed by group name."""
    return load_points()


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create a test client for the pricing API."""
    get_pow_config.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Pricing engines
# =============================================================================

ENGINE_NAMES = ["float", "fixed", "remote"]


@pytest.fixture(params=ENGINE_NAMES)
def engine(request: pytest.FixtureRequest) -> Iterator[PricingEngine]:
    """Every PricingEngine implementation, one test run per engine.

    The remote engine talks to the API through FastAPI's TestClient, which is
    an httpx.Client, so no server process is needed.
    """
    if request.param == "float":
        yield FloatPricingEngine()
    elif request.param == "fixed":
        yield FixedPointPricingEngine()
    else:
        get_pow_config.cache_clear()
        with TestClient(app) as test_client:
            yield RemotePricingEngine(test_client)
        app.dependency_overrides.clear()


@pytest.fixture
def oracle() -> FloatPricingEngine:
    """The float engine, whose exact operations are the reference."""
    return FloatPricingEngine()
