"""Fixture point tables for pricing tests.

Points live in tests/fixtures/points.json as a mapping from a group name to
an ordered list of {"args": [...], "result": ...} rows. They are loaded into
immutable tables and handed to tests through pytest fixtures.

Usage:
    from tests.helpers.points import load_points

    points = load_points()
    for point in points["spot_price"]:
        assert spot_price(*point.args) == pytest.approx(point.result)
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

POINTS_PATH = Path(__file__).parent.parent / "fixtures" / "points.json"


@dataclass(frozen=True)
class FixturePoint:
    """One parameter tuple and its reference result."""

    args: tuple[float, ...]
    result: float

    @property
    def id(self) -> str:
        """Readable pytest id, e.g. '2,1,2,1,1,0'."""
        return ",".join(f"{arg:g}" for arg in self.args)


PointTable = Mapping[str, tuple[FixturePoint, ...]]


@lru_cache(maxsize=1)
def load_points(path: Path = POINTS_PATH) -> PointTable:
    """Load fixture points into an immutable table.

    Args:
        path: JSON file with the point groups

    Returns:
        Read-only mapping of group name to ordered points
    """
    with open(path) as f:
        data = json.load(f)

    return MappingProxyType(
        {
            group: tuple(
                FixturePoint(args=tuple(float(a) for a in row["args"]), result=float(row["result"]))
                for row in rows
            )
            for group, rows in data.items()
        }
    )


def points_for(group: str) -> tuple[FixturePoint, ...]:
    """Points of one group, for use in pytest.mark.parametrize."""
    return load_points()[group]
