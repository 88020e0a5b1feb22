"""
Purpose: Domain models for the Points capability.
What it does:
- Defines core data structures:
- Point (name, address, coordinates)
- RawRecord (a single untyped row from the tabular source)

Defines the errors raised across the package boundary:
- PlannerError (base)
- NoUsableDataError (nothing survived normalization/dedup)

Rule: No parsing, no dedup logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

LatLon = Tuple[float, float]

# a raw row as it comes out of the CSV reader
RawRecord = Sequence[str]

# header name -> column position
ColumnIndex = Dict[str, int]

COORDINATE_PRECISION = 6


class PlannerError(Exception):
    """Base exception for the route planner."""
    pass


class NoUsableDataError(PlannerError):
    """Raised when normalization and dedup leave no points to route over."""
    pass


@dataclass(frozen=True)
class Point:
    """
    A coffee shop that can be visited.

    Coordinates are stored rounded to 6 decimals so that the key below
    stays stable between loads of the same data.
    """

    name: str
    address: str
    coordinates: LatLon

    @property
    def lat(self) -> float:
        return self.coordinates[0]

    @property
    def lon(self) -> float:
        return self.coordinates[1]

    @property
    def key(self) -> str:
        """
        Stable identity used by consumers (completion state, markers).
        """
        return f"{self.name}|{self.address}|{self.lat}|{self.lon}"

    @classmethod
    def new(cls, name: str, address: str, lat: float, lon: float) -> Point:
        return cls(
            name=name,
            address=address,
            coordinates=(round(lat, COORDINATE_PRECISION), round(lon, COORDINATE_PRECISION)),
        )
