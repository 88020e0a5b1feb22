#Purpose: Great-circle math shared by dedup, route building and route optimisation.
#Pure functions over (lat, lon) tuples in decimal degrees.
#Typical responsibilities:
#haversine distance in kilometres / metres
#initial bearing between two points
#total path length of a route that starts at an external coordinate
#No I/O, no routing decisions.

from __future__ import annotations

import math
from typing import Iterable, Sequence, Tuple

#internal coordinate type :(lat,lon)
LatLon = Tuple[float, float]

EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_M = EARTH_RADIUS_KM * 1000.0


def haversine_km(a: LatLon, b: LatLon) -> float:
    """
    Great-circle distance between two (lat, lon) points in kilometres.
    """
    return _central_angle(a, b) * EARTH_RADIUS_KM


def haversine_m(a: LatLon, b: LatLon) -> float:
    """
    Great-circle distance between two (lat, lon) points in metres.
    """
    return _central_angle(a, b) * EARTH_RADIUS_M


def initial_bearing(a: LatLon, b: LatLon) -> float:
    """
    Initial compass bearing from a to b in degrees, 0 = north, clockwise, [0, 360).
    """
    lat1, lon1 = math.radians(a[0]), math.radians(a[1])
    lat2, lon2 = math.radians(b[0]), math.radians(b[1])
    d_lon = lon2 - lon1

    x = math.sin(d_lon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(d_lon)
    return (math.degrees(math.atan2(x, y)) + 360.0) % 360.0


def path_length_km(start: LatLon, coordinates: Sequence[LatLon]) -> float:
    """
    Sum of legs start -> c0 -> c1 -> ... -> cN. Empty path is 0.
    """
    if not coordinates:
        return 0.0
    total = haversine_km(start, coordinates[0])
    for a, b in zip(coordinates[:-1], coordinates[1:]):
        total += haversine_km(a, b)
    return total


def leg_lengths_km(start: LatLon, coordinates: Iterable[LatLon]) -> list:
    """
    Individual leg distances, first leg from start.
    """
    legs = []
    current = start
    for coord in coordinates:
        legs.append(haversine_km(current, coord))
        current = coord
    return legs


# -------------------------
# Internal helpers
# -------------------------

def _central_angle(a: LatLon, b: LatLon) -> float:
    lat1, lon1 = a
    lat2, lon2 = b
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    hav = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # rounding can push hav just outside [0, 1] for antipodal pairs
    hav = min(1.0, max(0.0, hav))
    return 2 * math.atan2(math.sqrt(hav), math.sqrt(1 - hav))
