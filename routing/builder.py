"""
Purpose: Build a visiting order with a distance-capped greedy nearest neighbour.
What it does:

Starting at an external coordinate, repeatedly hops to the closest unvisited
point that is no further than the step limit. The walk stops as soon as no
unvisited point is within reach, so the route may cover only part of the set.

Relaxation:
- if the capped walk cannot make even the first step and the cap is enabled,
  the whole walk is rerun without a cap and the result is flagged relaxed
- there is no relaxation once the route has at least one point

Ties on distance go to the point seen first in scan (canonical) order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from points.models import LatLon, Point

from .geo import haversine_km
from .policy import RouteConstraint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteResult:
    """
    Output of the route builder.
    relaxed=True means the distance cap was dropped to get a non-empty route.
    """
    route: List[Point]
    relaxed: bool = False


def build_route(
    points: Sequence[Point],
    start: LatLon,
    constraint: Optional[RouteConstraint] = None,
) -> RouteResult:
    """
    Build a route over points from start.

    Inputs:
      - points: the canonical point set (scan order decides ties)
      - start: (lat, lon) of the walker, not itself a point
      - constraint: distance filter; None means the default 2 km cap

    Output:
      - RouteResult(route, relaxed)
    """
    constraint = constraint or RouteConstraint()

    if not points:
        return RouteResult(route=[], relaxed=False)

    route = nearest_neighbor_walk(points, start, constraint.limit_km)
    if route or not constraint.enabled:
        return RouteResult(route=route, relaxed=False)

    logger.info(
        f"No point within {constraint.max_step_km} km of start {start}, retrying without the distance cap"
    )
    return RouteResult(route=nearest_neighbor_walk(points, start, math.inf), relaxed=True)


def nearest_neighbor_walk(points: Sequence[Point], start: LatLon, limit_km: float) -> List[Point]:
    """
    One greedy pass under a fixed step limit (math.inf for no cap).
    """
    # indices keep canonical order so the scan order is stable
    remaining: List[int] = list(range(len(points)))
    route: List[Point] = []
    current = start

    while remaining:
        best_index: Optional[int] = None
        best_distance = math.inf

        for idx in remaining:
            distance = haversine_km(current, points[idx].coordinates)
            if distance <= limit_km and distance < best_distance:
                best_distance = distance
                best_index = idx

        if best_index is None:
            break

        chosen = points[best_index]
        route.append(chosen)
        remaining.remove(best_index)
        current = chosen.coordinates

    return route
