"""
Purpose: Shorten a route with 2-opt local search.
What it does:

Repeats full passes over index pairs (i, k), 0 <= i < n-2 and i+2 <= k < n.
Each pair builds a candidate that keeps route[:i+1], reverses route[i+1:k+1]
and keeps route[k+1:]. A candidate is adopted when it is shorter than the
current best by more than epsilon_km. Passes repeat until one adopts nothing.

Path length always includes the leg from the external start to the first
point. The first point itself is never moved.

Routes longer than the threshold are returned untouched.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from points.models import LatLon, Point

from .geo import path_length_km

logger = logging.getLogger(__name__)

TWO_OPT_THRESHOLD = 160
TWO_OPT_EPSILON_KM = 0.001


def route_distance_km(route: Sequence[Point], start: LatLon) -> float:
    """
    start -> p1 -> ... -> pn, great-circle legs in kilometres.
    """
    return path_length_km(start, [point.coordinates for point in route])


def two_opt_swap(route: Sequence[Point], i: int, k: int) -> List[Point]:
    head = list(route[: i + 1])
    middle = list(reversed(route[i + 1 : k + 1]))
    tail = list(route[k + 1 :])
    return head + middle + tail


def optimize_route(
    route: Sequence[Point],
    start: LatLon,
    threshold: int = TWO_OPT_THRESHOLD,
    epsilon_km: float = TWO_OPT_EPSILON_KM,
) -> List[Point]:
    """
    2-opt improve route (see module docstring).

    Returns a new list; the input is never mutated. The result is a
    permutation of the input whose length is never greater.
    """
    if len(route) > threshold:
        logger.debug(f"Route has {len(route)} points (> {threshold}), skipping 2-opt")
        return list(route)

    if len(route) < 3:
        return list(route)

    best = list(route)
    best_distance = route_distance_km(best, start)
    passes = 0
    improved = True

    while improved:
        improved = False
        passes += 1
        for i in range(len(best) - 2):
            for k in range(i + 2, len(best)):
                candidate = two_opt_swap(best, i, k)
                candidate_distance = route_distance_km(candidate, start)
                if candidate_distance + epsilon_km < best_distance:
                    best = candidate
                    best_distance = candidate_distance
                    improved = True

    logger.debug(f"2-opt converged after {passes} passes at {best_distance:.3f} km")
    return best
