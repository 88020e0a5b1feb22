"""
Purpose: The route planning "orchestrator" (single entry point).
What it does:

- builds the capped nearest-neighbour route (builder.py), relaxing the cap if needed
- runs 2-opt on it when it is small enough (optimizer.py)
- reports the total walking distance and the relaxed flag

Rule: Planner is the only file other modules should call directly for routing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from points.models import LatLon, Point

from .builder import build_route
from .optimizer import optimize_route, route_distance_km
from .policy import RouteConstraint, RoutePolicy


@dataclass(frozen=True)
class PlannedRoute:
    """
    Final route for one (start, constraint) request.
    """
    route: List[Point]
    relaxed: bool
    total_km: float
    optimized: bool

    def __len__(self) -> int:
        return len(self.route)


def plan_route(
    points: Sequence[Point],
    start: LatLon,
    constraint: Optional[RouteConstraint] = None,
    *,
    policy: Optional[RoutePolicy] = None,
) -> PlannedRoute:
    """
    Build and optimise a route from start over points.

    Parameters
    ----------
    points:
        Canonical point set.
    start:
        (lat, lon) start coordinate.
    constraint:
        Distance filter; defaults to policy.default_constraint().
    policy:
        RoutePolicy with the 2-opt threshold and epsilon.
    """
    policy = policy or RoutePolicy()
    policy.validate()
    constraint = constraint or policy.default_constraint()

    built = build_route(points, start, constraint)

    optimized = 3 <= len(built.route) <= policy.two_opt_threshold
    route = optimize_route(
        built.route,
        start,
        threshold=policy.two_opt_threshold,
        epsilon_km=policy.two_opt_epsilon_km,
    )

    return PlannedRoute(
        route=route,
        relaxed=built.relaxed,
        total_km=route_distance_km(route, start),
        optimized=optimized,
    )
