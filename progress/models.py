"""
Purpose: Data models for route progress tracking.
What it does:
- Defines what a consumer needs to render a route list:
- RouteEntry (position in route, point, completed flag)
- ProgressSummary (total / completed / remaining / distance)
- NextStopStatus (which "next stop" message applies)

Rule: No routing, no state transitions. Models only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from points.models import Point


class NextStopStatus(str, Enum):
    """
    What the "next stop" panel should say.
    """
    NO_ROUTE = "no_route"
    NEXT = "next"
    ALL_DONE = "all_done"
    LIMITED_BY_DISTANCE = "limited_by_distance"
    MARK_VISITED = "mark_visited"


@dataclass(frozen=True)
class RouteEntry:
    index: int  # 0-based position in the route, display as index + 1
    point: Point
    completed: bool


@dataclass(frozen=True)
class ProgressSummary:
    total: int
    completed: int
    remaining: int
    distance_km: float
