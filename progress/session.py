"""
Purpose: Owns the per-user routing state (start, distance filter, visited points).
What it does:
- Holds what used to be page-level globals in one explicit object:
   - the canonical point set (read-only)
   - current start coordinate and distance filter
   - current planned route and its relaxed flag
   - completion state (set of point keys)

Provides operations:
   - set_start(coords) / set_max_step(km) / set_filter_enabled(flag)
   - toggle_completed(point) / mark_completed(point, done)
   - ordered_entries() / next_stop() / progress() / next_stop_status()

Rule: Session owns state transitions, routing owns the algorithms.
"""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from points.models import LatLon, NoUsableDataError, Point
from routing.planner import PlannedRoute, plan_route
from routing.policy import RouteConstraint, RoutePolicy

from .models import NextStopStatus, ProgressSummary, RouteEntry

logger = logging.getLogger(__name__)

_PREFERRED_START = re.compile(r"secret\s*spot", re.IGNORECASE)


@dataclass
class RouteSession:
    """
    In-memory route state for one user.

    The point set is fixed at construction; everything else is recomputed
    whenever the start or the distance filter changes.
    """
    points: Tuple[Point, ...]
    policy: RoutePolicy = field(default_factory=RoutePolicy)

    constraint: Optional[RouteConstraint] = None
    start: Optional[LatLon] = None

    _planned: Optional[PlannedRoute] = None
    _completed: Set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.points = tuple(self.points)
        if not self.points:
            raise NoUsableDataError("cannot start a route session without points")
        self.policy.validate()
        if self.constraint is None:
            self.constraint = self.policy.default_constraint()

    # --- Public API ---

    @property
    def route(self) -> List[Point]:
        return list(self._planned.route) if self._planned else []

    @property
    def relaxed(self) -> bool:
        return bool(self._planned and self._planned.relaxed)

    @property
    def completed_keys(self) -> Set[str]:
        return set(self._completed)

    def preferred_start(self) -> Optional[LatLon]:
        """
        Coordinates of the first "secret spot" point, if the data has one.
        """
        for point in self.points:
            if _PREFERRED_START.search(point.name):
                return point.coordinates
        return None

    def default_start(self, rng: Optional[random.Random] = None) -> LatLon:
        """
        Preferred start when there is one, otherwise a random point.
        """
        preferred = self.preferred_start()
        if preferred is not None:
            return preferred
        rng = rng or random.Random()
        return rng.choice(self.points).coordinates

    def set_start(self, coords: LatLon) -> PlannedRoute:
        """
        Plan a new route from coords and forget completions that fell off it.
        """
        self.start = (float(coords[0]), float(coords[1]))
        self._planned = plan_route(self.points, self.start, self.constraint, policy=self.policy)

        route_keys = {point.key for point in self._planned.route}
        dropped = self._completed - route_keys
        if dropped:
            logger.debug(f"Clearing {len(dropped)} completed points that are no longer on the route")
        self._completed &= route_keys

        logger.info(
            f"Planned {len(self._planned.route)} stops, {self._planned.total_km:.1f} km"
            f"{' (distance limit relaxed)' if self._planned.relaxed else ''}"
        )
        return self._planned

    def set_constraint(self, constraint: RouteConstraint) -> Optional[PlannedRoute]:
        self.constraint = constraint
        return self._replan()

    def set_max_step(self, value: Optional[float]) -> Optional[PlannedRoute]:
        """
        Change the step limit; the value is clamped, invalid values are ignored.
        """
        return self.set_constraint(self.policy.clamp_constraint(self.constraint, value))

    def set_filter_enabled(self, enabled: bool) -> Optional[PlannedRoute]:
        return self.set_constraint(self.constraint.with_enabled(enabled))

    def is_completed(self, point: Point) -> bool:
        return point.key in self._completed

    def mark_completed(self, point: Point, done: bool = True) -> None:
        if done:
            self._completed.add(point.key)
        else:
            self._completed.discard(point.key)

    def toggle_completed(self, point: Point) -> bool:
        """
        Flip the visited flag of point. Returns the new flag.
        """
        done = not self.is_completed(point)
        self.mark_completed(point, done)
        return done

    def ordered_entries(self) -> List[RouteEntry]:
        """
        Route entries with pending points first, then completed ones,
        each group in route order.
        """
        entries = self._entries()
        pending = [e for e in entries if not e.completed]
        done = [e for e in entries if e.completed]
        return pending + done

    def next_stop(self) -> Optional[Point]:
        for entry in self._entries():
            if not entry.completed:
                return entry.point
        return None

    def progress(self) -> ProgressSummary:
        route = self.route
        if not route:
            return ProgressSummary(total=0, completed=0, remaining=0, distance_km=0.0)

        completed = sum(1 for point in route if point.key in self._completed)
        return ProgressSummary(
            total=len(route),
            completed=completed,
            remaining=len(route) - completed,
            distance_km=self._planned.total_km,
        )

    def next_stop_status(self) -> NextStopStatus:
        if self.next_stop() is not None:
            return NextStopStatus.NEXT

        summary = self.progress()
        if summary.total == 0:
            return NextStopStatus.NO_ROUTE
        if summary.completed >= summary.total:
            return NextStopStatus.ALL_DONE
        if self.constraint.enabled and self.relaxed:
            return NextStopStatus.LIMITED_BY_DISTANCE
        return NextStopStatus.MARK_VISITED

    #---- helpers ----

    def _replan(self) -> Optional[PlannedRoute]:
        if self.start is None:
            return None
        return self.set_start(self.start)

    def _entries(self) -> List[RouteEntry]:
        return [
            RouteEntry(index=index, point=point, completed=point.key in self._completed)
            for index, point in enumerate(self.route)
        ]


def start_session(
    points: Sequence[Point],
    *,
    policy: Optional[RoutePolicy] = None,
    rng: Optional[random.Random] = None,
) -> RouteSession:
    """
    Create a session and plan from the default start right away.
    """
    session = RouteSession(points=tuple(points), policy=policy or RoutePolicy())
    session.set_start(session.default_start(rng))
    return session
