import math
import random

import pytest

from points.models import NoUsableDataError, Point
from progress.models import NextStopStatus
from progress.session import RouteSession, start_session
from routing.policy import RouteConstraint

KM_DEG = 180 / (math.pi * 6371)

START = (0.0, 0.0)

@pytest.fixture
def points():
    """
    P1 1 km east, P2 3 km west, P3 1.5 km north of (0, 0).
    With the default 2 km cap the route from (0, 0) is P1, P3.
    """
    return (
        Point.new("P1", "addr 1", 0.0, 1.0 * KM_DEG),
        Point.new("P2", "addr 2", 0.0, -3.0 * KM_DEG),
        Point.new("P3", "addr 3", 1.5 * KM_DEG, 0.0),
    )

@pytest.fixture
def session(points):
    return RouteSession(points=points)

def test_session_requires_points():
    with pytest.raises(NoUsableDataError):
        RouteSession(points=())

def test_no_route_before_start(session):
    assert session.route == []
    assert session.next_stop() is None
    assert session.next_stop_status() == NextStopStatus.NO_ROUTE
    assert session.progress().total == 0

def test_set_start_plans_route(session, points):
    p1, p2, p3 = points

    planned = session.set_start(START)

    assert planned.route == [p1, p3]
    assert session.route == [p1, p3]
    assert session.relaxed is False
    assert session.next_stop() == p1
    assert session.next_stop_status() == NextStopStatus.NEXT

def test_progress_and_ordering(session, points):
    p1, p2, p3 = points
    session.set_start(START)

    assert session.toggle_completed(p1) is True
    summary = session.progress()

    # 1. counts only cover the route
    assert (summary.total, summary.completed, summary.remaining) == (2, 1, 1)
    assert summary.distance_km == pytest.approx(1.0 + math.sqrt(1 + 1.5 ** 2), rel=1e-4)

    # 2. pending points come before completed ones, positions keep route order
    entries = session.ordered_entries()
    assert [(e.index, e.point.name, e.completed) for e in entries] == [(1, "P3", False), (0, "P1", True)]
    assert session.next_stop() == p3

    # 3. all visited
    session.mark_completed(p3)
    assert session.next_stop() is None
    assert session.next_stop_status() == NextStopStatus.ALL_DONE

    # 4. toggling back
    assert session.toggle_completed(p1) is False
    assert session.next_stop() == p1

def test_new_start_drops_completions_off_the_route(session, points):
    p1, p2, p3 = points
    session.set_start(START)
    session.mark_completed(p1)
    session.mark_completed(p3)

    # from P2's location only P2 itself is within 2 km
    session.set_start(p2.coordinates)

    assert session.route == [p2]
    assert session.completed_keys == set()

def test_changing_limit_replans_only_with_a_start(session, points):
    p1, p2, p3 = points

    assert session.set_max_step(5) is None
    assert session.constraint.max_step_km == 5

    session.set_start(START)
    assert len(session.route) == 3

    # clamped to 0.5 km: nothing within reach, so the cap is relaxed
    planned = session.set_max_step(0.1)
    assert session.constraint.max_step_km == 0.5
    assert planned.relaxed is True
    assert session.relaxed is True

    session.set_filter_enabled(False)
    assert session.relaxed is False
    assert len(session.route) == 3

def test_completions_survive_replanning_when_still_on_route(session, points):
    p1, p2, p3 = points
    session.set_start(START)
    session.mark_completed(p1)

    session.set_constraint(RouteConstraint(enabled=False))

    assert session.is_completed(p1)
    assert session.progress().completed == 1

def test_preferred_start_is_secret_spot():
    plain = Point.new("Surf Coffee", "addr", 55.70, 37.60)
    secret = Point.new("Surf Coffee SECRET  Spot", "addr", 55.75, 37.61)
    session = RouteSession(points=(plain, secret))

    assert session.preferred_start() == secret.coordinates
    assert session.default_start(random.Random(0)) == secret.coordinates

def test_default_start_falls_back_to_a_random_point(session, points):
    assert session.preferred_start() is None
    assert session.default_start(random.Random(3)) in [p.coordinates for p in points]

def test_start_session_plans_immediately(points):
    session = start_session(points, rng=random.Random(1))

    assert session.start is not None
    assert session.route
