import math
import random
from itertools import combinations

import pytest

from points.csv_reader import build_column_index
from points.dedup import canonical_rows, entry_score, normalize_and_deduplicate
from points.dedup.buckets import dedup_by_bucket
from points.dedup.proximity import dedup_by_proximity
from points.models import NoUsableDataError, Point
from points.policy import PointsPolicy
from routing.geo import haversine_m

# degrees of longitude per metre on the equator
METRE_DEG = 180 / (math.pi * 6371000)

COLUMNS = build_column_index(["latitude", "longitude", "org_name", "full_address"])

def row(lat, lon, name, address="Москва, Тверская ул., 1"):
    return [f"{lat:.6f}", f"{lon:.6f}", name, address]

def on_equator(name, metres_east):
    return Point.new(name, "addr", 0.0, metres_east * METRE_DEG)

def by_name_score(scores):
    return lambda point: scores[point.name]

def test_entry_score_weights():
    """
    Score = capped name length + capped half address length + bonuses.
    """
    plain = Point.new("Surf Coffee", "ул. Арбат", 0, 0)
    collab = Point.new("Surf Coffee x Garage", "Москва, ул. Арбат", 0, 0)
    other = Point.new("Coffee Bean", "", 0, 0)

    assert entry_score(plain) == 11 + 4.5
    # +15 variant marker, +10 no brand suffix, +3 city in address
    assert entry_score(collab) == 20 + 8.5 + 15 + 10 + 3
    assert entry_score(other) == 11 + 10

    long_entry = Point.new("n" * 200, "a" * 500, 0, 0)
    assert entry_score(long_entry) == 80 + 60 + 10

def test_bucket_pass_keeps_first_on_ties_and_upgrades_on_higher_score():
    a = Point.new("A", "addr", 1.0, 1.0)
    b = Point.new("B", "addr", 1.0, 1.0)
    c = Point.new("C", "addr", 2.0, 2.0)

    tie = dedup_by_bucket([("k1", a), ("k2", c), ("k1", b)], by_name_score({"A": 1, "B": 1, "C": 0}))
    assert tie.points == [a, c]
    assert tie.merged == 1

    upgraded = dedup_by_bucket([("k1", a), ("k2", c), ("k1", b)], by_name_score({"A": 1, "B": 2, "C": 0}))
    # the replacement stays in the bucket's original position
    assert upgraded.points == [b, c]

def test_example_close_records_collapse_to_best_scoring():
    """
    Two records ~33 m apart in different 5-decimal buckets are one venue;
    the more complete record survives. A far away point is untouched.
    """
    rows = [
        row(0.0, 0.0, "Surf Coffee"),
        row(0.0, 0.0003, "Surf Coffee x Garage"),
        row(1.0, 1.0, "Surf Coffee"),
    ]

    result = normalize_and_deduplicate(rows, COLUMNS)

    assert len(result) == 2
    assert [p.name for p in result.points] == ["Surf Coffee x Garage", "Surf Coffee"]
    assert result.points[0].coordinates == (0.0, 0.0003)
    assert result.proximity_merges == 1

def test_exact_duplicates_merge_in_bucket_pass():
    rows = [
        row(55.751244, 37.618423, "Surf Coffee", "Тверская"),
        row(55.751244, 37.618423, "Surf Coffee", "Москва, Тверская ул., 1"),
        ["", "37.6", "broken", "addr"],
    ]

    result = normalize_and_deduplicate(rows, COLUMNS)

    assert len(result) == 1
    assert result.points[0].address == "Москва, Тверская ул., 1"
    assert result.bucket_merges == 1
    assert result.rejected_rows == 1

def test_proximity_pass_picks_closest_accepted_point_not_first():
    """
    P and Q are 60 m apart so both are accepted. R is 35 m from P and
    25 m from Q: it must be compared against Q.
    """
    p = on_equator("P", 0)
    q = on_equator("Q", 60)
    r = on_equator("R", 35)

    result = dedup_by_proximity([p, q, r], by_name_score({"P": 0, "Q": 0, "R": 5}))

    assert result.points == [p, r]

def test_proximity_chain_when_middle_point_wins():
    """
    X - 40 m - Y - 40 m - Z. When Y outscores X it replaces X, and Z then
    lands within 40 m of Y and loses to it.
    """
    x, y, z = on_equator("X", 0), on_equator("Y", 40), on_equator("Z", 80)

    result = dedup_by_proximity([x, y, z], by_name_score({"X": 1, "Y": 2, "Z": 0}))

    assert result.points == [y]

def test_proximity_chain_when_middle_point_loses():
    """
    Same chain, but Y loses to X. X stays put and Z (80 m from X) survives.
    """
    x, y, z = on_equator("X", 0), on_equator("Y", 40), on_equator("Z", 80)

    result = dedup_by_proximity([x, y, z], by_name_score({"X": 2, "Y": 1, "Z": 0}))

    assert result.points == [x, z]

def test_threshold_is_strict():
    a, b = on_equator("A", 0), on_equator("B", 60)

    result = dedup_by_proximity([a, b], by_name_score({"A": 0, "B": 1}), threshold_m=haversine_m(a.coordinates, b.coordinates))

    assert result.points == [a, b]

def test_dedup_is_idempotent():
    """
    Feeding the canonical set back in as raw rows changes nothing.
    """
    # shops ~300 m apart, every third one re-exported ~11 m away and once verbatim
    rows = []
    for i in range(8):
        for j in range(8):
            lat = 55.75 + i * 0.003
            lon = 37.61 + j * 0.005
            rows.append(row(lat, lon, f"Surf Coffee {i}{j}"))
            if (i + j) % 3 == 0:
                rows.append(row(lat + 0.0001, lon, "Surf Coffee x Dup"))
                rows.append(row(lat, lon, "Surf Coffee", "Тверская"))

    first = normalize_and_deduplicate(rows, COLUMNS)
    column_index, again_rows = canonical_rows(first.points)
    second = normalize_and_deduplicate(again_rows, column_index)

    assert second.points == first.points

def test_survivors_are_at_least_threshold_apart_without_replacements():
    """
    With a constant score nothing is ever replaced, so every accepted pair
    must be at least 50 m apart.
    """
    rng = random.Random(5)
    rows = [row(55.75 + rng.uniform(-0.003, 0.003), 37.61 + rng.uniform(-0.003, 0.003), f"S{i}") for i in range(150)]

    result = normalize_and_deduplicate(rows, COLUMNS, score=lambda point: 0)

    for a, b in combinations(result.points, 2):
        assert haversine_m(a.coordinates, b.coordinates) >= 50

def test_custom_threshold_from_policy():
    rows = [row(0.0, 0.0, "A"), row(0.0, 80 * METRE_DEG, "B")]

    assert len(normalize_and_deduplicate(rows, COLUMNS)) == 2
    assert len(normalize_and_deduplicate(rows, COLUMNS, policy=PointsPolicy(proximity_threshold_m=100))) == 1

def test_no_usable_rows_raises():
    rows = [["", "", "", ""], ["x", "y", "name", "addr"]]

    with pytest.raises(NoUsableDataError):
        normalize_and_deduplicate(rows, COLUMNS)

    with pytest.raises(NoUsableDataError):
        normalize_and_deduplicate([], COLUMNS)

def test_out_of_range_row_is_counted_not_raised():
    rows = [["100", "0", "Broken export", "addr"], ["80", "180", "Surf Coffee", "addr"]]

    result = normalize_and_deduplicate(rows, COLUMNS)

    assert [p.name for p in result.points] == ["Surf Coffee"]
    assert result.rejected_rows == 1

def test_invalid_policy_is_rejected():
    with pytest.raises(ValueError):
        normalize_and_deduplicate([row(0, 0, "A")], COLUMNS, policy=PointsPolicy(proximity_threshold_m=-1))
