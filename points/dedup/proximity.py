"""
Purpose: Second dedup pass, collapse survivors that sit within a few metres of each other.
What it does:

Two records can fall into different 5-decimal buckets and still be the same
venue when they straddle a bucket boundary. For each candidate (in order) we
look for the CLOSEST already accepted point within the threshold:

- none within threshold -> accept the candidate as a new point
- found -> keep whichever of the two scores higher (ties keep the accepted one)

Rule: The scan keeps a running minimum over every accepted point, it never
stops at the first match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from routing.geo import haversine_m

from ..models import Point
from .scoring import ScoreFn, should_replace


@dataclass(frozen=True)
class ProximityPassResult:
    points: List[Point]
    merged: int


def dedup_by_proximity(
    points: Sequence[Point],
    score: ScoreFn,
    threshold_m: float = 50.0,
) -> ProximityPassResult:
    result: List[Point] = []
    merged = 0

    for candidate in points:
        best_index = _closest_within(result, candidate, threshold_m)

        if best_index is None:
            result.append(candidate)
            continue

        merged += 1
        if should_replace(result[best_index], candidate, score):
            result[best_index] = candidate

    return ProximityPassResult(points=result, merged=merged)


# -------------------------
# Internal helpers
# -------------------------

def _closest_within(accepted: Sequence[Point], candidate: Point, threshold_m: float) -> Optional[int]:
    best_index: Optional[int] = None
    best_distance = float("inf")

    for index, existing in enumerate(accepted):
        distance = haversine_m(existing.coordinates, candidate.coordinates)
        if distance < threshold_m and distance < best_distance:
            best_distance = distance
            best_index = index

    return best_index
