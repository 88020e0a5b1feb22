"""
Purpose: Decide which of two records for the same place should survive.
What it does:

Computes a quality score per point:

min(len(name), 80)

+ min(len(address) * 0.5, 60)

+ 15 if the name carries a collab / variant marker ('×' or 'x')

+ 10 if the name does NOT end with the plain brand suffix

+ 3 if the address mentions the city

Applies the replacement rule: a candidate replaces the stored point only
when its score is strictly higher (ties keep the stored point).

Rule: Scoring only ranks records; it does not bucket or measure distances.
"""

# points/dedup/scoring.py

from __future__ import annotations

import re
from typing import Callable, Optional

from ..models import Point
from ..policy import PointsPolicy, default_points_policy

# Provide a function that scores a point; higher means "more complete record".
ScoreFn = Callable[[Point], float]

_VARIANT_MARKER = re.compile("[×x]", re.IGNORECASE)


def entry_score(point: Point, policy: Optional[PointsPolicy] = None) -> float:
    """
    Default quality score (see module docstring for the weights).
    """
    policy = policy or default_points_policy()
    name = point.name or ""
    address = point.address or ""

    score = 0.0
    score += min(len(name), 80)
    score += min(len(address) * 0.5, 60)

    if _VARIANT_MARKER.search(name):
        score += 15
    if not name.strip().lower().endswith(policy.brand_suffix.lower()):
        score += 10
    if policy.city_name.lower() in address.lower():
        score += 3

    return score


def score_for_policy(policy: PointsPolicy) -> ScoreFn:
    """
    Bind the default score to a policy so callers get a plain ScoreFn.
    """
    return lambda point: entry_score(point, policy)


def should_replace(existing: Point, candidate: Point, score: ScoreFn) -> bool:
    return score(candidate) > score(existing)
