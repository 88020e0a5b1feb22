"""
Purpose: First dedup pass, collapse records that share a quantization key.
What it does:

Groups points by their rounded-coordinate key (5 decimals by default).
The first point in source order seeds a bucket; later points replace it
only when they score strictly higher.

Outputs the survivors in first-seen bucket order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from ..models import Point
from .scoring import ScoreFn, should_replace


@dataclass(frozen=True)
class BucketPassResult:
    points: List[Point]
    merged: int


def dedup_by_bucket(entries: Iterable[Tuple[str, Point]], score: ScoreFn) -> BucketPassResult:
    """
    entries: (quantization_key, point) pairs in source order.
    """
    # dict keeps insertion order, replacing a value keeps the bucket's position
    buckets: Dict[str, Point] = {}
    merged = 0

    for key, candidate in entries:
        existing = buckets.get(key)
        if existing is None:
            buckets[key] = candidate
            continue

        merged += 1
        if should_replace(existing, candidate, score):
            buckets[key] = candidate

    return BucketPassResult(points=list(buckets.values()), merged=merged)
