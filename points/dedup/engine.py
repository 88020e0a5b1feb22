"""
Purpose: The dedup "orchestrator" (single entry point).
What it does:

Coordinates the pipeline end-to-end:

- normalizes raw rows into points (normalizer.py)

- exact-bucket pass on the quantization key (buckets.py)

- proximity pass on the survivors (proximity.py)

- returns the canonical point set + counters for reporting

Typical public function signature:

- normalize_and_deduplicate(raw_records, column_index) -> DedupResult

Rule: Engine is the only file other modules should call directly for dedup.
"""

# points/dedup/engine.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from ..models import ColumnIndex, NoUsableDataError, Point, RawRecord
from ..normalizer import normalize_records
from ..policy import PointsPolicy
from .buckets import dedup_by_bucket
from .proximity import dedup_by_proximity
from .scoring import ScoreFn, score_for_policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DedupResult:
    """
    Output of a dedup run: the canonical point set and what happened on the way.
    """
    points: Tuple[Point, ...]
    rejected_rows: int = 0
    bucket_merges: int = 0
    proximity_merges: int = 0

    def __len__(self) -> int:
        return len(self.points)


def deduplicate(
    entries: Iterable[Tuple[str, Point]],
    *,
    policy: Optional[PointsPolicy] = None,
    score: Optional[ScoreFn] = None,
) -> DedupResult:
    """
    Run both dedup passes over already normalized (quantization_key, point) pairs.
    An empty output is returned as is; callers decide whether that is fatal.
    """
    policy = policy or PointsPolicy()
    policy.validate()
    score = score or score_for_policy(policy)

    buckets = dedup_by_bucket(entries, score)
    nearby = dedup_by_proximity(buckets.points, score, policy.proximity_threshold_m)

    return DedupResult(
        points=tuple(nearby.points),
        bucket_merges=buckets.merged,
        proximity_merges=nearby.merged,
    )


def normalize_and_deduplicate(
    raw_records: Iterable[RawRecord],
    column_index: ColumnIndex,
    *,
    policy: Optional[PointsPolicy] = None,
    score: Optional[ScoreFn] = None,
) -> DedupResult:
    """
    Main entry point (pure algorithm).

    Parameters
    ----------
    raw_records:
        Data rows in source order (header row already removed).
    column_index:
        Header name -> column position, see points.csv_reader.build_column_index.
    policy:
        PointsPolicy with column names, thresholds and score hints.
    score:
        Optional quality score override. Defaults to entry_score bound to policy.

    Returns
    -------
    DedupResult with the canonical points in first-accepted order.

    Raises
    ------
    NoUsableDataError when no point survives.
    """
    policy = policy or PointsPolicy()
    policy.validate()

    normalized = normalize_records(raw_records, column_index, policy)
    result = deduplicate(normalized.entries, policy=policy, score=score)

    logger.info(
        f"Normalized {len(normalized.entries)} rows ({normalized.rejected} rejected), "
        f"{len(result.points)} unique points after dedup "
        f"({result.bucket_merges} bucket merges, {result.proximity_merges} proximity merges)"
    )

    if not result.points:
        raise NoUsableDataError("no usable points after normalization and dedup")

    return DedupResult(
        points=result.points,
        rejected_rows=normalized.rejected,
        bucket_merges=result.bucket_merges,
        proximity_merges=result.proximity_merges,
    )


def canonical_rows(points: Sequence[Point], policy: Optional[PointsPolicy] = None) -> tuple:
    """
    Render points back into (column_index, rows) using the policy's column names.
    Handy for re-running dedup on its own output and for exports.
    """
    policy = policy or PointsPolicy()
    header = [policy.latitude_column, policy.longitude_column, policy.name_column, policy.address_column]
    column_index = {name: index for index, name in enumerate(header)}
    rows = [[repr(p.lat), repr(p.lon), p.name, p.address] for p in points]
    return column_index, rows
