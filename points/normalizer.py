"""
Purpose: Turn raw tabular rows into typed Points (or reject them).
What it does:
- cleans text fields (invisible direction marks, whitespace runs, trimming)
- parses latitude/longitude leniently, the way a browser parseFloat would
- rounds stored coordinates to 6 decimals and derives the 5-decimal
  quantization key used by the exact-bucket dedup pass
- falls back to the policy's default address when the address is empty

Rule: Malformed rows are dropped and counted, never raised.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from .models import ColumnIndex, Point, RawRecord
from .policy import PointsPolicy, default_points_policy

logger = logging.getLogger(__name__)

# LRE/PDF/RLM/LRM marks that leak in from copy-pasted addresses
_INVISIBLE_MARKS = re.compile("[\u202a\u202c\u200f\u200e]")
# U+FEFF counts as whitespace, as it does in browser regexes
_WHITESPACE_RUN = re.compile(r"[\s\ufeff]+")
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class NormalizeResult:
    """
    Output of a normalization run.
    entries keep source order and carry the quantization key next to each point.
    """
    entries: List[Tuple[str, Point]] = field(default_factory=list)
    rejected: int = 0

    @property
    def points(self) -> List[Point]:
        return [point for _, point in self.entries]


def clean_text(value: Optional[str]) -> str:
    if not value:
        return ""
    value = _INVISIBLE_MARKS.sub("", value)
    return _WHITESPACE_RUN.sub(" ", value).strip()


def parse_coordinate(value: str) -> Optional[float]:
    """
    Parse the longest leading decimal number in value.
    Returns None when there is none or it is not finite.
    """
    match = _LEADING_NUMBER.match(value or "")
    if not match:
        return None
    try:
        number = float(match.group(0))
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def quantization_key(lat: float, lon: float, precision: int = 5) -> str:
    return f"{lat:.{precision}f}|{lon:.{precision}f}"


def normalize_record(
    row: RawRecord,
    column_index: ColumnIndex,
    policy: Optional[PointsPolicy] = None,
) -> Optional[Tuple[str, Point]]:
    """
    Normalize a single row.

    Returns (quantization_key, Point), or None when the row is rejected:
      - latitude or longitude cell missing/empty
      - name empty after cleaning
      - latitude or longitude without a numeric prefix
      - latitude outside [-90, 90] or longitude outside [-180, 180]
    """
    policy = policy or default_points_policy()

    lat_raw = _safe_cell(row, column_index.get(policy.latitude_column))
    lon_raw = _safe_cell(row, column_index.get(policy.longitude_column))
    name = clean_text(_safe_cell(row, column_index.get(policy.name_column)))
    address = clean_text(_safe_cell(row, column_index.get(policy.address_column)))

    if not lat_raw or not lon_raw or not name:
        return None

    lat = parse_coordinate(lat_raw)
    lon = parse_coordinate(lon_raw)
    if lat is None or lon is None:
        return None
    if abs(lat) > 90 or abs(lon) > 180:
        return None

    key = quantization_key(lat, lon, policy.bucket_precision)
    point = Point.new(name=name, address=address or policy.default_address, lat=lat, lon=lon)
    return key, point


def normalize_records(
    rows: Iterable[RawRecord],
    column_index: ColumnIndex,
    policy: Optional[PointsPolicy] = None,
) -> NormalizeResult:
    """
    Normalize every row, keeping source order and counting rejects.
    """
    policy = policy or default_points_policy()
    result = NormalizeResult()

    for line_number, row in enumerate(rows, start=1):
        normalized = normalize_record(row, column_index, policy)
        if normalized is None:
            result.rejected += 1
            logger.debug(f"Skipping malformed row {line_number}: {list(row)!r}")
            continue
        result.entries.append(normalized)

    return result


# -------------------------
# Internal helpers
# -------------------------

def _safe_cell(row: RawRecord, index: Optional[int]) -> str:
    if index is None or index < 0 or index >= len(row):
        return ""
    return row[index] or ""
