"""
Points domain package.

Public API:
- Domain models: Point, LatLon, PlannerError, NoUsableDataError
- CSV reading: parse_csv, build_column_index
- Normalization: clean_text, normalize_record, normalize_records
- Dedup entry: normalize_and_deduplicate
"""
from .models import LatLon, NoUsableDataError, PlannerError, Point
from .csv_reader import build_column_index, parse_csv, split_header
from .normalizer import clean_text, normalize_record, normalize_records
from .policy import PointsPolicy, default_points_policy
from .dedup import DedupResult, normalize_and_deduplicate

__all__ = ["Point",
           "LatLon",
             "PlannerError",
               "NoUsableDataError",
               "parse_csv",
               "build_column_index",
               "split_header",
               "clean_text",
               "normalize_record",
               "normalize_records",
               "PointsPolicy",
               "default_points_policy",
               "DedupResult",
               "normalize_and_deduplicate",
               ]
