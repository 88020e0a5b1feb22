"""
Dedup subpackage for the Points domain.

Public API:
- normalize_and_deduplicate
- deduplicate
- DedupResult
- entry_score
"""

from .engine import DedupResult, canonical_rows, deduplicate, normalize_and_deduplicate
from .scoring import ScoreFn, entry_score, should_replace

__all__ = [
    "normalize_and_deduplicate",
    "deduplicate",
    "canonical_rows",
    "DedupResult",
    "ScoreFn",
    "entry_score",
    "should_replace",
]
