#Purpose: The raw data "adapter/client".
#Sole responsibility: fetch CSV text for the coffee shop list and hand it to the points package.
#Encapsulates source-specific details:
#local file paths vs http(s) URLs
#timeouts / non-2xx handling
#"first source with non-blank text wins" fallback order
#It should not contain parsing rules, dedup or routing.

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

import requests
from dotenv import load_dotenv

from points.csv_reader import parse_csv, split_header
from points.dedup import DedupResult, normalize_and_deduplicate
from points.models import PlannerError
from points.policy import PointsPolicy

# Read the source list from environment
# Example in .env:
# POINT_SOURCES=surf.csv,https://example.org/surf_coffees_moscow.csv
load_dotenv()
DEFAULT_SOURCES = "surf.csv,surf_coffees_moscow.csv"

logger = logging.getLogger(__name__)


class SourceLoadError(PlannerError):
    """Raised when none of the configured sources produced CSV text."""
    pass


def configured_sources() -> List[str]:
    raw = os.getenv("POINT_SOURCES") or DEFAULT_SOURCES
    return [source.strip() for source in raw.split(",") if source.strip()]


class CsvSource:
    """
    Loads CSV text from the first working source.

    Sole responsibility:
    - Read local files or GET http(s) URLs
    - Skip sources that fail or come back blank
    - Return the text untouched
    """
    def __init__(self, sources: Optional[Sequence[str]] = None, timeout: int = 10, base_dir: Optional[Path] = None):
        self.sources = list(sources) if sources else configured_sources()
        self.timeout = timeout #seconds to wait for an HTTP source before moving on
        self.base_dir = Path(base_dir) if base_dir else Path.cwd()

        if not self.sources:
            raise ValueError("No point sources configured. Set POINT_SOURCES in the .env file.")

    def load_text(self) -> str:
        last_error: Optional[Exception] = None

        for source in self.sources:
            try:
                text = self._read(source)
            except (OSError, UnicodeDecodeError, requests.RequestException, SourceLoadError) as error:
                logger.warning(f"Could not read {source}: {error}")
                last_error = error
                continue

            if text and text.strip():
                logger.info(f"Loaded coffee locations from {source}")
                return text

        raise SourceLoadError(f"No CSV source could be loaded (tried {', '.join(self.sources)}): {last_error}")

    #----------------
    # Internal helpers
    #----------------
    def _read(self, source: str) -> str:
        if source.startswith(("http://", "https://")):
            response = requests.get(
                source,
                headers={"Cache-Control": "no-cache"},
                timeout=self.timeout,
            )
            if not response.ok:
                raise SourceLoadError(f"HTTP {response.status_code} ({source})")
            # csv without a charset header would otherwise decode as latin-1
            return response.content.decode("utf-8-sig")

        path = Path(source)
        if not path.is_absolute():
            path = self.base_dir / path
        return path.read_bytes().decode("utf-8-sig")


def load_csv_text(sources: Optional[Sequence[str]] = None, timeout: int = 10) -> str:
    return CsvSource(sources, timeout=timeout).load_text()


def load_canonical_points(
    sources: Optional[Sequence[str]] = None,
    *,
    policy: Optional[PointsPolicy] = None,
    timeout: int = 10,
) -> DedupResult:
    """
    Fetch, parse, normalize and dedup in one call.

    Raises SourceLoadError when nothing could be fetched and
    NoUsableDataError when the data had no usable rows.
    """
    text = load_csv_text(sources, timeout=timeout)
    column_index, rows = split_header(parse_csv(text))
    return normalize_and_deduplicate(rows, column_index, policy=policy)
