"""
Purpose: Central configuration for loading and deduplicating points (single source of truth).
What it does:

Stores all tunable values:

LATITUDE_COLUMN = "latitude", LONGITUDE_COLUMN = "longitude"

NAME_COLUMN = "org_name", ADDRESS_COLUMN = "full_address"

DEFAULT_ADDRESS = "Москва"

BUCKET_PRECISION = 5 (quantization key)

PROXIMITY_THRESHOLD_M = 50

BRAND_SUFFIX = "surf coffee", CITY_NAME = "москва" (quality score hints)

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PointsPolicy:
    """
    Central configuration for the normalizer and the deduplicator.

    Notes:
    - bucket_precision drives the exact-bucket pass only; stored coordinates
      always keep 6 decimals.
    - brand_suffix / city_name feed the default quality score, a custom score
      function can ignore them.
    """

    # --- Source columns ---
    latitude_column: str = "latitude"
    longitude_column: str = "longitude"
    name_column: str = "org_name"
    address_column: str = "full_address"

    # Used when the address is empty after cleaning.
    default_address: str = "Москва"

    # --- Exact-bucket pass ---
    # 5 decimals is roughly 1 m on latitude.
    bucket_precision: int = 5

    # --- Proximity pass ---
    proximity_threshold_m: float = 50.0

    # --- Quality score hints ---
    brand_suffix: str = "surf coffee"
    city_name: str = "москва"

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        for column in (self.latitude_column, self.longitude_column, self.name_column, self.address_column):
            if not column:
                raise ValueError("column names must be non-empty")

        if self.bucket_precision < 0:
            raise ValueError("bucket_precision must be >= 0")

        if self.proximity_threshold_m < 0:
            raise ValueError("proximity_threshold_m must be >= 0")


def default_points_policy() -> PointsPolicy:
    """
    Convenience factory for the default policy.
    """
    p = PointsPolicy()
    p.validate()
    return p
