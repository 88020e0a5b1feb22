"""
Purpose: Central configuration for route building and optimisation.
What it does:

Stores all tunable thresholds/caps:

DEFAULT_MAX_STEP_KM = 2

MAX_STEP bounds = [0.5, 25] km (user input is clamped into these)

TWO_OPT_THRESHOLD = 160 (bigger routes skip optimisation)

TWO_OPT_EPSILON_KM = 0.001

Defines RouteConstraint, the per-request distance filter state.

Rule: Parameters and input clamping only, no routing logic here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional

MIN_STEP_KM = 0.5
MAX_STEP_KM = 25.0


@dataclass(frozen=True)
class RouteConstraint:
    """
    Distance filter for a single route request.

    enabled=False means every step is allowed (no cap).
    """

    enabled: bool = True
    max_step_km: float = 2.0

    @property
    def limit_km(self) -> float:
        return self.max_step_km if self.enabled else math.inf

    def with_max_step(
        self,
        value: Optional[float],
        *,
        lower: float = MIN_STEP_KM,
        upper: float = MAX_STEP_KM,
    ) -> RouteConstraint:
        """
        Copy with a new step limit clamped into [lower, upper].
        Invalid input (None, NaN, inf, <= 0) keeps the current limit.
        """
        try:
            value = float(value)
        except (TypeError, ValueError):
            return self
        if not math.isfinite(value) or value <= 0:
            return self
        return replace(self, max_step_km=max(lower, min(upper, value)))

    def with_enabled(self, enabled: bool) -> RouteConstraint:
        return replace(self, enabled=bool(enabled))


@dataclass(frozen=True)
class RoutePolicy:
    """
    Central configuration for the route builder and the 2-opt optimiser.

    Notes:
    - 2-opt here is O(n^3) per pass because every candidate recomputes the
      full path, so the threshold is what keeps big datasets responsive.
    """

    # --- Distance filter defaults ---
    default_filter_enabled: bool = True
    default_max_step_km: float = 2.0
    min_step_km: float = MIN_STEP_KM
    max_step_km: float = MAX_STEP_KM

    # --- 2-opt ---
    two_opt_threshold: int = 160
    two_opt_epsilon_km: float = 0.001

    def default_constraint(self) -> RouteConstraint:
        return RouteConstraint(enabled=self.default_filter_enabled, max_step_km=self.default_max_step_km)

    def clamp_constraint(self, constraint: RouteConstraint, value: Optional[float]) -> RouteConstraint:
        return constraint.with_max_step(value, lower=self.min_step_km, upper=self.max_step_km)

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.min_step_km <= 0:
            raise ValueError("min_step_km must be > 0")

        if self.max_step_km < self.min_step_km:
            raise ValueError("max_step_km must be >= min_step_km")

        if not self.min_step_km <= self.default_max_step_km <= self.max_step_km:
            raise ValueError("default_max_step_km must lie within [min_step_km, max_step_km]")

        if self.two_opt_threshold < 0:
            raise ValueError("two_opt_threshold must be >= 0")

        if self.two_opt_epsilon_km < 0:
            raise ValueError("two_opt_epsilon_km must be >= 0")


def default_route_policy() -> RoutePolicy:
    """
    Convenience factory for the default policy.
    """
    p = RoutePolicy()
    p.validate()
    return p
