#Marks routing as a package.
#Re-exports the public route APIs (plan_route, build_route, optimize_route, geo helpers)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .geo import haversine_km, haversine_m, initial_bearing, path_length_km
from .policy import RouteConstraint, RoutePolicy, default_route_policy
from .builder import RouteResult, build_route
from .optimizer import optimize_route, route_distance_km
from .planner import PlannedRoute, plan_route

__all__ = [
           "haversine_km",
           "haversine_m",
             "initial_bearing",
             "path_length_km",
             "RouteConstraint",
             "RoutePolicy",
             "default_route_policy",
             "RouteResult",
             "build_route",
             "optimize_route",
             "route_distance_km",
             "PlannedRoute",
             "plan_route",
             ]
