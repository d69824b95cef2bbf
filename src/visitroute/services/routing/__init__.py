"""Route optimization engine exports."""

from .genetic import genetic_optimize
from .models import Constraints, DailyRoute, OptimizedRoute, RouteStop, Savings
from .nearest_neighbor import nearest_neighbor
from .planner import optimize_with_constraints

__all__ = [
    "nearest_neighbor",
    "genetic_optimize",
    "optimize_with_constraints",
    "Constraints",
    "DailyRoute",
    "OptimizedRoute",
    "RouteStop",
    "Savings",
]
