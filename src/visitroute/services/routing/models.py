"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from ...config import settings
from ...models.domain import Visit


@dataclass(slots=True, frozen=True)
class Constraints:
    max_visits_per_day: int = settings.max_visits_per_day
    working_hours: float = settings.working_hours
    lunch_break: float = settings.lunch_break
    vehicle_capacity: float = settings.vehicle_capacity
    priority_visit_ids: frozenset[str] = frozenset()
    population_size: int = settings.population_size
    generations: int = settings.generations

    @property
    def available_time(self) -> float:
        return self.working_hours - self.lunch_break


@dataclass(slots=True, frozen=True)
class RouteStop:
    visit: Visit
    order: int
    distance_from_previous: float
    estimated_time: float
    cumulative_distance: float
    cumulative_time: float

    @property
    def visit_id(self) -> str:
        return self.visit.visit_id


@dataclass(slots=True, frozen=True)
class Savings:
    distance_saved: float
    fuel_saved: float
    time_saved: float
    cost_saved: float


@dataclass(slots=True, frozen=True)
class DailyRoute:
    day_index: int
    stops: tuple[RouteStop, ...]
    total_time: float
    estimated_finish_time: float
    is_feasible: bool


@dataclass(slots=True, frozen=True)
class OptimizedRoute:
    stops: tuple[RouteStop, ...] = ()
    total_distance: float = 0.0
    total_time: float = 0.0
    estimated_fuel: float = 0.0
    savings: Optional[Savings] = None
    daily_routes: tuple[DailyRoute, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def visit_ids(self) -> list[str]:
        return [stop.visit_id for stop in self.stops]
