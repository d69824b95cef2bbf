"""Constraint filtering, prioritization and day partitioning."""

from __future__ import annotations

import logging
from dataclasses import asdict, replace
from typing import Optional, Sequence

from ...models.domain import StartLocation, Visit
from .genetic import RandomSource, genetic_optimize
from .models import Constraints, DailyRoute, OptimizedRoute, RouteStop

WORKDAY_START_HOUR = 8.0

logger = logging.getLogger(__name__)


def filter_by_capacity(visits: Sequence[Visit], vehicle_capacity: float) -> tuple[list[Visit], list[Visit]]:
    """Split visits into those the vehicle can carry and those it cannot."""

    kept: list[Visit] = []
    excluded: list[Visit] = []
    for visit in visits:
        if visit.equipment_weight is not None and visit.equipment_weight > vehicle_capacity:
            excluded.append(visit)
        else:
            kept.append(visit)
    return kept, excluded


def prioritize(visits: Sequence[Visit], priority_visit_ids: frozenset[str] | set[str]) -> list[Visit]:
    """Stable sort with priority visits first."""

    return sorted(
        visits,
        key=lambda visit: 0 if (visit.visit_id in priority_visit_ids or visit.priority_flag) else 1,
    )


def estimate_finish_time(day_total_time: float, working_hours: float, lunch_break: float) -> float:
    """Clock time (hours) the day ends, capped at the last permissible hour."""

    available_time = working_hours - lunch_break
    finish_time = WORKDAY_START_HOUR + day_total_time
    latest = WORKDAY_START_HOUR + available_time
    return latest if finish_time > latest else finish_time


def split_into_daily_routes(
    stops: Sequence[RouteStop],
    max_visits_per_day: int,
    working_hours: float,
    lunch_break: float,
) -> tuple[DailyRoute, ...]:
    """Chunk ``stops`` into days of at most ``max_visits_per_day`` stops.

    Cut points depend on stop count only; working hours decide feasibility
    labels, not where a day ends.
    """

    available_time = working_hours - lunch_break
    chunk = max(1, max_visits_per_day)
    days: list[DailyRoute] = []
    for offset in range(0, len(stops), chunk):
        day_stops = tuple(stops[offset : offset + chunk])
        day_time = sum(stop.estimated_time for stop in day_stops)
        days.append(
            DailyRoute(
                day_index=offset // chunk + 1,
                stops=day_stops,
                total_time=day_time,
                estimated_finish_time=estimate_finish_time(day_time, working_hours, lunch_break),
                is_feasible=day_time <= available_time,
            )
        )
    return tuple(days)


def optimize_with_constraints(
    visits: Sequence[Visit],
    start: StartLocation,
    constraints: Optional[Constraints] = None,
    *,
    rng: RandomSource = None,
    time_limit_seconds: Optional[float] = None,
) -> OptimizedRoute:
    constraints = constraints or Constraints()

    candidates, excluded = filter_by_capacity(visits, constraints.vehicle_capacity)
    if excluded:
        logger.info(
            f"Excluded {len(excluded)} visits above vehicle capacity {constraints.vehicle_capacity}: "
            f"{[visit.visit_id for visit in excluded]}"
        )
    candidates = prioritize(candidates, constraints.priority_visit_ids)

    route = genetic_optimize(
        candidates,
        start,
        constraints.population_size,
        constraints.generations,
        rng=rng,
        time_limit_seconds=time_limit_seconds,
    )
    daily_routes = split_into_daily_routes(
        route.stops,
        constraints.max_visits_per_day,
        constraints.working_hours,
        constraints.lunch_break,
    )

    applied = asdict(constraints)
    applied["priority_visit_ids"] = sorted(constraints.priority_visit_ids)
    metadata = {
        **route.metadata,
        "constraints": applied,
        "excluded_visit_ids": [visit.visit_id for visit in excluded],
    }
    return replace(route, daily_routes=daily_routes, metadata=metadata)
