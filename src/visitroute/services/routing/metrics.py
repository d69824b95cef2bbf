"""Turn an ordered visit sequence into route stops, totals and savings."""

from __future__ import annotations

from typing import Any, Sequence

from ...models.domain import StartLocation, Visit
from ..geospatial import distance, fuel_consumption, fuel_cost, travel_time
from .models import OptimizedRoute, RouteStop, Savings


def tour_distance(visits: Sequence[Visit], start: StartLocation) -> float:
    """Open-tour distance ``start -> v1 -> ... -> vn`` in km."""

    total = 0.0
    current = start.point
    for visit in visits:
        total += distance(current, visit.point)
        current = visit.point
    return total


def build_stops(visits: Sequence[Visit], start: StartLocation) -> tuple[RouteStop, ...]:
    stops: list[RouteStop] = []
    total_distance = 0.0
    total_time = 0.0
    current = start.point

    for order, visit in enumerate(visits, start=1):
        step_distance = distance(current, visit.point)
        step_time = travel_time(step_distance)
        total_distance += step_distance
        total_time += step_time
        stops.append(
            RouteStop(
                visit=visit,
                order=order,
                distance_from_previous=step_distance,
                estimated_time=step_time,
                cumulative_distance=total_distance,
                cumulative_time=total_time,
            )
        )
        current = visit.point
    return tuple(stops)


def compute_savings(baseline_distance: float, optimized_distance: float) -> Savings:
    """Savings of the optimized tour relative to a baseline tour length.

    Negative values mean the optimized tour is longer than the baseline.
    """

    distance_saved = baseline_distance - optimized_distance
    fuel_saved = fuel_consumption(distance_saved)
    return Savings(
        distance_saved=distance_saved,
        fuel_saved=fuel_saved,
        time_saved=travel_time(baseline_distance) - travel_time(optimized_distance),
        cost_saved=fuel_cost(fuel_saved),
    )


def build_route(
    visits: Sequence[Visit],
    start: StartLocation,
    *,
    baseline: Sequence[Visit] | None = None,
    metadata: dict[str, Any] | None = None,
) -> OptimizedRoute:
    """Materialize ``visits`` (already in tour order) into an ``OptimizedRoute``.

    When ``baseline`` is given, savings are computed against that ordering of
    the same visits; otherwise savings are left as ``None`` (not computed).
    """

    stops = build_stops(visits, start)
    total_distance = stops[-1].cumulative_distance if stops else 0.0
    total_time = stops[-1].cumulative_time if stops else 0.0
    savings = None
    if baseline is not None:
        savings = compute_savings(tour_distance(baseline, start), total_distance)
    return OptimizedRoute(
        stops=stops,
        total_distance=total_distance,
        total_time=total_time,
        estimated_fuel=fuel_consumption(total_distance),
        savings=savings,
        metadata=dict(metadata or {}),
    )
