"""Routing orchestration service."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...models.domain import StartLocation, Visit
from ...schemas.routing import (
    DailyRouteModel,
    ReportModel,
    RouteStopModel,
    RoutingReportResponse,
    RoutingRequest,
    RoutingResponse,
    SavingsModel,
    VisitModel,
)
from ..geospatial import coerce_coordinate
from ..reports.route_report import generate_report
from .genetic import genetic_optimize
from .models import Constraints, OptimizedRoute
from .nearest_neighbor import nearest_neighbor
from .planner import optimize_with_constraints

logger = logging.getLogger(__name__)


def _to_visits(models: Sequence[VisitModel]) -> list[Visit]:
    visits: list[Visit] = []
    for model in models:
        visits.append(
            Visit(
                visit_id=model.id,
                latitude=coerce_coordinate(model.latitude, field_name="latitude", record_id=model.id),
                longitude=coerce_coordinate(model.longitude, field_name="longitude", record_id=model.id),
                equipment_weight=model.equipment_weight,
                priority_flag=model.priority_flag,
                payload=dict(model.model_extra or {}),
            )
        )
    return visits


def _build_constraints(payload: RoutingRequest) -> Constraints:
    base = Constraints()
    overrides = payload.constraints
    if overrides is None:
        return base
    constraints = Constraints(
        max_visits_per_day=overrides.max_visits_per_day
        if overrides.max_visits_per_day is not None
        else base.max_visits_per_day,
        working_hours=overrides.working_hours if overrides.working_hours is not None else base.working_hours,
        lunch_break=overrides.lunch_break if overrides.lunch_break is not None else base.lunch_break,
        vehicle_capacity=overrides.vehicle_capacity
        if overrides.vehicle_capacity is not None
        else base.vehicle_capacity,
        priority_visit_ids=frozenset(overrides.priority_visit_ids),
        population_size=overrides.population_size
        if overrides.population_size is not None
        else base.population_size,
        generations=overrides.generations if overrides.generations is not None else base.generations,
    )
    if constraints.lunch_break >= constraints.working_hours:
        raise ValueError(
            f"Lunch break ({constraints.lunch_break}h) must be shorter than working hours "
            f"({constraints.working_hours}h)."
        )
    return constraints


def _check_geocoded(models: Sequence[VisitModel]) -> None:
    geocoded = sum(1 for model in models if model.latitude is not None and model.longitude is not None)
    if geocoded < settings.min_visits_to_optimize:
        raise ValueError(
            f"Not enough geocoded visits to optimize: {geocoded} "
            f"(need at least {settings.min_visits_to_optimize})."
        )


def run_optimization(payload: RoutingRequest) -> OptimizedRoute:
    """Validate the request and dispatch to the requested algorithm."""

    _check_geocoded(payload.visits)
    visits = _to_visits(payload.visits)
    start = StartLocation(
        latitude=payload.start.latitude,
        longitude=payload.start.longitude,
        label=payload.start.label,
    )
    seed = payload.seed if payload.seed is not None else settings.default_seed
    logger.info(f"Optimizing {len(visits)} visits from {start.label!r} using mode={payload.mode}")

    if payload.mode == "nearest_neighbor":
        route = nearest_neighbor(visits, start)
    elif payload.mode == "genetic":
        constraints = _build_constraints(payload)
        route = genetic_optimize(
            visits,
            start,
            constraints.population_size,
            constraints.generations,
            rng=seed,
            time_limit_seconds=settings.optimizer_time_limit_seconds,
        )
    else:
        route = optimize_with_constraints(
            visits,
            start,
            _build_constraints(payload),
            rng=seed,
            time_limit_seconds=settings.optimizer_time_limit_seconds,
        )

    logger.info(
        f"Route ready: {len(route.stops)} stops, {route.total_distance:.2f} km, "
        f"{route.total_time:.2f} h, {len(route.daily_routes)} days"
    )
    return route


def route_to_response(route: OptimizedRoute) -> RoutingResponse:
    return RoutingResponse(
        stops=[
            RouteStopModel(
                visit_id=stop.visit_id,
                order=stop.order,
                latitude=stop.visit.latitude,
                longitude=stop.visit.longitude,
                distance_from_previous=stop.distance_from_previous,
                estimated_time=stop.estimated_time,
                cumulative_distance=stop.cumulative_distance,
                cumulative_time=stop.cumulative_time,
                payload=stop.visit.payload,
            )
            for stop in route.stops
        ],
        total_distance=route.total_distance,
        total_time=route.total_time,
        estimated_fuel=route.estimated_fuel,
        savings=SavingsModel(
            distance_saved=route.savings.distance_saved,
            fuel_saved=route.savings.fuel_saved,
            time_saved=route.savings.time_saved,
            cost_saved=route.savings.cost_saved,
        )
        if route.savings is not None
        else None,
        daily_routes=[
            DailyRouteModel(
                day_index=day.day_index,
                visit_ids=[stop.visit_id for stop in day.stops],
                total_time=day.total_time,
                estimated_finish_time=day.estimated_finish_time,
                is_feasible=day.is_feasible,
            )
            for day in route.daily_routes
        ],
        metadata=route.metadata,
    )


def optimize_routes(payload: RoutingRequest) -> RoutingResponse:
    return route_to_response(run_optimization(payload))


def build_report(payload: RoutingRequest) -> RoutingReportResponse:
    route = run_optimization(payload)
    report = generate_report(route)
    return RoutingReportResponse(
        route=route_to_response(route),
        report=ReportModel(
            summary=report.summary,
            savings=report.savings,
            daily_breakdown=report.daily_breakdown,
            recommendations=report.recommendations,
        ),
    )
