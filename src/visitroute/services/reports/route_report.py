"""Presentation-ready summary of an optimized route."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..geospatial import fuel_cost
from ..routing.models import DailyRoute, OptimizedRoute

DISTANCE_SAVINGS_THRESHOLD_KM = 10.0
FUEL_SAVINGS_THRESHOLD_L = 2.0
TIME_SAVINGS_THRESHOLD_H = 0.5

STATUS_FEASIBLE = "feasible"
STATUS_OVERTIME = "exceeds working hours"


@dataclass(slots=True, frozen=True)
class Report:
    summary: dict
    savings: Optional[dict]
    daily_breakdown: list[dict] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


def _minutes(hours: float) -> int:
    return int(round(hours * 60))


def format_clock(hour: float) -> str:
    """Render fractional hours (e.g. 15.5) as ``HH:MM``."""

    total_minutes = _minutes(hour)
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def _daily_row(day: DailyRoute) -> dict:
    return {
        "day": day.day_index,
        "visits": len(day.stops),
        "total_time_min": _minutes(day.total_time),
        "estimated_finish": format_clock(day.estimated_finish_time),
        "status": STATUS_FEASIBLE if day.is_feasible else STATUS_OVERTIME,
    }


def generate_recommendations(route: OptimizedRoute) -> list[str]:
    recommendations: list[str] = []
    savings = route.savings
    if savings is not None:
        if savings.distance_saved > DISTANCE_SAVINGS_THRESHOLD_KM:
            recommendations.append("Optimized route saves significant distance")
        if savings.fuel_saved > FUEL_SAVINGS_THRESHOLD_L:
            recommendations.append("Considerable fuel savings")
        if savings.time_saved > TIME_SAVINGS_THRESHOLD_H:
            recommendations.append("Travel time reduced significantly")
    if any(not day.is_feasible for day in route.daily_routes):
        recommendations.append("Some days exceed working hours; consider redistributing visits")
    return recommendations


def generate_report(route: OptimizedRoute) -> Report:
    """Summarize ``route`` without recomputing any distance."""

    summary = {
        "total_visits": len(route.stops),
        "total_distance_km": round(route.total_distance, 2),
        "total_time_min": _minutes(route.total_time),
        "estimated_fuel_l": round(route.estimated_fuel, 2),
        "estimated_cost": round(fuel_cost(route.estimated_fuel), 2),
    }
    savings = None
    if route.savings is not None:
        savings = {
            "distance_saved_km": round(route.savings.distance_saved, 2),
            "fuel_saved_l": round(route.savings.fuel_saved, 2),
            "time_saved_min": _minutes(route.savings.time_saved),
            "cost_saved": round(route.savings.cost_saved, 2),
        }
    return Report(
        summary=summary,
        savings=savings,
        daily_breakdown=[_daily_row(day) for day in route.daily_routes],
        recommendations=generate_recommendations(route),
    )
