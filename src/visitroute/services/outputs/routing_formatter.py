"""Serializers for optimized routes."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from typing import Any

from ..routing.models import DailyRoute, OptimizedRoute, RouteStop

CSV_FIELDS = [
    "order",
    "visit_id",
    "name",
    "address",
    "distance_from_previous_km",
    "estimated_time_min",
    "cumulative_distance_km",
    "cumulative_time_min",
]


def stop_to_json(stop: RouteStop) -> dict[str, Any]:
    visit = stop.visit
    return {
        **visit.payload,
        "visit_id": visit.visit_id,
        "latitude": visit.latitude,
        "longitude": visit.longitude,
        "equipment_weight": visit.equipment_weight,
        "priority_flag": visit.priority_flag,
        "order": stop.order,
        "distance_from_previous": stop.distance_from_previous,
        "estimated_time": stop.estimated_time,
        "cumulative_distance": stop.cumulative_distance,
        "cumulative_time": stop.cumulative_time,
    }


def daily_route_to_json(day: DailyRoute) -> dict[str, Any]:
    return {
        "day_index": day.day_index,
        "visit_ids": [stop.visit_id for stop in day.stops],
        "total_time": day.total_time,
        "estimated_finish_time": day.estimated_finish_time,
        "is_feasible": day.is_feasible,
    }


def route_to_json(route: OptimizedRoute) -> dict[str, Any]:
    return {
        "stops": [stop_to_json(stop) for stop in route.stops],
        "total_distance": route.total_distance,
        "total_time": route.total_time,
        "estimated_fuel": route.estimated_fuel,
        "savings": asdict(route.savings) if route.savings is not None else None,
        "daily_routes": [daily_route_to_json(day) for day in route.daily_routes],
        "metadata": route.metadata,
    }


def route_to_csv(route: OptimizedRoute) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for stop in route.stops:
        payload = stop.visit.payload
        writer.writerow(
            {
                "order": stop.order,
                "visit_id": stop.visit_id,
                "name": payload.get("name") or payload.get("client_name") or "",
                "address": payload.get("address") or "",
                "distance_from_previous_km": round(stop.distance_from_previous, 2),
                "estimated_time_min": round(stop.estimated_time * 60),
                "cumulative_distance_km": round(stop.cumulative_distance, 2),
                "cumulative_time_min": round(stop.cumulative_time * 60),
            }
        )
    buffer.write("\r\n")
    buffer.write(f"Total: {round(route.total_distance, 2)} km, {round(route.total_time * 60)} min\r\n")
    buffer.write(f"Estimated fuel: {round(route.estimated_fuel, 2)} L\r\n")
    return buffer.getvalue()
