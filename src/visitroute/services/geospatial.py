"""Geospatial helper functions and the travel cost model.

Distances are great-circle (haversine) distances, not road distances. Travel
time and fuel burn are linear in distance and use fixed urban-delivery
constants.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

import numpy as np

from ..models.domain import GeoPoint

EARTH_RADIUS_KM = 6371.0
AVERAGE_SPEED_KMH = 40.0
TRAFFIC_FACTOR = 1.3
FUEL_EFFICIENCY_KM_PER_L = 8.0
FUEL_PRICE_PER_L = 5.5

logger = logging.getLogger(__name__)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in km between two points."""

    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def distance_matrix(points: Sequence[GeoPoint]) -> np.ndarray:
    """Pairwise haversine matrix (km) for ``points``, symmetric with a zero diagonal."""

    if not points:
        return np.zeros((0, 0))
    lat = np.radians(np.array([p.latitude for p in points], dtype=float))
    lon = np.radians(np.array([p.longitude for p in points], dtype=float))

    d_phi = lat[None, :] - lat[:, None]
    d_lambda = lon[None, :] - lon[:, None]
    a = np.sin(d_phi / 2) ** 2 + np.cos(lat)[:, None] * np.cos(lat)[None, :] * np.sin(d_lambda / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    matrix = EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    # Force exact symmetry so fitness is independent of traversal direction.
    matrix = (matrix + matrix.T) / 2
    np.fill_diagonal(matrix, 0.0)
    return matrix


def travel_time(distance_km: float) -> float:
    """Estimated driving time in hours for ``distance_km`` of urban travel."""

    return distance_km * TRAFFIC_FACTOR / AVERAGE_SPEED_KMH


def fuel_consumption(distance_km: float) -> float:
    """Fuel burned in litres for ``distance_km``."""

    return distance_km / FUEL_EFFICIENCY_KM_PER_L


def fuel_cost(liters: float) -> float:
    return liters * FUEL_PRICE_PER_L


def coerce_coordinate(value: Any, *, field_name: str = "coordinate", record_id: str | None = None) -> float:
    """Return ``value`` as a float, treating missing or blank values as ``0.0``.

    Coercing to ``0.0`` moves the record to the null island and changes the tour
    shape, so every coercion is logged.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        logger.warning(f"Missing {field_name} for visit {record_id!r}; using 0.0")
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {field_name} {value!r} for visit {record_id!r}; using 0.0")
        return 0.0
