"""Domain models for visit and start location records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(slots=True, frozen=True)
class GeoPoint:
    """A latitude/longitude pair in degrees.

    Range checks are the caller's responsibility; the engine computes with
    whatever values it is handed.
    """

    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class StartLocation:
    """Fixed origin of every tour. Never reordered as a stop."""

    latitude: float
    longitude: float
    label: str = "Start"

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)


@dataclass(slots=True, frozen=True)
class Visit:
    """Represents a field visit enriched with the caller's own fields."""

    visit_id: str
    latitude: float
    longitude: float
    equipment_weight: Optional[float] = None
    priority_flag: bool = False
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)
