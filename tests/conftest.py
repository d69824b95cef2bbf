from __future__ import annotations

from typing import Any

import pytest

from src.visitroute.models.domain import StartLocation, Visit


def make_visit(vid: str, lat: float, lon: float, **extra: Any) -> Visit:
    weight = extra.pop("equipment_weight", None)
    priority = extra.pop("priority_flag", False)
    return Visit(
        visit_id=vid,
        latitude=lat,
        longitude=lon,
        equipment_weight=weight,
        priority_flag=priority,
        payload={"name": f"Client {vid}", **extra},
    )


@pytest.fixture
def origin() -> StartLocation:
    return StartLocation(latitude=0.0, longitude=0.0, label="Office")


@pytest.fixture
def line_visits() -> list[Visit]:
    """Visits strung along the equator, listed in a scrambled order."""
    return [make_visit(f"V{lon}", 0.0, float(lon)) for lon in (0.4, 0.1, 0.5, 0.2, 0.3)]
