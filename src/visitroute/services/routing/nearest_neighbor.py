"""Greedy nearest-neighbor tour construction."""

from __future__ import annotations

import logging
from typing import Sequence

from ...models.domain import StartLocation, Visit
from ..geospatial import distance
from .metrics import build_route
from .models import OptimizedRoute

logger = logging.getLogger(__name__)


def nearest_neighbor_order(visits: Sequence[Visit], start: StartLocation) -> list[Visit]:
    """Return ``visits`` ordered by repeatedly hopping to the closest unvisited one.

    Ties keep the candidate that appears first in ``visits``.
    """

    unvisited = list(visits)
    ordered: list[Visit] = []
    current = start.point

    while unvisited:
        nearest_index = 0
        min_distance = float("inf")
        for index, candidate in enumerate(unvisited):
            candidate_distance = distance(current, candidate.point)
            if candidate_distance < min_distance:
                min_distance = candidate_distance
                nearest_index = index
        nearest = unvisited.pop(nearest_index)
        ordered.append(nearest)
        current = nearest.point
    return ordered


def nearest_neighbor(visits: Sequence[Visit], start: StartLocation) -> OptimizedRoute:
    """Build a route with the nearest-neighbor heuristic. Savings are not computed."""

    if not visits:
        return OptimizedRoute(metadata={"algorithm": "nearest_neighbor"})
    ordered = nearest_neighbor_order(visits, start)
    logger.debug(f"Nearest-neighbor ordered {len(ordered)} visits from {start.label!r}")
    return build_route(ordered, start, metadata={"algorithm": "nearest_neighbor"})
