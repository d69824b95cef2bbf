import pytest

from src.visitroute.models.domain import StartLocation, Visit
from src.visitroute.services.routing.models import Constraints, RouteStop
from src.visitroute.services.routing.planner import (
    estimate_finish_time,
    filter_by_capacity,
    optimize_with_constraints,
    prioritize,
    split_into_daily_routes,
)


def _visit(vid: str, lat: float, lon: float, **kwargs) -> Visit:
    return Visit(visit_id=vid, latitude=lat, longitude=lon, payload={"name": f"Client {vid}"}, **kwargs)


def _stop(order: int, estimated_time: float) -> RouteStop:
    return RouteStop(
        visit=_visit(f"S{order}", 0.0, 0.0),
        order=order,
        distance_from_previous=0.0,
        estimated_time=estimated_time,
        cumulative_distance=0.0,
        cumulative_time=0.0,
    )


def test_heavy_visit_is_excluded():
    visits = [
        _visit("LIGHT", 0.0, 0.1, equipment_weight=50),
        _visit("HEAVY", 0.0, 0.2, equipment_weight=150),
        _visit("UNKNOWN", 0.0, 0.3),
    ]
    constraints = Constraints(vehicle_capacity=100, population_size=10, generations=5)

    route = optimize_with_constraints(visits, StartLocation(0.0, 0.0), constraints, rng=1)

    assert "HEAVY" not in route.visit_ids
    assert sorted(route.visit_ids) == ["LIGHT", "UNKNOWN"]
    assert route.metadata["excluded_visit_ids"] == ["HEAVY"]


def test_filter_by_capacity_allows_equal_weight():
    kept, excluded = filter_by_capacity([_visit("A", 0, 0, equipment_weight=100)], 100)

    assert [visit.visit_id for visit in kept] == ["A"]
    assert excluded == []


def test_prioritize_is_stable():
    visits = [
        _visit("A", 0, 0),
        _visit("B", 0, 0),
        _visit("C", 0, 0, priority_flag=True),
        _visit("D", 0, 0),
        _visit("E", 0, 0),
    ]

    ordered = prioritize(visits, frozenset({"D"}))

    assert [visit.visit_id for visit in ordered] == ["C", "D", "A", "B", "E"]


def test_ten_visits_split_into_three_days():
    visits = [_visit(f"V{i}", 0.0, 0.05 * i) for i in range(1, 11)]
    constraints = Constraints(max_visits_per_day=4, population_size=20, generations=10)

    route = optimize_with_constraints(visits, StartLocation(0.0, 0.0), constraints, rng=3)

    assert [len(day.stops) for day in route.daily_routes] == [4, 4, 2]
    assert [day.day_index for day in route.daily_routes] == [1, 2, 3]
    assert sum(len(day.stops) for day in route.daily_routes) == len(route.stops)
    flattened = [stop for day in route.daily_routes for stop in day.stops]
    assert tuple(flattened) == route.stops


@pytest.mark.parametrize("max_per_day", [1, 3, 7, 20])
def test_no_day_exceeds_max_visits(max_per_day):
    stops = [_stop(i, 0.2) for i in range(1, 12)]

    days = split_into_daily_routes(stops, max_per_day, 8.0, 1.0)

    assert sum(len(day.stops) for day in days) == 11
    assert all(len(day.stops) <= max_per_day for day in days)


def test_overlong_day_is_infeasible_and_capped():
    stops = [_stop(1, 3.0), _stop(2, 2.5), _stop(3, 2.0)]

    (day,) = split_into_daily_routes(stops, 8, working_hours=8.0, lunch_break=1.0)

    assert day.total_time == pytest.approx(7.5)
    assert day.is_feasible is False
    assert day.estimated_finish_time == pytest.approx(15.0)


def test_feasible_day_finishes_after_travel_time():
    (day,) = split_into_daily_routes([_stop(1, 1.5), _stop(2, 2.0)], 8, 8.0, 1.0)

    assert day.is_feasible is True
    assert day.estimated_finish_time == pytest.approx(11.5)


def test_estimate_finish_time_at_boundary():
    assert estimate_finish_time(7.0, 8.0, 1.0) == pytest.approx(15.0)
    assert estimate_finish_time(0.0, 8.0, 1.0) == pytest.approx(8.0)


def test_empty_visits_give_no_days():
    route = optimize_with_constraints([], StartLocation(0.0, 0.0), Constraints())

    assert route.stops == ()
    assert route.daily_routes == ()
    assert route.total_distance == 0


def test_day_using_exactly_the_available_time_is_feasible():
    stops = [_stop(1, 3.0), _stop(2, 2.5), _stop(3, 1.5)]

    (day,) = split_into_daily_routes(stops, 8, working_hours=8.0, lunch_break=1.0)

    assert day.total_time == 7.0
    assert day.is_feasible is True
    assert day.estimated_finish_time == pytest.approx(15.0)
