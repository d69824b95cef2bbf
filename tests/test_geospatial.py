import logging

import numpy as np
import pytest

from src.visitroute.models.domain import GeoPoint
from src.visitroute.services.geospatial import (
    coerce_coordinate,
    distance,
    distance_matrix,
    fuel_consumption,
    fuel_cost,
    haversine_km,
    travel_time,
)


def test_distance_is_symmetric():
    a = GeoPoint(-23.55, -46.63)
    b = GeoPoint(-22.90, -43.17)

    assert distance(a, b) == pytest.approx(distance(b, a))
    assert distance(a, b) == pytest.approx(361.0, abs=10.0)


def test_distance_to_self_is_zero():
    point = GeoPoint(21.5, 39.2)
    assert distance(point, point) == 0.0


def test_one_degree_along_equator():
    assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(111.195, abs=1e-3)


def test_distance_matrix_matches_scalar_haversine():
    points = [GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0), GeoPoint(1.0, 0.0), GeoPoint(-23.5, -46.6)]
    matrix = distance_matrix(points)

    assert matrix.shape == (4, 4)
    assert np.allclose(matrix, matrix.T)
    assert np.all(np.diag(matrix) == 0.0)
    for i, a in enumerate(points):
        for j, b in enumerate(points):
            assert matrix[i, j] == pytest.approx(distance(a, b), rel=1e-9, abs=1e-9)


def test_travel_time_and_fuel_model():
    assert travel_time(40.0) == pytest.approx(1.3)
    assert travel_time(0.0) == 0.0
    assert travel_time(20.0) < travel_time(21.0)
    assert fuel_consumption(8.0) == pytest.approx(1.0)
    assert fuel_cost(2.0) == pytest.approx(11.0)


def test_coerce_coordinate_logs_missing_values(caplog):
    with caplog.at_level(logging.WARNING):
        assert coerce_coordinate(None, field_name="latitude", record_id="V1") == 0.0
        assert coerce_coordinate("", field_name="longitude", record_id="V1") == 0.0
    assert "Missing latitude" in caplog.text
    assert coerce_coordinate("12.5") == 12.5
    assert coerce_coordinate(-3) == -3.0
