import csv
import io

import pytest
from fastapi.testclient import TestClient

from src.visitroute.main import create_app


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


def _body(**kwargs) -> dict:
    body = {
        "visits": [
            {"id": "A", "latitude": 0.0, "longitude": 0.1, "name": "Alpha", "address": "Street 1"},
            {"id": "B", "latitude": 0.0, "longitude": 0.2, "name": "Beta"},
            {"id": "C", "latitude": 0.1, "longitude": 0.0, "name": "Gamma"},
        ],
        "start": {"latitude": 0.0, "longitude": 0.0, "label": "HQ"},
        "seed": 1,
        "constraints": {"population_size": 10, "generations": 5},
    }
    body.update(kwargs)
    return body


def test_health(api_client: TestClient):
    response = api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_optimize_endpoint(api_client: TestClient):
    response = api_client.post("/api/routes/optimize", json=_body(mode="nearest_neighbor"))

    assert response.status_code == 200
    payload = response.json()
    assert [stop["visit_id"] for stop in payload["stops"]] == ["A", "B", "C"]
    assert payload["total_distance"] > 0
    assert payload["savings"] is None


def test_optimize_rejects_single_visit(api_client: TestClient):
    body = _body()
    body["visits"] = body["visits"][:1]

    response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 400
    assert "geocoded" in response.json()["detail"]


def test_optimize_rejects_invalid_constraints(api_client: TestClient):
    response = api_client.post(
        "/api/routes/optimize",
        json=_body(constraints={"working_hours": 4, "lunch_break": 5}),
    )

    assert response.status_code == 422


def test_report_endpoint(api_client: TestClient):
    response = api_client.post("/api/routes/report", json=_body())

    assert response.status_code == 200
    payload = response.json()
    assert payload["report"]["summary"]["total_visits"] == 3
    assert payload["report"]["daily_breakdown"][0]["status"] in {"feasible", "exceeds working hours"}
    assert payload["route"]["savings"] is not None


def test_export_csv(api_client: TestClient):
    response = api_client.post("/api/routes/export?format=csv", json=_body(mode="nearest_neighbor"))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "optimized_route.csv" in response.headers["content-disposition"]
    table, totals = response.text.split("\r\n\r\n")
    rows = list(csv.DictReader(io.StringIO(table)))
    assert [row["visit_id"] for row in rows] == ["A", "B", "C"]
    assert rows[0]["name"] == "Alpha"
    assert rows[0]["address"] == "Street 1"
    total_line, fuel_line = totals.strip().split("\r\n")
    assert total_line == f"Total: {rows[-1]['cumulative_distance_km']} km, {rows[-1]['cumulative_time_min']} min"
    assert fuel_line.startswith("Estimated fuel: ") and fuel_line.endswith(" L")


def test_export_json(api_client: TestClient):
    response = api_client.post("/api/routes/export?format=json", json=_body())

    assert response.status_code == 200
    assert "optimized_route.json" in response.headers["content-disposition"]
    payload = response.json()
    assert len(payload["stops"]) == 3
    assert payload["daily_routes"][0]["visit_ids"]


@pytest.mark.parametrize("visit_id", [None, "   "])
def test_optimize_rejects_missing_visit_id(api_client: TestClient, visit_id):
    body = _body()
    body["visits"][0]["id"] = visit_id

    response = api_client.post("/api/routes/optimize", json=body)

    assert response.status_code == 422
