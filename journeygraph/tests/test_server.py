"""Tests for the journey analysis HTTP routes."""

import pytest
from fastapi.testclient import TestClient

from journeygraph.scripts.generate_sample_journey import create_three_day_nurture
from journeygraph.server.app import app


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def _journey_with_markers() -> dict:
    journey = create_three_day_nurture()
    journey["nodes"][-1]["connections"] = {"nextNodeId": "day-marker-3"}
    journey["nodes"].append({"id": "day-marker-3", "type": "DAY_MARKER", "config": {}})
    return journey


class TestJourneyRoutes:
    """Test the stateless analysis endpoints."""

    def test_health(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_analyze(self, client):
        response = client.post("/api/journeys/analyze", json={"journey": create_three_day_nurture()})
        assert response.status_code == 200
        data = response.json()
        assert data["days"]["replied"] == 2
        assert data["nodes_by_day"]["1"] == ["welcome-sms", "intro-call", "wait-1d"]
        assert data["entry_nodes"] == ["welcome-sms"]
        assert len(data["markers"]["marker_nodes"]) == 3

    def test_analyze_with_collapsed_days(self, client):
        response = client.post(
            "/api/journeys/analyze",
            json={"journey": create_three_day_nurture(), "collapsedDays": [1, 2]},
        )
        assert response.status_code == 200
        assert [m["day"] for m in response.json()["markers"]["marker_nodes"]] == [3]

    def test_days(self, client):
        response = client.post("/api/journeys/days", json={"journey": create_three_day_nurture()})
        assert response.status_code == 200
        assert response.json()["days"]["crm-webhook"] == 3

    def test_layout(self, client):
        response = client.post("/api/journeys/layout", json={"journey": create_three_day_nurture()})
        assert response.status_code == 200
        layout = response.json()["layout"]
        assert layout["welcome-sms"] == {"x": 400, "y": 100}
        assert layout["crm-webhook"] == {"x": 1400, "y": 100}

    def test_markers_use_stored_positions(self, client):
        journey = create_three_day_nurture()
        for node in journey["nodes"]:
            node["positionX"] = 10
            node["positionY"] = 20
        journey["nodes"][2]["positionY"] = 400  # wait-1d

        response = client.post("/api/journeys/markers", json={"journey": journey})
        assert response.status_code == 200
        first = response.json()["marker_nodes"][0]
        assert first["id"] == "day-marker-1"
        assert first["position"] == {"x": 10, "y": 550}

    def test_markers_ignore_existing_marker_nodes(self, client):
        response = client.post("/api/journeys/markers", json={"journey": _journey_with_markers()})
        assert response.status_code == 200
        assert [m["day"] for m in response.json()["marker_nodes"]] == [1, 2, 3]

    def test_sanitize(self, client):
        response = client.post("/api/journeys/sanitize", json={"journey": _journey_with_markers()})
        assert response.status_code == 200
        data = response.json()
        assert "day-marker" not in str(data["journey"])
        assert len(data["updated_node_ids"]) == 8
        days = {n["id"]: n["config"]["day"] for n in data["journey"]["nodes"]}
        assert days["crm-webhook"] == 3

    def test_sanitize_without_hint_refresh(self, client):
        response = client.post(
            "/api/journeys/sanitize",
            json={"journey": _journey_with_markers(), "refreshDayHints": False},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["updated_node_ids"] == []
        assert all("day" not in n["config"] for n in data["journey"]["nodes"])

    def test_invalid_journey(self, client):
        response = client.post("/api/journeys/analyze", json={"journey": {"nodes": [{"id": "x"}]}})
        assert response.status_code == 422

    @pytest.mark.parametrize("path", ["analyze", "days", "layout", "markers", "sanitize"])
    def test_repeated_node_ids(self, client, path):
        journey = {"id": "dup", "nodes": [
            {"id": "a", "type": "SEND_SMS"},
            {"id": "a", "type": "MAKE_CALL"},
        ]}
        response = client.post(f"/api/journeys/{path}", json={"journey": journey})
        assert response.status_code == 422
        assert "duplicate node id: a" in response.json()["detail"]
