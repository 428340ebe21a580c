"""
Tests for the check-in HTTP API.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from py_mosaic.api.main import app
from py_mosaic.exceptions import SurfaceUnavailableError
from py_mosaic.records import InMemoryCheckinRepository

TASKS = [
    {"id": "read", "name": "Read", "difficulty": "easy", "score": 5},
    {"id": "run", "name": "Run", "difficulty": "hard", "score": 20},
    {"id": "code", "name": "Code", "difficulty": "medium", "score": 10},
]


@pytest.fixture(autouse=True)
def fresh_state():
    """Each test gets its own sessions and record store."""
    with patch("py_mosaic.api.main.repository", InMemoryCheckinRepository()), \
            patch.dict("py_mosaic.api.main.sessions", clear=True), \
            patch.dict("py_mosaic.api.main.session_seeds", clear=True):
        yield


class TestCheckinAPI:
    """Test the session endpoints end to end."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def create(self, **overrides):
        payload = {"tasks": TASKS, "date": "2024-05-01", "width": 300, "height": 300,
                   "seed": "api_seed"}
        payload.update(overrides)
        response = self.client.post("/sessions", json=payload)
        assert response.status_code == 201
        return response.json()

    def test_root_and_health(self):
        assert self.client.get("/").json()["status"] == "running"
        assert self.client.get("/health").json() == {"status": "healthy", "sessions": 0}

    def test_create_session(self):
        data = self.create()

        assert data["seed"] == "api_seed"
        assert data["epoch"] == 1
        assert data["score_total"] == 0
        assert not data["is_complete"]
        assert [r["id"] for r in data["regions"]] == [0, 1, 2]
        assert [r["color"] for r in data["regions"]] == ["#52c41a", "#f5222d", "#1890ff"]
        for region in data["regions"]:
            assert 20 <= region["center"][0] <= 280
            assert 20 <= region["center"][1] <= 280

    def test_same_seed_same_board(self):
        first = self.create(date="2024-05-01")
        second = self.create(date="2024-05-02")
        assert [r["polygon"] for r in first["regions"]] == \
            [r["polygon"] for r in second["regions"]]

    def test_create_requires_tasks(self):
        response = self.client.post("/sessions", json={"tasks": []})
        assert response.status_code == 422

    def test_create_rejects_tiny_board(self):
        response = self.client.post("/sessions", json={"tasks": TASKS, "width": 10})
        assert response.status_code == 422

    def test_surface_unavailable(self):
        with patch("py_mosaic.api.main.CheckinSession.start",
                   side_effect=SurfaceUnavailableError("no surface")):
            response = self.client.post("/sessions", json={"tasks": TASKS})
        assert response.status_code == 503

    def test_unknown_session(self):
        assert self.client.get("/sessions/missing").status_code == 404
        assert self.client.get("/sessions/missing/hit?x=1&y=1").status_code == 404

    def test_hit(self):
        data = self.create()
        sid = data["id"]
        for region in data["regions"]:
            x, y = region["center"]
            response = self.client.get(f"/sessions/{sid}/hit", params={"x": x, "y": y})
            assert response.json()["region_index"] == region["id"]

        miss = self.client.get(f"/sessions/{sid}/hit", params={"x": 2, "y": 2})
        assert miss.json()["region_index"] == -1

    def test_complete_region(self):
        sid = self.create()["id"]

        first = self.client.post(f"/sessions/{sid}/regions/1/complete").json()
        second = self.client.post(f"/sessions/{sid}/regions/1/complete").json()

        assert first["changed"] and first["score_delta"] == 20
        assert not second["changed"] and second["score_total"] == 20

        summary = self.client.get(f"/sessions/{sid}").json()
        assert summary["regions"][1]["revealed"]
        assert summary["completion_rate"] == 33

    def test_complete_unknown_region(self):
        sid = self.create()["id"]
        assert self.client.post(f"/sessions/{sid}/regions/9/complete").status_code == 404

    def test_double_tap(self):
        data = self.create()
        sid = data["id"]
        x, y = data["regions"][2]["center"]

        first = self.client.post(f"/sessions/{sid}/tap",
                                 json={"x": x, "y": y, "timestamp_ms": 1000}).json()
        second = self.client.post(f"/sessions/{sid}/tap",
                                  json={"x": x, "y": y, "timestamp_ms": 1150}).json()

        assert first == {"region_index": 2, "completion": None}
        assert second["region_index"] == 2
        assert second["completion"]["changed"]
        assert second["completion"]["score_total"] == 10

    def test_slow_taps_do_not_complete(self):
        data = self.create()
        sid = data["id"]
        x, y = data["regions"][0]["center"]

        for ts in (1000, 2000):
            response = self.client.post(f"/sessions/{sid}/tap",
                                        json={"x": x, "y": y, "timestamp_ms": ts})
            assert response.json()["completion"] is None

    def test_long_press(self):
        data = self.create()
        sid = data["id"]
        x, y = data["regions"][0]["center"]

        response = self.client.post(f"/sessions/{sid}/tap",
                                    json={"x": x, "y": y, "timestamp_ms": 10,
                                          "kind": "long_press"})
        assert response.json()["completion"]["score_delta"] == 5

    def test_all_revealed(self):
        sid = self.create()["id"]
        for index in range(3):
            result = self.client.post(f"/sessions/{sid}/regions/{index}/complete").json()
        assert result["all_revealed"]
        assert self.client.get(f"/sessions/{sid}").json()["is_complete"]

    def test_record_and_restore(self):
        sid = self.create()["id"]
        self.client.post(f"/sessions/{sid}/regions/0/complete")

        record = self.client.get(f"/sessions/{sid}/record").json()
        assert record["date"] == "2024-05-01"
        assert record["revealedRegionIds"] == [0]
        assert record["scoreTotal"] == 5
        assert record["regionCount"] == 3

        resumed = self.create(seed="another")
        assert resumed["score_total"] == 5
        assert [r["revealed"] for r in resumed["regions"]] == [True, False, False]

    def test_stats(self):
        sid = self.create()["id"]
        self.client.post(f"/sessions/{sid}/regions/2/complete")

        stats = self.client.get(f"/sessions/{sid}/stats").json()

        assert stats["region_count"] == 3
        assert stats["revealed_count"] == 1
        assert stats["completed_count"] == 1
        assert stats["total_area"] > 0

    def test_render_png(self):
        sid = self.create(quote={"text": "Keep going", "author": "Me"})["id"]
        response = self.client.get(f"/sessions/{sid}/render.png")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content[:8] == b"\x89PNG\r\n\x1a\n"

    def test_delete(self):
        sid = self.create()["id"]
        assert self.client.delete(f"/sessions/{sid}").status_code == 204
        assert self.client.get(f"/sessions/{sid}").status_code == 404
