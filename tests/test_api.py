"""Tests for REST API endpoints."""

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from canvas3d import config
from canvas3d.api.main import app, set_canvas
from canvas3d.core import GenerationError


@pytest.fixture
def api_client(canvas):
    """Create test API client serving the canvas fixture."""
    set_canvas(canvas)
    yield TestClient(app)
    set_canvas(None)


class TestGeneral:
    """Test info endpoints."""

    def test_health_check(self, api_client):
        response = api_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_api_info(self, api_client):
        response = api_client.get("/")
        assert response.status_code == 200
        assert "Canvas3D" in response.json()["name"]

    def test_no_canvas_is_unavailable(self):
        set_canvas(None)
        response = TestClient(app).get("/modules")
        assert response.status_code == 503

    def test_scene_status(self, api_client):
        response = api_client.get("/scene")
        assert response.status_code == 200
        assert response.json()["scene_objects"] == 2
        assert response.json()["modules"] == 0


class TestCommands:
    """Test command execution over HTTP."""

    def test_command_success(self, api_client, canvas):
        response = api_client.post("/commands", json={"text": "add a cube"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["module_id"] == "module_0"
        assert body["status"] == "success"
        assert len(canvas.modules) == 1

    def test_command_generation_failure(self, api_client, generator):
        generator.generate.side_effect = GenerationError("Failed to generate code: API Error: 401")

        body = api_client.post("/commands", json={"text": "add a cube"}).json()

        assert body["success"] is False
        assert body["status"] == "generation_error"
        assert "401" in body["error"]

    def test_command_requires_text(self, api_client):
        assert api_client.post("/commands", json={}).status_code == 422

    def test_load_code_directly(self, api_client):
        body = api_client.post("/modules", json={"code": "raise ValueError('boom')", "description": "bad"}).json()

        assert body["success"] is False
        assert body["status"] == "runtime_error"
        assert "boom" in body["error"]


class TestModules:
    """Test module inspection and lifecycle endpoints."""

    def test_list_in_creation_order(self, api_client, canvas):
        for i in range(11):
            canvas.execute_module("pass", f"module number {i}")

        modules = api_client.get("/modules").json()

        assert [m["id"] for m in modules] == [f"module_{i}" for i in range(11)]
        assert modules[0]["description"] == "module number 0"
        assert modules[0]["code"] == "pass"

    def test_get_module(self, api_client, canvas):
        canvas.execute_module("handle = {'x': 1}", "with handle")

        response = api_client.get("/modules/module_0")

        assert response.status_code == 200
        assert response.json()["has_handle"] is True

    def test_get_missing_module(self, api_client):
        assert api_client.get("/modules/module_9").status_code == 404

    def test_get_module_reads_on_loop_thread(self, api_client, canvas):
        canvas.execute_module("pass", "a")

        with patch.object(canvas.engine, "run_on_loop", wraps=canvas.engine.run_on_loop) as run_on_loop:
            assert api_client.get("/modules/module_0").status_code == 200

        run_on_loop.assert_called_once_with(canvas.modules.get, "module_0", timeout=30.0)

    def test_unload(self, api_client, canvas):
        canvas.execute_module("events.subscribe('animate', lambda e: None)", "ticker")

        assert api_client.delete("/modules/module_0").status_code == 200
        assert api_client.delete("/modules/module_0").status_code == 404
        assert canvas.events.listener_count() == 0

    def test_reset(self, api_client, canvas):
        canvas.execute_module("scene.add(gfx.Mesh())", "mesh")

        assert api_client.post("/reset").json()["success"] is True
        assert api_client.get("/modules").json() == []
        assert api_client.get("/scene").json()["scene_objects"] == 2


class TestAPIKey:
    """Test optional API key protection."""

    def test_key_required_when_configured(self, api_client):
        config.get_config()["api"]["api_key"] = "secret-key"

        assert api_client.post("/reset").status_code == 401
        assert api_client.post("/reset", headers={"X-API-Key": "wrong"}).status_code == 401
        assert api_client.post("/reset", headers={"X-API-Key": "secret-key"}).status_code == 200

    def test_read_endpoints_stay_open(self, api_client):
        config.get_config()["api"]["api_key"] = "secret-key"
        assert api_client.get("/modules").status_code == 200
