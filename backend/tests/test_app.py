# tests for the health check, app configuration and error rendering
# basic app-level tests

import pytest


class TestHealthCheck:
    """app health and config"""

    async def test_health_check(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["service"] == "journai-api"

    async def test_openapi_schema(self, client):
        resp = await client.get("/openapi.json")
        assert resp.status_code == 200
        schema = resp.json()
        assert schema["info"]["title"] == "JournAI API"

    async def test_docs_available(self, client):
        resp = await client.get("/docs")
        assert resp.status_code == 200


class TestErrorRendering:
    """every failure comes back as {success: false, error}"""

    async def test_missing_body_fields_are_400(self, client):
        resp = await client.post("/chat", json={"mode": "vent"})
        assert resp.status_code == 400
        data = resp.json()
        assert data["success"] is False
        assert "message" in data["error"]

    async def test_missing_query_params_are_400(self, client):
        resp = await client.get("/mentor/availability?uid=someone")
        assert resp.status_code == 400
        assert resp.json()["success"] is False

    async def test_unknown_route_is_404(self, client):
        resp = await client.get("/nope")
        assert resp.status_code == 404
        assert resp.json()["success"] is False

    async def test_malformed_week_id_is_400(self, client):
        resp = await client.get("/logs?uid=user_alex&weekId=2025-45")
        assert resp.status_code == 400
        assert "week id" in resp.json()["error"]
