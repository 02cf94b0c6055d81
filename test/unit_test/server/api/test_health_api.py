"""Tests for the health and version endpoints."""

from nt_savitarna import __version__


class TestHealthEndpoints:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        assert "X-Process-Time" in response.headers

    async def test_version(self, client):
        response = await client.get("/version")

        assert response.status_code == 200
        assert response.json() == {"version": __version__}

    async def test_openapi_under_api_prefix(self, client):
        response = await client.get("/api/openapi.json")

        assert response.status_code == 200
        assert "/api/admin/reports/export" in response.json()["paths"]
