"""Smoke tests for the assembled application."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client():
    from app import app

    return TestClient(app)


class TestApplication:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok", "environment": "test"}

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"

    @pytest.mark.parametrize(
        "path",
        [
            "/api/products",
            "/api/categories",
            "/api/collections",
            "/api/carousel",
            "/api/settings",
            "/api/offers",
            "/api/reviews",
            "/api/reviews/featured",
        ],
    )
    def test_public_endpoints_are_mounted(self, client, path):
        assert client.get(path).status_code == 200

    @pytest.mark.parametrize(
        "path",
        [
            "/api/admin/orders",
            "/api/admin/tasks",
            "/api/admin/stats",
            "/api/admin/workers",
            "/api/admin/customers",
            "/api/admin/messages",
            "/api/admin/reviews",
        ],
    )
    def test_back_office_endpoints_require_a_token(self, client, path):
        response = client.get(path)

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Unauthorized", "errors": {"_entity": ["Unauthorized"]}}

    def test_unknown_route_is_404(self, client):
        assert client.get("/api/nothing-here").status_code == 404
