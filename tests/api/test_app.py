"""
Tests for the assembled application.

Runs the real app with its lifespan and no CMS credentials, which is how
a fresh checkout starts.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from ohub.api.main import app


@pytest.fixture
def client() -> Iterator[TestClient]:
    with TestClient(app) as client:
        yield client


class TestApplication:
    """Routing and startup of the full app."""

    def test_health_reports_degraded_without_cms(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["fallback_content"] is True
        assert [c["name"] for c in data["checks"]] == ["startup", "content_source"]

    def test_categories_api_reports_configuration_error(self, client: TestClient) -> None:
        response = client.get("/api/categories")

        assert response.status_code == 500
        assert response.json() == {"error": "Contentful configuration error"}

    def test_site_renders_from_fallback_content(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert "Scholarships" in response.text

    def test_api_routes_are_not_category_pages(self, client: TestClient) -> None:
        response = client.get("/api/guidelines")

        assert response.status_code == 200
        assert response.json() == []

    def test_category_catch_all(self, client: TestClient) -> None:
        assert client.get("/jobs").status_code == 200
        assert client.get("/not-a-category").status_code == 404

    def test_requests_are_counted(self, client: TestClient) -> None:
        client.get("/health/live")

        assert client.get("/metrics").json()["request_count"] >= 1

    def test_cors_allows_local_frontend(self, client: TestClient) -> None:
        response = client.get("/api/guidelines", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
