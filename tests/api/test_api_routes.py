"""
Tests for the JSON content routes.

Covers categories, opportunities, guidelines, policy pages and the
Contentful diagnostics route against a fake CMS.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ohub.api.deps import get_content_source, get_rules
from ohub.api.routes import categories, diagnostics, guidelines, opportunities, policy_pages
from ohub.components.content import (
    ContentSourceResponseError,
    ContentSourceUnavailableError,
    EntryCollection,
)

# --- Helpers ---


def entry(entry_id: str, content_type: str = "", **fields: Any) -> dict[str, Any]:
    sys: dict[str, Any] = {
        "id": entry_id,
        "createdAt": "2025-01-02T00:00:00Z",
        "updatedAt": "2025-01-03T00:00:00Z",
    }
    if content_type:
        sys["contentType"] = {"sys": {"id": content_type}}
    return {"sys": sys, "fields": fields}


def paragraph(text: str) -> dict[str, Any]:
    return {
        "nodeType": "document",
        "content": [
            {"nodeType": "paragraph", "content": [{"nodeType": "text", "value": text}]}
        ],
    }


# --- Fixtures ---


@pytest.fixture
def app(source, rules) -> FastAPI:
    """Test app with the content routers and a fake CMS."""
    app = FastAPI()
    app.include_router(categories.router, prefix="/api/categories")
    app.include_router(opportunities.router, prefix="/api/opportunities")
    app.include_router(guidelines.router, prefix="/api/guidelines")
    app.include_router(policy_pages.router, prefix="/api/policy-pages")
    app.include_router(diagnostics.router, prefix="/api")
    app.dependency_overrides[get_content_source] = lambda: source
    app.dependency_overrides[get_rules] = lambda: rules
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


# --- Categories ---


class TestCategoriesRoute:
    """GET /api/categories and /api/categories/{slug}."""

    def test_lists_categories_in_camel_case(self, source, client: TestClient) -> None:
        source.collections["category"] = EntryCollection(
            items=[
                entry("c1", name="Scholarships", slug="scholarships", sortOrder=1, isActive=True)
            ],
            total=1,
        )

        response = client.get("/api/categories")

        assert response.status_code == 200
        body = response.json()
        assert body == [
            {
                "id": "c1",
                "name": "Scholarships",
                "slug": "scholarships",
                "description": "",
                "icon": "",
                "color": "",
                "sortOrder": 1,
                "isActive": True,
            }
        ]

    def test_list_sets_shared_cache_header(self, client: TestClient) -> None:
        response = client.get("/api/categories")

        assert response.headers["cache-control"] == (
            "public, s-maxage=3600, stale-while-revalidate=86400"
        )

    def test_queries_active_categories_in_sort_order(self, source, client: TestClient) -> None:
        client.get("/api/categories")

        content_type, params = source.calls[0]
        assert content_type == "category"
        assert params["fields.isActive"] == "true"
        assert params["order"] == "fields.sortOrder"

    def test_unconfigured_is_configuration_error(self, source, client: TestClient) -> None:
        source.configured = False

        response = client.get("/api/categories")

        assert response.status_code == 500
        assert response.json() == {"error": "Contentful configuration error"}

    def test_cms_failure_is_fetch_error(self, source, client: TestClient) -> None:
        source.errors["category"] = ContentSourceUnavailableError("fetch failed: boom")

        response = client.get("/api/categories")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch categories",
            "message": "fetch failed: boom",
        }

    def test_get_category_falls_back_to_static_list(self, source, client: TestClient) -> None:
        source.configured = False

        response = client.get("/api/categories/internships")

        assert response.status_code == 200
        assert response.json()["name"] == "Internships"

    def test_get_unknown_category_is_404(self, source, client: TestClient) -> None:
        source.configured = False

        response = client.get("/api/categories/astronautics")

        assert response.status_code == 404


# --- Opportunities ---


class TestOpportunitiesRoute:
    """GET /api/opportunities."""

    def test_unconfigured_serves_fallback_for_category(self, source, client: TestClient) -> None:
        source.configured = False

        response = client.get("/api/opportunities", params={"category": "scholarships"})

        assert response.status_code == 200
        body = response.json()
        assert [o["id"] for o in body] == ["schol-1", "schol-2"]
        assert all(o["categorySlug"] == "scholarships" for o in body)

    def test_category_filter_is_passed_to_cms(self, source, client: TestClient) -> None:
        client.get("/api/opportunities", params={"category": "jobs"})

        content_type, params = source.calls[0]
        assert content_type == "opportunity"
        assert params["fields.categorySlug"] == "jobs"

    def test_maps_cms_entries(self, source, client: TestClient) -> None:
        source.collections["opportunity"] = EntryCollection(
            items=[
                entry(
                    "o1",
                    title="Erasmus+",
                    description="Study in Europe",
                    category="Exchange Programs",
                    categorySlug="exchange",
                    type="exchange",
                    deadline="2025-06-01",
                )
            ]
        )

        body = client.get("/api/opportunities").json()

        assert body[0]["type"] == "exchange"
        assert body[0]["deadline"] == "2025-06-01"
        assert body[0]["location"] is None


# --- Guidelines ---


class TestGuidelinesRoute:
    """GET /api/guidelines and /api/guidelines/{slug}."""

    def test_unconfigured_is_empty_list(self, source, client: TestClient) -> None:
        source.configured = False

        response = client.get("/api/guidelines")

        assert response.status_code == 200
        assert response.json() == []

    def test_cms_failure_is_empty_list(self, source, client: TestClient) -> None:
        source.errors["guideline"] = ContentSourceUnavailableError("fetch failed: timeout")

        response = client.get("/api/guidelines")

        assert response.status_code == 200
        assert response.json() == []

    def test_renders_content_and_resolves_image(self, source, client: TestClient) -> None:
        source.collections["guideline"] = EntryCollection(
            items=[
                entry(
                    "g1",
                    title="Writing a CV",
                    slug="writing-a-cv",
                    content=paragraph("Keep it short"),
                    featuredImage={"sys": {"type": "Link", "linkType": "Asset", "id": "a1"}},
                )
            ],
            includes={
                "Asset": [
                    {
                        "sys": {"id": "a1"},
                        "fields": {"title": "", "file": {"url": "//images.example.net/cv.png"}},
                    }
                ]
            },
        )

        body = client.get("/api/guidelines").json()

        assert body[0]["content"] == "<p>Keep it short</p>"
        assert body[0]["featuredImage"] == {
            "url": "https://images.example.net/cv.png",
            "alt": "Guideline Image",
            "width": 1200,
            "height": 630,
        }

    def test_limit_is_passed_to_cms(self, source, client: TestClient) -> None:
        client.get("/api/guidelines", params={"limit": 3})

        _, params = source.calls[0]
        assert params["limit"] == 3

    def test_unknown_guideline_is_404(self, client: TestClient) -> None:
        response = client.get("/api/guidelines/missing")

        assert response.status_code == 404


# --- Policy Pages ---


class TestPolicyPagesRoute:
    """GET /api/policy-pages/{slug}."""

    def test_unconfigured_serves_fallback_page(self, source, client: TestClient) -> None:
        source.configured = False

        response = client.get("/api/policy-pages/privacy-policy")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "fallback-privacy"
        assert body["metaTitle"] == "Privacy Policy - OHUB"
        assert "Last updated:" in body["content"]

    def test_cms_page_is_rendered(self, source, client: TestClient) -> None:
        source.collections["policyPage"] = EntryCollection(
            items=[entry("p1", title="Cookies", slug="cookies", content=paragraph("We bake."))]
        )

        body = client.get("/api/policy-pages/cookies").json()

        assert body["id"] == "p1"
        assert body["content"] == "<p>We bake.</p>"

    def test_unknown_slug_is_404(self, source, client: TestClient) -> None:
        source.configured = False

        response = client.get("/api/policy-pages/refunds")

        assert response.status_code == 404
        assert response.json() == {"error": "Policy page not found"}


# --- Diagnostics ---


class TestDiagnosticsRoute:
    """GET /api/test-contentful."""

    def test_unconfigured_reports_setup_instructions(self, source, client: TestClient) -> None:
        source.configured = False

        response = client.get("/api/test-contentful")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "error"
        assert body["spaceId"] == "Not set"
        assert body["accessToken"] == "Not set"
        assert "Restart the server" in body["instructions"]
        assert "statusCode" not in body

    def test_api_error_reports_status_code(self, source, client: TestClient) -> None:
        source.probe = ContentSourceResponseError("Contentful API error: 401", status_code=401)

        body = client.get("/api/test-contentful").json()

        assert body["message"] == "Contentful API connection failed"
        assert body["statusCode"] == 401
        assert "Invalid space ID or access token" in body["possibleIssues"]

    def test_success_lists_content_types(self, source, client: TestClient) -> None:
        source.probe = EntryCollection(items=[entry("e1", content_type="guideline")], total=12)

        body = client.get("/api/test-contentful").json()

        assert body["status"] == "success"
        assert body["totalItems"] == 12
        assert body["items"] == 1
        assert body["contentTypes"] == ["guideline"]
        assert "instructions" not in body
