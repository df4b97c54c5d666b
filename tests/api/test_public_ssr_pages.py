"""
Tests for the server-side rendered site pages.

Pages must render with the bundled fallback content when the CMS is not
configured, and with CMS content when it is.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ohub.api.deps import get_content_source, get_rules
from ohub.api.routes import public_ssr
from ohub.api.routes.public_ssr import (
    PageMetadata,
    _escape_html,
    render_meta_tags_html,
    render_ssr_page,
)
from ohub.components.content import (
    Category,
    ContentSourceUnavailableError,
    EntryCollection,
)

# --- Fixtures ---


@pytest.fixture
def app(source, rules) -> FastAPI:
    app = FastAPI()
    app.include_router(public_ssr.router)
    app.dependency_overrides[get_content_source] = lambda: source
    app.dependency_overrides[get_rules] = lambda: rules
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def offline(source):
    """CMS without credentials."""
    source.configured = False
    return source


def guideline_entry(slug: str, title: str, text: str) -> dict[str, Any]:
    return {
        "sys": {"id": f"id-{slug}", "createdAt": "2025-01-01T00:00:00Z"},
        "fields": {
            "title": title,
            "slug": slug,
            "description": f"About {title}",
            "content": {
                "nodeType": "document",
                "content": [
                    {
                        "nodeType": "paragraph",
                        "content": [
                            {"nodeType": "text", "value": text, "marks": [{"type": "bold"}]}
                        ],
                    }
                ],
            },
        },
    }


# --- HTML Helpers ---


class TestHtmlHelpers:
    """Tests for page assembly helpers."""

    def test_escape_html(self) -> None:
        assert _escape_html("<a href='x'>&\"</a>") == (
            "&lt;a href=&#x27;x&#x27;&gt;&amp;&quot;&lt;/a&gt;"
        )

    def test_meta_tags_are_escaped(self) -> None:
        metadata = PageMetadata(
            title='Tips & "Tricks"',
            description="<b>desc</b>",
            canonical_url="https://ohub.example/guideline",
        )

        html = render_meta_tags_html(metadata)

        assert "<title>Tips &amp; &quot;Tricks&quot;</title>" in html
        assert 'content="&lt;b&gt;desc&lt;/b&gt;"' in html
        assert '<link rel="canonical" href="https://ohub.example/guideline" />' in html

    def test_page_has_navigation_and_footer(self) -> None:
        categories = [Category(id="c1", name="Jobs", slug="jobs")]
        metadata = PageMetadata(title="OHUB", description="d", canonical_url="http://x/")

        html = render_ssr_page(metadata, "<p>body</p>", site_name="OHUB", categories=categories)

        assert html.startswith("<!DOCTYPE html>")
        assert '<header><nav><a class="brand" href="/">OHUB</a>' in html
        assert '<a href="/jobs">Jobs</a>' in html
        assert '<a href="/privacy-policy">Privacy Policy</a>' in html
        assert "<p>body</p>" in html


# --- Homepage ---


class TestHomepage:
    """GET /."""

    def test_offline_homepage_uses_fallback_content(self, offline, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "<title>OHUB</title>" in html
        assert "Unlock Your Global Future" in html
        assert "500+" in html
        assert '<a href="/scholarships">' in html
        assert "Conferences &amp; Research" in html
        assert "No guidelines available yet." in html

    def test_homepage_shows_latest_guidelines(self, source, client: TestClient) -> None:
        source.collections["guideline"] = EntryCollection(
            items=[guideline_entry("visa-tips", "Visa Tips", "Apply early")]
        )

        html = client.get("/").text

        assert '<a href="/guideline/visa-tips">' in html
        _, params = next(call for call in source.calls if call[0] == "guideline")
        assert params["limit"] == 3


# --- Guidelines ---


class TestGuidelinePages:
    """GET /guideline and /guideline/{slug}."""

    def test_guideline_list(self, source, client: TestClient) -> None:
        source.collections["guideline"] = EntryCollection(
            items=[
                guideline_entry("visa-tips", "Visa Tips", "Apply early"),
                guideline_entry("cv", "Writing a CV", "Be brief"),
            ]
        )

        html = client.get("/guideline").text

        assert "<title>Guidelines | OHUB</title>" in html
        assert "Visa Tips" in html
        assert "Writing a CV" in html

    def test_guideline_detail_renders_rich_text(self, source, client: TestClient) -> None:
        source.collections["guideline"] = EntryCollection(
            items=[guideline_entry("visa-tips", "Visa Tips", "Apply early")]
        )

        response = client.get("/guideline/visa-tips")

        assert response.status_code == 200
        assert "<title>Visa Tips | OHUB</title>" in response.text
        assert "<p><strong>Apply early</strong></p>" in response.text

    def test_missing_guideline_is_404(self, client: TestClient) -> None:
        response = client.get("/guideline/nope")

        assert response.status_code == 404

    def test_offline_guideline_is_404(self, offline, client: TestClient) -> None:
        response = client.get("/guideline/visa-tips")

        assert response.status_code == 404

    def test_unreachable_cms_shows_unavailable_notice(self, source, client: TestClient) -> None:
        source.errors["guideline"] = ContentSourceUnavailableError("fetch failed: dns")

        response = client.get("/guideline/visa-tips")

        assert response.status_code == 200
        assert "Guideline Temporarily Unavailable" in response.text
        assert 'href="/api/test-contentful"' in response.text


# --- Policy Pages ---


class TestPolicyPages:
    """GET /privacy-policy, /term-of-service, /cookies."""

    @pytest.mark.parametrize(
        ("path", "title"),
        [
            ("/privacy-policy", "Privacy Policy"),
            ("/term-of-service", "Terms of Service"),
            ("/cookies", "Cookie Policy"),
        ],
    )
    def test_offline_policy_pages_show_fallback_notice(
        self, offline, client: TestClient, path: str, title: str
    ) -> None:
        response = client.get(path)

        assert response.status_code == 200
        assert f"<h1>{title}</h1>" in response.text
        assert "Contentful Not Configured" in response.text
        assert 'href="/api/test-contentful"' in response.text

    def test_cms_policy_page_has_no_notice(self, source, client: TestClient) -> None:
        source.collections["policyPage"] = EntryCollection(
            items=[
                {
                    "sys": {"id": "p1"},
                    "fields": {
                        "title": "Privacy",
                        "slug": "privacy-policy",
                        "content": "<p>Ok</p>",
                    },
                }
            ]
        )

        html = client.get("/privacy-policy").text

        assert "<h1>Privacy</h1>" in html
        assert "<p>Ok</p>" in html
        assert "Contentful Not Configured" not in html


# --- Category Pages ---


class TestCategoryPages:
    """GET /{slug} and /opportunity/{slug}."""

    def test_offline_category_lists_fallback_opportunities(
        self, offline, client: TestClient
    ) -> None:
        response = client.get("/scholarships")

        assert response.status_code == 200
        assert "<h1>Scholarships</h1>" in response.text
        assert "Fulbright Scholarship Program" in response.text
        assert "Chevening Scholarships" in response.text
        assert "Google Summer of Code" not in response.text

    def test_opportunity_path_is_an_alias(self, offline, client: TestClient) -> None:
        response = client.get("/opportunity/internships")

        assert response.status_code == 200
        assert "Google Summer of Code" in response.text

    def test_empty_category(self, offline, client: TestClient) -> None:
        html = client.get("/exchange").text

        assert "No opportunities available in this category yet." in html

    def test_unknown_category_is_404(self, offline, client: TestClient) -> None:
        response = client.get("/not-a-category")

        assert response.status_code == 404

    def test_policy_routes_win_over_catch_all(self, offline, client: TestClient) -> None:
        response = client.get("/cookies")

        assert response.status_code == 200
        assert "<h1>Cookie Policy</h1>" in response.text
