"""
Public SSR Routes - server-side rendered site pages.

Every page shares one layout: navigation built from the category list,
the page body, and a footer with category and policy links. Content
comes from ContentService, which already applies the CMS fallbacks, so
pages render even when the CMS is unconfigured or unreachable.

The category catch-all `/{slug}` must be the last route registered.
"""

from dataclasses import dataclass

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from ohub.api.deps import get_content_service, get_rules
from ohub.components.content import (
    Category,
    ContentService,
    Guideline,
    Opportunity,
    PolicyPage,
    Statistic,
)
from ohub.rules.models import Rules

router = APIRouter()

DIAGNOSTICS_PATH = "/api/test-contentful"

POLICY_LINKS: tuple[tuple[str, str], ...] = (
    ("/privacy-policy", "Privacy Policy"),
    ("/term-of-service", "Terms of Service"),
    ("/cookies", "Cookie Policy"),
)


# --- Page Metadata ---


@dataclass(frozen=True)
class PageMetadata:
    """Head metadata for a rendered page."""

    title: str
    description: str
    canonical_url: str


def build_metadata(
    request: Request, rules: Rules, title: str | None = None, description: str = ""
) -> PageMetadata:
    """Page title is `<title> | <site name>`, or the bare site name for home."""
    site = rules.site
    return PageMetadata(
        title=f"{title} | {site.name}" if title else site.name,
        description=description or site.tagline,
        canonical_url=str(request.url.replace(query="", fragment="")),
    )


# --- HTML Rendering ---


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def render_meta_tags_html(metadata: PageMetadata) -> str:
    """Render PageMetadata to head tags."""
    html_parts = [
        f"<title>{_escape_html(metadata.title)}</title>",
        f'<meta name="description" content="{_escape_html(metadata.description)}" />',
        f'<meta property="og:title" content="{_escape_html(metadata.title)}" />',
        f'<meta property="og:description" content="{_escape_html(metadata.description)}" />',
        f'<link rel="canonical" href="{_escape_html(metadata.canonical_url)}" />',
    ]
    return "\n    ".join(html_parts)


def render_navigation(site_name: str, categories: list[Category]) -> str:
    """Top navigation: home, one link per category, guidelines."""
    links = [
        f'<a href="/{_escape_html(c.slug)}">{_escape_html(c.name)}</a>' for c in categories
    ]
    links.append('<a href="/guideline">Guidelines</a>')
    return (
        "<header><nav>"
        f'<a class="brand" href="/">{_escape_html(site_name)}</a>'
        f"{''.join(links)}"
        "</nav></header>"
    )


def render_footer(site_name: str, categories: list[Category]) -> str:
    category_links = "".join(
        f'<li><a href="/{_escape_html(c.slug)}">{_escape_html(c.name)}</a></li>'
        for c in categories
    )
    policy_links = "".join(
        f'<li><a href="{href}">{label}</a></li>' for href, label in POLICY_LINKS
    )
    return (
        "<footer>"
        f'<section><h2>Opportunities</h2><ul class="footer-categories">{category_links}</ul>'
        "</section>"
        f'<section><h2>Legal</h2><ul class="footer-legal">{policy_links}</ul></section>'
        f"<p>&copy; {_escape_html(site_name)}</p>"
        "</footer>"
    )


def render_ssr_page(
    metadata: PageMetadata,
    body_content: str = "",
    *,
    site_name: str = "",
    categories: list[Category] | None = None,
) -> str:
    """Render complete SSR HTML page with metadata, navigation and footer."""
    meta_html = render_meta_tags_html(metadata)
    nav = categories or []

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    {meta_html}
</head>
<body>
    {render_navigation(site_name, nav)}
    <main>
    {body_content}
    </main>
    {render_footer(site_name, nav)}
</body>
</html>"""


def render_fallback_notice(message: str, heading: str = "Contentful Not Configured") -> str:
    """Notice shown when a page is served from bundled copy."""
    return (
        '<aside class="notice">'
        f"<h2>{_escape_html(heading)}</h2>"
        f"<p>{_escape_html(message)}</p>"
        f'<p><a href="{DIAGNOSTICS_PATH}">Test the Contentful connection</a></p>'
        "</aside>"
    )


def render_statistics(statistics: list[Statistic]) -> str:
    items = "".join(
        f"<li><strong>{_escape_html(s.value)}</strong> <span>{_escape_html(s.label)}</span></li>"
        for s in statistics
    )
    return f'<ul class="statistics">{items}</ul>'


def render_category_cards(categories: list[Category]) -> str:
    cards = "".join(
        f'<li><a href="/{_escape_html(c.slug)}">'
        f"<h3>{_escape_html(c.name)}</h3>"
        f"<p>{_escape_html(c.description)}</p></a></li>"
        for c in categories
    )
    return f'<ul class="categories">{cards}</ul>'


def render_guideline_cards(guidelines: list[Guideline]) -> str:
    if not guidelines:
        return '<p class="empty">No guidelines available yet.</p>'

    cards = []
    for g in guidelines:
        image = ""
        if g.featured_image.url:
            image = (
                f'<img src="{_escape_html(g.featured_image.url)}" '
                f'alt="{_escape_html(g.featured_image.alt)}" />'
            )
        cards.append(
            f'<li><a href="/guideline/{_escape_html(g.slug)}">{image}'
            f"<h3>{_escape_html(g.title)}</h3>"
            f"<p>{_escape_html(g.description)}</p></a></li>"
        )
    return f'<ul class="guidelines">{"".join(cards)}</ul>'


def render_opportunity_cards(opportunities: list[Opportunity]) -> str:
    if not opportunities:
        return '<p class="empty">No opportunities available in this category yet.</p>'

    cards = []
    for o in opportunities:
        details = [f'<span class="type">{_escape_html(o.type)}</span>']
        if o.deadline:
            details.append(f'<span class="deadline">Deadline: {_escape_html(o.deadline)}</span>')
        if o.location:
            details.append(f'<span class="location">{_escape_html(o.location)}</span>')
        cards.append(
            f"<li><h3>{_escape_html(o.title)}</h3>"
            f"<p>{_escape_html(o.description)}</p>"
            f"<div>{''.join(details)}</div></li>"
        )
    return f'<ul class="opportunities">{"".join(cards)}</ul>'


def render_guideline_article(guideline: Guideline) -> str:
    """Guideline body. `content` is renderer output and is inserted as-is."""
    notice = ""
    if guideline.is_fallback:
        notice = render_fallback_notice(
            "This guideline could not be loaded from the content service.",
            heading="Content Temporarily Unavailable",
        )

    image = ""
    if guideline.featured_image.url:
        image = (
            f'<img src="{_escape_html(guideline.featured_image.url)}" '
            f'alt="{_escape_html(guideline.featured_image.alt)}" '
            f'width="{guideline.featured_image.width}" '
            f'height="{guideline.featured_image.height}" />'
        )

    return f"""
    {notice}
    <article>
        <h1>{_escape_html(guideline.title)}</h1>
        {image}
        <div class="content">{guideline.content}</div>
    </article>
    """


def render_policy_article(page: PolicyPage) -> str:
    notice = ""
    if page.is_fallback:
        notice = render_fallback_notice(
            "This page is showing default content. Connect Contentful to manage it."
        )

    return f"""
    {notice}
    <article>
        <h1>{_escape_html(page.title)}</h1>
        <div class="content">{page.content}</div>
    </article>
    """


def _html_page(
    request: Request,
    rules: Rules,
    service: ContentService,
    body: str,
    title: str | None = None,
    description: str = "",
    categories: list[Category] | None = None,
) -> HTMLResponse:
    metadata = build_metadata(request, rules, title, description)
    html = render_ssr_page(
        metadata,
        body,
        site_name=rules.site.name,
        categories=service.list_categories() if categories is None else categories,
    )
    return HTMLResponse(content=html, status_code=200)


# --- SSR Endpoints ---


@router.get("/", response_class=HTMLResponse, summary="Homepage SSR")
def ssr_homepage(
    request: Request,
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    """Serve homepage: statistics, categories and the latest guidelines."""
    categories = service.list_categories()
    guidelines = service.list_guidelines(limit=rules.guidelines.home_limit)

    body = f"""
    <section class="hero">
        <h1>{_escape_html(rules.site.tagline)}</h1>
        {render_statistics(service.home_statistics())}
    </section>
    <section>
        <h2>Explore Opportunities</h2>
        {render_category_cards(categories)}
    </section>
    <section>
        <h2>Latest Guidelines</h2>
        {render_guideline_cards(guidelines)}
        <p><a href="/guideline">View all guidelines</a></p>
    </section>
    """

    return _html_page(request, rules, service, body, categories=categories)


@router.get("/guideline", response_class=HTMLResponse, summary="Guideline list SSR")
def ssr_guidelines(
    request: Request,
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    body = f"""
    <h1>Guidelines</h1>
    {render_guideline_cards(service.list_guidelines())}
    """
    return _html_page(request, rules, service, body, title="Guidelines")


@router.get("/guideline/{slug}", response_class=HTMLResponse, summary="Guideline SSR")
def ssr_guideline(
    slug: str,
    request: Request,
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    """Serve a single guideline, or 404."""
    guideline = service.get_guideline(slug)
    if guideline is None:
        raise HTTPException(status_code=404, detail="Guideline not found")

    return _html_page(
        request,
        rules,
        service,
        render_guideline_article(guideline),
        title=guideline.title,
        description=guideline.meta_description or guideline.description,
    )


def _policy_response(
    slug: str, request: Request, service: ContentService, rules: Rules
) -> HTMLResponse:
    page = service.get_policy_page(slug)
    if page is None:
        raise HTTPException(status_code=404, detail="Policy page not found")

    return _html_page(
        request,
        rules,
        service,
        render_policy_article(page),
        title=page.title,
        description=page.meta_description,
    )


@router.get("/privacy-policy", response_class=HTMLResponse, summary="Privacy policy SSR")
def ssr_privacy_policy(
    request: Request,
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    return _policy_response("privacy-policy", request, service, rules)


@router.get("/term-of-service", response_class=HTMLResponse, summary="Terms of service SSR")
def ssr_terms_of_service(
    request: Request,
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    return _policy_response("term-of-service", request, service, rules)


@router.get("/cookies", response_class=HTMLResponse, summary="Cookie policy SSR")
def ssr_cookies(
    request: Request,
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    return _policy_response("cookies", request, service, rules)


def _category_response(
    slug: str, request: Request, service: ContentService, rules: Rules
) -> HTMLResponse:
    category = service.get_category(slug)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")

    body = f"""
    <section class="category">
        <h1>{_escape_html(category.name)}</h1>
        <p>{_escape_html(category.description)}</p>
        {render_opportunity_cards(service.list_opportunities(category.slug))}
    </section>
    """
    return _html_page(
        request, rules, service, body, title=category.name, description=category.description
    )


@router.get("/opportunity/{slug}", response_class=HTMLResponse, summary="Category SSR")
def ssr_opportunity_category(
    slug: str,
    request: Request,
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    return _category_response(slug, request, service, rules)


# Catch-all; keep last
@router.get("/{slug}", response_class=HTMLResponse, summary="Category SSR")
def ssr_category(
    slug: str,
    request: Request,
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> HTMLResponse:
    """Serve a category page with its opportunities, or 404."""
    return _category_response(slug, request, service, rules)
