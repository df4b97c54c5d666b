"""
ContentService - CMS reads with static fallbacks.

Maps raw CMS entries to domain entities and decides, per content type,
what to serve when the CMS is unconfigured, unreachable or empty.

Key behaviors:
- Categories: `fetch_categories` raises; `list_categories` falls back to
  the static list
- Opportunities: CMS, else static list for the category
- Guidelines: newest first; unavailable CMS yields an empty list
- Single guideline: network failure yields a "temporarily unavailable"
  guideline; anything else unusable yields None
- Policy pages: CMS, else static page for known slugs
- Rich text fields are rendered with the shared RichTextRenderer
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, get_args

from ohub.components.richtext import (
    Asset,
    RichTextRenderer,
    build_asset_table,
    create_rich_text_renderer,
)

from .fallback import (
    STATISTICS,
    fallback_categories,
    fallback_category,
    fallback_opportunities,
    fallback_policy_page,
    unavailable_guideline,
)
from .models import (
    Category,
    ConnectionReport,
    ContentSourceError,
    ContentSourceNotConfiguredError,
    ContentSourceResponseError,
    ContentSourceUnavailableError,
    EntryCollection,
    FeaturedImage,
    Guideline,
    Opportunity,
    OpportunityType,
    PolicyPage,
    Statistic,
)
from .ports import ClockPort, ContentSourcePort

logger = logging.getLogger(__name__)

CATEGORY = "category"
OPPORTUNITY = "opportunity"
GUIDELINE = "guideline"
POLICY_PAGE = "policyPage"

_OPPORTUNITY_TYPES: frozenset[str] = frozenset(get_args(OpportunityType))

# --- Configuration ---


@dataclass(frozen=True)
class ContentConfig:
    """Content mapping configuration from rules."""

    guideline_image_alt: str = "Guideline Image"
    default_image_width: int = 1200
    default_image_height: int = 630

    # First non-empty field wins
    guideline_content_fields: tuple[str, ...] = ("content", "body", "text", "description")
    guideline_image_fields: tuple[str, ...] = ("featuredImage", "image", "thumbnail")

    # Include depth for linked assets
    list_include_depth: int = 2
    detail_include_depth: int = 10


DEFAULT_CONFIG = ContentConfig()


# --- Field Access ---


def _sys(entry: Mapping[str, Any]) -> dict[str, Any]:
    value = entry.get("sys")
    return value if isinstance(value, dict) else {}


def _fields(entry: Mapping[str, Any]) -> dict[str, Any]:
    value = entry.get("fields")
    return value if isinstance(value, dict) else {}


def _str(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def _optional_str(value: Any) -> str | None:
    text = _str(value)
    return text or None


def _int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return default


def _bool(value: Any, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return default


# --- Entry Mapping ---


def map_category(entry: Mapping[str, Any]) -> Category:
    """Map a `category` entry."""
    fields = _fields(entry)
    return Category(
        id=_str(_sys(entry).get("id")),
        name=_str(fields.get("name")),
        slug=_str(fields.get("slug")),
        description=_str(fields.get("description")),
        icon=_str(fields.get("icon")),
        color=_str(fields.get("color")),
        sort_order=_int(fields.get("sortOrder")),
        is_active=_bool(fields.get("isActive")),
    )


def map_opportunity(entry: Mapping[str, Any]) -> Opportunity:
    """Map an `opportunity` entry. Unknown types default to `scholarship`."""
    sys = _sys(entry)
    fields = _fields(entry)
    raw_type = _str(fields.get("type")).lower()
    opportunity_type = raw_type if raw_type in _OPPORTUNITY_TYPES else "scholarship"
    return Opportunity(
        id=_str(sys.get("id")),
        title=_str(fields.get("title")),
        description=_str(fields.get("description")),
        category=_str(fields.get("category")),
        category_slug=_str(fields.get("categorySlug")),
        type=opportunity_type,  # type: ignore[arg-type]
        deadline=_optional_str(fields.get("deadline")),
        location=_optional_str(fields.get("location")),
        is_active=_bool(fields.get("isActive")),
        created_at=_str(sys.get("createdAt")),
        updated_at=_str(sys.get("updatedAt")),
    )


def resolve_featured_image(
    target: Any,
    assets: Mapping[str, Asset],
    renderer: RichTextRenderer,
    config: ContentConfig = DEFAULT_CONFIG,
) -> FeaturedImage:
    """
    Resolve a featured image reference.

    Accepts a linked asset (`sys.id`, looked up in `assets`) or an inline
    asset (`fields.file`). Returns an empty FeaturedImage when the asset
    or its URL cannot be resolved.
    """
    if not target:
        return FeaturedImage()

    asset, url = renderer.resolve_image(target, assets)
    if asset is None or url is None:
        return FeaturedImage()

    return FeaturedImage(
        url=url,
        alt=asset.title or config.guideline_image_alt,
        width=asset.width or config.default_image_width,
        height=asset.height or config.default_image_height,
    )


def render_content(value: Any, assets: Mapping[str, Asset], renderer: RichTextRenderer) -> str:
    """Render a content field: strings pass through, rich text is rendered."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return renderer.render(value, assets)
    return ""


def _first_present(fields: Mapping[str, Any], names: Sequence[str]) -> Any:
    return next((fields[name] for name in names if fields.get(name)), None)


def map_guideline(
    entry: Mapping[str, Any],
    assets: Mapping[str, Asset],
    renderer: RichTextRenderer,
    config: ContentConfig = DEFAULT_CONFIG,
) -> Guideline:
    """Map a `guideline` entry, rendering its content and resolving its image."""
    sys = _sys(entry)
    fields = _fields(entry)
    return Guideline(
        id=_str(sys.get("id")),
        title=_str(fields.get("title")),
        slug=_str(fields.get("slug")),
        description=_str(fields.get("description")),
        content=render_content(
            _first_present(fields, config.guideline_content_fields), assets, renderer
        ),
        featured_image=resolve_featured_image(
            _first_present(fields, config.guideline_image_fields), assets, renderer, config
        ),
        meta_title=_str(fields.get("metaTitle")),
        meta_description=_str(fields.get("metaDescription")),
        created_at=_str(sys.get("createdAt")),
        updated_at=_str(sys.get("updatedAt")),
    )


def map_policy_page(
    entry: Mapping[str, Any],
    assets: Mapping[str, Asset],
    renderer: RichTextRenderer,
) -> PolicyPage:
    """Map a `policyPage` entry."""
    sys = _sys(entry)
    fields = _fields(entry)
    content = fields.get("content")
    return PolicyPage(
        id=_str(sys.get("id")),
        title=_str(fields.get("title")),
        slug=_str(fields.get("slug")),
        content=content if isinstance(content, str) else renderer.render(content, assets),
        meta_title=_str(fields.get("metaTitle")),
        meta_description=_str(fields.get("metaDescription")),
        created_at=_str(sys.get("createdAt")),
        updated_at=_str(sys.get("updatedAt")),
    )


def _content_type_of(entry: Mapping[str, Any]) -> str | None:
    content_type = _sys(entry).get("contentType")
    if not isinstance(content_type, dict):
        return None
    return _optional_str(_sys(content_type).get("id"))


# --- Content Service ---


class ContentService:
    """
    Content service.

    Reads categories, opportunities, guidelines and policy pages from a
    content source and applies the fallback rules for each.
    """

    def __init__(
        self,
        source: ContentSourcePort,
        renderer: RichTextRenderer | None = None,
        config: ContentConfig | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        """Initialize service."""
        self._source = source
        self._renderer = renderer or create_rich_text_renderer()
        self._config = config or DEFAULT_CONFIG
        self._clock = clock

    @property
    def is_configured(self) -> bool:
        return self._source.is_configured()

    def _now(self) -> datetime:
        return self._clock.now() if self._clock else datetime.now(UTC)

    # --- Categories ---

    def fetch_categories(self) -> list[Category]:
        """
        Fetch active categories from the CMS, ordered by sort order.

        Raises:
            ContentSourceNotConfiguredError: if credentials are missing.
            ContentSourceError: if the CMS request fails.
        """
        if not self._source.is_configured():
            raise ContentSourceNotConfiguredError("Contentful configuration error")

        collection = self._source.get_entries(
            CATEGORY,
            {"fields.isActive": "true", "order": "fields.sortOrder"},
        )
        return [map_category(item) for item in collection.items]

    def list_categories(self) -> list[Category]:
        """Categories for navigation; never raises."""
        try:
            return self.fetch_categories()
        except ContentSourceNotConfiguredError:
            logger.info("CMS not configured, using fallback categories")
        except ContentSourceError as e:
            logger.warning("Failed to fetch categories, using fallback: %s", e)
        return fallback_categories()

    def get_category(self, slug: str) -> Category | None:
        """Get category by slug from the CMS, else the static list."""
        if self._source.is_configured():
            try:
                collection = self._source.get_entries(
                    CATEGORY, {"fields.slug": slug, "limit": 1}
                )
                if collection.items:
                    return map_category(collection.items[0])
            except ContentSourceError as e:
                logger.warning("Failed to fetch category %r: %s", slug, e)

        return fallback_category(slug)

    # --- Opportunities ---

    def list_opportunities(self, category_slug: str | None = None) -> list[Opportunity]:
        """Active opportunities, optionally for one category."""
        if not self._source.is_configured():
            logger.info("CMS not configured, using fallback opportunities")
            return fallback_opportunities(category_slug)

        params: dict[str, Any] = {"fields.isActive": "true", "order": "-sys.createdAt"}
        if category_slug:
            params["fields.categorySlug"] = category_slug

        try:
            collection = self._source.get_entries(OPPORTUNITY, params)
        except ContentSourceError as e:
            logger.warning("Failed to fetch opportunities, using fallback: %s", e)
            return fallback_opportunities(category_slug)

        return [map_opportunity(item) for item in collection.items]

    # --- Guidelines ---

    def list_guidelines(self, limit: int | None = None) -> list[Guideline]:
        """Guidelines, newest first. Empty when the CMS is unavailable."""
        if not self._source.is_configured():
            logger.info("CMS not configured, no guidelines to list")
            return []

        params: dict[str, Any] = {
            "include": self._config.list_include_depth,
            "order": "-sys.createdAt",
        }
        if limit is not None:
            params["limit"] = limit

        try:
            collection = self._source.get_entries(GUIDELINE, params)
        except ContentSourceError as e:
            logger.error("Error fetching guidelines: %s", e)
            return []

        return self._map_guidelines(collection)

    def get_guideline(self, slug: str) -> Guideline | None:
        """
        Get guideline by slug.

        Returns the "temporarily unavailable" guideline when the CMS cannot
        be reached, and None when it is unconfigured, errors, or has no
        matching entry.
        """
        if not self._source.is_configured():
            return None

        try:
            collection = self._source.get_entries(
                GUIDELINE,
                {
                    "fields.slug": slug,
                    "include": self._config.detail_include_depth,
                    "limit": 1,
                },
            )
        except ContentSourceUnavailableError as e:
            logger.warning("CMS unreachable for guideline %r: %s", slug, e)
            return unavailable_guideline(slug, self._now())
        except ContentSourceError as e:
            logger.error("Error fetching guideline %r: %s", slug, e)
            return None

        guidelines = self._map_guidelines(collection)
        return guidelines[0] if guidelines else None

    def _map_guidelines(self, collection: EntryCollection) -> list[Guideline]:
        assets = build_asset_table(collection.includes)
        return [
            map_guideline(item, assets, self._renderer, self._config)
            for item in collection.items
            if isinstance(item, dict)
        ]

    # --- Policy Pages ---

    def get_policy_page(self, slug: str) -> PolicyPage | None:
        """Get policy page by slug, falling back to the static page."""
        if not self._source.is_configured():
            logger.info("CMS not configured, returning fallback policy page %r", slug)
            return fallback_policy_page(slug, self._now())

        try:
            collection = self._source.get_entries(
                POLICY_PAGE,
                {"fields.slug": slug, "include": self._config.list_include_depth},
            )
        except ContentSourceError as e:
            logger.error("Error fetching policy page %r: %s", slug, e)
            return fallback_policy_page(slug, self._now())

        if not collection.items:
            return fallback_policy_page(slug, self._now())

        assets = build_asset_table(collection.includes)
        return map_policy_page(collection.items[0], assets, self._renderer)

    # --- Home ---

    def home_statistics(self) -> list[Statistic]:
        return list(STATISTICS)

    # --- Diagnostics ---

    def check_connection(self) -> ConnectionReport:
        """Probe the CMS and describe how to fix what is wrong."""
        if not self._source.is_configured():
            status = self._source.credential_status()
            return ConnectionReport(
                status="error",
                message="Contentful environment variables not configured",
                space_id="Set" if status.get("space_id") else "Not set",
                access_token="Set" if status.get("access_token") else "Not set",
                instructions=[
                    "Create a .env file in your project root",
                    "Add CONTENTFUL_SPACE_ID=your_space_id",
                    "Add CONTENTFUL_ACCESS_TOKEN=your_access_token",
                    "Restart the server",
                ],
            )

        try:
            collection = self._source.check_connection()
        except ContentSourceResponseError as e:
            if e.status_code is None:
                return ConnectionReport(
                    status="error", message="Unexpected error occurred", error=str(e)
                )
            return ConnectionReport(
                status="error",
                message="Contentful API connection failed",
                status_code=e.status_code,
                possible_issues=[
                    "Invalid space ID or access token",
                    "Space ID or access token not found",
                    "Network connectivity issues",
                ],
            )
        except ContentSourceError as e:
            return ConnectionReport(
                status="error", message="Unexpected error occurred", error=str(e)
            )

        content_types = [
            content_type
            for content_type in (_content_type_of(item) for item in collection.items)
            if content_type
        ]
        return ConnectionReport(
            status="success",
            message="Contentful connection successful",
            total_items=collection.total,
            items=len(collection.items),
            content_types=content_types,
            next_steps=[
                'Create a content type called "policyPage"',
                "Add entries with slugs: privacy-policy, term-of-service, cookies",
                "Publish the entries",
                "Visit the policy pages to see the content",
            ],
        )


# --- Factory ---


def create_content_service(
    source: ContentSourcePort,
    renderer: RichTextRenderer | None = None,
    config: ContentConfig | None = None,
    clock: ClockPort | None = None,
) -> ContentService:
    """Create a ContentService."""
    return ContentService(source=source, renderer=renderer, config=config, clock=clock)
