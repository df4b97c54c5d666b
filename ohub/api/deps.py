import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from ohub.adapters.clock import SystemClock
from ohub.adapters.contentful import ContentfulClient
from ohub.components.content import ContentConfig, ContentService, ContentSourcePort
from ohub.components.richtext import RichTextRenderer, config_from_rules
from ohub.rules.loader import load_rules
from ohub.rules.models import Rules


DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.contentful_space_id = os.environ.get("CONTENTFUL_SPACE_ID") or None
        self.contentful_access_token = os.environ.get("CONTENTFUL_ACCESS_TOKEN") or None
        self.contentful_environment = os.environ.get("CONTENTFUL_ENVIRONMENT") or "master"
        self.rules_path = Path(os.environ.get("OHUB_RULES_PATH", self.base_dir / "rules.yaml"))
        self.log_level = os.environ.get("OHUB_LOG_LEVEL", "INFO").upper()
        self.cors_origins = [
            origin.strip()
            for origin in os.environ.get("OHUB_CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
            if origin.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


class RichTextRulesAdapter:
    """Adapter to map generic Rules to Richtext component RulesPort."""

    def __init__(self, rules: Rules):
        self._rules = rules.richtext

    def get_fallback_html(self) -> str:
        return self._rules.fallback_html

    def get_default_image_alt(self) -> str:
        return self._rules.default_image_alt

    def get_embedded_entry_label(self) -> str:
        return self._rules.embedded_entry_label

    def get_forbidden_protocols(self) -> frozenset[str]:
        return frozenset(p.lower() for p in self._rules.forbidden_protocols)

    def get_class_names(self) -> dict[str, str]:
        return dict(self._rules.class_names)


def content_config_from_rules(rules: Rules) -> ContentConfig:
    guidelines = rules.guidelines
    return ContentConfig(
        guideline_image_alt=guidelines.image_alt,
        default_image_width=guidelines.default_image_width,
        default_image_height=guidelines.default_image_height,
        guideline_content_fields=tuple(guidelines.content_fields),
        guideline_image_fields=tuple(guidelines.image_fields),
        list_include_depth=guidelines.list_include_depth,
        detail_include_depth=guidelines.detail_include_depth,
    )


# --- Adapters ---

# Clock singleton shared by the CMS cache and fallback timestamps
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


@lru_cache
def _contentful_client() -> ContentfulClient:
    settings = get_settings()
    source_rules = get_rules().content_source
    return ContentfulClient(
        space_id=settings.contentful_space_id,
        access_token=settings.contentful_access_token,
        environment=settings.contentful_environment,
        base_url=source_rules.base_url,
        timeout=source_rules.timeout_seconds,
        cache_ttls=source_rules.cache_ttl_seconds,
        cache_max_entries=source_rules.cache_max_entries,
        clock=get_clock(),
    )


def get_content_source() -> ContentSourcePort:
    """Get the CMS client; one per process so its cache is shared."""
    return _contentful_client()


# --- Component Services ---
def get_renderer(rules: Rules = Depends(get_rules)) -> RichTextRenderer:
    """Get rich text renderer configured from rules."""
    return RichTextRenderer(config_from_rules(RichTextRulesAdapter(rules)))


def get_content_service(
    source: ContentSourcePort = Depends(get_content_source),
    renderer: RichTextRenderer = Depends(get_renderer),
    rules: Rules = Depends(get_rules),
) -> ContentService:
    """Get content component service."""
    return ContentService(
        source=source,
        renderer=renderer,
        config=content_config_from_rules(rules),
        clock=get_clock(),
    )
