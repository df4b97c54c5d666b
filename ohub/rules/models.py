from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class RichTextRules(BaseModel):
    fallback_html: str
    default_image_alt: str
    embedded_entry_label: str
    forbidden_protocols: list[str]
    class_names: dict[str, str] = Field(default_factory=dict)


class ContentSourceRules(BaseModel):
    base_url: str
    timeout_seconds: float = Field(gt=0)
    cache_ttl_seconds: dict[str, int]
    cache_max_entries: int = Field(default=500, gt=0)


class GuidelineRules(BaseModel):
    image_alt: str
    default_image_width: int = Field(gt=0)
    default_image_height: int = Field(gt=0)
    content_fields: list[str] = Field(min_length=1)
    image_fields: list[str] = Field(min_length=1)
    list_include_depth: int = Field(ge=0, le=10)
    detail_include_depth: int = Field(ge=0, le=10)
    home_limit: int = Field(gt=0)


class CacheHeaderRules(BaseModel):
    categories: str


class SiteRules(BaseModel):
    name: str
    tagline: str
    cache_headers: CacheHeaderRules


class Rules(BaseModel):
    project: ProjectRules
    richtext: RichTextRules
    content_source: ContentSourceRules
    guidelines: GuidelineRules
    site: SiteRules
