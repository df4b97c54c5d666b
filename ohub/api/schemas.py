from dataclasses import asdict
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ohub.components.content import (
    Category,
    ConnectionReport,
    Guideline,
    Opportunity,
    OpportunityType,
    PolicyPage,
)

# --- Shared Types ---
ConnectionStatus = Literal["success", "error"]


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Categories ---
class CategoryResponse(CamelModel):
    id: str
    name: str
    slug: str
    description: str = ""
    icon: str = ""
    color: str = ""
    sort_order: int = 0
    is_active: bool = True

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryResponse":
        return cls.model_validate(asdict(category))


# --- Opportunities ---
class OpportunityResponse(CamelModel):
    id: str
    title: str
    description: str
    category: str
    category_slug: str
    type: OpportunityType
    deadline: str | None = None
    location: str | None = None
    is_active: bool = True
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_entity(cls, opportunity: Opportunity) -> "OpportunityResponse":
        return cls.model_validate(asdict(opportunity))


# --- Guidelines ---
class FeaturedImageModel(CamelModel):
    url: str = ""
    alt: str = ""
    width: int = 0
    height: int = 0


class GuidelineResponse(CamelModel):
    id: str
    title: str
    slug: str
    description: str = ""
    content: str = ""
    featured_image: FeaturedImageModel = FeaturedImageModel()
    meta_title: str = ""
    meta_description: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_entity(cls, guideline: Guideline) -> "GuidelineResponse":
        return cls.model_validate(asdict(guideline))


# --- Policy Pages ---
class PolicyPageResponse(CamelModel):
    id: str
    title: str
    slug: str
    content: str = ""
    meta_title: str = ""
    meta_description: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_entity(cls, page: PolicyPage) -> "PolicyPageResponse":
        return cls.model_validate(asdict(page))


# --- Diagnostics ---
class ConnectionReportResponse(CamelModel):
    status: ConnectionStatus
    message: str
    space_id: str | None = None
    access_token: str | None = None
    status_code: int | None = None
    total_items: int | None = None
    items: int | None = None
    content_types: list[str] | None = None
    instructions: list[str] | None = None
    possible_issues: list[str] | None = None
    next_steps: list[str] | None = None
    error: str | None = None

    @classmethod
    def from_report(cls, report: ConnectionReport) -> "ConnectionReportResponse":
        # Empty lists are omitted from the payload like unset scalars
        data = {key: value for key, value in asdict(report).items() if value != []}
        if report.status == "success":
            data.setdefault("content_types", [])
        return cls.model_validate(data)


# --- Errors ---
class ErrorResponse(BaseModel):
    error: str
    message: str | None = None
