"""
Content component models.

Domain entities mapped from CMS entries, the raw entry collection returned
by a content source, the content source error family, and the component
input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

OpportunityType = Literal[
    "scholarship",
    "internship",
    "job",
    "conference",
    "competition",
    "exchange",
]

ConnectionStatus = Literal["success", "error"]

# --- Entities ---


@dataclass(frozen=True)
class Category:
    """Opportunity category, shown in navigation and as a listing page."""

    id: str
    name: str
    slug: str
    description: str = ""
    icon: str = ""
    color: str = ""
    sort_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class Opportunity:
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


@dataclass(frozen=True)
class FeaturedImage:
    """Resolved featured image; an empty url means no image."""

    url: str = ""
    alt: str = ""
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class Guideline:
    """Guideline article. `content` is rendered HTML."""

    id: str
    title: str
    slug: str
    description: str = ""
    content: str = ""
    featured_image: FeaturedImage = field(default_factory=FeaturedImage)
    meta_title: str = ""
    meta_description: str = ""
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_fallback(self) -> bool:
        return self.id == "fallback"


@dataclass(frozen=True)
class PolicyPage:
    """Legal page. `content` is rendered HTML."""

    id: str
    title: str
    slug: str
    content: str = ""
    meta_title: str = ""
    meta_description: str = ""
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_fallback(self) -> bool:
        return self.id.startswith("fallback-")


@dataclass(frozen=True)
class Statistic:
    value: str
    label: str


@dataclass(frozen=True)
class ConnectionReport:
    """Diagnostics for the CMS connection."""

    status: ConnectionStatus
    message: str
    space_id: str | None = None
    access_token: str | None = None
    status_code: int | None = None
    total_items: int | None = None
    items: int | None = None
    content_types: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    possible_issues: list[str] = field(default_factory=list)
    next_steps: list[str] = field(default_factory=list)
    error: str | None = None


# --- Raw Entries ---


@dataclass(frozen=True)
class EntryCollection:
    """
    One page of CMS entries.

    `items` are raw entries (`{"sys": {...}, "fields": {...}}`); `includes`
    is the linked-resource side-table (`{"Asset": [...], "Entry": [...]}`).
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    includes: dict[str, Any] = field(default_factory=dict)
    total: int = 0


# --- Errors ---


class ContentSourceError(Exception):
    """Base error for content source failures."""


class ContentSourceNotConfiguredError(ContentSourceError):
    """Credentials for the content source are missing."""


class ContentSourceUnavailableError(ContentSourceError):
    """The content source could not be reached (DNS, connect, timeout)."""


class ContentSourceResponseError(ContentSourceError):
    """The content source answered with an error status or an unreadable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# --- Input Models ---


@dataclass(frozen=True)
class ListOpportunitiesInput:
    category_slug: str | None = None


@dataclass(frozen=True)
class ListGuidelinesInput:
    limit: int | None = None


@dataclass(frozen=True)
class GetGuidelineInput:
    slug: str


@dataclass(frozen=True)
class GetPolicyPageInput:
    slug: str


# --- Output Models ---


@dataclass(frozen=True)
class ListOpportunitiesOutput:
    items: list[Opportunity]
    success: bool = True


@dataclass(frozen=True)
class ListGuidelinesOutput:
    items: list[Guideline]
    success: bool = True


@dataclass(frozen=True)
class GetGuidelineOutput:
    guideline: Guideline | None
    success: bool = True


@dataclass(frozen=True)
class GetPolicyPageOutput:
    page: PolicyPage | None
    success: bool = True
