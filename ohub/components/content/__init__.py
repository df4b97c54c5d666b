"""
Content component - CMS content with static fallbacks.
"""

from ._impl import (
    CATEGORY,
    GUIDELINE,
    OPPORTUNITY,
    POLICY_PAGE,
    ContentConfig,
    ContentService,
    create_content_service,
    map_category,
    map_guideline,
    map_opportunity,
    map_policy_page,
    render_content,
    resolve_featured_image,
)
from .component import (
    run,
    run_get_guideline,
    run_get_policy_page,
    run_list_guidelines,
    run_list_opportunities,
)
from .fallback import (
    POLICY_SLUGS,
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
    GetGuidelineInput,
    GetGuidelineOutput,
    GetPolicyPageInput,
    GetPolicyPageOutput,
    Guideline,
    ListGuidelinesInput,
    ListGuidelinesOutput,
    ListOpportunitiesInput,
    ListOpportunitiesOutput,
    Opportunity,
    OpportunityType,
    PolicyPage,
    Statistic,
)
from .ports import ClockPort, ContentSourcePort

__all__ = [
    # Entry points
    "run",
    "run_get_guideline",
    "run_get_policy_page",
    "run_list_guidelines",
    "run_list_opportunities",
    # Input models
    "GetGuidelineInput",
    "GetPolicyPageInput",
    "ListGuidelinesInput",
    "ListOpportunitiesInput",
    # Output models
    "GetGuidelineOutput",
    "GetPolicyPageOutput",
    "ListGuidelinesOutput",
    "ListOpportunitiesOutput",
    # Entities
    "Category",
    "ConnectionReport",
    "EntryCollection",
    "FeaturedImage",
    "Guideline",
    "Opportunity",
    "OpportunityType",
    "PolicyPage",
    "Statistic",
    # Errors
    "ContentSourceError",
    "ContentSourceNotConfiguredError",
    "ContentSourceResponseError",
    "ContentSourceUnavailableError",
    # Ports
    "ClockPort",
    "ContentSourcePort",
    # Service
    "CATEGORY",
    "GUIDELINE",
    "OPPORTUNITY",
    "POLICY_PAGE",
    "ContentConfig",
    "ContentService",
    "create_content_service",
    "map_category",
    "map_guideline",
    "map_opportunity",
    "map_policy_page",
    "render_content",
    "resolve_featured_image",
    # Fallbacks
    "POLICY_SLUGS",
    "fallback_categories",
    "fallback_category",
    "fallback_opportunities",
    "fallback_policy_page",
    "unavailable_guideline",
]
