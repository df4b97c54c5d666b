"""
Content component - CMS content with static fallbacks.

Invariants:
- I1: CMS failures never raise past the service, except fetch_categories
- I2: Policy pages for known slugs are always served (CMS or static)
- I3: A guideline is None only when it does not exist or the CMS errored
  for a reason other than being unreachable
- I4: Rich text fields are rendered by the shared renderer
"""

from __future__ import annotations

from ._impl import ContentService
from .models import (
    GetGuidelineInput,
    GetGuidelineOutput,
    GetPolicyPageInput,
    GetPolicyPageOutput,
    ListGuidelinesInput,
    ListGuidelinesOutput,
    ListOpportunitiesInput,
    ListOpportunitiesOutput,
)

# --- Component Entry Points ---


def run_list_opportunities(
    inp: ListOpportunitiesInput,
    service: ContentService,
) -> ListOpportunitiesOutput:
    """List opportunities, optionally filtered by category slug."""
    return ListOpportunitiesOutput(items=service.list_opportunities(inp.category_slug))


def run_list_guidelines(
    inp: ListGuidelinesInput,
    service: ContentService,
) -> ListGuidelinesOutput:
    """List guidelines, newest first."""
    return ListGuidelinesOutput(items=service.list_guidelines(inp.limit))


def run_get_guideline(
    inp: GetGuidelineInput,
    service: ContentService,
) -> GetGuidelineOutput:
    """
    Get a guideline by slug.

    Returns:
        GetGuidelineOutput; success is False when there is nothing to show.
    """
    guideline = service.get_guideline(inp.slug)
    return GetGuidelineOutput(guideline=guideline, success=guideline is not None)


def run_get_policy_page(
    inp: GetPolicyPageInput,
    service: ContentService,
) -> GetPolicyPageOutput:
    """
    Get a policy page by slug.

    Returns:
        GetPolicyPageOutput; success is False for unknown slugs.
    """
    page = service.get_policy_page(inp.slug)
    return GetPolicyPageOutput(page=page, success=page is not None)


def run(
    inp: ListOpportunitiesInput | ListGuidelinesInput | GetGuidelineInput | GetPolicyPageInput,
    service: ContentService,
) -> ListOpportunitiesOutput | ListGuidelinesOutput | GetGuidelineOutput | GetPolicyPageOutput:
    """
    Main entry point for the content component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ListOpportunitiesInput):
        return run_list_opportunities(inp, service)
    elif isinstance(inp, ListGuidelinesInput):
        return run_list_guidelines(inp, service)
    elif isinstance(inp, GetGuidelineInput):
        return run_get_guideline(inp, service)
    elif isinstance(inp, GetPolicyPageInput):
        return run_get_policy_page(inp, service)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
