from fastapi import APIRouter, Depends, Query

from ohub.api.deps import get_content_service
from ohub.api.schemas import OpportunityResponse
from ohub.components.content import ContentService, ListOpportunitiesInput
from ohub.components.content.component import run_list_opportunities

router = APIRouter()


@router.get("", response_model=list[OpportunityResponse])
def list_opportunities(
    category: str | None = Query(default=None, description="Category slug filter"),
    service: ContentService = Depends(get_content_service),
) -> list[OpportunityResponse]:
    """
    List active opportunities, newest first.

    Falls back to the bundled sample opportunities when the CMS is
    unavailable.
    """
    result = run_list_opportunities(ListOpportunitiesInput(category_slug=category), service)
    return [OpportunityResponse.from_entity(o) for o in result.items]
