from fastapi import APIRouter, Depends, HTTPException, Query

from ohub.api.deps import get_content_service
from ohub.api.schemas import GuidelineResponse
from ohub.components.content import (
    ContentService,
    GetGuidelineInput,
    ListGuidelinesInput,
)
from ohub.components.content.component import run_get_guideline, run_list_guidelines

router = APIRouter()


@router.get("", response_model=list[GuidelineResponse])
def list_guidelines(
    limit: int | None = Query(default=None, ge=1),
    service: ContentService = Depends(get_content_service),
) -> list[GuidelineResponse]:
    """List guidelines, newest first. Never errors; empty when the CMS is down."""
    result = run_list_guidelines(ListGuidelinesInput(limit=limit), service)
    return [GuidelineResponse.from_entity(g) for g in result.items]


@router.get("/{slug}", response_model=GuidelineResponse)
def get_guideline(
    slug: str,
    service: ContentService = Depends(get_content_service),
) -> GuidelineResponse:
    """Get a single guideline with rendered content."""
    result = run_get_guideline(GetGuidelineInput(slug=slug), service)
    if result.guideline is None:
        raise HTTPException(status_code=404, detail="Guideline not found")
    return GuidelineResponse.from_entity(result.guideline)
