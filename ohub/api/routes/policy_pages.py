from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ohub.api.deps import get_content_service
from ohub.api.schemas import ErrorResponse, PolicyPageResponse
from ohub.components.content import ContentService, GetPolicyPageInput
from ohub.components.content.component import run_get_policy_page

router = APIRouter()


@router.get(
    "/{slug}",
    response_model=PolicyPageResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_policy_page(
    slug: str,
    service: ContentService = Depends(get_content_service),
) -> PolicyPageResponse | JSONResponse:
    """
    Get a policy page by slug.

    Known slugs (privacy-policy, term-of-service, cookies) always resolve,
    from the CMS or the bundled copy.
    """
    result = run_get_policy_page(GetPolicyPageInput(slug=slug), service)
    if result.page is None:
        return JSONResponse(status_code=404, content={"error": "Policy page not found"})
    return PolicyPageResponse.from_entity(result.page)
