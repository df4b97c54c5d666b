"""
Category endpoints.

Categories drive site navigation, so the list is served with a long
shared-cache lifetime. Unlike the other content routes, a CMS failure
here is reported as an error instead of falling back.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from ohub.api.deps import get_content_service, get_rules
from ohub.api.schemas import CategoryResponse, ErrorResponse
from ohub.components.content import (
    ContentService,
    ContentSourceError,
    ContentSourceNotConfiguredError,
)
from ohub.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[CategoryResponse],
    responses={500: {"model": ErrorResponse}},
)
def list_categories(
    service: ContentService = Depends(get_content_service),
    rules: Rules = Depends(get_rules),
) -> JSONResponse:
    """List active categories ordered by sort order."""
    try:
        categories = service.fetch_categories()
    except ContentSourceNotConfiguredError:
        logger.error("Missing Contentful environment variables")
        return JSONResponse(
            status_code=500,
            content={"error": "Contentful configuration error"},
        )
    except ContentSourceError as e:
        logger.error("Error fetching categories: %s", e)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch categories", "message": str(e)},
        )

    return JSONResponse(
        content=[
            CategoryResponse.from_entity(c).model_dump(by_alias=True) for c in categories
        ],
        headers={"Cache-Control": rules.site.cache_headers.categories},
    )


@router.get("/{slug}", response_model=CategoryResponse)
def get_category(
    slug: str,
    service: ContentService = Depends(get_content_service),
) -> CategoryResponse:
    """Get a category by slug."""
    category = service.get_category(slug)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return CategoryResponse.from_entity(category)
