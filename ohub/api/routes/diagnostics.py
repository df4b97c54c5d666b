"""Contentful connection diagnostics for operators setting up the site."""

from fastapi import APIRouter, Depends

from ohub.api.deps import get_content_service
from ohub.api.schemas import ConnectionReportResponse
from ohub.components.content import ContentService

router = APIRouter()


@router.get(
    "/test-contentful",
    response_model=ConnectionReportResponse,
    response_model_exclude_none=True,
)
def contentful_diagnostics(
    service: ContentService = Depends(get_content_service),
) -> ConnectionReportResponse:
    """
    Probe the CMS with a single-entry query.

    Always answers 200; the report's `status` says whether the connection
    works and what to do next.
    """
    return ConnectionReportResponse.from_report(service.check_connection())
