"""
Resources API Router

Resource search and detail endpoints proxied to the backend.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from crisis_search.router.dependencies import get_search_service
from crisis_search.schemas import CanonicalSearchFilters
from crisis_search.services import (
    BackendAPIError,
    InvalidLocationError,
    SearchService,
    is_valid_resource_id,
)
from crisis_search.services.url_params import from_url_params

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"])


def _error(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


@router.get("/search")
async def search_resources(
    request: Request,
    service: SearchService = Depends(get_search_service),
):
    """
    Search resources with canonical filters passed as URL parameters.

    Lists repeat the key, objects (location) are JSON text.
    """
    params = from_url_params(request.query_params.multi_items())

    try:
        filters = CanonicalSearchFilters.model_validate(params)
    except ValidationError as e:
        details = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        logger.warning(f"Invalid search filters: {details}")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid search filters", details=details)

    if not filters.has_search_origin():
        return _error(status.HTTP_400_BAD_REQUEST, "Either location or keywords is required")

    try:
        response = await service.search(filters)
    except InvalidLocationError as e:
        logger.error(f"Search rejected: {e}; filters={e.filters}")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Invalid location coordinates",
            details=str(e),
            filters=e.filters,
        )
    except BackendAPIError as e:
        status_code = e.status_code or status.HTTP_502_BAD_GATEWAY
        logger.error(f"Backend search failed: {e.message}")
        return _error(status_code, "Search failed", details=e.message, statusCode=status_code)

    return response.model_dump(mode="json", exclude_none=True)


@router.get("/{resource_id}")
async def get_resource(
    resource_id: str,
    service: SearchService = Depends(get_search_service),
):
    """Get resource details by UUID."""
    if not is_valid_resource_id(resource_id):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid resource ID format (expected UUID)")

    try:
        return await service.get_resource(resource_id)
    except BackendAPIError as e:
        logger.error(f"Resource {resource_id} lookup failed: {e.message}")
        if e.status_code == status.HTTP_404_NOT_FOUND:
            return _error(status.HTTP_404_NOT_FOUND, "Resource not found")
        status_code = e.status_code or status.HTTP_502_BAD_GATEWAY
        return _error(
            status_code, "Failed to fetch resource", details=e.message, statusCode=status_code
        )
