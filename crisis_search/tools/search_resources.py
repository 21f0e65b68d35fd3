"""
MCP Tool - search_resources

Resource search with canonical filters.
"""

from fastmcp import FastMCP
from pydantic import ValidationError

from crisis_search.schemas import CanonicalSearchFilters
from crisis_search.services import BackendAPIError, InvalidLocationError, SearchService

router = FastMCP("search_resources")


@router.tool()
async def search_resources(filters: dict) -> dict:
    """
    Search mental-health resources.

    Pass the filters returned by extract_filters, optionally edited.
    Either "keywords" or "location" ({"address": ..., "coordinates":
    {"lat": ..., "lon": ...}}) is required.

    Args:
        filters: Canonical search filters

    Returns:
        Matching resources with match reasons and provenance
    """
    try:
        canonical = CanonicalSearchFilters.model_validate(filters)
    except ValidationError as e:
        return {"error": "Invalid search filters", "details": str(e)}

    if not canonical.has_search_origin():
        return {"error": "Either location or keywords is required"}

    service = SearchService()

    try:
        response = await service.search(canonical)
    except InvalidLocationError as e:
        return {"error": "Invalid location coordinates", "details": str(e)}
    except BackendAPIError as e:
        return {"error": "Search failed", "details": e.message, "statusCode": e.status_code}

    return response.model_dump(mode="json", exclude_none=True)
