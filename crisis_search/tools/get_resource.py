"""
MCP Tool - get_resource

Retrieve full resource details by ID.
"""

from fastmcp import FastMCP

from crisis_search.services import BackendAPIError, SearchService, is_valid_resource_id

router = FastMCP("get_resource")


@router.tool()
async def get_resource(resource_id: str) -> dict:
    """
    Get full details of a resource.

    Args:
        resource_id: Resource UUID from search results

    Returns:
        Resource details, services and verification data
    """
    if not is_valid_resource_id(resource_id):
        return {"error": "Invalid resource ID format (expected UUID)"}

    service = SearchService()

    try:
        return await service.get_resource(resource_id)
    except BackendAPIError as e:
        if e.status_code == 404:
            return {"error": f"Resource {resource_id} not found"}
        return {"error": "Failed to fetch resource", "details": e.message}
