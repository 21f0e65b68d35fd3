"""
MCP Tool - extract_filters

Structured search filters from a natural-language query.
"""

from fastmcp import FastMCP
from typing import Optional

from crisis_search.schemas import ExtractionContext, LocationCoordinate
from crisis_search.services import ExtractionOrchestrator

router = FastMCP("extract_filters")


@router.tool()
async def extract_filters(
    query: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    user_type: Optional[str] = None,
) -> dict:
    """
    Extract mental-health resource search filters from a query.

    Tries the configured LLM providers in order and falls back to
    keyword matching, so a result is always returned.

    Args:
        query: Natural-language request (e.g. "walk-in crisis help for teens")
        latitude: Optional current latitude
        longitude: Optional current longitude
        user_type: Optional caller role (e.g. care_coordinator)

    Returns:
        Filters, explanation, confidence and provider metadata
    """
    if not query or not query.strip():
        return {"error": "Query is required"}

    location = None
    if latitude is not None and longitude is not None:
        location = LocationCoordinate(lat=latitude, lon=longitude)

    orchestrator = ExtractionOrchestrator.from_settings()
    result = await orchestrator.extract(
        query,
        ExtractionContext(current_location=location, user_type=user_type),
    )

    return result.model_dump(mode="json", exclude_none=True)
