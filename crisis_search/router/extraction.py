"""
Extraction API Router

Natural-language filter extraction endpoint.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from crisis_search.router.dependencies import get_orchestrator
from crisis_search.schemas import ExtractFiltersRequest
from crisis_search.services import ExtractionOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["extraction"])


@router.post("/extract-filters")
async def extract_filters(
    request: ExtractFiltersRequest,
    orchestrator: ExtractionOrchestrator = Depends(get_orchestrator),
):
    """
    Extract structured filters from a natural-language query.

    Provider failures fall back to the next provider and finally to
    keyword matching, so a non-empty query always gets a result.
    """
    query = request.query or ""
    if not query.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Query is required"},
        )

    logger.info(f"Extract filters request: {query!r}")

    try:
        result = await orchestrator.extract(query, request.context)
    except Exception as e:
        logger.error(f"Filter extraction failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to extract filters", "details": str(e)},
        )

    logger.info(
        f"Extracted filters with {result.metadata.provider} "
        f"(confidence={result.confidence})"
    )
    return result.model_dump(mode="json", exclude_none=True)
