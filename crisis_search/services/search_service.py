"""
Services - Search Service

Resource search and detail lookup against the backend.
"""

import logging
import re
import time
from typing import Any, Dict, Optional

import httpx

from crisis_search.config import get_settings
from crisis_search.schemas import CanonicalSearchFilters, SearchResponse
from crisis_search.services.backend_client import BackendClient
from crisis_search.services.transform import from_backend_response, to_backend_params
from crisis_search.vocabulary import CRISIS_SERVICE_TYPES

logger = logging.getLogger(__name__)

RESOURCE_ID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_valid_resource_id(resource_id: str) -> bool:
    """Check resource id is a UUID."""
    return bool(RESOURCE_ID_PATTERN.match(resource_id or ""))


class SearchService:
    """Transforms filters, calls the backend and maps results back."""

    def __init__(
        self,
        settings=None,
        client: Optional[BackendClient] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self.client = client or BackendClient(self.settings, http_client=http_client)
        self.fallback_query = self.settings.search.fallback_query

    async def search(self, filters: CanonicalSearchFilters) -> SearchResponse:
        """
        Search resources.

        Args:
            filters: Canonical filters with a location or keywords

        Returns:
            SearchResponse

        Raises:
            InvalidLocationError: Coordinates are not finite (before any call)
            BackendAPIError: Backend call failed after retries
        """
        start_time = time.time()

        params = self.ensure_searchable(to_backend_params(filters), filters)
        logger.info(f"Searching resources with params: {params}")

        raw = await self.client.search_resources(params)
        response = from_backend_response(raw)

        if not response.metadata.execution_time_ms:
            response.metadata.execution_time_ms = int((time.time() - start_time) * 1000)

        logger.info(f"Search returned {len(response.items)} of {response.total} results")
        return response

    def ensure_searchable(
        self,
        params: Dict[str, str],
        filters: CanonicalSearchFilters,
    ) -> Dict[str, str]:
        """
        Substitute a policy default when params carry no query or service types.

        The backend rejects searches without either field.
        """
        if params.get("query") or params.get("service_types"):
            return params

        params = dict(params)
        if filters.care_phase == "immediate_crisis":
            params["service_types"] = ",".join(CRISIS_SERVICE_TYPES)
            logger.info("No search terms; defaulting to crisis service types")
        else:
            params["query"] = self.fallback_query
            logger.info(f"No search terms; defaulting to query {self.fallback_query!r}")
        return params

    async def get_resource(self, resource_id: str) -> Dict[str, Any]:
        """
        Get resource details.

        Args:
            resource_id: Resource UUID (validated by the caller)

        Returns:
            Raw backend resource
        """
        resource = await self.client.get_resource_by_id(resource_id)
        name = (resource.get("details") or {}).get("name") or resource.get("name")
        logger.info(f"Fetched resource {resource_id}: {name}")
        return resource
