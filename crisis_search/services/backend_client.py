"""
Services - Backend Client

HTTP client for the resource-search backend with bounded retry and
exponential backoff.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from crisis_search.config import get_settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})

SEARCH_PATH = "/v2/resources/search"
RESOURCE_PATH = "/v2/resources/{resource_id}"
EXTRACT_PATH = "/llm/extract-filters"


class BackendAPIError(Exception):
    """Backend call failed; status_code is None for network failures."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body

    def __repr__(self) -> str:
        return f"BackendAPIError(status_code={self.status_code!r}, message={self.message!r})"


class BackendClient:
    """Resource-search backend API client."""

    def __init__(
        self,
        settings=None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ):
        self.settings = settings or get_settings()
        self.base_url = self.settings.backend.base_url.rstrip("/")
        self.api_key = self.settings.backend.api_key
        self.timeout = self.settings.backend.timeout_ms / 1000
        self.max_retries = self.settings.backend.max_retries
        self.backoff_ms = self.settings.backend.backoff_ms
        self.http_client = http_client
        self._sleep = sleep or asyncio.sleep

    async def search_resources(self, params: Dict[str, str]) -> Dict[str, Any]:
        """
        Search resources.

        Args:
            params: Backend query parameters

        Returns:
            Raw backend search response
        """
        return await self._request("GET", SEARCH_PATH, params=params)

    async def get_resource_by_id(self, resource_id: str) -> Dict[str, Any]:
        """
        Get a single resource.

        Args:
            resource_id: Resource UUID

        Returns:
            Raw backend resource
        """
        return await self._request("GET", RESOURCE_PATH.format(resource_id=resource_id))

    async def extract_filters(
        self,
        query: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Run the backend's own filter extraction.

        Args:
            query: Natural-language query
            context: Optional current_location / user_type

        Returns:
            Raw extraction response
        """
        return await self._request(
            "POST", EXTRACT_PATH, json={"query": query, "context": context}
        )

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after a failed attempt (0-based)."""
        return self.backoff_ms * (2 ** attempt) / 1000

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request, retrying network failures and retryable statuses."""
        url = f"{self.base_url}{path}"
        last_error: Optional[BackendAPIError] = None

        for attempt in range(self.max_retries + 1):
            try:
                response = await self._send(method, url, params=params, json=json)
            except httpx.TransportError as e:
                logger.warning(f"{method} {path} network error: {e!r}")
                last_error = BackendAPIError(f"Network error: {e}")
            else:
                if response.is_success:
                    return self._decode(response)

                last_error = BackendAPIError(
                    f"HTTP {response.status_code}: {response.reason_phrase}",
                    status_code=response.status_code,
                    response_body=self._body(response),
                )
                if response.status_code not in RETRYABLE_STATUSES:
                    logger.error(f"{method} {path} failed: {last_error.message}")
                    raise last_error

            if attempt < self.max_retries:
                delay = self.backoff_delay(attempt)
                logger.info(
                    f"Retry {attempt + 1}/{self.max_retries} for {method} {path} after {delay:.1f}s"
                )
                await self._sleep(delay)

        logger.error(f"{method} {path} failed after {self.max_retries + 1} attempts")
        raise last_error

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        kwargs["headers"] = self._headers()
        if self.http_client is not None:
            return await self.http_client.request(method, url, timeout=self.timeout, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.request(method, url, **kwargs)

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        try:
            return response.json()
        except ValueError as e:
            raise BackendAPIError(
                f"Invalid JSON from backend: {e}",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text
