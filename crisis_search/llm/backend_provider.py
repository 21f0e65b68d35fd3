"""
LLM - Backend Provider

Filter extraction through the search backend's own extraction endpoint.
Not in the default provider order; enable it with
EXTRACTION_PROVIDERS=backend,openai,anthropic.
"""

from typing import Optional

import httpx

from crisis_search.config import get_settings
from crisis_search.llm.base_provider import BaseExtractionProvider, coerce_confidence
from crisis_search.schemas import (
    CanonicalSearchFilters,
    ExtractionContext,
    ExtractionMetadata,
    ExtractionResult,
    FilterAmbiguity,
)
from crisis_search.services.backend_client import BackendClient


class BackendExtractionProvider(BaseExtractionProvider):
    """Delegates extraction to the search backend."""

    name = "backend"

    def __init__(self, settings=None, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(settings or get_settings(), http_client)
        self.client = BackendClient(self.settings, http_client=http_client)

    async def extract(
        self,
        query: str,
        context: Optional[ExtractionContext] = None,
    ) -> ExtractionResult:
        """Call the backend and adapt its response."""
        data = await self.client.extract_filters(
            query,
            context.model_dump(exclude_none=True) if context is not None else None,
        )
        if not isinstance(data, dict):
            raise ValueError("Backend returned a non-object extraction response")

        metadata = data.get("metadata") or {}

        return ExtractionResult(
            originalQuery=data.get("originalQuery") or query,
            filters=CanonicalSearchFilters.from_untrusted(data.get("filters")),
            explanation=data.get("explanation") or f'Extracted filters from: "{query}"',
            confidence=coerce_confidence(data.get("confidence")),
            ambiguities=[
                FilterAmbiguity.model_validate(a) for a in data.get("ambiguities") or []
            ] or None,
            metadata=ExtractionMetadata(
                provider=metadata.get("provider") or self.name,
                model=metadata.get("model") or "backend",
                tokens=metadata.get("tokens") or {},
            ),
        )

    def is_available(self) -> bool:
        """Check if a backend URL is configured."""
        return bool(self.client.base_url)
