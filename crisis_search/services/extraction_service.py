"""
Services - Extraction Service

Ordered provider fallback for natural-language filter extraction,
ending in keyword matching so extraction always produces a result.
"""

import logging
from typing import List, Optional, Sequence

import httpx

from crisis_search.llm.base_provider import BaseExtractionProvider
from crisis_search.schemas import ExtractionContext, ExtractionResult
from crisis_search.services.filter_validator import FilterValidator
from crisis_search.services.query_normalizer import QueryNormalizer

logger = logging.getLogger(__name__)


class ExtractionOrchestrator:
    """
    Tries extraction providers in priority order.

    Unconfigured providers are skipped. The first provider that succeeds
    wins; failures are logged and the next provider is tried. When no
    provider succeeds the keyword normalizer produces the result. Every
    result is passed through the filter validator.
    """

    def __init__(
        self,
        providers: Sequence[BaseExtractionProvider] = (),
        normalizer: Optional[QueryNormalizer] = None,
        validator: Optional[FilterValidator] = None,
    ):
        self.providers: List[BaseExtractionProvider] = list(providers)
        self.normalizer = normalizer or QueryNormalizer()
        self.validator = validator or FilterValidator()

    @classmethod
    def from_settings(
        cls,
        settings=None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "ExtractionOrchestrator":
        """Build an orchestrator from configured providers."""
        from crisis_search.config import get_settings
        from crisis_search.llm import get_providers

        settings = settings or get_settings()
        return cls(
            providers=get_providers(settings, http_client=http_client),
            normalizer=QueryNormalizer(settings.extraction.fallback_radius_km),
        )

    async def extract(
        self,
        query: str,
        context: Optional[ExtractionContext] = None,
    ) -> ExtractionResult:
        """
        Extract filters from a query. Never raises.

        Args:
            query: Non-empty user query
            context: Optional location / user type

        Returns:
            Validated ExtractionResult from the first successful provider,
            or the keyword fallback
        """
        for provider in self.providers:
            if not provider.is_available():
                logger.debug(f"Skipping {provider.name}: not configured")
                continue

            try:
                logger.info(f"Trying extraction provider {provider.name}")
                result = await provider.extract(query, context)
            except Exception as e:
                logger.warning(f"Extraction provider {provider.name} failed: {e!r}")
                continue

            logger.info(f"Extraction succeeded with {provider.name}")
            return self.validator.validate(result, query)

        logger.info("All extraction providers failed or unconfigured, using keyword fallback")
        return self.validator.validate(self.normalizer.extract(query), query)
