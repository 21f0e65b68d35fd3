"""
LLM Module - Extraction Provider Layer

Supports OpenAI, Anthropic and the search backend's own extraction.
"""

from typing import Dict, List, Optional, Type

import httpx

from crisis_search.llm.base_provider import BaseExtractionProvider
from crisis_search.llm.openai_provider import OpenAIProvider
from crisis_search.llm.anthropic_provider import AnthropicProvider
from crisis_search.llm.backend_provider import BackendExtractionProvider

__all__ = [
    "BaseExtractionProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "BackendExtractionProvider",
    "PROVIDER_REGISTRY",
    "get_providers",
]

PROVIDER_REGISTRY: Dict[str, Type[BaseExtractionProvider]] = {
    OpenAIProvider.name: OpenAIProvider,
    AnthropicProvider.name: AnthropicProvider,
    BackendExtractionProvider.name: BackendExtractionProvider,
}


def get_providers(
    settings=None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> List[BaseExtractionProvider]:
    """Factory function returning providers in configured priority order."""
    from crisis_search.config import get_settings
    settings = settings or get_settings()

    providers = []
    for name in settings.extraction.provider_order:
        if name not in PROVIDER_REGISTRY:
            raise ValueError(f"Unknown extraction provider: {name}")
        providers.append(PROVIDER_REGISTRY[name](settings, http_client=http_client))
    return providers
