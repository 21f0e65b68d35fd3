"""
LLM - Base Provider

Abstract base class for filter extraction providers.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from crisis_search.schemas import (
    CanonicalSearchFilters,
    ExtractionContext,
    ExtractionMetadata,
    ExtractionResult,
    TokenUsage,
)

DEFAULT_CONFIDENCE = 0.7

_FENCE_OPEN = re.compile(r"^```\w*\n?")


class BaseExtractionProvider(ABC):
    """Base class for extraction provider implementations."""

    name: str = ""

    def __init__(self, settings=None, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.http_client = http_client
        self.timeout = 15.0

    @abstractmethod
    async def extract(
        self,
        query: str,
        context: Optional[ExtractionContext] = None,
    ) -> ExtractionResult:
        """
        Extract structured filters from a natural-language query.

        Args:
            query: User query text
            context: Optional location / user type

        Returns:
            ExtractionResult

        Raises:
            Exception: Any failure; the orchestrator moves to the next provider
        """
        pass

    def is_available(self) -> bool:
        """Check if provider is configured."""
        return True

    async def _post_json(
        self,
        url: str,
        payload: Dict[str, Any],
        headers: Dict[str, str],
    ) -> Dict[str, Any]:
        """POST a JSON payload and return the decoded response."""
        if self.http_client is not None:
            response = await self.http_client.post(
                url, json=payload, headers=headers, timeout=self.timeout
            )
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=payload, headers=headers)

        response.raise_for_status()
        return response.json()

    def _build_result(
        self,
        query: str,
        content: str,
        model: str,
        input_tokens: int = 0,
        output_tokens: int = 0,
    ) -> ExtractionResult:
        """Parse model output text into an ExtractionResult."""
        parsed = parse_json_object(content)

        return ExtractionResult(
            originalQuery=query,
            filters=CanonicalSearchFilters.from_untrusted(parsed.get("filters")),
            explanation=parsed.get("explanation") or f'Extracted filters from: "{query}"',
            confidence=coerce_confidence(parsed.get("confidence")),
            metadata=ExtractionMetadata(
                provider=self.name,
                model=model,
                tokens=TokenUsage(input=input_tokens or 0, output=output_tokens or 0),
            ),
        )


def parse_json_object(content: Optional[str]) -> Dict[str, Any]:
    """
    Decode a JSON object from model output, tolerating code fences.

    Raises:
        ValueError: If the content is empty or not a JSON object
    """
    if not content or not content.strip():
        raise ValueError("Empty response from provider")

    raw = content.strip()
    if raw.startswith("```"):
        raw = _FENCE_OPEN.sub("", raw).strip()
    if raw.endswith("```"):
        raw = raw.rsplit("```", 1)[0].strip()

    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data


def coerce_confidence(value: Any) -> float:
    """Clamp a provider confidence into [0, 1], defaulting when missing."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != value:
        return DEFAULT_CONFIDENCE
    return min(max(float(value), 0.0), 1.0)
