"""
LLM - Anthropic Provider

Filter extraction through the Anthropic Messages API.
"""

from typing import Optional

import httpx

from crisis_search.config import get_settings
from crisis_search.llm.base_provider import BaseExtractionProvider
from crisis_search.llm.prompts import SYSTEM_PROMPT, build_user_prompt
from crisis_search.schemas import ExtractionContext, ExtractionResult


class AnthropicProvider(BaseExtractionProvider):
    """Anthropic extraction provider."""

    name = "anthropic"

    def __init__(self, settings=None, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(settings or get_settings(), http_client)
        self.base_url = self.settings.anthropic.base_url.rstrip("/")
        self.api_key = self.settings.anthropic.api_key
        self.model = self.settings.anthropic.model
        self.api_version = self.settings.anthropic.api_version
        self.max_tokens = self.settings.anthropic.max_tokens
        self.temperature = self.settings.extraction.temperature
        self.timeout = self.settings.anthropic.timeout_ms / 1000

    async def extract(
        self,
        query: str,
        context: Optional[ExtractionContext] = None,
    ) -> ExtractionResult:
        """Extract filters using a single-turn message."""
        if not self.api_key:
            raise RuntimeError("ANTHROPIC_API_KEY not configured")

        url = f"{self.base_url}/messages"

        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "Content-Type": "application/json",
        }

        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": SYSTEM_PROMPT,
            "messages": [
                {"role": "user", "content": build_user_prompt(query, context)},
            ],
            "temperature": self.temperature,
        }

        data = await self._post_json(url, payload, headers)

        blocks = data.get("content") or []
        if not blocks or blocks[0].get("type") != "text":
            raise ValueError("Anthropic returned non-text response")

        usage = data.get("usage") or {}

        return self._build_result(
            query,
            blocks[0].get("text"),
            model=data.get("model") or self.model,
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
        )

    def is_available(self) -> bool:
        """Check if API key is configured."""
        return bool(self.api_key)
