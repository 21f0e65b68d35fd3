"""
LLM - OpenAI Provider

Filter extraction through the OpenAI chat completions API.
"""

from typing import Optional

import httpx

from crisis_search.config import get_settings
from crisis_search.llm.base_provider import BaseExtractionProvider
from crisis_search.llm.prompts import SYSTEM_PROMPT, build_user_prompt
from crisis_search.schemas import ExtractionContext, ExtractionResult


class OpenAIProvider(BaseExtractionProvider):
    """OpenAI (and OpenAI-compatible) extraction provider."""

    name = "openai"

    def __init__(self, settings=None, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(settings or get_settings(), http_client)
        self.base_url = self.settings.openai.base_url.rstrip("/")
        self.api_key = self.settings.openai.api_key
        self.model = self.settings.openai.model
        self.temperature = self.settings.extraction.temperature
        self.timeout = self.settings.openai.timeout_ms / 1000

    async def extract(
        self,
        query: str,
        context: Optional[ExtractionContext] = None,
    ) -> ExtractionResult:
        """Extract filters using a JSON-mode chat completion."""
        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY not configured")

        url = f"{self.base_url}/chat/completions"

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(query, context)},
            ],
            "response_format": {"type": "json_object"},
            "temperature": self.temperature,
        }

        data = await self._post_json(url, payload, headers)

        content = data["choices"][0]["message"]["content"]
        usage = data.get("usage") or {}

        return self._build_result(
            query,
            content,
            model=data.get("model") or self.model,
            input_tokens=usage.get("prompt_tokens", 0),
            output_tokens=usage.get("completion_tokens", 0),
        )

    def is_available(self) -> bool:
        """Check if API key is configured."""
        return bool(self.api_key)
