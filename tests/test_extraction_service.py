"""
Unit Tests for the extraction fallback chain
"""

import httpx
import pytest

from crisis_search.llm.base_provider import BaseExtractionProvider
from crisis_search.services import ExtractionOrchestrator


class StubProvider(BaseExtractionProvider):
    """Provider returning a fixed result or raising a fixed error."""

    def __init__(self, name, result=None, error=None, available=True):
        super().__init__()
        self.name = name
        self.result = result
        self.error = error
        self.available = available
        self.calls = 0

    async def extract(self, query, context=None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result

    def is_available(self):
        return self.available


class TestExtractionOrchestrator:
    """Tests for provider ordering and fallback."""

    @pytest.mark.asyncio
    async def test_first_success_wins(self, result_factory):
        first = StubProvider("openai", result=result_factory("openai", keywords="a"))
        second = StubProvider("anthropic", result=result_factory("anthropic", keywords="b"))

        result = await ExtractionOrchestrator([first, second]).extract("query")

        assert result.metadata.provider == "openai"
        assert second.calls == 0

    @pytest.mark.asyncio
    async def test_failure_falls_through(self, result_factory):
        first = StubProvider("openai", error=httpx.ConnectError("down"))
        second = StubProvider("anthropic", result=result_factory("anthropic"))

        result = await ExtractionOrchestrator([first, second]).extract("query")

        assert first.calls == 1
        assert result.metadata.provider == "anthropic"

    @pytest.mark.asyncio
    async def test_unconfigured_skipped(self, result_factory):
        first = StubProvider("openai", result=result_factory("openai"), available=False)
        second = StubProvider("anthropic", result=result_factory("anthropic"))

        result = await ExtractionOrchestrator([first, second]).extract("query")

        assert first.calls == 0
        assert result.metadata.provider == "anthropic"

    @pytest.mark.asyncio
    async def test_all_fail_uses_keyword_fallback(self):
        providers = [
            StubProvider("openai", error=ValueError("bad json")),
            StubProvider("anthropic", error=RuntimeError("rate limited")),
        ]

        result = await ExtractionOrchestrator(providers).extract("walk-in clinic")

        assert result.metadata.provider == "fallback"
        assert result.confidence == 0.3
        assert result.filters.walk_ins_accepted is True
        assert all(p.calls == 1 for p in providers)

    @pytest.mark.asyncio
    async def test_no_providers(self):
        result = await ExtractionOrchestrator().extract("therapy")

        assert result.metadata.provider == "fallback"
        assert result.filters.keywords == "therapy"

    @pytest.mark.asyncio
    async def test_provider_result_validated(self, result_factory):
        provider = StubProvider(
            "openai",
            result=result_factory("openai", service_types=["crisis_hotline", "bogus_code"]),
        )

        result = await ExtractionOrchestrator([provider]).extract("crisis hotline")

        assert result.filters.service_types == ["crisis_line"]

    @pytest.mark.asyncio
    async def test_from_settings_without_keys(self, settings):
        """Test unconfigured default providers end in the keyword fallback."""
        orchestrator = ExtractionOrchestrator.from_settings(settings)

        result = await orchestrator.extract("emergency help for suicidal thoughts")

        assert [p.name for p in orchestrator.providers] == ["openai", "anthropic"]
        assert result.metadata.provider == "fallback"
        assert result.filters.care_phase == "immediate_crisis"
        assert result.filters.has_crisis_services is True
        assert result.filters.urgentAccessOnly is True
        assert result.filters.keywords == "emergency help for suicidal thoughts"
        assert result.confidence == 0.3

    @pytest.mark.asyncio
    async def test_from_settings_provider_error(self, settings_factory, mock_http):
        """Test an HTTP failure from a configured provider falls back."""
        settings = settings_factory(openai_key="sk-test")
        http_client = mock_http(lambda r: httpx.Response(503, json={"error": "overloaded"}))

        orchestrator = ExtractionOrchestrator.from_settings(settings, http_client=http_client)
        result = await orchestrator.extract("therapy")

        assert result.metadata.provider == "fallback"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", [
        "   padded   ",
        "\x00\x01 control characters",
        "\U0001F642" * 200,
        "' OR 1=1 --",
        "<script>alert(1)</script>",
        "x" * 20000,
    ])
    async def test_never_raises(self, query):
        """Test arbitrary input still produces a result."""
        failing = StubProvider("openai", error=Exception("anything"))

        result = await ExtractionOrchestrator([failing]).extract(query)

        assert result.filters.keywords == query
        assert 0.0 <= result.confidence <= 1.0
