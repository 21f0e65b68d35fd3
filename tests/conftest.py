"""
Shared fixtures.

Settings are built explicitly so API keys in the environment never
leak into tests.
"""

import httpx
import pytest

from crisis_search.config import (
    AnthropicSettings,
    BackendSettings,
    ExtractionSettings,
    HTTPSettings,
    LogSettings,
    OpenAISettings,
    SearchSettings,
    Settings,
)
from crisis_search.schemas import (
    CanonicalSearchFilters,
    ExtractionMetadata,
    ExtractionResult,
)


def build_settings(
    openai_key=None,
    anthropic_key=None,
    backend_key=None,
    providers="openai,anthropic",
):
    return Settings(
        backend=BackendSettings(
            BACKEND_URL="http://backend.test",
            BACKEND_API_KEY=backend_key,
            BACKEND_MAX_RETRIES=3,
            BACKEND_BACKOFF_MS=1000,
        ),
        openai=OpenAISettings(
            OPENAI_API_KEY=openai_key,
            OPENAI_BASE_URL="http://openai.test/v1",
            OPENAI_MODEL="gpt-4-turbo-preview",
        ),
        anthropic=AnthropicSettings(
            ANTHROPIC_API_KEY=anthropic_key,
            ANTHROPIC_BASE_URL="http://anthropic.test/v1",
            ANTHROPIC_MODEL="claude-3-5-sonnet-20241022",
        ),
        extraction=ExtractionSettings(EXTRACTION_PROVIDERS=providers),
        search=SearchSettings(SEARCH_FALLBACK_QUERY="mental health services"),
        http=HTTPSettings(DEBUG=False),
        log=LogSettings(LOG_LEVEL="INFO", LOG_FORMAT="text"),
    )


@pytest.fixture
def settings():
    """Settings with no provider credentials."""
    return build_settings()


@pytest.fixture
def settings_factory():
    return build_settings


@pytest.fixture
def mock_http():
    """Build an AsyncClient whose requests are answered by handler."""
    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return factory


class SleepRecorder:
    """Records backoff delays instead of sleeping."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


def make_result(provider="openai", confidence=0.8, **filters):
    return ExtractionResult(
        originalQuery="test query",
        filters=CanonicalSearchFilters(**filters),
        explanation="test",
        confidence=confidence,
        metadata=ExtractionMetadata(provider=provider, model="test-model"),
    )


@pytest.fixture
def result_factory():
    return make_result
