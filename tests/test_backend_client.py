"""
Unit Tests for the backend client
"""

import json

import httpx
import pytest

from crisis_search.services.backend_client import BackendAPIError, BackendClient


class CountingHandler:
    """Answers requests from a list of statuses, repeating the last one."""

    def __init__(self, *statuses, body=None):
        self.statuses = list(statuses)
        self.body = body if body is not None else {"ok": True}
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        index = min(len(self.requests), len(self.statuses)) - 1
        status_code = self.statuses[index]
        if status_code >= 400:
            return httpx.Response(status_code, json={"detail": "error"})
        return httpx.Response(status_code, json=self.body)


@pytest.fixture
def make_client(settings, mock_http, sleep_recorder):
    def factory(handler, settings=settings):
        return BackendClient(settings, http_client=mock_http(handler), sleep=sleep_recorder)
    return factory


class TestRetry:
    """Tests for bounded retry with backoff."""

    @pytest.mark.asyncio
    async def test_retryable_status_exhausts_retries(self, make_client, sleep_recorder):
        """Test an always-503 backend gets max_retries + 1 attempts."""
        handler = CountingHandler(503)
        client = make_client(handler)

        with pytest.raises(BackendAPIError) as exc_info:
            await client.search_resources({"query": "therapy"})

        assert exc_info.value.status_code == 503
        assert exc_info.value.response_body == {"detail": "error"}
        assert len(handler.requests) == 4
        assert sleep_recorder.delays == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_non_retryable_status_fails_immediately(self, make_client, sleep_recorder):
        handler = CountingHandler(400)
        client = make_client(handler)

        with pytest.raises(BackendAPIError) as exc_info:
            await client.search_resources({"query": "therapy"})

        assert exc_info.value.status_code == 400
        assert len(handler.requests) == 1
        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_not_found_fails_immediately(self, make_client):
        handler = CountingHandler(404)
        client = make_client(handler)

        with pytest.raises(BackendAPIError) as exc_info:
            await client.get_resource_by_id("1b4e28ba-2fa1-11d2-883f-0016541e6c5a")

        assert exc_info.value.status_code == 404
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failures(self, make_client, sleep_recorder):
        handler = CountingHandler(502, 429, 200, body={"results": [], "total": 0})
        client = make_client(handler)

        data = await client.search_resources({"query": "therapy"})

        assert data == {"results": [], "total": 0}
        assert len(handler.requests) == 3
        assert sleep_recorder.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_network_error_retried(self, make_client):
        """Test transport failures are retried and carry no status."""
        attempts = []

        def handler(request):
            attempts.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(BackendAPIError) as exc_info:
            await client.search_resources({"query": "therapy"})

        assert exc_info.value.status_code is None
        assert len(attempts) == 4

    @pytest.mark.asyncio
    async def test_zero_retries(self, make_client, settings_factory):
        settings = settings_factory()
        settings.backend.max_retries = 0
        handler = CountingHandler(503)
        client = make_client(handler, settings=settings)

        with pytest.raises(BackendAPIError):
            await client.search_resources({})

        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, make_client):
        client = make_client(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(BackendAPIError) as exc_info:
            await client.search_resources({})

        assert exc_info.value.status_code == 200

    def test_backoff_delay(self, settings):
        client = BackendClient(settings)
        assert [client.backoff_delay(n) for n in range(4)] == [1.0, 2.0, 4.0, 8.0]


class TestRequests:
    """Tests for request construction."""

    @pytest.mark.asyncio
    async def test_search_params_and_path(self, make_client):
        handler = CountingHandler(200)
        client = make_client(handler)

        await client.search_resources({"query": "therapy", "languages": "en,es"})

        request = handler.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/v2/resources/search"
        assert request.url.params["query"] == "therapy"
        assert request.url.params["languages"] == "en,es"

    @pytest.mark.asyncio
    async def test_resource_path(self, make_client):
        handler = CountingHandler(200)
        client = make_client(handler)

        await client.get_resource_by_id("1b4e28ba-2fa1-11d2-883f-0016541e6c5a")

        assert handler.requests[0].url.path == (
            "/v2/resources/1b4e28ba-2fa1-11d2-883f-0016541e6c5a"
        )

    @pytest.mark.asyncio
    async def test_extract_filters_body(self, make_client):
        handler = CountingHandler(200)
        client = make_client(handler)

        await client.extract_filters("crisis help", {"user_type": "care_coordinator"})

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/llm/extract-filters"
        assert json.loads(request.content) == {
            "query": "crisis help",
            "context": {"user_type": "care_coordinator"},
        }

    @pytest.mark.asyncio
    async def test_no_auth_header_without_key(self, make_client):
        handler = CountingHandler(200)
        client = make_client(handler)

        await client.search_resources({})

        assert "authorization" not in handler.requests[0].headers

    @pytest.mark.asyncio
    async def test_auth_header_with_key(self, make_client, settings_factory):
        handler = CountingHandler(200)
        client = make_client(handler, settings=settings_factory(backend_key="secret"))

        await client.search_resources({})

        assert handler.requests[0].headers["authorization"] == "Bearer secret"
