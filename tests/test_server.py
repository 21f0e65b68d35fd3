"""
Tests for the MCP server and process setup
"""

import json
import logging
from unittest.mock import AsyncMock, patch

import pytest
from fastmcp import Client

from crisis_search.config import ExtractionSettings, LogSettings
from crisis_search.logging_config import JSONFormatter, configure_logging
from crisis_search.server import create_app
from crisis_search.services import BackendAPIError
from crisis_search.tools import get_resource, search_resources


class TestMCPServer:
    """Tests for MCP tool registration."""

    @pytest.mark.asyncio
    async def test_tools_registered(self):
        mcp = create_app()

        async with Client(mcp) as client:
            tools = await client.list_tools()

        assert {tool.name for tool in tools} == {
            "extract_filters",
            "search_resources",
            "get_resource",
        }

    @pytest.mark.asyncio
    async def test_extract_filters_tool(self, settings):
        mcp = create_app()

        with patch("crisis_search.config.get_settings", return_value=settings):
            async with Client(mcp) as client:
                result = await client.call_tool(
                    "extract_filters", {"query": "walk-in crisis center"}
                )

        data = json.loads(result.content[0].text)
        assert data["metadata"]["provider"] == "fallback"
        assert data["filters"]["walk_ins_accepted"] is True


class TestTools:
    """Tests for tool argument handling."""

    @pytest.mark.asyncio
    async def test_get_resource_rejects_bad_id(self):
        result = await get_resource.get_resource.fn("nope")
        assert "error" in result

    @pytest.mark.asyncio
    async def test_search_requires_origin(self):
        result = await search_resources.search_resources.fn({"languages": ["es"]})
        assert result == {"error": "Either location or keywords is required"}

    @pytest.mark.asyncio
    async def test_search_backend_error(self):
        with patch.object(search_resources, "SearchService") as service_cls:
            service_cls.return_value.search = AsyncMock(
                side_effect=BackendAPIError("HTTP 503", status_code=503)
            )
            result = await search_resources.search_resources.fn({"keywords": "therapy"})

        assert result["error"] == "Search failed"
        assert result["statusCode"] == 503


class TestSettings:
    """Tests for settings helpers."""

    def test_provider_order(self):
        settings = ExtractionSettings(EXTRACTION_PROVIDERS=" Anthropic, ,openai ")
        assert settings.provider_order == ["anthropic", "openai"]


class TestLogging:
    """Tests for logging setup."""

    def test_json_formatter(self):
        record = logging.LogRecord(
            "crisis_search.test", logging.WARNING, __file__, 1, "hello %s", ("world",), None
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "crisis_search.test"
        assert entry["message"] == "hello world"

    def test_configure_logging(self, settings):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        settings.log = LogSettings(LOG_LEVEL="DEBUG", LOG_FORMAT="json")

        try:
            configure_logging(settings)
            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
