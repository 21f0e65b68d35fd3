"""
Crisis Search - Main Entry Point

Serves the HTTP API (uvicorn) or the MCP server (STDIO / SSE transport).
"""

import argparse
from fastmcp import FastMCP

from crisis_search.config import get_settings
from crisis_search.logging_config import configure_logging

# Import tools (registered with decorators)
from crisis_search.tools import (
    extract_filters,
    search_resources,
    get_resource,
)


def create_app() -> FastMCP:
    """Create and configure the MCP application."""
    mcp = FastMCP(
        name="crisis-search",
        instructions=(
            "Find mental-health resources: extract filters from a request, "
            "search resources with them, then fetch details by ID."
        ),
    )

    # Register all tools
    mcp.mount(extract_filters.router)
    mcp.mount(search_resources.router)
    mcp.mount(get_resource.router)

    return mcp


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Crisis Search Server")
    parser.add_argument(
        "--transport",
        choices=["http", "sse", "stdio"],
        default=None,
        help="http serves the REST API; sse/stdio serve MCP (default: from env)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for http/sse transport (default: from env)"
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)
    transport = args.transport or settings.mcp.transport

    if transport == "http":
        import uvicorn

        uvicorn.run(
            "crisis_search.main:create_app",
            factory=True,
            host=settings.http.host,
            port=args.port or settings.http.port,
            log_level=settings.log.level.lower(),
        )
        return

    mcp = create_app()

    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(transport="sse", host=settings.mcp.host, port=args.port or settings.mcp.port)


if __name__ == "__main__":
    main()
