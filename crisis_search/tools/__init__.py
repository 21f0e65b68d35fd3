"""
Tools Module - MCP Tool Implementations

Filter extraction and resource search tools.
"""

from crisis_search.tools import extract_filters
from crisis_search.tools import search_resources
from crisis_search.tools import get_resource

__all__ = [
    "extract_filters",
    "search_resources",
    "get_resource",
]
