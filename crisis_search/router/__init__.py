"""
HTTP routers for the Crisis Search API.
"""

from crisis_search.router.extraction import router as extraction_router
from crisis_search.router.resources import router as resources_router

__all__ = ["extraction_router", "resources_router"]
