"""
Router dependencies

Per-request service construction from application state.
"""

from fastapi import Request

from crisis_search.services import ExtractionOrchestrator, SearchService


def get_orchestrator(request: Request) -> ExtractionOrchestrator:
    state = request.app.state
    return ExtractionOrchestrator.from_settings(
        state.settings, http_client=getattr(state, "http_client", None)
    )


def get_search_service(request: Request) -> SearchService:
    state = request.app.state
    return SearchService(state.settings, http_client=getattr(state, "http_client", None))
