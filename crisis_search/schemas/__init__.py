"""
Schemas Module - Pydantic Models

Data models for filters, extraction and search responses.
"""

from crisis_search.schemas.filters import (
    CanonicalSearchFilters,
    LocationCoordinate,
    SearchLocation,
)
from crisis_search.schemas.extraction import (
    ExtractFiltersRequest,
    ExtractionContext,
    ExtractionMetadata,
    ExtractionResult,
    FilterAmbiguity,
    TokenUsage,
)
from crisis_search.schemas.search import (
    MatchReason,
    Provenance,
    ResourceSearchResult,
    SearchMetadata,
    SearchResponse,
    ServiceSummary,
)

__all__ = [
    "CanonicalSearchFilters",
    "LocationCoordinate",
    "SearchLocation",
    "ExtractFiltersRequest",
    "ExtractionContext",
    "ExtractionMetadata",
    "ExtractionResult",
    "FilterAmbiguity",
    "TokenUsage",
    "MatchReason",
    "Provenance",
    "ResourceSearchResult",
    "SearchMetadata",
    "SearchResponse",
    "ServiceSummary",
]
