"""
Services Module - Business Logic Layer

Provides filter extraction, validation, schema transformation and
backend search.
"""

from crisis_search.services.backend_client import BackendAPIError, BackendClient
from crisis_search.services.extraction_service import ExtractionOrchestrator
from crisis_search.services.filter_validator import FilterValidator
from crisis_search.services.query_normalizer import QueryNormalizer
from crisis_search.services.search_service import SearchService, is_valid_resource_id
from crisis_search.services.transform import (
    InvalidLocationError,
    from_backend_response,
    to_backend_params,
)

__all__ = [
    "BackendAPIError",
    "BackendClient",
    "ExtractionOrchestrator",
    "FilterValidator",
    "QueryNormalizer",
    "SearchService",
    "is_valid_resource_id",
    "InvalidLocationError",
    "from_backend_response",
    "to_backend_params",
]
