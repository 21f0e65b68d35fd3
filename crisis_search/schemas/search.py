"""
Schemas - Search Models

Pydantic models for search results returned to the client.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Union

from crisis_search.schemas.filters import CanonicalSearchFilters


class MatchReason(BaseModel):
    """Why a resource matched."""
    category: str = "service"
    field: str
    matched_value: Union[bool, float, str] = True
    confidence: str = "verified"
    last_verified_at: Optional[str] = None
    explanation: Optional[str] = None


class Provenance(BaseModel):
    """Data attribution."""
    source: str = "unknown"
    rcs: float = 0.5
    last_verified_at: Optional[str] = None
    verification_method: Optional[str] = None
    verified_by: Optional[str] = None


class ServiceSummary(BaseModel):
    id: str
    name: str
    service_type: Optional[str] = None
    rcs: Optional[float] = None


class ResourceSearchResult(BaseModel):
    """Single search result."""
    id: str
    name: str = "Unknown Resource"
    display_name: Optional[str] = None
    description: Optional[str] = None
    type: str = "facility"
    city: Optional[str] = None
    state: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    phone_numbers: List[str] = []
    website: Optional[str] = None
    email: Optional[str] = None
    match_score: float = 0.5
    match_reasons: List[MatchReason] = []
    unknowns: List[str] = []
    provenance: Provenance = Field(default_factory=Provenance)
    services: List[ServiceSummary] = []
    distance_km: Optional[float] = None
    accessibility_score: Optional[float] = None
    tier: Optional[Union[int, float, str]] = None


class SearchMetadata(BaseModel):
    execution_time_ms: float = 0
    from_cache: bool = False
    timestamp: str


class SearchResponse(BaseModel):
    """Full search response."""
    items: List[ResourceSearchResult]
    total: int = 0
    applied_filters: CanonicalSearchFilters = Field(default_factory=CanonicalSearchFilters)
    metadata: SearchMetadata
