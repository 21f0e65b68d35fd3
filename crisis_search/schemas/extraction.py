"""
Schemas - Extraction Models

Pydantic models for natural-language filter extraction.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Union

from crisis_search.schemas.filters import CanonicalSearchFilters, LocationCoordinate


class TokenUsage(BaseModel):
    """Provider token accounting."""
    input: int = 0
    output: int = 0


class ExtractionMetadata(BaseModel):
    """Which provider produced the result."""
    provider: str
    model: str
    tokens: TokenUsage = Field(default_factory=TokenUsage)


class AmbiguityOption(BaseModel):
    label: str
    value: Union[bool, float, str]


class FilterAmbiguity(BaseModel):
    """Field the user should clarify before searching."""
    field: str
    question: str
    options: List[AmbiguityOption] = []
    is_critical: bool = False


class ExtractionContext(BaseModel):
    """Optional caller context for extraction."""
    current_location: Optional[LocationCoordinate] = None
    user_type: Optional[str] = None
    conversation_id: Optional[str] = None


class ExtractFiltersRequest(BaseModel):
    """Extraction request body."""
    query: Optional[str] = None
    context: Optional[ExtractionContext] = None


class ExtractionResult(BaseModel):
    """Structured filters extracted from a query."""
    originalQuery: str
    filters: CanonicalSearchFilters = Field(default_factory=CanonicalSearchFilters)
    explanation: str = ""
    confidence: float = Field(ge=0.0, le=1.0)
    ambiguities: Optional[List[FilterAmbiguity]] = None
    metadata: ExtractionMetadata
