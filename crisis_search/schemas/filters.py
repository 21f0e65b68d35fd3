"""
Schemas - Search Filter Models

Canonical filter model shared by extraction, URL parameters and search.
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

logger = logging.getLogger(__name__)

CarePhase = Literal["immediate_crisis", "acute_support", "recovery_support", "maintenance"]
AgeGroup = Literal["child", "teen", "adult", "senior"]
TravelMode = Literal["driving", "transit", "walking", "bicycling"]
SortField = Literal["distance", "transit_time", "match_score", "rcs", "last_verified", "relevance"]


class LocationCoordinate(BaseModel):
    """Latitude/longitude pair."""
    lat: float
    lon: float


class SearchLocation(BaseModel):
    """Search origin."""
    address: str
    coordinates: Optional[LocationCoordinate] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postalCode: Optional[str] = None


class CanonicalSearchFilters(BaseModel):
    """
    Search request filters.

    Used by natural-language extraction, URL query parameters and the
    search endpoint. Fields outside the backend mapping (transit, sorting,
    SDOH flags) are accepted but never forwarded to the backend.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    # Text search
    keywords: Optional[str] = None
    service_types: Optional[List[str]] = None

    # Care phase
    care_phase: Optional[CarePhase] = None

    # Location & distance
    location: Optional[SearchLocation] = None
    max_distance_km: Optional[float] = None
    max_transit_time_min: Optional[float] = None
    travel_mode: Optional[TravelMode] = None

    # Financial accessibility
    insurance: Optional[List[str]] = None
    has_sliding_scale: Optional[bool] = None
    has_charity_care: Optional[bool] = None

    # Population inclusivity
    languages: Optional[List[str]] = None
    lgbtq_affirming: Optional[bool] = None
    serves_undocumented: Optional[bool] = None
    age_groups: Optional[List[AgeGroup]] = None
    gender_specific: Optional[Literal["male", "female"]] = None

    # Accessibility
    wheelchair_accessible: Optional[bool] = None
    telehealth_available: Optional[bool] = None
    asl_interpretation: Optional[bool] = None

    # Availability
    acceptingNewPatients: Optional[bool] = None
    urgentAccessOnly: Optional[bool] = None
    has_crisis_services: Optional[bool] = None
    open_now: Optional[bool] = None
    walk_ins_accepted: Optional[bool] = None
    referral_required: Optional[bool] = None

    # Quality
    min_rcs: Optional[float] = None
    verified_only: Optional[bool] = None

    # Region
    region: Optional[str] = None
    city: Optional[str] = None

    # Sorting & pagination
    sort_by: Optional[SortField] = None
    sort_order: Optional[Literal["asc", "desc"]] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    @field_validator("service_types", "insurance", "languages", "age_groups", mode="before")
    @classmethod
    def _wrap_scalar(cls, value: Any) -> Any:
        # A single repeated URL key arrives as a scalar
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return [str(value)]
        return value

    def has_search_origin(self) -> bool:
        """True when a location or non-blank keywords are present."""
        return self.location is not None or bool(self.keywords and self.keywords.strip())

    @classmethod
    def from_untrusted(cls, data: Any) -> "CanonicalSearchFilters":
        """
        Build filters from model output, dropping fields that fail validation.

        Args:
            data: Decoded JSON object

        Returns:
            CanonicalSearchFilters with every valid field kept

        Raises:
            ValueError: If data is not an object
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Expected filters object, got {type(data).__name__}")

        payload: Dict[str, Any] = {
            key: value
            for key, value in data.items()
            if key in cls.model_fields and value is not None
        }

        while True:
            try:
                return cls.model_validate(payload)
            except ValidationError as e:
                invalid = {
                    err["loc"][0] for err in e.errors() if err.get("loc")
                } & payload.keys()
                if not invalid:
                    raise
                for field in invalid:
                    logger.warning(f"Dropping invalid filter {field}={payload[field]!r}")
                    del payload[field]
