"""
Services - Schema Transform

Maps canonical filters to backend query parameters and backend search
responses back to the client result shape.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from crisis_search.schemas import (
    CanonicalSearchFilters,
    LocationCoordinate,
    MatchReason,
    Provenance,
    ResourceSearchResult,
    SearchLocation,
    SearchMetadata,
    SearchResponse,
    ServiceSummary,
)

logger = logging.getLogger(__name__)

# Canonical list field -> backend parameter (comma-joined)
LIST_FIELDS = {
    "service_types": "service_types",
    "insurance": "insurance_types",
    "languages": "languages",
    "age_groups": "age_groups",
}

# Canonical boolean field -> backend parameter ("true"/"false")
BOOLEAN_FIELDS = {
    "has_crisis_services": "has_crisis_services",
    "walk_ins_accepted": "walk_ins_accepted",
    "referral_required": "referral_required",
    "lgbtq_affirming": "lgbtq_affirming",
    "wheelchair_accessible": "wheelchair_accessible",
    "telehealth_available": "telehealth_available",
    "urgentAccessOnly": "urgent_access_only",
    "acceptingNewPatients": "accepting_new_patients",
    "verified_only": "verified_only",
}

# Canonical string field -> backend parameter (identity)
STRING_FIELDS = {
    "keywords": "query",
    "care_phase": "care_phase",
    "gender_specific": "gender_specific",
}

VERIFICATION_METHODS = {"automated", "manual", "community"}


class InvalidLocationError(ValueError):
    """Location coordinates are present but not finite numbers."""

    def __init__(self, message: str, filters: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.filters = filters or {}


def format_number(value: float) -> str:
    """Format a number the way the backend expects ("25", "0.75")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_finite_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def to_backend_params(filters: CanonicalSearchFilters) -> Dict[str, str]:
    """
    Transform canonical filters to backend query parameters.

    Fields without a backend counterpart are omitted.

    Args:
        filters: Canonical search filters

    Returns:
        Flat string-keyed parameter mapping

    Raises:
        InvalidLocationError: If coordinates are present but not finite
    """
    params: Dict[str, str] = {}

    for field, param in STRING_FIELDS.items():
        value = getattr(filters, field)
        if value:
            params[param] = value

    location = filters.location
    if location is not None and location.coordinates is not None:
        lat = location.coordinates.lat
        lon = location.coordinates.lon
        if not (_is_finite_number(lat) and _is_finite_number(lon)):
            logger.error(f"Invalid coordinates: lat={lat!r}, lon={lon!r}")
            raise InvalidLocationError(
                f"Invalid location coordinates: lat={lat}, lon={lon}",
                filters=_json_safe(filters.model_dump(exclude_none=True)),
            )
        params["location"] = f"{lat},{lon}"

    if filters.max_distance_km:
        params["radius_km"] = format_number(filters.max_distance_km)

    for field, param in LIST_FIELDS.items():
        values = getattr(filters, field)
        if values:
            params[param] = ",".join(values)

    for field, param in BOOLEAN_FIELDS.items():
        value = getattr(filters, field)
        if value is not None:
            params[param] = "true" if value else "false"

    if filters.min_rcs is not None:
        params["min_confidence"] = format_number(filters.min_rcs)

    if filters.limit:
        params["limit"] = str(filters.limit)
    if filters.offset:
        params["offset"] = str(filters.offset)

    return params


def from_backend_response(raw: Any) -> SearchResponse:
    """
    Transform a backend search response to the client shape.

    Every nested access is optional and every value is coerced; missing or
    mistyped values fall back to defaults instead of failing the search.

    Args:
        raw: Backend search response JSON

    Returns:
        SearchResponse
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning(f"Unexpected search response type: {type(raw).__name__}")
        raw = {}
    meta = _dict(raw.get("metadata"))

    return SearchResponse(
        items=[
            from_backend_result(result)
            for result in _list(raw.get("results"))
            if isinstance(result, dict)
        ],
        total=int(_to_number(raw.get("total")) or 0),
        applied_filters=from_backend_filters(_dict(raw.get("filters_applied"))),
        metadata=SearchMetadata(
            execution_time_ms=_first(
                _to_number(raw.get("execution_time_ms")),
                _to_number(meta.get("execution_time_ms")),
                0,
            ),
            from_cache=bool(raw.get("from_cache") or meta.get("from_cache")),
            timestamp=datetime.now(timezone.utc).isoformat(),
        ),
    )


def from_backend_result(result: Dict[str, Any]) -> ResourceSearchResult:
    """Flatten one backend result (match / verification / details)."""
    match = _dict(result.get("match"))
    verification = _dict(result.get("verification"))
    details = _dict(result.get("details"))
    provenance = _dict(result.get("provenance"))

    def pick(key: str) -> Any:
        value = details.get(key)
        return result.get(key) if value is None else value

    rcs = _first(
        _to_number(verification.get("confidence_score")),
        _to_number(provenance.get("rcs")),
        0.5,
    )

    completeness = _to_number(verification.get("data_completeness"))
    if completeness is not None:
        accessibility_score = round(completeness * 100)
    else:
        accessibility_score = _to_number(result.get("accessibility_score"))

    method = _to_str(
        _first(verification.get("verification_method"), provenance.get("verification_method"))
    )

    return ResourceSearchResult(
        id=_to_str(_first(result.get("resource_id"), result.get("id"))) or "",
        name=_to_str(pick("name")) or "Unknown Resource",
        display_name=_to_str(pick("display_name")),
        description=_to_str(pick("description")),
        type=_to_str(_first(result.get("resource_type"), result.get("type"))) or "facility",
        city=_to_str(pick("city")),
        state=_to_str(pick("state")),
        latitude=_to_number(pick("latitude")),
        longitude=_to_number(pick("longitude")),
        phone_numbers=_str_list(pick("phone_numbers")),
        website=_to_str(pick("website")),
        email=_to_str(pick("email")),
        match_score=_first(
            _to_number(match.get("score")), _to_number(result.get("match_score")), 0.5
        ),
        match_reasons=[
            MatchReason(field=criterion, explanation=f"Matched {criterion}")
            for criterion in _str_list(match.get("criteria_met"))
        ],
        unknowns=_str_list(result.get("unknowns")),
        provenance=Provenance(
            source=_first(method, _to_str(provenance.get("source")), "unknown"),
            rcs=rcs,
            last_verified_at=_to_str(_first(
                verification.get("last_verified_at"), provenance.get("last_verified_at")
            )),
            verification_method=method if method in VERIFICATION_METHODS else None,
            verified_by=_to_str(_first(
                verification.get("verified_by"), provenance.get("verified_by")
            )),
        ),
        services=[
            ServiceSummary(
                id=_to_str(_first(svc.get("id"), svc.get("name"))) or "",
                name=_to_str(svc.get("name")) or "",
                service_type=_to_str(_first(svc.get("canonical_type"), svc.get("service_type"))),
                rcs=_first(_to_number(svc.get("rcs")), rcs),
            )
            for svc in _list(details.get("services"))
            if isinstance(svc, dict)
        ],
        distance_km=_to_number(pick("distance_km")),
        accessibility_score=accessibility_score,
        tier=_to_tier(result.get("tier")),
    )


def from_backend_filters(backend_filters: Dict[str, Any]) -> CanonicalSearchFilters:
    """Map backend filters_applied back to canonical filters."""
    data: Dict[str, Any] = {}

    for field, param in STRING_FIELDS.items():
        if backend_filters.get(param):
            data[field] = backend_filters[param]

    location = backend_filters.get("location")
    if isinstance(location, str) and location:
        data["location"] = SearchLocation(
            address=location,
            coordinates=parse_location(location),
        )

    for field, param in LIST_FIELDS.items():
        values = _to_list(backend_filters.get(param))
        if values:
            data[field] = values

    for field, param in BOOLEAN_FIELDS.items():
        value = _to_bool(backend_filters.get(param))
        if value is not None:
            data[field] = value

    for field, param in (
        ("max_distance_km", "radius_km"),
        ("min_rcs", "min_confidence"),
        ("limit", "limit"),
        ("offset", "offset"),
    ):
        value = _to_number(backend_filters.get(param))
        if value is not None:
            data[field] = value

    return CanonicalSearchFilters.from_untrusted(data)


def parse_location(value: str) -> Optional[LocationCoordinate]:
    """Parse "lat,lon"; None when either part is not a finite number."""
    parts = value.split(",")
    if len(parts) != 2:
        return None
    lat = _to_number(parts[0].strip())
    lon = _to_number(parts[1].strip())
    if lat is None or lon is None:
        return None
    return LocationCoordinate(lat=lat, lon=lon)


def _json_safe(value: Any) -> Any:
    # NaN/inf cannot be rendered in a JSON response
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_safe(v) for v in value]
    return value


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _to_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, list):
        items = []
        for item in value:
            if isinstance(item, dict):
                item = item.get("code")
            if item is not None:
                items.append(str(item))
        return items
    return []


def _to_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return None


def _to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() and not isinstance(value, float) else number


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _to_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if _is_finite_number(value):
        return str(value)
    return None


def _str_list(value: Any) -> List[str]:
    """Strings from a list; a lone string becomes a one-item list."""
    if isinstance(value, str):
        return [value] if value.strip() else []
    return [item for item in map(_to_str, _list(value)) if item]


def _to_tier(value: Any) -> Union[int, float, str, None]:
    if isinstance(value, str) or _is_finite_number(value):
        return value
    return None
