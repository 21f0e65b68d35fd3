"""
Services - URL Parameters

Serialization of canonical filters to and from URL query parameters,
so filter sets can be shared as links.
"""

import json
import math
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel

from crisis_search.schemas import CanonicalSearchFilters

# Free-text fields keep the raw value ("007" is a keyword, not a number)
TEXT_FIELDS = frozenset(
    name
    for name, field in CanonicalSearchFilters.model_fields.items()
    if field.annotation in (Optional[str], Optional[List[str]])
)


def to_url_params(
    filters: Union[CanonicalSearchFilters, Dict[str, Any]],
) -> List[Tuple[str, str]]:
    """
    Serialize filters to query-string pairs.

    Lists repeat the key, objects become JSON text, booleans become
    "true"/"false". Unset values are skipped.

    Args:
        filters: Canonical filters or a plain dict

    Returns:
        List of (key, value) pairs, suitable for urlencode()
    """
    if isinstance(filters, BaseModel):
        filters = filters.model_dump(exclude_none=True)

    pairs: List[Tuple[str, str]] = []
    for key, value in filters.items():
        if value is None:
            continue
        if isinstance(value, list):
            pairs.extend((key, _scalar(v)) for v in value)
        elif isinstance(value, dict):
            pairs.append((key, json.dumps(value)))
        else:
            pairs.append((key, _scalar(value)))
    return pairs


def from_url_params(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """
    Parse query-string pairs back into filter values.

    Repeated keys become lists. Free-text fields keep the raw string;
    other values starting with "{" or "[" are parsed as JSON (left as text
    when invalid), "true"/"false" become booleans and finite numeric
    strings become numbers.

    Args:
        pairs: (key, value) pairs, e.g. QueryParams.multi_items()

    Returns:
        Dict ready for CanonicalSearchFilters.model_validate()
    """
    grouped: Dict[str, List[str]] = {}
    for key, value in pairs:
        grouped.setdefault(key, []).append(value)

    parsed: Dict[str, Any] = {}
    for key, values in grouped.items():
        if len(values) > 1:
            parsed[key] = values
        elif key in TEXT_FIELDS:
            parsed[key] = values[0]
        else:
            parsed[key] = parse_value(values[0])
    return parsed


def parse_value(value: str) -> Any:
    """Coerce a single query-string value."""
    if value.startswith("{") or value.startswith("["):
        try:
            return json.loads(value)
        except ValueError:
            return value
    if value in ("true", "false"):
        return value == "true"
    number = _number(value)
    if number is not None:
        return number
    return value


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def _number(value: str) -> Union[int, float, None]:
    if not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        pass
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None
