"""
Services - Filter Validator

Corrects extracted service types against the canonical vocabulary.
"""

import logging
import re
from typing import Dict, FrozenSet, Iterable, List, Optional

from crisis_search.schemas import ExtractionResult
from crisis_search.vocabulary import CANONICAL_SERVICE_TYPES, SERVICE_TYPE_ALIASES

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s\-/]+")


class FilterValidator:
    """Maps service-type aliases to canonical codes and drops unknown values."""

    def __init__(
        self,
        vocabulary: Optional[FrozenSet[str]] = None,
        aliases: Optional[Dict[str, str]] = None,
    ):
        self.vocabulary = vocabulary if vocabulary is not None else CANONICAL_SERVICE_TYPES
        self.aliases = aliases if aliases is not None else SERVICE_TYPE_ALIASES

    def validate(self, result: ExtractionResult, original_query: str) -> ExtractionResult:
        """
        Return a cleaned copy of an extraction result.

        Only service_types is corrected. When no valid service type
        survives, the original query becomes the keywords so the search
        still has text to match.

        Args:
            result: Extraction result from any provider
            original_query: Query text the user typed

        Returns:
            Corrected copy of the result
        """
        cleaned = result.model_copy(deep=True)
        corrected = self.correct_service_types(cleaned.filters.service_types or [])

        cleaned.filters.service_types = corrected or None
        if not corrected and original_query:
            cleaned.filters.keywords = original_query

        return cleaned

    def correct_service_types(self, values: Iterable[str]) -> List[str]:
        """Canonical codes for values, deduplicated in first-seen order."""
        corrected: Dict[str, None] = {}

        for value in values:
            code = self.correct(value)
            if code is None:
                logger.warning(f"Invalid service type {value!r}: no mapping found")
                continue
            if code != value:
                logger.info(f"Corrected service type {value!r} -> {code!r}")
            corrected[code] = None

        return list(corrected)

    def correct(self, value: str) -> Optional[str]:
        """Canonical code for a single value, or None."""
        if not isinstance(value, str):
            return None
        key = _SEPARATORS.sub("_", value.strip().lower())
        if key in self.vocabulary:
            return key
        return self.aliases.get(key)
