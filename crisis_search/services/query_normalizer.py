"""
Services - Query Normalizer

Keyword-based filter extraction used when no extraction provider
succeeds. Pure and deterministic: no I/O, never fails.
"""

import re
from typing import List, Optional, Pattern, Tuple

from crisis_search.schemas import (
    CanonicalSearchFilters,
    ExtractionMetadata,
    ExtractionResult,
    TokenUsage,
)

FALLBACK_CONFIDENCE = 0.3
FALLBACK_PROVIDER = "fallback"
FALLBACK_MODEL = "keyword-matching"
DEFAULT_RADIUS_KM = 25.0

DISCLAIMER = "(Using basic keyword matching - LLM services unavailable)"


def _terms(*terms: str) -> Pattern:
    """Case-insensitive substring match on any term."""
    return re.compile("|".join(re.escape(t) for t in terms), re.IGNORECASE)


def _word_starts(*words: str) -> Pattern:
    """Case-insensitive match on any word, plural or possessive included."""
    return re.compile(
        r"\b(?:" + "|".join(re.escape(w) for w in words) + r")s?\b",
        re.IGNORECASE,
    )


# Ordered: first match wins
CARE_PHASE_RULES: List[Tuple[str, Pattern]] = [
    ("immediate_crisis", _terms("crisis", "emergency", "suicide", "immediate")),
    ("acute_support", _terms("acute", "urgent", "recent")),
    ("recovery_support", _terms("recovery", "rehabilitation", "ongoing")),
    ("maintenance", _terms("maintenance", "preventive", "wellness")),
]

# Ordered: "male" is a substring of "female", "men" of "women" and "mental"
GENDER_RULES: List[Tuple[str, Pattern]] = [
    ("female", _terms("women", "female", "girls")),
    ("male", re.compile(_word_starts("men", "male").pattern + "|boys", re.IGNORECASE)),
]

CRISIS_SERVICES = _terms("crisis", "emergency", "hotline")
WALK_INS = _terms(
    "walk-in", "walk in", "drop-in", "drop in", "no appointment", "without appointment"
)
REFERRAL = _terms("referral", "referred", "recommendation")
URGENT_ACCESS = _terms("urgent", "crisis", "emergency", "now", "immediate")


class QueryNormalizer:
    """Extracts filters from raw text with keyword rules."""

    def __init__(self, default_radius_km: float = DEFAULT_RADIUS_KM):
        self.default_radius_km = default_radius_km

    def normalize(self, query: str) -> CanonicalSearchFilters:
        """
        Build filters from keyword rules.

        Args:
            query: Raw user query

        Returns:
            CanonicalSearchFilters with keywords set to the query verbatim
        """
        return CanonicalSearchFilters(
            keywords=query,
            care_phase=self._first_match(CARE_PHASE_RULES, query),
            gender_specific=self._first_match(GENDER_RULES, query),
            has_crisis_services=self._flag(CRISIS_SERVICES, query),
            walk_ins_accepted=self._flag(WALK_INS, query),
            referral_required=self._flag(REFERRAL, query),
            urgentAccessOnly=self._flag(URGENT_ACCESS, query),
            max_distance_km=self.default_radius_km,
        )

    def explain(self, query: str, filters: CanonicalSearchFilters) -> str:
        """Human-readable summary of the matched rules."""
        parts = [f'Searching for resources related to: "{query}".']
        if filters.care_phase:
            parts.append(f"Identified care phase: {filters.care_phase}.")
        if filters.gender_specific:
            parts.append(f"Filtering for {filters.gender_specific}-specific services.")
        if filters.has_crisis_services:
            parts.append("Prioritizing crisis services.")
        if filters.walk_ins_accepted:
            parts.append("Showing walk-in accessible facilities.")
        if filters.referral_required:
            parts.append("Showing referral-based services.")
        if filters.urgentAccessOnly:
            parts.append("Limiting to urgent or same-day access.")
        parts.append(DISCLAIMER)
        return " ".join(parts)

    def extract(self, query: str) -> ExtractionResult:
        """Low-confidence extraction result for the fallback tier."""
        filters = self.normalize(query)
        return ExtractionResult(
            originalQuery=query,
            filters=filters,
            explanation=self.explain(query, filters),
            confidence=FALLBACK_CONFIDENCE,
            metadata=ExtractionMetadata(
                provider=FALLBACK_PROVIDER,
                model=FALLBACK_MODEL,
                tokens=TokenUsage(input=len(query), output=50),
            ),
        )

    @staticmethod
    def _first_match(rules: List[Tuple[str, Pattern]], query: str) -> Optional[str]:
        for value, pattern in rules:
            if pattern.search(query):
                return value
        return None

    @staticmethod
    def _flag(pattern: Pattern, query: str) -> Optional[bool]:
        # Unmatched flags stay unset rather than False
        return True if pattern.search(query) else None
