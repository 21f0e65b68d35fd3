"""
Crisis Search - Vocabulary

Canonical service-type codes and the alias table used to correct
extraction output. Extend these tables rather than adding branches.
"""

from typing import Dict, FrozenSet, Tuple


CANONICAL_SERVICE_TYPES: FrozenSet[str] = frozenset({
    # Crisis
    "crisis_line",
    "crisis_intervention",
    "crisis_stabilization",
    "mobile_crisis",
    "walk_in_crisis",
    "emergency_services",
    # Mental health
    "outpatient_therapy",
    "group_therapy",
    "family_therapy",
    "counseling",
    "mental_health_assessment",
    "psychiatric_care",
    "medication_management",
    "intensive_outpatient",
    "partial_hospitalization",
    "inpatient_psychiatric",
    # Substance use
    "substance_use_treatment",
    "detox",
    "residential_treatment",
    "medication_assisted_treatment",
    # Support
    "peer_support",
    "support_groups",
    "case_management",
    # Social determinants
    "housing_assistance",
    "food_assistance",
    "transportation_assistance",
    "legal_assistance",
})

# Codes substituted when a crisis search arrives without terms.
CRISIS_SERVICE_TYPES: Tuple[str, ...] = (
    "crisis_line",
    "crisis_intervention",
    "mobile_crisis",
)

# Common model mistakes -> canonical code.
SERVICE_TYPE_ALIASES: Dict[str, str] = {
    "crisis_hotline": "crisis_line",
    "hotline": "crisis_line",
    "suicide_hotline": "crisis_line",
    "suicide_prevention_hotline": "crisis_line",
    "crisis_services": "crisis_intervention",
    "crisis_support": "crisis_intervention",
    "crisis_center": "walk_in_crisis",
    "mobile_crisis_team": "mobile_crisis",
    "emergency": "emergency_services",
    "emergency_room": "emergency_services",
    "er": "emergency_services",
    "therapy": "outpatient_therapy",
    "psychotherapy": "outpatient_therapy",
    "individual_therapy": "outpatient_therapy",
    "outpatient": "outpatient_therapy",
    "outpatient_mental_health": "outpatient_therapy",
    "group_counseling": "group_therapy",
    "family_counseling": "family_therapy",
    "mental_health_counseling": "counseling",
    "assessment": "mental_health_assessment",
    "psychiatry": "psychiatric_care",
    "psychiatric_services": "psychiatric_care",
    "psychiatrist": "psychiatric_care",
    "medication": "medication_management",
    "med_management": "medication_management",
    "iop": "intensive_outpatient",
    "php": "partial_hospitalization",
    "inpatient": "inpatient_psychiatric",
    "inpatient_treatment": "inpatient_psychiatric",
    "substance_abuse_treatment": "substance_use_treatment",
    "substance_abuse": "substance_use_treatment",
    "addiction_treatment": "substance_use_treatment",
    "drug_treatment": "substance_use_treatment",
    "alcohol_treatment": "substance_use_treatment",
    "detoxification": "detox",
    "withdrawal_management": "detox",
    "rehab": "residential_treatment",
    "residential": "residential_treatment",
    "mat": "medication_assisted_treatment",
    "peer_support_services": "peer_support",
    "peer_counseling": "peer_support",
    "support_group": "support_groups",
    "case_manager": "case_management",
    "housing": "housing_assistance",
    "shelter": "housing_assistance",
    "food_bank": "food_assistance",
    "food": "food_assistance",
    "transportation": "transportation_assistance",
    "legal_aid": "legal_assistance",
}

CARE_PHASES: Tuple[str, ...] = (
    "immediate_crisis",
    "acute_support",
    "recovery_support",
    "maintenance",
)
