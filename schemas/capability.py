from enum import Enum
from typing import List


class Capability(str, Enum):
    """
    Trackable features of the host application.

    Declaration order is the canonical order: it breaks ranking ties.
    Values are the wire ids stored in the durable record.
    """
    DISEASE_SEARCH = "diseaseSearch"
    RISK_ASSESSMENT = "riskAssessment"
    CONSULTATIONS = "consultations"
    HOSPITAL_LOCATOR = "hospitalLocator"
    HEALTH_RECORDS = "healthRecords"
    PRESCRIPTIONS = "prescriptions"
    EQUIPMENT_READINGS = "equipmentReadings"
    COMMUNITY_FORUM = "communityForum"
    HEALTH_NEWS = "healthNews"


class HealthFocus(str, Enum):
    """Cosmetic preference driving the dashboard theme."""
    GENERAL = "general"
    CHRONIC = "chronic"
    ACUTE = "acute"
    PREVENTIVE = "preventive"


# --- Canonical lists ---

CANONICAL_CAPABILITIES: List[str] = [c.value for c in Capability]

DEFAULT_PREFERRED: List[str] = [
    Capability.DISEASE_SEARCH.value,
    Capability.CONSULTATIONS.value,
    Capability.HEALTH_RECORDS.value,
]


def normalize_capability(value: object) -> str | None:
    """
    Return the wire id for a capability, or None when it is unknown.

    Accepts Capability members or their string ids.
    """
    if isinstance(value, Capability):
        return value.value
    if isinstance(value, str) and value in CANONICAL_CAPABILITIES:
        return value
    return None


def parse_health_focus(value: object) -> HealthFocus | None:
    """Return the matching HealthFocus, or None for anything else."""
    if isinstance(value, HealthFocus):
        return value
    try:
        return HealthFocus(value)
    except (ValueError, TypeError):
        return None
