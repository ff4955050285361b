"""
Capability Catalog

Declarative presentation data for each capability.
The rendering layer decides how to show it; the engine only orders it.

DESIGN RULES:
- Declarative (data, not code)
- Catalog order is display order for ties
"""

from dataclasses import dataclass
from typing import Dict, List

from schemas.capability import Capability


@dataclass(frozen=True)
class CapabilityInfo:
    """Display metadata for one capability."""
    capability: str
    title: str
    description: str
    route: str


CAPABILITY_INFO: Dict[str, CapabilityInfo] = {
    info.capability: info
    for info in [
        CapabilityInfo(Capability.DISEASE_SEARCH.value, "Disease Search", "Find health information", "/diseases"),
        CapabilityInfo(Capability.RISK_ASSESSMENT.value, "Risk Assessment", "Check health risks", "/risk-assessment"),
        CapabilityInfo(Capability.CONSULTATIONS.value, "Consultations", "Book or manage appointments", "/consultations"),
        CapabilityInfo(Capability.HOSPITAL_LOCATOR.value, "Find Hospitals", "Locate nearby healthcare", "/hospitals"),
        CapabilityInfo(Capability.HEALTH_RECORDS.value, "Health Records", "View medical history", "/health-records"),
        CapabilityInfo(Capability.PRESCRIPTIONS.value, "Prescriptions", "Manage your medications", "/prescriptions"),
        CapabilityInfo(Capability.EQUIPMENT_READINGS.value, "Health Readings", "Track vital signs", "/equipment"),
        CapabilityInfo(Capability.COMMUNITY_FORUM.value, "Community", "Connect with others", "/forum"),
        CapabilityInfo(Capability.HEALTH_NEWS.value, "Health News", "Stay informed", "/news"),
    ]
}


# Shortcuts offered on the dashboard, ordered by usage at query time
QUICK_ACTIONS: List[str] = [
    Capability.DISEASE_SEARCH.value,
    Capability.CONSULTATIONS.value,
    Capability.HEALTH_RECORDS.value,
    Capability.RISK_ASSESSMENT.value,
    Capability.HOSPITAL_LOCATOR.value,
    Capability.EQUIPMENT_READINGS.value,
]

# Capabilities advertised to users who have never opened them
DISCOVERABLE: List[str] = [
    Capability.DISEASE_SEARCH.value,
    Capability.CONSULTATIONS.value,
    Capability.HEALTH_RECORDS.value,
    Capability.RISK_ASSESSMENT.value,
    Capability.HOSPITAL_LOCATOR.value,
    Capability.EQUIPMENT_READINGS.value,
    Capability.COMMUNITY_FORUM.value,
    Capability.HEALTH_NEWS.value,
]
