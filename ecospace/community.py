"""Community insights and air-quality advisories shown beside the map."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ecospace.random_source import RandomSource


class AdvisorySeverity(str, Enum):
    """How urgently an advisory should be surfaced."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class RecommendationGroup:
    kind: str
    title: str
    items: Tuple[str, ...]


@dataclass(frozen=True)
class CommunityReport:
    user: str
    time: str
    kind: str
    message: str
    verified: bool


@dataclass(frozen=True)
class CommunityInsights:
    """Activity counters plus the static guidance lists."""
    active_users: int
    reports: int
    initiatives: int
    last_activity: str
    recommendations: Tuple[RecommendationGroup, ...]
    recent_reports: Tuple[CommunityReport, ...]


@dataclass(frozen=True)
class Advisory:
    id: int
    kind: str
    title: str
    location: str
    time: str
    severity: AdvisorySeverity
    description: str
    recommendations: Tuple[str, ...]


RECOMMENDATION_GROUPS: Tuple[RecommendationGroup, ...] = (
    RecommendationGroup(
        kind="health",
        title="Health Recommendations",
        items=(
            "Limit outdoor activities during peak pollution hours (10 AM - 4 PM)",
            "Use air purifiers indoors, especially in bedrooms",
            "Consider wearing N95 masks for sensitive individuals",
            "Stay hydrated to help your body cope with pollutants",
        ),
    ),
    RecommendationGroup(
        kind="action",
        title="Community Actions",
        items=(
            "Join the local Clean Air Initiative group",
            "Report pollution sources through the community app",
            "Participate in tree planting events this weekend",
            "Share carpooling opportunities with neighbors",
        ),
    ),
    RecommendationGroup(
        kind="tips",
        title="Environmental Tips",
        items=(
            "Use public transportation or bike when possible",
            "Reduce energy consumption at home",
            "Support local businesses with eco-friendly practices",
            "Plant air-purifying plants in your home",
        ),
    ),
)

RECENT_REPORTS: Tuple[CommunityReport, ...] = (
    CommunityReport(
        user="Sarah M.",
        time="1 hour ago",
        kind="pollution",
        message="Noticed increased traffic near the school. Air quality seems worse today.",
        verified=True,
    ),
    CommunityReport(
        user="Mike R.",
        time="3 hours ago",
        kind="improvement",
        message="Great to see the new bike lanes! Traffic seems lighter this morning.",
        verified=True,
    ),
    CommunityReport(
        user="Lisa K.",
        time="5 hours ago",
        kind="event",
        message="Community garden planting event this Saturday at 9 AM. All welcome!",
        verified=False,
    ),
)

ACTIVE_ADVISORIES: Tuple[Advisory, ...] = (
    Advisory(
        id=1,
        kind="high-pollution",
        title="High Pollution Alert",
        location="Multiple Regions",
        time="2 hours ago",
        severity=AdvisorySeverity.HIGH,
        description="Elevated PM2.5 and PM10 levels detected across several urban areas.",
        recommendations=(
            "Limit outdoor activities, especially for sensitive groups",
            "Use air purifiers indoors",
            "Consider wearing N95 masks if going outside",
            "Keep windows closed during peak pollution hours",
        ),
    ),
    Advisory(
        id=2,
        kind="ozone-warning",
        title="Ozone Level Warning",
        location="Industrial Areas",
        time="4 hours ago",
        severity=AdvisorySeverity.MEDIUM,
        description="Ozone levels approaching unhealthy thresholds in industrial zones.",
        recommendations=(
            "Avoid strenuous outdoor activities",
            "Stay indoors during afternoon hours",
            "Monitor local air quality updates",
            "Use public transportation when possible",
        ),
    ),
    Advisory(
        id=3,
        kind="dust-storm",
        title="Dust Storm Advisory",
        location="Desert Regions",
        time="6 hours ago",
        severity=AdvisorySeverity.MEDIUM,
        description="Dust storm activity affecting air quality in desert and arid regions.",
        recommendations=(
            "Stay indoors until conditions improve",
            "Use eye protection if going outside",
            "Keep respiratory medications handy",
            "Check weather updates regularly",
        ),
    ),
)


def build_community_insights(source: RandomSource) -> CommunityInsights:
    """Draw activity counters (users, reports, initiatives) and attach static content."""
    return CommunityInsights(
        active_users=math.floor(source.next() * 500) + 100,
        reports=math.floor(source.next() * 50) + 10,
        initiatives=math.floor(source.next() * 20) + 5,
        last_activity="2 hours ago",
        recommendations=RECOMMENDATION_GROUPS,
        recent_reports=RECENT_REPORTS,
    )


def advisories_by_severity(severity: Optional[AdvisorySeverity | str] = None) -> List[Advisory]:
    """Return active advisories, optionally only those of one severity.

    Raises ValueError for an unknown severity name.
    """
    if severity is None:
        return list(ACTIVE_ADVISORIES)
    wanted = AdvisorySeverity(severity)
    return [a for a in ACTIVE_ADVISORIES if a.severity == wanted]
