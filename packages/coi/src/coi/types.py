"""Core types for the coi conflict-of-interest screening engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

NormalizedName = str


class RiskLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    RiskLevel.NONE: 0,
    RiskLevel.LOW: 1,
    RiskLevel.MEDIUM: 2,
    RiskLevel.HIGH: 3,
    RiskLevel.CRITICAL: 4,
}


class ConflictStatus(str, Enum):
    """Resolution lifecycle of a persisted check, owned by the store."""

    PENDING = "pending"
    WAIVED = "waived"
    DECLINED = "declined"
    SCREENED = "screened"
    CLEARED = "cleared"


class MatchType(str, Enum):
    CLIENT = "client"
    ADVERSE_PARTY = "adverse_party"
    MATTER = "matter"
    SESSION = "session"


class EntityType(str, Enum):
    PERSON = "person"
    ORGANIZATION = "organization"


class Recommendation(str, Enum):
    PROCEED = "proceed"
    REVIEW = "review"
    DECLINE = "decline"


@dataclass
class FuzzyMatchResult:
    target: str
    score: float
    matches: bool
    normalized_target: NormalizedName
    normalized_query: NormalizedName


@dataclass
class EntityMatch:
    text: str
    type: EntityType
    confidence: float
    start_index: int  # offset into the source sentence
    end_index: int


@dataclass
class Matter:
    """An existing matter as returned by the repository."""

    id: str
    title: str
    created_at: datetime
    client_name: str | None = None
    adverse_party: str | None = None
    description: str | None = None
    owner_id: str = ""


@dataclass
class ConflictMatch:
    id: str
    type: MatchType
    matter_id: str
    matter_title: str
    matched_name: str
    query_name: str
    similarity_score: float
    risk_level: RiskLevel
    matched_at: datetime
    matter_description: str | None = None
    client_name: str | None = None
    adverse_party: str | None = None
    metadata: dict[str, Any] | None = None


@dataclass
class ConflictCheckParams:
    owner_id: str
    client_name: str | None = None
    adverse_parties: list[str] = field(default_factory=list)
    company_names: list[str] = field(default_factory=list)
    matter_description: str | None = None
    exclude_matter_id: str | None = None


@dataclass
class ConflictCheckResult:
    conflicts: list[ConflictMatch]
    risk_level: RiskLevel
    total_matches: int
    high_risk_count: int
    medium_risk_count: int
    low_risk_count: int
    recommendation: Recommendation
    summary: str
