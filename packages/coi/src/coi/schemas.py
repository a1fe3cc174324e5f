"""Serialized shapes for check results and stored checks."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coi.types import (
    ConflictCheckResult,
    ConflictStatus,
    MatchType,
    Recommendation,
    RiskLevel,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConflictMatchModel(_CamelModel):
    id: str
    type: MatchType
    matter_id: str
    matter_title: str
    matter_description: str | None = None
    client_name: str | None = None
    adverse_party: str | None = None
    matched_name: str
    query_name: str
    similarity_score: float = Field(ge=0.0, le=1.0)
    risk_level: RiskLevel
    matched_at: datetime
    metadata: dict[str, Any] | None = None


class ConflictCheckResultModel(_CamelModel):
    conflicts: list[ConflictMatchModel]
    risk_level: RiskLevel
    total_matches: int
    high_risk_count: int
    medium_risk_count: int
    low_risk_count: int
    recommendation: Recommendation
    summary: str

    @classmethod
    def from_result(cls, result: ConflictCheckResult) -> ConflictCheckResultModel:
        return cls.model_validate(asdict(result))


class ConflictCheckRecord(ConflictCheckResultModel):
    """A persisted check with its query and resolution state."""

    id: str
    owner_id: str
    client_name: str | None = None
    adverse_parties: list[str] = Field(default_factory=list)
    company_names: list[str] = Field(default_factory=list)
    matter_description: str | None = None
    exclude_matter_id: str | None = None
    status: ConflictStatus = ConflictStatus.PENDING
    resolved_by: str | None = None
    resolved_at: datetime | None = None
    resolution_notes: str | None = None
    created_at: datetime


def result_to_dict(result: ConflictCheckResult) -> dict[str, Any]:
    """Serialize a result with camelCase keys and enum string tags."""
    return ConflictCheckResultModel.from_result(result).model_dump(
        mode="json", by_alias=True
    )
