"""coi - Conflict of interest screening engine."""

from coi.checker import ConflictChecker, check_conflicts
from coi.config import ConflictConfig
from coi.repository import InMemoryMatterRepository, MatterRepository
from coi.types import (
    ConflictCheckParams,
    ConflictCheckResult,
    ConflictMatch,
    ConflictStatus,
    Matter,
    MatchType,
    Recommendation,
    RiskLevel,
)

__all__ = [
    "ConflictCheckParams",
    "ConflictCheckResult",
    "ConflictChecker",
    "ConflictConfig",
    "ConflictMatch",
    "ConflictStatus",
    "InMemoryMatterRepository",
    "Matter",
    "MatchType",
    "MatterRepository",
    "Recommendation",
    "RiskLevel",
    "check_conflicts",
]
