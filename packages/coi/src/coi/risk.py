"""Risk classification and recommendation rules."""

from __future__ import annotations

from collections.abc import Iterable

from coi.types import ConflictMatch, MatchType, Recommendation, RiskLevel

# (minimum score, level), checked top-down; first hit wins
RiskBands = tuple[tuple[float, RiskLevel], ...]

_DEFAULT_BANDS: RiskBands = (
    (0.90, RiskLevel.MEDIUM),
    (0.75, RiskLevel.LOW),
)

RISK_TABLE: dict[MatchType, RiskBands] = {
    MatchType.CLIENT: (
        (0.95, RiskLevel.CRITICAL),
        (0.85, RiskLevel.HIGH),
        (0.75, RiskLevel.MEDIUM),
        (0.0, RiskLevel.LOW),
    ),
    MatchType.ADVERSE_PARTY: (
        (0.90, RiskLevel.HIGH),
        (0.80, RiskLevel.MEDIUM),
        (0.0, RiskLevel.LOW),
    ),
    MatchType.MATTER: _DEFAULT_BANDS,
}


def classify(score: float, match_type: MatchType | str) -> RiskLevel:
    """Map a similarity score to a risk level for the given match type."""
    bands = RISK_TABLE.get(MatchType(match_type), _DEFAULT_BANDS)
    for minimum, level in bands:
        if score >= minimum:
            return level
    return RiskLevel.NONE


def override_risk(score: float, threshold: float = 0.7) -> RiskLevel:
    """Risk for a client/adverse-party cross hit.

    Representing a party adverse to an existing client is a conflict
    regardless of how close the names are, once the match threshold is met.
    """
    return RiskLevel.CRITICAL if score >= threshold else RiskLevel.NONE


def severity_rank(level: RiskLevel) -> int:
    return RiskLevel(level).severity


def overall_risk(conflicts: Iterable[ConflictMatch]) -> RiskLevel:
    return max(
        (c.risk_level for c in conflicts),
        key=severity_rank,
        default=RiskLevel.NONE,
    )


def count_by_level(conflicts: Iterable[ConflictMatch]) -> dict[RiskLevel, int]:
    counts = {level: 0 for level in RiskLevel}
    for c in conflicts:
        counts[c.risk_level] += 1
    return counts


def recommend(conflicts: Iterable[ConflictMatch]) -> Recommendation:
    levels = {c.risk_level for c in conflicts}
    if RiskLevel.CRITICAL in levels:
        return Recommendation.DECLINE
    if RiskLevel.HIGH in levels or RiskLevel.MEDIUM in levels:
        return Recommendation.REVIEW
    return Recommendation.PROCEED


def summarize(
    total: int,
    counts: dict[RiskLevel, int],
    recommendation: Recommendation,
) -> str:
    """One-paragraph human readable summary of a check."""
    if total == 0:
        return "No conflicts detected. Safe to proceed."
    if recommendation == Recommendation.DECLINE:
        return (
            f"Critical conflicts detected ({counts[RiskLevel.CRITICAL]} critical, "
            f"{counts[RiskLevel.HIGH]} high risk). Engagement should be declined."
        )
    if recommendation == Recommendation.REVIEW:
        return (
            f"Potential conflicts detected ({counts[RiskLevel.HIGH]} high, "
            f"{counts[RiskLevel.MEDIUM]} medium risk). "
            "Manual review required before proceeding."
        )
    return f"{total} low-risk match(es) found. Review recommended but not required."
