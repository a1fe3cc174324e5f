"""Main orchestration: search axes, risk scoring, ranking, recommendation."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from coi.audit import CONFLICT_CHECK_EVENT, AuditRecorder
from coi.config import ConflictConfig
from coi.entities import extract_entities
from coi.fuzzy import fuzzy_match
from coi.repository import MatterRepository
from coi.risk import (
    classify,
    count_by_level,
    overall_risk,
    override_risk,
    recommend,
    severity_rank,
    summarize,
)
from coi.similarity import text_similarity
from coi.store import ConflictStore
from coi.types import (
    ConflictCheckParams,
    ConflictCheckResult,
    ConflictMatch,
    MatchType,
    Matter,
    RiskLevel,
)

log = structlog.get_logger()

DESCRIPTION_QUERY_NAME = "Matter Description"


@dataclass(frozen=True)
class _Axis:
    """One name-search direction: query role vs an existing matter field."""

    key: str
    field: str  # "client_name" or "adverse_party"
    match_type: MatchType
    forced: bool  # client/adverse cross hit, always critical


CLIENT_VS_CLIENT = _Axis("client", "client_name", MatchType.CLIENT, forced=False)
CLIENT_VS_ADVERSE = _Axis("client-adverse", "adverse_party", MatchType.ADVERSE_PARTY, forced=True)
ADVERSE_VS_CLIENT = _Axis("adverse-client", "client_name", MatchType.CLIENT, forced=True)
ADVERSE_VS_ADVERSE = _Axis("adverse", "adverse_party", MatchType.ADVERSE_PARTY, forced=False)


def conflict_id(axis: str, matter_id: str, query: str | None = None) -> str:
    if query is None:
        return f"{axis}::{matter_id}"
    return f"{axis}::{matter_id}::{query}"


class ConflictChecker:
    """Conflict checker running every search axis against one matter snapshot."""

    def __init__(
        self,
        repository: MatterRepository,
        config: ConflictConfig | None = None,
        audit: AuditRecorder | None = None,
        store: ConflictStore | None = None,
    ) -> None:
        self.repository = repository
        self.config = config or ConflictConfig()
        self.audit = audit
        self.store = store

    def check(self, params: ConflictCheckParams) -> ConflictCheckResult:
        """Run a conflict check and record it in the audit trail."""
        log.info(
            "conflict_check_start",
            owner_id=params.owner_id,
            has_client=bool(params.client_name),
            adverse_count=len(params.adverse_parties),
            company_count=len(params.company_names),
            has_description=bool(params.matter_description),
        )

        # Repository errors propagate: a check must reflect a current snapshot
        matters = self.repository.list_matters(params.owner_id, params.exclude_matter_id)
        log.debug("matters_loaded", count=len(matters))

        candidates: list[ConflictMatch] = []

        if params.client_name:
            for axis in (CLIENT_VS_CLIENT, CLIENT_VS_ADVERSE):
                candidates.extend(self._search_names(params.client_name, matters, axis))

        for name in [*params.adverse_parties, *params.company_names]:
            if not name:
                continue
            for axis in (ADVERSE_VS_CLIENT, ADVERSE_VS_ADVERSE):
                candidates.extend(self._search_names(name, matters, axis))

        if params.matter_description:
            candidates.extend(self._search_description(params.matter_description, matters))

        result = self._aggregate(candidates)

        log.info(
            "conflict_check_done",
            owner_id=params.owner_id,
            matters_scanned=len(matters),
            total_matches=result.total_matches,
            risk_level=result.risk_level.value,
            recommendation=result.recommendation.value,
        )

        self._record_audit(params, result)
        return result

    def check_and_save(
        self, params: ConflictCheckParams
    ) -> tuple[ConflictCheckResult, str | None]:
        """Run a check and persist it as a pending record.

        Returns the result and the stored check id (None when no store is
        configured or the save failed).
        """
        result = self.check(params)
        if self.store is None:
            return result, None
        try:
            check_id = self.store.save(result, params)
        except Exception as e:
            log.warning("conflict_store_failed", owner_id=params.owner_id, error=str(e))
            return result, None
        return result, check_id

    def _search_names(
        self, query: str, matters: list[Matter], axis: _Axis
    ) -> list[ConflictMatch]:
        threshold = self.config.thresholds.name
        hits: list[ConflictMatch] = []

        for matter in matters:
            existing = getattr(matter, axis.field)
            if not existing:
                continue

            match = fuzzy_match(query, existing, threshold)
            if not match.matches:
                continue

            if axis.forced:
                risk = override_risk(match.score, threshold)
            else:
                risk = classify(match.score, axis.match_type)

            log.debug(
                "name_hit",
                axis=axis.key,
                matter_id=matter.id,
                query=query,
                existing=existing,
                score=round(match.score, 4),
                risk_level=risk.value,
            )
            hits.append(
                self._build_match(
                    matter,
                    conflict_id(axis.key, matter.id, query),
                    axis.match_type,
                    matched_name=existing,
                    query_name=query,
                    score=match.score,
                    risk=risk,
                )
            )

        return hits

    def _search_description(
        self, description: str, matters: list[Matter]
    ) -> list[ConflictMatch]:
        thresholds = self.config.thresholds
        entities = extract_entities(description, self.config.entities)
        log.debug("entities_extracted", count=len(entities), texts=[e.text for e in entities])

        hits: list[ConflictMatch] = []
        for matter in matters:
            if matter.description:
                similarity = text_similarity(
                    description,
                    matter.description,
                    symmetric=self.config.similarity.symmetric,
                )
                if similarity >= thresholds.description:
                    hits.append(
                        self._build_match(
                            matter,
                            conflict_id("matter", matter.id),
                            MatchType.MATTER,
                            matched_name=matter.title,
                            query_name=DESCRIPTION_QUERY_NAME,
                            score=similarity,
                            risk=classify(similarity, MatchType.MATTER),
                        )
                    )

            if not matter.client_name:
                continue
            for entity in entities:
                match = fuzzy_match(entity.text, matter.client_name, thresholds.entity)
                if not match.matches:
                    continue
                hits.append(
                    self._build_match(
                        matter,
                        conflict_id("entity-client", matter.id, entity.text),
                        MatchType.CLIENT,
                        matched_name=matter.client_name,
                        query_name=entity.text,
                        score=match.score,
                        risk=classify(match.score, MatchType.CLIENT),
                        metadata={
                            "entity_type": entity.type.value,
                            "entity_confidence": entity.confidence,
                        },
                    )
                )

        return hits

    @staticmethod
    def _build_match(
        matter: Matter,
        match_id: str,
        match_type: MatchType,
        *,
        matched_name: str,
        query_name: str,
        score: float,
        risk: RiskLevel,
        metadata: dict | None = None,
    ) -> ConflictMatch:
        return ConflictMatch(
            id=match_id,
            type=match_type,
            matter_id=matter.id,
            matter_title=matter.title,
            matter_description=matter.description,
            client_name=matter.client_name if match_type != MatchType.ADVERSE_PARTY else None,
            adverse_party=matter.adverse_party if match_type == MatchType.ADVERSE_PARTY else None,
            matched_name=matched_name,
            query_name=query_name,
            similarity_score=max(0.0, min(1.0, score)),
            risk_level=risk,
            matched_at=matter.created_at,
            metadata=metadata,
        )

    @staticmethod
    def _aggregate(candidates: list[ConflictMatch]) -> ConflictCheckResult:
        seen: set[str] = set()
        conflicts: list[ConflictMatch] = []
        for c in candidates:
            if c.risk_level == RiskLevel.NONE or c.id in seen:
                continue
            seen.add(c.id)
            conflicts.append(c)

        conflicts.sort(
            key=lambda c: (severity_rank(c.risk_level), c.similarity_score),
            reverse=True,
        )

        counts = count_by_level(conflicts)
        recommendation = recommend(conflicts)

        return ConflictCheckResult(
            conflicts=conflicts,
            risk_level=overall_risk(conflicts),
            total_matches=len(conflicts),
            high_risk_count=counts[RiskLevel.CRITICAL] + counts[RiskLevel.HIGH],
            medium_risk_count=counts[RiskLevel.MEDIUM],
            low_risk_count=counts[RiskLevel.LOW],
            recommendation=recommendation,
            summary=summarize(len(conflicts), counts, recommendation),
        )

    def _record_audit(self, params: ConflictCheckParams, result: ConflictCheckResult) -> None:
        if self.audit is None:
            return
        try:
            self.audit.record(
                params.owner_id,
                CONFLICT_CHECK_EVENT,
                {
                    "total_conflicts": result.total_matches,
                    "risk_level": result.risk_level.value,
                    "recommendation": result.recommendation.value,
                    "client_name": params.client_name,
                    "adverse_parties": list(params.adverse_parties),
                    "company_names_count": len(params.company_names),
                },
            )
        except Exception as e:
            log.warning("audit_record_failed", owner_id=params.owner_id, error=str(e))


def check_conflicts(
    params: ConflictCheckParams,
    repository: MatterRepository,
    *,
    config: ConflictConfig | None = None,
    audit: AuditRecorder | None = None,
) -> ConflictCheckResult:
    """Run a single conflict check against `repository`."""
    return ConflictChecker(repository, config=config, audit=audit).check(params)
