"""Approximate name matching on normalized names."""

from __future__ import annotations

from rapidfuzz import fuzz, process

from coi.normalize import normalize
from coi.types import FuzzyMatchResult


def _to_unit(ratio: float) -> float:
    return max(0.0, min(1.0, ratio / 100.0))


def fuzzy_match(query: str, target: str, threshold: float = 0.7) -> FuzzyMatchResult:
    """Score how closely `query` matches `target` after normalization."""
    normalized_query = normalize(query)
    normalized_target = normalize(target)

    if not normalized_query or not normalized_target:
        score = 0.0
    elif normalized_query == normalized_target:
        score = 1.0
    else:
        score = _to_unit(fuzz.WRatio(normalized_query, normalized_target))

    return FuzzyMatchResult(
        target=target,
        score=score,
        matches=score >= threshold,
        normalized_target=normalized_target,
        normalized_query=normalized_query,
    )


def fuzzy_match_multiple(
    query: str,
    targets: list[str],
    threshold: float = 0.7,
    limit: int = 10,
) -> list[FuzzyMatchResult]:
    """Score `query` against every target, best first.

    Only results at or above `threshold` are kept, capped at `limit`.
    """
    normalized_query = normalize(query)
    if not normalized_query or not targets or limit <= 0:
        return []

    choices = [normalize(t) for t in targets]
    hits = process.extract(
        normalized_query,
        choices,
        scorer=fuzz.WRatio,
        limit=None,
        score_cutoff=threshold * 100.0,
    )

    results: list[FuzzyMatchResult] = []
    for choice, ratio, idx in hits:
        if not choice:
            continue
        score = 1.0 if choice == normalized_query else _to_unit(ratio)
        if score < threshold:
            continue
        results.append(
            FuzzyMatchResult(
                target=targets[idx],
                score=score,
                matches=True,
                normalized_target=choice,
                normalized_query=normalized_query,
            )
        )

    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]


def are_names_similar(name1: str, name2: str, threshold: float = 0.8) -> bool:
    """Loose equivalence check that also accepts abbreviated names.

    One normalized name containing the other counts as similar.
    """
    n1 = normalize(name1)
    n2 = normalize(name2)
    if not n1 or not n2:
        return False
    if n1 == n2 or n1 in n2 or n2 in n1:
        return True
    return fuzzy_match(name1, name2, threshold).matches
