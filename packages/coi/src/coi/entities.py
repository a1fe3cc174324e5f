"""Heuristic person/organization extraction from matter descriptions."""

from __future__ import annotations

import re

from coi.config import EntityConfig
from coi.designators import ENTITY_SUFFIXES, is_designator
from coi.types import EntityMatch, EntityType

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+\s+")

# Two or more consecutive capitalized words
_NAME_RUN_RE = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)\b")

# Longest first so "Co" never shadows "Corp" or "Company"
_SUFFIX_FORMS = sorted(
    {form for s in ENTITY_SUFFIXES for form in (s.capitalize(), s.upper())},
    key=len,
    reverse=True,
)

# (a) capitalized run ending in a legal-entity suffix: "Acme Holdings LLC"
_COMPANY_SUFFIX_RE = re.compile(
    rf"\b((?:[A-Z][\w&]*\s+)+(?:{'|'.join(_SUFFIX_FORMS)})\b\.?)"
)
# (b) broader net: 2-5 capitalized words
_CAPITALIZED_RUN_RE = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+){1,4})\b")


def split_sentences(text: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def detect_company_names(text: str, min_length: int = 3) -> list[str]:
    """Find likely company names in text.

    Unions the suffix pattern and the capitalized-run pattern, trims and
    deduplicates in first-seen order, and drops anything shorter than
    `min_length` characters.
    """
    found: list[str] = []
    for pattern in (_COMPANY_SUFFIX_RE, _CAPITALIZED_RUN_RE):
        found.extend(m.group(1) for m in pattern.finditer(text))

    unique = list(dict.fromkeys(c.strip() for c in found))
    return [c for c in unique if len(c) >= min_length]


def extract_entities(text: str, config: EntityConfig | None = None) -> list[EntityMatch]:
    """Extract candidate person and organization names from free text.

    Offsets are relative to the sentence each entity was found in.
    """
    if config is None:
        config = EntityConfig()
    if not text:
        return []

    candidates: list[EntityMatch] = []
    for sentence in split_sentences(text):
        for m in _NAME_RUN_RE.finditer(sentence):
            name = m.group(1)
            is_org = any(is_designator(token) for token in name.split())
            candidates.append(
                EntityMatch(
                    text=name,
                    type=EntityType.ORGANIZATION if is_org else EntityType.PERSON,
                    confidence=config.person_confidence,
                    start_index=m.start(1),
                    end_index=m.end(1),
                )
            )

        for company in detect_company_names(sentence, config.min_company_length):
            index = sentence.find(company)
            if index == -1:
                continue
            candidates.append(
                EntityMatch(
                    text=company,
                    type=EntityType.ORGANIZATION,
                    confidence=config.company_confidence,
                    start_index=index,
                    end_index=index + len(company),
                )
            )

    # Overlap suppression: first seen wins
    unique: list[EntityMatch] = []
    for cand in candidates:
        if any(
            kept.text == cand.text
            and abs(kept.start_index - cand.start_index) < config.overlap_window
            for kept in unique
        ):
            continue
        unique.append(cand)

    unique.sort(key=lambda e: e.start_index)
    return unique
