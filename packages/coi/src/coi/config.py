"""Configuration for the coi conflict checking engine."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Thresholds:
    name: float = 0.7
    entity: float = 0.75
    description: float = 0.7


@dataclass
class FuzzyConfig:
    limit: int = 10


@dataclass
class EntityConfig:
    person_confidence: float = 0.7
    company_confidence: float = 0.85
    overlap_window: int = 10  # chars; same-text candidates closer than this collapse
    min_company_length: int = 3


@dataclass
class SimilarityConfig:
    symmetric: bool = True


@dataclass
class ConflictConfig:
    thresholds: Thresholds = field(default_factory=Thresholds)
    fuzzy: FuzzyConfig = field(default_factory=FuzzyConfig)
    entities: EntityConfig = field(default_factory=EntityConfig)
    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)
