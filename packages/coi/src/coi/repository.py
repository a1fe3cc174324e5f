"""Matter repository interface and an in-memory implementation."""

from __future__ import annotations

from typing import Protocol

from coi.types import Matter


class MatterRepository(Protocol):
    """Read access to an owner's existing matters."""

    def list_matters(
        self, owner_id: str, exclude_matter_id: str | None = None
    ) -> list[Matter]: ...


class InMemoryMatterRepository:
    """MatterRepository over a fixed list of matters."""

    def __init__(self, matters: list[Matter] | None = None) -> None:
        self._matters: list[Matter] = list(matters or [])

    def add(self, matter: Matter) -> None:
        self._matters.append(matter)

    def list_matters(
        self, owner_id: str, exclude_matter_id: str | None = None
    ) -> list[Matter]:
        return [
            m
            for m in self._matters
            if m.owner_id == owner_id and m.id != exclude_matter_id
        ]
