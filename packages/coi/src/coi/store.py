"""Persistence of conflict check results and their resolution."""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import structlog
from pydantic import ValidationError

from coi.schemas import ConflictCheckRecord
from coi.types import ConflictCheckParams, ConflictCheckResult, ConflictStatus


class CheckNotFoundError(KeyError):
    """Raised when a check id is not present in the store."""


class ConflictStoreError(RuntimeError):
    """Raised when writing would overwrite a store file that failed to load."""


class ConflictStore(Protocol):
    """Protocol for conflict check persistence."""

    def save(self, result: ConflictCheckResult, params: ConflictCheckParams) -> str: ...

    def update_resolution(
        self,
        check_id: str,
        status: ConflictStatus | str,
        notes: str | None = None,
        resolver_id: str | None = None,
        owner_id: str | None = None,
    ) -> None: ...


class JsonConflictStore:
    """ConflictStore backed by a single JSON file.

    Records are loaded on first access if `load()` was not called. A file
    that fails to load is never rewritten: reads see an empty store, and
    `save`/`update_resolution` raise ConflictStoreError until the file is
    repaired and reloaded.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.records: list[ConflictCheckRecord] = []
        self.load_error: str | None = None
        self._loaded = False
        self.log = structlog.get_logger()

    def load(self) -> None:
        """Load records from disk."""
        self._loaded = True
        self.load_error = None
        self.records = []

        if not self.path.exists():
            self.log.info("conflict_store_file_not_found", path=str(self.path))
            return

        try:
            data = json.loads(self.path.read_text())
            self.records = [
                ConflictCheckRecord.model_validate(r) for r in data.get("checks", [])
            ]
            self.log.info("conflict_store_loaded", count=len(self.records))
        except (json.JSONDecodeError, ValidationError, AttributeError) as e:
            self.log.error("conflict_store_load_error", path=str(self.path), error=str(e))
            self.load_error = str(e)

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _check_writable(self) -> None:
        if self.load_error is not None:
            raise ConflictStoreError(
                f"refusing to overwrite {self.path}: it failed to load ({self.load_error})"
            )

    def _write(self) -> None:
        self._check_writable()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "checks": [r.model_dump(mode="json", by_alias=True) for r in self.records]
        }
        self.path.write_text(json.dumps(data, indent=2))

    def save(self, result: ConflictCheckResult, params: ConflictCheckParams) -> str:
        """Persist a result as a pending check and return its id."""
        self._ensure_loaded()
        self._check_writable()
        record = ConflictCheckRecord.model_validate({
            **asdict(result),
            **asdict(params),
            "id": uuid.uuid4().hex,
            "status": ConflictStatus.PENDING,
            "created_at": datetime.now(timezone.utc),
        })
        self.records.append(record)
        self._write()
        self.log.info(
            "conflict_check_saved",
            check_id=record.id,
            risk_level=record.risk_level.value,
            total_matches=record.total_matches,
        )
        return record.id

    def get(self, check_id: str, owner_id: str | None = None) -> ConflictCheckRecord:
        """Look up a check, optionally only among `owner_id`'s checks."""
        self._ensure_loaded()
        for record in self.records:
            if record.id == check_id and (owner_id is None or record.owner_id == owner_id):
                return record
        raise CheckNotFoundError(check_id)

    def get_all(self) -> list[ConflictCheckRecord]:
        self._ensure_loaded()
        return self.records

    def update_resolution(
        self,
        check_id: str,
        status: ConflictStatus | str,
        notes: str | None = None,
        resolver_id: str | None = None,
        owner_id: str | None = None,
    ) -> None:
        """Record a human decision on a check."""
        status = ConflictStatus(status)
        self._ensure_loaded()
        self._check_writable()
        record = self.get(check_id, owner_id)
        record.status = status
        record.resolution_notes = notes
        record.resolved_by = resolver_id
        record.resolved_at = datetime.now(timezone.utc)
        self._write()
        self.log.info(
            "conflict_resolution_updated",
            check_id=check_id,
            status=status.value,
            resolved_by=resolver_id,
        )
