"""Audit trail recording for conflict checks."""

from __future__ import annotations

from typing import Any, Protocol

import structlog

CONFLICT_CHECK_EVENT = "conflict_check"
CONFLICT_RESOLVE_EVENT = "conflict_resolve"


class AuditRecorder(Protocol):
    """Protocol for audit sinks."""

    def record(self, owner_id: str, event_kind: str, metadata: dict[str, Any]) -> None: ...


class LogAuditRecorder:
    """AuditRecorder that emits each event through structlog."""

    def __init__(self, logger_name: str = "coi.audit") -> None:
        self.log = structlog.get_logger(logger_name)

    def record(self, owner_id: str, event_kind: str, metadata: dict[str, Any]) -> None:
        self.log.info("audit_event", owner_id=owner_id, event_kind=event_kind, **metadata)
