"""Audit logging service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from fuel_engine.domain.admin import AuditEvent


class AuditRepository(Protocol):
    """Persistence interface for audit events."""

    def create_event(self, event: AuditEvent) -> None:
        """Create an audit event row."""


@dataclass
class AuditService:
    """Service for recording audit events."""

    repository: AuditRepository

    def record_event(
        self,
        action: str,
        actor: str,
        details: str,
        context_id: str | None = None,
    ) -> AuditEvent:
        """Persist an audit event and return it."""
        event = AuditEvent(
            action=action,
            actor=actor,
            details=details,
            timestamp=datetime.now(tz=UTC),
            context_id=context_id,
        )
        self.repository.create_event(event)
        return event
