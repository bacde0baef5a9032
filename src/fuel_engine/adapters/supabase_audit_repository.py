"""Supabase repository for audit events."""

from dataclasses import dataclass

from supabase import Client

from fuel_engine.domain.admin import AuditEvent
from fuel_engine.services.audit import AuditRepository


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed audit repository."""

    client: Client

    def create_event(self, event: AuditEvent) -> None:
        """Create an audit log row."""
        self.client.table("audit_logs").insert(
            {
                "action": event.action,
                "actor": event.actor,
                "details": event.details,
                "timestamp": event.timestamp.isoformat(),
                "context_id": event.context_id,
            }
        ).execute()
