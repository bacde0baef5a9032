"""Admin domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuthorizationContext:
    """Capabilities granted by the calling layer for a single operation."""

    actor: str
    can_seed_foods: bool = False

    @classmethod
    def admin(cls, actor: str = "admin") -> "AuthorizationContext":
        """Return a context with every admin capability."""
        return cls(actor=actor, can_seed_foods=True)


@dataclass(frozen=True)
class AuditEvent:
    """Audit trail entry for privileged actions."""

    action: str
    actor: str
    details: str
    timestamp: datetime
    context_id: str | None = None
