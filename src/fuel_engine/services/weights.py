"""Bodyweight logging with duplicate suppression."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol
from uuid import UUID

from fuel_engine.domain.progress import WeightLog
from fuel_engine.errors import InvalidWeightError
from fuel_engine.services.users import ProfileService

DEDUP_WINDOW = timedelta(hours=18)
DEDUP_MIN_DELTA_KG = 0.05

_logger = logging.getLogger(__name__)


def should_record_weight(
    previous: WeightLog | None,
    weight_kg: float,
    logged_at: datetime,
    window: timedelta = DEDUP_WINDOW,
    min_delta_kg: float = DEDUP_MIN_DELTA_KG,
) -> bool:
    """Return False when the write repeats a recent, unchanged value."""
    if previous is None:
        return True
    is_recent = timedelta(0) <= logged_at - previous.logged_at < window
    is_unchanged = abs(weight_kg - previous.weight_kg) < min_delta_kg
    return not (is_recent and is_unchanged)


class WeightLogRepository(Protocol):
    """Persistence interface for weight logs."""

    def create_weight_log(
        self, user_id: UUID, weight_kg: float, logged_at: datetime, source: str
    ) -> WeightLog:
        """Append a weight log and return it."""

    def list_recent_weight_logs(self, user_id: UUID, limit: int) -> list[WeightLog]:
        """Return the most recent weight logs, newest first."""


@dataclass(frozen=True)
class WeightLogResult:
    """Outcome of a weight write."""

    recorded: bool
    log: WeightLog | None


@dataclass
class WeightLogService:
    """Append weight logs, skipping repeated saves of the same value.

    Writes for a single user must be serialised by the storage layer; two
    concurrent writes could both pass the duplicate check.
    """

    profile_service: ProfileService
    repository: WeightLogRepository
    dedup_window: timedelta = DEDUP_WINDOW
    dedup_min_delta_kg: float = DEDUP_MIN_DELTA_KG

    def record_weight(
        self,
        token_identifier: str,
        weight_kg: float,
        logged_at: datetime,
        source: str = "manual",
    ) -> WeightLogResult:
        """Record a weight unless it duplicates the previous entry."""
        if not math.isfinite(weight_kg) or weight_kg <= 0:
            raise InvalidWeightError(f"Invalid bodyweight: {weight_kg}")
        profile = self.profile_service.get_profile(token_identifier)
        recent = self.repository.list_recent_weight_logs(profile.id, limit=1)
        previous = recent[0] if recent else None
        if not should_record_weight(
            previous,
            weight_kg,
            logged_at,
            window=self.dedup_window,
            min_delta_kg=self.dedup_min_delta_kg,
        ):
            _logger.info(
                "Duplicate weight log suppressed: user=%s weight=%s",
                profile.id,
                weight_kg,
            )
            return WeightLogResult(recorded=False, log=previous)
        log = self.repository.create_weight_log(
            profile.id, weight_kg, logged_at, source
        )
        return WeightLogResult(recorded=True, log=log)
