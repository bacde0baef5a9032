"""User profile business logic."""

from dataclasses import dataclass
from typing import Protocol

from fuel_engine.domain.profile import (
    Biometrics,
    ExperienceLevel,
    Goal,
    UserProfile,
)
from fuel_engine.errors import ProfileNotFoundError


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_by_token(self, token_identifier: str) -> UserProfile | None:
        """Return the profile for an auth token identifier, if present."""

    def create_profile(
        self, token_identifier: str, payload: dict[str, object]
    ) -> UserProfile:
        """Create and return a new profile."""

    def update_profile(
        self, token_identifier: str, payload: dict[str, object]
    ) -> UserProfile:
        """Patch an existing profile and return it."""


@dataclass
class ProfileService:
    """Application service for profile lookups and sync."""

    repository: ProfileRepository

    def get_profile(self, token_identifier: str) -> UserProfile:
        """Return the user's profile or raise ProfileNotFoundError."""
        profile = self.repository.get_by_token(token_identifier)
        if profile is None:
            raise ProfileNotFoundError(token_identifier)
        return profile

    def find_profile(self, token_identifier: str) -> UserProfile | None:
        """Return the user's profile, or None when it was never synced."""
        return self.repository.get_by_token(token_identifier)

    def sync_profile(  # noqa: PLR0913
        self,
        token_identifier: str,
        name: str,
        biometrics: Biometrics | None = None,
        goal: Goal | None = None,
        experience_level: ExperienceLevel | None = None,
        meals_per_day: int | None = None,
        timezone: str | None = None,
    ) -> UserProfile:
        """Create the profile or patch the fields that were provided."""
        payload: dict[str, object] = {"name": name}
        if biometrics is not None:
            payload["biometrics"] = biometrics
        if goal is not None:
            payload["goal"] = Goal(goal)
        if experience_level is not None:
            payload["experience_level"] = ExperienceLevel(experience_level)
        if meals_per_day is not None:
            payload["meals_per_day"] = meals_per_day
        if timezone is not None:
            payload["timezone"] = timezone

        existing = self.repository.get_by_token(token_identifier)
        if existing:
            return self.repository.update_profile(token_identifier, payload)
        return self.repository.create_profile(token_identifier, payload)
