"""Supabase-backed profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fuel_engine.adapters.supabase_rows import parse_timestamp
from fuel_engine.domain.profile import (
    ActivityLevel,
    Biometrics,
    ExperienceLevel,
    Gender,
    Goal,
    UserProfile,
)
from fuel_engine.services.users import ProfileRepository

_COLUMNS = (
    "id, token_identifier, name, weight_kg, height_cm, age, gender, "
    "activity_level, body_fat_percent, goal, experience_level, meals_per_day, "
    "timezone, created_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_by_token(self, token_identifier: str) -> UserProfile | None:
        """Return the profile for an auth token identifier, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("token_identifier", token_identifier)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_profile(response.data[0])
        return None

    def create_profile(
        self, token_identifier: str, payload: dict[str, object]
    ) -> UserProfile:
        """Create a new user row and return it."""
        row = {"token_identifier": token_identifier, **_to_row(payload)}
        response = self.client.table("users").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_profile(response.data[0])

    def update_profile(
        self, token_identifier: str, payload: dict[str, object]
    ) -> UserProfile:
        """Patch the user row and return it."""
        response = (
            self.client.table("users")
            .update(_to_row(payload))
            .eq("token_identifier", token_identifier)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_profile(response.data[0])


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    row = {key: value for key, value in payload.items() if key != "biometrics"}
    biometrics = payload.get("biometrics")
    if isinstance(biometrics, Biometrics):
        row.update(
            {
                "weight_kg": biometrics.weight_kg,
                "height_cm": biometrics.height_cm,
                "age": biometrics.age,
                "gender": str(biometrics.gender),
                "activity_level": str(biometrics.activity_level),
                "body_fat_percent": biometrics.body_fat_percent,
            }
        )
    for key in ("goal", "experience_level"):
        if key in row:
            row[key] = str(row[key])
    return row


def _parse_biometrics(row: dict[str, object]) -> Biometrics | None:
    required = ("weight_kg", "height_cm", "age", "gender", "activity_level")
    if any(row.get(key) is None for key in required):
        return None
    body_fat = row.get("body_fat_percent")
    return Biometrics(
        weight_kg=float(row["weight_kg"]),
        height_cm=float(row["height_cm"]),
        age=int(row["age"]),
        gender=Gender(row["gender"]),
        activity_level=ActivityLevel(row["activity_level"]),
        body_fat_percent=float(body_fat) if body_fat is not None else None,
    )


def _parse_profile(row: dict[str, object]) -> UserProfile:
    created_at = row.get("created_at")
    meals_per_day = row.get("meals_per_day")
    return UserProfile(
        id=UUID(str(row["id"])),
        token_identifier=str(row["token_identifier"]),
        name=str(row.get("name") or ""),
        biometrics=_parse_biometrics(row),
        goal=Goal(row.get("goal") or Goal.MAINTAIN),
        experience_level=ExperienceLevel(
            row.get("experience_level") or ExperienceLevel.INTERMEDIATE
        ),
        meals_per_day=int(meals_per_day) if meals_per_day is not None else None,
        timezone=str(row.get("timezone") or "UTC"),
        created_at=parse_timestamp(created_at),
    )
