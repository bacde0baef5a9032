"""Tests for profile lookup and sync."""

import pytest

from fuel_engine.domain.profile import ExperienceLevel, Goal
from fuel_engine.errors import ProfileNotFoundError
from tests.conftest import TOKEN


def test_get_profile_raises_for_unknown_user(profile_service) -> None:
    with pytest.raises(ProfileNotFoundError) as excinfo:
        profile_service.get_profile("missing")

    assert str(excinfo.value) == "User not found. Sync profile first."
    assert excinfo.value.token_identifier == "missing"
    assert profile_service.find_profile("missing") is None


def test_sync_creates_profile(profile_service, biometrics) -> None:
    created = profile_service.sync_profile(
        TOKEN, name="Sara", biometrics=biometrics, goal="cut"
    )

    assert created.goal == Goal.CUT
    assert created.biometrics == biometrics
    assert created.experience_level == ExperienceLevel.INTERMEDIATE
    assert profile_service.get_profile(TOKEN) == created


def test_sync_patches_only_given_fields(profile, profile_service) -> None:
    updated = profile_service.sync_profile(
        TOKEN, name="Abebe K.", meals_per_day=5, timezone="Africa/Addis_Ababa"
    )

    assert updated.id == profile.id
    assert updated.name == "Abebe K."
    assert updated.meals_per_day == 5
    assert updated.timezone == "Africa/Addis_Ababa"
    assert updated.goal == Goal.BULK
    assert updated.biometrics == profile.biometrics
