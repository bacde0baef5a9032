"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

import pytest

from fuel_engine.config import Settings
from fuel_engine.containers import AppContainer
from fuel_engine.domain.admin import AuditEvent
from fuel_engine.domain.catalog import IngredientSeed
from fuel_engine.domain.foods import Dish, Ingredient
from fuel_engine.domain.meals import (
    MealComponent,
    MealLog,
    MealTotals,
    NormalizedComponent,
)
from fuel_engine.domain.nutrition import MacroVector
from fuel_engine.domain.profile import (
    ActivityLevel,
    Biometrics,
    ExperienceLevel,
    Gender,
    Goal,
    UserProfile,
)
from fuel_engine.domain.progress import AdaptiveSignal, WeightLog
from fuel_engine.services.audit import AuditRepository, AuditService
from fuel_engine.services.dashboard import DashboardService
from fuel_engine.services.dishes import DishService
from fuel_engine.services.energy import EnergyService
from fuel_engine.services.foods import FoodCatalogService, FoodRepository
from fuel_engine.services.meals import MealLogRepository, MealLogService
from fuel_engine.services.progress import AdaptiveSignalRepository, ProgressService
from fuel_engine.services.users import ProfileRepository, ProfileService
from fuel_engine.services.weights import WeightLogRepository, WeightLogService

TOKEN = "user-token"


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, UserProfile] = field(default_factory=dict)

    def get_by_token(self, token_identifier: str) -> UserProfile | None:
        return self.profiles.get(token_identifier)

    def create_profile(
        self, token_identifier: str, payload: dict[str, object]
    ) -> UserProfile:
        profile = UserProfile(
            id=uuid4(), token_identifier=token_identifier, **payload
        )
        self.profiles[token_identifier] = profile
        return profile

    def update_profile(
        self, token_identifier: str, payload: dict[str, object]
    ) -> UserProfile:
        profile = replace(self.profiles[token_identifier], **payload)
        self.profiles[token_identifier] = profile
        return profile


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory catalogue for tests."""

    ingredients: dict[UUID, Ingredient] = field(default_factory=dict)
    dishes: dict[UUID, Dish] = field(default_factory=dict)

    def add_ingredient(self, **values: object) -> Ingredient:
        ingredient = Ingredient(id=uuid4(), **values)
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        return self.ingredients.get(ingredient_id)

    def get_dish(self, dish_id: UUID) -> Dish | None:
        return self.dishes.get(dish_id)

    def find_ingredient_by_name(self, name: str) -> Ingredient | None:
        for ingredient in self.ingredients.values():
            if ingredient.name.lower() == name.lower():
                return ingredient
        return None

    def create_ingredient(self, seed: IngredientSeed) -> Ingredient:
        return self.add_ingredient(
            name=seed.name,
            calories=seed.calories,
            protein=seed.protein,
            carbs=seed.carbs,
            fats=seed.fats,
            fiber=seed.fiber,
            category=seed.category,
            is_local=seed.is_local,
            local_name=seed.local_name,
        )

    def create_dish(self, payload: dict[str, object]) -> Dish:
        dish = Dish(id=uuid4(), **payload)
        self.dishes[dish.id] = dish
        return dish


@dataclass
class InMemoryMealLogRepository(MealLogRepository):
    """In-memory meal log repository for tests."""

    logs: list[MealLog] = field(default_factory=list)

    def create_meal_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        logged_at: datetime,
        components: tuple[MealComponent, ...],
        normalized_components: tuple[NormalizedComponent, ...],
        totals: MealTotals,
        goal_context: str | None,
    ) -> MealLog:
        log = MealLog(
            id=uuid4(),
            user_id=user_id,
            name=name,
            logged_at=logged_at,
            components=tuple(components),
            normalized_components=tuple(normalized_components),
            totals=totals,
            goal_context=goal_context,
        )
        self.logs.append(log)
        return log

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLog]:
        return [
            log
            for log in self.logs
            if log.user_id == user_id and start <= log.logged_at <= end
        ]

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLog]:
        owned = [log for log in self.logs if log.user_id == user_id]
        owned.sort(key=lambda log: log.logged_at, reverse=True)
        return owned[:limit]


@dataclass
class InMemoryWeightLogRepository(WeightLogRepository):
    """In-memory weight log repository for tests."""

    logs: list[WeightLog] = field(default_factory=list)

    def create_weight_log(
        self, user_id: UUID, weight_kg: float, logged_at: datetime, source: str
    ) -> WeightLog:
        log = WeightLog(
            id=uuid4(),
            user_id=user_id,
            weight_kg=weight_kg,
            logged_at=logged_at,
            source=source,
        )
        self.logs.append(log)
        return log

    def list_recent_weight_logs(self, user_id: UUID, limit: int) -> list[WeightLog]:
        owned = [log for log in self.logs if log.user_id == user_id]
        owned.sort(key=lambda log: log.logged_at, reverse=True)
        return owned[:limit]


@dataclass
class InMemoryAdaptiveSignalRepository(AdaptiveSignalRepository):
    """In-memory signal store keyed by user id."""

    signals: dict[UUID, AdaptiveSignal] = field(default_factory=dict)

    def get_signal(self, user_id: UUID) -> AdaptiveSignal | None:
        return self.signals.get(user_id)

    def upsert_signal(self, signal: AdaptiveSignal) -> None:
        self.signals[signal.user_id] = signal


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    events: list[AuditEvent] = field(default_factory=list)

    def create_event(self, event: AuditEvent) -> None:
        self.events.append(event)


def make_meal_log(
    user_id: UUID,
    logged_at: datetime,
    calories: float = 500,
    protein: float = 40,
) -> MealLog:
    """Build a stored meal log with the given totals."""
    return MealLog(
        id=uuid4(),
        user_id=user_id,
        name="Meal",
        logged_at=logged_at,
        components=(),
        normalized_components=(),
        totals=MealTotals(
            macros=MacroVector(
                calories=calories, protein=protein, carbs=50, fats=15, fiber=5
            ),
            total_grams=400,
        ),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
    )


@pytest.fixture
def biometrics() -> Biometrics:
    return Biometrics(
        weight_kg=80,
        height_cm=180,
        age=30,
        gender=Gender.MALE,
        activity_level=ActivityLevel.MODERATE,
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def profile(profile_service: ProfileService, biometrics: Biometrics) -> UserProfile:
    return profile_service.sync_profile(
        TOKEN,
        name="Abebe",
        biometrics=biometrics,
        goal=Goal.BULK,
        experience_level=ExperienceLevel.INTERMEDIATE,
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def audit_repository() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def catalog_service(
    food_repository: InMemoryFoodRepository,
    audit_repository: InMemoryAuditRepository,
) -> FoodCatalogService:
    return FoodCatalogService(food_repository, AuditService(audit_repository))


@pytest.fixture
def meal_log_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def weight_log_repository() -> InMemoryWeightLogRepository:
    return InMemoryWeightLogRepository()


@pytest.fixture
def signal_repository() -> InMemoryAdaptiveSignalRepository:
    return InMemoryAdaptiveSignalRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    profile_service: ProfileService,
    catalog_service: FoodCatalogService,
    meal_log_repository: InMemoryMealLogRepository,
    weight_log_repository: InMemoryWeightLogRepository,
    signal_repository: InMemoryAdaptiveSignalRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        energy_service=EnergyService(
            profile_service, default_meals_per_day=settings.default_meals_per_day
        ),
        catalog_service=catalog_service,
        dish_service=DishService(profile_service, catalog_service),
        meal_log_service=MealLogService(
            profile_service=profile_service,
            catalog=catalog_service,
            repository=meal_log_repository,
        ),
        weight_log_service=WeightLogService(
            profile_service=profile_service,
            repository=weight_log_repository,
        ),
        progress_service=ProgressService(
            profile_service=profile_service,
            meal_logs=meal_log_repository,
            weight_logs=weight_log_repository,
            signals=signal_repository,
        ),
        dashboard_service=DashboardService(
            profile_service=profile_service,
            signals=signal_repository,
            meal_logs=meal_log_repository,
        ),
        audit_service=catalog_service.audit_service,
    )
