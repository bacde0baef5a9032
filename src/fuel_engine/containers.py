"""Dependency container wiring for the application."""

from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from fuel_engine.adapters.supabase_adaptive_signal_repository import (
    SupabaseAdaptiveSignalRepository,
)
from fuel_engine.adapters.supabase_audit_repository import SupabaseAuditRepository
from fuel_engine.adapters.supabase_food_repository import SupabaseFoodRepository
from fuel_engine.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from fuel_engine.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from fuel_engine.adapters.supabase_weight_log_repository import (
    SupabaseWeightLogRepository,
)
from fuel_engine.config import Settings
from fuel_engine.services.audit import AuditService
from fuel_engine.services.dashboard import DashboardService
from fuel_engine.services.dishes import DishService
from fuel_engine.services.energy import EnergyService
from fuel_engine.services.foods import FoodCatalogService
from fuel_engine.services.meals import MealLogService
from fuel_engine.services.progress import ProgressService
from fuel_engine.services.users import ProfileService
from fuel_engine.services.weights import WeightLogService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    energy_service: EnergyService
    catalog_service: FoodCatalogService
    dish_service: DishService
    meal_log_service: MealLogService
    weight_log_service: WeightLogService
    progress_service: ProgressService
    dashboard_service: DashboardService
    audit_service: AuditService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    food_repository = SupabaseFoodRepository(supabase_client)
    meal_log_repository = SupabaseMealLogRepository(supabase_client)
    weight_log_repository = SupabaseWeightLogRepository(supabase_client)
    signal_repository = SupabaseAdaptiveSignalRepository(supabase_client)
    audit_repository = SupabaseAuditRepository(supabase_client)

    profile_service = ProfileService(profile_repository)
    audit_service = AuditService(audit_repository)
    catalog_service = FoodCatalogService(food_repository, audit_service)
    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        energy_service=EnergyService(
            profile_service,
            default_meals_per_day=resolved_settings.default_meals_per_day,
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
            dedup_window=timedelta(hours=resolved_settings.weight_dedup_window_hours),
            dedup_min_delta_kg=resolved_settings.weight_dedup_min_delta_kg,
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
        audit_service=audit_service,
    )
