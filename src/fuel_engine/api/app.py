"""FastAPI application factory."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from fuel_engine.api.admin import router as admin_router
from fuel_engine.api.schemas import (
    DishCreateRequest,
    MealComponentPayload,
    MealLogRequest,
    ProfileSyncRequest,
    WeightLogRequest,
)
from fuel_engine.app_logging import configure_logging
from fuel_engine.containers import AppContainer
from fuel_engine.domain.foods import Ingredient
from fuel_engine.errors import (
    AuthorizationError,
    InvalidWeightError,
    MissingBiometricsError,
    ProfileNotFoundError,
)

_ERROR_STATUS: dict[type[Exception], int] = {
    ProfileNotFoundError: status.HTTP_404_NOT_FOUND,
    MissingBiometricsError: 422,
    InvalidWeightError: 422,
    AuthorizationError: status.HTTP_401_UNAUTHORIZED,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    app.include_router(admin_router)

    async def handle_service_error(request: Request, exc: Exception) -> JSONResponse:
        status_code = _ERROR_STATUS[type(exc)]
        logger.info(
            "Request failed: path=%s error=%s", request.url.path, type(exc).__name__
        )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    for error_type in _ERROR_STATUS:
        app.add_exception_handler(error_type, handle_service_error)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.put("/users/{token}/profile")
    async def sync_profile(
        token: str, payload: ProfileSyncRequest, request: Request
    ) -> dict[str, object]:
        """Create or update the user's profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.sync_profile(
            token,
            name=payload.name,
            biometrics=payload.biometrics.to_domain() if payload.biometrics else None,
            goal=payload.goal,
            experience_level=payload.experience_level,
            meals_per_day=payload.meals_per_day,
            timezone=payload.timezone,
        )
        return {"profile": profile}

    @app.get("/users/{token}/targets")
    async def targets(
        token: str, request: Request, meals_per_day: int | None = None
    ) -> dict[str, object]:
        """Return energy estimate plus daily and per-meal targets."""
        state_container: AppContainer = request.app.state.container
        result = state_container.energy_service.get_targets(token, meals_per_day)
        return {"targets": result}

    @app.post("/users/{token}/meals")
    async def log_meal(
        token: str, payload: MealLogRequest, request: Request
    ) -> dict[str, object]:
        """Resolve and store a meal log."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.meal_log_service.log_meal(
            token,
            name=payload.name,
            logged_at=payload.logged_at or datetime.now(tz=UTC),
            components=[component.to_domain() for component in payload.components],
            goal_context=payload.goal_context,
        )
        return {"meal": summary}

    @app.post("/meals/preview")
    async def preview_meal(
        components: list[MealComponentPayload], request: Request
    ) -> dict[str, object]:
        """Compute meal totals without storing anything."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.meal_log_service.compute_summary(
            [component.to_domain() for component in components]
        )
        return {"meal": summary}

    @app.get("/users/{token}/meals")
    async def list_meals(
        token: str, request: Request, limit: int = 20
    ) -> dict[str, object]:
        """Return the user's recent meals."""
        state_container: AppContainer = request.app.state.container
        return {"meals": state_container.meal_log_service.list_meals(token, limit)}

    @app.post("/users/{token}/weights")
    async def log_weight(
        token: str, payload: WeightLogRequest, request: Request
    ) -> dict[str, object]:
        """Record a bodyweight entry unless it repeats the last one."""
        state_container: AppContainer = request.app.state.container
        result = state_container.weight_log_service.record_weight(
            token,
            payload.weight_kg,
            payload.logged_at or datetime.now(tz=UTC),
            source=payload.source,
        )
        return {"recorded": result.recorded, "log": result.log}

    @app.post("/users/{token}/signal/recompute")
    async def recompute_signal(token: str, request: Request) -> dict[str, object]:
        """Rebuild the user's adaptive signal."""
        state_container: AppContainer = request.app.state.container
        signal = state_container.progress_service.recompute(
            token, datetime.now(tz=UTC)
        )
        return {"signal": signal}

    @app.get("/users/{token}/signal")
    async def get_signal(token: str, request: Request) -> dict[str, object]:
        """Return the stored adaptive signal, if any."""
        state_container: AppContainer = request.app.state.container
        return {"signal": state_container.progress_service.get_signal(token)}

    @app.get("/users/{token}/dashboard")
    async def dashboard(token: str, request: Request) -> dict[str, object]:
        """Return the dashboard snapshot."""
        state_container: AppContainer = request.app.state.container
        snapshot = state_container.dashboard_service.get_snapshot(
            token, datetime.now(tz=UTC)
        )
        if snapshot is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"dashboard": snapshot}

    @app.post("/users/{token}/dishes")
    async def create_dish(
        token: str, payload: DishCreateRequest, request: Request
    ) -> dict[str, object]:
        """Author a dish and cache its nutrition."""
        state_container: AppContainer = request.app.state.container
        dish = state_container.dish_service.create_dish(
            token,
            name=payload.name,
            components=payload.domain_components(),
            default_serving_grams=payload.default_serving_grams,
            description=payload.description,
            common_measures=payload.domain_measures(),
            is_public=payload.is_public,
        )
        return {"dish": dish}

    @app.get("/ingredients/{ingredient_id}")
    async def get_ingredient(
        ingredient_id: UUID, request: Request
    ) -> dict[str, object]:
        """Return an ingredient with its per-100 g display values."""
        state_container: AppContainer = request.app.state.container
        catalog = state_container.catalog_service
        ingredient = catalog.get_item(ingredient_id, "ingredient")
        if not isinstance(ingredient, Ingredient):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {
            "ingredient": ingredient,
            "per_100g": catalog.ingredient_per_100g(ingredient),
        }

    return app
