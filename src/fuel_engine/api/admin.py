"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Request, status

from fuel_engine.api.schemas import SeedRequest
from fuel_engine.domain.admin import AuthorizationContext
from fuel_engine.domain.catalog import STARTER_INGREDIENTS

if TYPE_CHECKING:
    from fuel_engine.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> AuthorizationContext:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return AuthorizationContext.admin()


@router.post("/ingredients/seed")
async def seed_ingredients(
    request: Request,
    payload: SeedRequest | None = Body(default=None),
    auth: AuthorizationContext = Depends(require_admin),
) -> dict[str, object]:
    """Import ingredients, skipping names already in the catalogue."""
    container: AppContainer = request.app.state.container
    if payload is not None and payload.ingredients is not None:
        seeds = [ingredient.to_domain() for ingredient in payload.ingredients]
    else:
        seeds = list(STARTER_INGREDIENTS)
    result = container.catalog_service.seed_ingredients(auth, seeds)
    return {
        "created": len(result.created),
        "skipped": result.skipped_names,
    }
