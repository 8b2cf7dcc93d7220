"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from recipe_swiper.services.dietary import restriction_categories

if TYPE_CHECKING:
    from recipe_swiper.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/catalog", dependencies=[Depends(require_admin)])
async def catalog_summary(request: Request) -> dict[str, object]:
    """Return recipe counts for the current catalog."""
    container: AppContainer = request.app.state.container
    catalog = container.catalog_service.current()
    return {"recipes": len(catalog), "by_meal_type": catalog.count_by_meal_type()}


@router.post("/catalog/refresh", dependencies=[Depends(require_admin)])
async def refresh_catalog(request: Request) -> dict[str, object]:
    """Reload the catalog and dietary tags from the stores."""
    container: AppContainer = request.app.state.container
    container.load_reference_data()
    return {"recipes": len(container.catalog_service.current())}


@router.get("/dietary-restrictions", dependencies=[Depends(require_admin)])
async def dietary_restrictions() -> dict[str, object]:
    """Return the supported dietary restriction names."""
    return restriction_categories()


@router.get("/sessions", dependencies=[Depends(require_admin)])
async def session_summary(request: Request) -> dict[str, int]:
    """Return the number of live swiping sessions."""
    container: AppContainer = request.app.state.container
    return {"active": container.session_service.active_sessions()}
