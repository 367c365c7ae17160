"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from nutrition_analysis.containers import AppContainer

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


@router.get("/cache/stats", dependencies=[Depends(require_admin)])
async def cache_stats(request: Request) -> dict[str, object]:
    """Return nutrition cache usage statistics."""
    container: AppContainer = request.app.state.container
    return container.nutrition_analysis_service.get_cache_stats().to_dict()


@router.post("/cache/clear", dependencies=[Depends(require_admin)])
async def clear_cache(request: Request) -> dict[str, str]:
    """Drop every cached nutrition estimate."""
    container: AppContainer = request.app.state.container
    container.nutrition_analysis_service.clear_cache()
    return {"status": "ok"}
