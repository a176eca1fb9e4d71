"""Homepage settings endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Body, Depends, Request

from site_cms.api.admin import require_admin
from site_cms.api.rate_limit import RateLimited

if TYPE_CHECKING:
    from site_cms.containers import AppContainer

router = APIRouter(
    prefix="/api/settings",
    tags=["settings"],
    dependencies=[Depends(RateLimited("api"))],
)


@router.get("")
async def get_settings(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    settings = await container.site_settings_service.get_homepage()
    return {"success": True, "settings": settings}


@router.put("", dependencies=[Depends(require_admin)])
async def update_settings(
    request: Request, payload: dict[str, object] = Body(...)
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    container.site_settings_service.update_homepage(payload)
    return {"success": True, "message": "Settings updated successfully"}
