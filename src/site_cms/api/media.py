"""Media upload and rate limit test endpoints."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status

from site_cms.api.admin import require_admin
from site_cms.api.rate_limit import RateLimited

if TYPE_CHECKING:
    from site_cms.containers import AppContainer

router = APIRouter(prefix="/api", tags=["media"])


@router.post(
    "/upload",
    dependencies=[Depends(RateLimited("upload")), Depends(require_admin)],
)
async def upload_media(request: Request, filename: str) -> dict[str, object]:
    """Store the raw request body as a media file."""
    container: AppContainer = request.app.state.container
    content = await request.body()
    content_type = request.headers.get("content-type", "application/octet-stream")
    try:
        media = container.media_service.upload(filename, content, content_type)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"success": True, "media": media}


@router.get("/rate-limit-test", dependencies=[Depends(RateLimited("test"))])
async def rate_limit_test() -> dict[str, object]:
    """Cheap endpoint for checking rate limit behaviour."""
    return {
        "success": True,
        "message": "Rate limit test successful",
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }
