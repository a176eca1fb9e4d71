"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from site_cms.api.admin import router as admin_router
from site_cms.api.auth import router as auth_router
from site_cms.api.content import router as content_router
from site_cms.api.media import router as media_router
from site_cms.api.rate_limit import (
    RateLimitExceededError,
    rate_limit_exceeded_handler,
)
from site_cms.api.site_settings import router as site_settings_router
from site_cms.app_logging import configure_logging
from site_cms.containers import AppContainer
from site_cms.domain.content import ContentNotFoundError, UnknownCollectionError
from site_cms.services.rate_limit import RateLimiter


async def sweep_rate_limits(limiter: RateLimiter, interval_seconds: float) -> None:
    """Periodically drop expired rate limit windows."""
    while True:
        await asyncio.sleep(interval_seconds)
        limiter.sweep_expired()


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        limiter: RateLimiter = app.state.container.rate_limiter
        sweeper = asyncio.create_task(
            sweep_rate_limits(limiter, limiter.sweep_interval_ms / 1000)
        )
        yield
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_exception_handler(RateLimitExceededError, rate_limit_exceeded_handler)

    @app.exception_handler(ContentNotFoundError)
    async def content_not_found(
        _request: Request, exc: ContentNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": str(exc)},
        )

    @app.exception_handler(UnknownCollectionError)
    async def unknown_collection(
        _request: Request, exc: UnknownCollectionError
    ) -> JSONResponse:
        logger.info("Request for unknown collection: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": f"Unknown collection: {exc}"},
        )

    app.include_router(admin_router)
    app.include_router(auth_router)
    app.include_router(media_router)
    app.include_router(site_settings_router)
    app.include_router(content_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
