"""Rate limiting for HTTP routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from site_cms.config import rate_limit_rules
from site_cms.domain.rate_limit import Allowed, Rejected

if TYPE_CHECKING:
    from site_cms.containers import AppContainer

# Clients without forwarding headers share one counter.
UNKNOWN_CLIENT = "unknown"


class RateLimitExceededError(Exception):
    """Raised by a route dependency when a request is over its quota."""

    def __init__(self, decision: Rejected) -> None:
        super().__init__("Too many requests")
        self.decision = decision


def client_identifier(request: Request) -> str:
    """Identify the caller by forwarded address headers."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return UNKNOWN_CLIENT


def rate_limit_headers(decision: Allowed | Rejected) -> dict[str, str]:
    if isinstance(decision, Rejected):
        return {
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": str(decision.retry_after_seconds),
            "Retry-After": str(decision.retry_after_seconds),
        }
    return {
        "X-RateLimit-Limit": str(decision.limit),
        "X-RateLimit-Remaining": str(decision.remaining),
        "X-RateLimit-Reset": str(decision.reset_seconds),
    }


class RateLimited:
    """Route dependency enforcing a named rate limit rule."""

    def __init__(self, rule: str) -> None:
        self.rule = rule

    async def __call__(self, request: Request, response: Response) -> None:
        container: AppContainer = request.app.state.container
        if not container.settings.enable_rate_limiting:
            return
        config = rate_limit_rules(container.settings)[self.rule]
        decision = container.rate_limiter.check_and_record(
            client_identifier(request), request.url.path, config
        )
        if isinstance(decision, Rejected):
            raise RateLimitExceededError(decision)
        response.headers.update(rate_limit_headers(decision))


async def rate_limit_exceeded_handler(
    _request: Request, exc: RateLimitExceededError
) -> JSONResponse:
    """Render a rejected request as HTTP 429."""
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": "Too many requests. Please try again later.",
            "retryAfter": exc.decision.retry_after_seconds,
        },
        headers=rate_limit_headers(exc.decision),
    )
