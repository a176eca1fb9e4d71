"""Application configuration."""

import os
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from site_cms.domain.rate_limit import RateLimitConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    jwt_secret_key: str
    jwt_expire_minutes: int = 60 * 24 * 7
    jwt_cookie_name: str = "auth-token"
    jwt_cookie_secure: bool = False
    media_bucket: str = "media"

    enable_caching: bool = True
    enable_rate_limiting: bool = True

    cache_dir: str | None = None
    cache_ttl_pages: int = 60
    cache_ttl_projects: int = 60
    cache_ttl_default: int = 60

    rate_limit_login_max: int = 5
    rate_limit_login_window: int = 15 * 60 * 1000
    rate_limit_upload_max: int = 20
    rate_limit_upload_window: int = 60 * 60 * 1000
    rate_limit_api_max: int = 100
    rate_limit_api_window: int = 60 * 1000
    rate_limit_test_max: int = 10
    rate_limit_test_window: int = 60 * 1000

    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("cache_ttl_default")
    @classmethod
    def _non_negative_ttl(cls, value: int) -> int:
        if value < 0:
            raise ValueError("cache_ttl_default must be a positive number")
        return value


def rate_limit_rules(settings: Settings) -> dict[str, RateLimitConfig]:
    """Return the named rate limit rules applied to routes."""
    return {
        "login": RateLimitConfig(
            interval_ms=settings.rate_limit_login_window,
            max_requests=settings.rate_limit_login_max,
        ),
        "upload": RateLimitConfig(
            interval_ms=settings.rate_limit_upload_window,
            max_requests=settings.rate_limit_upload_max,
        ),
        "api": RateLimitConfig(
            interval_ms=settings.rate_limit_api_window,
            max_requests=settings.rate_limit_api_max,
        ),
        "test": RateLimitConfig(
            interval_ms=settings.rate_limit_test_window,
            max_requests=settings.rate_limit_test_max,
        ),
    }


def resolve_cache_dir(settings: Settings) -> Path:
    """Pick the cache directory; serverless hosts only allow writes to /tmp."""
    if settings.cache_dir:
        return Path(settings.cache_dir)
    if os.getenv("VERCEL"):
        return Path("/tmp/.cache")  # noqa: S108
    return Path.cwd() / ".cache"
