"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from site_cms.adapters.file_cache_backend import FileCacheBackend
from site_cms.adapters.supabase_content_repository import SupabaseContentRepository
from site_cms.adapters.supabase_media_storage import SupabaseMediaStorage
from site_cms.adapters.supabase_site_settings_repository import (
    SupabaseSiteSettingsRepository,
)
from site_cms.adapters.supabase_user_repository import SupabaseUserRepository
from site_cms.config import Settings, resolve_cache_dir
from site_cms.services.auth import AuthService
from site_cms.services.cache import CacheStore
from site_cms.services.content import ContentService
from site_cms.services.media import MediaService
from site_cms.services.rate_limit import RateLimiter
from site_cms.services.site_settings import SiteSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cache: CacheStore
    rate_limiter: RateLimiter
    content_service: ContentService
    auth_service: AuthService
    media_service: MediaService
    site_settings_service: SiteSettingsService


def content_ttls(settings: Settings) -> dict[str, int]:
    """Per-collection cache lifetimes in seconds."""
    return {
        "pages": settings.cache_ttl_pages,
        "projects": settings.cache_ttl_projects,
    }


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    cache = CacheStore(
        backend=FileCacheBackend(resolve_cache_dir(resolved_settings)),
        enabled=resolved_settings.enable_caching,
        default_ttl_seconds=resolved_settings.cache_ttl_default,
    )
    content_service = ContentService(
        repository=SupabaseContentRepository(supabase_client),
        cache=cache,
        ttl_seconds=content_ttls(resolved_settings),
    )
    auth_service = AuthService(
        repository=SupabaseUserRepository(supabase_client),
        secret_key=resolved_settings.jwt_secret_key,
        expire_minutes=resolved_settings.jwt_expire_minutes,
    )
    media_service = MediaService(
        SupabaseMediaStorage(supabase_client, resolved_settings.media_bucket)
    )
    site_settings_service = SiteSettingsService(
        repository=SupabaseSiteSettingsRepository(supabase_client),
        cache=cache,
        ttl_seconds=resolved_settings.cache_ttl_default,
    )

    return AppContainer(
        settings=resolved_settings,
        cache=cache,
        rate_limiter=RateLimiter(),
        content_service=content_service,
        auth_service=auth_service,
        media_service=media_service,
        site_settings_service=site_settings_service,
    )
