"""Homepage settings service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from site_cms.domain.site_settings import (
    DEFAULT_FEATURED_PROJECTS_LIMIT,
    DEFAULT_HERO,
    HOMEPAGE_SETTINGS_KEY,
    default_homepage_settings,
    merge_with_defaults,
)
from site_cms.services.cache import CacheStore

_logger = logging.getLogger(__name__)

_CACHE_PREFIX = "settings"


class SiteSettingsRepository(Protocol):
    """Persistence interface for site settings documents."""

    def get_settings(self, key: str) -> dict[str, object] | None:
        """Return the stored settings document, if any."""

    def save_settings(self, key: str, data: dict[str, object]) -> None:
        """Insert or replace the settings document."""


@dataclass
class SiteSettingsService:
    """Reads homepage settings through the cache, with built-in defaults."""

    repository: SiteSettingsRepository
    cache: CacheStore
    ttl_seconds: int | None = None

    async def get_homepage(self) -> dict[str, object]:
        """Return stored homepage settings, or the defaults when none are saved."""

        async def load() -> dict[str, object]:
            stored = self.repository.get_settings(HOMEPAGE_SETTINGS_KEY)
            return stored if stored is not None else default_homepage_settings()

        return await self.cache.with_cache(
            f"{_CACHE_PREFIX}:{HOMEPAGE_SETTINGS_KEY}", load, self.ttl_seconds
        )

    def update_homepage(self, data: dict[str, object]) -> dict[str, object]:
        """Save new homepage settings; a missing hero keeps the current one."""
        current = (
            self.repository.get_settings(HOMEPAGE_SETTINGS_KEY)
            or default_homepage_settings()
        )
        hero = data.get("hero")
        updated = {
            "featuredProjectsLimit": data.get("featuredProjectsLimit")
            or DEFAULT_FEATURED_PROJECTS_LIMIT,
            "hero": merge_with_defaults(hero, DEFAULT_HERO)
            if isinstance(hero, dict)
            else current.get("hero"),
        }
        self.repository.save_settings(HOMEPAGE_SETTINGS_KEY, updated)
        self.cache.delete_pattern(_CACHE_PREFIX)
        _logger.info("Homepage settings updated")
        return updated
