"""Supabase repository for site settings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from site_cms.services.site_settings import SiteSettingsRepository


@dataclass
class SupabaseSiteSettingsRepository(SiteSettingsRepository):
    """Stores each settings document as JSON in the `settings` table."""

    client: Client

    def get_settings(self, key: str) -> dict[str, object] | None:
        response = (
            self.client.table("settings")
            .select("data")
            .eq("id", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("data")

    def save_settings(self, key: str, data: dict[str, object]) -> None:
        self.client.table("settings").upsert(
            {
                "id": key,
                "data": data,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
