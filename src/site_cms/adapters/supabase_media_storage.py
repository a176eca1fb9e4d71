"""Supabase Storage adapter for uploaded media."""

from dataclasses import dataclass

from supabase import Client

from site_cms.services.media import MediaStorage


@dataclass
class SupabaseMediaStorage(MediaStorage):
    """Stores uploads in a Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload bytes and return the public URL."""
        storage = self.client.storage.from_(self.bucket)
        storage.upload(path, content, {"content-type": content_type})
        return storage.get_public_url(path)
