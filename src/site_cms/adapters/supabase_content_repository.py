"""Supabase-backed content repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from site_cms.domain.content import ContentCollection
from site_cms.services.content import ContentRepository, Document


@dataclass
class SupabaseContentRepository(ContentRepository):
    """Supabase implementation for CMS collections, one table per collection."""

    client: Client

    def list_documents(
        self, collection: ContentCollection, statuses: tuple[str, ...] | None
    ) -> list[Document]:
        """Return documents in display order, optionally filtered by status."""
        query = self.client.table(collection.name).select("*")
        if statuses is not None:
            query = query.in_("status", list(statuses))
        response = query.order(
            collection.order_by, desc=collection.order_desc
        ).execute()
        return response.data or []

    def get_document(
        self, collection: ContentCollection, document_id: str
    ) -> Document | None:
        response = (
            self.client.table(collection.name)
            .select("*")
            .eq("id", document_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None

    def get_by_slug(
        self,
        collection: ContentCollection,
        slug: str,
        statuses: tuple[str, ...] | None = None,
    ) -> Document | None:
        query = self.client.table(collection.name).select("*").eq("slug", slug)
        if statuses is not None:
            query = query.in_("status", list(statuses))
        response = query.limit(1).execute()
        return response.data[0] if response.data else None

    def create_document(
        self, collection: ContentCollection, data: Document
    ) -> Document:
        """Insert a document stamped with creation times."""
        now = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table(collection.name)
            .insert({**data, "created_at": now, "updated_at": now})
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to create {collection.item_prefix} in Supabase")
        return response.data[0]

    def update_document(
        self, collection: ContentCollection, document_id: str, data: Document
    ) -> Document | None:
        payload = {key: value for key, value in data.items() if key != "id"}
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table(collection.name)
            .update(payload)
            .eq("id", document_id)
            .execute()
        )
        return response.data[0] if response.data else None

    def delete_document(self, collection: ContentCollection, document_id: str) -> bool:
        response = (
            self.client.table(collection.name).delete().eq("id", document_id).execute()
        )
        return bool(response.data)
