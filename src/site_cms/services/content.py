"""Cached access to CMS content collections."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from site_cms.domain.content import (
    ContentCollection,
    ContentNotFoundError,
    get_collection,
)
from site_cms.services.cache import CacheStore

_logger = logging.getLogger(__name__)

Document = dict[str, object]


class ContentRepository(Protocol):
    """Persistence interface for content documents."""

    def list_documents(
        self, collection: ContentCollection, statuses: tuple[str, ...] | None
    ) -> list[Document]:
        """Return documents, optionally filtered by status."""

    def get_document(
        self, collection: ContentCollection, document_id: str
    ) -> Document | None:
        """Return a document by id."""

    def get_by_slug(
        self,
        collection: ContentCollection,
        slug: str,
        statuses: tuple[str, ...] | None = None,
    ) -> Document | None:
        """Return a document by slug, optionally restricted to some statuses."""

    def create_document(
        self, collection: ContentCollection, data: Document
    ) -> Document:
        """Insert a document and return the stored row."""

    def update_document(
        self, collection: ContentCollection, document_id: str, data: Document
    ) -> Document | None:
        """Update a document and return the stored row, if it exists."""

    def delete_document(self, collection: ContentCollection, document_id: str) -> bool:
        """Delete a document; return False when nothing was deleted."""


@dataclass
class ContentService:
    """Reads content through the cache and invalidates it on writes."""

    repository: ContentRepository
    cache: CacheStore
    ttl_seconds: dict[str, int] = field(default_factory=dict)

    async def list_items(
        self, collection_name: str, include_all: bool = False
    ) -> list[Document]:
        """Return a collection listing, public statuses only unless `include_all`."""
        collection = get_collection(collection_name)

        async def load() -> list[Document]:
            return self.repository.list_documents(
                collection, collection.statuses(include_all)
            )

        return await self.cache.with_cache(
            collection.list_key(include_all), load, self._ttl(collection)
        )

    async def get(self, collection_name: str, document_id: str) -> Document:
        collection = get_collection(collection_name)

        async def load() -> Document:
            document = self.repository.get_document(collection, document_id)
            if document is None:
                raise ContentNotFoundError(collection.name, document_id)
            return document

        return await self.cache.with_cache(
            collection.item_key(document_id), load, self._ttl(collection)
        )

    async def get_by_slug(
        self, collection_name: str, slug: str, include_all: bool = False
    ) -> Document:
        """Look up a document by slug; unpublished ones need `include_all`."""
        collection = get_collection(collection_name)

        async def load() -> Document:
            document = self.repository.get_by_slug(
                collection, slug, collection.statuses(include_all)
            )
            if document is None:
                raise ContentNotFoundError(collection.name, slug)
            return document

        return await self.cache.with_cache(
            collection.slug_key(slug, include_all), load, self._ttl(collection)
        )

    async def navbar_pages(self) -> list[Document]:
        """Published pages flagged for the navigation bar, in navbar order."""
        collection = get_collection("pages")

        async def load() -> list[Document]:
            pages = [
                page
                for page in self.repository.list_documents(
                    collection, collection.public_statuses
                )
                if page.get("show_in_navbar")
            ]
            pages.sort(
                key=lambda page: (
                    page.get("navbar_order") or 0,
                    str(page.get("created_at") or ""),
                )
            )
            return [
                {
                    "title": page.get("title"),
                    "slug": page.get("slug"),
                    "openInNewTab": bool(page.get("open_in_new_tab")),
                    "navbarOrder": page.get("navbar_order") or 0,
                }
                for page in pages
            ]

        return await self.cache.with_cache(
            f"{collection.name}:navbar", load, self._ttl(collection)
        )

    def create(self, collection_name: str, data: Document) -> Document:
        collection = get_collection(collection_name)
        document = self.repository.create_document(collection, data)
        self.invalidate(collection)
        return document

    def update(
        self, collection_name: str, document_id: str, data: Document
    ) -> Document:
        collection = get_collection(collection_name)
        document = self.repository.update_document(collection, document_id, data)
        if document is None:
            raise ContentNotFoundError(collection.name, document_id)
        self.invalidate(collection, document_id)
        return document

    def delete(self, collection_name: str, document_id: str) -> None:
        collection = get_collection(collection_name)
        if not self.repository.delete_document(collection, document_id):
            raise ContentNotFoundError(collection.name, document_id)
        self.invalidate(collection, document_id)

    def reorder(self, collection_name: str, document_ids: list[str]) -> None:
        """Persist the display order given by the position of each id.

        Raises ContentNotFoundError naming every id that matched no document;
        the known ids are still reordered.
        """
        collection = get_collection(collection_name)
        missing = []
        for position, document_id in enumerate(document_ids):
            updated = self.repository.update_document(
                collection, document_id, {"order": position}
            )
            if updated is None:
                missing.append(document_id)
        self.invalidate(collection)
        if missing:
            raise ContentNotFoundError(collection.name, ", ".join(missing))

    def invalidate(
        self, collection: ContentCollection, document_id: str | None = None
    ) -> None:
        """Drop cached listings, slug lookups and the item itself."""
        self.cache.delete_pattern(collection.name)
        self.cache.delete_pattern(f"{collection.item_prefix}:slug:")
        if document_id is not None:
            self.cache.delete(collection.item_key(document_id))
        _logger.info("Invalidated cache for %s", collection.name)

    def _ttl(self, collection: ContentCollection) -> int | None:
        return self.ttl_seconds.get(collection.name)
