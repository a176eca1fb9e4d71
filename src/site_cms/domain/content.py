"""Content collection definitions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContentCollection:
    """A CMS collection and the rules for exposing it publicly."""

    name: str
    item_prefix: str
    order_by: str = "order"
    order_desc: bool = False
    public_statuses: tuple[str, ...] | None = None
    admin_statuses: tuple[str, ...] | None = None
    public: bool = True

    def statuses(self, include_all: bool) -> tuple[str, ...] | None:
        """Return the status filter for a listing, or None for no filter."""
        if include_all:
            return self.admin_statuses
        return self.public_statuses

    def list_key(self, include_all: bool) -> str:
        return f"{self.name}:{'all' if include_all else 'published'}"

    def item_key(self, document_id: str) -> str:
        return f"{self.item_prefix}:{document_id}"

    def slug_key(self, slug: str, include_all: bool = False) -> str:
        visibility = "all" if include_all else "published"
        return f"{self.item_prefix}:slug:{slug}:{visibility}"


COLLECTIONS: dict[str, ContentCollection] = {
    "pages": ContentCollection(
        name="pages",
        item_prefix="page",
        order_by="updated_at",
        order_desc=True,
        public_statuses=("published",),
        admin_statuses=("draft", "published"),
    ),
    "projects": ContentCollection(
        name="projects",
        item_prefix="project",
        order_by="created_at",
        order_desc=True,
        public_statuses=("in-progress", "completed"),
        admin_statuses=("planning", "in-progress", "completed"),
    ),
    "services": ContentCollection(
        name="services",
        item_prefix="service",
        public_statuses=("active",),
        admin_statuses=("active", "inactive"),
    ),
    "team": ContentCollection(name="team", item_prefix="team"),
    "customers": ContentCollection(
        name="customers", item_prefix="customer", public=False
    ),
}


class ContentNotFoundError(LookupError):
    """Raised when a content document does not exist."""

    def __init__(self, collection: str, key: str) -> None:
        super().__init__(f"{collection} document not found: {key}")
        self.collection = collection
        self.key = key


class UnknownCollectionError(ValueError):
    """Raised when a collection name is not configured."""


def get_collection(name: str) -> ContentCollection:
    """Return the collection definition for a name."""
    collection = COLLECTIONS.get(name)
    if collection is None:
        raise UnknownCollectionError(name)
    return collection
