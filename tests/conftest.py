"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import uuid4

import bcrypt
import pytest

from site_cms.config import Settings
from site_cms.containers import AppContainer, content_ttls
from site_cms.domain.auth import AdminUser
from site_cms.domain.content import ContentCollection
from site_cms.services.auth import AuthService, UserRepository
from site_cms.services.cache import CacheStore, InMemoryCacheBackend
from site_cms.services.content import ContentRepository, ContentService, Document
from site_cms.services.media import MediaService, MediaStorage
from site_cms.services.rate_limit import RateLimiter
from site_cms.services.site_settings import SiteSettingsRepository, SiteSettingsService

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct horse battery staple"


@dataclass
class ManualClock:
    """Wall clock that only moves when told to."""

    now: datetime = field(
        default_factory=lambda: datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@dataclass
class ManualMillisClock:
    """Epoch-millisecond clock for the rate limiter."""

    now_ms: int = 1_700_000_000_000

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, millis: int) -> None:
        self.now_ms += millis


@dataclass
class InMemoryContentRepository(ContentRepository):
    """In-memory content repository for tests."""

    documents: dict[str, list[Document]] = field(default_factory=dict)
    list_calls: int = 0
    get_calls: int = 0

    def add(self, collection: str, **data: object) -> Document:
        document: Document = {"id": str(uuid4()), "order": 0, **data}
        self.documents.setdefault(collection, []).append(document)
        return document

    def list_documents(
        self, collection: ContentCollection, statuses: tuple[str, ...] | None
    ) -> list[Document]:
        self.list_calls += 1
        rows = self.documents.get(collection.name, [])
        if statuses is not None:
            rows = [row for row in rows if row.get("status") in statuses]
        return sorted(rows, key=lambda row: row.get("order", 0))

    def get_document(
        self, collection: ContentCollection, document_id: str
    ) -> Document | None:
        self.get_calls += 1
        for row in self.documents.get(collection.name, []):
            if row["id"] == document_id:
                return row
        return None

    def get_by_slug(
        self,
        collection: ContentCollection,
        slug: str,
        statuses: tuple[str, ...] | None = None,
    ) -> Document | None:
        self.get_calls += 1
        for row in self.documents.get(collection.name, []):
            if row.get("slug") != slug:
                continue
            if statuses is None or row.get("status") in statuses:
                return row
        return None

    def create_document(
        self, collection: ContentCollection, data: Document
    ) -> Document:
        return self.add(collection.name, **data)

    def update_document(
        self, collection: ContentCollection, document_id: str, data: Document
    ) -> Document | None:
        for row in self.documents.get(collection.name, []):
            if row["id"] == document_id:
                row.update(data)
                return row
        return None

    def delete_document(self, collection: ContentCollection, document_id: str) -> bool:
        rows = self.documents.get(collection.name, [])
        kept = [row for row in rows if row["id"] != document_id]
        self.documents[collection.name] = kept
        return len(kept) != len(rows)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, AdminUser] = field(default_factory=dict)

    def get_by_email(self, email: str) -> AdminUser | None:
        return self.users.get(email)

    def count(self) -> int:
        return len(self.users)

    def create_user(
        self, email: str, name: str, role: str, password_hash: str
    ) -> AdminUser:
        user = AdminUser(
            id=str(uuid4()),
            email=email,
            name=name,
            role=role,
            password_hash=password_hash,
        )
        self.users[email] = user
        return user


@dataclass
class InMemorySiteSettingsRepository(SiteSettingsRepository):
    """In-memory site settings repository for tests."""

    documents: dict[str, dict[str, object]] = field(default_factory=dict)
    get_calls: int = 0

    def get_settings(self, key: str) -> dict[str, object] | None:
        self.get_calls += 1
        return self.documents.get(key)

    def save_settings(self, key: str, data: dict[str, object]) -> None:
        self.documents[key] = data


@dataclass
class FakeMediaStorage(MediaStorage):
    """Records uploads instead of storing them."""

    uploads: dict[str, bytes] = field(default_factory=dict)

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        self.uploads[path] = content
        return f"https://cdn.example.com/media/{path}"


def make_admin_user(
    email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD
) -> AdminUser:
    return AdminUser(
        id=str(uuid4()),
        email=email,
        name="Site Admin",
        role="admin",
        password_hash=bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds=4)
        ).decode("utf-8"),
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
        jwt_secret_key="test-secret-key-with-at-least-32-characters",
        cache_dir=str(tmp_path / "cache"),
    )


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def millis_clock() -> ManualMillisClock:
    return ManualMillisClock()


@pytest.fixture
def cache(clock: ManualClock) -> CacheStore:
    return CacheStore(backend=InMemoryCacheBackend(), clock=clock)


@pytest.fixture
def content_repository() -> InMemoryContentRepository:
    return InMemoryContentRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    repository = InMemoryUserRepository()
    user = make_admin_user()
    repository.users[user.email] = user
    return repository


@pytest.fixture
def media_storage() -> FakeMediaStorage:
    return FakeMediaStorage()


@pytest.fixture
def site_settings_repository() -> InMemorySiteSettingsRepository:
    return InMemorySiteSettingsRepository()


@pytest.fixture
def container(
    settings: Settings,
    cache: CacheStore,
    millis_clock: ManualMillisClock,
    content_repository: InMemoryContentRepository,
    user_repository: InMemoryUserRepository,
    media_storage: FakeMediaStorage,
    site_settings_repository: InMemorySiteSettingsRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        cache=cache,
        rate_limiter=RateLimiter(clock=millis_clock),
        content_service=ContentService(
            repository=content_repository,
            cache=cache,
            ttl_seconds=content_ttls(settings),
        ),
        auth_service=AuthService(
            repository=user_repository,
            secret_key=settings.jwt_secret_key,
            expire_minutes=settings.jwt_expire_minutes,
        ),
        media_service=MediaService(media_storage),
        site_settings_service=SiteSettingsService(
            repository=site_settings_repository, cache=cache
        ),
    )
