"""Supabase-backed CMS user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from site_cms.domain.auth import AdminUser
from site_cms.services.auth import UserRepository

_COLUMNS = "id, email, name, role, password_hash"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for admin user lookups."""

    client: Client

    def get_by_email(self, email: str) -> AdminUser | None:
        """Return the user for an email address, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_user(response.data[0])

    def count(self) -> int:
        response = self.client.table("users").select("id", count="exact").execute()
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def create_user(
        self, email: str, name: str, role: str, password_hash: str
    ) -> AdminUser:
        now = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("users")
            .insert(
                {
                    "email": email,
                    "name": name,
                    "role": role,
                    "password_hash": password_hash,
                    "created_at": now,
                    "updated_at": now,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _to_user(response.data[0])


def _to_user(row: dict[str, object]) -> AdminUser:
    return AdminUser(
        id=str(row["id"]),
        email=str(row["email"]),
        name=str(row.get("name") or ""),
        role=str(row.get("role") or "editor"),
        password_hash=str(row["password_hash"]),
    )
