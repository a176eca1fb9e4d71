"""Authentication domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AdminUser:
    """A CMS user allowed to sign in to the admin panel."""

    id: str
    email: str
    name: str
    role: str
    password_hash: str

    def public_view(self) -> dict[str, str]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
        }


class SetupAlreadyCompletedError(RuntimeError):
    """Raised when the first admin account is requested but users already exist."""
