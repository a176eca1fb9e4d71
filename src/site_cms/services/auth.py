"""Admin authentication with bcrypt passwords and JWT sessions."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

import bcrypt
from jose import JWTError, jwt

from site_cms.domain.auth import AdminUser, SetupAlreadyCompletedError

_logger = logging.getLogger(__name__)

_ALGORITHM = "HS256"


class UserRepository(Protocol):
    """Persistence interface for CMS users."""

    def get_by_email(self, email: str) -> AdminUser | None:
        """Return the user registered under an email address."""

    def count(self) -> int:
        """Return how many users exist."""

    def create_user(
        self, email: str, name: str, role: str, password_hash: str
    ) -> AdminUser:
        """Store a new user and return it."""


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


@dataclass
class AuthService:
    """Verifies credentials and issues signed session tokens."""

    repository: UserRepository
    secret_key: str
    expire_minutes: int = 60 * 24 * 7

    def authenticate(self, email: str, password: str) -> AdminUser | None:
        """Return the user when the credentials match, otherwise None."""
        user = self.repository.get_by_email(email.strip().lower())
        if user is None:
            _logger.warning("Login attempt with unknown email: %s", email)
            return None
        if not bcrypt.checkpw(
            password.encode("utf-8"), user.password_hash.encode("utf-8")
        ):
            _logger.warning("Login attempt with invalid password: %s", email)
            return None
        _logger.info("User logged in: %s", user.email)
        return user

    def create_first_admin(self, email: str, password: str, name: str) -> AdminUser:
        """Create the initial admin account; only allowed while no users exist."""
        if self.repository.count() > 0:
            raise SetupAlreadyCompletedError("Admin user already exists")
        user = self.repository.create_user(
            email=email.strip().lower(),
            name=name,
            role="admin",
            password_hash=hash_password(password),
        )
        _logger.info("Admin user created: %s", user.email)
        return user

    def create_access_token(self, user: AdminUser) -> str:
        now = datetime.now(tz=UTC)
        payload = {
            "sub": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=_ALGORITHM)

    def verify_token(self, token: str) -> dict[str, object] | None:
        """Return the token claims, or None if the token is invalid or expired."""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[_ALGORITHM])
        except JWTError:
            return None
