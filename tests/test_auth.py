"""Tests for login and session handling."""

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from site_cms.api.app import create_app
from site_cms.containers import AppContainer
from site_cms.domain.auth import SetupAlreadyCompletedError
from site_cms.services.auth import AuthService, hash_password
from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, InMemoryUserRepository


def test_authenticate_accepts_valid_credentials(
    user_repository: InMemoryUserRepository,
) -> None:
    service = AuthService(user_repository, secret_key="secret")

    user = service.authenticate(" Admin@Example.com ", ADMIN_PASSWORD)

    assert user is not None
    assert user.email == ADMIN_EMAIL


def test_authenticate_rejects_bad_password_and_unknown_user(
    user_repository: InMemoryUserRepository,
) -> None:
    service = AuthService(user_repository, secret_key="secret")

    assert service.authenticate(ADMIN_EMAIL, "wrong") is None
    assert service.authenticate("nobody@example.com", ADMIN_PASSWORD) is None


def test_token_roundtrip_and_tampering(
    user_repository: InMemoryUserRepository,
) -> None:
    service = AuthService(user_repository, secret_key="secret")
    user = user_repository.users[ADMIN_EMAIL]

    token = service.create_access_token(user)

    claims = service.verify_token(token)
    assert claims is not None
    assert claims["sub"] == user.id
    assert AuthService(user_repository, secret_key="other").verify_token(token) is None
    assert service.verify_token("not-a-token") is None


def test_expired_token_is_rejected(user_repository: InMemoryUserRepository) -> None:
    service = AuthService(user_repository, secret_key="secret", expire_minutes=-1)

    token = service.create_access_token(user_repository.users[ADMIN_EMAIL])

    assert service.verify_token(token) is None


def test_hash_password_produces_bcrypt_hash() -> None:
    hashed = hash_password("s3cret")

    assert hashed.startswith("$2")
    assert hashed != "s3cret"


def test_login_sets_cookie_and_unlocks_admin(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )

    assert response.status_code == 200
    assert response.json()["user"]["email"] == ADMIN_EMAIL
    assert "password_hash" not in response.json()["user"]
    assert "auth-token" in response.cookies
    assert response.headers["X-RateLimit-Remaining"] == "4"

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["role"] == "admin"
    assert client.get("/admin/health").status_code == 200


def test_login_requires_both_fields(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/auth/login", json={"email": ADMIN_EMAIL})

    assert response.status_code == 400


def test_login_rejects_bad_credentials(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": "wrong"}
    )

    assert response.status_code == 401
    assert "auth-token" not in response.cookies


def test_me_without_cookie_is_unauthorized(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    assert client.get("/api/auth/me").status_code == 401


def test_logout_clears_cookie(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )

    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert client.get("/api/auth/me").status_code == 401


@pytest.fixture
def fresh_container(container: AppContainer) -> AppContainer:
    auth_service = replace(container.auth_service, repository=InMemoryUserRepository())
    return replace(container, auth_service=auth_service)


def test_create_first_admin_hashes_password() -> None:
    repository = InMemoryUserRepository()
    service = AuthService(repository, secret_key="secret")

    user = service.create_first_admin(" Owner@Example.com ", "s3cret", "Owner")

    assert user.email == "owner@example.com"
    assert user.role == "admin"
    assert user.password_hash != "s3cret"
    assert service.authenticate("owner@example.com", "s3cret") == user


def test_create_first_admin_refuses_when_users_exist(
    user_repository: InMemoryUserRepository,
) -> None:
    service = AuthService(user_repository, secret_key="secret")

    with pytest.raises(SetupAlreadyCompletedError):
        service.create_first_admin("second@example.com", "s3cret", "Second")
    assert user_repository.count() == 1


def test_setup_endpoint_creates_admin_then_allows_login(
    fresh_container: AppContainer,
) -> None:
    client = TestClient(create_app(fresh_container))

    response = client.post(
        "/api/auth/setup",
        json={"email": "owner@example.com", "password": "s3cret", "name": "Owner"},
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["userId"]
    login = client.post(
        "/api/auth/login", json={"email": "owner@example.com", "password": "s3cret"}
    )
    assert login.status_code == 200
    assert login.json()["user"]["role"] == "admin"


def test_setup_requires_all_fields(fresh_container: AppContainer) -> None:
    client = TestClient(create_app(fresh_container))

    response = client.post(
        "/api/auth/setup", json={"email": "owner@example.com", "password": "s3cret"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Email, password, and name are required"


def test_setup_is_closed_once_a_user_exists(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/auth/setup",
        json={"email": "other@example.com", "password": "s3cret", "name": "Other"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Admin user already exists"
