"""Login and session endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel

from site_cms.api.rate_limit import RateLimited
from site_cms.domain.auth import SetupAlreadyCompletedError

if TYPE_CHECKING:
    from site_cms.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class SetupRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    name: str | None = None


@router.post("/setup")
async def setup(body: SetupRequest, request: Request) -> dict[str, object]:
    """Create the first admin account on a fresh install."""
    container: AppContainer = request.app.state.container
    if container.auth_service.repository.count() > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admin user already exists",
        )
    if not body.email or not body.password or not body.name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email, password, and name are required",
        )
    try:
        user = container.auth_service.create_first_admin(
            body.email, body.password, body.name
        )
    except SetupAlreadyCompletedError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {
        "success": True,
        "message": "Admin user created successfully",
        "userId": user.id,
    }


@router.post("/login", dependencies=[Depends(RateLimited("login"))])
async def login(
    body: LoginRequest, request: Request, response: Response
) -> dict[str, object]:
    """Verify credentials and set the session cookie."""
    if not body.email or not body.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required",
        )
    container: AppContainer = request.app.state.container
    user = container.auth_service.authenticate(body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )

    settings = container.settings
    response.set_cookie(
        key=settings.jwt_cookie_name,
        value=container.auth_service.create_access_token(user),
        httponly=True,
        secure=settings.jwt_cookie_secure,
        samesite="lax",
        max_age=settings.jwt_expire_minutes * 60,
    )
    return {"success": True, "message": "Login successful", "user": user.public_view()}


@router.get("/me")
async def current_user(request: Request) -> dict[str, object]:
    """Return the claims of the signed-in user."""
    container: AppContainer = request.app.state.container
    token = request.cookies.get(container.settings.jwt_cookie_name)
    claims = container.auth_service.verify_token(token) if token else None
    if claims is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return {
        "success": True,
        "user": {
            "id": claims.get("sub"),
            "email": claims.get("email"),
            "name": claims.get("name"),
            "role": claims.get("role"),
        },
    }


@router.post("/logout")
async def logout(request: Request, response: Response) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    response.delete_cookie(key=container.settings.jwt_cookie_name)
    return {"success": True, "message": "Logged out"}
