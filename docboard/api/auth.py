"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from docboard.access import Identity
from docboard.api.dependencies import (
    get_auth_service,
    get_current_user,
    get_optional_user,
    get_settings_dep,
)
from docboard.config import Settings
from docboard.errors import Unauthenticated
from docboard.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from docboard.services.auth import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
        max_age=settings.session_max_age,
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    actor: Annotated[Identity | None, Depends(get_optional_user)],
):
    """Register a new user. Only an admin may register elevated roles."""
    return auth_service.register(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
        actor=actor,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
):
    """Login with email and password; the session token is set as a cookie."""
    user = auth_service.authenticate(credentials.email, credentials.password)
    if not user:
        raise Unauthenticated("Invalid credentials")

    set_auth_cookie(response, auth_service.issue_token(user), settings)
    return AuthResponse(user=UserResponse.model_validate(user))


@router.post("/logout")
def logout(
    response: Response,
    settings: Annotated[Settings, Depends(get_settings_dep)],
):
    """Logout by clearing the session cookie."""
    response.delete_cookie(
        settings.cookie_name,
        path="/",
        secure=settings.cookie_secure,
        httponly=True,
        samesite="lax",
    )
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=AuthResponse)
def get_me(
    current_user: Annotated[Identity, Depends(get_current_user)],
):
    """Get current user information."""
    return AuthResponse(user=UserResponse.model_validate(current_user))
