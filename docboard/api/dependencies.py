"""FastAPI dependencies for authentication and services."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from docboard.access import Identity, authorize
from docboard.config import Settings
from docboard.database import get_db
from docboard.errors import Forbidden, Unauthenticated
from docboard.models.enums import Role
from docboard.security import PasswordHasher, TokenCodec
from docboard.services.auth import AuthService
from docboard.services.documents import DocumentService

bearer = HTTPBearer(auto_error=False)


def get_settings_dep(request: Request) -> Settings:
    """Get the settings the running app was built with."""
    return request.app.state.settings


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(db, hasher, codec)


def get_document_service(
    db: Annotated[Session, Depends(get_db)],
) -> DocumentService:
    """Get document service with dependencies."""
    return DocumentService(db)


def get_session_token(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings_dep)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> str | None:
    """Extract the session token from the cookie, falling back to a Bearer header."""
    token = request.cookies.get(settings.cookie_name)
    if not token and credentials is not None:
        token = credentials.credentials
    return token or None


def get_optional_user(
    token: Annotated[str | None, Depends(get_session_token)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> Identity | None:
    """Resolve the caller's identity, or None when not authenticated."""
    return auth_service.resolve_identity(token)


def _enforce(identity: Identity | None, roles: tuple[Role, ...] = ()) -> Identity:
    decision = authorize(identity, roles)
    if not decision.ok:
        if identity is None:
            raise Unauthenticated(decision.error)
        raise Forbidden(decision.error)
    return identity


def get_current_user(
    identity: Annotated[Identity | None, Depends(get_optional_user)],
) -> Identity:
    """Get the current authenticated user."""
    return _enforce(identity)


def require_roles(*roles: Role) -> Callable[..., Identity]:
    """Build a dependency that only admits users holding one of ``roles``."""

    def dependency(
        identity: Annotated[Identity | None, Depends(get_optional_user)],
    ) -> Identity:
        return _enforce(identity, roles)

    return dependency


require_admin = require_roles(Role.ADMIN)
