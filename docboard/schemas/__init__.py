"""Pydantic schemas for API requests and responses."""

from docboard.schemas.auth import (
    AuthResponse,
    RoleUpdate,
    UserDetailResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from docboard.schemas.document import (
    BoardSummary,
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "UserDetailResponse",
    "AuthResponse",
    "RoleUpdate",
    "DocumentCreate",
    "DocumentUpdate",
    "DocumentResponse",
    "BoardSummary",
]
