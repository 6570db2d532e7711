"""User administration endpoints (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from docboard.access import Identity
from docboard.api.dependencies import get_auth_service, require_admin
from docboard.schemas.auth import RoleUpdate, UserDetailResponse
from docboard.services.auth import AuthService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserDetailResponse])
def list_users(
    admin: Annotated[Identity, Depends(require_admin)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """List all users."""
    return auth_service.list_users()


@router.patch("/{user_id}/role", response_model=UserDetailResponse)
def change_role(
    user_id: int,
    role_data: RoleUpdate,
    admin: Annotated[Identity, Depends(require_admin)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Change a user's role. The last admin cannot be demoted."""
    return auth_service.change_role(user_id, role_data.role)
