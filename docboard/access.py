"""Role-based access decisions."""

from collections.abc import Collection
from dataclasses import dataclass

from fastapi import status

from docboard.models.enums import Role


@dataclass(frozen=True)
class Identity:
    """The non-secret view of a user that requests act as."""

    id: int
    name: str
    email: str
    role: Role


@dataclass(frozen=True)
class AccessDecision:
    ok: bool
    error: str | None = None
    status: int | None = None


ALLOW = AccessDecision(ok=True)


def authorize(
    identity: Identity | None, required_roles: Collection[Role] | None = None
) -> AccessDecision:
    """Decide whether an identity may proceed.

    No identity is an authentication failure (401). An identity whose role is
    not in a non-empty ``required_roles`` is an authorization failure (403).
    """
    if identity is None:
        return AccessDecision(ok=False, error="Unauthorized", status=status.HTTP_401_UNAUTHORIZED)

    if required_roles and identity.role not in required_roles:
        return AccessDecision(ok=False, error="Forbidden", status=status.HTTP_403_FORBIDDEN)

    return ALLOW


def can_modify_document(requester_id: int, requester_role: Role, author_id: int) -> bool:
    """Only the author or an admin may edit or delete a document."""
    return requester_id == author_id or Role(requester_role).is_admin
