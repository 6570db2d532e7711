"""Authentication service: registration, login, identity resolution, roles."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from docboard.access import Identity
from docboard.errors import Conflict, Forbidden, NotFound
from docboard.models.enums import Role
from docboard.models.user import User
from docboard.security import Claims, PasswordHasher, TokenCodec
from docboard.stores import UserStore, commit

logger = logging.getLogger(__name__)


class AuthService:
    """Service for credential and identity operations."""

    def __init__(self, db: Session, hasher: PasswordHasher, codec: TokenCodec):
        self.db = db
        self.hasher = hasher
        self.codec = codec
        self.users = UserStore(db)

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: Role = Role.USER,
        actor: Identity | None = None,
    ) -> User:
        """Create a new user.

        Anyone may register a USER account; any other role must be granted by
        an authenticated admin.
        """
        role = Role(role)
        if role != Role.USER and (actor is None or not actor.role.is_admin):
            raise Forbidden("Only an admin can assign elevated roles")

        if self.users.get_by_email(email):
            raise Conflict("Email already registered")

        user = User(name=name, email=email, password_hash=self.hasher.hash(password), role=role)
        try:
            self.users.add(user)
            commit(self.db, "register user")
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise Conflict("Email already registered") from e

        self.db.refresh(user)
        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return user

    def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user by email and password.

        Returns None for an unknown email or a wrong password alike.
        """
        user = self.users.get_by_email(email)
        if not user:
            # Spend the same hashing time as a real check
            self.hasher.verify_dummy(password)
            logger.info("Login failed for unknown email")
            return None

        if not self.hasher.verify(password, user.password_hash):
            logger.info(f"Login failed for user {user.id}")
            return None

        if self.hasher.needs_rehash(user.password_hash):
            user.password_hash = self.hasher.hash(password)
            commit(self.db, "upgrade password hash")
            logger.info(f"Upgraded password hash for user {user.id}")

        logger.info(f"User {user.id} logged in")
        return user

    def issue_token(self, user: User) -> str:
        """Create a session token for the user."""
        return self.codec.sign(Claims(user_id=user.id, email=user.email, role=Role(user.role)))

    def resolve_identity(self, token: str | None) -> Identity | None:
        """Recover the current identity behind a session token.

        The role always comes from storage, not from the token, so a role
        change is observed on the next request.
        """
        claims = self.codec.verify(token)
        if claims is None:
            return None
        return self.users.get_identity(claims.user_id)

    def list_users(self) -> list[User]:
        return self.users.all()

    def change_role(self, user_id: int, role: Role) -> User:
        """Set a user's role, keeping at least one admin."""
        role = Role(role)
        user = self.users.get(user_id)
        if user is None:
            raise NotFound("User not found")

        if user.role == Role.ADMIN and role != Role.ADMIN:
            if self.users.count_with_role(Role.ADMIN) <= 1:
                raise Conflict("Cannot demote the last admin")

        previous = Role(user.role)
        user.role = role
        commit(self.db, "change user role")
        self.db.refresh(user)
        logger.info(f"Changed role of user {user.id} from {previous.value} to {role.value}")
        return user

    def ensure_default_admin(self, name: str, email: str, password: str | None) -> User | None:
        """Create an admin when none exists and a password is configured."""
        if self.users.count_with_role(Role.ADMIN) > 0:
            return None

        if not password:
            logger.warning("No admin present, but ADMIN_PASSWORD not set -> skip creating default admin")
            return None

        # An ordinary account already holding the admin email is never promoted
        if self.users.get_by_email(email):
            logger.warning(f"No admin present, but {email} is taken by a non-admin -> skip")
            return None

        admin = self.register(name, email, password, role=Role.ADMIN, actor=_SYSTEM)
        logger.warning(f"Created default admin -> email={admin.email} id={admin.id}")
        return admin


_SYSTEM = Identity(id=0, name="system", email="system", role=Role.ADMIN)
