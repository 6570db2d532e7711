"""Password hashing and session token signing."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from docboard.config import Settings
from docboard.models.enums import Role

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Slow, salted, one-way password hashing.

    New hashes use bcrypt_sha256 so long passwords are not truncated at 72
    bytes; plain bcrypt hashes are still accepted and flagged for rehash.
    """

    def __init__(self, rounds: int = 12):
        self.context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt"],
            deprecated=["bcrypt"],
            bcrypt_sha256__rounds=rounds,
            bcrypt__rounds=rounds,
        )
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        return self.context.hash(password)

    def verify(self, password: str, hashed: str | None) -> bool:
        """Verify a password against its hash. Malformed hashes never match."""
        if not hashed:
            return False
        try:
            return self.context.verify(password, hashed)
        except (ValueError, TypeError):
            logger.warning("Refusing to verify against a malformed password hash")
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the cost of a real verification against a hash nobody owns."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("dummy-password-for-timing")
        self.verify(password, self._dummy_hash)
        return False

    def needs_rehash(self, hashed: str) -> bool:
        """Check if a stored hash uses a deprecated scheme or work factor."""
        try:
            return self.context.needs_update(hashed)
        except (ValueError, TypeError):
            return False


@dataclass(frozen=True)
class Claims:
    """Identity facts embedded in a session token."""

    user_id: int
    email: str
    role: Role


class TokenCodec:
    """Signs and verifies stateless, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(days=7),
    ):
        if not secret:
            raise ValueError("A signing secret is required")
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            lifetime=timedelta(minutes=settings.jwt_expiration_minutes),
        )

    def sign(self, claims: Claims, issued_at: datetime | None = None) -> str:
        """Create a signed token for the given claims."""
        issued_at = issued_at or datetime.now(UTC)
        to_encode = {
            "sub": str(claims.user_id),
            "email": claims.email,
            "role": claims.role.value,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> Claims | None:
        """Decode and validate a token.

        Returns None for a bad signature, expiry, or malformed payload.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
            return Claims(
                user_id=int(payload["sub"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
            )
        except (JWTError, KeyError, ValueError, TypeError):
            return None
