"""User model."""

from sqlalchemy import Column, Enum, Integer, String
from sqlalchemy.orm import relationship

from docboard.database import Base
from docboard.models.enums import Role
from docboard.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and document ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(Role, name="user_role", native_enum=False, validate_strings=True, length=20),
        nullable=False,
        default=Role.USER,
        server_default=Role.USER.value,
    )

    # Relationships
    documents = relationship(
        "Document",
        back_populates="author",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
