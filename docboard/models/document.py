"""Document model."""

import uuid

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from docboard.database import Base
from docboard.models.enums import DocumentPriority, DocumentStatus
from docboard.models.mixins import TimestampMixin

TITLE_MAX_LENGTH = 200


def new_document_id() -> str:
    return str(uuid.uuid4())


class Document(Base, TimestampMixin):
    """A text document moving through the TODO / IN_PROGRESS / DONE board."""

    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=new_document_id)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    content = Column(Text, nullable=False)
    status = Column(
        Enum(
            DocumentStatus,
            name="document_status",
            native_enum=False,
            validate_strings=True,
            length=20,
        ),
        nullable=False,
        default=DocumentStatus.TODO,
        server_default=DocumentStatus.TODO.value,
        index=True,
    )
    priority = Column(
        Enum(
            DocumentPriority,
            name="document_priority",
            native_enum=False,
            validate_strings=True,
            length=20,
        ),
        nullable=False,
        default=DocumentPriority.MEDIUM,
        server_default=DocumentPriority.MEDIUM.value,
        index=True,
    )
    author_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    author = relationship("User", back_populates="documents")
