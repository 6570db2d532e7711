"""SQLAlchemy models."""

from docboard.models.document import Document
from docboard.models.enums import DocumentPriority, DocumentStatus, Role
from docboard.models.user import User

__all__ = [
    "User",
    "Document",
    "Role",
    "DocumentStatus",
    "DocumentPriority",
]
