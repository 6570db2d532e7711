"""Typed persistence operations over users and documents."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from docboard.access import Identity
from docboard.errors import InternalError
from docboard.models.document import Document
from docboard.models.enums import DocumentPriority, DocumentStatus, Role
from docboard.models.user import User

logger = logging.getLogger(__name__)


def commit(db: Session, action: str) -> None:
    """Commit the unit of work, normalizing storage failures.

    Integrity errors are re-raised so callers can map them to a conflict.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Database error while trying to {action}")
        raise InternalError(f"Failed to {action}") from e


class UserStore:
    """Credential storage. Holds no logic beyond the storage contract."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def get_identity(self, user_id: int) -> Identity | None:
        """Load only the non-secret columns of a user."""
        row = (
            self.db.query(User.id, User.name, User.email, User.role)
            .filter(User.id == user_id)
            .first()
        )
        if row is None:
            return None
        return Identity(id=row.id, name=row.name, email=row.email, role=Role(row.role))

    def all(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def count_with_role(self, role: Role) -> int:
        return self.db.query(func.count(User.id)).filter(User.role == role).scalar() or 0

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user


class DocumentStore:
    """Document storage. Rows are only written through DocumentService."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, document_id: str) -> Document | None:
        return (
            self.db.query(Document)
            .options(joinedload(Document.author))
            .filter(Document.id == document_id)
            .first()
        )

    def find(
        self,
        status: DocumentStatus | None = None,
        priority: DocumentPriority | None = None,
    ) -> list[Document]:
        query = self.db.query(Document).options(joinedload(Document.author))
        if status is not None:
            query = query.filter(Document.status == status)
        if priority is not None:
            query = query.filter(Document.priority == priority)
        return query.order_by(Document.created_at.desc()).all()

    def count_by_status(self) -> dict[DocumentStatus, int]:
        rows = (
            self.db.query(Document.status, func.count(Document.id))
            .group_by(Document.status)
            .all()
        )
        return {DocumentStatus(status): count for status, count in rows}

    def add(self, document: Document) -> Document:
        self.db.add(document)
        self.db.flush()
        return document

    def delete(self, document: Document) -> None:
        self.db.delete(document)
        self.db.flush()
