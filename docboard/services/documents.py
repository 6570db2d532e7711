"""Document lifecycle: validation, ownership and status rules."""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from docboard.access import can_modify_document
from docboard.errors import Forbidden, NotFound, ValidationError
from docboard.models.document import TITLE_MAX_LENGTH, Document
from docboard.models.enums import DocumentPriority, DocumentStatus, Role
from docboard.models.mixins import utcnow
from docboard.stores import DocumentStore, commit

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "content", "status", "priority")


def _validate_title(title: Any, errors: list[dict[str, str]]) -> str | None:
    if not isinstance(title, str) or not title.strip():
        errors.append({"field": "title", "message": "Title is required"})
        return None
    if len(title) > TITLE_MAX_LENGTH:
        errors.append({"field": "title", "message": "Title too long"})
        return None
    return title


def _validate_content(content: Any, errors: list[dict[str, str]]) -> str | None:
    if not isinstance(content, str) or not content.strip():
        errors.append({"field": "content", "message": "Content is required"})
        return None
    return content


def _validate_choice(field: str, value: Any, enum_cls, errors: list[dict[str, str]]):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        errors.append({"field": field, "message": f"Must be one of: {allowed}"})
        return None


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class DocumentService:
    """Service for document create/read/update/delete operations.

    Status transitions are unrestricted: any status may move to any other.
    """

    def __init__(self, db: Session):
        self.db = db
        self.documents = DocumentStore(db)

    def create(
        self,
        author_id: int,
        title: str,
        content: str,
        status: DocumentStatus | str | None = None,
        priority: DocumentPriority | str | None = None,
    ) -> Document:
        """Create a document authored by ``author_id``."""
        errors: list[dict[str, str]] = []
        title = _validate_title(title, errors)
        content = _validate_content(content, errors)
        status = (
            DocumentStatus.TODO
            if status is None
            else _validate_choice("status", status, DocumentStatus, errors)
        )
        priority = (
            DocumentPriority.MEDIUM
            if priority is None
            else _validate_choice("priority", priority, DocumentPriority, errors)
        )
        if errors:
            raise ValidationError(errors=errors)

        now = utcnow()
        document = Document(
            title=title,
            content=content,
            status=status,
            priority=priority,
            author_id=author_id,
            created_at=now,
            updated_at=now,
        )
        self.documents.add(document)
        commit(self.db, "create document")
        self.db.refresh(document)

        logger.info(f"User {author_id} created document {document.id}")
        return document

    def get(self, document_id: str) -> Document:
        document = self.documents.get(document_id)
        if document is None:
            raise NotFound("Document not found")
        return document

    def list(
        self,
        status: DocumentStatus | str | None = None,
        priority: DocumentPriority | str | None = None,
    ) -> list[Document]:
        """List documents, newest first, optionally filtered by status and priority."""
        errors: list[dict[str, str]] = []
        if status is not None:
            status = _validate_choice("status", status, DocumentStatus, errors)
        if priority is not None:
            priority = _validate_choice("priority", priority, DocumentPriority, errors)
        if errors:
            raise ValidationError(errors=errors)

        return self.documents.find(status=status, priority=priority)

    def summary(self) -> dict[DocumentStatus, int]:
        """Count documents in each board column."""
        counts = self.documents.count_by_status()
        return {status: counts.get(status, 0) for status in DocumentStatus}

    def update(
        self,
        document_id: str,
        requester_id: int,
        requester_role: Role | str,
        changes: Mapping[str, Any],
    ) -> Document:
        """Apply a partial update. Fields absent from ``changes`` stay unchanged."""
        validated = self._validate_changes(changes)
        document = self._get_modifiable(document_id, requester_id, requester_role, "edit")

        for field, value in validated.items():
            setattr(document, field, value)
        document.updated_at = self._next_updated_at(document.updated_at)

        commit(self.db, "update document")
        self.db.refresh(document)

        logger.info(
            f"User {requester_id} updated document {document.id}: {sorted(validated) or 'no fields'}"
        )
        return document

    def delete(self, document_id: str, requester_id: int, requester_role: Role | str) -> None:
        """Delete a document. Deleting a missing document raises NotFound."""
        document = self._get_modifiable(document_id, requester_id, requester_role, "delete")
        self.documents.delete(document)
        commit(self.db, "delete document")

        logger.info(f"User {requester_id} deleted document {document_id}")

    def _get_modifiable(
        self, document_id: str, requester_id: int, requester_role: Role | str, action: str
    ) -> Document:
        document = self.get(document_id)
        if not can_modify_document(requester_id, Role(requester_role), document.author_id):
            logger.info(f"User {requester_id} may not {action} document {document_id}")
            raise Forbidden(f"Forbidden: You can only {action} your own documents")
        return document

    @staticmethod
    def _validate_changes(changes: Mapping[str, Any]) -> dict[str, Any]:
        errors: list[dict[str, str]] = []
        validated: dict[str, Any] = {}

        for field in changes:
            if field not in UPDATABLE_FIELDS:
                errors.append({"field": field, "message": "Field cannot be updated"})

        if "title" in changes:
            validated["title"] = _validate_title(changes["title"], errors)
        if "content" in changes:
            validated["content"] = _validate_content(changes["content"], errors)
        if "status" in changes:
            validated["status"] = _validate_choice(
                "status", changes["status"], DocumentStatus, errors
            )
        if "priority" in changes:
            validated["priority"] = _validate_choice(
                "priority", changes["priority"], DocumentPriority, errors
            )

        if errors:
            raise ValidationError(errors=errors)
        return validated

    @staticmethod
    def _next_updated_at(previous: datetime | None) -> datetime:
        """A timestamp strictly after ``previous``, even within one clock tick."""
        now = utcnow()
        if previous is None:
            return now
        floor = _as_aware(previous) + timedelta(microseconds=1)
        return max(now, floor)
