"""Document API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from docboard.access import Identity
from docboard.api.dependencies import get_current_user, get_document_service
from docboard.models.enums import DocumentPriority, DocumentStatus
from docboard.schemas.document import (
    BoardSummary,
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
)
from docboard.services.documents import DocumentService

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


@router.get("", response_model=list[DocumentResponse])
def list_documents(
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[DocumentService, Depends(get_document_service)],
    status: DocumentStatus | None = None,
    priority: DocumentPriority | None = None,
):
    """List all documents, newest first."""
    return service.list(status=status, priority=priority)


@router.get("/summary", response_model=BoardSummary)
def get_summary(
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[DocumentService, Depends(get_document_service)],
):
    """Count documents per board column."""
    return BoardSummary(**{s.value: count for s, count in service.summary().items()})


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
def create_document(
    document_data: DocumentCreate,
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[DocumentService, Depends(get_document_service)],
):
    """Create a new document authored by the caller."""
    return service.create(
        author_id=current_user.id,
        title=document_data.title,
        content=document_data.content,
        status=document_data.status,
        priority=document_data.priority,
    )


@router.get("/{document_id}", response_model=DocumentResponse)
def get_document(
    document_id: str,
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[DocumentService, Depends(get_document_service)],
):
    """Get a specific document."""
    return service.get(document_id)


@router.put("/{document_id}", response_model=DocumentResponse)
def update_document(
    document_id: str,
    document_data: DocumentUpdate,
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[DocumentService, Depends(get_document_service)],
):
    """Update a document (author or admin)."""
    return service.update(
        document_id,
        requester_id=current_user.id,
        requester_role=current_user.role,
        changes=document_data.model_dump(exclude_unset=True),
    )


@router.delete("/{document_id}")
def delete_document(
    document_id: str,
    current_user: Annotated[Identity, Depends(get_current_user)],
    service: Annotated[DocumentService, Depends(get_document_service)],
):
    """Delete a document (author or admin)."""
    service.delete(document_id, requester_id=current_user.id, requester_role=current_user.role)
    return {"message": "Document deleted successfully"}
