"""Document schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from docboard.models.document import TITLE_MAX_LENGTH
from docboard.models.enums import DocumentPriority, DocumentStatus
from docboard.schemas.auth import UserResponse


class DocumentCreate(BaseModel):
    """Create a new document."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1)
    status: DocumentStatus | None = None
    priority: DocumentPriority | None = None


class DocumentUpdate(BaseModel):
    """Partial update of a document. Omitted fields stay unchanged."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str | None = Field(None, min_length=1)
    status: DocumentStatus | None = None
    priority: DocumentPriority | None = None


class DocumentResponse(BaseModel):
    """Document response with its embedded author."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    status: DocumentStatus
    priority: DocumentPriority
    author_id: int
    author: UserResponse
    created_at: datetime
    updated_at: datetime


class BoardSummary(BaseModel):
    """Document counts per board column."""

    TODO: int = 0
    IN_PROGRESS: int = 0
    DONE: int = 0
