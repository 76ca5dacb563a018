"""
Document Schemas.

Pydantic schemas for tracked application documents.
"""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from beyondnp.backend.core.utils import to_naive_utc
from beyondnp.backend.models.document import DocumentPriority, DocumentStatus
from beyondnp.backend.schemas.base import CamelModel, PartialUpdateModel


class DocumentAttachment(CamelModel):
    """Uploaded file linked from a document."""

    name: str = Field(..., max_length=255)
    url: str = Field(..., max_length=1000)
    type: str | None = Field(default=None, max_length=100)
    size: int | None = Field(default=None, ge=0)


class DocumentCreate(CamelModel):
    """Schema for creating a document."""

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str | None = Field(default=None, max_length=100, examples=["Official transcript"])
    status: DocumentStatus = DocumentStatus.PENDING
    description: str = Field(default="", max_length=300)
    category: str = Field(default="general", max_length=50, examples=["transcripts"])
    priority: DocumentPriority = DocumentPriority.MEDIUM
    due_date: datetime | None = None
    attachments: list[DocumentAttachment] = Field(default_factory=list)
    notes: str | None = Field(default=None, max_length=500)

    normalize_due_date = field_validator("due_date")(to_naive_utc)


class DocumentUpdate(PartialUpdateModel):
    """Schema for updating a document. Only provided fields are applied."""

    model_config = ConfigDict(use_enum_values=True)

    nullable_fields = frozenset({"due_date", "notes"})

    title: str | None = Field(default=None, min_length=1, max_length=100)
    status: DocumentStatus | None = None
    description: str | None = Field(default=None, max_length=300)
    category: str | None = Field(default=None, min_length=1, max_length=50)
    priority: DocumentPriority | None = None
    due_date: datetime | None = None
    attachments: list[DocumentAttachment] | None = None
    notes: str | None = Field(default=None, max_length=500)
    is_archived: bool | None = None

    normalize_due_date = field_validator("due_date")(to_naive_utc)


class DocumentResponse(CamelModel):
    """Schema for a document in API responses."""

    id: str
    user_id: str = Field(serialization_alias="user")
    title: str
    status: str
    description: str
    category: str
    priority: str
    due_date: datetime | None
    completed_date: datetime | None
    attachments: list[DocumentAttachment]
    notes: str | None
    is_archived: bool
    last_modified: datetime
    created_at: datetime
    updated_at: datetime
