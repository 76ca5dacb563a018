"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime

from pydantic import Field, field_validator

from beyondnp.backend.core.utils import unique_stripped
from beyondnp.backend.schemas.base import CamelModel, PartialUpdateModel

MAX_TAG_LENGTH = 20


def clean_tags(tags: list[str] | None) -> list[str] | None:
    """Trim tags, drop blanks and duplicates, and enforce the tag length limit."""
    if tags is None:
        return None
    cleaned = unique_stripped(tags)
    for tag in cleaned:
        if len(tag) > MAX_TAG_LENGTH:
            raise ValueError(f"Tag '{tag}' exceeds {MAX_TAG_LENGTH} characters")
    return cleaned


class NoteAttachment(CamelModel):
    """File linked from a note."""

    name: str = Field(..., max_length=255)
    url: str = Field(..., max_length=1000)
    type: str | None = Field(default=None, max_length=100)


class NoteCreate(CamelModel):
    """
    Schema for creating a new note.

    Title, content and collectionId are required; they are declared
    optional so the service reports all three in a single message.
    """

    title: str | None = Field(
        default=None,
        max_length=100,
        description="Note title",
        examples=["SOP draft"],
    )
    content: str | None = Field(
        default=None,
        description="Note content",
        examples=["First paragraph of my statement of purpose."],
    )
    collection_id: str | None = Field(
        default=None,
        description="Parent collection ID",
    )
    tags: list[str] = Field(default_factory=list, examples=[["sop", "draft"]])
    color: str | None = Field(default=None, max_length=20)
    is_pinned: bool = False
    attachments: list[NoteAttachment] = Field(default_factory=list)

    normalize_tags = field_validator("tags")(clean_tags)


class NoteUpdate(PartialUpdateModel):
    """
    Schema for updating an existing note.

    Setting `collectionId` to a different collection moves the note.
    """

    nullable_fields = frozenset({"content"})

    title: str | None = Field(default=None, min_length=1, max_length=100)
    content: str | None = None
    tags: list[str] | None = None
    color: str | None = Field(default=None, max_length=20)
    is_pinned: bool | None = None
    is_archived: bool | None = None
    collection_id: str | None = None
    attachments: list[NoteAttachment] | None = None

    normalize_tags = field_validator("tags")(clean_tags)


class NoteResponse(CamelModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    user_id: str = Field(serialization_alias="user")
    parent_collection_id: str = Field(serialization_alias="parentCollection")
    title: str = Field(description="Note title")
    content: str | None = Field(description="Note content")
    tags: list[str]
    color: str
    is_pinned: bool
    is_archived: bool = Field(description="Whether the note is archived")
    attachments: list[NoteAttachment]
    last_modified: datetime
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")
