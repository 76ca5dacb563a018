"""
Collection Schemas.

Pydantic schemas for collection API request/response validation.
"""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from beyondnp.backend.schemas.base import CamelModel, PartialUpdateModel
from beyondnp.backend.schemas.note import NoteResponse


class CollectionCreate(CamelModel):
    """
    Schema for creating a collection.

    `name` is optional here so a missing name surfaces as the
    "Collection name is required" error from the service.
    """

    name: str | None = Field(default=None, max_length=50, examples=["Applications"])
    description: str = Field(default="", max_length=200)
    color: str | None = Field(default=None, max_length=20, examples=["#4800FF"])
    icon: str | None = Field(default=None, max_length=50, examples=["folder"])

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class CollectionUpdate(PartialUpdateModel):
    """Schema for updating a collection. Only provided fields are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=200)
    color: str | None = Field(default=None, max_length=20)
    icon: str | None = Field(default=None, max_length=50)
    is_archived: bool | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class CollectionResponse(CamelModel):
    """Schema for a collection in API responses."""

    id: str
    user_id: str = Field(serialization_alias="user")
    name: str
    description: str
    color: str
    icon: str
    is_archived: bool
    notes_count: int
    last_modified: datetime
    created_at: datetime
    updated_at: datetime


class CollectionDetailResponse(CamelModel):
    """A collection together with its active notes."""

    collection: CollectionResponse
    notes: list[NoteResponse]
