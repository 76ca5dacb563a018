"""
Base Schemas.

Standard API response envelope and the camelCase base shared by
every resource schema.
"""

from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

import structlog
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from beyondnp.backend.core.utils import utc_now

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """
    Base for request and response bodies.

    Fields serialize as camelCase; requests may use either camelCase
    or snake_case keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdateModel(CamelModel):
    """
    Base for partial-update bodies.

    Only keys present in the payload are applied (`exclude_unset`), so a
    field can be set to a falsy value such as `false`, `""` or `[]`. An
    explicit null is rejected unless the field is listed in
    `nullable_fields`.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "PartialUpdateModel":
        for name in sorted(self.model_fields_set):
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields present in the payload, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


def _current_request_id() -> str | None:
    """Request ID bound to the log context by the request middleware."""
    return structlog.contextvars.get_contextvars().get("request_id")


class ResponseMetadata(BaseModel):
    """Metadata included in all API responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = Field(default_factory=_current_request_id)


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Standard API response envelope.

    All API responses use this structure for consistency.
    """

    success: bool = True
    data: DataT | None = None
    message: str | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Envelope for operations that return only a message, such as deletes."""

    success: bool = True
    message: str
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    message: str
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

