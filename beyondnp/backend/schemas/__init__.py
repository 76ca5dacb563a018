# Pydantic schemas package
from beyondnp.backend.schemas.base import (
    ApiResponse,
    CamelModel,
    ErrorResponse,
    MessageResponse,
    PartialUpdateModel,
    ResponseMetadata,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "ErrorResponse",
    "MessageResponse",
    "PartialUpdateModel",
    "ResponseMetadata",
]
