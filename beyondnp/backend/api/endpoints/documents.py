"""
Documents API Endpoints.

REST API endpoints for tracked application documents.
"""

from fastapi import APIRouter, Query

from beyondnp.backend.core.dependencies import CurrentUser, DbSession
from beyondnp.backend.schemas.base import ApiResponse, MessageResponse
from beyondnp.backend.schemas.document import (
    DocumentCreate,
    DocumentResponse,
    DocumentUpdate,
)
from beyondnp.backend.services.document import DocumentService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[DocumentResponse]],
    summary="List documents",
    description="Active documents, soonest due first, undated last.",
)
async def list_documents(
    db: DbSession,
    user: CurrentUser,
    status: str | None = Query(default=None, description="Filter by status"),
    category: str | None = Query(default=None, description="Filter by category"),
) -> ApiResponse[list[DocumentResponse]]:
    """List documents."""
    documents = await DocumentService(db, user.id).list_documents(
        status=status,
        category=category,
    )
    return ApiResponse(data=[DocumentResponse.model_validate(d) for d in documents])


@router.get(
    "/archived",
    response_model=ApiResponse[list[DocumentResponse]],
    summary="List archived documents",
)
async def list_archived_documents(
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[list[DocumentResponse]]:
    """List archived documents."""
    documents = await DocumentService(db, user.id).list_archived()
    return ApiResponse(data=[DocumentResponse.model_validate(d) for d in documents])


@router.post(
    "",
    response_model=ApiResponse[DocumentResponse],
    status_code=201,
    summary="Create a document",
)
async def create_document(
    data: DocumentCreate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[DocumentResponse]:
    """Create a new document."""
    document = await DocumentService(db, user.id).create_document(data)
    return ApiResponse(data=DocumentResponse.model_validate(document))


@router.get(
    "/{document_id}",
    response_model=ApiResponse[DocumentResponse],
    summary="Get a document",
)
async def get_document(
    document_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[DocumentResponse]:
    """Get a document by ID."""
    document = await DocumentService(db, user.id).get_document(document_id)
    return ApiResponse(data=DocumentResponse.model_validate(document))


@router.put(
    "/{document_id}",
    response_model=ApiResponse[DocumentResponse],
    summary="Update a document",
    description="Update a document. Only provided fields are updated.",
)
async def update_document(
    document_id: str,
    data: DocumentUpdate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[DocumentResponse]:
    """Update a document."""
    document = await DocumentService(db, user.id).update_document(document_id, data)
    return ApiResponse(data=DocumentResponse.model_validate(document))


@router.delete(
    "/{document_id}",
    response_model=MessageResponse,
    summary="Delete a document",
)
async def delete_document(
    document_id: str,
    db: DbSession,
    user: CurrentUser,
) -> MessageResponse:
    """Delete a document."""
    await DocumentService(db, user.id).delete_document(document_id)
    return MessageResponse(message="Document deleted successfully")
