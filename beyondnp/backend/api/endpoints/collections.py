"""
Collections API Endpoints.

REST API endpoints for the current user's collections.
"""

from fastapi import APIRouter

from beyondnp.backend.core.dependencies import CurrentUser, DbSession
from beyondnp.backend.schemas.base import ApiResponse, MessageResponse
from beyondnp.backend.schemas.collection import (
    CollectionCreate,
    CollectionDetailResponse,
    CollectionResponse,
    CollectionUpdate,
)
from beyondnp.backend.schemas.note import NoteResponse
from beyondnp.backend.services.collection import CollectionService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[CollectionResponse]],
    summary="List collections",
    description="Active collections, most recently modified first.",
)
async def list_collections(
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[list[CollectionResponse]]:
    """List collections."""
    collections = await CollectionService(db, user.id).list_collections()
    return ApiResponse(data=[CollectionResponse.model_validate(c) for c in collections])


@router.get(
    "/archived",
    response_model=ApiResponse[list[CollectionResponse]],
    summary="List archived collections",
)
async def list_archived_collections(
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[list[CollectionResponse]]:
    """List archived collections."""
    collections = await CollectionService(db, user.id).list_archived()
    return ApiResponse(data=[CollectionResponse.model_validate(c) for c in collections])


@router.post(
    "",
    response_model=ApiResponse[CollectionResponse],
    status_code=201,
    summary="Create a collection",
    description="Create a collection. Names are unique per user.",
)
async def create_collection(
    data: CollectionCreate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[CollectionResponse]:
    """Create a new collection."""
    collection = await CollectionService(db, user.id).create_collection(data)
    return ApiResponse(data=CollectionResponse.model_validate(collection))


@router.get(
    "/{collection_id}",
    response_model=ApiResponse[CollectionDetailResponse],
    summary="Get a collection",
    description="Get a collection with its active notes, pinned first, most recently modified first.",
)
async def get_collection(
    collection_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[CollectionDetailResponse]:
    """Get a collection by ID."""
    collection, notes = await CollectionService(db, user.id).get_with_notes(collection_id)
    return ApiResponse(
        data=CollectionDetailResponse(
            collection=CollectionResponse.model_validate(collection),
            notes=[NoteResponse.model_validate(n) for n in notes],
        )
    )


@router.put(
    "/{collection_id}",
    response_model=ApiResponse[CollectionResponse],
    summary="Update a collection",
    description="Update a collection. Only provided fields are updated.",
)
async def update_collection(
    collection_id: str,
    data: CollectionUpdate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[CollectionResponse]:
    """Update a collection."""
    collection = await CollectionService(db, user.id).update_collection(collection_id, data)
    return ApiResponse(data=CollectionResponse.model_validate(collection))


@router.delete(
    "/{collection_id}",
    response_model=MessageResponse,
    summary="Delete a collection",
    description="Permanently delete a collection and all of its notes.",
)
async def delete_collection(
    collection_id: str,
    db: DbSession,
    user: CurrentUser,
) -> MessageResponse:
    """Delete a collection."""
    await CollectionService(db, user.id).delete_collection(collection_id)
    return MessageResponse(message="Collection and all its notes deleted successfully")
