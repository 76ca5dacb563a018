"""
Notes API Endpoints.

REST API endpoints for note management.
"""

from fastapi import APIRouter, Query

from beyondnp.backend.core.dependencies import CurrentUser, DbSession
from beyondnp.backend.schemas.base import ApiResponse, MessageResponse
from beyondnp.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from beyondnp.backend.services.note import NoteService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
    description=(
        "Active notes, pinned first, most recently modified first. "
        "Optionally filtered by collection."
    ),
)
async def list_notes(
    db: DbSession,
    user: CurrentUser,
    collection_id: str | None = Query(
        default=None,
        alias="collectionId",
        description="Only notes in this collection",
    ),
) -> ApiResponse[list[NoteResponse]]:
    """List notes."""
    notes = await NoteService(db, user.id).list_notes(collection_id=collection_id)
    return ApiResponse(data=[NoteResponse.model_validate(n) for n in notes])


@router.get(
    "/archived",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List archived notes",
)
async def list_archived_notes(
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[list[NoteResponse]]:
    """List archived notes."""
    notes = await NoteService(db, user.id).list_archived()
    return ApiResponse(data=[NoteResponse.model_validate(n) for n in notes])


@router.get(
    "/search",
    response_model=ApiResponse[list[NoteResponse]],
    summary="Search notes",
    description="Case-insensitive search over title, content and tags.",
)
async def search_notes(
    db: DbSession,
    user: CurrentUser,
    query: str | None = Query(default=None, description="Search text"),
) -> ApiResponse[list[NoteResponse]]:
    """Search notes."""
    notes = await NoteService(db, user.id).search_notes(query)
    return ApiResponse(data=[NoteResponse.model_validate(n) for n in notes])


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create a note in one of your collections.",
)
async def create_note(
    data: NoteCreate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    note = await NoteService(db, user.id).create_note(data)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note(
    note_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    note = await NoteService(db, user.id).get_note(note_id)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.put(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Update a note",
    description=(
        "Update an existing note. Only provided fields are updated; "
        "a different collectionId moves the note."
    ),
)
async def update_note(
    note_id: str,
    data: NoteUpdate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[NoteResponse]:
    """Update a note."""
    note = await NoteService(db, user.id).update_note(note_id, data)
    return ApiResponse(data=NoteResponse.model_validate(note))


@router.delete(
    "/{note_id}",
    response_model=MessageResponse,
    summary="Delete a note",
    description="Permanently delete a note.",
)
async def delete_note(
    note_id: str,
    db: DbSession,
    user: CurrentUser,
) -> MessageResponse:
    """Delete a note."""
    await NoteService(db, user.id).delete_note(note_id)
    return MessageResponse(message="Note deleted successfully")
