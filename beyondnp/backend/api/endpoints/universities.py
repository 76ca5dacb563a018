"""
Universities API Endpoints.

The global university catalog. Every route requires a signed-in user.
"""

from fastapi import APIRouter, Query

from beyondnp.backend.core.dependencies import CurrentUser, DbSession
from beyondnp.backend.schemas.base import ApiResponse
from beyondnp.backend.schemas.university import UniversityCreate, UniversityResponse
from beyondnp.backend.services.university import UniversityService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[UniversityResponse]],
    summary="List universities",
    description="Ranked first, then by name. Optionally filtered by text and state.",
)
async def list_universities(
    db: DbSession,
    user: CurrentUser,
    q: str | None = Query(default=None, max_length=100, description="Name or location contains"),
    state: str | None = Query(default=None, max_length=50, description="Exact state"),
) -> ApiResponse[list[UniversityResponse]]:
    """List catalog entries."""
    universities = await UniversityService(db).list_universities(query=q, state=state)
    return ApiResponse(data=[UniversityResponse.model_validate(u) for u in universities])


@router.get(
    "/{university_id}",
    response_model=ApiResponse[UniversityResponse],
    summary="Get a university",
)
async def get_university(
    university_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[UniversityResponse]:
    """Get a catalog entry by ID."""
    university = await UniversityService(db).get_university(university_id)
    return ApiResponse(data=UniversityResponse.model_validate(university))


@router.post(
    "",
    response_model=ApiResponse[UniversityResponse],
    status_code=201,
    summary="Add a university",
)
async def create_university(
    data: UniversityCreate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[UniversityResponse]:
    """Add a catalog entry."""
    university = await UniversityService(db).create_university(data)
    return ApiResponse(data=UniversityResponse.model_validate(university))
