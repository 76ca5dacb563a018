"""
Users API Endpoints.

Public authentication routes (register, login, email verification) and
the authenticated account routes: profile, password, shortlist, the
user's own records, and the dashboard.
"""

from fastapi import APIRouter, BackgroundTasks, Query
from fastapi.responses import JSONResponse

from beyondnp.backend.core.dependencies import CurrentUser, DbSession
from beyondnp.backend.models.user import User
from beyondnp.backend.schemas.base import ApiResponse, MessageResponse, ResponseMetadata
from beyondnp.backend.schemas.collection import CollectionResponse
from beyondnp.backend.schemas.document import DocumentResponse
from beyondnp.backend.schemas.note import NoteResponse
from beyondnp.backend.schemas.university import UniversityResponse
from beyondnp.backend.schemas.user import (
    AuthResponse,
    ChangePasswordRequest,
    DashboardCounts,
    DashboardResponse,
    LoginRequest,
    RecentActivity,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    UserProfileResponse,
    UserResponse,
    UserSummary,
    UserUpdate,
    VerificationPending,
    VerifyEmailRequest,
)
from beyondnp.backend.services.auth import AuthService
from beyondnp.backend.services.user import UserService

router = APIRouter()


def _auth_response(user: User, token: str) -> AuthResponse:
    summary = UserSummary.model_validate(user)
    return AuthResponse(**summary.model_dump(), token=token)


# =============================================================================
# Authentication (public)
# =============================================================================


@router.post(
    "/register",
    response_model=ApiResponse[RegisterResponse],
    status_code=201,
    summary="Register",
    description="Create an unverified account and email a verification code.",
)
async def register(
    data: RegisterRequest,
    db: DbSession,
    tasks: BackgroundTasks,
) -> ApiResponse[RegisterResponse]:
    """Register a new user."""
    user = await AuthService(db, tasks).register(data)
    return ApiResponse(
        data=RegisterResponse.model_validate(user),
        message="User registered successfully. Please check your email for verification code.",
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    summary="Log in",
    description=(
        "Exchange credentials for a bearer token. Unverified accounts get a "
        "403 with requiresVerification and a freshly emailed code instead."
    ),
    responses={403: {"description": "Email not verified; a new code was sent"}},
)
async def login(
    data: LoginRequest,
    db: DbSession,
    tasks: BackgroundTasks,
) -> ApiResponse[AuthResponse] | JSONResponse:
    """Log in with email and password."""
    outcome = await AuthService(db, tasks).login(data)

    if outcome.requires_verification:
        pending = VerificationPending.model_validate(outcome.user)
        return JSONResponse(
            status_code=403,
            content={
                "success": False,
                "requiresVerification": True,
                "message": (
                    "Please verify your email before logging in. "
                    "A new verification code has been sent to your email."
                ),
                "data": pending.model_dump(by_alias=True),
                "metadata": ResponseMetadata().model_dump(mode="json"),
            },
        )

    return ApiResponse(data=_auth_response(outcome.user, outcome.token))


@router.post(
    "/verify-email",
    response_model=ApiResponse[AuthResponse],
    summary="Verify email",
    description="Verify the account with its emailed code and receive a bearer token.",
)
async def verify_email(
    data: VerifyEmailRequest,
    db: DbSession,
    tasks: BackgroundTasks,
) -> ApiResponse[AuthResponse]:
    """Verify an email address."""
    outcome = await AuthService(db, tasks).verify_email(data)
    return ApiResponse(
        data=_auth_response(outcome.user, outcome.token),
        message="Email verified successfully! Welcome to Beyond NP!",
    )


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    summary="Resend verification code",
)
async def resend_verification(
    data: ResendVerificationRequest,
    db: DbSession,
    tasks: BackgroundTasks,
) -> MessageResponse:
    """Issue and email a new verification code."""
    await AuthService(db, tasks).resend_verification(data)
    return MessageResponse(
        message="Verification code sent successfully. Please check your email.",
    )


# =============================================================================
# Profile
# =============================================================================


@router.get(
    "/profile",
    response_model=ApiResponse[UserProfileResponse],
    summary="Get profile",
    description="The current user with shortlist, collections, notes and documents.",
)
async def get_profile(db: DbSession, user: CurrentUser) -> ApiResponse[UserProfileResponse]:
    """Get the current user's profile."""
    records = await UserService(db, user).owned_records()
    profile = UserResponse.model_validate(user)
    return ApiResponse(
        data=UserProfileResponse(
            **profile.model_dump(),
            collections=[CollectionResponse.model_validate(c) for c in records.collections],
            notes=[NoteResponse.model_validate(n) for n in records.notes],
            documents=[DocumentResponse.model_validate(d) for d in records.documents],
        )
    )


@router.put(
    "/profile",
    response_model=ApiResponse[UserResponse],
    summary="Update profile",
    description="Update name, email, or merge keys into profile and preferences.",
)
async def update_profile(
    data: UserUpdate,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[UserResponse]:
    """Update the current user's profile."""
    updated = await UserService(db, user).update_profile(data)
    return ApiResponse(data=UserResponse.model_validate(updated))


@router.delete(
    "/profile",
    response_model=MessageResponse,
    summary="Delete account",
    description="Delete the account and every collection, note and document it owns.",
)
async def delete_account(db: DbSession, user: CurrentUser) -> MessageResponse:
    """Delete the current user's account."""
    await UserService(db, user).delete_account()
    return MessageResponse(message="Account deleted successfully")


@router.put(
    "/change-password",
    response_model=MessageResponse,
    summary="Change password",
)
async def change_password(
    data: ChangePasswordRequest,
    db: DbSession,
    user: CurrentUser,
) -> MessageResponse:
    """Change the current user's password."""
    await UserService(db, user).change_password(data)
    return MessageResponse(message="Password updated successfully")


# =============================================================================
# Dashboard
# =============================================================================


@router.get(
    "/dashboard",
    response_model=ApiResponse[DashboardResponse],
    summary="Dashboard",
    description="Counts across the user's records and their five most recent of each.",
)
async def get_dashboard(db: DbSession, user: CurrentUser) -> ApiResponse[DashboardResponse]:
    """Get the dashboard summary."""
    dashboard = await UserService(db, user).dashboard()
    return ApiResponse(
        data=DashboardResponse(
            counts=DashboardCounts.model_validate(dashboard.counts),
            recent_activity=RecentActivity(
                notes=[NoteResponse.model_validate(n) for n in dashboard.recent.notes],
                documents=[
                    DocumentResponse.model_validate(d) for d in dashboard.recent.documents
                ],
                collections=[
                    CollectionResponse.model_validate(c) for c in dashboard.recent.collections
                ],
            ),
        )
    )


# =============================================================================
# Shortlist
# =============================================================================


@router.get(
    "/shortlist",
    response_model=ApiResponse[list[UniversityResponse]],
    summary="List shortlist",
)
async def get_shortlist(db: DbSession, user: CurrentUser) -> ApiResponse[list[UniversityResponse]]:
    """List shortlisted universities in the order they were added."""
    universities = UserService(db, user).shortlist()
    return ApiResponse(data=[UniversityResponse.model_validate(u) for u in universities])


@router.post(
    "/shortlist/{university_id}",
    response_model=ApiResponse[UniversityResponse],
    summary="Add to shortlist",
)
async def add_to_shortlist(
    university_id: str,
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[UniversityResponse]:
    """Add a university to the shortlist."""
    university = await UserService(db, user).add_to_shortlist(university_id)
    return ApiResponse(
        data=UniversityResponse.model_validate(university),
        message="University added to shortlist",
    )


@router.delete(
    "/shortlist/{university_id}",
    response_model=MessageResponse,
    summary="Remove from shortlist",
    description="Removing a university that is not shortlisted succeeds.",
)
async def remove_from_shortlist(
    university_id: str,
    db: DbSession,
    user: CurrentUser,
) -> MessageResponse:
    """Remove a university from the shortlist."""
    await UserService(db, user).remove_from_shortlist(university_id)
    return MessageResponse(message="University removed from shortlist")


# =============================================================================
# Owned records
# =============================================================================


@router.get(
    "/collections",
    response_model=ApiResponse[list[CollectionResponse]],
    summary="List my collections",
)
async def get_user_collections(
    db: DbSession,
    user: CurrentUser,
) -> ApiResponse[list[CollectionResponse]]:
    collections = await UserService(db, user).list_collections()
    return ApiResponse(data=[CollectionResponse.model_validate(c) for c in collections])


@router.get(
    "/notes",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List my notes",
    description="Active notes, pinned first, then most recently modified.",
)
async def get_user_notes(db: DbSession, user: CurrentUser) -> ApiResponse[list[NoteResponse]]:
    notes = await UserService(db, user).list_notes()
    return ApiResponse(data=[NoteResponse.model_validate(n) for n in notes])


@router.get(
    "/documents",
    response_model=ApiResponse[list[DocumentResponse]],
    summary="List my documents",
)
async def get_user_documents(
    db: DbSession,
    user: CurrentUser,
    status: str | None = Query(default=None, description="Filter by status"),
    category: str | None = Query(default=None, description="Filter by category"),
) -> ApiResponse[list[DocumentResponse]]:
    documents = await UserService(db, user).list_documents(status=status, category=category)
    return ApiResponse(data=[DocumentResponse.model_validate(d) for d in documents])
