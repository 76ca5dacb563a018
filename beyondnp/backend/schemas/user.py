"""
User Schemas.

Pydantic schemas for registration, login, email verification,
profile management, and the dashboard.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import Field, field_validator

from beyondnp.backend.core.utils import normalize_email
from beyondnp.backend.schemas.base import CamelModel, PartialUpdateModel
from beyondnp.backend.schemas.collection import CollectionResponse
from beyondnp.backend.schemas.document import DocumentResponse
from beyondnp.backend.schemas.note import NoteResponse
from beyondnp.backend.schemas.university import UniversityResponse

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PASSWORD_MIN_LENGTH = 6
# bcrypt rejects anything longer, and multibyte characters count in full
PASSWORD_MAX_BYTES = 72


def _normalize_optional_email(value: Any) -> Any:
    return normalize_email(value) if isinstance(value, str) else value


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


# =============================================================================
# Authentication
# =============================================================================


class RegisterRequest(CamelModel):
    """Schema for registering a new account."""

    name: str = Field(..., min_length=2, max_length=50, examples=["Alice"])
    email: str = Field(..., pattern=EMAIL_PATTERN, examples=["alice@example.com"])
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    password_bytes = field_validator("password")(_check_password_bytes)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    lowercase_email = field_validator("email", mode="before")(_normalize_optional_email)


class LoginRequest(CamelModel):
    """Schema for logging in."""

    email: str
    password: str

    lowercase_email = field_validator("email", mode="before")(_normalize_optional_email)


class VerifyEmailRequest(CamelModel):
    """
    Schema for submitting a verification code.

    Both fields are optional so a missing value is reported by the
    service with a single message.
    """

    email: str | None = None
    verification_code: str | None = None

    lowercase_email = field_validator("email", mode="before")(_normalize_optional_email)

    @field_validator("verification_code", mode="before")
    @classmethod
    def _strip_code(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class ResendVerificationRequest(CamelModel):
    """Schema for requesting a new verification code."""

    email: str | None = None

    lowercase_email = field_validator("email", mode="before")(_normalize_optional_email)


class UserSummary(CamelModel):
    """Identity fields returned by the authentication endpoints."""

    id: str
    name: str
    email: str
    is_email_verified: bool


class RegisterResponse(UserSummary):
    """Returned after registration; no token until the email is verified."""

    requires_verification: bool = True


class AuthResponse(UserSummary):
    """Returned after login or verification, carrying the bearer token."""

    token: str


class VerificationPending(CamelModel):
    """Identifies the account a verification code was sent to."""

    email: str
    name: str


# =============================================================================
# Profile
# =============================================================================


class EducationUpdate(CamelModel):
    level: Literal["high_school", "bachelor", "master", "phd"] | None = None
    institution: str | None = Field(default=None, max_length=100)
    graduation_year: int | None = Field(default=None, ge=1900, le=2100)


class ProfileUpdate(CamelModel):
    """Profile sub-object. Keys present here overwrite the stored ones."""

    avatar: str | None = None
    bio: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=30)
    date_of_birth: datetime | None = None
    nationality: str | None = Field(default=None, max_length=50)
    current_education: EducationUpdate | None = None
    target_intake: str | None = Field(default=None, max_length=50)
    target_major: str | None = Field(default=None, max_length=100)


class NotificationPreferences(CamelModel):
    email: bool | None = None
    document_reminders: bool | None = None
    university_updates: bool | None = None


class PreferencesUpdate(CamelModel):
    """Preferences sub-object. Keys present here overwrite the stored ones."""

    theme: Literal["light", "dark", "auto"] | None = None
    notifications: NotificationPreferences | None = None


class UserUpdate(PartialUpdateModel):
    """Schema for updating the current user's account."""

    name: str | None = Field(default=None, min_length=2, max_length=50)
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    profile: ProfileUpdate | None = None
    preferences: PreferencesUpdate | None = None

    lowercase_email = field_validator("email", mode="before")(_normalize_optional_email)


class ChangePasswordRequest(CamelModel):
    current_password: str
    new_password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)

    password_bytes = field_validator("new_password")(_check_password_bytes)


class UserResponse(CamelModel):
    """
    Schema for the current user in API responses.

    The password hash and verification code are never declared here.
    """

    id: str
    name: str
    email: str
    is_email_verified: bool
    is_active: bool
    profile: dict[str, Any]
    preferences: dict[str, Any]
    last_login: datetime | None
    shortlisted_universities: list[UniversityResponse]
    created_at: datetime
    updated_at: datetime


class UserProfileResponse(UserResponse):
    """The current user together with the records they own."""

    collections: list[CollectionResponse]
    notes: list[NoteResponse]
    documents: list[DocumentResponse]


# =============================================================================
# Dashboard
# =============================================================================


class DashboardCounts(CamelModel):
    shortlisted_universities: int
    collections: int
    notes: int
    documents: int
    pending_documents: int
    completed_documents: int


class RecentActivity(CamelModel):
    notes: list[NoteResponse]
    documents: list[DocumentResponse]
    collections: list[CollectionResponse]


class DashboardResponse(CamelModel):
    counts: DashboardCounts
    recent_activity: RecentActivity
