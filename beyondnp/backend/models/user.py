"""
User Model.

Accounts, credentials, email verification state, and the
user-to-university shortlist association.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.base import Base, TimestampMixin, UUIDMixin
from beyondnp.backend.models.university import University


def default_profile() -> dict[str, Any]:
    return {"nationality": "Nepalese"}


def default_preferences() -> dict[str, Any]:
    return {
        "theme": "auto",
        "notifications": {
            "email": True,
            "documentReminders": True,
            "universityUpdates": True,
        },
    }


user_shortlists = Table(
    "user_shortlists",
    Base.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("university_id", ForeignKey("universities.id", ondelete="CASCADE"), primary_key=True),
    Column("added_at", DateTime, default=utc_now, nullable=False),
)


class User(UUIDMixin, TimestampMixin, Base):
    """
    User database model.

    The password hash and verification code never leave the service
    layer; response schemas do not declare them.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    is_email_verified: Mapped[bool] = mapped_column(default=False, nullable=False)
    email_verification_code: Mapped[str | None] = mapped_column(String(12), nullable=True)
    email_verification_expires: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
    )

    profile: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        default=default_profile,
        nullable=False,
    )
    preferences: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        default=default_preferences,
        nullable=False,
    )

    last_login: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False, index=True)

    shortlisted_universities: Mapped[list[University]] = relationship(
        secondary=user_shortlists,
        lazy="selectin",
        order_by=user_shortlists.c.added_at,
    )

    def verification_code_matches(self, code: str, now: datetime) -> bool:
        """True only for the current, unexpired code."""
        return (
            self.email_verification_code is not None
            and self.email_verification_expires is not None
            and self.email_verification_code == code
            and self.email_verification_expires > now
        )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
