"""
University Model.

Global catalog entity. Not owned by any user; users reference
universities through their shortlist.
"""

from sqlalchemy import JSON, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from beyondnp.backend.models.base import Base, TimestampMixin, UUIDMixin


class University(UUIDMixin, TimestampMixin, Base):
    """University catalog entry."""

    __tablename__ = "universities"

    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    link: Mapped[str] = mapped_column(String(500), nullable=False)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    country: Mapped[str] = mapped_column(String(100), default="USA", nullable=False)
    ranking: Mapped[int | None] = mapped_column(nullable=True)
    acceptance_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    tuition_fee: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_public: Mapped[bool] = mapped_column(default=False, nullable=False)
    programs: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<University(id={self.id}, name={self.name!r})>"
