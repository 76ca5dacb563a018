"""
Collection Model.

User-defined folder grouping notes.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin

DEFAULT_COLOR = "#4800FF"


class Collection(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Collection database model.

    `notes_count` is a maintained counter, adjusted by the note service
    on every create, delete and move. It is not recomputed from the
    notes table.
    """

    __tablename__ = "collections"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_collections_user_name"),
    )

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    color: Mapped[str] = mapped_column(String(20), default=DEFAULT_COLOR, nullable=False)
    icon: Mapped[str] = mapped_column(String(50), default="folder", nullable=False)
    notes_count: Mapped[int] = mapped_column(default=0, nullable=False)
    last_modified: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Collection(id={self.id}, name={self.name!r})>"
