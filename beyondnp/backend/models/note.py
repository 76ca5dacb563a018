"""
Note Model.

A note always lives in exactly one collection owned by the same user.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin
from beyondnp.backend.models.collection import DEFAULT_COLOR


class Note(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """Note database model."""

    __tablename__ = "notes"
    __table_args__ = (
        Index("ix_notes_user_collection", "user_id", "parent_collection_id"),
    )

    parent_collection_id: Mapped[str] = mapped_column(
        ForeignKey("collections.id"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    color: Mapped[str] = mapped_column(String(20), default=DEFAULT_COLOR, nullable=False)
    is_pinned: Mapped[bool] = mapped_column(default=False, nullable=False)
    last_modified: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
        index=True,
    )
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over title, content and tags."""
        needle = query.casefold()
        haystacks = [self.title, self.content or "", *self.tags]
        return any(needle in text.casefold() for text in haystacks)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
