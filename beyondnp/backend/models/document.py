"""
Document Model.

Application documents a user is tracking (transcripts, essays,
recommendation letters), with a status workflow and a priority.
"""

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String, event
from sqlalchemy.orm import Mapped, mapped_column

from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.base import Base, OwnedMixin, TimestampMixin, UUIDMixin


class DocumentStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SUBMITTED = "submitted"


class DocumentPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Document(UUIDMixin, OwnedMixin, TimestampMixin, Base):
    """
    Document database model.

    `completed_date` is derived: it is stamped when the document is saved
    with status `completed` and cleared when it is saved with any other
    status. See the save hooks below.
    """

    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_user_status", "user_id", "status"),
        Index("ix_documents_user_category", "user_id", "category"),
        Index("ix_documents_user_due_date", "user_id", "due_date"),
    )

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        default=DocumentStatus.PENDING.value,
        nullable=False,
    )
    description: Mapped[str] = mapped_column(String(300), default="", nullable=False)
    category: Mapped[str] = mapped_column(String(50), default="general", nullable=False)
    priority: Mapped[str] = mapped_column(
        String(20),
        default=DocumentPriority.MEDIUM.value,
        nullable=False,
    )
    due_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    completed_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    last_modified: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
        index=True,
    )

    def sync_completed_date(self) -> None:
        """Stamp or clear completed_date to match the current status."""
        if self.status == DocumentStatus.COMPLETED.value:
            if self.completed_date is None:
                self.completed_date = utc_now()
        elif self.completed_date is not None:
            self.completed_date = None

    def __repr__(self) -> str:
        return f"<Document(id={self.id}, title={self.title!r}, status={self.status!r})>"


@event.listens_for(Document, "before_insert")
@event.listens_for(Document, "before_update")
def _document_before_save(mapper: Any, connection: Any, target: Document) -> None:
    target.sync_completed_date()
