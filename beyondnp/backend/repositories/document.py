"""
Document Repository.

Data access layer for tracked application documents.
"""

from typing import Any

from beyondnp.backend.models.document import Document, DocumentStatus
from beyondnp.backend.repositories.base import OwnedRepository


class DocumentRepository(OwnedRepository[Document]):
    """Repository for Document model."""

    model = Document

    def default_order(self) -> list[Any]:
        return [Document.due_date.asc().nulls_last(), Document.created_at.desc()]

    async def list_for_user(
        self,
        user_id: str,
        status: str | None = None,
        category: str | None = None,
        archived: bool = False,
    ) -> list[Document]:
        """
        Get a user's documents with optional status and category filters.

        Returns:
            Documents sorted by due date (undated last), then newest first
        """
        criteria = []
        if status:
            criteria.append(Document.status == status)
        if category:
            criteria.append(Document.category == category)

        return await self.list_owned(user_id, *criteria, archived=archived)

    async def count_by_status(self, user_id: str, status: DocumentStatus) -> int:
        """Count a user's active documents in one status."""
        return await self.count_owned(user_id, Document.status == status.value)

    async def recent(self, user_id: str, limit: int = 5) -> list[Document]:
        """Get the most recently modified active documents."""
        return await self.list_owned(
            user_id,
            limit=limit,
            order_by=[Document.last_modified.desc()],
        )
