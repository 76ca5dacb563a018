"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from typing import Any

from sqlalchemy import delete

from beyondnp.backend.models.note import Note
from beyondnp.backend.repositories.base import OwnedRepository


class NoteRepository(OwnedRepository[Note]):
    """
    Repository for Note model.

    Inherits owner-scoped operations from OwnedRepository
    and adds note-specific queries.
    """

    model = Note

    def default_order(self) -> list[Any]:
        return [Note.is_pinned.desc(), Note.last_modified.desc()]

    async def list_for_user(
        self,
        user_id: str,
        collection_id: str | None = None,
        archived: bool = False,
    ) -> list[Note]:
        """
        Get a user's notes, optionally only those in one collection.

        Args:
            user_id: Owner ID
            collection_id: Parent collection to filter by
            archived: Return archived notes instead of active ones

        Returns:
            Active notes pinned first, then most recently modified first.
            Archived notes ignore pinning.
        """
        criteria = []
        if collection_id:
            criteria.append(Note.parent_collection_id == collection_id)

        order_by = [Note.last_modified.desc()] if archived else None
        return await self.list_owned(user_id, *criteria, archived=archived, order_by=order_by)

    async def list_in_collection(self, collection_id: str, user_id: str) -> list[Note]:
        """Get the active notes of one collection, pinned first, most recently modified first."""
        return await self.list_owned(
            user_id,
            Note.parent_collection_id == collection_id,
        )

    async def list_by_activity(self, user_id: str) -> list[Note]:
        """
        Get a user's active notes for searching and the account listing.

        Returns:
            Active notes, pinned first, most recently modified first
        """
        return await self.list_owned(user_id)

    async def recent(self, user_id: str, limit: int = 5) -> list[Note]:
        """Get the most recently modified active notes."""
        return await self.list_owned(
            user_id,
            limit=limit,
            order_by=[Note.last_modified.desc()],
        )

    async def delete_in_collection(self, collection_id: str) -> int:
        """Delete every note in a collection. Returns row count."""
        result = await self.session.execute(
            delete(Note).where(Note.parent_collection_id == collection_id)
        )
        return result.rowcount
