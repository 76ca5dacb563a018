"""
Collection Repository.

Data access layer for collections, including the maintained
notes counter.
"""

from typing import Any

from sqlalchemy import select, update

from beyondnp.backend.core.utils import utc_now
from beyondnp.backend.models.collection import Collection
from beyondnp.backend.repositories.base import OwnedRepository


class CollectionRepository(OwnedRepository[Collection]):
    """Repository for Collection model."""

    model = Collection

    def default_order(self) -> list[Any]:
        return [Collection.last_modified.desc()]

    async def get_by_name(self, user_id: str, name: str) -> Collection | None:
        """Get a user's collection by exact name."""
        result = await self.session.execute(
            select(Collection).where(
                Collection.user_id == user_id,
                Collection.name == name,
            )
        )
        return result.scalar_one_or_none()

    async def name_taken(
        self,
        user_id: str,
        name: str,
        exclude_id: str | None = None,
    ) -> bool:
        """Check whether the user already has a collection with this name."""
        existing = await self.get_by_name(user_id, name)
        if existing is None:
            return False
        return existing.id != exclude_id

    async def adjust_notes_count(self, collection_id: str, delta: int) -> None:
        """
        Atomically add delta to a collection's notes counter.

        Also bumps last_modified. The increment is computed by the database,
        so concurrent requests do not lose updates.
        """
        await self.session.execute(
            update(Collection)
            .where(Collection.id == collection_id)
            .values(
                notes_count=Collection.notes_count + delta,
                last_modified=utc_now(),
            )
        )

    async def recent(self, user_id: str, limit: int = 5) -> list[Collection]:
        """Get the most recently modified active collections."""
        return await self.list_owned(user_id, limit=limit)
